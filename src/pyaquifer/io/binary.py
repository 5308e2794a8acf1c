"""
Length-prefixed binary records.

Each record is written as a 4-byte length marker, the payload, and the
same marker again (the layout of Fortran unformatted sequential files).
:class:`RecordWriter` and :class:`RecordReader` work on any binary
stream, so the same code serves restart files on disk and in-memory
buffers sent between processes.
"""

from __future__ import annotations

import struct
from pathlib import Path
from typing import BinaryIO

import numpy as np
from numpy.typing import NDArray

from pyaquifer.core.exceptions import FileFormatError


class RecordReader:
    """
    Reader for length-prefixed binary records.

    Args:
        stream: Open binary stream positioned at the first record
        endian: Byte order ('<' = little-endian, '>' = big-endian)
    """

    def __init__(self, stream: BinaryIO, endian: str = "<") -> None:
        self._stream = stream
        self.endian = endian
        self.n_records = 0

    @classmethod
    def open(cls, filepath: Path | str, endian: str = "<") -> RecordReader:
        return cls(open(filepath, "rb"), endian)

    def __enter__(self) -> RecordReader:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        self._stream.close()

    def read_record(self) -> bytes:
        """
        Read a single record.

        Returns:
            Record payload

        Raises:
            EOFError: At the end of the stream
            FileFormatError: On a truncated record or mismatched markers
        """
        marker_data = self._stream.read(4)
        if len(marker_data) < 4:
            raise EOFError("End of stream reached")

        record_length = struct.unpack(f"{self.endian}i", marker_data)[0]
        if record_length < 0:
            raise FileFormatError(f"Negative record length {record_length}", self.n_records)

        data = self._stream.read(record_length)
        if len(data) < record_length:
            raise FileFormatError(
                f"Incomplete record: expected {record_length} bytes, got {len(data)}",
                self.n_records,
            )

        trailing_marker = self._stream.read(4)
        if len(trailing_marker) < 4:
            raise FileFormatError("Missing trailing record marker", self.n_records)
        trailing_length = struct.unpack(f"{self.endian}i", trailing_marker)[0]
        if trailing_length != record_length:
            raise FileFormatError(
                f"Record marker mismatch: {record_length} != {trailing_length}", self.n_records
            )

        self.n_records += 1
        return data

    def read_int(self) -> int:
        """Read a single integer record."""
        result: int = struct.unpack(f"{self.endian}q", self.read_record())[0]
        return result

    def read_double(self) -> float:
        """Read a single double record (real*8)."""
        result: float = struct.unpack(f"{self.endian}d", self.read_record())[0]
        return result

    def read_bool(self) -> bool:
        return self.read_int() != 0

    def read_optional_double(self) -> float | None:
        """Read a presence flag followed by a double if present."""
        if self.read_bool():
            return self.read_double()
        return None

    def read_int_array(self) -> NDArray[np.int64]:
        """Read an integer array record."""
        data = self.read_record()
        return np.frombuffer(data, dtype=f"{self.endian}i8").copy()

    def read_double_array(self) -> NDArray[np.float64]:
        """Read a double array record (real*8)."""
        data = self.read_record()
        return np.frombuffer(data, dtype=f"{self.endian}f8").copy()

    def read_string(self) -> str:
        return self.read_record().decode("utf-8")


class RecordWriter:
    """
    Writer for length-prefixed binary records.

    Args:
        stream: Open binary stream
        endian: Byte order ('<' = little-endian, '>' = big-endian)
    """

    def __init__(self, stream: BinaryIO, endian: str = "<") -> None:
        self._stream = stream
        self.endian = endian

    @classmethod
    def open(cls, filepath: Path | str, endian: str = "<") -> RecordWriter:
        path = Path(filepath)
        path.parent.mkdir(parents=True, exist_ok=True)
        return cls(open(path, "wb"), endian)

    def __enter__(self) -> RecordWriter:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        self._stream.close()

    def write_record(self, data: bytes) -> None:
        """
        Write a single record with markers.

        Args:
            data: Record payload
        """
        marker = struct.pack(f"{self.endian}i", len(data))
        self._stream.write(marker)
        self._stream.write(data)
        self._stream.write(marker)

    def write_int(self, value: int) -> None:
        """Write a single integer record."""
        self.write_record(struct.pack(f"{self.endian}q", value))

    def write_double(self, value: float) -> None:
        """Write a single double record (real*8)."""
        self.write_record(struct.pack(f"{self.endian}d", value))

    def write_bool(self, value: bool) -> None:
        self.write_int(1 if value else 0)

    def write_optional_double(self, value: float | None) -> None:
        """Write a presence flag followed by the value if present."""
        self.write_bool(value is not None)
        if value is not None:
            self.write_double(value)

    def write_int_array(self, arr: NDArray[np.integer] | list[int]) -> None:
        """Write an integer array record."""
        self.write_record(np.asarray(arr, dtype=f"{self.endian}i8").tobytes())

    def write_double_array(self, arr: NDArray[np.floating] | list[float]) -> None:
        """Write a double array record (real*8)."""
        self.write_record(np.asarray(arr, dtype=f"{self.endian}f8").tobytes())

    def write_string(self, s: str) -> None:
        self.write_record(s.encode("utf-8"))
