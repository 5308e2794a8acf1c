"""
Restart file configuration.

:class:`RestartFileConfig` names the restart file of a run and its
format; :func:`write_restart` and :func:`read_restart` dispatch on it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING

from pyaquifer.core.exceptions import AquiferIOError

if TYPE_CHECKING:
    from pyaquifer.components.aquifer_config import AquiferConfig

logger = logging.getLogger(__name__)


class RestartFormat(Enum):
    """Restart file format."""

    BINARY = "binary"  # length-prefixed records
    HDF5 = "hdf5"


_SUFFIXES = {RestartFormat.BINARY: ".aqr", RestartFormat.HDF5: ".h5"}


@dataclass
class RestartFileConfig:
    """
    Configuration for aquifer restart files.

    Attributes:
        output_dir: Directory holding the restart file
        file_name: Base name; the format suffix is added if missing
        format: Restart file format
        compression: HDF5 compression algorithm ('gzip', 'lzf', or None)
        endian: Byte order of binary files ('<' or '>')
    """

    output_dir: Path
    file_name: str = "AQUIFERS"
    format: RestartFormat = RestartFormat.BINARY
    compression: str | None = "gzip"
    endian: str = "<"

    def __post_init__(self) -> None:
        self.output_dir = Path(self.output_dir)
        if self.endian not in ("<", ">"):
            raise ValueError(f"endian must be '<' or '>', got {self.endian!r}")

    @property
    def path(self) -> Path:
        suffix = _SUFFIXES[self.format]
        name = self.file_name if self.file_name.endswith(suffix) else self.file_name + suffix
        return self.output_dir / name


def write_restart(config: AquiferConfig, file_config: RestartFileConfig) -> Path:
    """
    Write an aquifer configuration as configured.

    Returns:
        Path of the written file
    """
    path = file_config.path
    logger.debug("Writing %s restart file %s", file_config.format.value, path)
    if file_config.format is RestartFormat.HDF5:
        from pyaquifer.io.hdf5 import write_aquifer_config_hdf5

        write_aquifer_config_hdf5(path, config, compression=file_config.compression)
    else:
        from pyaquifer.io.serialization import write_aquifer_config_binary

        write_aquifer_config_binary(path, config, endian=file_config.endian)
    return path


def read_restart(file_config: RestartFileConfig) -> AquiferConfig:
    """Read an aquifer configuration written by :func:`write_restart`."""
    path = file_config.path
    if not path.exists():
        raise AquiferIOError(f"Restart file not found: {path}")
    if file_config.format is RestartFormat.HDF5:
        from pyaquifer.io.hdf5 import read_aquifer_config_hdf5

        return read_aquifer_config_hdf5(path)

    from pyaquifer.io.serialization import read_aquifer_config_binary

    return read_aquifer_config_binary(path)
