"""
Versioned binary serialization of aquifer objects.

An :class:`~pyaquifer.components.aquifer_config.AquiferConfig` or a set of
:class:`~pyaquifer.components.aquifer_data.AquiferData` records is written
as a sequence of length-prefixed records (see :mod:`pyaquifer.io.binary`):

1. magic ``b"AQCF"``
2. format version
3. payload kind (``"config"`` or ``"data"``)
4. payload records

The byte order is detected from the first record marker, so buffers
written big-endian read back without extra arguments. Reading a buffer
with another magic, an unknown payload kind or a newer format version
raises :class:`~pyaquifer.core.exceptions.FileFormatError`.

Example
-------
>>> from pyaquifer.components.aquifer_config import AquiferConfig
>>> data = serialize_aquifer_config(AquiferConfig())
>>> deserialize_aquifer_config(data) == AquiferConfig()
True
"""

from __future__ import annotations

import io
import logging
import struct
from pathlib import Path

from pyaquifer.components.analytic import (
    AquiferConstantFlux,
    AquiferCT,
    Aquifetp,
    CarterTracyAquifer,
    ConstantFluxAquifer,
    FetkovichAquifer,
)
from pyaquifer.components.aquancon import Aquancon, AquancCell
from pyaquifer.components.aquifer_config import AquiferConfig
from pyaquifer.components.aquifer_data import AquiferData, Aquifers, AquiferType, FetkovichData
from pyaquifer.components.numerical import NumericalAquifers, SingleNumericalAquifer
from pyaquifer.components.numerical_cell import NumericalAquiferCell
from pyaquifer.components.numerical_connection import NumericalAquiferConnection
from pyaquifer.core.exceptions import FileFormatError
from pyaquifer.core.grid import FaceDir
from pyaquifer.io.binary import RecordReader, RecordWriter

logger = logging.getLogger(__name__)

MAGIC = b"AQCF"
FORMAT_VERSION = 1

_KIND_CONFIG = "config"
_KIND_DATA = "data"


# =============================================================================
# Header
# =============================================================================


def _write_header(writer: RecordWriter, kind: str) -> None:
    writer.write_record(MAGIC)
    writer.write_int(FORMAT_VERSION)
    writer.write_string(kind)


def _detect_endian(data: bytes) -> str:
    for endian in ("<", ">"):
        if data[:4] == struct.pack(f"{endian}i", len(MAGIC)) and data[4:8] == MAGIC:
            return endian
    raise FileFormatError("Not an aquifer file: bad magic", 0)


def _open_reader(data: bytes, kind: str) -> RecordReader:
    reader = RecordReader(io.BytesIO(data), _detect_endian(data))
    try:
        reader.read_record()
        version = reader.read_int()
        if version > FORMAT_VERSION or version < 1:
            raise FileFormatError(
                f"Unsupported format version {version} (supported: {FORMAT_VERSION})",
                reader.n_records,
            )
        found = reader.read_string()
    except EOFError as exc:
        raise FileFormatError("Truncated header", reader.n_records) from exc
    if found != kind:
        raise FileFormatError(f"Expected '{kind}' payload, found '{found}'", reader.n_records)
    return reader


# =============================================================================
# Analytic aquifers
# =============================================================================


def _write_fetkovich(writer: RecordWriter, aq: FetkovichAquifer) -> None:
    writer.write_int(aq.id)
    writer.write_double(aq.datum_depth)
    writer.write_double(aq.initial_volume)
    writer.write_double(aq.total_compressibility)
    writer.write_double(aq.productivity_index)
    writer.write_int(aq.pvt_table)
    writer.write_optional_double(aq.initial_pressure)
    writer.write_double(aq.salinity)
    writer.write_optional_double(aq.temperature)


def _read_fetkovich(reader: RecordReader) -> FetkovichAquifer:
    return FetkovichAquifer(
        id=reader.read_int(),
        datum_depth=reader.read_double(),
        initial_volume=reader.read_double(),
        total_compressibility=reader.read_double(),
        productivity_index=reader.read_double(),
        pvt_table=reader.read_int(),
        initial_pressure=reader.read_optional_double(),
        salinity=reader.read_double(),
        temperature=reader.read_optional_double(),
    )


def _write_carter_tracy(writer: RecordWriter, aq: CarterTracyAquifer) -> None:
    writer.write_int(aq.id)
    writer.write_double(aq.datum_depth)
    writer.write_double(aq.permeability)
    writer.write_double(aq.porosity)
    writer.write_double(aq.total_compressibility)
    writer.write_double(aq.inner_radius)
    writer.write_double(aq.thickness)
    writer.write_double(aq.influence_angle)
    writer.write_int(aq.pvt_table)
    writer.write_int(aq.influence_table)
    writer.write_optional_double(aq.initial_pressure)
    writer.write_double_array(list(aq.dimensionless_time))
    writer.write_double_array(list(aq.dimensionless_pressure))


def _read_carter_tracy(reader: RecordReader) -> CarterTracyAquifer:
    return CarterTracyAquifer(
        id=reader.read_int(),
        datum_depth=reader.read_double(),
        permeability=reader.read_double(),
        porosity=reader.read_double(),
        total_compressibility=reader.read_double(),
        inner_radius=reader.read_double(),
        thickness=reader.read_double(),
        influence_angle=reader.read_double(),
        pvt_table=reader.read_int(),
        influence_table=reader.read_int(),
        initial_pressure=reader.read_optional_double(),
        dimensionless_time=tuple(float(v) for v in reader.read_double_array()),
        dimensionless_pressure=tuple(float(v) for v in reader.read_double_array()),
    )


def _write_constant_flux(writer: RecordWriter, aq: ConstantFluxAquifer) -> None:
    writer.write_int(aq.id)
    writer.write_double(aq.flux)
    writer.write_double(aq.salt_concentration)
    writer.write_optional_double(aq.temperature)
    writer.write_optional_double(aq.datum_pressure)


def _read_constant_flux(reader: RecordReader) -> ConstantFluxAquifer:
    return ConstantFluxAquifer(
        id=reader.read_int(),
        flux=reader.read_double(),
        salt_concentration=reader.read_double(),
        temperature=reader.read_optional_double(),
        datum_pressure=reader.read_optional_double(),
    )


# =============================================================================
# Numerical aquifers
# =============================================================================


def _write_cell(writer: RecordWriter, cell: NumericalAquiferCell) -> None:
    writer.write_int(cell.aquifer_id)
    writer.write_int_array([cell.I, cell.J, cell.K, cell.global_index])
    writer.write_double(cell.area)
    writer.write_double(cell.length)
    writer.write_double(cell.permeability)
    writer.write_double(cell.porosity)
    writer.write_double(cell.depth)
    writer.write_int(cell.pvttable)
    writer.write_int(cell.sattable)
    writer.write_optional_double(cell.init_pressure)


def _read_cell(reader: RecordReader) -> NumericalAquiferCell:
    aquifer_id = reader.read_int()
    i, j, k, global_index = (int(v) for v in reader.read_int_array())
    return NumericalAquiferCell(
        aquifer_id=aquifer_id,
        I=i,
        J=j,
        K=k,
        global_index=global_index,
        area=reader.read_double(),
        length=reader.read_double(),
        permeability=reader.read_double(),
        porosity=reader.read_double(),
        depth=reader.read_double(),
        pvttable=reader.read_int(),
        sattable=reader.read_int(),
        init_pressure=reader.read_optional_double(),
    )


def _write_connection(writer: RecordWriter, con: NumericalAquiferConnection) -> None:
    writer.write_int(con.aquifer_id)
    writer.write_int_array(
        [con.I, con.J, con.K, con.global_index, con.face_dir.code, con.trans_option]
    )
    writer.write_double(con.trans_multi)
    writer.write_bool(con.connect_active_cell)
    writer.write_double(con.ve_frac_relperm)
    writer.write_double(con.ve_frac_cappress)


def _read_connection(reader: RecordReader) -> NumericalAquiferConnection:
    aquifer_id = reader.read_int()
    i, j, k, global_index, face_code, trans_option = (int(v) for v in reader.read_int_array())
    return NumericalAquiferConnection(
        aquifer_id=aquifer_id,
        I=i,
        J=j,
        K=k,
        global_index=global_index,
        face_dir=FaceDir.from_code(face_code),
        trans_option=trans_option,
        trans_multi=reader.read_double(),
        connect_active_cell=reader.read_bool(),
        ve_frac_relperm=reader.read_double(),
        ve_frac_cappress=reader.read_double(),
    )


def _write_numerical(writer: RecordWriter, numerical: NumericalAquifers) -> None:
    writer.write_int(len(numerical))
    for aquifer in numerical:
        writer.write_int(aquifer.id)
        writer.write_int(aquifer.n_cells)
        for cell in aquifer.cells:
            _write_cell(writer, cell)
        writer.write_int(aquifer.n_connections)
        for con in aquifer.connections:
            _write_connection(writer, con)


def _read_numerical(reader: RecordReader) -> NumericalAquifers:
    aquifers: dict[int, SingleNumericalAquifer] = {}
    for _ in range(reader.read_int()):
        aquifer_id = reader.read_int()
        cells = [_read_cell(reader) for _ in range(reader.read_int())]
        connections = [_read_connection(reader) for _ in range(reader.read_int())]
        aquifers[aquifer_id] = SingleNumericalAquifer(aquifer_id, tuple(cells), tuple(connections))
    return NumericalAquifers(aquifers)


# =============================================================================
# Analytic connections
# =============================================================================


def _write_aquancon(writer: RecordWriter, aquancon: Aquancon) -> None:
    writer.write_int(len(aquancon.cells))
    for aquifer_id, cells in aquancon.cells.items():
        writer.write_int(aquifer_id)
        writer.write_int_array([c.global_index for c in cells])
        writer.write_int_array([c.face_dir.code for c in cells])
        writer.write_double_array([c.influx_coeff for c in cells])


def _read_aquancon(reader: RecordReader) -> Aquancon:
    aquancon = Aquancon()
    for _ in range(reader.read_int()):
        aquifer_id = reader.read_int()
        indices = reader.read_int_array()
        faces = reader.read_int_array()
        coeffs = reader.read_double_array()
        if not len(indices) == len(faces) == len(coeffs):
            raise FileFormatError(
                f"Inconsistent connection arrays for aquifer {aquifer_id}", reader.n_records
            )
        aquancon.cells[aquifer_id] = [
            AquancCell(aquifer_id, int(g), float(c), FaceDir.from_code(int(f)))
            for g, f, c in zip(indices, faces, coeffs)
        ]
    return aquancon


# =============================================================================
# Public API
# =============================================================================


def serialize_aquifer_config(config: AquiferConfig, endian: str = "<") -> bytes:
    """
    Serialize an aquifer configuration.

    Args:
        config: Configuration to serialize
        endian: Byte order ('<' or '>')

    Returns:
        Serialized bytes
    """
    buffer = io.BytesIO()
    writer = RecordWriter(buffer, endian)
    _write_header(writer, _KIND_CONFIG)

    writer.write_int(len(config.fetp))
    for fetp in config.fetp:
        _write_fetkovich(writer, fetp)
    writer.write_int(len(config.ct))
    for ct in config.ct:
        _write_carter_tracy(writer, ct)
    writer.write_int(len(config.aquflux))
    for flux in config.aquflux:
        _write_constant_flux(writer, flux)
    _write_numerical(writer, config.numerical)
    _write_aquancon(writer, config.connections)
    return buffer.getvalue()


def deserialize_aquifer_config(data: bytes) -> AquiferConfig:
    """
    Rebuild an aquifer configuration from :func:`serialize_aquifer_config` output.

    Raises:
        FileFormatError: If the data is not a supported configuration buffer
    """
    reader = _open_reader(data, _KIND_CONFIG)
    try:
        fetp = Aquifetp()
        for _ in range(reader.read_int()):
            fetp.add(_read_fetkovich(reader))
        ct = AquiferCT()
        for _ in range(reader.read_int()):
            ct.add(_read_carter_tracy(reader))
        aquflux = AquiferConstantFlux()
        for _ in range(reader.read_int()):
            aquflux.add(_read_constant_flux(reader))
        numerical = _read_numerical(reader)
        connections = _read_aquancon(reader)
    except EOFError as exc:
        raise FileFormatError("Truncated aquifer configuration", reader.n_records) from exc
    return AquiferConfig(
        fetp=fetp, ct=ct, aquflux=aquflux, numerical=numerical, connections=connections
    )


def serialize_aquifer_data(aquifers: Aquifers, endian: str = "<") -> bytes:
    """
    Serialize per-aquifer solution data.

    Args:
        aquifers: aquifer id -> AquiferData
        endian: Byte order ('<' or '>')
    """
    buffer = io.BytesIO()
    writer = RecordWriter(buffer, endian)
    _write_header(writer, _KIND_DATA)
    writer.write_int(len(aquifers))
    for aquifer_id, data in aquifers.items():
        writer.write_int(aquifer_id)
        writer.write_int(data.aquifer_id)
        writer.write_int(data.type.value)
        writer.write_double_array(
            [data.pressure, data.flux_rate, data.volume, data.init_pressure, data.datum_depth]
        )
        writer.write_bool(data.fetkovich is not None)
        if data.fetkovich is not None:
            writer.write_double_array(
                [
                    data.fetkovich.init_volume,
                    data.fetkovich.prod_index,
                    data.fetkovich.time_constant,
                ]
            )
    return buffer.getvalue()


def deserialize_aquifer_data(data: bytes) -> Aquifers:
    """Rebuild per-aquifer solution data from :func:`serialize_aquifer_data` output."""
    reader = _open_reader(data, _KIND_DATA)
    result: Aquifers = {}
    try:
        for _ in range(reader.read_int()):
            key = reader.read_int()
            aquifer_id = reader.read_int()
            aquifer_type = AquiferType(reader.read_int())
            pressure, flux_rate, volume, init_pressure, datum_depth = (
                float(v) for v in reader.read_double_array()
            )
            fetkovich = None
            if reader.read_bool():
                init_volume, prod_index, time_constant = (
                    float(v) for v in reader.read_double_array()
                )
                fetkovich = FetkovichData(init_volume, prod_index, time_constant)
            result[key] = AquiferData(
                aquifer_id=aquifer_id,
                type=aquifer_type,
                pressure=pressure,
                flux_rate=flux_rate,
                volume=volume,
                init_pressure=init_pressure,
                datum_depth=datum_depth,
                fetkovich=fetkovich,
            )
    except EOFError as exc:
        raise FileFormatError("Truncated aquifer data", reader.n_records) from exc
    return result


def write_aquifer_config_binary(
    filepath: Path | str, config: AquiferConfig, endian: str = "<"
) -> Path:
    """
    Write an aquifer configuration to a binary file.

    Returns:
        Path of the written file
    """
    path = Path(filepath)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(serialize_aquifer_config(config, endian))
    logger.info("Wrote aquifer configuration to %s", path)
    return path


def read_aquifer_config_binary(filepath: Path | str) -> AquiferConfig:
    """Read an aquifer configuration written by :func:`write_aquifer_config_binary`."""
    path = Path(filepath)
    config = deserialize_aquifer_config(path.read_bytes())
    logger.info("Read aquifer configuration from %s", path)
    return config
