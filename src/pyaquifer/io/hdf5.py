"""
HDF5 restart files for aquifer configurations.

Each aquifer kind is stored as a group of equal-length column datasets,
one row per aquifer, cell or connection. Optional values are stored as a
value column plus a ``<name>_set`` boolean mask.
"""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Any

import h5py
import numpy as np
from numpy.typing import NDArray

from pyaquifer import __version__
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
from pyaquifer.components.numerical import NumericalAquifers, SingleNumericalAquifer
from pyaquifer.components.numerical_cell import NumericalAquiferCell
from pyaquifer.components.numerical_connection import NumericalAquiferConnection
from pyaquifer.core.exceptions import FileFormatError
from pyaquifer.core.grid import FaceDir
from pyaquifer.io.serialization import FORMAT_VERSION

logger = logging.getLogger(__name__)

Columns = dict[str, NDArray]


def _ints(values: list[int]) -> NDArray[np.int64]:
    return np.array(values, dtype=np.int64)


def _doubles(values: list[float]) -> NDArray[np.float64]:
    return np.array(values, dtype=np.float64)


def _optional(columns: Columns, name: str, values: list[float | None]) -> None:
    columns[name] = _doubles([0.0 if v is None else v for v in values])
    columns[f"{name}_set"] = np.array([v is not None for v in values], dtype=bool)


def _get_optional(columns: Columns, name: str, row: int) -> float | None:
    if not columns[f"{name}_set"][row]:
        return None
    return float(columns[name][row])


class HDF5AquiferWriter:
    """
    Writer for aquifer configurations in HDF5 format.

    The HDF5 file structure:
        /fetkovich/       id, datum_depth, initial_volume, ...
        /carter_tracy/    id, ..., time_offsets, pressure_offsets, dimensionless_time, ...
        /constant_flux/   id, flux, salt_concentration, ...
        /numerical/
            aquifer_ids
            cells/        aquifer_id, i, j, k, global_index, area, ...
            connections/  aquifer_id, i, j, k, global_index, face, ...
        /aquancon/        aquifer_id, global_index, face, influx_coeff
        /metadata/        format_version, pyaquifer_version, created
    """

    def __init__(self, filepath: Path | str, compression: str | None = "gzip") -> None:
        """
        Initialize the writer.

        Args:
            filepath: Path to the output HDF5 file
            compression: Compression algorithm ('gzip', 'lzf', or None)
        """
        self.filepath = Path(filepath)
        self.compression = compression
        self._file: h5py.File | None = None

    def __enter__(self) -> HDF5AquiferWriter:
        self.filepath.parent.mkdir(parents=True, exist_ok=True)
        self._file = h5py.File(self.filepath, "w")
        return self

    def __exit__(
        self, exc_type: type[BaseException] | None, exc_val: BaseException | None, exc_tb: object
    ) -> None:
        if self._file:
            self._file.close()

    def _require_file(self) -> h5py.File:
        if self._file is None:
            raise RuntimeError("File not open")
        return self._file

    def _write_columns(self, group: h5py.Group, columns: Columns) -> None:
        """Create one dataset per column, compressing large ones."""
        n_rows = 0
        for name, data in columns.items():
            if self.compression and data.size > 100:
                group.create_dataset(name, data=data, compression=self.compression)
            else:
                group.create_dataset(name, data=data)
            n_rows = max(n_rows, len(data))
        group.attrs["n_rows"] = n_rows

    def write_fetkovich(self, fetp: Aquifetp) -> None:
        """Write Fetkovich aquifers."""
        aquifers = list(fetp)
        columns: Columns = {
            "id": _ints([aq.id for aq in aquifers]),
            "datum_depth": _doubles([aq.datum_depth for aq in aquifers]),
            "initial_volume": _doubles([aq.initial_volume for aq in aquifers]),
            "total_compressibility": _doubles([aq.total_compressibility for aq in aquifers]),
            "productivity_index": _doubles([aq.productivity_index for aq in aquifers]),
            "pvt_table": _ints([aq.pvt_table for aq in aquifers]),
            "salinity": _doubles([aq.salinity for aq in aquifers]),
        }
        _optional(columns, "initial_pressure", [aq.initial_pressure for aq in aquifers])
        _optional(columns, "temperature", [aq.temperature for aq in aquifers])
        self._write_columns(self._require_file().create_group("fetkovich"), columns)

    def write_carter_tracy(self, ct: AquiferCT) -> None:
        """Write Carter-Tracy aquifers, with influence tables stored end to end."""
        aquifers = list(ct)
        time_offsets = np.cumsum([0] + [len(aq.dimensionless_time) for aq in aquifers])
        pressure_offsets = np.cumsum([0] + [len(aq.dimensionless_pressure) for aq in aquifers])
        columns: Columns = {
            "id": _ints([aq.id for aq in aquifers]),
            "datum_depth": _doubles([aq.datum_depth for aq in aquifers]),
            "permeability": _doubles([aq.permeability for aq in aquifers]),
            "porosity": _doubles([aq.porosity for aq in aquifers]),
            "total_compressibility": _doubles([aq.total_compressibility for aq in aquifers]),
            "inner_radius": _doubles([aq.inner_radius for aq in aquifers]),
            "thickness": _doubles([aq.thickness for aq in aquifers]),
            "influence_angle": _doubles([aq.influence_angle for aq in aquifers]),
            "pvt_table": _ints([aq.pvt_table for aq in aquifers]),
            "influence_table": _ints([aq.influence_table for aq in aquifers]),
            "time_offsets": time_offsets.astype(np.int64),
            "pressure_offsets": pressure_offsets.astype(np.int64),
            "dimensionless_time": _doubles(
                [v for aq in aquifers for v in aq.dimensionless_time]
            ),
            "dimensionless_pressure": _doubles(
                [v for aq in aquifers for v in aq.dimensionless_pressure]
            ),
        }
        _optional(columns, "initial_pressure", [aq.initial_pressure for aq in aquifers])
        group = self._require_file().create_group("carter_tracy")
        self._write_columns(group, columns)
        group.attrs["n_rows"] = len(aquifers)

    def write_constant_flux(self, aquflux: AquiferConstantFlux) -> None:
        """Write constant-flux aquifers."""
        aquifers = list(aquflux)
        columns: Columns = {
            "id": _ints([aq.id for aq in aquifers]),
            "flux": _doubles([aq.flux for aq in aquifers]),
            "salt_concentration": _doubles([aq.salt_concentration for aq in aquifers]),
        }
        _optional(columns, "temperature", [aq.temperature for aq in aquifers])
        _optional(columns, "datum_pressure", [aq.datum_pressure for aq in aquifers])
        self._write_columns(self._require_file().create_group("constant_flux"), columns)

    def write_numerical(self, numerical: NumericalAquifers) -> None:
        """Write numerical aquifer cells and connections."""
        num_grp = self._require_file().create_group("numerical")
        num_grp.create_dataset("aquifer_ids", data=_ints([aq.id for aq in numerical]))

        cells = list(numerical.all_cells())
        cell_columns: Columns = {
            "aquifer_id": _ints([c.aquifer_id for c in cells]),
            "i": _ints([c.I for c in cells]),
            "j": _ints([c.J for c in cells]),
            "k": _ints([c.K for c in cells]),
            "global_index": _ints([c.global_index for c in cells]),
            "area": _doubles([c.area for c in cells]),
            "length": _doubles([c.length for c in cells]),
            "permeability": _doubles([c.permeability for c in cells]),
            "porosity": _doubles([c.porosity for c in cells]),
            "depth": _doubles([c.depth for c in cells]),
            "pvttable": _ints([c.pvttable for c in cells]),
            "sattable": _ints([c.sattable for c in cells]),
        }
        _optional(cell_columns, "init_pressure", [c.init_pressure for c in cells])
        self._write_columns(num_grp.create_group("cells"), cell_columns)

        cons = [con for aq in numerical for con in aq.connections]
        con_columns: Columns = {
            "aquifer_id": _ints([c.aquifer_id for c in cons]),
            "i": _ints([c.I for c in cons]),
            "j": _ints([c.J for c in cons]),
            "k": _ints([c.K for c in cons]),
            "global_index": _ints([c.global_index for c in cons]),
            "face": _ints([c.face_dir.code for c in cons]),
            "trans_multi": _doubles([c.trans_multi for c in cons]),
            "trans_option": _ints([c.trans_option for c in cons]),
            "connect_active_cell": np.array([c.connect_active_cell for c in cons], dtype=bool),
            "ve_frac_relperm": _doubles([c.ve_frac_relperm for c in cons]),
            "ve_frac_cappress": _doubles([c.ve_frac_cappress for c in cons]),
        }
        self._write_columns(num_grp.create_group("connections"), con_columns)

    def write_aquancon(self, aquancon: Aquancon) -> None:
        """Write analytic aquifer connections."""
        cells = [cell for cells in aquancon.cells.values() for cell in cells]
        columns: Columns = {
            "aquifer_id": _ints([c.aquifer_id for c in cells]),
            "global_index": _ints([c.global_index for c in cells]),
            "face": _ints([c.face_dir.code for c in cells]),
            "influx_coeff": _doubles([c.influx_coeff for c in cells]),
        }
        self._write_columns(self._require_file().create_group("aquancon"), columns)

    def write_metadata(self, metadata: dict[str, Any]) -> None:
        """Write file metadata."""
        f = self._require_file()
        meta_grp = f["metadata"] if "metadata" in f else f.create_group("metadata")
        for key, value in metadata.items():
            if isinstance(value, (str, int, float, bool)):
                meta_grp.attrs[key] = value
            elif isinstance(value, datetime):
                meta_grp.attrs[key] = value.isoformat()

    def write_config(self, config: AquiferConfig) -> None:
        """
        Write a complete aquifer configuration.

        Args:
            config: AquiferConfig to write
        """
        self.write_metadata(
            {
                "format_version": FORMAT_VERSION,
                "pyaquifer_version": __version__,
                "created": datetime.now(),
            }
        )
        self.write_fetkovich(config.fetp)
        self.write_carter_tracy(config.ct)
        self.write_constant_flux(config.aquflux)
        self.write_numerical(config.numerical)
        self.write_aquancon(config.connections)


class HDF5AquiferReader:
    """Reader for aquifer configurations in HDF5 format."""

    def __init__(self, filepath: Path | str) -> None:
        self.filepath = Path(filepath)
        self._file: h5py.File | None = None

    def __enter__(self) -> HDF5AquiferReader:
        self._file = h5py.File(self.filepath, "r")
        return self

    def __exit__(
        self, exc_type: type[BaseException] | None, exc_val: BaseException | None, exc_tb: object
    ) -> None:
        if self._file:
            self._file.close()

    def _group(self, name: str) -> h5py.Group:
        if self._file is None:
            raise RuntimeError("File not open")
        if name not in self._file:
            raise FileFormatError(f"No {name} data in file")
        return self._file[name]

    def _read_columns(self, name: str) -> tuple[int, Columns]:
        group = self._group(name)
        columns = {key: group[key][()] for key in group if isinstance(group[key], h5py.Dataset)}
        return int(group.attrs.get("n_rows", 0)), columns

    def read_metadata(self) -> dict[str, Any]:
        """Read file metadata."""
        if self._file is None:
            raise RuntimeError("File not open")
        result: dict[str, Any] = {}
        if "metadata" in self._file:
            meta_grp = self._file["metadata"]
            for key in meta_grp.attrs:
                result[key] = meta_grp.attrs[key]
        return result

    def read_fetkovich(self) -> Aquifetp:
        n, cols = self._read_columns("fetkovich")
        fetp = Aquifetp()
        for row in range(n):
            fetp.add(
                FetkovichAquifer(
                    id=int(cols["id"][row]),
                    datum_depth=float(cols["datum_depth"][row]),
                    initial_volume=float(cols["initial_volume"][row]),
                    total_compressibility=float(cols["total_compressibility"][row]),
                    productivity_index=float(cols["productivity_index"][row]),
                    pvt_table=int(cols["pvt_table"][row]),
                    initial_pressure=_get_optional(cols, "initial_pressure", row),
                    salinity=float(cols["salinity"][row]),
                    temperature=_get_optional(cols, "temperature", row),
                )
            )
        return fetp

    def read_carter_tracy(self) -> AquiferCT:
        n, cols = self._read_columns("carter_tracy")
        time_offsets = cols["time_offsets"]
        pressure_offsets = cols["pressure_offsets"]
        ct = AquiferCT()
        for row in range(n):
            t0, t1 = int(time_offsets[row]), int(time_offsets[row + 1])
            p0, p1 = int(pressure_offsets[row]), int(pressure_offsets[row + 1])
            ct.add(
                CarterTracyAquifer(
                    id=int(cols["id"][row]),
                    datum_depth=float(cols["datum_depth"][row]),
                    permeability=float(cols["permeability"][row]),
                    porosity=float(cols["porosity"][row]),
                    total_compressibility=float(cols["total_compressibility"][row]),
                    inner_radius=float(cols["inner_radius"][row]),
                    thickness=float(cols["thickness"][row]),
                    influence_angle=float(cols["influence_angle"][row]),
                    pvt_table=int(cols["pvt_table"][row]),
                    influence_table=int(cols["influence_table"][row]),
                    initial_pressure=_get_optional(cols, "initial_pressure", row),
                    dimensionless_time=tuple(
                        float(v) for v in cols["dimensionless_time"][t0:t1]
                    ),
                    dimensionless_pressure=tuple(
                        float(v) for v in cols["dimensionless_pressure"][p0:p1]
                    ),
                )
            )
        return ct

    def read_constant_flux(self) -> AquiferConstantFlux:
        n, cols = self._read_columns("constant_flux")
        aquflux = AquiferConstantFlux()
        for row in range(n):
            aquflux.add(
                ConstantFluxAquifer(
                    id=int(cols["id"][row]),
                    flux=float(cols["flux"][row]),
                    salt_concentration=float(cols["salt_concentration"][row]),
                    temperature=_get_optional(cols, "temperature", row),
                    datum_pressure=_get_optional(cols, "datum_pressure", row),
                )
            )
        return aquflux

    def read_numerical(self) -> NumericalAquifers:
        num_grp = self._group("numerical")
        aquifer_ids = [int(aq_id) for aq_id in num_grp["aquifer_ids"][()]]
        cells: dict[int, list[NumericalAquiferCell]] = {aq_id: [] for aq_id in aquifer_ids}
        cons: dict[int, list[NumericalAquiferConnection]] = {aq_id: [] for aq_id in aquifer_ids}

        n, cols = self._read_columns("numerical/cells")
        for row in range(n):
            cell = NumericalAquiferCell(
                aquifer_id=int(cols["aquifer_id"][row]),
                I=int(cols["i"][row]),
                J=int(cols["j"][row]),
                K=int(cols["k"][row]),
                global_index=int(cols["global_index"][row]),
                area=float(cols["area"][row]),
                length=float(cols["length"][row]),
                permeability=float(cols["permeability"][row]),
                porosity=float(cols["porosity"][row]),
                depth=float(cols["depth"][row]),
                pvttable=int(cols["pvttable"][row]),
                sattable=int(cols["sattable"][row]),
                init_pressure=_get_optional(cols, "init_pressure", row),
            )
            cells[cell.aquifer_id].append(cell)

        n, cols = self._read_columns("numerical/connections")
        for row in range(n):
            con = NumericalAquiferConnection(
                aquifer_id=int(cols["aquifer_id"][row]),
                I=int(cols["i"][row]),
                J=int(cols["j"][row]),
                K=int(cols["k"][row]),
                global_index=int(cols["global_index"][row]),
                face_dir=FaceDir.from_code(int(cols["face"][row])),
                trans_multi=float(cols["trans_multi"][row]),
                trans_option=int(cols["trans_option"][row]),
                connect_active_cell=bool(cols["connect_active_cell"][row]),
                ve_frac_relperm=float(cols["ve_frac_relperm"][row]),
                ve_frac_cappress=float(cols["ve_frac_cappress"][row]),
            )
            cons[con.aquifer_id].append(con)
        return NumericalAquifers(
            {
                aq_id: SingleNumericalAquifer(aq_id, tuple(cells[aq_id]), tuple(cons[aq_id]))
                for aq_id in aquifer_ids
            }
        )

    def read_aquancon(self) -> Aquancon:
        n, cols = self._read_columns("aquancon")
        aquancon = Aquancon()
        for row in range(n):
            cell = AquancCell(
                aquifer_id=int(cols["aquifer_id"][row]),
                global_index=int(cols["global_index"][row]),
                influx_coeff=float(cols["influx_coeff"][row]),
                face_dir=FaceDir.from_code(int(cols["face"][row])),
            )
            aquancon.cells.setdefault(cell.aquifer_id, []).append(cell)
        return aquancon

    def read_config(self) -> AquiferConfig:
        """
        Read a complete aquifer configuration.

        Raises:
            FileFormatError: If the file was written by a newer format version
                or lacks a section
        """
        version = int(self.read_metadata().get("format_version", 0))
        if version < 1 or version > FORMAT_VERSION:
            raise FileFormatError(
                f"Unsupported format version {version} (supported: {FORMAT_VERSION})"
            )
        return AquiferConfig(
            fetp=self.read_fetkovich(),
            ct=self.read_carter_tracy(),
            aquflux=self.read_constant_flux(),
            numerical=self.read_numerical(),
            connections=self.read_aquancon(),
        )


# Convenience functions


def write_aquifer_config_hdf5(
    filepath: Path | str,
    config: AquiferConfig,
    compression: str | None = "gzip",
) -> None:
    """
    Write an AquiferConfig to an HDF5 file.

    Args:
        filepath: Path to the output file
        config: AquiferConfig to write
        compression: Compression algorithm
    """
    with HDF5AquiferWriter(filepath, compression=compression) as writer:
        writer.write_config(config)
    logger.info("Wrote aquifer configuration to %s", filepath)


def read_aquifer_config_hdf5(filepath: Path | str) -> AquiferConfig:
    """
    Read an AquiferConfig from an HDF5 file.

    Args:
        filepath: Path to the HDF5 file

    Returns:
        AquiferConfig instance
    """
    with HDF5AquiferReader(filepath) as reader:
        config = reader.read_config()
    logger.info("Read aquifer configuration from %s", filepath)
    return config
