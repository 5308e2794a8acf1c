"""I/O handlers for aquifer restart files."""

from __future__ import annotations

import importlib
from typing import TYPE_CHECKING

# ---------------------------------------------------------------------------
# Lazy import mapping: symbol_name -> (module_path, attr_name)
# ---------------------------------------------------------------------------
_LAZY_IMPORTS: dict[str, tuple[str, str]] = {
    # Binary records
    "RecordReader": ("pyaquifer.io.binary", "RecordReader"),
    "RecordWriter": ("pyaquifer.io.binary", "RecordWriter"),
    # Serialization
    "FORMAT_VERSION": ("pyaquifer.io.serialization", "FORMAT_VERSION"),
    "serialize_aquifer_config": ("pyaquifer.io.serialization", "serialize_aquifer_config"),
    "deserialize_aquifer_config": ("pyaquifer.io.serialization", "deserialize_aquifer_config"),
    "serialize_aquifer_data": ("pyaquifer.io.serialization", "serialize_aquifer_data"),
    "deserialize_aquifer_data": ("pyaquifer.io.serialization", "deserialize_aquifer_data"),
    "read_aquifer_config_binary": ("pyaquifer.io.serialization", "read_aquifer_config_binary"),
    "write_aquifer_config_binary": ("pyaquifer.io.serialization", "write_aquifer_config_binary"),
    # HDF5 (requires h5py)
    "HDF5AquiferReader": ("pyaquifer.io.hdf5", "HDF5AquiferReader"),
    "HDF5AquiferWriter": ("pyaquifer.io.hdf5", "HDF5AquiferWriter"),
    "read_aquifer_config_hdf5": ("pyaquifer.io.hdf5", "read_aquifer_config_hdf5"),
    "write_aquifer_config_hdf5": ("pyaquifer.io.hdf5", "write_aquifer_config_hdf5"),
    # Config
    "RestartFileConfig": ("pyaquifer.io.config", "RestartFileConfig"),
    "RestartFormat": ("pyaquifer.io.config", "RestartFormat"),
    "read_restart": ("pyaquifer.io.config", "read_restart"),
    "write_restart": ("pyaquifer.io.config", "write_restart"),
}

__all__ = list(_LAZY_IMPORTS)


def __getattr__(name: str) -> object:
    """Lazy import of io symbols and submodules (PEP 562).

    Resolved values are cached in ``globals()`` so subsequent access is a
    plain dict lookup.
    """
    target = _LAZY_IMPORTS.get(name)
    if target is not None:
        module_path, attr_name = target
        try:
            module = importlib.import_module(module_path)
        except ImportError:
            raise AttributeError(f"module 'pyaquifer.io' has no attribute {name!r}") from None
        value = getattr(module, attr_name)
        globals()[name] = value
        return value

    try:
        module = importlib.import_module(f"pyaquifer.io.{name}")
    except ImportError:
        raise AttributeError(f"module 'pyaquifer.io' has no attribute {name!r}") from None
    globals()[name] = module
    return module


if TYPE_CHECKING:
    from pyaquifer.io.binary import RecordReader as RecordReader
    from pyaquifer.io.binary import RecordWriter as RecordWriter
    from pyaquifer.io.config import RestartFileConfig as RestartFileConfig
    from pyaquifer.io.config import RestartFormat as RestartFormat
    from pyaquifer.io.config import read_restart as read_restart
    from pyaquifer.io.config import write_restart as write_restart
    from pyaquifer.io.hdf5 import HDF5AquiferReader as HDF5AquiferReader
    from pyaquifer.io.hdf5 import HDF5AquiferWriter as HDF5AquiferWriter
    from pyaquifer.io.serialization import deserialize_aquifer_config as deserialize_aquifer_config
    from pyaquifer.io.serialization import serialize_aquifer_config as serialize_aquifer_config
