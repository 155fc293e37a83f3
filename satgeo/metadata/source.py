# -*- coding: utf-8 -*-
"""
Metadata Sources - Named fields with attributes and stored samples.

Defines ``MetadataSource``, the narrow interface through which geocoding
inference reads a product's coordinate variables, together with two
implementations: ``ArrayMetadataSource`` over in-memory numpy arrays and
``NetCDFMetadataSource`` over the root group of a NetCDF file.

Dependencies
------------
netCDF4 (``NetCDFMetadataSource`` only)

Author
------
Duane Smalley, PhD
duane.d.smalley@gmail.com

License
-------
MIT License
Copyright (c) 2024 geoint.org
See LICENSE file for full text.

Created
-------
2026-10-19

Modified
--------
2026-10-19
"""

# Standard library
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

# Third-party
import numpy as np

try:
    import netCDF4
    _HAS_NETCDF4 = True
except ImportError:
    _HAS_NETCDF4 = False

# satgeo internal
from satgeo.exceptions import DependencyError, ValidationError
from satgeo.metadata.attributes import AttributeMap, Number


def _leading_axis_key(ndim: int, count: Optional[int]) -> Tuple[Any, ...]:
    """Index selecting the first *count* samples along axis 0.

    Remaining axes are pinned to index 0, so a 2-D field yields the first
    column (one sample per row).
    """
    return (slice(0, count),) + (0,) * (ndim - 1)


class MetadataSource(ABC):
    """
    Abstract base class for metadata sources.

    A metadata source exposes named fields (variables), each with a
    declared shape, a set of attributes, and stored sample values.

    Notes
    -----
    Sources may hold open file handles; use them as context managers.
    """

    @abstractmethod
    def field_names(self) -> List[str]:
        """Names of all fields, in storage order."""
        pass

    @abstractmethod
    def get_shape(self, name: str) -> Optional[Tuple[int, ...]]:
        """Declared shape of a field, or None when absent."""
        pass

    @abstractmethod
    def attributes(self, name: str) -> AttributeMap:
        """Attributes of a field (empty when the field is absent)."""
        pass

    @abstractmethod
    def _read(self, name: str, key: Tuple[Any, ...]) -> np.ndarray:
        """Read a hyperslab of a field."""
        pass

    def has_field(self, name: str) -> bool:
        """True when the source holds a field called *name*."""
        return name in self.field_names()

    def get_numeric(self, name: str, attribute: str) -> Optional[Number]:
        """Numeric attribute of a field, or None when absent."""
        return self.attributes(name).get_numeric(attribute)

    def get_string(self, name: str, attribute: str) -> Optional[str]:
        """String attribute of a field, or None when absent."""
        return self.attributes(name).get_string(attribute)

    def read_samples(
        self,
        name: str,
        count: Optional[int] = None,
    ) -> np.ndarray:
        """Read the leading samples of a field along its row axis.

        Parameters
        ----------
        name : str
            Field name.
        count : int, optional
            Number of samples. If None, all samples along axis 0.

        Returns
        -------
        np.ndarray
            1-D float64 array of at most *count* samples.

        Raises
        ------
        KeyError
            If the field does not exist.
        """
        shape = self.get_shape(name)
        if shape is None:
            raise KeyError(name)
        if len(shape) == 0:
            return np.asarray(self._read(name, ()), dtype=np.float64).reshape(1)
        data = self._read(name, _leading_axis_key(len(shape), count))
        return np.asarray(data, dtype=np.float64).reshape(-1)

    def read_field(self, name: str) -> np.ndarray:
        """Read all samples of a field.

        Raises
        ------
        KeyError
            If the field does not exist.
        """
        shape = self.get_shape(name)
        if shape is None:
            raise KeyError(name)
        return np.asarray(self._read(name, (Ellipsis,)))

    def close(self) -> None:
        """Release resources. Default implementation does nothing."""
        pass

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
        return False


class ArrayMetadataSource(MetadataSource):
    """Metadata source over in-memory numpy arrays.

    Parameters
    ----------
    fields : Mapping[str, array_like]
        Field data keyed by name.
    attributes : Mapping[str, Mapping[str, Any]], optional
        Per-field attributes keyed by field name.
    global_attributes : Mapping[str, Any], optional
        File-level attributes.

    Raises
    ------
    ValidationError
        If *attributes* names a field that is not in *fields*.

    Examples
    --------
    >>> source = ArrayMetadataSource(
    ...     {'lon': np.arange(100) * 0.1, 'lat': 50.0 - np.arange(50) * 1.0},
    ...     attributes={'lat': {'units': 'degrees_north'}},
    ... )
    >>> source.read_samples('lat', 2)
    array([50., 49.])
    """

    def __init__(
        self,
        fields: Mapping[str, Any],
        attributes: Optional[Mapping[str, Mapping[str, Any]]] = None,
        global_attributes: Optional[Mapping[str, Any]] = None,
    ) -> None:
        self._fields: Dict[str, np.ndarray] = {
            name: np.asarray(data) for name, data in fields.items()
        }
        attributes = attributes or {}
        unknown = set(attributes) - set(self._fields)
        if unknown:
            raise ValidationError(
                f"Attributes given for unknown fields: {sorted(unknown)}"
            )
        self._attributes = {
            name: dict(attributes.get(name, {})) for name in self._fields
        }
        self.global_attributes = AttributeMap(global_attributes)

    def field_names(self) -> List[str]:
        return list(self._fields)

    def get_shape(self, name: str) -> Optional[Tuple[int, ...]]:
        data = self._fields.get(name)
        return None if data is None else tuple(data.shape)

    def attributes(self, name: str) -> AttributeMap:
        return AttributeMap(self._attributes.get(name))

    def _read(self, name: str, key: Tuple[Any, ...]) -> np.ndarray:
        return self._fields[name][key]


class NetCDFMetadataSource(MetadataSource):
    """Metadata source over the root group of a NetCDF file.

    Values are read raw: netCDF4's automatic masking and scaling are
    disabled so that coordinate samples are returned exactly as stored.

    Parameters
    ----------
    filepath : str or Path
        Path to the NetCDF file.

    Attributes
    ----------
    filepath : Path
        Path to the NetCDF file.
    global_attributes : AttributeMap
        File-level attributes.

    Raises
    ------
    DependencyError
        If netCDF4 is not installed.
    FileNotFoundError
        If the file does not exist.
    ValueError
        If the file cannot be opened as NetCDF.

    Examples
    --------
    >>> with NetCDFMetadataSource('product.nc') as source:
    ...     print(source.get_shape('lat'))
    """

    def __init__(self, filepath: Union[str, Path]) -> None:
        if not _HAS_NETCDF4:
            raise DependencyError(
                "netCDF4 is required for NetCDF reading. "
                "Install with: pip install netCDF4"
            )
        self.filepath = Path(filepath)
        if not self.filepath.exists():
            raise FileNotFoundError(f"File not found: {self.filepath}")

        try:
            self._dataset = netCDF4.Dataset(str(self.filepath), 'r')
        except OSError as e:
            raise ValueError(
                f"Failed to open NetCDF file: {self.filepath}: {e}"
            ) from e
        self._dataset.set_auto_maskandscale(False)

        self.global_attributes = AttributeMap({
            key: self._dataset.getncattr(key)
            for key in self._dataset.ncattrs()
        })

    def field_names(self) -> List[str]:
        return list(self._dataset.variables)

    def has_field(self, name: str) -> bool:
        return name in self._dataset.variables

    def get_shape(self, name: str) -> Optional[Tuple[int, ...]]:
        var = self._dataset.variables.get(name)
        return None if var is None else tuple(var.shape)

    def attributes(self, name: str) -> AttributeMap:
        var = self._dataset.variables.get(name)
        if var is None:
            return AttributeMap()
        return AttributeMap({key: var.getncattr(key) for key in var.ncattrs()})

    def _read(self, name: str, key: Tuple[Any, ...]) -> np.ndarray:
        return np.asarray(self._dataset.variables[name][key])

    def close(self) -> None:
        """Close the NetCDF file handle."""
        if getattr(self, '_dataset', None) is not None:
            self._dataset.close()
            self._dataset = None
