# -*- coding: utf-8 -*-
"""
NetCDF Storage Writer - Write coordinate fields to a NetCDF file.

Declared fields become NetCDF variables; their dimensions are created on
first use and must agree in length across fields that share them.

Dependencies
------------
netCDF4

Author
------
Steven Siebert

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
from pathlib import Path
from typing import Any, Mapping, Optional, Sequence, Union, TYPE_CHECKING

# Third-party
import numpy as np

try:
    import netCDF4
    _HAS_NETCDF4 = True
except ImportError:
    _HAS_NETCDF4 = False

# satgeo internal
from satgeo.exceptions import DependencyError
from satgeo.storage.base import StorageWriter, hyperslab

if TYPE_CHECKING:
    from satgeo.netcdf.writer import FieldDeclaration


class NetCDFStorageWriter(StorageWriter):
    """Write coordinate fields to a NetCDF file.

    Parameters
    ----------
    filepath : str or Path
        Output NetCDF path. An existing file is overwritten.
    file_format : str, default='NETCDF4'
        netCDF4 file format identifier.
    global_attributes : Mapping[str, Any], optional
        File-level attributes, e.g. ``{'Conventions': 'CF-1.4'}``.

    Raises
    ------
    DependencyError
        If netCDF4 is not installed.

    Examples
    --------
    >>> with NetCDFStorageWriter('coords.nc') as storage:
    ...     write_geocoding(storage, geo, dimension, y_flipped=True)
    """

    def __init__(
        self,
        filepath: Union[str, Path],
        file_format: str = 'NETCDF4',
        global_attributes: Optional[Mapping[str, Any]] = None,
    ) -> None:
        if not _HAS_NETCDF4:
            raise DependencyError(
                "netCDF4 is required for NetCDF writing. "
                "Install with: pip install netCDF4"
            )
        super().__init__()
        self.filepath = Path(filepath)
        self._dataset = netCDF4.Dataset(
            str(self.filepath), 'w', format=file_format
        )
        if global_attributes:
            self._dataset.setncatts(dict(global_attributes))

    @property
    def dataset(self) -> 'netCDF4.Dataset':
        """The open netCDF4 dataset, for declaring further variables."""
        return self._dataset

    def _declare(self, declaration: 'FieldDeclaration') -> None:
        for dim_name, size in zip(declaration.dimensions, declaration.shape):
            existing = self._dataset.dimensions.get(dim_name)
            if existing is None:
                self._dataset.createDimension(dim_name, size)
            elif len(existing) != size:
                raise ValueError(
                    f"Dimension '{dim_name}' has length {len(existing)}, "
                    f"field '{declaration.name}' needs {size}"
                )
        var = self._dataset.createVariable(
            declaration.name,
            np.dtype(declaration.dtype),
            declaration.dimensions,
        )
        if declaration.attributes:
            var.setncatts(dict(declaration.attributes))

    def _write(
        self,
        name: str,
        origin: Sequence[int],
        data: np.ndarray,
    ) -> None:
        self._dataset.variables[name][hyperslab(origin, data.shape)] = data

    def close(self) -> None:
        """Close the NetCDF file handle."""
        if self._dataset is not None:
            self._dataset.close()
            self._dataset = None
