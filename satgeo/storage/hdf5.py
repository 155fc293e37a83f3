# -*- coding: utf-8 -*-
"""
HDF5 Storage Writer - Write coordinate fields to HDF5 datasets.

Each declared field becomes a dataset in the root group with its
attributes and dimension labels. Rows are written with hyperslab
selection, so the full field never has to be held in memory.

Dependencies
------------
h5py

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
from typing import Any, Dict, Optional, Sequence, Union, TYPE_CHECKING

# Third-party
import numpy as np

try:
    import h5py
    _HAS_H5PY = True
except ImportError:
    _HAS_H5PY = False

# satgeo internal
from satgeo.exceptions import DependencyError
from satgeo.storage.base import StorageWriter, hyperslab

if TYPE_CHECKING:
    from satgeo.netcdf.writer import FieldDeclaration


class HDF5StorageWriter(StorageWriter):
    """Write coordinate fields to an HDF5 file.

    Parameters
    ----------
    filepath : str or Path
        Output HDF5 file path. An existing file is overwritten.
    compression : str, optional
        Compression filter, ``'gzip'`` or ``'lzf'``.
    compression_opts : int, optional
        Compression level for gzip (1-9).

    Raises
    ------
    DependencyError
        If h5py is not installed.

    Examples
    --------
    >>> with HDF5StorageWriter('coords.h5', compression='gzip') as storage:
    ...     write_geocoding(storage, geo, dimension, y_flipped=True)
    """

    def __init__(
        self,
        filepath: Union[str, Path],
        compression: Optional[str] = None,
        compression_opts: Optional[int] = None,
    ) -> None:
        if not _HAS_H5PY:
            raise DependencyError(
                "h5py is required for HDF5 writing. "
                "Install with: pip install h5py"
            )
        super().__init__()
        self.filepath = Path(filepath)
        self._kwargs: Dict[str, Any] = {}
        if compression:
            self._kwargs['compression'] = compression
        if compression_opts is not None:
            self._kwargs['compression_opts'] = compression_opts
        self._file = h5py.File(str(self.filepath), 'w')

    def _declare(self, declaration: 'FieldDeclaration') -> None:
        dtype = np.dtype(declaration.dtype)
        fill = np.nan if np.issubdtype(dtype, np.floating) else 0
        ds = self._file.create_dataset(
            declaration.name,
            shape=declaration.shape,
            dtype=dtype,
            fillvalue=fill,
            **self._kwargs,
        )
        for key, val in declaration.attributes.items():
            ds.attrs[key] = val
        for axis, dim_name in enumerate(declaration.dimensions):
            ds.dims[axis].label = dim_name

    def _write(
        self,
        name: str,
        origin: Sequence[int],
        data: np.ndarray,
    ) -> None:
        self._file[name][hyperslab(origin, data.shape)] = data

    def close(self) -> None:
        """Flush and close the HDF5 file handle."""
        if self._file is not None:
            self._file.flush()
            self._file.close()
            self._file = None
