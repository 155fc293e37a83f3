# -*- coding: utf-8 -*-
"""
Storage Module - Destinations for persisted coordinate fields.

Key Classes
-----------
- StorageWriter: Abstract base class (declare fields, write rows)
- MemoryStorageWriter: numpy arrays, optional .npz archive
- HDF5StorageWriter: HDF5 datasets (h5py)
- NetCDFStorageWriter: NetCDF variables (netCDF4)

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

from satgeo.storage.base import StorageWriter
from satgeo.storage.memory import MemoryStorageWriter
from satgeo.storage.hdf5 import HDF5StorageWriter
from satgeo.storage.netcdf import NetCDFStorageWriter

__all__ = [
    'StorageWriter',
    'MemoryStorageWriter',
    'HDF5StorageWriter',
    'NetCDFStorageWriter',
]
