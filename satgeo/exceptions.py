# -*- coding: utf-8 -*-
"""
satgeo Exception Hierarchy - Domain-specific exceptions for geocoding.

Provides a small exception hierarchy that lets product readers and writers
catch satgeo errors distinctly from Python built-in exceptions. All satgeo
exceptions subclass both ``SatgeoError`` and the appropriate built-in
exception for compatibility with callers that catch the built-ins.

Absent results (no recognised convention, degenerate transform, malformed
vendor header) are returned as ``None`` and never raised. Only storage
faults on the write path propagate as ``StorageError``.

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


class SatgeoError(Exception):
    """Base exception for all satgeo errors."""


class ValidationError(SatgeoError, ValueError):
    """Invalid input data, parameters, or metadata values.

    Raised for non-positive pixel sizes, mismatched grid shapes, and
    attribute values that cannot be parsed as numbers.
    """


class GeocodingError(SatgeoError, RuntimeError):
    """Coordinate transformation failure.

    Raised when a geocoding cannot be evaluated, e.g. a coordinate
    reference system that pyproj does not understand.
    """


class StorageError(SatgeoError, IOError):
    """Failure of the storage collaborator while writing coordinate data.

    Wraps the underlying range or index error as ``__cause__``.
    """


class DependencyError(SatgeoError, ImportError):
    """Missing optional dependency required for a specific module.

    Raised when a module requires an optional package (netCDF4, h5py)
    that is not installed.
    """
