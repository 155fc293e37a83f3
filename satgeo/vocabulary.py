# -*- coding: utf-8 -*-
"""
Vocabulary - Canonical enums for the satgeo package.

Defines the single source of truth for controlled vocabularies used across
the read and write paths: metadata conventions, geocoding variants, and
coordinate declaration strategies.

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

from enum import Enum


class Convention(Enum):
    """Metadata conventions that describe a product's coordinates.

    ``CF`` and ``COARDS`` name coordinate variables in NetCDF files;
    ``SPOT_VGT`` is the SPOT VEGETATION ``LOG_VOL`` key-value header.
    """

    CF = "CF"
    COARDS = "COARDS"
    SPOT_VGT = "SPOT_VGT"


class GeocodingKind(Enum):
    """Variant tag of a geocoding.

    Writers branch on this tag rather than on the runtime class.
    """

    AFFINE = "affine"
    PIXEL_GRID = "pixel_grid"


class DeclarationKind(Enum):
    """Strategy used to persist a geocoding as coordinate fields.

    ``COORDINATE_AXES`` declares two 1-D axis variables with valid-range
    bounds; ``LAT_LON_BANDS`` declares two full 2-D latitude/longitude
    fields that are populated row by row.
    """

    COORDINATE_AXES = "coordinate_axes"
    LAT_LON_BANDS = "lat_lon_bands"
