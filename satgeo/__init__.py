# -*- coding: utf-8 -*-
"""
satgeo - Geocoding inference and persistence for satellite rasters.

Infers how the pixels of a raster product map to geographic positions from
the product's metadata (CF or COARDS coordinate variables in NetCDF files,
SPOT VEGETATION ``LOG_VOL`` headers, or dense latitude/longitude bands),
and writes a geocoding back out as coordinate fields.

Key Functions
-------------
- infer_geocoding: Infer and attach a product's geocoding
- build_spot_vgt_geocoding: Affine geocoding from a SPOT VGT header
- infer_spot_vgt_geocoding: Infer and attach a SPOT VGT product's geocoding
- plan_geocoding_output: Choose the coordinate fields for a geocoding
- sample_row: Latitude/longitude values of one raster row
- write_geocoding: Declare and populate the coordinate fields

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

__version__ = "0.1.0"

from satgeo.exceptions import (
    SatgeoError,
    ValidationError,
    GeocodingError,
    StorageError,
    DependencyError,
)
from satgeo.vocabulary import Convention, GeocodingKind, DeclarationKind
from satgeo.models import RasterDimension
from satgeo.product import Band, RasterProduct
from satgeo.geocoding import Geocoding, AffineGeocoding, PixelGridGeocoding
from satgeo.netcdf import (
    GeocodingInference,
    infer_geocoding,
    read_geocoding,
    plan_geocoding_output,
    sample_row,
    write_geocoding,
)
from satgeo.vendor import (
    LogVolDescriptor,
    build_spot_vgt_geocoding,
    infer_spot_vgt_geocoding,
)

__all__ = [
    '__version__',
    'SatgeoError',
    'ValidationError',
    'GeocodingError',
    'StorageError',
    'DependencyError',
    'Convention',
    'GeocodingKind',
    'DeclarationKind',
    'RasterDimension',
    'Band',
    'RasterProduct',
    'Geocoding',
    'AffineGeocoding',
    'PixelGridGeocoding',
    'GeocodingInference',
    'infer_geocoding',
    'read_geocoding',
    'plan_geocoding_output',
    'sample_row',
    'write_geocoding',
    'LogVolDescriptor',
    'build_spot_vgt_geocoding',
    'infer_spot_vgt_geocoding',
]
