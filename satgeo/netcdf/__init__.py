# -*- coding: utf-8 -*-
"""
NetCDF Geocoding Module - CF/COARDS geocoding inference and persistence.

Key Functions
-------------
- resolve_convention: Locate the CF or COARDS coordinate variables
- build_affine_geocoding: Affine geocoding from bounds or axis samples
- build_pixel_geocoding: Dense fallback from latitude/longitude bands
- infer_geocoding: Full read path, attaching the result to a product
- plan_geocoding_output / sample_row / write_geocoding: Write path

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

from satgeo.netcdf.conventions import (
    CONVENTION_NAME_PAIRS,
    ConventionNamePair,
    resolve_convention,
)
from satgeo.netcdf.orientation import detect_y_flipped
from satgeo.netcdf.reader import (
    GeocodingInference,
    build_affine_geocoding,
    build_pixel_geocoding,
    infer_geocoding,
    read_geocoding,
)
from satgeo.netcdf.writer import (
    DeclarationPlan,
    FieldDeclaration,
    RowSample,
    is_geographic_lat_lon,
    iter_row_samples,
    physical_row_index,
    plan_geocoding_output,
    sample_axes,
    sample_row,
    write_geocoding,
)

__all__ = [
    'CONVENTION_NAME_PAIRS',
    'ConventionNamePair',
    'resolve_convention',
    'detect_y_flipped',
    'GeocodingInference',
    'build_affine_geocoding',
    'build_pixel_geocoding',
    'infer_geocoding',
    'read_geocoding',
    'DeclarationPlan',
    'FieldDeclaration',
    'RowSample',
    'is_geographic_lat_lon',
    'iter_row_samples',
    'physical_row_index',
    'plan_geocoding_output',
    'sample_axes',
    'sample_row',
    'write_geocoding',
]
