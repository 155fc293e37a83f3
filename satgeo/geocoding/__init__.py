# -*- coding: utf-8 -*-
"""
Geocoding Module - Pixel/geographic coordinate models.

Key Classes
-----------
- Geocoding: Abstract base class with scalar/array dispatch
- AffineGeocoding: Affine transform in a single CRS (CF, COARDS, SPOT VGT)
- PixelGridGeocoding: Dense per-pixel latitude/longitude lookup

Dependencies
------------
rasterio
pyproj
scipy

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

from satgeo.geocoding.base import Geocoding
from satgeo.geocoding.affine import AffineGeocoding
from satgeo.geocoding.pixel import PixelGridGeocoding

__all__ = [
    'Geocoding',
    'AffineGeocoding',
    'PixelGridGeocoding',
]
