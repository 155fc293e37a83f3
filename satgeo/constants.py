# -*- coding: utf-8 -*-
"""
Constants - Variable names, attribute names, and default parameters.

Collects the names used by the CF and COARDS conventions, the attribute
names read and written on coordinate variables, and the defaults that
configure geocoding construction.

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

# Coordinate variable names
LAT_VAR_NAME = 'lat'
LON_VAR_NAME = 'lon'
LATITUDE_VAR_NAME = 'latitude'
LONGITUDE_VAR_NAME = 'longitude'

# Dimension names of the dense latitude/longitude fields
Y_DIM_NAME = 'y'
X_DIM_NAME = 'x'

# Attribute names
VALID_MIN_ATT_NAME = 'valid_min'
VALID_MAX_ATT_NAME = 'valid_max'
UNITS_ATT_NAME = 'units'
LONG_NAME_ATT_NAME = 'long_name'
STANDARD_NAME_ATT_NAME = 'standard_name'
VALID_PIXEL_EXPRESSION_ATT_NAME = 'valid_pixel_expression'
AXIS_ATT_NAME = 'axis'

# Reference system
WGS84_CRS = 'EPSG:4326'
SUPPORTED_DATUM = 'WGS 1984'

# Fractional pixel offset of the reference pixel used by the NetCDF
# conventions (pixel center).
NETCDF_REFERENCE_PIXEL = 0.5

# Pixel-center offset of the SPOT VGT header. The header's upper-left
# coordinate is applied to the pixel corner without a half-pixel shift,
# which differs from NETCDF_REFERENCE_PIXEL.
SPOT_VGT_PIXEL_CENTER = 0.0

# Neighbour search radius (pixels) of dense pixel-grid geocodings
DEFAULT_SEARCH_RADIUS = 5

# Storage type of written coordinate fields
COORDINATE_DTYPE = 'float32'
