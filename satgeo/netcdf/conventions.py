# -*- coding: utf-8 -*-
"""
Convention Resolution - Locate the coordinate variables of a product.

Holds the ordered table of coordinate variable name pairs, one row per
naming convention, and a single function that returns the first pair whose
variables are both present and shaped to fit the product raster. Adding a
convention means appending a row to ``CONVENTION_NAME_PAIRS``.

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
import logging
from typing import NamedTuple, Optional, Sequence

# satgeo internal
from satgeo.constants import (
    LAT_VAR_NAME,
    LATITUDE_VAR_NAME,
    LON_VAR_NAME,
    LONGITUDE_VAR_NAME,
)
from satgeo.metadata.source import MetadataSource
from satgeo.models import RasterDimension
from satgeo.vocabulary import Convention

logger = logging.getLogger(__name__)


class ConventionNamePair(NamedTuple):
    """Longitude and latitude variable names of one convention."""

    convention: Convention
    lon_name: str
    lat_name: str


# Resolution order: CF before COARDS
CONVENTION_NAME_PAIRS = (
    ConventionNamePair(Convention.CF, LON_VAR_NAME, LAT_VAR_NAME),
    ConventionNamePair(Convention.COARDS, LONGITUDE_VAR_NAME, LATITUDE_VAR_NAME),
)


def resolve_convention(
    source: MetadataSource,
    dimension: RasterDimension,
    name_pairs: Sequence[ConventionNamePair] = CONVENTION_NAME_PAIRS,
) -> Optional[ConventionNamePair]:
    """Find the first convention whose coordinate variables fit the raster.

    A pair is considered only when both of its variables exist. Its
    variables must then fit *dimension* (see ``RasterDimension.fits_to``);
    a present but incompatible pair does not end the search.

    Parameters
    ----------
    source : MetadataSource
        Source holding the candidate variables.
    dimension : RasterDimension
        Target raster size.
    name_pairs : Sequence[ConventionNamePair], optional
        Pairs to try, in priority order.

    Returns
    -------
    ConventionNamePair, optional
        The resolved pair, or None when no convention applies.
    """
    for pair in name_pairs:
        if not (source.has_field(pair.lon_name)
                and source.has_field(pair.lat_name)):
            continue
        lon_shape = source.get_shape(pair.lon_name)
        lat_shape = source.get_shape(pair.lat_name)
        if dimension.fits_to(lon_shape, lat_shape):
            logger.debug(
                "Resolved %s coordinate variables (%s, %s)",
                pair.convention.value, pair.lon_name, pair.lat_name,
            )
            return pair
        logger.debug(
            "%s coordinate variables %s/%s do not fit raster %dx%d",
            pair.convention.value, lon_shape, lat_shape,
            dimension.width, dimension.height,
        )
    return None
