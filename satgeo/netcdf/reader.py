# -*- coding: utf-8 -*-
"""
NetCDF Geocoding Reader - Infer a product's geocoding from its metadata.

Implements the read path: resolve the CF or COARDS coordinate variables,
build an affine geocoding from their bounds attributes or from their first
stored samples, and fall back to a dense pixel-grid geocoding built from
the product's latitude/longitude bands when no affine geocoding results.

The orientation decision (whether stored rows run south-to-north) is
returned with the geocoding in a ``GeocodingInference`` so that a later
write or indexing step can use the identical flag.

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
from pathlib import Path
from typing import Optional, Union

# satgeo internal
from satgeo.constants import (
    DEFAULT_SEARCH_RADIUS,
    LAT_VAR_NAME,
    LATITUDE_VAR_NAME,
    LON_VAR_NAME,
    LONGITUDE_VAR_NAME,
    NETCDF_REFERENCE_PIXEL,
    VALID_MAX_ATT_NAME,
    VALID_MIN_ATT_NAME,
    WGS84_CRS,
)
from satgeo.exceptions import GeocodingError
from satgeo.geocoding.affine import AffineGeocoding
from satgeo.geocoding.pixel import PixelGridGeocoding
from satgeo.metadata.samples import axis_step, read_leading_samples
from satgeo.metadata.source import MetadataSource, NetCDFMetadataSource
from satgeo.models import GeocodingInference, RasterDimension
from satgeo.netcdf.conventions import ConventionNamePair, resolve_convention
from satgeo.netcdf.orientation import detect_y_flipped
from satgeo.product import RasterProduct

logger = logging.getLogger(__name__)


def build_affine_geocoding(
    source: MetadataSource,
    pair: ConventionNamePair,
    dimension: RasterDimension,
) -> Optional[AffineGeocoding]:
    """Build an affine geocoding from resolved coordinate variables.

    Two branches, selected by the presence of ``valid_min``/``valid_max``
    on both variables:

    - **Bounds:** pixel sizes are the valid ranges divided by the raster
      extent, the origin (both ``valid_min`` values) is anchored at the
      bottom-left pixel center ``(0.5, height - 0.5)``, and the rows are
      always treated as flipped.
    - **Samples:** pixel sizes are the steps between the first two samples
      of each 1-D axis. A decreasing latitude axis stores the north row
      first (not flipped, northing = first sample); otherwise the rows are
      flipped and the northing is the last sample. The anchor is the
      top-left pixel center ``(0.5, 0.5)``.

    Parameters
    ----------
    source : MetadataSource
        Source holding the coordinate variables.
    pair : ConventionNamePair
        Resolved variable names.
    dimension : RasterDimension
        Product raster size.

    Returns
    -------
    AffineGeocoding, optional
        The geocoding with ``y_flipped`` set, or None when either pixel
        size is not positive or the axes cannot be sampled.

    Raises
    ------
    ValidationError
        If a bounds attribute holds a non-numeric value.
    """
    lon_attrs = source.attributes(pair.lon_name)
    lat_attrs = source.attributes(pair.lat_name)
    lon_min = lon_attrs.get_numeric(VALID_MIN_ATT_NAME)
    lon_max = lon_attrs.get_numeric(VALID_MAX_ATT_NAME)
    lat_min = lat_attrs.get_numeric(VALID_MIN_ATT_NAME)
    lat_max = lat_attrs.get_numeric(VALID_MAX_ATT_NAME)

    width = dimension.width
    height = dimension.height

    if None not in (lon_min, lon_max, lat_min, lat_max):
        # COARDS-style bounds
        pixel_x = NETCDF_REFERENCE_PIXEL
        pixel_y = (height - 1.0) + NETCDF_REFERENCE_PIXEL
        easting = float(lon_min)
        northing = float(lat_min)
        pixel_size_x = (float(lon_max) - float(lon_min)) / width
        pixel_size_y = (float(lat_max) - float(lat_min)) / height
        y_flipped = True
    else:
        # CF-style axis samples
        lon_shape = source.get_shape(pair.lon_name)
        lat_shape = source.get_shape(pair.lat_name)
        if len(lon_shape) != 1 or len(lat_shape) != 1:
            logger.debug(
                "No bounds on 2-D coordinate variables %s/%s",
                pair.lon_name, pair.lat_name,
            )
            return None

        lon_samples = read_leading_samples(source, pair.lon_name, 2)
        lat_samples = source.read_samples(pair.lat_name)
        pixel_size_x = axis_step(lon_samples)
        lat_step = axis_step(lat_samples)
        if pixel_size_x is None or lat_step is None:
            logger.debug("Coordinate axes have fewer than two samples")
            return None

        pixel_x = NETCDF_REFERENCE_PIXEL
        pixel_y = NETCDF_REFERENCE_PIXEL
        easting = float(lon_samples[0])
        y_flipped = detect_y_flipped(lat_samples)
        if not y_flipped:
            pixel_size_y = -lat_step
            northing = float(lat_samples[0])
        else:
            pixel_size_y = lat_step
            northing = float(lat_samples[-1])

    if not (pixel_size_x > 0 and pixel_size_y > 0):
        logger.debug(
            "Degenerate %s transform: pixel size (%s, %s)",
            pair.convention.value, pixel_size_x, pixel_size_y,
        )
        return None

    return AffineGeocoding.from_reference_pixel(
        width=width,
        height=height,
        easting=easting,
        northing=northing,
        pixel_size_x=pixel_size_x,
        pixel_size_y=pixel_size_y,
        reference_pixel_x=pixel_x,
        reference_pixel_y=pixel_y,
        crs=WGS84_CRS,
        y_flipped=y_flipped,
    )


def build_pixel_geocoding(
    source: MetadataSource,
    product: RasterProduct,
    search_radius: int = DEFAULT_SEARCH_RADIUS,
) -> Optional[GeocodingInference]:
    """Build a dense geocoding from the product's latitude/longitude bands.

    Bands are looked up as ``lat``/``lon`` first, then as
    ``latitude``/``longitude``. The orientation is detected from the first
    two stored samples of the latitude field along its row axis, when the
    source holds that field.

    Parameters
    ----------
    source : MetadataSource
        Source holding the stored latitude field.
    product : RasterProduct
        Product providing the latitude/longitude bands.
    search_radius : int, default=5
        Neighbour search radius of the geocoding, in pixels.

    Returns
    -------
    GeocodingInference, optional
        None when either band is absent.
    """
    lon_band = product.get_band(LON_VAR_NAME)
    if lon_band is None:
        lon_band = product.get_band(LONGITUDE_VAR_NAME)
    lat_band = product.get_band(LAT_VAR_NAME)
    if lat_band is None:
        lat_band = product.get_band(LATITUDE_VAR_NAME)
    if lat_band is None or lon_band is None:
        return None

    y_flipped = False
    if source.has_field(lat_band.name):
        detected = detect_y_flipped(
            read_leading_samples(source, lat_band.name, 2)
        )
        y_flipped = bool(detected)

    geocoding = PixelGridGeocoding(
        lat_band.data,
        lon_band.data,
        valid_mask_expression=lat_band.valid_pixel_expression,
        search_radius=search_radius,
    )
    return GeocodingInference(geocoding, y_flipped, None)


def infer_geocoding(
    source: MetadataSource,
    product: RasterProduct,
) -> Optional[GeocodingInference]:
    """Infer a product's geocoding and attach it to the product.

    Tries the CF and COARDS coordinate variables first and falls back to
    the pixel-grid geocoding. When nothing applies, the product is left
    without a geocoding and None is returned.

    Parameters
    ----------
    source : MetadataSource
        The product's metadata.
    product : RasterProduct
        Product receiving the geocoding.

    Returns
    -------
    GeocodingInference, optional

    Examples
    --------
    >>> result = infer_geocoding(source, product)
    >>> if result is not None:
    ...     lat, lon = result.geocoding.image_to_latlon(0.5, 0.5)
    """
    dimension = product.dimension
    result = None

    pair = resolve_convention(source, dimension)
    if pair is not None:
        try:
            geocoding = build_affine_geocoding(source, pair, dimension)
        except (ValueError, GeocodingError) as e:
            logger.warning(
                "Failed to create NetCDF geo-coding from %s variables: %s",
                pair.convention.value, e,
            )
            geocoding = None
        if geocoding is not None:
            result = GeocodingInference(
                geocoding, geocoding.y_flipped, pair.convention
            )

    if result is None:
        result = build_pixel_geocoding(source, product)

    if result is not None:
        product.set_geocoding(result.geocoding)
    else:
        logger.debug("No geocoding found for product '%s'", product.name)
    return result


def read_geocoding(
    filepath: Union[str, Path],
    product: RasterProduct,
) -> Optional[GeocodingInference]:
    """Infer the geocoding of a NetCDF file and attach it to *product*.

    Parameters
    ----------
    filepath : str or Path
        Path to the NetCDF file.
    product : RasterProduct
        Product read from the same file.

    Returns
    -------
    GeocodingInference, optional
    """
    with NetCDFMetadataSource(filepath) as source:
        return infer_geocoding(source, product)
