# -*- coding: utf-8 -*-
"""
Geocoding Inference Tests - Affine builders, pixel fallback, read path.

Tests the COARDS bounds branch, the CF sample branch in both row
orientations, degenerate inputs, the dense latitude/longitude fallback,
and attachment of the inferred geocoding to the product.

Dependencies
------------
pytest
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

import logging

import numpy as np
import pytest

try:
    import netCDF4
    _HAS_NETCDF4 = True
except ImportError:
    _HAS_NETCDF4 = False

from satgeo.geocoding.affine import AffineGeocoding
from satgeo.geocoding.pixel import PixelGridGeocoding
from satgeo.metadata.source import ArrayMetadataSource
from satgeo.models import RasterDimension
from satgeo.netcdf.conventions import CONVENTION_NAME_PAIRS
from satgeo.netcdf.reader import (
    GeocodingInference,
    build_affine_geocoding,
    build_pixel_geocoding,
    infer_geocoding,
    read_geocoding,
)
from satgeo.product import Band, RasterProduct
from satgeo.vocabulary import Convention, GeocodingKind

CF_PAIR, COARDS_PAIR = CONVENTION_NAME_PAIRS


def _bounds_source(lon_range=(0.0, 10.0), lat_range=(0.0, 50.0)):
    """COARDS source for a 100 x 50 raster with valid_min/valid_max bounds."""
    return ArrayMetadataSource(
        {'longitude': np.zeros(100), 'latitude': np.zeros(50)},
        attributes={
            'longitude': {'valid_min': lon_range[0], 'valid_max': lon_range[1]},
            'latitude': {'valid_min': lat_range[0], 'valid_max': lat_range[1]},
        },
    )


def _grids(rows, cols, flipped=False):
    lat = 50.0 - np.arange(rows, dtype=np.float64)[:, np.newaxis]
    if flipped:
        lat = lat[::-1]
    lon = np.arange(cols, dtype=np.float64)[np.newaxis, :] * 0.1
    return (np.broadcast_to(lat, (rows, cols)).copy(),
            np.broadcast_to(lon, (rows, cols)).copy())


# ---------------------------------------------------------------------------
# Affine builder: bounds branch
# ---------------------------------------------------------------------------

class TestBoundsBranch:
    """valid_min/valid_max on both coordinate variables."""

    def test_pixel_sizes(self):
        geo = build_affine_geocoding(
            _bounds_source(), COARDS_PAIR, RasterDimension(100, 50)
        )
        assert isinstance(geo, AffineGeocoding)
        assert geo.pixel_size_x == pytest.approx(0.1)
        assert geo.pixel_size_y == pytest.approx(1.0)

    def test_anchored_at_bottom_left_center(self):
        geo = build_affine_geocoding(
            _bounds_source(), COARDS_PAIR, RasterDimension(100, 50)
        )
        assert geo.reference_pixel == (0.5, 49.5)
        assert geo.easting == 0.0
        assert geo.northing == 0.0
        lat, lon = geo.image_to_latlon(49.5, 0.5)
        assert lat == pytest.approx(0.0)
        assert lon == pytest.approx(0.0)
        lat, _ = geo.image_to_latlon(0.5, 0.5)
        assert lat == pytest.approx(49.0)

    def test_always_flipped(self):
        geo = build_affine_geocoding(
            _bounds_source(), COARDS_PAIR, RasterDimension(100, 50)
        )
        assert geo.y_flipped is True

    def test_bounds_win_over_samples(self):
        source = ArrayMetadataSource(
            {'lon': np.arange(100) * 5.0, 'lat': 80.0 - np.arange(50)},
            attributes={
                'lon': {'valid_min': 0.0, 'valid_max': 10.0},
                'lat': {'valid_min': 0.0, 'valid_max': 50.0},
            },
        )
        geo = build_affine_geocoding(source, CF_PAIR, RasterDimension(100, 50))
        assert geo.pixel_size_x == pytest.approx(0.1)
        assert geo.y_flipped is True

    def test_empty_range_is_degenerate(self):
        geo = build_affine_geocoding(
            _bounds_source(lat_range=(5.0, 5.0)), COARDS_PAIR,
            RasterDimension(100, 50),
        )
        assert geo is None

    def test_inverted_range_is_degenerate(self):
        geo = build_affine_geocoding(
            _bounds_source(lon_range=(10.0, 0.0)), COARDS_PAIR,
            RasterDimension(100, 50),
        )
        assert geo is None


# ---------------------------------------------------------------------------
# Affine builder: sample branch
# ---------------------------------------------------------------------------

class TestSampleBranch:
    """Steps between the leading axis samples."""

    def test_decreasing_latitude(self):
        source = ArrayMetadataSource({
            'lon': np.arange(40) * 0.25,
            'lat': 10.0 - np.arange(20) * 0.5,
        })
        geo = build_affine_geocoding(source, CF_PAIR, RasterDimension(40, 20))
        assert geo.y_flipped is False
        assert geo.reference_pixel == (0.5, 0.5)
        assert geo.easting == 0.0
        assert geo.northing == 10.0
        assert geo.pixel_size_x == pytest.approx(0.25)
        assert geo.pixel_size_y == pytest.approx(0.5)
        lat, lon = geo.image_to_latlon(1.5, 2.5)
        assert lat == pytest.approx(9.5)
        assert lon == pytest.approx(0.5)

    def test_increasing_latitude(self):
        lat_axis = -10.0 + np.arange(20) * 0.5
        source = ArrayMetadataSource({
            'lon': 100.0 + np.arange(40) * 0.25,
            'lat': lat_axis,
        })
        geo = build_affine_geocoding(source, CF_PAIR, RasterDimension(40, 20))
        assert geo.y_flipped is True
        assert geo.northing == lat_axis[-1]
        assert geo.easting == 100.0
        assert geo.pixel_size_y == pytest.approx(0.5)
        # Top raster row is the northernmost (last stored) latitude
        lat, _ = geo.image_to_latlon(0.5, 0.5)
        assert lat == pytest.approx(-0.5)
        lat, _ = geo.image_to_latlon(19.5, 0.5)
        assert lat == pytest.approx(-10.0)

    def test_constant_longitude_is_degenerate(self):
        source = ArrayMetadataSource({
            'lon': np.ones(40), 'lat': 10.0 - np.arange(20) * 0.5,
        })
        assert build_affine_geocoding(
            source, CF_PAIR, RasterDimension(40, 20)) is None

    def test_decreasing_longitude_is_degenerate(self):
        source = ArrayMetadataSource({
            'lon': 10.0 - np.arange(40) * 0.25,
            'lat': 10.0 - np.arange(20) * 0.5,
        })
        assert build_affine_geocoding(
            source, CF_PAIR, RasterDimension(40, 20)) is None

    def test_constant_latitude_is_degenerate(self):
        source = ArrayMetadataSource({
            'lon': np.arange(40) * 0.25, 'lat': np.full(20, 3.0),
        })
        assert build_affine_geocoding(
            source, CF_PAIR, RasterDimension(40, 20)) is None

    def test_single_sample_axis(self):
        source = ArrayMetadataSource({
            'lon': np.array([4.0]), 'lat': 10.0 - np.arange(20) * 0.5,
        })
        assert build_affine_geocoding(
            source, CF_PAIR, RasterDimension(1, 20)) is None

    def test_grids_without_bounds(self):
        lat, lon = _grids(5, 6)
        source = ArrayMetadataSource({'lon': lon, 'lat': lat})
        assert build_affine_geocoding(
            source, CF_PAIR, RasterDimension(6, 5)) is None


# ---------------------------------------------------------------------------
# Pixel-grid fallback
# ---------------------------------------------------------------------------

class TestPixelFallback:
    """Dense geocoding from the product's latitude/longitude bands."""

    def _product(self, lat, lon, lat_name='lat', lon_name='lon'):
        rows, cols = lat.shape
        product = RasterProduct('scene', width=cols, height=rows)
        product.add_band(Band(lat_name, lat,
                              valid_pixel_expression='!l1_flags.INVALID'))
        product.add_band(Band(lon_name, lon))
        return product

    def test_bands_present(self):
        lat, lon = _grids(5, 6)
        product = self._product(lat, lon)
        source = ArrayMetadataSource({'lat': lat, 'lon': lon})
        result = build_pixel_geocoding(source, product)
        assert isinstance(result.geocoding, PixelGridGeocoding)
        assert result.y_flipped is False
        assert result.convention is None
        assert result.geocoding.search_radius == 5
        assert result.geocoding.valid_mask_expression == '!l1_flags.INVALID'

    def test_long_names(self):
        lat, lon = _grids(5, 6)
        product = self._product(lat, lon, 'latitude', 'longitude')
        result = build_pixel_geocoding(ArrayMetadataSource({}), product)
        assert result is not None
        assert result.y_flipped is False

    def test_flipped_storage(self):
        lat, lon = _grids(5, 6, flipped=True)
        product = self._product(lat, lon)
        source = ArrayMetadataSource({'lat': lat, 'lon': lon})
        result = build_pixel_geocoding(source, product)
        assert result.y_flipped is True

    def test_missing_band(self):
        lat, _ = _grids(5, 6)
        product = RasterProduct('scene', width=6, height=5)
        product.add_band(Band('lat', lat))
        assert build_pixel_geocoding(ArrayMetadataSource({}), product) is None

    def test_search_radius(self):
        lat, lon = _grids(5, 6)
        product = self._product(lat, lon)
        result = build_pixel_geocoding(ArrayMetadataSource({}), product,
                                       search_radius=2)
        assert result.geocoding.search_radius == 2


# ---------------------------------------------------------------------------
# Read path
# ---------------------------------------------------------------------------

class TestInferGeocoding:
    """Resolution, affine build, fallback, and attachment."""

    def test_affine_attached(self):
        source = ArrayMetadataSource({
            'lon': np.arange(40) * 0.25,
            'lat': 10.0 - np.arange(20) * 0.5,
        })
        product = RasterProduct('scene', width=40, height=20)
        result = infer_geocoding(source, product)
        assert isinstance(result, GeocodingInference)
        assert result.convention is Convention.CF
        assert result.y_flipped is False
        assert result.geocoding.kind is GeocodingKind.AFFINE
        assert product.get_geocoding() is result.geocoding

    def test_coards_bounds(self):
        product = RasterProduct('scene', width=100, height=50)
        result = infer_geocoding(_bounds_source(), product)
        assert result.convention is Convention.COARDS
        assert result.y_flipped is True

    def test_nothing_found(self):
        product = RasterProduct('scene', width=4, height=3)
        assert infer_geocoding(ArrayMetadataSource({}), product) is None
        assert product.get_geocoding() is None

    def test_fallback_to_bands(self):
        lat, lon = _grids(5, 6)
        source = ArrayMetadataSource({'lon': lon, 'lat': lat})
        product = RasterProduct('scene', width=6, height=5)
        product.add_band(Band('lat', lat))
        product.add_band(Band('lon', lon))
        result = infer_geocoding(source, product)
        assert result.geocoding.kind is GeocodingKind.PIXEL_GRID
        assert result.convention is None
        assert product.get_geocoding() is result.geocoding

    def test_unresolved_without_bands(self):
        source = ArrayMetadataSource({'lon': np.zeros(7), 'lat': np.zeros(3)})
        product = RasterProduct('scene', width=4, height=3)
        assert infer_geocoding(source, product) is None

    def test_malformed_bounds_logged(self, caplog):
        source = ArrayMetadataSource(
            {'lon': np.zeros(4), 'lat': np.zeros(3)},
            attributes={
                'lon': {'valid_min': 'west', 'valid_max': 10.0},
                'lat': {'valid_min': 0.0, 'valid_max': 50.0},
            },
        )
        product = RasterProduct('scene', width=4, height=3)
        with caplog.at_level(logging.WARNING, logger='satgeo.netcdf.reader'):
            result = infer_geocoding(source, product)
        assert result is None
        assert "Failed to create NetCDF geo-coding" in caplog.text


@pytest.mark.skipif(not _HAS_NETCDF4, reason="netCDF4 not installed")
class TestReadGeocoding:
    """Inference straight from a NetCDF file."""

    def test_cf_file(self, tmp_path):
        path = tmp_path / "scene.nc"
        with netCDF4.Dataset(str(path), 'w') as ds:
            ds.createDimension('lat', 20)
            ds.createDimension('lon', 40)
            lat = ds.createVariable('lat', 'f8', ('lat',))
            lon = ds.createVariable('lon', 'f8', ('lon',))
            lat[:] = -10.0 + np.arange(20) * 0.5
            lon[:] = np.arange(40) * 0.25

        product = RasterProduct('scene', width=40, height=20)
        result = read_geocoding(path, product)
        assert result.convention is Convention.CF
        assert result.y_flipped is True
        assert result.geocoding.northing == pytest.approx(-0.5)
        assert product.get_geocoding() is result.geocoding
