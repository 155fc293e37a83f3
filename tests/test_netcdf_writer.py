# -*- coding: utf-8 -*-
"""
Geocoding Writer Tests - Declaration plans, row sampling, and persistence.

Tests the choice between coordinate axes and dense latitude/longitude
fields, row orientation on output, parallel row sampling, and wrapping of
storage failures.

Dependencies
------------
pytest
rasterio
pyproj
scipy

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

import numpy as np
import pytest

from rasterio.transform import Affine

from satgeo.exceptions import StorageError, ValidationError
from satgeo.geocoding.affine import AffineGeocoding
from satgeo.geocoding.pixel import PixelGridGeocoding
from satgeo.models import RasterDimension
from satgeo.netcdf.reader import infer_geocoding
from satgeo.netcdf.writer import (
    is_geographic_lat_lon,
    iter_row_samples,
    physical_row_index,
    plan_geocoding_output,
    sample_axes,
    sample_row,
    write_geocoding,
)
from satgeo.product import RasterProduct
from satgeo.storage.memory import MemoryStorageWriter
from satgeo.vocabulary import Convention, DeclarationKind


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def dimension():
    return RasterDimension(100, 50)


@pytest.fixture
def geo_geographic():
    """Top-left pixel center at (50N, 0E); 0.1 x 1.0 degree pixels."""
    return AffineGeocoding.from_reference_pixel(
        width=100, height=50, easting=0.0, northing=50.0,
        pixel_size_x=0.1, pixel_size_y=1.0,
    )


@pytest.fixture
def geo_utm():
    transform = Affine(10.0, 0.0, 500000.0, 0.0, -10.0, 6000000.0)
    return AffineGeocoding(transform, (12, 8), crs='EPSG:32755')


@pytest.fixture
def geo_pixel():
    rows, cols = 6, 5
    lat = 40.0 - np.arange(rows, dtype=np.float64)[:, np.newaxis] * 0.5
    lon = 10.0 + np.arange(cols, dtype=np.float64)[np.newaxis, :] * 0.25
    return PixelGridGeocoding(
        np.broadcast_to(lat, (rows, cols)).copy(),
        np.broadcast_to(lon, (rows, cols)).copy(),
        valid_mask_expression='!flags.INVALID',
    )


def _geographic(height, width=3):
    return AffineGeocoding.from_reference_pixel(
        width=width, height=height, easting=0.0, northing=float(height),
        pixel_size_x=1.0, pixel_size_y=1.0,
    )


# ---------------------------------------------------------------------------
# Declaration plan
# ---------------------------------------------------------------------------

class TestPlanGeocodingOutput:
    """Axes for geographic affine geocodings, dense fields otherwise."""

    def test_geographic_detection(self, geo_geographic, geo_utm, geo_pixel):
        assert is_geographic_lat_lon(geo_geographic)
        assert not is_geographic_lat_lon(geo_utm)
        assert not is_geographic_lat_lon(geo_pixel)

    def test_axes_declaration(self, geo_geographic, dimension):
        plan = plan_geocoding_output(geo_geographic, dimension)
        assert plan.kind is DeclarationKind.COORDINATE_AXES
        lat = plan.get_field('lat')
        lon = plan.get_field('lon')
        assert lat.dimensions == ('lat',)
        assert lat.shape == (50,)
        assert lon.dimensions == ('lon',)
        assert lon.shape == (100,)
        assert lat.dtype == 'float32'
        assert lat.attributes['units'] == 'degrees_north'
        assert lon.attributes['units'] == 'degrees_east'
        assert lat.attributes['standard_name'] == 'latitude'
        assert lon.attributes['long_name'] == 'longitude coordinate'

    def test_axes_bounds_are_corner_centers(self, geo_geographic, dimension):
        plan = plan_geocoding_output(geo_geographic, dimension)
        lat = plan.get_field('lat').attributes
        lon = plan.get_field('lon').attributes
        assert lat['valid_min'] == pytest.approx(1.0)
        assert lat['valid_max'] == pytest.approx(50.0)
        assert lon['valid_min'] == pytest.approx(0.0)
        assert lon['valid_max'] == pytest.approx(9.9)

    def test_projected_uses_dense_fields(self, geo_utm):
        plan = plan_geocoding_output(geo_utm, RasterDimension(8, 12))
        assert plan.kind is DeclarationKind.LAT_LON_BANDS
        lat = plan.get_field('lat')
        assert lat.dimensions == ('y', 'x')
        assert lat.shape == (12, 8)
        assert 'valid_min' not in lat.attributes
        assert 'valid_max' not in plan.get_field('lon').attributes

    def test_pixel_grid_keeps_expression(self, geo_pixel):
        plan = plan_geocoding_output(geo_pixel, RasterDimension(5, 6))
        assert plan.kind is DeclarationKind.LAT_LON_BANDS
        for name in ('lat', 'lon'):
            assert plan.get_field(name).attributes[
                'valid_pixel_expression'] == '!flags.INVALID'

    def test_dense_declares_image_axes(self, geo_utm):
        plan = plan_geocoding_output(geo_utm, RasterDimension(8, 12))
        assert [f.name for f in plan.fields] == ['y', 'x', 'lat', 'lon']
        y = plan.get_field('y')
        x = plan.get_field('x')
        assert y.dimensions == ('y',) and y.shape == (12,)
        assert x.dimensions == ('x',) and x.shape == (8,)
        assert y.attributes['axis'] == 'y'
        assert x.attributes['axis'] == 'x'
        assert 'long_name' in y.attributes

    def test_wgs84_axes_have_no_image_axes(self, geo_geographic, dimension):
        plan = plan_geocoding_output(geo_geographic, dimension)
        assert [f.name for f in plan.fields] == ['lat', 'lon']

    def test_other_datum_uses_dense_fields(self):
        geo = AffineGeocoding.from_reference_pixel(
            width=4, height=3, easting=-2.0, northing=52.0,
            pixel_size_x=0.01, pixel_size_y=0.01, crs='EPSG:4277',
        )
        assert not is_geographic_lat_lon(geo)
        plan = plan_geocoding_output(geo, RasterDimension(4, 3))
        assert plan.kind is DeclarationKind.LAT_LON_BANDS

    def test_dimension_mismatch(self, geo_geographic):
        with pytest.raises(ValidationError):
            plan_geocoding_output(geo_geographic, RasterDimension(50, 100))

    def test_unknown_field(self, geo_geographic, dimension):
        plan = plan_geocoding_output(geo_geographic, dimension)
        with pytest.raises(KeyError):
            plan.get_field('time')


# ---------------------------------------------------------------------------
# Row sampling
# ---------------------------------------------------------------------------

class TestSampleRow:
    """Pixel-center sampling and physical row placement."""

    def test_values(self, geo_geographic, dimension):
        plan = plan_geocoding_output(geo_geographic, dimension)
        sample = sample_row(plan, geo_geographic, dimension, 3, False)
        assert sample.physical_row == 3
        assert sample.lats.dtype == np.float32
        assert sample.lats.shape == (100,)
        np.testing.assert_allclose(sample.lats, 47.0)
        np.testing.assert_allclose(sample.lons, np.arange(100) * 0.1,
                                   atol=1e-5)

    def test_flipped_placement(self, geo_geographic, dimension):
        plan = plan_geocoding_output(geo_geographic, dimension)
        sample = sample_row(plan, geo_geographic, dimension, 0, True)
        assert sample.physical_row == 49

    def test_row_out_of_range(self, geo_geographic, dimension):
        plan = plan_geocoding_output(geo_geographic, dimension)
        with pytest.raises(ValidationError):
            sample_row(plan, geo_geographic, dimension, 50, False)
        with pytest.raises(ValidationError):
            sample_row(plan, geo_geographic, dimension, -1, False)

    @pytest.mark.parametrize("height", [1, 2, 5, 100])
    @pytest.mark.parametrize("y_flipped", [False, True])
    def test_rows_are_a_permutation(self, height, y_flipped):
        geo = _geographic(height)
        dim = RasterDimension(3, height)
        plan = plan_geocoding_output(geo, dim)
        rows = [sample_row(plan, geo, dim, y, y_flipped).physical_row
                for y in range(height)]
        assert sorted(rows) == list(range(height))
        if y_flipped:
            assert rows == list(range(height))[::-1]

    def test_physical_row_index(self):
        assert physical_row_index(0, 10, False) == 0
        assert physical_row_index(0, 10, True) == 9
        assert physical_row_index(9, 10, True) == 0

    @pytest.mark.parametrize("max_workers", [None, 1, 4])
    def test_iter_row_samples_in_order(self, geo_utm, max_workers):
        dim = RasterDimension(8, 12)
        plan = plan_geocoding_output(geo_utm, dim)
        samples = list(iter_row_samples(plan, geo_utm, dim, True,
                                        max_workers=max_workers))
        assert [s.physical_row for s in samples] == list(range(11, -1, -1))

    def test_axes(self, geo_geographic, dimension):
        lat_axis, lon_axis = sample_axes(geo_geographic, dimension, False)
        np.testing.assert_allclose(lat_axis, 50.0 - np.arange(50))
        np.testing.assert_allclose(lon_axis, np.arange(100) * 0.1, atol=1e-9)
        flipped, _ = sample_axes(geo_geographic, dimension, True)
        np.testing.assert_allclose(flipped, lat_axis[::-1])


# ---------------------------------------------------------------------------
# write_geocoding
# ---------------------------------------------------------------------------

class _FailingStorage(MemoryStorageWriter):
    """Rejects every row write with a range error."""

    def _write(self, name, origin, data):
        raise ValueError("value out of range for variable")


class TestWriteGeocoding:
    """Declare and populate coordinate fields."""

    def test_axes_written(self, geo_geographic, dimension):
        storage = MemoryStorageWriter()
        plan = write_geocoding(storage, geo_geographic, dimension,
                               y_flipped=True)
        assert plan.kind is DeclarationKind.COORDINATE_AXES
        assert storage.writes == [('lat', (0,)), ('lon', (0,))]
        np.testing.assert_allclose(storage.arrays['lat'],
                                   1.0 + np.arange(50))
        assert storage.attributes['lat']['valid_max'] == pytest.approx(50.0)

    def test_dense_rows_written_once(self, geo_utm):
        dim = RasterDimension(8, 12)
        storage = MemoryStorageWriter()
        write_geocoding(storage, geo_utm, dim, y_flipped=False)
        lat_rows = [origin for name, origin in storage.writes
                    if name == 'lat']
        assert sorted(lat_rows) == [(row, 0) for row in range(12)]
        assert not np.isnan(storage.arrays['lat']).any()
        assert not np.isnan(storage.arrays['lon']).any()

    def test_dense_values(self, geo_pixel):
        dim = RasterDimension(5, 6)
        storage = MemoryStorageWriter()
        write_geocoding(storage, geo_pixel, dim, y_flipped=False)
        np.testing.assert_allclose(storage.arrays['lat'], geo_pixel.lat)
        np.testing.assert_allclose(storage.arrays['lon'], geo_pixel.lon)

    def test_dense_values_skip_missing_sample(self):
        """A missing grid sample does not spread into its neighbours."""
        lat = np.array([[10.0, 10.0, 10.0],
                        [9.0, np.nan, 9.0],
                        [8.0, 8.0, 8.0]])
        lon = np.array([[20.0, 21.0, 22.0]] * 3)
        storage = MemoryStorageWriter()
        write_geocoding(storage, PixelGridGeocoding(lat, lon),
                        RasterDimension(3, 3), y_flipped=False)
        written = storage.arrays['lat']
        assert np.isnan(written[1, 1])
        assert np.isfinite(np.delete(written.ravel(), 4)).all()
        np.testing.assert_allclose(written, lat)
        np.testing.assert_allclose(storage.arrays['lon'][0], lon[0])

    def test_image_axes_written(self, geo_utm):
        dim = RasterDimension(8, 12)
        natural = MemoryStorageWriter()
        flipped = MemoryStorageWriter()
        write_geocoding(natural, geo_utm, dim, y_flipped=False)
        write_geocoding(flipped, geo_utm, dim, y_flipped=True)
        np.testing.assert_allclose(natural.arrays['y'], np.arange(12) + 0.5)
        np.testing.assert_allclose(natural.arrays['x'], np.arange(8) + 0.5)
        np.testing.assert_allclose(flipped.arrays['y'],
                                   (np.arange(12) + 0.5)[::-1])
        assert natural.attributes['y']['axis'] == 'y'
        assert ('y', (0,)) in natural.writes

    def test_flipped_rows_reversed(self, geo_utm):
        dim = RasterDimension(8, 12)
        natural = MemoryStorageWriter()
        flipped = MemoryStorageWriter()
        write_geocoding(natural, geo_utm, dim, y_flipped=False)
        write_geocoding(flipped, geo_utm, dim, y_flipped=True)
        np.testing.assert_array_equal(flipped.arrays['lat'],
                                      natural.arrays['lat'][::-1])
        np.testing.assert_array_equal(flipped.arrays['lon'],
                                      natural.arrays['lon'][::-1])

    def test_parallel_matches_sequential(self, geo_utm):
        dim = RasterDimension(8, 12)
        sequential = MemoryStorageWriter()
        parallel = MemoryStorageWriter()
        write_geocoding(sequential, geo_utm, dim, y_flipped=True)
        write_geocoding(parallel, geo_utm, dim, y_flipped=True,
                        max_workers=3)
        np.testing.assert_array_equal(parallel.arrays['lat'],
                                      sequential.arrays['lat'])
        assert parallel.writes == sequential.writes

    def test_storage_failure_wrapped(self, geo_utm):
        storage = _FailingStorage()
        with pytest.raises(StorageError, match="expected range") as info:
            write_geocoding(storage, geo_utm, RasterDimension(8, 12),
                            y_flipped=False)
        assert isinstance(info.value.__cause__, ValueError)
        assert isinstance(info.value, IOError)

    def test_duplicate_declaration_wrapped(self, geo_geographic, dimension):
        storage = MemoryStorageWriter()
        storage.declare_field(
            plan_geocoding_output(geo_geographic, dimension).get_field('lat')
        )
        with pytest.raises(StorageError) as info:
            write_geocoding(storage, geo_geographic, dimension,
                            y_flipped=False)
        assert isinstance(info.value.__cause__, ValueError)

    def test_written_axes_read_back(self, geo_geographic, dimension):
        """Written axes resolve as CF variables with bounds."""
        storage = MemoryStorageWriter()
        write_geocoding(storage, geo_geographic, dimension, y_flipped=True)
        product = RasterProduct('scene', width=100, height=50)
        result = infer_geocoding(storage.to_metadata_source(), product)
        assert result.convention is Convention.CF
        assert result.y_flipped is True
        # Bounds hold the outer pixel centers, so the extent shrinks by one
        # pixel on read-back.
        assert result.geocoding.pixel_size_x == pytest.approx(9.9 / 100)
        assert result.geocoding.pixel_size_y == pytest.approx(49.0 / 50)
