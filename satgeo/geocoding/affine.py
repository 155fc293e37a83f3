# -*- coding: utf-8 -*-
"""
Affine Geocoding - Pixel/geographic transform for map-projected rasters.

Provides ``AffineGeocoding``, the geocoding variant for any raster whose
pixel-to-map relationship is a six-parameter affine transform in a single
coordinate reference system. All three metadata conventions handled by
satgeo (CF, COARDS, SPOT VGT) produce this entity.

Coordinate flow:

    pixel (row, col)  --affine-->  native CRS (x, y)  --pyproj-->  WGS84 (lat, lon)

When the native CRS is WGS84 (the normal case, EPSG:4326), the pyproj step
is skipped. Geographic CRSs on other datums are reprojected like projected
ones.

Dependencies
------------
rasterio
pyproj

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
from typing import Tuple, TYPE_CHECKING

# Third-party
import numpy as np

# satgeo internal
from satgeo.constants import NETCDF_REFERENCE_PIXEL, WGS84_CRS
from satgeo.exceptions import GeocodingError, ValidationError
from satgeo.geocoding._backend import require_affine_backend
from satgeo.geocoding.base import Geocoding
from satgeo.vocabulary import GeocodingKind

if TYPE_CHECKING:
    from rasterio.transform import Affine


class AffineGeocoding(Geocoding):
    """Geocoding defined by an affine transform and a CRS.

    The affine transform maps pixel ``(col, row)`` to map ``(x, y)`` as::

        x = c + col * a + row * b
        y = f + col * d + row * e

    Map ``y`` decreases with increasing row (``e < 0``): row 0 is the
    northern edge of the raster in product order. Whether the stored rows
    run the other way is recorded in ``y_flipped``.

    Parameters
    ----------
    transform : rasterio.transform.Affine
        Affine transform mapping pixel to native CRS coordinates.
    shape : Tuple[int, int]
        Raster shape ``(rows, cols)``.
    crs : str, default='EPSG:4326'
        Coordinate reference system string.
    y_flipped : bool, default=False
        True when the stored row order is south-to-north.

    Attributes
    ----------
    transform : rasterio.transform.Affine
        The affine transform.
    pixel_size_x, pixel_size_y : float
        Positive pixel extents in CRS units.
    reference_pixel : Tuple[float, float]
        Fractional pixel ``(x, y)`` anchored at ``(easting, northing)``.
    easting, northing : float
        Map position of the reference pixel.
    y_flipped : bool
        Stored row orientation.

    Raises
    ------
    DependencyError
        If rasterio or pyproj is not installed.
    TypeError
        If *transform* is not a ``rasterio.transform.Affine`` instance.
    ValidationError
        If the raster shape or either pixel size is not positive.
    GeocodingError
        If *crs* is not understood by pyproj.

    Examples
    --------
    >>> geo = AffineGeocoding.from_reference_pixel(
    ...     width=100, height=50, easting=0.0, northing=50.0,
    ...     pixel_size_x=0.1, pixel_size_y=1.0,
    ... )
    >>> lat, lon = geo.image_to_latlon(0.5, 0.5)
    """

    kind = GeocodingKind.AFFINE

    def __init__(
        self,
        transform: 'Affine',
        shape: Tuple[int, int],
        crs: str = WGS84_CRS,
        y_flipped: bool = False,
    ) -> None:
        require_affine_backend()

        from rasterio.transform import Affine
        import pyproj

        if not isinstance(transform, Affine):
            raise TypeError(
                f"transform must be a rasterio.transform.Affine instance, "
                f"got {type(transform).__name__}"
            )

        rows, cols = shape
        if rows <= 0 or cols <= 0:
            raise ValidationError(
                f"Raster shape must be positive, got {shape}"
            )
        if not transform.a > 0 or not -transform.e > 0:
            raise ValidationError(
                f"Pixel sizes must be positive, got "
                f"({transform.a}, {-transform.e})"
            )

        self.transform = transform
        self._inverse = ~transform
        self.y_flipped = bool(y_flipped)
        self.reference_pixel = (0.0, 0.0)
        self.easting = float(transform.c)
        self.northing = float(transform.f)

        try:
            native_crs = pyproj.CRS(crs)
        except pyproj.exceptions.CRSError as e:
            raise GeocodingError(f"Unsupported CRS '{crs}': {e}") from e
        self.crs_object = native_crs
        self._is_geographic = native_crs.is_geographic
        wgs84 = pyproj.CRS(WGS84_CRS)
        self._is_wgs84 = native_crs.equals(wgs84, ignore_axis_order=True)

        # Transformers are needed for every CRS other than WGS84 itself,
        # including geographic CRSs on another datum
        self._to_wgs84 = None
        self._from_wgs84 = None
        if not self._is_wgs84:
            self._to_wgs84 = pyproj.Transformer.from_crs(
                native_crs, wgs84, always_xy=True
            )
            self._from_wgs84 = pyproj.Transformer.from_crs(
                wgs84, native_crs, always_xy=True
            )

        super().__init__((int(rows), int(cols)), crs=crs)

    @classmethod
    def from_reference_pixel(
        cls,
        width: int,
        height: int,
        easting: float,
        northing: float,
        pixel_size_x: float,
        pixel_size_y: float,
        reference_pixel_x: float = NETCDF_REFERENCE_PIXEL,
        reference_pixel_y: float = NETCDF_REFERENCE_PIXEL,
        crs: str = WGS84_CRS,
        y_flipped: bool = False,
    ) -> 'AffineGeocoding':
        """Create an affine geocoding from an anchored reference pixel.

        The transform is composed as::

            translate(easting, northing)
              * scale(pixel_size_x, -pixel_size_y)
              * translate(-reference_pixel_x, -reference_pixel_y)

        so that pixel ``(reference_pixel_x, reference_pixel_y)`` maps to
        ``(easting, northing)``.

        Parameters
        ----------
        width, height : int
            Raster extent.
        easting, northing : float
            Map position of the reference pixel.
        pixel_size_x, pixel_size_y : float
            Positive pixel extents.
        reference_pixel_x, reference_pixel_y : float, default=0.5
            Fractional pixel position of the anchor.
        crs : str, default='EPSG:4326'
            Coordinate reference system string.
        y_flipped : bool, default=False
            Stored row orientation.

        Returns
        -------
        AffineGeocoding

        Raises
        ------
        ValidationError
            If either pixel size is not positive.
        """
        if pixel_size_x <= 0 or pixel_size_y <= 0:
            raise ValidationError(
                f"Pixel sizes must be positive, got "
                f"({pixel_size_x}, {pixel_size_y})"
            )
        require_affine_backend()
        from rasterio.transform import Affine

        transform = (
            Affine.translation(easting, northing)
            * Affine.scale(pixel_size_x, -pixel_size_y)
            * Affine.translation(-reference_pixel_x, -reference_pixel_y)
        )
        geo = cls(transform, (height, width), crs=crs, y_flipped=y_flipped)
        geo.reference_pixel = (float(reference_pixel_x),
                               float(reference_pixel_y))
        geo.easting = float(easting)
        geo.northing = float(northing)
        return geo

    @property
    def pixel_size_x(self) -> float:
        """Pixel extent along the column axis."""
        return float(self.transform.a)

    @property
    def pixel_size_y(self) -> float:
        """Pixel extent along the row axis (positive)."""
        return float(-self.transform.e)

    @property
    def is_geographic(self) -> bool:
        """True when the native CRS is geographic."""
        return self._is_geographic

    @property
    def is_wgs84(self) -> bool:
        """True when the native CRS is WGS84 geographic, ignoring axis order."""
        return self._is_wgs84

    def _image_to_latlon_array(
        self,
        rows: np.ndarray,
        cols: np.ndarray,
    ) -> Tuple[np.ndarray, np.ndarray]:
        """Apply the affine transform, then reproject to WGS84 if needed."""
        t = self.transform
        xs = t.c + cols * t.a + rows * t.b
        ys = t.f + cols * t.d + rows * t.e

        if self._is_wgs84:
            return ys, xs

        lons, lats = self._to_wgs84.transform(xs, ys)
        return np.asarray(lats), np.asarray(lons)

    def _latlon_to_image_array(
        self,
        lats: np.ndarray,
        lons: np.ndarray,
    ) -> Tuple[np.ndarray, np.ndarray]:
        """Reproject from WGS84 if needed, then apply the inverse transform."""
        if self._is_wgs84:
            xs, ys = lons, lats
        else:
            xs, ys = self._from_wgs84.transform(lons, lats)
            xs = np.asarray(xs)
            ys = np.asarray(ys)

        inv = self._inverse
        cols = inv.c + xs * inv.a + ys * inv.b
        rows = inv.f + xs * inv.d + ys * inv.e
        return rows, cols

    def __repr__(self) -> str:
        return (
            f"AffineGeocoding(crs={self.crs!r}, shape={self.shape}, "
            f"easting={self.easting}, northing={self.northing}, "
            f"pixel_size=({self.pixel_size_x}, {self.pixel_size_y}), "
            f"reference_pixel={self.reference_pixel}, "
            f"y_flipped={self.y_flipped})"
        )
