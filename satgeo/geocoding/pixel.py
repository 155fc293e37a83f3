# -*- coding: utf-8 -*-
"""
Pixel-Grid Geocoding - Dense per-pixel latitude/longitude lookup.

Provides ``PixelGridGeocoding``, the fallback geocoding used when no
coordinate-variable convention yields an affine transform. The geocoding
holds a latitude and a longitude sample for every pixel center and
interpolates between them.

The forward transform uses bilinear interpolation via
``scipy.ndimage.map_coordinates``. The inverse transform finds the nearest
valid pixel center with a ``scipy.spatial.cKDTree`` built over the samples
and rejects matches further than ``search_radius`` pixel spacings away.

Dependencies
------------
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

# Standard library
from typing import Optional, Tuple

# Third-party
import numpy as np

try:
    from scipy.ndimage import map_coordinates
    from scipy.spatial import cKDTree
    SCIPY_AVAILABLE = True
except ImportError:
    SCIPY_AVAILABLE = False

# satgeo internal
from satgeo.constants import DEFAULT_SEARCH_RADIUS
from satgeo.exceptions import DependencyError, ValidationError
from satgeo.geocoding.base import Geocoding
from satgeo.vocabulary import GeocodingKind


class PixelGridGeocoding(Geocoding):
    """Geocoding given by explicit latitude/longitude samples per pixel.

    ``lat[r, c]`` and ``lon[r, c]`` are the geographic position of the
    center of pixel ``(r, c)``, i.e. of image coordinate
    ``(r + 0.5, c + 0.5)``.

    Parameters
    ----------
    lat : np.ndarray
        Latitude grid, shape ``(rows, cols)``.
    lon : np.ndarray
        Longitude grid, same shape as *lat*.
    valid_mask_expression : str, optional
        Expression identifying the pixels that carry meaningful samples.
        Kept for persistence and reporting; evaluating it is the concern
        of the product model.
    search_radius : int, default=5
        Maximum distance, in pixel spacings, between a geographic position
        and the nearest valid sample for ``latlon_to_image`` to resolve it.
    valid_mask : np.ndarray, optional
        Boolean grid marking valid samples. Non-finite samples are always
        treated as invalid.

    Raises
    ------
    DependencyError
        If scipy is not installed.
    ValidationError
        If the grids are not 2-D, differ in shape, or *search_radius* is
        negative.
    """

    kind = GeocodingKind.PIXEL_GRID

    def __init__(
        self,
        lat: np.ndarray,
        lon: np.ndarray,
        valid_mask_expression: Optional[str] = None,
        search_radius: int = DEFAULT_SEARCH_RADIUS,
        valid_mask: Optional[np.ndarray] = None,
    ) -> None:
        if not SCIPY_AVAILABLE:
            raise DependencyError(
                "scipy is required for pixel-grid geocoding. "
                "Install with: pip install scipy"
            )

        lat = np.asarray(lat, dtype=np.float64)
        lon = np.asarray(lon, dtype=np.float64)
        if lat.ndim != 2 or lon.ndim != 2:
            raise ValidationError(
                f"Latitude/longitude grids must be 2-D, got "
                f"{lat.ndim}-D and {lon.ndim}-D"
            )
        if lat.shape != lon.shape:
            raise ValidationError(
                f"Latitude grid {lat.shape} and longitude grid "
                f"{lon.shape} differ in shape"
            )
        if search_radius < 0:
            raise ValidationError(
                f"search_radius must be >= 0, got {search_radius}"
            )

        finite = np.isfinite(lat) & np.isfinite(lon)
        valid = finite.copy()
        if valid_mask is not None:
            valid_mask = np.asarray(valid_mask, dtype=bool)
            if valid_mask.shape != lat.shape:
                raise ValidationError(
                    f"valid_mask shape {valid_mask.shape} does not match "
                    f"grid shape {lat.shape}"
                )
            valid &= valid_mask

        super().__init__(lat.shape, crs='WGS84')

        self.lat = lat
        self.lon = lon
        self.valid_mask_expression = valid_mask_expression
        self.search_radius = int(search_radius)
        self.valid_mask = valid

        # Zero-filled grids and their sample weights for interpolation
        self._weights = finite.astype(np.float64)
        self._lat_filled = np.where(finite, lat, 0.0)
        self._lon_filled = np.where(finite, lon, 0.0)
        self._build_search_tree()

    def _image_to_latlon_array(
        self,
        rows: np.ndarray,
        cols: np.ndarray,
    ) -> Tuple[np.ndarray, np.ndarray]:
        """Bilinear interpolation of the grids at continuous positions.

        Non-finite samples take no part: the interpolated sums of the
        finite samples are renormalised by their summed weights, so a
        pixel center returns its own sample and a position surrounded only
        by non-finite samples returns NaN.
        """
        coords = np.vstack([rows - 0.5, cols - 0.5])
        weight = map_coordinates(self._weights, coords, order=1,
                                 mode='nearest')
        lat_sum = map_coordinates(self._lat_filled, coords, order=1,
                                  mode='nearest')
        lon_sum = map_coordinates(self._lon_filled, coords, order=1,
                                  mode='nearest')
        found = weight > 0
        lats = np.full(weight.shape, np.nan)
        lons = np.full(weight.shape, np.nan)
        lats[found] = lat_sum[found] / weight[found]
        lons[found] = lon_sum[found] / weight[found]
        return lats, lons

    def _build_search_tree(self) -> None:
        """Build the nearest-neighbour index over valid samples."""
        rows, cols = np.nonzero(self.valid_mask)
        points = np.column_stack([self.lat[rows, cols], self.lon[rows, cols]])
        self._tree = cKDTree(points) if len(points) else None
        self._tree_index = (rows, cols)

        # Typical distance between neighbouring pixel centers
        steps = []
        if self.lat.shape[1] > 1:
            steps.append(np.hypot(np.diff(self.lat, axis=1),
                                  np.diff(self.lon, axis=1)).ravel())
        if self.lat.shape[0] > 1:
            steps.append(np.hypot(np.diff(self.lat, axis=0),
                                  np.diff(self.lon, axis=0)).ravel())
        spacing = np.inf
        if steps:
            all_steps = np.concatenate(steps)
            all_steps = all_steps[np.isfinite(all_steps) & (all_steps > 0)]
            if all_steps.size:
                spacing = float(np.median(all_steps))
        self._max_distance = (self.search_radius + 0.5) * spacing

    def _latlon_to_image_array(
        self,
        lats: np.ndarray,
        lons: np.ndarray,
    ) -> Tuple[np.ndarray, np.ndarray]:
        """Nearest valid pixel center within the search radius."""
        out_rows = np.full(lats.shape, np.nan)
        out_cols = np.full(lats.shape, np.nan)
        if self._tree is None:
            return out_rows, out_cols

        dist, idx = self._tree.query(np.column_stack([lats, lons]))
        found = np.isfinite(dist) & (dist <= self._max_distance)
        grid_rows, grid_cols = self._tree_index
        out_rows[found] = grid_rows[idx[found]] + 0.5
        out_cols[found] = grid_cols[idx[found]] + 0.5
        return out_rows, out_cols

    def __repr__(self) -> str:
        return (
            f"PixelGridGeocoding(shape={self.shape}, "
            f"valid_mask_expression={self.valid_mask_expression!r}, "
            f"search_radius={self.search_radius})"
        )
