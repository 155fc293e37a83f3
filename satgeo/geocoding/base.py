# -*- coding: utf-8 -*-
"""
Geocoding Base Class - Abstract interface for pixel/geographic transforms.

Defines the abstract base class shared by the two geocoding variants, the
affine geocoding and the dense pixel-grid geocoding. Each variant carries a
``kind`` tag (``GeocodingKind``) so that writers can choose a persistence
strategy without inspecting runtime types.

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

from abc import ABC, abstractmethod
from typing import Any, Optional, Tuple, Union

import numpy as np

from satgeo.vocabulary import GeocodingKind


def _is_scalar(val: Any) -> bool:
    """Check if a value is a scalar (not array-like)."""
    if isinstance(val, np.ndarray):
        return val.ndim == 0
    return isinstance(val, (int, float, np.integer, np.floating))


def _to_array(val: Any) -> np.ndarray:
    """Convert scalar, list, or array to 1D numpy array of float64."""
    arr = np.asarray(val, dtype=np.float64)
    if arr.ndim == 0:
        arr = arr.reshape(1)
    return arr


class Geocoding(ABC):
    """
    Abstract base class for geocodings.

    A geocoding maps continuous image coordinates to geographic
    coordinates. ``image_to_latlon`` and ``latlon_to_image`` accept three
    input forms:

    - **Scalar:** ``geo.image_to_latlon(0.5, 0.5)``
    - **Separate arrays:** ``geo.image_to_latlon(rows_array, cols_array)``
    - **Stacked (2, N) array:** ``geo.image_to_latlon(points_2xN)``

    Coordinate Conventions
    ----------------------
    - **Image coordinates:** continuous (row, col) with (0, 0) at the
      top-left corner of the top-left pixel; ``(r + 0.5, c + 0.5)`` is the
      center of pixel ``(r, c)``.
    - **Geographic coordinates:** (lat, lon) in WGS84 degrees.

    Notes
    -----
    Subclasses implement ``_image_to_latlon_array`` and
    ``_latlon_to_image_array`` which operate on 1D numpy arrays. The public
    methods handle scalar/list/array dispatch automatically.
    """

    kind: GeocodingKind

    def __init__(self, shape: Tuple[int, int], crs: str = 'WGS84'):
        """
        Initialize geocoding.

        Parameters
        ----------
        shape : Tuple[int, int]
            Raster shape (rows, cols).
        crs : str, default='WGS84'
            Coordinate reference system of the geocoding.
        """
        self.shape = shape
        self.crs = crs

    @property
    def width(self) -> int:
        """Number of raster columns."""
        return self.shape[1]

    @property
    def height(self) -> int:
        """Number of raster rows."""
        return self.shape[0]

    @abstractmethod
    def _image_to_latlon_array(
        self,
        rows: np.ndarray,
        cols: np.ndarray,
    ) -> Tuple[np.ndarray, np.ndarray]:
        """
        Transform pixel coordinate arrays to geographic coordinate arrays.

        Parameters
        ----------
        rows : np.ndarray
            Row coordinates (1D array, float64).
        cols : np.ndarray
            Column coordinates (1D array, float64).

        Returns
        -------
        Tuple[np.ndarray, np.ndarray]
            (lats, lons) arrays in WGS84 coordinates.
        """
        pass

    @abstractmethod
    def _latlon_to_image_array(
        self,
        lats: np.ndarray,
        lons: np.ndarray,
    ) -> Tuple[np.ndarray, np.ndarray]:
        """
        Transform geographic coordinate arrays to pixel coordinate arrays.

        Parameters
        ----------
        lats : np.ndarray
            Latitudes in degrees North (1D array, float64).
        lons : np.ndarray
            Longitudes in degrees East (1D array, float64).

        Returns
        -------
        Tuple[np.ndarray, np.ndarray]
            (rows, cols) pixel coordinate arrays.
        """
        pass

    def image_to_latlon(
        self,
        row_or_points: Union[float, list, np.ndarray],
        col: Optional[Union[float, list, np.ndarray]] = None,
    ) -> Union[Tuple[float, float],
               Tuple[np.ndarray, np.ndarray],
               np.ndarray]:
        """
        Transform image coordinates to geographic coordinates.

        Parameters
        ----------
        row_or_points : float, list, np.ndarray
            Row coordinate(s) when ``col`` is provided, or a ``(2, N)``
            ndarray of stacked ``[rows; cols]`` when ``col`` is None.
        col : float, list, or np.ndarray, optional
            Column coordinate(s).

        Returns
        -------
        Tuple[float, float]
            ``(lat, lon)`` when scalar inputs are given.
        Tuple[np.ndarray, np.ndarray]
            ``(lats, lons)`` when separate array/list inputs are given.
        np.ndarray
            Shape ``(2, N)`` when a ``(2, N)`` stacked array is given.

        Raises
        ------
        ValueError
            If the stacked input is not shaped ``(2, N)``.

        Examples
        --------
        >>> lat, lon = geo.image_to_latlon(0.5, 0.5)
        >>> lats, lons = geo.image_to_latlon([0.5, 1.5], [0.5, 0.5])
        """
        if col is None:
            pts = np.asarray(row_or_points, dtype=np.float64)
            if pts.ndim != 2 or pts.shape[0] != 2:
                raise ValueError(
                    f"Expected (2, N) array, got shape {pts.shape}"
                )
            lats, lons = self._image_to_latlon_array(pts[0], pts[1])
            return np.vstack([lats, lons])
        elif _is_scalar(row_or_points) and _is_scalar(col):
            lats, lons = self._image_to_latlon_array(
                _to_array(row_or_points), _to_array(col)
            )
            return (float(lats[0]), float(lons[0]))
        else:
            return self._image_to_latlon_array(
                _to_array(row_or_points), _to_array(col)
            )

    def latlon_to_image(
        self,
        lat_or_points: Union[float, list, np.ndarray],
        lon: Optional[Union[float, list, np.ndarray]] = None,
    ) -> Union[Tuple[float, float], Tuple[np.ndarray, np.ndarray], np.ndarray]:
        """
        Transform geographic coordinates to image coordinates.

        Parameters
        ----------
        lat_or_points : float, list, np.ndarray
            Latitude(s) when ``lon`` is provided, or a ``(2, N)`` ndarray
            of stacked ``[lats; lons]`` when ``lon`` is None.
        lon : float, list, or np.ndarray, optional
            Longitude(s).

        Returns
        -------
        Tuple[float, float]
            ``(row, col)`` when scalar inputs are given.
        Tuple[np.ndarray, np.ndarray]
            ``(rows, cols)`` when separate array/list inputs are given.
        np.ndarray
            Shape ``(2, N)`` when a ``(2, N)`` stacked array is given.

        Raises
        ------
        ValueError
            If the stacked input is not shaped ``(2, N)``.
        """
        if lon is None:
            pts = np.asarray(lat_or_points, dtype=np.float64)
            if pts.ndim != 2 or pts.shape[0] != 2:
                raise ValueError(
                    f"Expected (2, N) array, got shape {pts.shape}"
                )
            rows, cols = self._latlon_to_image_array(pts[0], pts[1])
            return np.vstack([rows, cols])
        elif _is_scalar(lat_or_points) and _is_scalar(lon):
            rows, cols = self._latlon_to_image_array(
                _to_array(lat_or_points), _to_array(lon)
            )
            return (float(rows[0]), float(cols[0]))
        else:
            return self._latlon_to_image_array(
                _to_array(lat_or_points), _to_array(lon)
            )

    def pixel_centers_to_latlon(
        self,
        row: int,
    ) -> Tuple[np.ndarray, np.ndarray]:
        """
        Geographic positions of all pixel centers of one raster row.

        Parameters
        ----------
        row : int
            Row index in raster order (0 = top row).

        Returns
        -------
        Tuple[np.ndarray, np.ndarray]
            ``(lats, lons)`` arrays of length ``width``.
        """
        cols = np.arange(self.width, dtype=np.float64) + 0.5
        rows = np.full_like(cols, row + 0.5)
        return self._image_to_latlon_array(rows, cols)
