# -*- coding: utf-8 -*-
"""
Models - Small typed containers shared by the read and write paths.

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
from dataclasses import dataclass
from typing import NamedTuple, Optional, Sequence, Tuple, TYPE_CHECKING

# satgeo internal
from satgeo.exceptions import ValidationError
from satgeo.vocabulary import Convention

if TYPE_CHECKING:
    from satgeo.geocoding.base import Geocoding


@dataclass(frozen=True)
class RasterDimension:
    """Width and height of a target raster.

    Parameters
    ----------
    width : int
        Number of columns.
    height : int
        Number of rows.

    Raises
    ------
    ValidationError
        If either extent is not strictly positive.
    """

    width: int
    height: int

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValidationError(
                f"Raster dimensions must be positive, got "
                f"{self.width} x {self.height}"
            )

    @property
    def shape(self) -> Tuple[int, int]:
        """Array shape ``(rows, cols)``."""
        return (self.height, self.width)

    def fits_to(
        self,
        lon_shape: Optional[Sequence[int]],
        lat_shape: Optional[Sequence[int]],
    ) -> bool:
        """Check whether a pair of coordinate fields matches this raster.

        Two 1-D axis fields fit when the longitude axis has ``width``
        samples and the latitude axis has ``height`` samples. Two 2-D
        fields fit when both are shaped ``(height, width)``. Any other
        combination does not fit.

        Parameters
        ----------
        lon_shape : Sequence[int], optional
            Declared shape of the longitude field.
        lat_shape : Sequence[int], optional
            Declared shape of the latitude field.

        Returns
        -------
        bool
        """
        if lon_shape is None or lat_shape is None:
            return False
        lon_shape = tuple(lon_shape)
        lat_shape = tuple(lat_shape)
        if len(lon_shape) == 1 and len(lat_shape) == 1:
            return lon_shape[0] == self.width and lat_shape[0] == self.height
        if len(lon_shape) == 2 and len(lat_shape) == 2:
            return lon_shape == self.shape and lat_shape == self.shape
        return False


class GeocodingInference(NamedTuple):
    """Result of geocoding inference.

    Attributes
    ----------
    geocoding : Geocoding
        The inferred geocoding.
    y_flipped : bool
        True when the stored rows run south-to-north.
    convention : Convention, optional
        Convention the geocoding was read from; None for the pixel-grid
        fallback.
    """

    geocoding: 'Geocoding'
    y_flipped: bool
    convention: Optional[Convention]
