# -*- coding: utf-8 -*-
"""
Raster Product - Minimal product model consumed by geocoding inference.

A ``RasterProduct`` has a scene raster size, a set of named bands, and at
most one geocoding. It is the attachment point for inferred geocodings and
the source of latitude/longitude bands for the pixel-grid fallback.

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
from dataclasses import dataclass, field
from typing import Dict, Optional, TYPE_CHECKING

# Third-party
import numpy as np

# satgeo internal
from satgeo.exceptions import ValidationError
from satgeo.models import RasterDimension

if TYPE_CHECKING:
    from satgeo.geocoding.base import Geocoding


@dataclass
class Band:
    """A named raster band.

    Parameters
    ----------
    name : str
        Band name.
    data : np.ndarray
        Band samples, shape ``(rows, cols)``, in product row order.
    valid_pixel_expression : str, optional
        Expression identifying valid pixels.
    unit : str, optional
        Physical unit of the samples.
    """

    name: str
    data: np.ndarray
    valid_pixel_expression: Optional[str] = None
    unit: Optional[str] = None


@dataclass
class RasterProduct:
    """A raster product with named bands and an optional geocoding.

    Parameters
    ----------
    name : str
        Product name.
    width : int
        Scene raster width (columns).
    height : int
        Scene raster height (rows).
    bands : Dict[str, Band]
        Bands keyed by name.

    Examples
    --------
    >>> product = RasterProduct('scene', width=100, height=50)
    >>> product.add_band(Band('lat', np.zeros((50, 100))))
    >>> product.get_band('lat').name
    'lat'
    """

    name: str
    width: int
    height: int
    bands: Dict[str, Band] = field(default_factory=dict)
    _geocoding: Optional['Geocoding'] = field(default=None, repr=False)

    @property
    def dimension(self) -> RasterDimension:
        """Scene raster dimension."""
        return RasterDimension(self.width, self.height)

    def add_band(self, band: Band) -> Band:
        """Add a band to the product.

        Raises
        ------
        ValidationError
            If the band is not shaped ``(height, width)`` or a band with
            the same name exists.
        """
        if band.name in self.bands:
            raise ValidationError(f"Band '{band.name}' already exists")
        if tuple(np.shape(band.data)) != (self.height, self.width):
            raise ValidationError(
                f"Band '{band.name}' has shape {np.shape(band.data)}, "
                f"expected {(self.height, self.width)}"
            )
        self.bands[band.name] = band
        return band

    def get_band(self, name: str) -> Optional[Band]:
        """Band called *name*, or None."""
        return self.bands.get(name)

    def get_geocoding(self) -> Optional['Geocoding']:
        """The product's geocoding, or None."""
        return self._geocoding

    def set_geocoding(self, geocoding: 'Geocoding') -> None:
        """Attach the product's single geocoding.

        Raises
        ------
        ValidationError
            If the geocoding's raster shape differs from the product's.
        """
        if tuple(geocoding.shape) != (self.height, self.width):
            raise ValidationError(
                f"Geocoding shape {geocoding.shape} does not match product "
                f"shape {(self.height, self.width)}"
            )
        self._geocoding = geocoding
