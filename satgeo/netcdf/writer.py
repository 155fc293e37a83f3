# -*- coding: utf-8 -*-
"""
NetCDF Geocoding Writer - Persist a geocoding as coordinate variables.

Implements the write path. A geocoding that is a plain geographic affine
mapping on WGS84 is declared as two lightweight 1-D axis variables
(``lat``, ``lon``) whose ``valid_min``/``valid_max`` attributes bound the
raster's pixel centers. Any other geocoding (dense pixel grids, affine
mappings in a projected CRS) is declared as two 2-D ``(y, x)`` fields plus
1-D ``y``/``x`` image-axis variables, and populated row by row from pixel-center samples.

Rows are independent, so they may be sampled concurrently. Every row is
written once, at its physical row index, which is reversed when the stored
row order is flipped.

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
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, NamedTuple, Optional, Tuple, TYPE_CHECKING

# Third-party
import numpy as np

# satgeo internal
from satgeo.constants import (
    AXIS_ATT_NAME,
    COORDINATE_DTYPE,
    LAT_VAR_NAME,
    LONG_NAME_ATT_NAME,
    LON_VAR_NAME,
    STANDARD_NAME_ATT_NAME,
    UNITS_ATT_NAME,
    VALID_MAX_ATT_NAME,
    VALID_MIN_ATT_NAME,
    VALID_PIXEL_EXPRESSION_ATT_NAME,
    X_DIM_NAME,
    Y_DIM_NAME,
)
from satgeo.exceptions import StorageError, ValidationError
from satgeo.geocoding.base import Geocoding
from satgeo.models import RasterDimension
from satgeo.vocabulary import DeclarationKind, GeocodingKind

if TYPE_CHECKING:
    from satgeo.storage.base import StorageWriter

logger = logging.getLogger(__name__)

_LAT_ATTRIBUTES = {
    UNITS_ATT_NAME: 'degrees_north',
    LONG_NAME_ATT_NAME: 'latitude coordinate',
    STANDARD_NAME_ATT_NAME: 'latitude',
}
_LON_ATTRIBUTES = {
    UNITS_ATT_NAME: 'degrees_east',
    LONG_NAME_ATT_NAME: 'longitude coordinate',
    STANDARD_NAME_ATT_NAME: 'longitude',
}
_Y_ATTRIBUTES = {
    AXIS_ATT_NAME: 'y',
    LONG_NAME_ATT_NAME: 'y-coordinate in image pixels',
}
_X_ATTRIBUTES = {
    AXIS_ATT_NAME: 'x',
    LONG_NAME_ATT_NAME: 'x-coordinate in image pixels',
}


@dataclass(frozen=True)
class FieldDeclaration:
    """A coordinate field to be declared by a storage writer.

    Parameters
    ----------
    name : str
        Field name.
    dtype : str
        NumPy dtype string of the stored values.
    dimensions : Tuple[str, ...]
        Dimension names, one per axis.
    shape : Tuple[int, ...]
        Extent of each axis.
    attributes : Dict[str, Any]
        Attributes written on the field.
    """

    name: str
    dtype: str
    dimensions: Tuple[str, ...]
    shape: Tuple[int, ...]
    attributes: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class DeclarationPlan:
    """Declarations chosen for a geocoding.

    Parameters
    ----------
    kind : DeclarationKind
        ``COORDINATE_AXES`` or ``LAT_LON_BANDS``.
    fields : Tuple[FieldDeclaration, ...]
        ``LAT_LON_BANDS`` plans start with the ``y`` and ``x`` image axes;
        both kinds then declare latitude, then longitude.
    """

    kind: DeclarationKind
    fields: Tuple[FieldDeclaration, ...]

    def get_field(self, name: str) -> FieldDeclaration:
        """Declaration called *name*.

        Raises
        ------
        KeyError
            If the plan declares no such field.
        """
        for declaration in self.fields:
            if declaration.name == name:
                return declaration
        raise KeyError(name)


class RowSample(NamedTuple):
    """Latitude/longitude values of one raster row.

    Attributes
    ----------
    physical_row : int
        Row index at which the values are stored.
    lats : np.ndarray
        Latitudes of the row's pixel centers.
    lons : np.ndarray
        Longitudes of the row's pixel centers.
    """

    physical_row: int
    lats: np.ndarray
    lons: np.ndarray


def is_geographic_lat_lon(geocoding: Geocoding) -> bool:
    """True for an affine geocoding whose CRS is WGS84 geographic.

    The comparison ignores axis order and CRS metadata (names, authority
    codes), so ``EPSG:4326`` and ``OGC:CRS84`` both qualify.
    """
    if geocoding.kind is not GeocodingKind.AFFINE:
        return False
    return geocoding.is_wgs84


def _check_dimension(geocoding: Geocoding, dimension: RasterDimension) -> None:
    if tuple(geocoding.shape) != dimension.shape:
        raise ValidationError(
            f"Geocoding shape {geocoding.shape} does not match raster "
            f"{dimension.width}x{dimension.height}"
        )


def plan_geocoding_output(
    geocoding: Geocoding,
    dimension: RasterDimension,
) -> DeclarationPlan:
    """Choose and describe the coordinate fields for a geocoding.

    Parameters
    ----------
    geocoding : Geocoding
        Geocoding to persist.
    dimension : RasterDimension
        Raster size of the product.

    Returns
    -------
    DeclarationPlan

    Raises
    ------
    ValidationError
        If the geocoding's shape differs from *dimension*.
    """
    _check_dimension(geocoding, dimension)
    width = dimension.width
    height = dimension.height

    if is_geographic_lat_lon(geocoding):
        ul_lat, ul_lon = geocoding.image_to_latlon(0.5, 0.5)
        br_lat, br_lon = geocoding.image_to_latlon(height - 0.5, width - 0.5)

        lat_attributes = dict(_LAT_ATTRIBUTES)
        lat_attributes[VALID_MIN_ATT_NAME] = min(ul_lat, br_lat)
        lat_attributes[VALID_MAX_ATT_NAME] = max(ul_lat, br_lat)
        lon_attributes = dict(_LON_ATTRIBUTES)
        lon_attributes[VALID_MIN_ATT_NAME] = min(ul_lon, br_lon)
        lon_attributes[VALID_MAX_ATT_NAME] = max(ul_lon, br_lon)

        return DeclarationPlan(
            kind=DeclarationKind.COORDINATE_AXES,
            fields=(
                FieldDeclaration(LAT_VAR_NAME, COORDINATE_DTYPE,
                                 (LAT_VAR_NAME,), (height,), lat_attributes),
                FieldDeclaration(LON_VAR_NAME, COORDINATE_DTYPE,
                                 (LON_VAR_NAME,), (width,), lon_attributes),
            ),
        )

    lat_attributes = dict(_LAT_ATTRIBUTES)
    lon_attributes = dict(_LON_ATTRIBUTES)
    expression = getattr(geocoding, 'valid_mask_expression', None)
    if expression:
        lat_attributes[VALID_PIXEL_EXPRESSION_ATT_NAME] = expression
        lon_attributes[VALID_PIXEL_EXPRESSION_ATT_NAME] = expression

    dims = (Y_DIM_NAME, X_DIM_NAME)
    return DeclarationPlan(
        kind=DeclarationKind.LAT_LON_BANDS,
        fields=(
            FieldDeclaration(Y_DIM_NAME, COORDINATE_DTYPE, (Y_DIM_NAME,),
                             (height,), dict(_Y_ATTRIBUTES)),
            FieldDeclaration(X_DIM_NAME, COORDINATE_DTYPE, (X_DIM_NAME,),
                             (width,), dict(_X_ATTRIBUTES)),
            FieldDeclaration(LAT_VAR_NAME, COORDINATE_DTYPE, dims,
                             (height, width), lat_attributes),
            FieldDeclaration(LON_VAR_NAME, COORDINATE_DTYPE, dims,
                             (height, width), lon_attributes),
        ),
    )


def physical_row_index(y: int, height: int, y_flipped: bool) -> int:
    """Stored row index of raster row *y*."""
    return (height - 1) - y if y_flipped else y


def sample_row(
    plan: DeclarationPlan,
    geocoding: Geocoding,
    dimension: RasterDimension,
    y: int,
    y_flipped: bool,
) -> RowSample:
    """Sample the pixel centers of raster row *y*.

    Parameters
    ----------
    plan : DeclarationPlan
        Plan returned by ``plan_geocoding_output``; sets the value dtype.
    geocoding : Geocoding
        Geocoding to sample.
    dimension : RasterDimension
        Raster size.
    y : int
        Row index in raster order (0 = top).
    y_flipped : bool
        Stored row orientation.

    Returns
    -------
    RowSample

    Raises
    ------
    ValidationError
        If *y* is outside the raster.
    """
    if not 0 <= y < dimension.height:
        raise ValidationError(
            f"Row {y} outside raster of height {dimension.height}"
        )
    lats, lons = geocoding.pixel_centers_to_latlon(y)
    lat_dtype = plan.get_field(LAT_VAR_NAME).dtype
    lon_dtype = plan.get_field(LON_VAR_NAME).dtype
    return RowSample(
        physical_row_index(y, dimension.height, y_flipped),
        np.asarray(lats, dtype=lat_dtype),
        np.asarray(lons, dtype=lon_dtype),
    )


def sample_axes(
    geocoding: Geocoding,
    dimension: RasterDimension,
    y_flipped: bool,
) -> Tuple[np.ndarray, np.ndarray]:
    """Axis values of a geographic affine geocoding.

    Parameters
    ----------
    geocoding : Geocoding
        Affine geocoding to sample.
    dimension : RasterDimension
        Raster size.
    y_flipped : bool
        Stored row orientation; the latitude axis is returned in stored
        order.

    Returns
    -------
    Tuple[np.ndarray, np.ndarray]
        ``(lat_axis, lon_axis)`` pixel-center values.
    """
    rows = np.arange(dimension.height, dtype=np.float64) + 0.5
    cols = np.arange(dimension.width, dtype=np.float64) + 0.5
    lat_axis, _ = geocoding.image_to_latlon(rows, np.full_like(rows, 0.5))
    _, lon_axis = geocoding.image_to_latlon(np.full_like(cols, 0.5), cols)
    if y_flipped:
        lat_axis = lat_axis[::-1]
    return np.asarray(lat_axis), np.asarray(lon_axis)


def image_axes(
    dimension: RasterDimension,
    y_flipped: bool,
) -> Tuple[np.ndarray, np.ndarray]:
    """Pixel-center image coordinates of the stored rows and columns.

    Returns
    -------
    Tuple[np.ndarray, np.ndarray]
        ``(y_axis, x_axis)``; ``y_axis[p]`` is the raster row coordinate
        of the row stored at index ``p``.
    """
    y_axis = np.arange(dimension.height, dtype=np.float64) + 0.5
    x_axis = np.arange(dimension.width, dtype=np.float64) + 0.5
    if y_flipped:
        y_axis = y_axis[::-1]
    return y_axis, x_axis


def iter_row_samples(
    plan: DeclarationPlan,
    geocoding: Geocoding,
    dimension: RasterDimension,
    y_flipped: bool,
    max_workers: Optional[int] = None,
) -> Iterator[RowSample]:
    """Sample every raster row, optionally on a thread pool.

    Samples are yielded in raster order regardless of how many workers
    compute them.
    """
    rows = range(dimension.height)

    def _sample(y: int) -> RowSample:
        return sample_row(plan, geocoding, dimension, y, y_flipped)

    if max_workers is None or max_workers <= 1:
        for y in rows:
            yield _sample(y)
        return

    chunk = max_workers * 4
    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        for start in range(0, dimension.height, chunk):
            yield from executor.map(_sample, rows[start:start + chunk])


def _store(storage: 'StorageWriter', action: str, *args: Any) -> None:
    """Call a storage writer method, wrapping range and index errors."""
    try:
        getattr(storage, action)(*args)
    except (IndexError, ValueError) as e:
        raise StorageError("Data not in the expected range") from e


def write_geocoding(
    storage: 'StorageWriter',
    geocoding: Geocoding,
    dimension: RasterDimension,
    y_flipped: bool,
    max_workers: Optional[int] = None,
) -> DeclarationPlan:
    """Declare and populate the coordinate fields of a geocoding.

    Parameters
    ----------
    storage : StorageWriter
        Destination of the declarations and row writes.
    geocoding : Geocoding
        Geocoding to persist.
    dimension : RasterDimension
        Raster size.
    y_flipped : bool
        Stored row orientation; must agree with how the product's bands
        are stored.
    max_workers : int, optional
        Threads used to sample rows of dense fields. Rows are always
        written by the calling thread.

    Returns
    -------
    DeclarationPlan
        The plan that was written.

    Raises
    ------
    StorageError
        If the storage writer rejects a declaration or a row write.

    Examples
    --------
    >>> from satgeo.storage.memory import MemoryStorageWriter
    >>> storage = MemoryStorageWriter()
    >>> plan = write_geocoding(storage, geo, RasterDimension(100, 50),
    ...                        y_flipped=True)
    """
    plan = plan_geocoding_output(geocoding, dimension)
    for declaration in plan.fields:
        _store(storage, 'declare_field', declaration)

    if plan.kind is DeclarationKind.COORDINATE_AXES:
        lat_axis, lon_axis = sample_axes(geocoding, dimension, y_flipped)
        lat_dtype = plan.get_field(LAT_VAR_NAME).dtype
        lon_dtype = plan.get_field(LON_VAR_NAME).dtype
        _store(storage, 'write_row', LAT_VAR_NAME, (0,),
               lat_axis.astype(lat_dtype))
        _store(storage, 'write_row', LON_VAR_NAME, (0,),
               lon_axis.astype(lon_dtype))
        logger.debug("Wrote coordinate axes for %dx%d raster",
                     dimension.width, dimension.height)
        return plan

    y_axis, x_axis = image_axes(dimension, y_flipped)
    _store(storage, 'write_row', Y_DIM_NAME, (0,),
           y_axis.astype(plan.get_field(Y_DIM_NAME).dtype))
    _store(storage, 'write_row', X_DIM_NAME, (0,),
           x_axis.astype(plan.get_field(X_DIM_NAME).dtype))

    for sample in iter_row_samples(plan, geocoding, dimension, y_flipped,
                                   max_workers=max_workers):
        origin = (sample.physical_row, 0)
        _store(storage, 'write_row', LAT_VAR_NAME, origin,
               sample.lats[np.newaxis, :])
        _store(storage, 'write_row', LON_VAR_NAME, origin,
               sample.lons[np.newaxis, :])
    logger.debug("Wrote %d latitude/longitude rows (y_flipped=%s)",
                 dimension.height, y_flipped)
    return plan
