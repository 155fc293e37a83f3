# -*- coding: utf-8 -*-
"""
Attribute Map - Typed read-only access to named metadata fields.

``AttributeMap`` wraps the attributes of a NetCDF variable or the entries
of a flat key-value header and converts them on access. Missing names
yield ``None`` instead of a default, so callers can tell "absent" apart
from any legitimate value.

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
from typing import Any, Dict, Iterator, Mapping, Optional, Union

# Third-party
import numpy as np

# satgeo internal
from satgeo.exceptions import ValidationError

Number = Union[int, float]


def _unwrap(value: Any) -> Any:
    """Reduce numpy scalars and single-element arrays to Python values."""
    if isinstance(value, np.ndarray):
        if value.size == 0:
            return None
        if value.size == 1:
            return value.reshape(-1)[0].item()
        return value
    if isinstance(value, np.generic):
        return value.item()
    if isinstance(value, bytes):
        return value.decode('utf-8', errors='replace')
    return value


class AttributeMap(Mapping):
    """Read-only, typed view over a mapping of attributes.

    Parameters
    ----------
    attributes : Mapping[str, Any], optional
        Raw attribute values keyed by name.

    Examples
    --------
    >>> attrs = AttributeMap({'valid_min': np.float32(-90.0), 'units': b'degrees'})
    >>> attrs.get_numeric('valid_min')
    -90.0
    >>> attrs.get_string('units')
    'degrees'
    >>> attrs.get_numeric('valid_max') is None
    True
    """

    def __init__(self, attributes: Optional[Mapping[str, Any]] = None) -> None:
        self._attributes: Dict[str, Any] = dict(attributes or {})

    def __getitem__(self, name: str) -> Any:
        return self._attributes[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._attributes)

    def __len__(self) -> int:
        return len(self._attributes)

    def __repr__(self) -> str:
        return f"AttributeMap({self._attributes!r})"

    def get_numeric(self, name: str) -> Optional[Number]:
        """Numeric value of an attribute.

        Parameters
        ----------
        name : str
            Attribute name.

        Returns
        -------
        int or float, optional
            The value, or None when the attribute is absent or empty.

        Raises
        ------
        ValidationError
            If the attribute is a string that does not parse as a number,
            or holds more than one value.
        """
        value = _unwrap(self._attributes.get(name))
        if value is None:
            return None
        if isinstance(value, bool):
            return int(value)
        if isinstance(value, (int, float)):
            return value
        if isinstance(value, str):
            text = value.strip()
            if not text:
                return None
            try:
                return int(text)
            except ValueError:
                pass
            try:
                return float(text)
            except ValueError as e:
                raise ValidationError(
                    f"Attribute '{name}' is not numeric: {value!r}"
                ) from e
        raise ValidationError(
            f"Attribute '{name}' is not a scalar number: {value!r}"
        )

    def get_int(self, name: str) -> Optional[int]:
        """Integer value of an attribute.

        Strings must be plain integer literals (``'12'``, not ``'12.0'``).

        Raises
        ------
        ValidationError
            If the value is not an integer.
        """
        value = _unwrap(self._attributes.get(name))
        if value is None:
            return None
        if isinstance(value, str):
            text = value.strip()
            if not text:
                return None
            try:
                return int(text)
            except ValueError as e:
                raise ValidationError(
                    f"Attribute '{name}' is not an integer: {value!r}"
                ) from e
        if isinstance(value, (int, np.integer)) and not isinstance(value, bool):
            return int(value)
        if isinstance(value, float) and value.is_integer():
            return int(value)
        raise ValidationError(
            f"Attribute '{name}' is not an integer: {value!r}"
        )

    def get_string(self, name: str) -> Optional[str]:
        """String value of an attribute, or None when absent."""
        value = _unwrap(self._attributes.get(name))
        if value is None:
            return None
        if isinstance(value, np.ndarray):
            return ' '.join(str(v) for v in value.tolist())
        return str(value)

    def contains(self, name: str) -> bool:
        """True when the attribute is present."""
        return name in self._attributes
