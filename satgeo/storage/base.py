# -*- coding: utf-8 -*-
"""
Storage Writer Base Class - Abstract interface for coordinate persistence.

Defines ``StorageWriter``, the collaborator that the geocoding writer
declares coordinate fields on and writes rows into. The base class records
declarations and checks every write against the declared shape, so all
implementations report out-of-range writes the same way (``IndexError``).

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
from typing import Dict, Sequence, TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from satgeo.netcdf.writer import FieldDeclaration


class StorageWriter(ABC):
    """
    Abstract base class for coordinate field storage.

    Attributes
    ----------
    declarations : Dict[str, FieldDeclaration]
        Declared fields keyed by name.
    """

    def __init__(self) -> None:
        self.declarations: Dict[str, 'FieldDeclaration'] = {}

    @abstractmethod
    def _declare(self, declaration: 'FieldDeclaration') -> None:
        """Create the storage for a declared field."""
        pass

    @abstractmethod
    def _write(
        self,
        name: str,
        origin: Sequence[int],
        data: np.ndarray,
    ) -> None:
        """Store a validated hyperslab."""
        pass

    def declare_field(self, declaration: 'FieldDeclaration') -> None:
        """
        Declare a field.

        Parameters
        ----------
        declaration : FieldDeclaration
            Name, dtype, dimensions, shape, and attributes of the field.

        Raises
        ------
        ValueError
            If the field is already declared or its dimensions and shape
            disagree in length.
        """
        if declaration.name in self.declarations:
            raise ValueError(f"Field '{declaration.name}' already declared")
        if len(declaration.dimensions) != len(declaration.shape):
            raise ValueError(
                f"Field '{declaration.name}' has {len(declaration.dimensions)} "
                f"dimensions but shape {declaration.shape}"
            )
        self._declare(declaration)
        self.declarations[declaration.name] = declaration

    def write_row(
        self,
        name: str,
        origin: Sequence[int],
        data: np.ndarray,
    ) -> None:
        """
        Write a block of values at *origin*.

        Parameters
        ----------
        name : str
            Declared field name.
        origin : Sequence[int]
            Start index on every axis.
        data : np.ndarray
            Values; must have one axis per field dimension.

        Raises
        ------
        ValueError
            If the field is not declared or *data* has the wrong rank.
        IndexError
            If the block extends outside the declared shape.
        """
        declaration = self.declarations.get(name)
        if declaration is None:
            raise ValueError(f"Field '{name}' is not declared")
        data = np.asarray(data)
        shape = declaration.shape
        if len(origin) != len(shape) or data.ndim != len(shape):
            raise ValueError(
                f"Write to '{name}' needs {len(shape)}-D origin and data, "
                f"got origin {tuple(origin)} and data {data.shape}"
            )
        for start, extent, size in zip(origin, data.shape, shape):
            if start < 0 or start + extent > size:
                raise IndexError(
                    f"Write to '{name}' at {tuple(origin)} with shape "
                    f"{data.shape} exceeds declared shape {shape}"
                )
        self._write(name, tuple(int(o) for o in origin), data)

    def close(self) -> None:
        """
        Close the writer and release resources.

        Default implementation does nothing.
        """
        pass

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
        return False


def hyperslab(origin: Sequence[int], shape: Sequence[int]) -> tuple:
    """Slices addressing a block of *shape* starting at *origin*."""
    return tuple(slice(o, o + n) for o, n in zip(origin, shape))
