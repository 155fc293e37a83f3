# -*- coding: utf-8 -*-
"""
Memory Storage Writer - Hold coordinate fields as numpy arrays.

Keeps declared fields in memory, optionally saving them to a ``.npz``
archive with a JSON sidecar of their attributes. Also records the order of
row writes, which makes the writer convenient for inspecting the write
path.

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

# Standard library
import json
from pathlib import Path
from typing import Any, Dict, List, Sequence, Tuple, Union, TYPE_CHECKING

# Third-party
import numpy as np

# satgeo internal
from satgeo.metadata.source import ArrayMetadataSource
from satgeo.storage.base import StorageWriter, hyperslab

if TYPE_CHECKING:
    from satgeo.netcdf.writer import FieldDeclaration


class MemoryStorageWriter(StorageWriter):
    """Store coordinate fields in numpy arrays.

    Floating-point fields are initialised with NaN so unwritten values are
    visible.

    Attributes
    ----------
    arrays : Dict[str, np.ndarray]
        Field values keyed by name.
    attributes : Dict[str, Dict[str, Any]]
        Field attributes keyed by name.
    writes : List[Tuple[str, Tuple[int, ...]]]
        ``(name, origin)`` of every write, in call order.

    Examples
    --------
    >>> storage = MemoryStorageWriter()
    >>> write_geocoding(storage, geo, RasterDimension(4, 3), y_flipped=False)
    >>> storage.arrays['lat'].shape
    (3, 4)
    """

    def __init__(self) -> None:
        super().__init__()
        self.arrays: Dict[str, np.ndarray] = {}
        self.attributes: Dict[str, Dict[str, Any]] = {}
        self.writes: List[Tuple[str, Tuple[int, ...]]] = []

    def _declare(self, declaration: 'FieldDeclaration') -> None:
        dtype = np.dtype(declaration.dtype)
        fill = np.nan if np.issubdtype(dtype, np.floating) else 0
        self.arrays[declaration.name] = np.full(
            declaration.shape, fill, dtype=dtype
        )
        self.attributes[declaration.name] = dict(declaration.attributes)

    def _write(
        self,
        name: str,
        origin: Sequence[int],
        data: np.ndarray,
    ) -> None:
        self.arrays[name][hyperslab(origin, data.shape)] = data
        self.writes.append((name, tuple(origin)))

    def to_metadata_source(self) -> ArrayMetadataSource:
        """View the stored fields as a metadata source."""
        return ArrayMetadataSource(self.arrays, attributes=self.attributes)

    def save(self, filepath: Union[str, Path]) -> Path:
        """Write all fields to a ``.npz`` archive.

        A JSON sidecar (``<filepath>.json``) holds each field's dimensions
        and attributes.

        Parameters
        ----------
        filepath : str or Path
            Output ``.npz`` path.

        Returns
        -------
        Path
            The archive path.
        """
        filepath = Path(filepath)
        np.savez(str(filepath), **self.arrays)
        sidecar = {
            name: {
                'dimensions': list(declaration.dimensions),
                'shape': list(declaration.shape),
                'dtype': declaration.dtype,
                'attributes': self.attributes[name],
            }
            for name, declaration in self.declarations.items()
        }
        sidecar_path = Path(str(filepath) + '.json')
        with open(sidecar_path, 'w') as f:
            json.dump(sidecar, f, indent=2, default=str)
        return filepath
