# -*- coding: utf-8 -*-
"""
Coordinate Samples - Step and origin of stored coordinate axes.

Reads the leading samples of a coordinate field and derives the axis step
from the first two of them. Used when a coordinate variable carries no
bounds attributes.

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
from typing import Optional, Sequence

# Third-party
import numpy as np

# satgeo internal
from satgeo.metadata.source import MetadataSource


def read_leading_samples(
    source: MetadataSource,
    name: str,
    count: int = 2,
) -> np.ndarray:
    """Read the first *count* samples of a field along its row axis.

    Parameters
    ----------
    source : MetadataSource
        Source holding the field.
    name : str
        Field name.
    count : int, default=2
        Number of samples to read.

    Returns
    -------
    np.ndarray
        Up to *count* float64 samples; fewer when the axis is shorter.
    """
    return source.read_samples(name, count)


def axis_step(samples: Sequence[float]) -> Optional[float]:
    """Difference between the second and the first sample.

    Returns None when fewer than two samples are given.
    """
    if len(samples) < 2:
        return None
    return float(samples[1]) - float(samples[0])
