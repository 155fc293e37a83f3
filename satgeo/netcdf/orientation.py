# -*- coding: utf-8 -*-
"""
Orientation Detection - Decide whether stored rows run south-to-north.

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

# satgeo internal
from satgeo.metadata.samples import axis_step


def detect_y_flipped(lat_samples: Sequence[float]) -> Optional[bool]:
    """Orientation flag from the first two stored latitude samples.

    A decreasing latitude (north row stored first) is the natural order.
    A non-decreasing latitude means the rows are stored south-to-north.

    Parameters
    ----------
    lat_samples : Sequence[float]
        Latitude samples along the stored row axis.

    Returns
    -------
    bool, optional
        True when flipped, False when natural, None when fewer than two
        samples are given.
    """
    step = axis_step(lat_samples)
    if step is None:
        return None
    return step >= 0
