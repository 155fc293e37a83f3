# -*- coding: utf-8 -*-
"""
Metadata Module - Typed access to coordinate variables and headers.

Key Classes
-----------
- AttributeMap: Typed view over attributes or header entries
- MetadataSource: Abstract interface over named fields
- ArrayMetadataSource: In-memory numpy implementation
- NetCDFMetadataSource: NetCDF file implementation (netCDF4)

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

from satgeo.metadata.attributes import AttributeMap
from satgeo.metadata.source import (
    MetadataSource,
    ArrayMetadataSource,
    NetCDFMetadataSource,
)
from satgeo.metadata.samples import read_leading_samples, axis_step
from satgeo.metadata.header import parse_key_value_lines, read_key_value_header

__all__ = [
    'AttributeMap',
    'MetadataSource',
    'ArrayMetadataSource',
    'NetCDFMetadataSource',
    'read_leading_samples',
    'axis_step',
    'parse_key_value_lines',
    'read_key_value_header',
]
