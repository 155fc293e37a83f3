# -*- coding: utf-8 -*-
"""
Key-Value Headers - Parse flat ``KEY VALUE`` text headers.

Vendor products such as SPOT VEGETATION ship their metadata as plain text
files with one ``KEY VALUE`` pair per line, the key separated from the
value by whitespace. Values keep their internal spacing.

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
from pathlib import Path
from typing import Dict, Iterable, TextIO, Union

# satgeo internal
from satgeo.metadata.attributes import AttributeMap


def parse_key_value_lines(lines: Iterable[str]) -> Dict[str, str]:
    """Parse ``KEY VALUE`` lines into a dictionary.

    Blank lines are skipped. A key without a value maps to ``''``. When a
    key repeats, the last occurrence wins.

    Parameters
    ----------
    lines : Iterable[str]
        Header lines.

    Returns
    -------
    Dict[str, str]

    Examples
    --------
    >>> parse_key_value_lines(['PRODUCT_ID  V2KRNS10__20060721E',
    ...                        'GEODETIC_SYST_NAME WGS 1984'])
    {'PRODUCT_ID': 'V2KRNS10__20060721E', 'GEODETIC_SYST_NAME': 'WGS 1984'}
    """
    pairs: Dict[str, str] = {}
    for line in lines:
        text = line.strip()
        if not text:
            continue
        parts = text.split(None, 1)
        key = parts[0]
        value = parts[1].strip() if len(parts) > 1 else ''
        pairs[key] = value
    return pairs


def read_key_value_header(
    source: Union[str, Path, TextIO],
) -> AttributeMap:
    """Read a key-value header from a path or an open text stream.

    Parameters
    ----------
    source : str, Path, or TextIO
        Header file path or readable text stream.

    Returns
    -------
    AttributeMap
        Header entries as typed attributes.

    Raises
    ------
    FileNotFoundError
        If *source* is a path that does not exist.
    """
    if isinstance(source, (str, Path)):
        path = Path(source)
        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")
        with open(path, 'r', encoding='latin-1') as f:
            return AttributeMap(parse_key_value_lines(f))
    return AttributeMap(parse_key_value_lines(source))
