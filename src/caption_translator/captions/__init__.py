"""
Manipulation des lignes de caption exportées.

Une ligne de caption associe une clé opaque à une valeur :

    T18-F2-P8629-A1031-L999:Name

- pattern.py : Extraction du motif stable identifiant une ligne
- lines.py : Lecture/écriture de la valeur d'une ligne à partir de son motif
"""

from .pattern import (
    KEY_PART_SEPARATOR,
    KEY_VALUE_SEPARATOR,
    extract_pattern,
    has_marker,
    split_key_value,
    switch_marker,
)
from .lines import LineSet, ParsedLine, read_value, write_value

__all__ = [
    "KEY_PART_SEPARATOR",
    "KEY_VALUE_SEPARATOR",
    "extract_pattern",
    "has_marker",
    "split_key_value",
    "switch_marker",
    "LineSet",
    "ParsedLine",
    "read_value",
    "write_value",
]
