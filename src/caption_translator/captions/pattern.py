"""
Extraction du motif d'une ligne de caption.

L'export produit un fichier par langue ; les lignes d'une même unité de
traduction partagent le même début de clé, seul le marqueur de langue
(et ce qui le suit) diffère :

    T18-F2-P8629-A1033-L999:Name      (anglais)
    T18-F2-P8629-A1031-L999:Name      (allemand)

Le motif "T18-F2-P8629" permet donc de retrouver la même unité dans les
deux jeux de lignes.
"""

import re

from ..exceptions import MalformedLineError

KEY_VALUE_SEPARATOR = ":"
KEY_PART_SEPARATOR = "-"


def split_key_value(line: str) -> tuple[str, str]:
    """
    Sépare une ligne en (clé, valeur) sur le premier ":".

    Une ligne sans séparateur est considérée comme une clé sans valeur.

    Example:
        >>> split_key_value("T18-F2-A1033-L999:Ship-to: Name")
        ('T18-F2-A1033-L999', 'Ship-to: Name')
    """
    key, _, value = line.partition(KEY_VALUE_SEPARATOR)
    return key, value


def _marker_regex(marker: str) -> "re.Pattern[str]":
    sep = re.escape(KEY_PART_SEPARATOR)
    return re.compile(rf"(?:^|{sep})({re.escape(marker)})(?={sep}|$)")


def has_marker(line: str, marker: str) -> bool:
    """Indique si la clé de la ligne porte le marqueur de langue."""
    key, _ = split_key_value(line)
    return _marker_regex(marker).search(key) is not None


def switch_marker(line: str, marker: str, new_marker: str) -> str:
    """
    Remplace le marqueur de langue dans la clé d'une ligne.

    Example:
        >>> switch_marker("T18-F2-A1033-L999:Name", "A1033", "A1031")
        'T18-F2-A1031-L999:Name'
    """
    key, sep, value = line.partition(KEY_VALUE_SEPARATOR)
    match = _marker_regex(marker).search(key)
    if match is None:
        raise MalformedLineError(line, marker)
    key = key[: match.start(1)] + new_marker + key[match.end(1) :]
    return f"{key}{sep}{value}"


def extract_pattern(line: str, marker: str) -> str:
    """
    Extrait le motif d'une ligne : la clé qui précède le marqueur de langue.

    Le marqueur n'est recherché que dans le segment de clé, et seulement
    comme partie entière ("A1031" ne correspond pas à "PA10310").

    Args:
        line: Ligne brute (ex: "T18-F2-P8629-A1031-L999:")
        marker: Marqueur de langue (ex: "A1031")

    Returns:
        Le motif, sans séparateurs finaux (ex: "T18-F2-P8629")

    Raises:
        MalformedLineError: Si le marqueur est absent de la clé
    """
    key, _ = split_key_value(line)
    match = _marker_regex(marker).search(key)
    if match is None:
        raise MalformedLineError(line, marker)
    return key[: match.start()].rstrip(KEY_PART_SEPARATOR)
