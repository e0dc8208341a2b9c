"""
Lecture et écriture de la valeur d'une ligne de caption à partir de son motif.

Chaque ligne est analysée une seule fois en (clé, position de la valeur).
Une ligne correspond à un motif quand sa clé commence par ce motif suivi
d'un séparateur de partie ("-") ou de la fin de clé :

    motif "T18-F2"  ->  "T18-F2-A1031-L999:Nom"    correspond
                        "T18-F20-A1031-L999:Code"  ne correspond pas

Si plusieurs lignes correspondent, la première est utilisée. Le mode strict
lève DuplicatePatternError au lieu de choisir.
"""

from dataclasses import dataclass
from typing import Iterable, Optional

from ..exceptions import DuplicatePatternError, PatternNotFoundError
from .pattern import KEY_PART_SEPARATOR, KEY_VALUE_SEPARATOR


@dataclass(frozen=True)
class ParsedLine:
    """
    Représentation analysée d'une ligne.

    Attributes:
        key: Segment de clé (avant le premier ":")
        value_offset: Position du premier caractère de la valeur,
                      None si la ligne n'a pas de séparateur
    """

    key: str
    value_offset: Optional[int]

    @classmethod
    def parse(cls, line: str) -> "ParsedLine":
        index = line.find(KEY_VALUE_SEPARATOR)
        if index < 0:
            return cls(key=line, value_offset=None)
        return cls(key=line[:index], value_offset=index + 1)

    def key_prefixes(self) -> Iterable[str]:
        """Tous les préfixes de la clé alignés sur un séparateur de partie."""
        parts = self.key.split(KEY_PART_SEPARATOR)
        for end in range(1, len(parts) + 1):
            yield KEY_PART_SEPARATOR.join(parts[:end])


class LineSet:
    """
    Jeu de lignes exportées pour une langue, indexé par motif.

    Attributes:
        lines: Lignes brutes (modifiées en place par write_value)
        strict: Lever DuplicatePatternError si un motif est ambigu
    """

    def __init__(self, lines: Iterable[str], strict: bool = False) -> None:
        self.lines: list[str] = list(lines)
        self.strict = strict
        self._parsed = [ParsedLine.parse(line) for line in self.lines]
        self._index: dict[str, list[int]] = {}
        for position, parsed in enumerate(self._parsed):
            for prefix in parsed.key_prefixes():
                self._index.setdefault(prefix, []).append(position)

    def __len__(self) -> int:
        return len(self.lines)

    def __iter__(self):
        return iter(self.lines)

    def find(self, pattern: str) -> Optional[int]:
        """
        Retourne la position de la ligne correspondant au motif.

        Returns:
            Position de la première ligne correspondante, None si aucune

        Raises:
            DuplicatePatternError: En mode strict, si plusieurs lignes correspondent
        """
        positions = self._index.get(pattern)
        if not positions:
            return None
        if self.strict and len(positions) > 1:
            raise DuplicatePatternError(pattern, len(positions))
        return positions[0]

    def read_value(self, pattern: str) -> str:
        """
        Lit la valeur de la ligne correspondant au motif.

        Returns:
            La valeur après le premier ":", "" si aucune ligne ne correspond
            (une valeur absente est un état normal pour la langue de travail)
        """
        position = self.find(pattern)
        if position is None:
            return ""
        offset = self._parsed[position].value_offset
        if offset is None:
            return ""
        return self.lines[position][offset:]

    def write_value(self, pattern: str, value: str) -> "LineSet":
        """
        Remplace la valeur de la ligne correspondant au motif.

        Les autres lignes ne sont pas modifiées.

        Raises:
            PatternNotFoundError: Si aucune ligne ne correspond au motif
        """
        position = self.find(pattern)
        if position is None:
            raise PatternNotFoundError(pattern)

        parsed = self._parsed[position]
        if parsed.value_offset is None:
            self.lines[position] = f"{parsed.key}{KEY_VALUE_SEPARATOR}{value}"
            self._parsed[position] = ParsedLine(
                key=parsed.key, value_offset=len(parsed.key) + 1
            )
        else:
            self.lines[position] = self.lines[position][: parsed.value_offset] + value
        return self


def read_value(lines: Iterable[str], pattern: str) -> str:
    """Lit la valeur associée au motif dans une séquence de lignes."""
    return LineSet(lines).read_value(pattern)


def write_value(lines: Iterable[str], pattern: str, value: str) -> list[str]:
    """
    Retourne une copie des lignes avec la valeur du motif remplacée.

    Raises:
        PatternNotFoundError: Si aucune ligne ne correspond au motif
    """
    return LineSet(lines).write_value(pattern, value).lines
