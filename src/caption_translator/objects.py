"""
Export et import des libellés d'objets dans un fichier texte de traduction.

L'exportateur et l'importateur sont des collaborateurs externes du moteur
de résolution : le moteur ne voit que des jeux de lignes. Ce module définit
leurs interfaces et une implémentation sur un fichier texte multilingue,
une ligne par libellé et par langue :

    T18-P8629-A1033-L999:Customer
    T18-P8629-A1031-L999:Debitor
    T18-F2-P8629-A1033-L999:Name

L'export de la langue de travail est aligné sur la langue de base : chaque
ligne de base absente dans la langue de travail y figure avec une valeur
vide, ce qui permet d'y écrire la traduction retenue.
"""

import os
from pathlib import Path
from typing import Protocol, Union

from .captions import (
    KEY_VALUE_SEPARATOR,
    LineSet,
    extract_pattern,
    has_marker,
    split_key_value,
    switch_marker,
)
from .language import language_marker
from .logger import get_logger

logger = get_logger(__name__)

PathLike = Union[str, Path]


class LanguageExporter(Protocol):
    def export(self, file: PathLike, language_id: int) -> list[str]:
        """Toutes les lignes d'une langue."""
        ...

    def export_missing(self, file: PathLike, language_id: int) -> list[str]:
        """Lignes de la langue dont la traduction est absente ou vide."""
        ...


class LanguageImporter(Protocol):
    def import_lines(self, file: PathLike, lines: list[str], language_id: int) -> None:
        """Réécrit les lignes d'une langue dans le fichier d'origine."""
        ...


def _read_lines(file: PathLike, encoding: str) -> list[str]:
    with open(file, "r", encoding=encoding) as f:
        # L'export contient des lignes vides parasites
        return [line.rstrip("\r\n") for line in f if line.strip()]


class TextFileExporter:
    """
    Exportateur lisant un fichier texte de traduction multilingue.

    Attributes:
        base_language_id: Langue de référence pour l'alignement des lignes
        encoding: Encodage du fichier
    """

    def __init__(self, base_language_id: int, encoding: str = "utf-8") -> None:
        self.base_language_id = base_language_id
        self.encoding = encoding

    @property
    def base_marker(self) -> str:
        return language_marker(self.base_language_id)

    def export(self, file: PathLike, language_id: int) -> list[str]:
        lines = _read_lines(file, self.encoding)
        marker = language_marker(language_id)
        own_lines = [line for line in lines if has_marker(line, marker)]
        if language_id == self.base_language_id:
            return own_lines

        by_pattern: dict[str, str] = {}
        for line in own_lines:
            by_pattern.setdefault(extract_pattern(line, marker), line)

        aligned: list[str] = []
        for base_line in lines:
            if not has_marker(base_line, self.base_marker):
                continue
            pattern = extract_pattern(base_line, self.base_marker)
            work_line = by_pattern.pop(pattern, None)
            if work_line is None:
                key, _ = split_key_value(base_line)
                work_line = switch_marker(key, self.base_marker, marker) + KEY_VALUE_SEPARATOR
            aligned.append(work_line)

        # Lignes de travail sans équivalent dans la langue de base
        aligned.extend(by_pattern.values())
        logger.debug(
            f"Export {Path(file).name} / {language_id} : {len(aligned)} lignes "
            f"({len(by_pattern)} sans équivalent de base)"
        )
        return aligned

    def export_missing(self, file: PathLike, language_id: int) -> list[str]:
        """
        Lignes de travail sans traduction : valeur vide, ou simple copie de
        la valeur de base (la copie est alors proposée comme suggestion).
        """
        if language_id == self.base_language_id:
            return []
        marker = language_marker(language_id)
        base_lines = LineSet(self.export(file, self.base_language_id))
        missing: list[str] = []
        for line in self.export(file, language_id):
            value = split_key_value(line)[1]
            if not value or value == base_lines.read_value(extract_pattern(line, marker)):
                missing.append(line)
        return missing


def _atomic_write(path: Path, text: str, encoding: str) -> None:
    temp_path = path.with_name(path.name + ".tmp")
    with open(temp_path, "w", encoding=encoding, newline="") as f:
        f.write(text)
        f.flush()
        os.fsync(f.fileno())
    os.replace(temp_path, path)


class TextFileImporter:
    """
    Importateur réécrivant les lignes d'une langue dans le fichier texte.

    Seules les lignes dont la valeur a changé sont réécrites, à leur place
    (recherche par clé complète). Une ligne absente du fichier est insérée
    juste après sa ligne de base, sauf si sa valeur est vide. Les autres
    lignes, doublons et lignes vides compris, ne sont pas modifiées.
    """

    def __init__(self, base_language_id: int, encoding: str = "utf-8") -> None:
        self.base_language_id = base_language_id
        self.encoding = encoding

    def import_lines(self, file: PathLike, lines: list[str], language_id: int) -> None:
        path = Path(file)
        marker = language_marker(language_id)
        base_marker = language_marker(self.base_language_id)

        with open(path, "r", encoding=self.encoding, newline="") as f:
            content = f.read()
        newline = "\r\n" if "\r\n" in content else "\n"
        trailing_newline = content.endswith(newline)
        if trailing_newline:
            content = content[: -len(newline)]
        output = content.split(newline) if content else []

        positions: dict[str, int] = {}
        for position, line in enumerate(output):
            if has_marker(line, marker):
                positions.setdefault(split_key_value(line)[0], position)

        updated = 0
        pending: dict[str, str] = {}
        for line in lines:
            key, value = split_key_value(line)
            position = positions.get(key)
            if position is not None:
                if output[position] != line:
                    output[position] = line
                    updated += 1
            elif value:
                pending.setdefault(extract_pattern(line, marker), line)

        if not updated and not pending:
            logger.debug(f"Aucune ligne {language_id} à écrire dans {file}")
            return

        inserted = len(pending)
        merged: list[str] = []
        for line in output:
            merged.append(line)
            if pending and has_marker(line, base_marker):
                work_line = pending.pop(extract_pattern(line, base_marker), None)
                if work_line is not None:
                    merged.append(work_line)
        # Lignes sans ligne de base correspondante
        merged.extend(pending.values())

        text = newline.join(merged)
        if trailing_newline or not content:
            text += newline
        _atomic_write(path, text, self.encoding)
        logger.info(
            f"📝 {file} : {updated} lignes {language_id} modifiées, {inserted} ajoutées"
        )
