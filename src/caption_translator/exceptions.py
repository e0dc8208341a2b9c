"""
Exceptions spécifiques à caption-translator.

Chaque exception transporte les données nécessaires pour produire un message
descriptif à l'utilisateur. Toutes héritent de CaptionTranslatorError afin
que le point d'entrée puisse distinguer une erreur métier d'un bug.
"""

from pathlib import Path
from typing import Optional


class CaptionTranslatorError(Exception):
    """Exception de base du package."""


class MalformedLineError(CaptionTranslatorError, ValueError):
    """
    Exception levée quand une ligne ne contient pas le marqueur de langue attendu.

    Attributes:
        line: Ligne brute fautive
        marker: Marqueur de langue recherché (ex: "A1031")
    """

    def __init__(self, line: str, marker: str):
        self.line = line
        self.marker = marker
        super().__init__(f"Marqueur de langue '{marker}' absent de la ligne : {line!r}")


class PatternNotFoundError(CaptionTranslatorError, LookupError):
    """
    Exception levée quand aucune ligne ne correspond au motif à réécrire.

    Indique que l'export et le rapport des traductions manquantes ne sont
    pas cohérents : l'erreur est fatale pour le fichier en cours.
    """

    def __init__(self, pattern: str):
        self.pattern = pattern
        super().__init__(f"Aucune ligne ne correspond au motif '{pattern}'")


class DuplicatePatternError(CaptionTranslatorError, LookupError):
    """Exception levée en mode strict quand plusieurs lignes partagent un motif."""

    def __init__(self, pattern: str, count: int):
        self.pattern = pattern
        self.count = count
        super().__init__(f"{count} lignes correspondent au motif '{pattern}' (mode strict)")


class CorruptStoreError(CaptionTranslatorError):
    """
    Exception levée quand le fichier de mémoire de traduction est illisible.

    Attributes:
        path: Chemin du fichier de mémoire
        row: Index de la ligne fautive (None si le document entier est invalide)
    """

    def __init__(self, path: Path, reason: str, row: Optional[int] = None):
        self.path = path
        self.row = row
        self.reason = reason
        location = f" (ligne {row})" if row is not None else ""
        super().__init__(
            f"Mémoire de traduction corrompue : {path}{location} : {reason}. "
            f"Corrigez ou supprimez le fichier."
        )


class MtProviderError(CaptionTranslatorError):
    """Exception levée quand le service de traduction automatique échoue."""
