"""
Résolution interactive des traductions manquantes.

- prompt.py : Interface d'interaction (console ou scriptée)
- confirmation.py : Machine à états accepter/garder/éditer/capitaliser/quitter
- engine.py : Chaîne de repli mémoire -> suggestion -> traduction automatique -> saisie
"""

from .prompt import Choice, ConsolePrompt, PromptProvider
from .confirmation import Decision, Outcome, capitalize, confirm, manual_entry
from .engine import (
    Aborted,
    MtProvider,
    Resolution,
    ResolutionEngine,
    ResolutionResult,
    ResolutionSource,
)

__all__ = [
    "Choice",
    "ConsolePrompt",
    "PromptProvider",
    "Decision",
    "Outcome",
    "capitalize",
    "confirm",
    "manual_entry",
    "Aborted",
    "MtProvider",
    "Resolution",
    "ResolutionEngine",
    "ResolutionResult",
    "ResolutionSource",
]
