"""
Machine à états de confirmation/édition d'une valeur candidate.

    Proposé --accepter-----> Accepté   (valeur candidate)
    Proposé --garder-------> Gardé     (valeur originale)
    Proposé --capitaliser--> Proposé   (candidate capitalisée, nouvelle confirmation)
    Proposé --éditer-------> Proposé   (valeur saisie, nouvelle confirmation)
    Proposé --quitter------> Abandonné

Aucune transition n'accepte automatiquement une valeur transformée : après
une capitalisation ou une édition, l'utilisateur doit de nouveau choisir.
"""

from dataclasses import dataclass
from enum import Enum

from ..logger import get_logger
from .prompt import Choice, PromptProvider

logger = get_logger(__name__)


class Outcome(Enum):
    ACCEPTED = "accepted"
    KEPT = "kept"
    ABORTED = "aborted"


@dataclass(frozen=True)
class Decision:
    """
    Résultat d'une confirmation.

    Attributes:
        outcome: Accepté, gardé (valeur originale) ou abandonné
        value: Valeur retenue ("" si abandon)
        edited: True si la valeur a été saisie/éditée par l'utilisateur
    """

    outcome: Outcome
    value: str = ""
    edited: bool = False

    @property
    def aborted(self) -> bool:
        return self.outcome is Outcome.ABORTED

    @classmethod
    def accept(cls, value: str, edited: bool = False) -> "Decision":
        return cls(Outcome.ACCEPTED, value, edited)

    @classmethod
    def keep(cls, original: str) -> "Decision":
        return cls(Outcome.KEPT, original)

    @classmethod
    def abort(cls) -> "Decision":
        return cls(Outcome.ABORTED)


def capitalize(text: str) -> str:
    """
    Met en majuscule la première lettre de chaque mot.

    Contrairement à str.title(), le reste du mot n'est pas modifié.

    Example:
        >>> capitalize("hello world")
        'Hello World'
        >>> capitalize("ship-to address (EU)")
        'Ship-to Address (EU)'
    """
    return " ".join(word[:1].upper() + word[1:] for word in text.split(" "))


def confirm(candidate: str, original: str, prompt: PromptProvider) -> Decision:
    """
    Fait confirmer, transformer ou rejeter une valeur candidate.

    Args:
        candidate: Valeur proposée (existante ou issue de la traduction automatique)
        original: Texte de la langue de base
        prompt: Fournisseur d'interaction

    Returns:
        La décision finale (jamais une transformation non confirmée)
    """
    edited = False
    while True:
        choice = prompt.choose(candidate, original)

        if choice is Choice.ACCEPT:
            return Decision.accept(candidate, edited)

        if choice is Choice.KEEP:
            return Decision.keep(original)

        if choice is Choice.CAPITALIZE:
            candidate = capitalize(candidate)
            continue

        if choice is Choice.EDIT:
            value = prompt.read_text("Nouvelle valeur", default=candidate)
            if value is None:
                return Decision.abort()
            if value and value != candidate:
                candidate = value
                edited = True
            continue

        if choice is Choice.ABORT:
            logger.info(f"Abandon demandé sur '{original}'")
            return Decision.abort()


def manual_entry(original: str, prompt: PromptProvider) -> Decision:
    """
    Saisie manuelle sans valeur candidate.

    Boucle jusqu'à obtenir une valeur non vide confirmée par oui/non.
    Ni capitalisation, ni édition, ni conservation de l'original : il n'y
    a aucune valeur préalable à transformer.
    """
    prompt.notify(f"Traduction requise pour : {original}")
    while True:
        value = prompt.read_text("Traduction")
        if value is None:
            return Decision.abort()
        if not value:
            continue

        answer = prompt.ask_yes_no(f"Valider '{value}' ?")
        if answer is None:
            return Decision.abort()
        if answer:
            return Decision.accept(value, edited=True)
