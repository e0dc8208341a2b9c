"""
Interface d'interaction avec le traducteur humain.

Les boucles de confirmation ne lisent jamais la console directement : elles
passent par un PromptProvider injecté, ce qui permet de les rejouer avec un
fournisseur scripté dans les tests.
"""

from enum import Enum
from typing import Callable, Optional, Protocol


class Choice(Enum):
    """Choix proposés pour une valeur candidate (valeur = touche clavier)."""

    ACCEPT = "a"
    KEEP = "k"
    EDIT = "e"
    CAPITALIZE = "c"
    ABORT = "q"


class PromptProvider(Protocol):
    def choose(self, candidate: str, original: str) -> Choice:
        """Demande quoi faire de la valeur candidate."""
        ...

    def read_text(self, message: str, default: str = "") -> Optional[str]:
        """Lit un texte saisi ; None signifie que l'utilisateur abandonne."""
        ...

    def ask_yes_no(self, message: str) -> Optional[bool]:
        """Question oui/non ; None signifie que l'utilisateur abandonne."""
        ...

    def notify(self, message: str) -> None:
        """Affiche une information sans attendre de réponse."""
        ...


class ConsolePrompt:
    """
    PromptProvider lisant l'entrée standard.

    EOF (Ctrl-D) et Ctrl-C sont traités comme un abandon.
    """

    YES = ("y", "yes", "o", "oui", "j", "ja")
    NO = ("n", "no", "non", "nein")

    def __init__(
        self,
        input_func: Optional[Callable[[str], str]] = None,
        output_func: Optional[Callable[[str], None]] = None,
    ) -> None:
        self._input = input_func or input
        self._output = output_func or print

    def _read(self, message: str) -> Optional[str]:
        try:
            return self._input(message)
        except (EOFError, KeyboardInterrupt):
            self._output("")
            return None

    def choose(self, candidate: str, original: str) -> Choice:
        self._output(f"\n  Original  : {original}")
        self._output(f"  Proposé   : {candidate}")
        keys = {choice.value: choice for choice in Choice}
        while True:
            answer = self._read(
                "  [a]ccepter, [k]eep original, [e]diter, [c]apitaliser, [q]uitter > "
            )
            if answer is None:
                return Choice.ABORT
            choice = keys.get(answer.strip().lower()[:1])
            if choice is not None:
                return choice
            self._output("  Choix invalide.")

    def read_text(self, message: str, default: str = "") -> Optional[str]:
        suffix = f" [{default}]" if default else ""
        answer = self._read(f"  {message}{suffix} > ")
        if answer is None:
            return None
        return answer.strip() or default

    def ask_yes_no(self, message: str) -> Optional[bool]:
        while True:
            answer = self._read(f"  {message} [y/n] > ")
            if answer is None:
                return None
            answer = answer.strip().lower()
            if answer in self.YES:
                return True
            if answer in self.NO:
                return False

    def notify(self, message: str) -> None:
        self._output(f"  {message}")
