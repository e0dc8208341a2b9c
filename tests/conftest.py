"""
Configuration pytest pour les tests caption-translator.

Ce fichier contient les fixtures communes à tous les tests, dont un
fournisseur d'interaction scripté qui rejoue des réponses prédéfinies.
"""

from collections import deque
from typing import Optional, Union

import pytest

from caption_translator.language import LanguageSetup
from caption_translator.logger import LogSession
from caption_translator.resolution import Choice

Answer = Union[Choice, str, bool, None]


class ScriptedPrompt:
    """
    PromptProvider rejouant une liste de réponses.

    Chaque appel consomme la réponse suivante : un Choice pour choose(),
    une chaîne (ou None pour abandonner) pour read_text(), un booléen
    (ou None) pour ask_yes_no(). Un appel non prévu fait échouer le test.
    """

    def __init__(self, *answers: Answer) -> None:
        self.answers = deque(answers)
        self.calls: list[tuple[str, ...]] = []
        self.notifications: list[str] = []

    def _next(self, kind: str, *args: str) -> Answer:
        self.calls.append((kind, *args))
        if not self.answers:
            raise AssertionError(f"Interaction inattendue : {kind}{args}")
        return self.answers.popleft()

    def choose(self, candidate: str, original: str) -> Choice:
        answer = self._next("choose", candidate, original)
        assert isinstance(answer, Choice), f"Choice attendu, reçu {answer!r}"
        return answer

    def read_text(self, message: str, default: str = "") -> Optional[str]:
        answer = self._next("read_text", message)
        assert answer is None or isinstance(answer, str)
        return answer

    def ask_yes_no(self, message: str) -> Optional[bool]:
        answer = self._next("ask_yes_no", message)
        assert answer is None or isinstance(answer, bool)
        return answer

    def notify(self, message: str) -> None:
        self.notifications.append(message)

    @property
    def exhausted(self) -> bool:
        return not self.answers

    @property
    def interaction_count(self) -> int:
        return len(self.calls)


class FakeMtProvider:
    """Service de traduction automatique en mémoire."""

    def __init__(self, translations: Optional[dict[str, str]] = None, error: Optional[Exception] = None):
        self.translations = translations or {}
        self.error = error
        self.calls: list[tuple[str, str]] = []

    def translate(self, text: str, target_iso_code: str) -> str:
        self.calls.append((text, target_iso_code))
        if self.error is not None:
            raise self.error
        return self.translations.get(text, "")


@pytest.fixture(autouse=True)
def reset_log_session(tmp_path):
    """Redirige les logs de session vers un répertoire temporaire."""
    LogSession.reset(base_dir=tmp_path / "logs")
    yield
    LogSession.reset(base_dir=tmp_path / "logs")


@pytest.fixture
def dictionary_dir(tmp_path):
    """Répertoire temporaire pour les mémoires de traduction."""
    path = tmp_path / "dictionaries"
    path.mkdir(exist_ok=True)
    return path


@pytest.fixture
def language_setup(dictionary_dir):
    """Paire anglais -> allemand sans traduction automatique."""
    return LanguageSetup.create(1033, 1031, dictionary_dir)


@pytest.fixture
def mt_language_setup(dictionary_dir):
    """Paire anglais -> allemand avec traduction automatique."""
    return LanguageSetup.create(1033, 1031, dictionary_dir, use_mt_provider=True)
