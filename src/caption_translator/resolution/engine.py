"""
Moteur de résolution d'une traduction manquante.

Pour un texte de la langue de base, la valeur dans la langue de travail est
déterminée par une chaîne de repli ordonnée :

1. Mémoire de traduction : valeur déjà validée, utilisée sans question
2. Valeur suggérée : traduction existante (non validée) dans le fichier
3. Traduction automatique : si activée et disponible
4. Saisie manuelle

Les étapes 2 et 3 passent par la machine de confirmation ; toute valeur
retenue est ajoutée à la mémoire puis écrite dans le jeu de lignes de la
langue de travail.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Protocol, Union

from ..captions import LineSet, extract_pattern
from ..exceptions import PatternNotFoundError
from ..language import LanguageSetup
from ..logger import get_logger
from ..memory import TranslationMemory
from .confirmation import Decision, Outcome, confirm, manual_entry
from .prompt import PromptProvider

logger = get_logger(__name__)


class MtProvider(Protocol):
    def translate(self, text: str, target_iso_code: str) -> str:
        """Traduit un texte ; "" ou une exception signifient « indisponible »."""
        ...


class ResolutionSource(Enum):
    MEMORY = "memory"
    SUGGESTED = "suggested"
    MT_PROVIDER = "mt_provider"
    MANUAL = "manual"
    KEPT = "kept"


@dataclass(frozen=True)
class ResolutionResult:
    """Valeur retenue pour un texte de base et l'étape qui l'a fournie."""

    base_string: str
    work_string: str
    source: ResolutionSource
    pattern: Optional[str] = None


@dataclass(frozen=True)
class Aborted:
    """L'utilisateur a interrompu la résolution ; rien n'a été enregistré."""

    base_string: str
    pattern: Optional[str] = None


Resolution = Union[ResolutionResult, Aborted]


class ResolutionEngine:
    """
    Résout les traductions manquantes une par une.

    La mémoire est partagée entre toutes les résolutions d'une exécution,
    accès strictement séquentiel.

    Attributes:
        memory: Mémoire de traduction de la paire de langues
        prompt: Fournisseur d'interaction utilisateur
        setup: Configuration de l'exécution
        mt_provider: Service de traduction automatique (None = désactivé)
    """

    def __init__(
        self,
        memory: TranslationMemory,
        prompt: PromptProvider,
        setup: LanguageSetup,
        mt_provider: Optional[MtProvider] = None,
    ) -> None:
        self.memory = memory
        self.prompt = prompt
        self.setup = setup
        self.mt_provider = mt_provider

    @property
    def mt_enabled(self) -> bool:
        return self.setup.use_mt_provider and self.mt_provider is not None

    def resolve(self, base_string: str, suggested: str = "") -> Resolution:
        """
        Détermine la valeur de travail d'un texte de base.

        Args:
            base_string: Texte de la langue de base (non vide)
            suggested: Valeur déjà présente dans le fichier de travail

        Returns:
            ResolutionResult, ou Aborted si l'utilisateur a interrompu
        """
        known = self.memory.lookup(base_string)
        if known is not None:
            logger.debug(f"Mémoire : '{base_string}' -> '{known}'")
            return ResolutionResult(base_string, known, ResolutionSource.MEMORY)

        if suggested:
            decision = confirm(suggested, base_string, self.prompt)
            return self._commit(base_string, decision, ResolutionSource.SUGGESTED)

        if self.mt_enabled:
            translated = self._machine_translate(self.mt_provider, base_string)
            if translated:
                decision = confirm(translated, base_string, self.prompt)
                return self._commit(base_string, decision, ResolutionSource.MT_PROVIDER)

        decision = manual_entry(base_string, self.prompt)
        return self._commit(base_string, decision, ResolutionSource.MANUAL)

    def resolve_record(
        self, record: str, base_lines: LineSet, work_lines: LineSet
    ) -> Optional[Resolution]:
        """
        Résout une ligne du rapport des traductions manquantes.

        Le motif de la ligne sert à lire le texte de base, la valeur suggérée,
        puis à écrire la valeur retenue dans le jeu de lignes de travail.

        Returns:
            None si le texte de base est vide (rien à traduire, rien d'écrit)

        Raises:
            MalformedLineError: Si la ligne ne porte pas le marqueur de travail
            PatternNotFoundError: Si le motif est absent du jeu de lignes de travail
        """
        pattern = extract_pattern(record, self.setup.work_marker)
        base_string = base_lines.read_value(pattern)
        if not base_string:
            logger.debug(f"Texte de base vide pour '{pattern}', ligne ignorée")
            return None

        if work_lines.find(pattern) is None:
            raise PatternNotFoundError(pattern)

        suggested = work_lines.read_value(pattern)
        resolution = self.resolve(base_string, suggested)
        if isinstance(resolution, Aborted):
            return Aborted(base_string, pattern)

        work_lines.write_value(pattern, resolution.work_string)
        return ResolutionResult(
            resolution.base_string, resolution.work_string, resolution.source, pattern
        )

    def _machine_translate(self, mt_provider: MtProvider, base_string: str) -> str:
        try:
            translated = mt_provider.translate(
                base_string, self.setup.work_language_iso_code
            )
        except Exception as e:
            logger.warning(f"⚠️ Traduction automatique indisponible pour '{base_string}': {e}")
            self.prompt.notify("Traduction automatique indisponible, saisie manuelle.")
            return ""

        translated = (translated or "").strip()
        if not translated:
            logger.warning(f"⚠️ Traduction automatique vide pour '{base_string}'")
            self.prompt.notify("Traduction automatique indisponible, saisie manuelle.")
        return translated

    def _commit(
        self, base_string: str, decision: Decision, source: ResolutionSource
    ) -> Resolution:
        if decision.aborted:
            return Aborted(base_string)

        if decision.outcome is Outcome.KEPT:
            source = ResolutionSource.KEPT
        elif decision.edited:
            source = ResolutionSource.MANUAL

        self.memory.insert(base_string, decision.value)
        logger.info(f"'{base_string}' -> '{decision.value}' ({source.value})")
        return ResolutionResult(base_string, decision.value, source)
