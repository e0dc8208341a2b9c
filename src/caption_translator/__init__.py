"""
Complétion assistée des traductions de libellés d'objets.

Caption Translator aide un traducteur à compléter les libellés manquants
d'une langue dans des fichiers de traduction exportés. Chaque valeur est
confirmée par l'utilisateur avant d'être enregistrée.

Le processus pour chaque libellé manquant :
1. Mémoire de traduction : valeur déjà validée, reprise sans question
2. Valeur existante dans le fichier : proposée pour confirmation
3. Traduction automatique (optionnelle) : proposée pour confirmation
4. Saisie manuelle

Organisation du package :
- captions/ : Motifs de lignes et lecture/écriture des valeurs
- memory.py : Mémoire de traduction persistante (JSON)
- resolution/ : Confirmation interactive et chaîne de repli
- llm.py : Traduction automatique via un LLM compatible OpenAI
- objects.py : Export/import des fichiers texte de traduction
- worker.py : Traitement d'une série de fichiers

Usage minimal :
    >>> from caption_translator import (
    ...     CaptionWorker, ConsolePrompt, LanguageSetup,
    ...     TextFileExporter, TextFileImporter,
    ... )
    >>> setup = LanguageSetup.create(1033, 1031, "dictionaries")
    >>> worker = CaptionWorker(
    ...     setup,
    ...     exporter=TextFileExporter(1033),
    ...     importer=TextFileImporter(1033),
    ...     prompt=ConsolePrompt(),
    ... )
    >>> worker.run(["objects.txt"])

Ligne de commande :
    python -m caption_translator objects.txt --base 1033 --work 1031 --mt

Version: 0.1.0
"""

from .captions import LineSet, extract_pattern, read_value, write_value
from .exceptions import (
    CaptionTranslatorError,
    CorruptStoreError,
    DuplicatePatternError,
    MalformedLineError,
    MtProviderError,
    PatternNotFoundError,
)
from .language import Language, LanguageSetup, language_marker
from .llm import LLM
from .memory import TranslationMemory
from .objects import TextFileExporter, TextFileImporter
from .resolution import (
    Aborted,
    ConsolePrompt,
    ResolutionEngine,
    ResolutionResult,
    ResolutionSource,
    capitalize,
    confirm,
    manual_entry,
)
from .worker import BatchReport, CaptionWorker

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Lignes
    "LineSet",
    "extract_pattern",
    "read_value",
    "write_value",
    # Erreurs
    "CaptionTranslatorError",
    "CorruptStoreError",
    "DuplicatePatternError",
    "MalformedLineError",
    "MtProviderError",
    "PatternNotFoundError",
    # Langues
    "Language",
    "LanguageSetup",
    "language_marker",
    # Mémoire et résolution
    "TranslationMemory",
    "Aborted",
    "ConsolePrompt",
    "ResolutionEngine",
    "ResolutionResult",
    "ResolutionSource",
    "capitalize",
    "confirm",
    "manual_entry",
    # Traduction automatique et traitement
    "LLM",
    "TextFileExporter",
    "TextFileImporter",
    "BatchReport",
    "CaptionWorker",
]
