from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Optional, Union

from tqdm import tqdm

from .captions import LineSet
from .language import LanguageSetup
from .logger import get_logger
from .memory import TranslationMemory
from .objects import LanguageExporter, LanguageImporter
from .resolution import (
    Aborted,
    MtProvider,
    PromptProvider,
    ResolutionEngine,
    ResolutionResult,
    ResolutionSource,
)

logger = get_logger(__name__)


@dataclass
class BatchReport:
    """
    Bilan du traitement d'un fichier.

    Attributes:
        file: Fichier traité
        results: Valeurs retenues, dans l'ordre des lignes manquantes
        skipped: Lignes ignorées (texte de base vide)
        aborted: Traitement interrompu par l'utilisateur (fichier non réimporté)
    """

    file: str
    results: list[ResolutionResult] = field(default_factory=list)
    skipped: int = 0
    aborted: bool = False

    @property
    def counts(self) -> Counter:
        return Counter(result.source for result in self.results)

    def count(self, source: ResolutionSource) -> int:
        return self.counts[source]


class CaptionWorker:
    """
    Traite les traductions manquantes d'une série de fichiers.

    La mémoire de traduction est chargée une fois pour l'exécution et
    sauvegardée à la fin, y compris après un abandon ou une erreur fatale
    (les entrées qu'elle contient ont toutes été validées).
    """

    def __init__(
        self,
        setup: LanguageSetup,
        exporter: LanguageExporter,
        importer: LanguageImporter,
        prompt: PromptProvider,
        mt_provider: Optional[MtProvider] = None,
        strict: bool = False,
        show_progress: bool = True,
    ):
        self.setup = setup
        self.exporter = exporter
        self.importer = importer
        self.prompt = prompt
        self.mt_provider = mt_provider
        self.strict = strict
        self.show_progress = show_progress
        self.memory: Optional[TranslationMemory] = None

    def run(self, files: Iterable[Union[str, Path]]) -> list[BatchReport]:
        """
        Traite les fichiers un par un ; s'arrête au premier abandon.

        Raises:
            CorruptStoreError: Si la mémoire de traduction est illisible
            CaptionTranslatorError: Erreur fatale sur un fichier (propagée
                                    après sauvegarde de la mémoire)
        """
        self.memory = TranslationMemory.load(self.setup.dictionary_path)
        engine = ResolutionEngine(self.memory, self.prompt, self.setup, self.mt_provider)

        reports: list[BatchReport] = []
        try:
            for file in files:
                report = self.translate_file(engine, file)
                reports.append(report)
                if report.aborted:
                    logger.warning(f"⛔ Exécution interrompue par l'utilisateur sur {file}")
                    break
        finally:
            self.memory.save()

        return reports

    def translate_file(self, engine: ResolutionEngine, file: Union[str, Path]) -> BatchReport:
        """
        Résout toutes les lignes manquantes d'un fichier puis le réimporte.

        Le fichier n'est pas réimporté si l'utilisateur abandonne.
        """
        setup = self.setup
        base_lines = LineSet(
            self.exporter.export(file, setup.base_language_id), strict=self.strict
        )
        work_lines = LineSet(
            self.exporter.export(file, setup.work_language_id), strict=self.strict
        )
        missing = self.exporter.export_missing(file, setup.work_language_id)

        report = BatchReport(file=str(file))
        logger.info(
            f"📄 {file} : {len(missing)} traductions manquantes "
            f"({setup.base_language_name} -> {setup.work_language_name})"
        )
        if not missing:
            return report

        with tqdm(
            total=len(missing),
            desc=Path(file).name,
            unit="libellé",
            ncols=100,
            disable=not self.show_progress,
            bar_format="{l_bar}{bar}| {n_fmt}/{total_fmt} [{elapsed}]",
        ) as pbar:
            for record in missing:
                resolution = engine.resolve_record(record, base_lines, work_lines)
                pbar.update(1)

                if resolution is None:
                    report.skipped += 1
                    continue
                if isinstance(resolution, Aborted):
                    report.aborted = True
                    break
                report.results.append(resolution)

            self._print_summary(pbar, report)

        if report.aborted:
            return report

        self.importer.import_lines(file, work_lines.lines, setup.work_language_id)
        return report

    def _print_summary(self, pbar, report: BatchReport):
        """Affiche le résumé du fichier."""
        counts = report.counts
        pbar.write(f"\n{'='*60}")
        pbar.write(f"📊 {report.file}")
        pbar.write(f"   📖 Mémoire: {counts[ResolutionSource.MEMORY]}")
        pbar.write(f"   💡 Suggestions: {counts[ResolutionSource.SUGGESTED]}")
        pbar.write(f"   🤖 Traduction automatique: {counts[ResolutionSource.MT_PROVIDER]}")
        pbar.write(f"   ✍️  Saisie manuelle: {counts[ResolutionSource.MANUAL]}")
        pbar.write(f"   🔁 Originaux conservés: {counts[ResolutionSource.KEPT]}")
        if report.skipped > 0:
            pbar.write(f"   ⏭️  Lignes ignorées: {report.skipped}")
        if report.aborted:
            pbar.write("   ⛔ Interrompu, fichier non réimporté")
        pbar.write(f"{'='*60}\n")
