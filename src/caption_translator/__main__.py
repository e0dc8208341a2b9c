"""
Point d'entrée principal pour la complétion des traductions de libellés.

Une exécution traite un ou plusieurs fichiers texte de traduction pour une
paire de langues :
1. Charge la mémoire de traduction de la paire
2. Résout chaque libellé manquant (mémoire, suggestion, traduction
   automatique, saisie) avec confirmation de l'utilisateur
3. Réimporte les libellés dans chaque fichier
4. Sauvegarde la mémoire

Les valeurs par défaut peuvent être définies dans un fichier .env :
- DICTIONARY_DIR : Répertoire des mémoires de traduction
- USE_MT : "1" pour activer la traduction automatique
- API_KEY, MT_URL, MT_MODEL : Service de traduction automatique
"""

import argparse
import os
import sys
from typing import Optional, Sequence

from dotenv import load_dotenv

from .config import Defaults, lock_config
from .exceptions import CaptionTranslatorError
from .language import LanguageSetup
from .llm import LLM
from .logger import get_logger
from .objects import TextFileExporter, TextFileImporter
from .resolution import ConsolePrompt
from .worker import CaptionWorker

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="caption-translator",
        description="Complète les libellés manquants d'une langue avec confirmation.",
    )
    parser.add_argument("files", nargs="+", help="Fichiers texte de traduction exportés")
    parser.add_argument(
        "--base", type=int, default=1033, help="LCID de la langue de base (défaut: 1033)"
    )
    parser.add_argument(
        "--work", type=int, required=True, help="LCID de la langue à compléter (ex: 1031)"
    )
    parser.add_argument(
        "--dictionary-dir",
        default=os.getenv("DICTIONARY_DIR", Defaults.dictionary_dir),
        help="Répertoire des mémoires de traduction",
    )
    parser.add_argument(
        "--mt",
        action=argparse.BooleanOptionalAction,
        default=os.getenv("USE_MT", "0") == "1",
        help="Proposer une traduction automatique avant la saisie manuelle",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Échouer si plusieurs lignes partagent un même motif",
    )
    parser.add_argument("--encoding", default="utf-8", help="Encodage des fichiers")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Point d'entrée principal du programme.

    Returns:
        Code de sortie (0 succès, 1 erreur fatale)
    """
    load_dotenv()
    lock_config()
    args = build_parser().parse_args(argv)

    try:
        setup = LanguageSetup.create(
            args.base, args.work, args.dictionary_dir, use_mt_provider=args.mt
        )
    except ValueError as e:
        print(f"\n❌ {e}\n", file=sys.stderr)
        return 1

    mt_provider = None
    if setup.use_mt_provider:
        mt_provider = LLM(
            model_name=os.getenv("MT_MODEL", Defaults.mt_model),
            url=os.getenv("MT_URL", Defaults.mt_url),
        )

    print(f"\n📚 Fichiers : {len(args.files)}")
    print(f"🎯 Langues : {setup.base_language_name} -> {setup.work_language_name}")
    print(f"💾 Mémoire : {setup.dictionary_path}")
    print(f"🤖 Traduction automatique : {'oui' if mt_provider else 'non'}\n")

    worker = CaptionWorker(
        setup,
        exporter=TextFileExporter(setup.base_language_id, encoding=args.encoding),
        importer=TextFileImporter(setup.base_language_id, encoding=args.encoding),
        prompt=ConsolePrompt(),
        mt_provider=mt_provider,
        strict=args.strict,
    )

    try:
        reports = worker.run(args.files)
    except (CaptionTranslatorError, OSError) as e:
        logger.error(f"Erreur fatale : {e}", exc_info=True)
        print(f"\n❌ {e}\n", file=sys.stderr)
        return 1

    if any(report.aborted for report in reports):
        print("\n⛔ Exécution interrompue, mémoire de traduction sauvegardée.\n")
    else:
        print("\n✅ Traduction terminée\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
