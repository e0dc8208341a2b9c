"""
Module de configuration du logging pour caption-translator.

Ce module fournit une fonction centralisée pour configurer le système de logging
avec sortie console et fichier. Tous les modules de l'application utilisent
get_logger(__name__) pour obtenir un logger configuré de manière cohérente.

Fonctionnalités :
- Regroupement des logs par session d'exécution dans logs/run_YYYYMMDD_HHMMSS/
- Création différée des fichiers de log (évite fichiers vides)
- Sortie console compatible avec la barre de progression tqdm
"""

import logging
import sys
from pathlib import Path
from datetime import datetime
from typing import Optional

from tqdm import tqdm

from .config import Logger_Level


# ============================================================
# 🔹 Gestionnaire de session de logs
# ============================================================


class LogSession:
    """
    Gestionnaire singleton pour regrouper tous les logs d'une exécution.

    Crée un répertoire unique par session : <base_dir>/run_YYYYMMDD_HHMMSS/
    """

    _instance: Optional["LogSession"] = None
    _session_dir: Optional[Path] = None
    base_dir: Path = Path("logs")

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        # Éviter la ré-initialisation
        if LogSession._session_dir is not None:
            return

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        LogSession._session_dir = LogSession.base_dir / f"run_{timestamp}"
        LogSession._session_dir.mkdir(parents=True, exist_ok=True)

    @classmethod
    def get_session_dir(cls) -> Path:
        """Retourne le répertoire de la session en cours."""
        if cls._session_dir is None:
            cls()
        assert cls._session_dir is not None
        return cls._session_dir

    @classmethod
    def reset(cls, base_dir: Optional[Path] = None):
        """Reset la session (utile pour les tests)."""
        cls._instance = None
        cls._session_dir = None
        if base_dir is not None:
            cls.base_dir = Path(base_dir)


# ============================================================
# 🔹 Handlers de logging
# ============================================================


class TqdmLoggingHandler(logging.Handler):
    """
    Handler de logging compatible avec tqdm.

    Utilise tqdm.write() pour afficher les logs sans perturber
    la barre de progression du traitement par lot.
    """

    def emit(self, record):
        try:
            msg = self.format(record)
            tqdm.write(msg, file=sys.stderr)
        except Exception:
            self.handleError(record)


class LazyFileHandler(logging.Handler):
    """
    Handler qui crée le fichier de log seulement au premier message.

    Évite la création de fichiers vides si le logger n'est jamais utilisé.
    """

    def __init__(
        self,
        filename: Path,
        mode: str = "a",
        encoding: str = "utf-8",
        level: int = logging.NOTSET,
    ):
        super().__init__(level)
        self.filename = filename
        self.mode = mode
        self.encoding = encoding
        self._handler: Optional[logging.FileHandler] = None

    def _ensure_handler(self):
        """Crée le FileHandler sous-jacent si pas encore fait."""
        if self._handler is None:
            self.filename.parent.mkdir(parents=True, exist_ok=True)
            self._handler = logging.FileHandler(
                self.filename,
                mode=self.mode,
                encoding=self.encoding,
            )
            if self.formatter:
                self._handler.setFormatter(self.formatter)

    def emit(self, record):
        """Émet un log, en créant le fichier si nécessaire."""
        try:
            self._ensure_handler()
            if self._handler:
                self._handler.emit(record)
        except Exception:
            self.handleError(record)

    def close(self):
        """Ferme le handler sous-jacent si existant."""
        if self._handler:
            self._handler.close()
        super().close()


# ============================================================
# 🔹 Configuration des loggers
# ============================================================


def setup_logger(
    name: str,
    log_dir: Optional[str] = None,
    level: int = Logger_Level.level,
    console_level: int = Logger_Level.console_level,
    file_level: int = Logger_Level.file_level,
    log_filename: str = "translation.log",
) -> logging.Logger:
    """
    Configure un logger avec sortie console et fichier.

    Args:
        name: Nom du logger (généralement __name__ du module)
        log_dir: Répertoire de session (None = auto via LogSession)
        level: Niveau de logging global du logger
        console_level: Niveau de logging pour la sortie console
        file_level: Niveau de logging pour le fichier
        log_filename: Nom du fichier de log (défaut: "translation.log")

    Returns:
        Logger configuré avec handlers console et fichier

    Note:
        Le répertoire de session n'est résolu qu'au premier message écrit,
        le fichier étant créé par LazyFileHandler.
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Éviter d'ajouter des handlers multiples si déjà configuré
    if logger.handlers:
        return logger

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console_handler = TqdmLoggingHandler()
    console_handler.setLevel(console_level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    file_handler = SessionFileHandler(
        log_filename=log_filename,
        log_dir=Path(log_dir) if log_dir is not None else None,
    )
    file_handler.setLevel(file_level)
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    return logger


class SessionFileHandler(LazyFileHandler):
    """
    LazyFileHandler dont le chemin est résolu dans la session au premier log.

    Les modules créent leur logger à l'import : résoudre le répertoire de
    session à ce moment figerait la session avant que l'appelant (ou les
    tests) n'ait pu la configurer.
    """

    def __init__(self, log_filename: str, log_dir: Optional[Path] = None):
        super().__init__(filename=Path(log_filename), mode="a", encoding="utf-8")
        self.log_filename = log_filename
        self.log_dir = log_dir
        self._session_dir: Optional[Path] = None

    def _ensure_handler(self):
        session_dir = self.log_dir or LogSession.get_session_dir()
        if self._handler is not None and session_dir != self._session_dir:
            # Nouvelle session : rouvrir le fichier dans le bon répertoire
            self._handler.close()
            self._handler = None
        self._session_dir = session_dir
        self.filename = session_dir / self.log_filename
        super()._ensure_handler()


def get_logger(name: str, log_filename: Optional[str] = None) -> logging.Logger:
    """
    Récupère un logger existant ou en crée un nouveau avec la configuration par défaut.

    Args:
        name: Nom du logger (généralement __name__ du module)
        log_filename: Nom optionnel du fichier de log (None = "translation.log")

    Returns:
        Logger configuré

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.info("Traduction démarrée")
    """
    logger = logging.getLogger(name)

    if not logger.handlers:
        filename = log_filename or "translation.log"
        return setup_logger(name, log_filename=filename)

    return logger


def get_session_log_path(filename: str) -> Path:
    """
    Retourne le chemin complet d'un fichier de log dans le répertoire de session.

    Example:
        >>> path = get_session_log_path("mt_0001.log")
        >>> print(path)
        logs/run_20251023_143022/mt_0001.log
    """
    session_dir = LogSession.get_session_dir()
    return session_dir / filename
