"""
Mémoire de traduction persistante pour une paire de langues.

La mémoire associe un texte de la langue de base à sa traduction validée.
Elle est chargée une fois au début de l'exécution, complétée en mémoire
(jamais d'écrasement d'une entrée existante) puis sauvegardée une fois à
la fin, seulement si le nombre d'entrées a changé.

Format de stockage:
    Tableau JSON de lignes à deux colonnes, trié par clé, UTF-8 :
    [
      {"Key": "Customer", "Value": "Kunde"},
      {"Key": "Invoice", "Value": "Rechnung"}
    ]
"""

import json
from pathlib import Path
from typing import Iterator, Optional, Union

from .exceptions import CorruptStoreError
from .logger import get_logger

logger = get_logger(__name__)

KEY_COLUMN = "Key"
VALUE_COLUMN = "Value"


class TranslationMemory:
    """
    Mémoire de traduction {texte de base: texte traduit}.

    Attributes:
        path: Fichier de persistance (None pour une mémoire purement en RAM)
        loaded_count: Nombre d'entrées au chargement
    """

    def __init__(
        self,
        entries: Optional[dict[str, str]] = None,
        path: Optional[Path] = None,
    ) -> None:
        self._entries: dict[str, str] = dict(entries or {})
        self.path = path
        self.loaded_count = len(self._entries)

    # -----------------------------------
    # 🔹 Chargement / sauvegarde
    # -----------------------------------
    @classmethod
    def load(cls, path: Union[str, Path]) -> "TranslationMemory":
        """
        Charge la mémoire depuis le disque.

        Un fichier absent n'est pas une erreur : la mémoire est alors vide.

        Raises:
            CorruptStoreError: Si le document n'est pas un tableau de lignes
                               {"Key", "Value"} valides
        """
        path = Path(path)
        if not path.exists():
            logger.info(f"Mémoire absente, création d'une mémoire vide : {path}")
            return cls(path=path)

        try:
            with open(path, "r", encoding="utf-8") as f:
                rows = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise CorruptStoreError(path, f"document illisible ({e})") from e

        if not isinstance(rows, list):
            raise CorruptStoreError(path, "un tableau de lignes est attendu")

        entries: dict[str, str] = {}
        for row_index, row in enumerate(rows):
            if not isinstance(row, dict):
                raise CorruptStoreError(path, "ligne invalide", row=row_index)
            key = row.get(KEY_COLUMN)
            value = row.get(VALUE_COLUMN)
            if not isinstance(key, str) or not key:
                raise CorruptStoreError(path, f"colonne '{KEY_COLUMN}' manquante", row=row_index)
            if not isinstance(value, str) or not value:
                raise CorruptStoreError(
                    path, f"colonne '{VALUE_COLUMN}' manquante", row=row_index
                )
            # Première occurrence conservée en cas de doublon dans le fichier
            entries.setdefault(key, value)

        logger.info(f"📖 Mémoire chargée : {len(entries)} entrées depuis {path}")
        return cls(entries, path=path)

    def save(self, path: Optional[Union[str, Path]] = None) -> bool:
        """
        Sauvegarde toutes les entrées triées par clé.

        Ne fait rien si le nombre d'entrées n'a pas changé depuis le
        chargement (le fichier existant n'est ni réécrit ni reformaté).

        Returns:
            True si le fichier a été écrit, False sinon
        """
        target = Path(path) if path is not None else self.path
        if target is None:
            raise ValueError("Aucun chemin de sauvegarde pour la mémoire de traduction")

        if not self.is_dirty:
            logger.debug(f"Mémoire inchangée ({self.loaded_count} entrées), pas d'écriture")
            return False

        rows = [
            {KEY_COLUMN: key, VALUE_COLUMN: value}
            for key, value in sorted(self._entries.items())
        ]
        target.parent.mkdir(parents=True, exist_ok=True)
        with open(target, "w", encoding="utf-8") as f:
            json.dump(rows, f, ensure_ascii=False, indent=2)
            f.write("\n")

        logger.info(
            f"💾 Mémoire sauvegardée : {len(rows)} entrées "
            f"(+{self.current_count - self.loaded_count}) dans {target}"
        )
        self.loaded_count = self.current_count
        return True

    # -----------------------------------
    # 🔹 Accès
    # -----------------------------------
    @property
    def current_count(self) -> int:
        return len(self._entries)

    @property
    def is_dirty(self) -> bool:
        return self.current_count != self.loaded_count

    def lookup(self, base_string: str) -> Optional[str]:
        """Recherche exacte (sensible à la casse) d'un texte de base."""
        return self._entries.get(base_string)

    def insert(self, base_string: str, work_string: str) -> bool:
        """
        Ajoute une traduction si le texte de base n'est pas encore connu.

        La première traduction enregistrée l'emporte ; les valeurs vides
        ne sont jamais stockées.

        Returns:
            True si l'entrée a été ajoutée
        """
        if not base_string or not work_string:
            return False
        if base_string in self._entries:
            return False
        self._entries[base_string] = work_string
        logger.debug(f"Mémoire : '{base_string}' -> '{work_string}'")
        return True

    def __contains__(self, base_string: object) -> bool:
        return base_string in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._entries))

    def items(self) -> list[tuple[str, str]]:
        """Entrées triées par clé."""
        return sorted(self._entries.items())
