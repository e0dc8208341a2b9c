"""
Langues supportées et configuration d'une exécution.

Les fichiers exportés identifient une langue par son identifiant Windows
(LCID, ex: 1033 pour l'anglais US). Chaque ligne de caption porte un
marqueur "A<LCID>" dans son segment de clé.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Union


class Language(Enum):
    ENGLISH = (1033, "English", "en")
    ENGLISH_UK = (2057, "English (United Kingdom)", "en")
    GERMAN = (1031, "Deutsch", "de")
    GERMAN_AUSTRIA = (3079, "Deutsch (Österreich)", "de")
    GERMAN_SWISS = (2055, "Deutsch (Schweiz)", "de")
    FRENCH = (1036, "Français", "fr")
    FRENCH_BELGIUM = (2060, "Français (Belgique)", "fr")
    FRENCH_SWISS = (4108, "Français (Suisse)", "fr")
    ITALIAN = (1040, "Italiano", "it")
    SPANISH = (3082, "Español", "es")
    DUTCH = (1043, "Nederlands", "nl")
    DUTCH_BELGIUM = (2067, "Nederlands (België)", "nl")
    DANISH = (1030, "Dansk", "da")
    SWEDISH = (1053, "Svenska", "sv")
    NORWEGIAN = (1044, "Norsk", "nb")
    FINNISH = (1035, "Suomi", "fi")
    POLISH = (1045, "Polski", "pl")
    CZECH = (1029, "Čeština", "cs")
    HUNGARIAN = (1038, "Magyar", "hu")
    RUSSIAN = (1049, "Русский", "ru")
    PORTUGUESE = (2070, "Português", "pt")

    @property
    def lcid(self) -> int:
        return self.value[0]

    @property
    def display_name(self) -> str:
        return self.value[1]

    @property
    def iso_code(self) -> str:
        return self.value[2]

    @classmethod
    def from_id(cls, language_id: int) -> "Language":
        """
        Retrouve une langue par son identifiant Windows.

        Raises:
            ValueError: Si l'identifiant n'est pas supporté
        """
        for language in cls:
            if language.lcid == language_id:
                return language
        supported = ", ".join(str(lang.lcid) for lang in cls)
        raise ValueError(
            f"Langue {language_id} non supportée (identifiants connus : {supported})"
        )


def language_marker(language_id: int) -> str:
    """Marqueur de langue présent dans la clé d'une ligne (ex: 1031 -> "A1031")."""
    return f"A{language_id}"


@dataclass(frozen=True)
class LanguageSetup:
    """
    Configuration immuable d'une exécution (une paire de langues).

    La paire détermine quel fichier de mémoire de traduction est actif.

    Attributes:
        base_language_id: LCID de la langue source
        work_language_id: LCID de la langue à compléter
        base_language_name: Nom affichable de la langue source
        work_language_name: Nom affichable de la langue à compléter
        work_language_iso_code: Code ISO transmis au service de traduction
        dictionary_path: Fichier de mémoire de traduction de la paire
        use_mt_provider: Consulter la traduction automatique avant la saisie manuelle
    """

    base_language_id: int
    work_language_id: int
    base_language_name: str
    work_language_name: str
    work_language_iso_code: str
    dictionary_path: Path
    use_mt_provider: bool = False

    def __post_init__(self):
        if self.base_language_id == self.work_language_id:
            raise ValueError(
                "La langue de travail doit être différente de la langue de base "
                f"({self.base_language_id})"
            )

    @property
    def base_marker(self) -> str:
        return language_marker(self.base_language_id)

    @property
    def work_marker(self) -> str:
        return language_marker(self.work_language_id)

    @classmethod
    def create(
        cls,
        base_language_id: int,
        work_language_id: int,
        dictionary_dir: Union[str, Path],
        use_mt_provider: bool = False,
    ) -> "LanguageSetup":
        """
        Construit la configuration à partir des identifiants de langue.

        Le fichier de mémoire est nommé d'après la paire :
        <dictionary_dir>/dictionary_<base>_<work>.json

        Example:
            >>> setup = LanguageSetup.create(1033, 1031, "dictionaries")
            >>> setup.work_language_iso_code
            'de'
        """
        base = Language.from_id(base_language_id)
        work = Language.from_id(work_language_id)
        path = Path(dictionary_dir) / f"dictionary_{base.lcid}_{work.lcid}.json"
        return cls(
            base_language_id=base.lcid,
            work_language_id=work.lcid,
            base_language_name=base.display_name,
            work_language_name=work.display_name,
            work_language_iso_code=work.iso_code,
            dictionary_path=path,
            use_mt_provider=use_mt_provider,
        )
