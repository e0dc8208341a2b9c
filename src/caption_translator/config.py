import logging


class ConfigBase:
    # Attribut de classe pour le singleton
    _instance = None
    _locked: bool = False

    def __new__(cls, *args, **kwargs):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def lock(self):
        object.__setattr__(self, "_locked", True)

    def __setattr__(self, name, value):
        if getattr(self, "_locked", False):
            raise AttributeError("Configuration is locked")
        super().__setattr__(name, value)


class TemplateNames(ConfigBase):
    Translate_Caption_Template: str = "translate_caption.jinja"


class Logger_Level(ConfigBase):
    level: int = logging.INFO
    # Console limitée aux erreurs pour ne pas polluer les invites interactives
    console_level: int = logging.ERROR
    file_level: int = logging.DEBUG


class Defaults(ConfigBase):
    dictionary_dir: str = "dictionaries"
    mt_model: str = "deepseek-chat"
    mt_url: str = "https://api.deepseek.com"
    mt_max_tokens: int = 200
    mt_temperature: float = 0.2
    # Tentatives faites par LLM.query, en plus des retries du client openai
    mt_max_retries: int = 1


def lock_config():
    """Verrouille la configuration pour empêcher les modifications ultérieures."""
    Logger_Level().lock()
    TemplateNames().lock()
    Defaults().lock()
