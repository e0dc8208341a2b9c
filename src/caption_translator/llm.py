import os
import datetime
from pathlib import Path
import sys
import time
from dotenv import load_dotenv
from jinja2 import Environment, FileSystemLoader, select_autoescape
from typing import Optional
from openai import OpenAI, OpenAIError, APITimeoutError, RateLimitError, APIError
from openai.types.chat import ChatCompletionMessageParam

from .config import Defaults, TemplateNames
from .exceptions import MtProviderError
from .logger import get_logger, get_session_log_path

logger = get_logger(__name__)

TEMPLATE_DIR = Path(__file__).parent / "template"


def get_api_key() -> str:
    # Charger les variables d'environnement depuis .env
    load_dotenv()

    api_key = os.getenv("API_KEY")
    if not api_key:
        print("\n❌ ERREUR : La clé API de traduction automatique n'est pas définie.", file=sys.stderr)
        print("\nPour configurer :", file=sys.stderr)
        print("  1. Créez un fichier .env à la racine du projet", file=sys.stderr)
        print("  2. Ajoutez votre clé : API_KEY=sk-votre-cle", file=sys.stderr)
        print("  3. Optionnel : MT_URL et MT_MODEL pour un autre fournisseur\n", file=sys.stderr)
        sys.exit(1)
    return api_key


class LLM:
    """
    Service de traduction automatique basé sur un LLM compatible OpenAI
    (DeepSeek, GPT, etc.) avec :
      - rendu de templates Jinja2,
      - un log par requête dans le répertoire de session,
      - retry optionnel sur timeout et limite de débit (max_retries).

    Par défaut une seule tentative est faite : l'utilisateur attend la
    réponse, seuls les retries du client openai s'appliquent.

    Toute autre erreur est remontée en MtProviderError : l'appelant la
    traite comme « traduction indisponible ».
    """

    def __init__(
        self,
        model_name: str = Defaults.mt_model,
        url: str = Defaults.mt_url,
        api_key: Optional[str] = None,
        prompt_dir: Optional[str] = None,
        temperature: float = Defaults.mt_temperature,
        max_tokens: int = Defaults.mt_max_tokens,
        max_retries: int = Defaults.mt_max_retries,
        retry_delay: float = 1.0,
    ):
        self.model_name = model_name
        self.api_key = api_key or get_api_key()
        self.client = OpenAI(api_key=self.api_key, base_url=url)
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.max_retries = max_retries
        self.retry_delay = retry_delay

        # Config Jinja2
        self.env = Environment(
            loader=FileSystemLoader(prompt_dir or str(TEMPLATE_DIR)),
            autoescape=select_autoescape(["html", "xml"]),
        )

        # Compteur pour nommage unique des logs
        self._log_counter = 0

    # -----------------------------------
    # 🔹 Rendu du template
    # -----------------------------------
    def render_prompt(self, template_name: str, **kwargs) -> str:
        """Rend un template Jinja2 avec les variables données."""
        template = self.env.get_template(template_name)
        return template.render(**kwargs)

    # -----------------------------------
    # 🔹 Gestion du log
    # -----------------------------------
    def _create_log(
        self, prompt: str, content: str, context: Optional[str] = None
    ) -> Path:
        """
        Écrit l'en-tête du log de requête et retourne son chemin.

        Args:
            prompt: Le prompt système envoyé au LLM
            content: Le texte à traduire
            context: Contexte optionnel pour nommer le fichier (ex: "de")
        """
        timestamp = datetime.datetime.now().isoformat().replace(":", "-")

        self._log_counter += 1
        if context:
            filename = f"mt_{context}_{self._log_counter:04d}_{timestamp}.log"
        else:
            filename = f"mt_{self._log_counter:04d}_{timestamp}.log"

        log_path = get_session_log_path(filename)

        header = (
            f"=== MT REQUEST LOG ===\n"
            f"Timestamp : {timestamp}\n"
            f"Model     : {self.model_name}\n"
            f"Context   : {context or '-'}\n"
            f"{'-'*40}\n\n"
            f"--- PROMPT ---\n{prompt}\n\n"
            f"--- CONTENT ---\n{content}\n\n"
            f"--- RESPONSE ---\n"
        )
        with open(log_path, "w", encoding="utf-8") as f:
            f.write(header)
        return log_path

    def _append_response(self, log_path: Path, response: str):
        """Ajoute la réponse à la fin du log existant."""
        with open(log_path, "a", encoding="utf-8") as f:
            f.write(response.strip() + "\n")

    # -----------------------------------
    # 🔹 Requêtes
    # -----------------------------------
    def query(
        self,
        system_prompt: str,
        content: str,
        context: Optional[str] = None,
    ) -> str:
        """
        Envoie une requête au LLM avec retry automatique sur timeout/limite de débit.

        Args:
            system_prompt: Le prompt système définissant le comportement du LLM
            content: Le contenu à traiter
            context: Contexte optionnel pour nommer le fichier de log

        Returns:
            La réponse du LLM ("" si la réponse est vide)

        Raises:
            MtProviderError: Erreur API ou échec après tous les retries
        """
        log_path = self._create_log(system_prompt, content, context)
        last_error: Optional[Exception] = None

        for attempt in range(self.max_retries):
            try:
                messages: list[ChatCompletionMessageParam] = [
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": content},
                ]
                resp = self.client.chat.completions.create(
                    model=self.model_name,
                    messages=messages,
                    temperature=self.temperature,
                    max_tokens=self.max_tokens,
                )
                result = resp.choices[0].message.content
                response_text = result.strip() if result is not None else ""

                logger.info(f"✅ Requête MT réussie ({len(content)} chars)")
                self._append_response(log_path, response_text or "[RÉPONSE VIDE]")
                return response_text

            except APITimeoutError as e:
                last_error = e
                logger.warning(
                    f"⏱️ Timeout API (tentative {attempt + 1}/{self.max_retries}): {e}"
                )
                if attempt < self.max_retries - 1:
                    delay = self.retry_delay * (2**attempt)
                    logger.info(f"⏳ Attente de {delay:.1f}s avant nouvelle tentative...")
                    time.sleep(delay)
                    continue

            except RateLimitError as e:
                last_error = e
                logger.warning(
                    f"🚦 Limite de débit atteinte (tentative {attempt + 1}/{self.max_retries}): {e}"
                )
                if attempt < self.max_retries - 1:
                    delay = self.retry_delay * (3**attempt)
                    logger.info(f"⏳ Attente de {delay:.1f}s avant nouvelle tentative...")
                    time.sleep(delay)
                    continue

            except APIError as e:
                logger.error(f"❌ Erreur API: {e}")
                self._append_response(log_path, f"[ERREUR API: {e}]")
                raise MtProviderError(f"Erreur API: {e}") from e

            except OpenAIError as e:
                logger.error(f"❌ Erreur OpenAI générique: {e}")
                self._append_response(log_path, f"[ERREUR OPENAI: {e}]")
                raise MtProviderError(f"Erreur OpenAI: {e}") from e

        logger.error(f"❌ Échec définitif après {self.max_retries} tentatives")
        self._append_response(log_path, f"[ERREUR: Échec après {self.max_retries} tentatives]")
        raise MtProviderError(
            f"Échec après {self.max_retries} tentatives: {last_error}"
        ) from last_error

    def translate(self, text: str, target_iso_code: str) -> str:
        """
        Traduit un libellé d'interface vers la langue cible.

        Args:
            text: Libellé dans la langue de base
            target_iso_code: Code ISO de la langue cible (ex: "de")

        Returns:
            La traduction, sans guillemets ni espaces superflus
        """
        system_prompt = self.render_prompt(
            TemplateNames.Translate_Caption_Template,
            target_language=target_iso_code,
        )
        translated = self.query(system_prompt, text, context=target_iso_code)
        return translated.strip().strip('"').strip()
