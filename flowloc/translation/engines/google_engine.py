"""Google Translate engine (Cloud Translation v2 with a key, deep-translator without)."""

import html
import logging
from typing import List, Optional

import requests
from deep_translator import GoogleTranslator

from ..base import TranslationEngine
from ..languages import convert_language_code

logger = logging.getLogger(__name__)


class GoogleEngine(TranslationEngine):
    """
    Google Translate.

    With an API key the whole batch goes to Cloud Translation v2 in one
    request. Without a key, and only when explicitly enabled, the keyless
    endpoint used by deep-translator is called instead.
    """

    name = "google"
    batch_size = 100
    API_URL = "https://translation.googleapis.com/language/translate/v2"

    def __init__(
        self,
        api_key: Optional[str] = None,
        enabled: bool = False,
        batch_size: Optional[int] = None,
        timeout: float = 20
    ):
        super().__init__(api_key, batch_size)
        self.enabled = enabled
        self.timeout = timeout

    def is_available(self) -> bool:
        return bool(self.api_key) or self.enabled

    def translate_sync(self, texts: List[str], target_lang: str, source_lang: str = "en") -> List[str]:
        if not texts:
            return []
        target = convert_language_code(target_lang, "google")
        source = convert_language_code(source_lang, "google")
        logger.debug(f"Google: translating {len(texts)} texts {source} -> {target}")

        if self.api_key:
            return self._translate_cloud(texts, target, source)
        return self._translate_free(texts, target, source)

    def _translate_cloud(self, texts: List[str], target: str, source: str) -> List[str]:
        payload = {"q": texts, "target": target, "source": source, "format": "text"}
        resp = requests.post(
            self.API_URL,
            params={"key": self.api_key},
            json=payload,
            timeout=self.timeout
        )
        if resp.status_code != 200:
            raise RuntimeError(f"Google Translate HTTP {resp.status_code}: {resp.text[:200]}")
        translations = resp.json().get("data", {}).get("translations", [])
        return [html.unescape(item.get("translatedText", "")) for item in translations]

    def _translate_free(self, texts: List[str], target: str, source: str) -> List[str]:
        translator = GoogleTranslator(source=source, target=target)
        return [translation or "" for translation in translator.translate_batch(texts)]
