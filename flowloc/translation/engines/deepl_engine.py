"""DeepL translation engine."""

import html
import logging
from typing import List, Optional

import requests

from ..base import TranslationEngine
from ..languages import convert_language_code

logger = logging.getLogger(__name__)


class DeeplEngine(TranslationEngine):
    """DeepL REST API (v2). Free-tier keys end in ``:fx``."""

    name = "deepl"
    batch_size = 50
    FREE_API_URL = "https://api-free.deepl.com/v2/translate"
    PRO_API_URL = "https://api.deepl.com/v2/translate"

    def __init__(
        self,
        api_key: Optional[str] = None,
        api_url: Optional[str] = None,
        batch_size: Optional[int] = None,
        timeout: float = 20
    ):
        super().__init__(api_key, batch_size)
        self.timeout = timeout
        if api_url:
            self.api_url = api_url
        elif api_key and not api_key.endswith(":fx"):
            self.api_url = self.PRO_API_URL
        else:
            self.api_url = self.FREE_API_URL

    def is_available(self) -> bool:
        return bool(self.api_key)

    def translate_sync(self, texts: List[str], target_lang: str, source_lang: str = "en") -> List[str]:
        if not texts:
            return []
        if not self.api_key:
            raise ValueError("DeepL API key not configured. Set DEEPL_API_KEY.")

        data = {
            "text": texts,
            "source_lang": convert_language_code(source_lang, "deepl").upper(),
            "target_lang": convert_language_code(target_lang, "deepl").upper(),
        }
        headers = {"Authorization": f"DeepL-Auth-Key {self.api_key}"}
        logger.debug(f"DeepL: translating {len(texts)} texts via {self.api_url}")

        resp = requests.post(self.api_url, data=data, headers=headers, timeout=self.timeout)
        if resp.status_code != 200:
            raise RuntimeError(f"DeepL HTTP {resp.status_code}: {resp.text[:200]}")
        translations = resp.json().get("translations", [])
        return [html.unescape(item.get("text", "")) for item in translations]
