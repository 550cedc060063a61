"""Deterministic mock engine used when no real engine is configured."""

import asyncio
import logging
import re
import time
from typing import List, Optional

from ..base import TranslationEngine

logger = logging.getLogger(__name__)


class MockEngine(TranslationEngine):
    """
    Offline stand-in for a real engine.

    Japanese gets a handful of fixed phrase substitutions so demo workflows
    look translated; every other target gets a bracketed language tag
    appended to the original text.
    """

    name = "mock"
    batch_size = 100

    # Applied in order, so "Sample Workflow" is already partly rewritten by "workflow".
    JA_PHRASES = [
        (re.compile(r"Hello World", re.IGNORECASE), "こんにちは世界"),
        (re.compile(r"test", re.IGNORECASE), "テスト"),
        (re.compile(r"workflow", re.IGNORECASE), "ワークフロー"),
        (re.compile(r"Start", re.IGNORECASE), "開始"),
        (re.compile(r"Edit Fields", re.IGNORECASE), "フィールド編集"),
        (re.compile(r"End", re.IGNORECASE), "終了"),
        (re.compile(r"Sample Workflow", re.IGNORECASE), "サンプルワークフロー"),
    ]

    LANGUAGE_NAMES = {
        "ja": "日本語",
        "zh": "中国語",
        "ko": "韓国語",
        "es": "スペイン語",
        "fr": "フランス語",
        "de": "ドイツ語",
    }

    def __init__(self, delay: float = 0.0, batch_size: Optional[int] = None):
        super().__init__(None, batch_size)
        self.delay = delay

    def is_available(self) -> bool:
        return True

    def _translate_one(self, text: str, target_lang: str) -> str:
        if target_lang == "ja":
            translated = text
            for pattern, replacement in self.JA_PHRASES:
                translated = pattern.sub(replacement, translated)
            return translated
        language_name = self.LANGUAGE_NAMES.get(target_lang, target_lang)
        return f"{text} [{language_name}翻訳]"

    def translate_sync(self, texts: List[str], target_lang: str, source_lang: str = "en") -> List[str]:
        logger.debug(f"Mock: translating {len(texts)} texts to {target_lang}")
        if self.delay:
            time.sleep(self.delay)
        return [self._translate_one(text, target_lang) for text in texts]

    async def translate(self, texts: List[str], target_lang: str, source_lang: str = "en") -> List[str]:
        if self.delay:
            await asyncio.sleep(self.delay)
        return [self._translate_one(text, target_lang) for text in texts]
