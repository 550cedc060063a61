"""
Base translation engine interface.
All translation engines must inherit from TranslationEngine.
"""

import asyncio
import functools
from abc import ABC, abstractmethod
from typing import List, Dict, Optional


class TranslationEngine(ABC):
    """
    Abstract base class for translation engines.

    An engine turns a list of texts into a list of translations of the same
    length and order. The orchestrator treats every engine (the mock
    included) as interchangeable.
    """

    name = "base"
    # Largest number of texts sent in one upstream request
    batch_size = 100

    def __init__(self, api_key: Optional[str] = None, batch_size: Optional[int] = None):
        self.api_key = api_key
        if batch_size is not None:
            self.batch_size = batch_size

    @abstractmethod
    def translate_sync(self, texts: List[str], target_lang: str, source_lang: str = "en") -> List[str]:
        """
        Translate texts synchronously.

        Args:
            texts: Texts to translate
            target_lang: Target language code
            source_lang: Source language code

        Returns:
            Translations in the same order as ``texts``
        """
        pass

    async def translate(self, texts: List[str], target_lang: str, source_lang: str = "en") -> List[str]:
        """Translate asynchronously; blocking engines run in the default executor."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(
            None, functools.partial(self.translate_sync, texts, target_lang, source_lang)
        )

    def is_available(self) -> bool:
        """Check if engine is available and configured."""
        return self.api_key is not None

    def get_info(self) -> Dict:
        """Get engine information."""
        return {
            "name": self.name,
            "batch_size": self.batch_size,
            "available": self.is_available()
        }
