"""
Translation orchestration.

Sends extracted texts to a translation engine in fixed-size batches,
consults the shared cache first, falls back to the mock engine when no
real engine is configured, and scores every result.
"""

from __future__ import annotations
import asyncio
import logging
from typing import Any, Dict, List, Optional, Sequence

from flowloc.core.exceptions import EngineError
from flowloc.core.models import BatchResult, ExtractedText, TranslatedText, utc_now_iso
from flowloc.scoring.quality import QualityScorer
from flowloc.translation.base import TranslationEngine
from flowloc.translation.engines import GoogleEngine, DeeplEngine, MockEngine, create_engine
from flowloc.translation.languages import get_supported_languages, convert_language_code
from flowloc.utils.cache import TranslationCache, get_shared_cache

logger = logging.getLogger(__name__)


class TranslationOrchestrator:
    """
    Coordinates one or more translation runs against the available engines.

    A run dispatches its batches one at a time, in order. Several runs may
    share an orchestrator (or the process-wide cache) concurrently.
    """

    def __init__(
        self,
        google: Optional[GoogleEngine] = None,
        deepl: Optional[DeeplEngine] = None,
        mock: Optional[MockEngine] = None,
        cache: Optional[TranslationCache] = None,
        scorer: Optional[QualityScorer] = None
    ):
        self.google = google or GoogleEngine()
        self.deepl = deepl or DeeplEngine()
        self.mock = mock or MockEngine()
        self.cache = cache if cache is not None else get_shared_cache()
        self.scorer = scorer or QualityScorer()

    @classmethod
    def from_config(cls, config: Dict[str, Any], cache: Optional[TranslationCache] = None) -> "TranslationOrchestrator":
        """Build an orchestrator from a configuration dictionary."""
        return cls(
            google=create_engine("google", config),
            deepl=create_engine("deepl", config),
            mock=create_engine("mock", config),
            cache=cache
        )

    def resolve_engine(self, engine: str) -> TranslationEngine:
        """
        Pick the engine that will actually serve a request for ``engine``.

        Asking for ``mock`` always gets the mock. DeepL is used only when
        asked for and configured. Otherwise Google serves the request if it
        is configured, and the mock when neither is.
        """
        if engine == "mock":
            return self.mock
        google_ok = self.google.is_available()
        deepl_ok = self.deepl.is_available()
        if not google_ok and not deepl_ok:
            logger.info("No translation API configured. Using mock translation.")
            return self.mock
        if engine == "deepl" and deepl_ok:
            return self.deepl
        if google_ok:
            return self.google
        logger.info(f"Requested engine '{engine}' is not available. Using mock translation.")
        return self.mock

    async def translate(
        self,
        texts: Sequence[str],
        target_language: str,
        engine: str = "google",
        source_language: str = "en"
    ) -> List[str]:
        """
        Translate plain strings.

        Blank strings are dropped; the result has one entry per remaining
        text, in input order.

        Raises:
            EngineError: If the engine fails or returns the wrong number of results
        """
        results, _, _ = await self._translate_texts(texts, target_language, engine, source_language)
        return results

    async def _translate_texts(
        self,
        texts: Sequence[str],
        target_language: str,
        engine: str,
        source_language: str
    ):
        valid_texts = [text for text in texts if text and text.strip()]
        if not valid_texts:
            return [], engine, 0

        backend = self.resolve_engine(engine)
        results: List[Optional[str]] = [None] * len(valid_texts)
        pending: Dict[str, List[int]] = {}
        cache_hits = 0

        for index, text in enumerate(valid_texts):
            cached = self.cache.get(backend.name, target_language, text)
            if cached is not None:
                results[index] = cached
                cache_hits += 1
            else:
                pending.setdefault(text, []).append(index)

        to_translate = list(pending)
        for start in range(0, len(to_translate), backend.batch_size):
            batch = to_translate[start:start + backend.batch_size]
            try:
                translations = await backend.translate(batch, target_language, source_language)
            except EngineError:
                raise
            except Exception as e:
                logger.error(f"{backend.name} translation failed: {e}")
                raise EngineError(backend.name, str(e), original_error=e) from e

            if len(translations) != len(batch):
                raise EngineError(
                    backend.name,
                    f"returned {len(translations)} translations for {len(batch)} texts"
                )

            for text, translation in zip(batch, translations):
                for index in pending[text]:
                    results[index] = translation
                if translation:
                    self.cache.set(backend.name, target_language, text, translation)

        logger.debug(
            f"Translated {len(valid_texts)} texts with {backend.name} "
            f"({cache_hits} from cache, {len(to_translate)} dispatched)"
        )
        return results, backend.name, cache_hits

    async def translate_batch(
        self,
        extracted_texts: Sequence[ExtractedText],
        target_language: str,
        engine: str = "google",
        source_language: str = "en"
    ) -> BatchResult:
        """
        Translate extracted texts and score the results.

        Args:
            extracted_texts: Scanner output
            target_language: Target language code
            engine: Requested engine name
            source_language: Source language code

        Returns:
            BatchResult; on engine failure ``success`` is False and
            ``translated_texts`` is empty
        """
        items = [item for item in extracted_texts if item.original and item.original.strip()]
        skipped = len(extracted_texts) - len(items)

        try:
            translations, resolved, cache_hits = await self._translate_texts(
                [item.original for item in items], target_language, engine, source_language
            )
        except EngineError as e:
            logger.error(f"Translation batch failed: {e.message}")
            return BatchResult(success=False, error=e.message)

        translated_at = utc_now_iso()
        translated_texts = []
        for item, translation in zip(items, translations):
            quality = self.scorer.score(item.original, translation, item.context, item.type)
            translated_texts.append(TranslatedText.from_extracted(
                item,
                translated=translation or None,
                target_language=target_language,
                translation_engine=engine,
                quality_score=quality,
                translated_at=translated_at
            ))

        summary = {
            "total_texts": len(translated_texts),
            "engine": engine,
            "resolved_engine": resolved,
            "target_language": target_language,
            "source_language": source_language,
            "average_quality": self.scorer.average_score(t.quality_score for t in translated_texts),
            "cache_hits": cache_hits,
            "skipped_blank": skipped,
        }
        return BatchResult(success=True, translated_texts=translated_texts, summary=summary)

    def translate_sync(
        self,
        texts: Sequence[str],
        target_language: str,
        engine: str = "google",
        source_language: str = "en"
    ) -> List[str]:
        """Synchronous wrapper around :meth:`translate`."""
        return asyncio.run(self.translate(texts, target_language, engine, source_language))

    def translate_batch_sync(
        self,
        extracted_texts: Sequence[ExtractedText],
        target_language: str,
        engine: str = "google",
        source_language: str = "en"
    ) -> BatchResult:
        """Synchronous wrapper around :meth:`translate_batch`."""
        return asyncio.run(self.translate_batch(extracted_texts, target_language, engine, source_language))

    @staticmethod
    def get_supported_languages() -> List[Dict[str, str]]:
        return get_supported_languages()

    @staticmethod
    def convert_language_code(code: str, api: str) -> str:
        return convert_language_code(code, api)
