"""
Workflow translation pipeline for FlowLoc.

Runs scan -> translate -> integrate for one document and records the
outcome on a TranslationJob.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, List, Optional
import asyncio
import logging

from flowloc.core.exceptions import ConfigurationError
from flowloc.core.models import TranslationJob
from flowloc.extraction.scanner import DocumentScanner
from flowloc.rendering.reintegrator import Reintegrator
from flowloc.translation.engines import ENGINE_NAMES, GoogleEngine, DeeplEngine, MockEngine
from flowloc.translation.orchestrator import TranslationOrchestrator
from flowloc.utils.cache import TranslationCache

logger = logging.getLogger(__name__)


@dataclass
class PipelineConfig:
    """Configuration for one pipeline instance."""

    # Language settings
    source_lang: str = "en"
    target_lang: str = "ja"

    # Requested engine: google, deepl or mock
    engine: str = "google"

    # Engine credentials
    google_api_key: Optional[str] = None
    google_enabled: bool = False
    deepl_api_key: Optional[str] = None
    deepl_api_url: Optional[str] = None

    # HTTP timeouts in seconds
    google_timeout: float = 20
    deepl_timeout: float = 20

    # Batch sizes (None keeps each engine's own default)
    google_batch_size: Optional[int] = None
    deepl_batch_size: Optional[int] = None
    mock_batch_size: Optional[int] = None

    mock_delay: float = 0.0

    # Cache: unless a bound or disk storage is asked for, the process-wide cache is shared
    cache_max_size: Optional[int] = None
    cache_use_disk: bool = False
    cache_dir: str = ".cache/flowloc"
    use_private_cache: bool = False

    def __post_init__(self):
        if self.cache_max_size is not None or self.cache_use_disk:
            self.use_private_cache = True

    @classmethod
    def from_dict(cls, config: Dict[str, Any]) -> "PipelineConfig":
        """Build from a configuration dictionary as returned by load_config()."""
        translation = config.get("translation", {}) or {}
        engines = config.get("engines", {}) or {}
        google = engines.get("google", {}) or {}
        deepl = engines.get("deepl", {}) or {}
        mock = engines.get("mock", {}) or {}
        cache = config.get("cache", {}) or {}
        return cls(
            source_lang=translation.get("source_lang", "en"),
            target_lang=translation.get("target_lang", "ja"),
            engine=translation.get("default_engine", "google"),
            google_api_key=google.get("api_key"),
            google_enabled=bool(google.get("enabled", False)),
            deepl_api_key=deepl.get("api_key"),
            deepl_api_url=deepl.get("api_url"),
            google_timeout=google.get("timeout", 20),
            deepl_timeout=deepl.get("timeout", 20),
            google_batch_size=google.get("batch_size"),
            deepl_batch_size=deepl.get("batch_size"),
            mock_batch_size=mock.get("batch_size"),
            mock_delay=float(mock.get("delay", 0.0) or 0.0),
            cache_max_size=cache.get("max_size"),
            cache_use_disk=bool(cache.get("use_disk", False)),
            cache_dir=cache.get("cache_dir") or ".cache/flowloc"
        )

    def validate(self) -> List[str]:
        """Validate configuration and return any issues."""
        issues = []

        if self.engine not in ENGINE_NAMES:
            issues.append(f"engine must be one of {', '.join(ENGINE_NAMES)}")

        if not self.target_lang:
            issues.append("target_lang is required")

        for label, size in (("google_batch_size", self.google_batch_size),
                            ("deepl_batch_size", self.deepl_batch_size),
                            ("mock_batch_size", self.mock_batch_size)):
            if size is not None and size < 1:
                issues.append(f"{label} must be at least 1")

        if self.cache_max_size is not None and self.cache_max_size < 1:
            issues.append("cache_max_size must be at least 1")

        return issues


class WorkflowTranslationPipeline:
    """
    Translate whole workflow documents.

    Each call to :meth:`run` drives one TranslationJob from pending to
    completed or failed. Failed jobs are not retried here; callers create a
    new job instead.
    """

    def __init__(
        self,
        config: Optional[PipelineConfig] = None,
        orchestrator: Optional[TranslationOrchestrator] = None
    ):
        self.config = config or PipelineConfig()

        issues = self.config.validate()
        if issues:
            raise ConfigurationError(
                f"Configuration issues: {', '.join(issues)}",
                config_key="engine" if self.config.engine not in ENGINE_NAMES else None,
                invalid_value=self.config.engine,
                valid_values=list(ENGINE_NAMES)
            )

        self.scanner = DocumentScanner()
        self.reintegrator = Reintegrator()
        self.orchestrator = orchestrator or self._create_orchestrator()

    def _create_orchestrator(self) -> TranslationOrchestrator:
        cache = None
        if self.config.use_private_cache:
            cache = TranslationCache(
                max_size=self.config.cache_max_size,
                use_disk=self.config.cache_use_disk,
                cache_dir=self.config.cache_dir
            )
        return TranslationOrchestrator(
            google=GoogleEngine(
                api_key=self.config.google_api_key,
                enabled=self.config.google_enabled,
                batch_size=self.config.google_batch_size,
                timeout=self.config.google_timeout
            ),
            deepl=DeeplEngine(
                api_key=self.config.deepl_api_key,
                api_url=self.config.deepl_api_url,
                batch_size=self.config.deepl_batch_size,
                timeout=self.config.deepl_timeout
            ),
            mock=MockEngine(delay=self.config.mock_delay, batch_size=self.config.mock_batch_size),
            cache=cache
        )

    def create_job(self, target_lang: Optional[str] = None, engine: Optional[str] = None) -> TranslationJob:
        """Create a pending job for this pipeline's (or the given) language and engine."""
        return TranslationJob(
            target_language=target_lang or self.config.target_lang,
            engine=engine or self.config.engine,
            source_language=self.config.source_lang
        )

    async def run(self, document: Any, job: Optional[TranslationJob] = None) -> TranslationJob:
        """
        Translate ``document`` and record the outcome on ``job``.

        Args:
            document: Decoded workflow document (not modified)
            job: Pending job to drive; a new one is created if omitted

        Returns:
            The job, now completed or failed
        """
        job = job or self.create_job()
        job.start()
        logger.info(f"Job {job.job_id}: translating to {job.target_language} with {job.engine}")

        scan_result = self.scanner.scan(document)
        if not scan_result.success:
            job.fail(scan_result.error.message)
            logger.error(f"Job {job.job_id} failed: {job.error_message}")
            return job

        if not scan_result.extracted_texts:
            job.fail("No texts available for translation")
            logger.warning(f"Job {job.job_id} failed: {job.error_message}")
            return job

        batch = await self.orchestrator.translate_batch(
            scan_result.extracted_texts,
            job.target_language,
            engine=job.engine,
            source_language=job.source_language
        )
        if not batch.success:
            job.fail(batch.error or "Translation failed")
            logger.error(f"Job {job.job_id} failed: {job.error_message}")
            return job

        report = self.reintegrator.integrate_with_report(document, batch.translated_texts)
        summary = dict(batch.summary)
        summary.update({
            "node_count": scan_result.metadata.get("node_count", 0),
            "connection_count": scan_result.metadata.get("connection_count", 0),
            "applied": report.applied,
            "skipped_empty": report.skipped_empty,
            "failed_paths": report.failed_count,
        })

        job.complete(
            batch.translated_texts,
            report.document,
            batch.summary.get("average_quality", 0),
            summary
        )
        logger.info(
            f"Job {job.job_id} completed: {report.applied} texts applied, "
            f"average quality {job.quality_score}"
        )
        return job

    def run_sync(self, document: Any, job: Optional[TranslationJob] = None) -> TranslationJob:
        """Synchronous wrapper around :meth:`run`."""
        return asyncio.run(self.run(document, job))
