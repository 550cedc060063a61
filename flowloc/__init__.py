"""
FlowLoc: localization of workflow-automation documents

Extracts human-readable text from n8n-style workflow JSON, machine-translates
it, and writes the translations back into a structurally identical document.

Usage:
    from flowloc import WorkflowTranslationPipeline, PipelineConfig

    pipeline = WorkflowTranslationPipeline(PipelineConfig(target_lang="ja"))
    job = pipeline.run_sync(workflow)
    translated = job.translated_document
"""

__version__ = "1.0.0"
__license__ = "MIT"

from flowloc.core.models import (
    ExtractedText,
    TranslatedText,
    TextContext,
    ScanResult,
    BatchResult,
    TranslationJob,
    JobStatus
)
from flowloc.core.exceptions import (
    FlowLocError,
    ParseError,
    PathResolutionError,
    EngineError,
    ConfigurationError,
    InvalidJobTransition
)
from flowloc.core.paths import format_path, parse_path, get_at, set_at
from flowloc.extraction.scanner import DocumentScanner, scan, load_document
from flowloc.rendering.reintegrator import Reintegrator, integrate, ensure_unique_node_ids
from flowloc.scoring.quality import QualityScorer, score, average_score
from flowloc.translation.orchestrator import TranslationOrchestrator
from flowloc.core.pipeline import WorkflowTranslationPipeline, PipelineConfig

__all__ = [
    "__version__",
    "ExtractedText", "TranslatedText", "TextContext", "ScanResult",
    "BatchResult", "TranslationJob", "JobStatus",
    "FlowLocError", "ParseError", "PathResolutionError", "EngineError",
    "ConfigurationError", "InvalidJobTransition",
    "format_path", "parse_path", "get_at", "set_at",
    "DocumentScanner", "scan", "load_document",
    "Reintegrator", "integrate", "ensure_unique_node_ids",
    "QualityScorer", "score", "average_score",
    "TranslationOrchestrator",
    "WorkflowTranslationPipeline", "PipelineConfig",
]
