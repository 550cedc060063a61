"""
Core data models for FlowLoc.

This module defines the records that flow through the pipeline:
extracted texts coming out of the scanner, translated texts coming out of
the orchestrator, and the translation job that ties a run together.
"""

from __future__ import annotations
from dataclasses import dataclass, field, fields
from enum import Enum
from typing import List, Dict, Optional, Any
from datetime import datetime, timezone
import uuid

from flowloc.core.exceptions import ParseError, InvalidJobTransition
from flowloc.core.paths import Path, format_path


def utc_now_iso() -> str:
    """Current UTC time as an ISO-8601 string."""
    return datetime.now(timezone.utc).isoformat()


class TextContext(str, Enum):
    """Where in the document an extracted string was found."""
    WORKFLOW = "workflow"
    NODE = "node"
    PARAMETER = "parameter"
    SETTINGS = "settings"


class JobStatus(str, Enum):
    """Lifecycle states of a translation job."""
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass(frozen=True)
class ExtractedText:
    """
    One translatable string found by the scanner.

    ``path`` holds the key/index segments leading from the document root to
    the string, so the value can be read back or overwritten exactly where
    it was found.
    """
    id: str
    path: Path
    original: str
    context: TextContext
    type: str
    node_type: Optional[str] = None

    @property
    def path_string(self) -> str:
        """Printable form of the path."""
        return format_path(self.path)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-friendly dictionary."""
        data = {
            "id": self.id,
            "path": self.path_string,
            "original": self.original,
            "context": self.context.value,
            "type": self.type,
        }
        if self.node_type is not None:
            data["nodeType"] = self.node_type
        return data


@dataclass(frozen=True)
class TranslatedText(ExtractedText):
    """An extracted text together with its translation and quality score."""
    translated: Optional[str] = None
    target_language: Optional[str] = None
    translation_engine: Optional[str] = None
    quality_score: int = 0
    translated_at: Optional[str] = None

    @classmethod
    def from_extracted(
        cls,
        item: ExtractedText,
        translated: Optional[str],
        target_language: str,
        translation_engine: str,
        quality_score: int = 0,
        translated_at: Optional[str] = None
    ) -> "TranslatedText":
        """Build a translated record from a copy of an extracted one."""
        base = {f.name: getattr(item, f.name) for f in fields(ExtractedText)}
        return cls(
            **base,
            translated=translated,
            target_language=target_language,
            translation_engine=translation_engine,
            quality_score=quality_score,
            translated_at=translated_at or utc_now_iso()
        )

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data.update({
            "translated": self.translated,
            "targetLanguage": self.target_language,
            "translationEngine": self.translation_engine,
            "qualityScore": self.quality_score,
            "translatedAt": self.translated_at,
        })
        return data


@dataclass
class ScanResult:
    """Outcome of scanning one document. Check ``success`` before use."""
    success: bool
    extracted_texts: List[ExtractedText] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)
    structure: Dict[str, Any] = field(default_factory=dict)
    error: Optional[ParseError] = None

    def raise_for_error(self) -> None:
        """Raise the stored ParseError, if any."""
        if self.error is not None:
            raise self.error

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "extractedTexts": [item.to_dict() for item in self.extracted_texts],
            "metadata": self.metadata,
            "error": self.error.message if self.error else None,
        }


@dataclass
class BatchResult:
    """Outcome of translating a list of extracted texts."""
    success: bool
    translated_texts: List[TranslatedText] = field(default_factory=list)
    summary: Dict[str, Any] = field(default_factory=dict)
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "translatedTexts": [item.to_dict() for item in self.translated_texts],
            "summary": self.summary,
            "error": self.error,
        }


@dataclass
class TranslationJob:
    """
    One translation run for a (document, target language, engine) triple.

    Jobs move pending -> processing -> completed | failed and never go back.
    Retrying means creating a new job.
    """
    target_language: str
    engine: str
    source_language: str = "en"
    job_id: str = field(default_factory=lambda: uuid.uuid4().hex)
    status: JobStatus = JobStatus.PENDING
    created_at: str = field(default_factory=utc_now_iso)
    started_at: Optional[str] = None
    completed_at: Optional[str] = None
    translated_texts: List[TranslatedText] = field(default_factory=list)
    translated_document: Optional[Dict[str, Any]] = None
    quality_score: Optional[int] = None
    summary: Dict[str, Any] = field(default_factory=dict)
    error_message: Optional[str] = None

    @property
    def is_finished(self) -> bool:
        return self.status in (JobStatus.COMPLETED, JobStatus.FAILED)

    def _move(self, expected: JobStatus, new: JobStatus) -> None:
        if self.status is not expected:
            raise InvalidJobTransition(self.job_id, self.status.value, new.value)
        self.status = new

    def start(self) -> None:
        self._move(JobStatus.PENDING, JobStatus.PROCESSING)
        self.started_at = utc_now_iso()

    def complete(
        self,
        translated_texts: List[TranslatedText],
        translated_document: Dict[str, Any],
        quality_score: int,
        summary: Optional[Dict[str, Any]] = None
    ) -> None:
        self._move(JobStatus.PROCESSING, JobStatus.COMPLETED)
        self.translated_texts = list(translated_texts)
        self.translated_document = translated_document
        self.quality_score = quality_score
        self.summary = summary or {}
        self.completed_at = utc_now_iso()

    def fail(self, message: str) -> None:
        self._move(JobStatus.PROCESSING, JobStatus.FAILED)
        self.error_message = message
        self.completed_at = utc_now_iso()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "id": self.job_id,
            "status": self.status.value,
            "targetLanguage": self.target_language,
            "sourceLanguage": self.source_language,
            "translationEngine": self.engine,
            "createdAt": self.created_at,
            "startedAt": self.started_at,
            "completedAt": self.completed_at,
            "qualityScore": self.quality_score,
            "summary": self.summary,
            "errorMessage": self.error_message,
            "translatedTexts": [item.to_dict() for item in self.translated_texts],
        }
