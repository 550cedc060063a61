"""
Exception hierarchy for FlowLoc.

Provides specific exception types for the scan / translate / integrate
pipeline so callers can tell systemic failures from per-item ones.
"""

from __future__ import annotations
from typing import Optional, Dict, Any, List, Sequence, Union


class FlowLocError(Exception):
    """Base exception for all FlowLoc errors."""

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        recoverable: bool = False,
        suggestion: Optional[str] = None
    ):
        """
        Initialize error.

        Args:
            message: Human-readable error message
            details: Additional error details
            recoverable: Whether error can be recovered from
            suggestion: Suggested fix or workaround
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.recoverable = recoverable
        self.suggestion = suggestion

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for JSON serialization."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
            "recoverable": self.recoverable,
            "suggestion": self.suggestion
        }

    def __str__(self) -> str:
        """String representation with suggestion if available."""
        result = self.message
        if self.suggestion:
            result += f"\nSuggestion: {self.suggestion}"
        return result


class ParseError(FlowLocError):
    """Raised (or returned in a ScanResult) when a document cannot be scanned at all."""

    def __init__(self, message: str, document_type: Optional[str] = None):
        """
        Initialize parse error.

        Args:
            message: Error message
            document_type: Python type name of the rejected document
        """
        details = {"document_type": document_type}
        suggestion = "Workflow files must be JSON objects with a 'nodes' array"
        super().__init__(message, details, recoverable=False, suggestion=suggestion)
        self.document_type = document_type


class PathResolutionError(FlowLocError):
    """Raised when a single path cannot be read from or written into a document."""

    def __init__(
        self,
        path: Union[str, Sequence[Union[str, int]]],
        message: str,
        segment: Optional[Union[str, int]] = None
    ):
        """
        Initialize path error.

        Args:
            path: The path that failed (string or segment sequence)
            message: Error message
            segment: The segment at which resolution failed
        """
        path_repr = path if isinstance(path, str) else list(path)
        full_message = f"Cannot resolve path {path_repr!r}: {message}"
        details = {
            "path": path_repr,
            "segment": segment
        }
        super().__init__(full_message, details, recoverable=True)
        self.path = path
        self.segment = segment


class EngineError(FlowLocError):
    """Raised when a translation engine fails for a batch."""

    def __init__(
        self,
        engine: str,
        message: str,
        original_error: Optional[Exception] = None
    ):
        """
        Initialize engine error.

        Args:
            engine: Engine name
            message: Error message
            original_error: Original exception if any
        """
        full_message = f"Engine '{engine}' failed: {message}"
        details = {
            "engine": engine,
            "original_error": str(original_error) if original_error else None
        }

        suggestion = None
        if engine == "deepl":
            suggestion = "Check DEEPL_API_KEY and whether it is a free (':fx') or pro key."
        elif engine == "google":
            suggestion = "Check GOOGLE_TRANSLATE_API_KEY or network access to Google Translate."

        super().__init__(full_message, details, recoverable=True, suggestion=suggestion)
        self.engine = engine
        self.original_error = original_error


class ConfigurationError(FlowLocError):
    """Raised when configuration is invalid."""

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        invalid_value: Optional[Any] = None,
        valid_values: Optional[List[Any]] = None
    ):
        """
        Initialize configuration error.

        Args:
            message: Error message
            config_key: Configuration key that's invalid
            invalid_value: Invalid value provided
            valid_values: List of valid values
        """
        details = {
            "config_key": config_key,
            "invalid_value": invalid_value,
            "valid_values": valid_values
        }

        suggestion = None
        if config_key and valid_values:
            suggestion = f"Valid values for {config_key}: {', '.join(map(str, valid_values))}"
        elif config_key:
            suggestion = f"Check configuration for '{config_key}'"

        super().__init__(message, details, recoverable=True, suggestion=suggestion)
        self.config_key = config_key
        self.invalid_value = invalid_value
        self.valid_values = valid_values


class InvalidJobTransition(FlowLocError):
    """Raised when a translation job is moved to a state it cannot reach."""

    def __init__(self, job_id: str, current: str, requested: str):
        message = f"Job {job_id} cannot move from '{current}' to '{requested}'"
        details = {
            "job_id": job_id,
            "current": current,
            "requested": requested
        }
        suggestion = "Finished jobs are terminal. Create a new job to retry."
        super().__init__(message, details, recoverable=False, suggestion=suggestion)
        self.job_id = job_id
        self.current = current
        self.requested = requested


class CacheError(FlowLocError):
    """Raised when cache operations fail."""

    def __init__(
        self,
        message: str,
        cache_type: Optional[str] = None,
        operation: Optional[str] = None
    ):
        """
        Initialize cache error.

        Args:
            message: Error message
            cache_type: Type of cache (disk/memory)
            operation: Operation that failed (get/set/clear)
        """
        details = {
            "cache_type": cache_type,
            "operation": operation
        }
        suggestion = (
            "Cache errors are non-fatal. The system will continue without caching.\n"
            "To fix: Check disk space and permissions for cache directory."
        )

        super().__init__(message, details, recoverable=True, suggestion=suggestion)
        self.cache_type = cache_type
        self.operation = operation
