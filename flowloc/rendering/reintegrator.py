"""
Reintegration of translated texts into workflow documents.

The original document is deep-copied before any write, so callers keep an
untouched original and get a new, structurally identical document back.
"""

from __future__ import annotations
import copy
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from flowloc.core.exceptions import PathResolutionError
from flowloc.core.models import TranslatedText, utc_now_iso
from flowloc.core.paths import format_path, set_at

logger = logging.getLogger(__name__)

TRANSLATION_PLATFORM = "n8n-workflow-localization"
MARKER_KEY = "meta"

TranslatedItem = Union[TranslatedText, Mapping[str, Any]]


@dataclass
class IntegrationReport:
    """Result of an integration pass with per-item bookkeeping."""
    document: Dict[str, Any]
    applied: int = 0
    skipped_empty: int = 0
    failed: List[Tuple[str, str]] = field(default_factory=list)

    @property
    def failed_count(self) -> int:
        return len(self.failed)


def _path_and_value(item: TranslatedItem) -> Tuple[Any, Optional[str]]:
    if isinstance(item, TranslatedText):
        return item.path, item.translated
    return item.get("path"), item.get("translated")


def _describe(path: Any) -> str:
    if isinstance(path, str):
        return path
    if not isinstance(path, (list, tuple)):
        return repr(path)
    try:
        return format_path(path)
    except PathResolutionError:
        return repr(path)


class Reintegrator:
    """Write translated strings back at the paths they were extracted from."""

    def __init__(self, platform: str = TRANSLATION_PLATFORM):
        self.platform = platform

    def integrate(
        self,
        original: Dict[str, Any],
        translated_texts: Iterable[TranslatedItem]
    ) -> Dict[str, Any]:
        """
        Produce a translated copy of ``original``.

        Args:
            original: Source workflow document (left untouched)
            translated_texts: TranslatedText records or ``{path, translated}`` mappings

        Returns:
            New document with translations applied and the marker block stamped
        """
        return self.integrate_with_report(original, translated_texts).document

    def integrate_with_report(
        self,
        original: Dict[str, Any],
        translated_texts: Iterable[TranslatedItem]
    ) -> IntegrationReport:
        """Same as :meth:`integrate`, also counting applied, empty and failed items."""
        document = copy.deepcopy(original)
        report = IntegrationReport(document=document)

        for item in translated_texts:
            path, translated = _path_and_value(item)
            if not translated:
                report.skipped_empty += 1
                continue
            try:
                if path is None:
                    raise PathResolutionError("", "item has no path")
                set_at(document, path, translated)
                report.applied += 1
            except PathResolutionError as e:
                logger.warning(f"Failed to integrate translation at path {_describe(path)}: {e.message}")
                report.failed.append((_describe(path), e.message))

        self._stamp_marker(document)

        if report.failed:
            logger.info(
                f"Integration finished with {report.failed_count} skipped paths "
                f"({report.applied} applied)"
            )
        return report

    def _stamp_marker(self, document: Dict[str, Any]) -> None:
        meta = document.get(MARKER_KEY)
        if not isinstance(meta, dict):
            if meta is not None:
                logger.warning(f"Replacing non-object '{MARKER_KEY}' value of type {type(meta).__name__}")
            meta = {}
            document[MARKER_KEY] = meta
        meta["translated"] = True
        meta["translationDate"] = utc_now_iso()
        meta["translationPlatform"] = self.platform


def ensure_unique_node_ids(nodes: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """
    Return copies of ``nodes`` whose ``id`` values are unique.

    A repeated id becomes ``<id>_<n>`` with the smallest free ``n``.
    """
    used = set()
    result = []
    for node in nodes:
        node_id = node.get("id")
        candidate = node_id
        counter = 1
        while candidate in used:
            candidate = f"{node_id}_{counter}"
            counter += 1
        used.add(candidate)
        result.append({**node, "id": candidate})
    return result


_default_reintegrator = Reintegrator()


def integrate(original: Dict[str, Any], translated_texts: Iterable[TranslatedItem]) -> Dict[str, Any]:
    """Integrate with the default reintegrator."""
    return _default_reintegrator.integrate(original, translated_texts)
