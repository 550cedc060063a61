"""
Workflow document scanner.

Walks an n8n-style workflow document and collects every human-readable
string that should be translated, together with the path needed to put a
translation back in the same place.
"""

from __future__ import annotations
import json
import logging
from typing import Any, Dict, List, Optional, Union

from flowloc.core.exceptions import ParseError
from flowloc.core.models import ExtractedText, ScanResult, TextContext
from flowloc.core.paths import Path

logger = logging.getLogger(__name__)


# Field-name fragments that mark a string as translatable.
# Matching is case-insensitive containment, so "systemMessage" and
# "errorMessage" both hit "message".
TRANSLATABLE_FIELDS = frozenset([
    # UI text
    'name', 'displayName', 'description', 'placeholder', 'notice',
    'hint', 'tooltip', 'label', 'subtitle', 'notes',

    # AI / LangChain prompts
    'systemMessage', 'userMessage', 'promptTemplate', 'instructions',
    'prompt', 'message', 'content', 'text', 'template',

    # Messages
    'errorMessage', 'successMessage', 'warningMessage', 'confirmMessage',
    'infoMessage', 'helpText', 'statusText',

    # Conditions and rules
    'conditionDescription', 'ruleDescription', 'stepDescription',
    'comment', 'annotation', 'remarks',

    # Webhook / HTTP
    'responseMessage', 'requestDescription', 'headerDescription',

    # Data mapping
    'fieldDescription', 'columnDescription', 'valueDescription',
    'mappingDescription', 'transformDescription',

    # Descriptive metadata
    'summary', 'reason', 'explanation', 'note', 'memo',
    'title', 'subject', 'topic', 'caption',
])

MAX_DEPTH = 10

_LOWERED_FIELDS = tuple(sorted({fragment.lower() for fragment in TRANSLATABLE_FIELDS}))


def is_translatable_field(field_name: str) -> bool:
    """Check whether a key names a translatable field."""
    lowered = field_name.lower()
    return any(fragment in lowered for fragment in _LOWERED_FIELDS)


def _has_text(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


def load_document(source: Union[str, bytes]) -> Dict[str, Any]:
    """
    Parse workflow JSON text into a document.

    Args:
        source: JSON text (str or UTF-8 bytes)

    Returns:
        The decoded document

    Raises:
        ParseError: If the text is not valid JSON or not a JSON object
    """
    if isinstance(source, bytes):
        source = source.decode("utf-8-sig")
    try:
        document = json.loads(source)
    except json.JSONDecodeError as e:
        raise ParseError(f"Invalid workflow JSON: {e}", document_type="str") from e
    if not isinstance(document, dict):
        raise ParseError(
            f"Workflow JSON must be an object, got {type(document).__name__}",
            document_type=type(document).__name__
        )
    return document


class DocumentScanner:
    """
    Extract translatable texts from workflow documents.

    Texts come out in document order: the workflow name, then every node
    (its name and notes before its parameters), then settings. That order
    is what downstream steps use to line results up.
    """

    def __init__(self, max_depth: int = MAX_DEPTH):
        self.max_depth = max_depth

    def scan(self, document: Any) -> ScanResult:
        """
        Scan a workflow document.

        Args:
            document: Decoded workflow document

        Returns:
            ScanResult; ``success`` is False and ``error`` holds a ParseError
            when the document is not an object
        """
        if not isinstance(document, dict):
            error = ParseError(
                f"Cannot scan a {type(document).__name__}: workflow document must be an object",
                document_type=type(document).__name__
            )
            logger.warning(error.message)
            return ScanResult(success=False, error=error)

        extracted: List[ExtractedText] = []
        meta = document.get("meta") if isinstance(document.get("meta"), dict) else {}
        metadata: Dict[str, Any] = {
            "node_count": 0,
            "connection_count": 0,
            "version": meta.get("version") or "unknown",
            "instance_id": meta.get("instanceId"),
        }

        name = document.get("name")
        if _has_text(name):
            extracted.append(ExtractedText(
                id="workflow_name",
                path=("name",),
                original=name,
                context=TextContext.WORKFLOW,
                type="name"
            ))

        nodes = document.get("nodes")
        if isinstance(nodes, list):
            metadata["node_count"] = len(nodes)
            for index, node in enumerate(nodes):
                if isinstance(node, dict):
                    self._extract_node_texts(node, index, extracted)
                else:
                    logger.debug(f"Skipping non-object node at index {index}")
        elif nodes is not None:
            logger.warning(f"'nodes' is a {type(nodes).__name__}, expected a list")

        connections = document.get("connections")
        if isinstance(connections, dict):
            metadata["connection_count"] = len(connections)

        settings = document.get("settings")
        if isinstance(settings, dict):
            self._extract_settings_texts(settings, extracted)

        logger.debug(
            f"Scanned workflow: {len(extracted)} texts, "
            f"{metadata['node_count']} nodes, {metadata['connection_count']} connections"
        )
        return ScanResult(
            success=True,
            extracted_texts=extracted,
            metadata=metadata,
            structure=self.get_workflow_structure(document)
        )

    def _extract_node_texts(self, node: Dict[str, Any], index: int, extracted: List[ExtractedText]) -> None:
        node_type = node.get("type") if isinstance(node.get("type"), str) else None

        for key in ("name", "notes"):
            value = node.get(key)
            if _has_text(value):
                extracted.append(ExtractedText(
                    id=f"node_{index}_{key}",
                    path=("nodes", index, key),
                    original=value,
                    context=TextContext.NODE,
                    type=key,
                    node_type=node_type
                ))

        parameters = node.get("parameters")
        if isinstance(parameters, dict):
            self._extract_parameter_texts(
                parameters, ("nodes", index, "parameters"), extracted, node_type, depth=0
            )

    def _extract_parameter_texts(
        self,
        params: Dict[str, Any],
        base_path: Path,
        extracted: List[ExtractedText],
        node_type: Optional[str],
        depth: int
    ) -> None:
        if depth > self.max_depth:
            return

        for key, value in params.items():
            current_path = base_path + (key,)
            if isinstance(value, str):
                if value.strip() and is_translatable_field(key):
                    self._add_parameter(extracted, current_path, value, key, node_type)
            elif isinstance(value, dict):
                self._extract_parameter_texts(value, current_path, extracted, node_type, depth + 1)
            elif isinstance(value, list):
                self._extract_array_texts(value, current_path, key, extracted, node_type, depth)

    def _extract_array_texts(
        self,
        items: List[Any],
        base_path: Path,
        key: str,
        extracted: List[ExtractedText],
        node_type: Optional[str],
        depth: int
    ) -> None:
        # Raw strings inside an array take their translatability from the key holding the array.
        for index, item in enumerate(items):
            item_path = base_path + (index,)
            if isinstance(item, dict):
                self._extract_parameter_texts(item, item_path, extracted, node_type, depth + 1)
            elif isinstance(item, list):
                if depth + 1 <= self.max_depth:
                    self._extract_array_texts(item, item_path, key, extracted, node_type, depth + 1)
            elif _has_text(item) and is_translatable_field(key):
                self._add_parameter(extracted, item_path, item, key, node_type)

    @staticmethod
    def _add_parameter(
        extracted: List[ExtractedText],
        path: Path,
        value: str,
        key: str,
        node_type: Optional[str]
    ) -> None:
        extracted.append(ExtractedText(
            id=f"text_{len(extracted)}",
            path=path,
            original=value,
            context=TextContext.PARAMETER,
            type=key,
            node_type=node_type
        ))

    def _extract_settings_texts(self, settings: Dict[str, Any], extracted: List[ExtractedText]) -> None:
        execution_order = settings.get("executionOrder")
        if _has_text(execution_order):
            extracted.append(ExtractedText(
                id="settings_executionOrder",
                path=("settings", "executionOrder"),
                original=execution_order,
                context=TextContext.SETTINGS,
                type="executionOrder"
            ))

        for key, value in settings.items():
            if key == "executionOrder":
                continue
            if _has_text(value) and is_translatable_field(key):
                extracted.append(ExtractedText(
                    id=f"settings_{key}",
                    path=("settings", key),
                    original=value,
                    context=TextContext.SETTINGS,
                    type=key
                ))

    @staticmethod
    def get_workflow_structure(document: Dict[str, Any]) -> Dict[str, Any]:
        """Skeleton of the workflow kept alongside scan results for display."""
        nodes = document.get("nodes")
        structure_nodes = None
        if isinstance(nodes, list):
            structure_nodes = [
                {
                    "name": node.get("name"),
                    "type": node.get("type"),
                    "position": node.get("position"),
                    "parameters": node.get("parameters"),
                }
                for node in nodes if isinstance(node, dict)
            ]
        return {
            "name": document.get("name"),
            "nodes": structure_nodes,
            "connections": document.get("connections"),
            "settings": document.get("settings"),
            "meta": document.get("meta"),
        }


_default_scanner = DocumentScanner()


def scan(document: Any) -> ScanResult:
    """Scan a document with the default scanner."""
    return _default_scanner.scan(document)
