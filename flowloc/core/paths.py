"""
Path addressing for workflow documents.

A path is a tuple of segments from the document root to one value:
``str`` segments are object keys and ``int`` segments are array indices.
The printable form looks like ``nodes[3].parameters.options[1].label``.
Keys that would be ambiguous in that form (digits only, dots, brackets,
quotes, empty) are written as quoted bracket segments, e.g.
``parameters["0"]`` or ``headers["x.y"]``, so the string form always
parses back to the same segments.
"""

from __future__ import annotations
import json
import re
from typing import Any, List, Sequence, Tuple, Union

from flowloc.core.exceptions import PathResolutionError

Segment = Union[str, int]
Path = Tuple[Segment, ...]

_IDENTIFIER = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$\-]*$")
_BARE_KEY = re.compile(r"[^.\[\]]+")
_INDEX = re.compile(r"\[(\d+)\]")
_QUOTED = re.compile(r'\[("(?:[^"\\]|\\.)*")\]')


def _format_key(key: str) -> str:
    if _IDENTIFIER.match(key):
        return key
    return f"[{json.dumps(key, ensure_ascii=False)}]"


def format_path(segments: Sequence[Segment]) -> str:
    """
    Render segments as a printable path.

    Args:
        segments: Key/index segments from the document root

    Returns:
        Path string such as ``nodes[0].parameters.text``
    """
    parts: List[str] = []
    for segment in segments:
        if isinstance(segment, bool) or not isinstance(segment, (str, int)):
            raise PathResolutionError(list(segments), f"unsupported segment {segment!r}", segment)
        if isinstance(segment, int):
            parts.append(f"[{segment}]")
            continue
        rendered = _format_key(segment)
        if parts and not rendered.startswith("["):
            parts.append(".")
        parts.append(rendered)
    return "".join(parts)


def parse_path(path: Union[str, Sequence[Segment]]) -> Path:
    """
    Split a path into its segments.

    Args:
        path: Path string or an existing segment sequence

    Returns:
        Tuple of segments

    Raises:
        PathResolutionError: If the string is malformed or ``path`` is neither
            a string nor a list/tuple of segments
    """
    if not isinstance(path, str):
        if not isinstance(path, (list, tuple)):
            raise PathResolutionError(repr(path), f"expected a string or a segment sequence, got {type(path).__name__}")
        segments = tuple(path)
        for segment in segments:
            if isinstance(segment, bool) or not isinstance(segment, (str, int)):
                raise PathResolutionError(segments, f"unsupported segment {segment!r}", segment)
            if isinstance(segment, int) and segment < 0:
                raise PathResolutionError(segments, "negative index", segment)
        return segments

    if not path:
        raise PathResolutionError(path, "empty path")

    segments: List[Segment] = []
    pos = 0
    expect_key = True
    while pos < len(path):
        char = path[pos]
        if char == "[":
            match = _INDEX.match(path, pos)
            if match:
                segments.append(int(match.group(1)))
                pos = match.end()
                expect_key = False
                continue
            match = _QUOTED.match(path, pos)
            if match:
                segments.append(json.loads(match.group(1)))
                pos = match.end()
                expect_key = False
                continue
            raise PathResolutionError(path, f"malformed bracket segment at offset {pos}")
        if char == ".":
            if expect_key:
                raise PathResolutionError(path, f"empty key at offset {pos}")
            pos += 1
            expect_key = True
            continue
        match = _BARE_KEY.match(path, pos)
        if not match or (not expect_key and segments):
            raise PathResolutionError(path, f"unexpected character at offset {pos}")
        segments.append(match.group(0))
        pos = match.end()
        expect_key = False

    if expect_key:
        raise PathResolutionError(path, "path ends with a separator")
    return tuple(segments)


def get_at(document: Any, path: Union[str, Sequence[Segment]]) -> Any:
    """Read the value a path points at."""
    segments = parse_path(path)
    current = document
    for segment in segments:
        if isinstance(segment, int):
            if not isinstance(current, list):
                raise PathResolutionError(segments, "index on a non-array value", segment)
            if segment >= len(current):
                raise PathResolutionError(segments, "index out of range", segment)
        else:
            if not isinstance(current, dict):
                raise PathResolutionError(segments, "key on a non-object value", segment)
            if segment not in current:
                raise PathResolutionError(segments, "missing key", segment)
        current = current[segment]
    return current


def _empty_container(next_segment: Segment) -> Union[dict, list]:
    return [] if isinstance(next_segment, int) else {}


def _assign(container: Union[dict, list], segment: Segment, value: Any, segments: Path) -> None:
    if isinstance(segment, int):
        if not isinstance(container, list):
            raise PathResolutionError(segments, "index on a non-array value", segment)
        if segment >= len(container):
            container.extend([None] * (segment + 1 - len(container)))
        container[segment] = value
    else:
        if not isinstance(container, dict):
            raise PathResolutionError(segments, "key on a non-object value", segment)
        container[segment] = value


def set_at(document: Any, path: Union[str, Sequence[Segment]], value: Any) -> None:
    """
    Write ``value`` at ``path`` in place.

    Missing intermediates are created on the way down: an array when the
    next segment is an index, an object otherwise. An existing value of the
    wrong kind is never replaced.

    Raises:
        PathResolutionError: If a segment does not fit the container it addresses
    """
    segments = parse_path(path)
    if not segments:
        raise PathResolutionError(segments, "empty path")

    current = document
    for depth, segment in enumerate(segments[:-1]):
        next_segment = segments[depth + 1]
        if isinstance(segment, int):
            if not isinstance(current, list):
                raise PathResolutionError(segments, "index on a non-array value", segment)
            child = current[segment] if segment < len(current) else None
        else:
            if not isinstance(current, dict):
                raise PathResolutionError(segments, "key on a non-object value", segment)
            child = current.get(segment)

        if child is None:
            child = _empty_container(next_segment)
            _assign(current, segment, child, segments)
        elif not isinstance(child, (dict, list)):
            raise PathResolutionError(segments, f"cannot descend into {type(child).__name__}", segment)
        current = child

    _assign(current, segments[-1], value, segments)
