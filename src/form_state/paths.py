"""
Field path helpers.

A field path addresses a value inside a nested form value tree. It can be
given as a dotted string (``"dateOfBirth.month"``) or as a sequence of
segments (``("dateOfBirth", "month")``); both forms normalise to the same
tuple of segments.
"""

from collections.abc import Sequence
from typing import Any, Union

FieldPath = Union[str, Sequence[str]]

PATH_SEPARATOR = "."


def split_path(path: FieldPath) -> tuple[str, ...]:
    """
    Normalise a field path into a tuple of segments.

    Raises:
        ValueError: If the path is empty or contains an empty segment.
        TypeError: If the path is neither a string nor a sequence of strings.
    """
    if isinstance(path, str):
        segments = tuple(path.split(PATH_SEPARATOR))
    elif isinstance(path, Sequence):
        segments = tuple(path)
        for segment in segments:
            if not isinstance(segment, str):
                raise TypeError(f"Path segments must be strings, got {type(segment).__name__}")
    else:
        raise TypeError(f"Field path must be a string or a sequence of strings, got {type(path).__name__}")

    if not segments or any(not segment for segment in segments):
        raise ValueError(f"Invalid field path: {path!r}")
    return segments


def join_path(path: FieldPath) -> str:
    """Return the canonical dotted form of a field path."""
    return PATH_SEPARATOR.join(split_path(path))


def get_in(tree: dict[str, Any], path: FieldPath) -> Any | None:
    """Read the value at ``path``, or None if any segment is absent."""
    node: Any = tree
    for segment in split_path(path):
        if not isinstance(node, dict) or segment not in node:
            return None
        node = node[segment]
    return node


def set_in(tree: dict[str, Any], path: FieldPath, value: Any) -> None:
    """Write ``value`` at ``path``, creating intermediate objects as needed."""
    *parents, leaf = split_path(path)
    node = tree
    for segment in parents:
        child = node.get(segment)
        if not isinstance(child, dict):
            child = {}
            node[segment] = child
        node = child
    node[leaf] = value


def delete_in(tree: dict[str, Any], path: FieldPath) -> bool:
    """
    Remove the value at ``path``.

    Parent objects left empty by the removal are pruned as well, so an
    untouched group stays absent rather than becoming ``{}``.

    Returns:
        True if a value was removed.
    """
    segments = split_path(path)
    trail: list[tuple[dict[str, Any], str]] = []
    node: Any = tree
    for segment in segments[:-1]:
        if not isinstance(node, dict) or not isinstance(node.get(segment), dict):
            return False
        trail.append((node, segment))
        node = node[segment]

    if not isinstance(node, dict) or segments[-1] not in node:
        return False
    del node[segments[-1]]

    for parent, segment in reversed(trail):
        if parent[segment]:
            break
        del parent[segment]
    return True
