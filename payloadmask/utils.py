"""Utility functions for parsing and rendering mask rules."""

from __future__ import annotations

from typing import Any

from .models import Wildcard

ESCAPE = '\\'
RULE_SEPARATOR = ','
PATH_SEPARATOR = '.'


def split_unescape(text: str, separator: str) -> list[str]:
    """
    Split text on separator, honouring backslash escapes.

    An escaped separator is kept as a literal character of the current
    segment, with its backslash removed. An escaped backslash is kept as a
    pair so that later passes with a different separator still see it.

    Args:
        text: The string to split
        separator: A single separator character

    Returns:
        The list of segments, empty for empty input
    """
    segments = []
    current = []
    i = 0

    while i < len(text):
        char = text[i]

        if char == ESCAPE and i + 1 < len(text):
            following = text[i + 1]
            if following == separator:
                current.append(separator)
                i += 2
                continue
            if following == ESCAPE:
                current.append(ESCAPE * 2)
                i += 2
                continue
            current.append(char)
        elif char == separator:
            segments.append(''.join(current))
            current = []
        else:
            current.append(char)

        i += 1

    if text:
        segments.append(''.join(current))

    return segments


def segment_key(raw: str) -> str | Wildcard:
    """Turn a split rule segment into a tree key."""
    if raw == '*':
        return Wildcard.ANY

    result = []
    i = 0
    while i < len(raw):
        char = raw[i]
        if char == ESCAPE and i + 1 < len(raw) and raw[i + 1] in (ESCAPE, '*'):
            result.append(raw[i + 1])
            i += 2
            continue
        result.append(char)
        i += 1
    return ''.join(result)


def format_segment(key: str | Wildcard) -> str:
    """Render a tree key the way it would be written in a rule string."""
    if key is Wildcard.ANY:
        return '*'
    escaped = key.replace(ESCAPE, ESCAPE * 2)
    escaped = escaped.replace(RULE_SEPARATOR, ESCAPE + RULE_SEPARATOR)
    escaped = escaped.replace(PATH_SEPARATOR, ESCAPE + PATH_SEPARATOR)
    if escaped == '*':
        return ESCAPE + '*'
    return escaped


def document_segment(key: Any) -> str:
    """Document keys and array indexes are matched as strings."""
    if isinstance(key, str):
        return key
    return str(key)


def build_path(parent_path: str, key: Any) -> str:
    """Build a dotted rule-style path from a parent path and a document key."""
    segment = format_segment(document_segment(key))
    if not parent_path:
        return segment
    return f"{parent_path}{PATH_SEPARATOR}{segment}"


def escape_separator(text: str, separator: str) -> str:
    """Escape every unescaped separator in text, leaving existing escapes alone."""
    result = []
    i = 0
    while i < len(text):
        char = text[i]
        if char == ESCAPE and i + 1 < len(text):
            result.append(text[i:i + 2])
            i += 2
            continue
        if char == separator:
            result.append(ESCAPE)
        result.append(char)
        i += 1
    return ''.join(result)
