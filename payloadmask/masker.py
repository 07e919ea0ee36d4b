"""Applies a compiled mask to decoded JSON documents."""

from __future__ import annotations

from typing import Any

from .mask import Cursor, Mask
from .utils import build_path


class Masker:
    """
    Filters a decoded document through a mask.

    Operations:
    - Drop object keys the mask does not allow
    - Keep list structure, masking each item on its own
    """

    def __init__(self, mask: Mask):
        self.mask = mask
        self.dropped_count = 0

    def mask_document(self, document: Any) -> tuple[Any, int]:
        """
        Apply the mask to a document.

        Args:
            document: Decoded JSON (dicts, lists and scalars)

        Returns:
            Tuple of (masked_document, dropped_count). The input is not
            modified.
        """
        self.dropped_count = 0
        masked = self._mask_recursive(document, self.mask.head())
        return masked, self.dropped_count

    def _mask_recursive(self, data: Any, head: Cursor) -> Any:
        if isinstance(data, dict):
            result = {}
            for key, value in data.items():
                if not head.can_tag(key, _is_leaf(value)):
                    self.dropped_count += 1
                    continue
                result[key] = self._mask_recursive(value, head.with_next(key))
            return result

        elif isinstance(data, list):
            return [
                self._mask_recursive(item, head.with_next(i))
                for i, item in enumerate(data)
            ]

        return data

    def tagged_paths(self, document: Any) -> list[str]:
        """List the dotted paths of every leaf value the mask keeps."""
        paths = []

        def walk(data: Any, head: Cursor, path: str):
            if isinstance(data, dict):
                for key, value in data.items():
                    if head.can_tag(key, _is_leaf(value)):
                        walk(value, head.with_next(key), build_path(path, key))
            elif isinstance(data, list):
                for i, item in enumerate(data):
                    walk(item, head.with_next(i), build_path(path, i))
            elif path:
                paths.append(path)

        walk(document, self.mask.head(), "")
        return paths


def _is_leaf(value: Any) -> bool:
    return not isinstance(value, (dict, list))


def get_masked_object(mask: Mask, document: Any) -> Any:
    """Return a masked copy of document."""
    masked, _ = Masker(mask).mask_document(document)
    return masked
