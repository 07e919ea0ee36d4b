"""Compiled masks and the cursors used to walk them."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from .compiler import RuleCompiler
from .models import MaskNode, Wildcard
from .utils import document_segment, format_segment


class Mask:
    """
    The mask to apply to JSON-like documents.

    The rule string is compiled once; the resulting tree is immutable and
    may be shared between threads.

    Usage:
        mask = Mask("*,-user.password")
        head = mask.head()
        if head.can_tag("user"):
            head = head.with_next("user")
    """

    def __init__(self, rules: str = ""):
        """
        Args:
            rules: Comma-separated rule chains, e.g. "foo.bar,-foo.bar.baz"
        """
        self.rules = rules or ""
        self._root = RuleCompiler().compile(self.rules)

    @property
    def root(self) -> MaskNode:
        return self._root

    @property
    def selects_by_default(self) -> bool:
        """True when keys without a rule of their own are tagged at the top level."""
        return RuleCompiler().selects_by_default(self._root)

    def head(self) -> Cursor:
        return Cursor(self)

    def describe(self) -> list[str]:
        """List every compiled rule path and whether it includes or excludes."""
        lines = []

        def walk(node: MaskNode, path: list[str]):
            for key, child in node.children.items():
                if key is Wildcard.ANY and child.is_leaf:
                    continue
                child_path = path + [format_segment(key)]
                action = "include" if child.is_select else "exclude"
                lines.append(f"{'.'.join(child_path)} => {action}")
                walk(child, child_path)

        walk(self._root, [])
        return sorted(lines)

    def __repr__(self) -> str:
        return f"Mask({self.rules!r})"


@dataclass(frozen=True)
class Cursor:
    """
    A position in a mask tree, advanced one document segment at a time.

    Advancing returns a new cursor. Once a path leaves the tree the cursor
    freezes with the last answer, and every deeper call returns it.
    """
    mask: Mask
    node: Optional[MaskNode] = None
    frozen: Optional[bool] = None

    def __post_init__(self):
        if self.node is None and self.frozen is None:
            object.__setattr__(self, "node", self.mask.root)

    @property
    def is_frozen(self) -> bool:
        return self.frozen is not None

    def can_tag(self, segment: Any, is_leaf_value: bool = False) -> bool:
        """
        Decide whether the value under segment may be tagged.

        Args:
            segment: An object key or array index
            is_leaf_value: True when the value under segment is a scalar

        Returns:
            False when the value must be dropped. True for a non-leaf value
            means the decision is deferred to its children.
        """
        if self.frozen is not None:
            return self.frozen

        child = self.node.resolve(document_segment(segment))
        if child is None:
            return self.node.fallback()

        if not child.selects_anything:
            # Nothing below this key can be tagged
            return False
        if is_leaf_value or child.is_terminal:
            return child.is_select
        # More of the tree lies below, keep going down
        return True

    def with_next(self, segment: Any) -> Cursor:
        if self.frozen is not None:
            return self

        child = self.node.resolve(document_segment(segment))
        if child is None:
            return Cursor(self.mask, frozen=self.node.fallback())
        return Cursor(self.mask, child)
