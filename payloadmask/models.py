"""Data models for the payload mask engine."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional, Union


class Wildcard(Enum):
    """Reserved tree key matching any segment without a literal child."""
    ANY = "*"

    def __repr__(self) -> str:
        return "Wildcard.ANY"


SegmentKey = Union[str, Wildcard]


class LogLevel(Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERROR"

    @property
    def level(self) -> int:
        return {
            LogLevel.DEBUG: logging.DEBUG,
            LogLevel.INFO: logging.INFO,
            LogLevel.WARN: logging.WARNING,
            LogLevel.ERROR: logging.ERROR,
        }[self]


def _freeze(children: Optional[Mapping[SegmentKey, "MaskNode"]]) -> Mapping[SegmentKey, "MaskNode"]:
    return MappingProxyType(dict(children or {}))


@dataclass(frozen=True)
class MaskNode:
    """
    A node of the compiled mask tree.

    Nodes are immutable. Building and merging a tree always produces new
    nodes, so one compiled tree can be walked by any number of cursors.
    """
    name: SegmentKey
    is_select: bool
    is_root: bool = False
    children: Mapping[SegmentKey, MaskNode] = field(default_factory=dict)
    selects_anything: bool = field(init=False, repr=False, compare=False, default=False)

    def __post_init__(self):
        object.__setattr__(self, "children", _freeze(self.children))
        object.__setattr__(self, "selects_anything", self._can_select())

    @classmethod
    def root(cls, children: Optional[Mapping[SegmentKey, MaskNode]] = None) -> MaskNode:
        return cls("root", is_select=False, is_root=True, children=children)

    @property
    def is_leaf(self) -> bool:
        return not self.children

    @property
    def is_wildcard(self) -> bool:
        return self.name is Wildcard.ANY

    @property
    def wildcard_child(self) -> Optional[MaskNode]:
        return self.children.get(Wildcard.ANY)

    @property
    def is_terminal(self) -> bool:
        """A leaf, or a node whose only child is a leaf wildcard."""
        if self.is_leaf:
            return True
        if len(self.children) == 1:
            glob = self.wildcard_child
            return glob is not None and glob.is_leaf
        return False

    def child(self, key: SegmentKey) -> Optional[MaskNode]:
        return self.children.get(key)

    def resolve(self, segment: str) -> Optional[MaskNode]:
        """Find the child for a document segment, falling back to the wildcard."""
        node = self.children.get(segment)
        if node is None:
            return self.wildcard_child
        return node

    def fallback(self) -> bool:
        """Answer for a segment that resolves to no child at all."""
        if self.is_wildcard and self.is_leaf:
            return self.is_select
        if self.is_select:
            # An including path that doesn't name the key excludes it
            return False
        # The root never selects anything on its own
        return not self.is_root

    def _can_select(self) -> bool:
        """Whether any key at or below this node can still be tagged."""
        if self.is_select:
            return True
        if any(child.selects_anything for child in self.children.values()):
            return True
        # Unnamed keys fall through to fallback() when there is no wildcard
        return self.wildcard_child is None and self.fallback()

    def with_children(self, children: Mapping[SegmentKey, MaskNode]) -> MaskNode:
        return MaskNode(self.name, self.is_select, self.is_root, children)


@dataclass
class MaskConfig:
    """Configuration for masking a payload."""
    rules: str = ""
    log_level: LogLevel = LogLevel.INFO
    redact: list[str] = field(default_factory=list)
    redaction_value: str = "redacted"
