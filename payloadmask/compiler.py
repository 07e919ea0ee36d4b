"""Rule compiler: turns a rule string into a mask tree."""

from __future__ import annotations

import logging
from functools import reduce
from typing import Optional

from .models import MaskNode, Wildcard
from .utils import RULE_SEPARATOR, PATH_SEPARATOR, split_unescape, segment_key

logger = logging.getLogger(__name__)


class RuleCompiler:
    """
    Compiles a comma-separated rule string into a single prefix tree.

    Grammar:
    - rules := chain (',' chain)*
    - chain := ['-'] segment ('.' segment)*
    - `\\,` and `\\.` are literal separators inside a segment
    - a `*` segment matches any key; `\\*` is a literal `*` key

    Malformed input is never rejected. Empty chains and empty segments are
    skipped.
    """

    EXCLUDE_PREFIX = '-'

    def parse_rules(self, text: str) -> list[str]:
        return split_unescape(text or "", RULE_SEPARATOR)

    def parse_rule(self, chain: str) -> list[str]:
        return [s for s in split_unescape(chain, PATH_SEPARATOR) if s]

    def make_chain(self, chain: str) -> Optional[MaskNode]:
        """
        Build the linear tree for a single rule chain.

        The deepest node gets a wildcard child carrying the chain's
        selection, so the rule also applies to everything nested below it.

        Returns:
            The top node of the chain, or None for an empty chain
        """
        is_select = not chain.startswith(self.EXCLUDE_PREFIX)
        if not is_select:
            chain = chain[len(self.EXCLUDE_PREFIX):]

        keys = [segment_key(s) for s in self.parse_rule(chain)]
        if not keys:
            return None

        node = MaskNode(Wildcard.ANY, is_select)
        for key in reversed(keys):
            node = MaskNode(key, is_select, children={node.name: node})
        return node

    def merge(self, parent: MaskNode, node: MaskNode) -> MaskNode:
        """
        Add node under parent, merging with an existing child of the same name.

        The child already in the tree keeps its selection; the incoming
        node only contributes children. Returns a new parent.
        """
        existing = parent.child(node.name)
        if existing is None:
            merged = node
        else:
            merged = reduce(self.merge, node.children.values(), existing)

        children = dict(parent.children)
        children[node.name] = merged
        return parent.with_children(children)

    def spread_wildcards(self, node: MaskNode) -> MaskNode:
        """
        Merge each wildcard subtree underneath its literal siblings.

        A literal key also matches the wildcard, so the wildcard's deeper
        rules apply to it wherever the literal's own rules are silent.
        """
        glob = node.wildcard_child
        children = {}
        for key, child in node.children.items():
            if glob is not None and key is not Wildcard.ANY:
                child = reduce(self.merge, glob.children.values(), child)
            children[key] = self.spread_wildcards(child)
        return node.with_children(children)

    def selects_by_default(self, root: MaskNode) -> bool:
        glob = root.wildcard_child
        return glob is not None and glob.is_select

    def close_exclusions(self, node: MaskNode, selected: bool) -> MaskNode:
        """
        Give exclusion paths with no selecting ancestor a rejecting wildcard.

        Below such a path an unnamed key falls back to the default of the
        enclosing scope, which is "select nothing" unless a leading `*` or
        an including ancestor says otherwise.
        """
        children = {}
        for key, child in node.children.items():
            if not selected and not child.is_select and not child.is_leaf \
                    and child.wildcard_child is None:
                child = self.merge(child, MaskNode(Wildcard.ANY, False))
            children[key] = self.close_exclusions(child, selected or child.is_select)
        return node.with_children(children)

    def compile(self, text: str) -> MaskNode:
        """Compile a full rule string into a root node."""
        root = MaskNode.root()
        compiled = 0

        for chain in self.parse_rules(text):
            node = self.make_chain(chain)
            if node is None:
                logger.debug("Skipping empty rule chain %r", chain)
                continue
            root = self.merge(root, node)
            compiled += 1

        root = self.spread_wildcards(root)
        root = self.close_exclusions(root, self.selects_by_default(root))
        logger.debug("Compiled %d rule chain(s) from %r", compiled, text)
        return root
