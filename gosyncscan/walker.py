"""
Traversal Engine

Pre-order, depth-first walk over a syntax tree. At every node, all
detectors registered for the node's kind run; children are always
visited, whether or not the parent matched.
"""
from typing import Iterator

from tree_sitter import Node

from .data_structures import Finding
from .detectors import DetectorContext
from .registry import REGISTRY, Registry, detectors_for
from .syntax import classify


def iter_nodes(root: Node) -> Iterator[Node]:
    """Yield root and every descendant once, pre-order, in source order."""
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


def walk(root: Node, context: DetectorContext, registry: Registry = REGISTRY) -> Iterator[Finding]:
    """Yield every finding in the tree, in traversal order."""
    for node in iter_nodes(root):
        for detector in detectors_for(classify(node), registry):
            yield from detector(node, context)
