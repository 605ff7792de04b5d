"""
Concurrency Idiom Detectors

Detectors are pure functions that answer: "Which idioms occur at this node?"

Design principles:
- Return a list of Findings (empty when nothing matched)
- Stateless (no history, no configuration)
- Purely syntactic: no symbol, type or alias resolution
- Inspect only the node handed in, plus one selector level for
  qualified references like sync.Mutex

Ambiguity handling:
- If the node does not have the exact expected shape → return []
- Shadowed or aliased library names are misclassified, by construction
"""
from dataclasses import dataclass
from typing import Callable, List

from tree_sitter import Node

from ..data_structures import Finding, Position


@dataclass(frozen=True)
class DetectorContext:
    """
    Minimal context provided to detectors.

    Only the file being scanned; detectors never look beyond
    the node they are given.
    """
    path: str

    def position(self, node: Node) -> Position:
        """1-based position of a node inside the scanned file."""
        row, column = node.start_point[0], node.start_point[1]
        return Position(file=self.path, line=row + 1, column=column + 1)


# Detector type signature
# Pure function: (node, context) -> [Finding, ...]
Detector = Callable[[Node, DetectorContext], List[Finding]]


# Import all detector functions
from .calls import (
    detect_broadcast_call,
    detect_cond_construction,
    detect_do_call,
    detect_done_call,
    detect_add_call,
    detect_lock_call,
    detect_signal_call,
    detect_unlock_call,
    detect_wait_call,
)
from .channels import detect_channel_make, detect_channel_receive, detect_channel_send
from .declarations import (
    detect_locker_declaration,
    detect_locker_field,
    detect_mutex_declaration,
    detect_mutex_field,
    detect_once_declaration,
    detect_once_field,
    detect_rwmutex_declaration,
    detect_rwmutex_field,
    detect_waitgroup_declaration,
    detect_waitgroup_field,
)

__all__ = [
    'DetectorContext',
    'Detector',
    'detect_channel_make',
    'detect_channel_send',
    'detect_channel_receive',
    'detect_waitgroup_declaration',
    'detect_mutex_declaration',
    'detect_rwmutex_declaration',
    'detect_locker_declaration',
    'detect_once_declaration',
    'detect_waitgroup_field',
    'detect_mutex_field',
    'detect_rwmutex_field',
    'detect_locker_field',
    'detect_once_field',
    'detect_cond_construction',
    'detect_done_call',
    'detect_add_call',
    'detect_wait_call',
    'detect_lock_call',
    'detect_unlock_call',
    'detect_signal_call',
    'detect_broadcast_call',
    'detect_do_call',
]
