"""
Synchronization call detectors.

Detects method selections on sync objects (mu.Lock, wg.Done, once.Do, ...)
and construction of condition variables via sync.NewCond.

Each detector is a pure function: (node, context) -> [Finding, ...]

IMPORTANT: Method detectors match on the selector name alone.
Any receiver with a Lock or Done method is reported; the receiver's
type is never looked up.
"""
from typing import List

from tree_sitter import Node

from . import Detector, DetectorContext
from ..data_structures import Finding, IdiomKind
from ..syntax import render
from .utils import SYNC_PACKAGE, is_qualified_reference


def method_selection(method: str, kind: IdiomKind) -> Detector:
    """Build a detector for receiver.<method> selections."""
    def detector(node: Node, context: DetectorContext) -> List[Finding]:
        if node.type != "selector_expression":
            return []

        selector = node.child_by_field_name("field")
        receiver = node.child_by_field_name("operand")
        if selector is None or receiver is None or render(selector) != method:
            return []

        return [Finding(
            kind,
            context.position(node),
            render(receiver),
            (("method", method),),
        )]

    detector.__name__ = f"detect_{method.lower()}_call"
    detector.__doc__ = f"Detect selections of the {method} method on any receiver."
    return detector


def detect_cond_construction(node: Node, context: DetectorContext) -> List[Finding]:
    """Detect sync.NewCond(...) calls. Existence only, no payload."""
    if node.type != "call_expression":
        return []

    callee = node.child_by_field_name("function")
    if not is_qualified_reference(callee, SYNC_PACKAGE, "NewCond"):
        return []

    return [Finding(IdiomKind.COND_CONSTRUCTION, context.position(node))]


detect_done_call      = method_selection("Done",      IdiomKind.WAITGROUP_DONE)
detect_add_call       = method_selection("Add",       IdiomKind.WAITGROUP_ADD)
detect_wait_call      = method_selection("Wait",      IdiomKind.WAITGROUP_WAIT)
detect_lock_call      = method_selection("Lock",      IdiomKind.LOCK_CALL)
detect_unlock_call    = method_selection("Unlock",    IdiomKind.UNLOCK_CALL)
detect_signal_call    = method_selection("Signal",    IdiomKind.COND_SIGNAL)
detect_broadcast_call = method_selection("Broadcast", IdiomKind.COND_BROADCAST)
detect_do_call        = method_selection("Do",        IdiomKind.ONCE_DO)
