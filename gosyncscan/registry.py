"""
Detector Registry

Static table: node kind -> ordered detectors accepting that kind.
Order within a kind is the order findings are emitted for one node.
"""
from typing import Dict, Mapping, Tuple

from .detectors import (
    Detector,
    detect_add_call,
    detect_broadcast_call,
    detect_channel_make,
    detect_channel_receive,
    detect_channel_send,
    detect_cond_construction,
    detect_do_call,
    detect_done_call,
    detect_lock_call,
    detect_locker_declaration,
    detect_locker_field,
    detect_mutex_declaration,
    detect_mutex_field,
    detect_once_declaration,
    detect_once_field,
    detect_rwmutex_declaration,
    detect_rwmutex_field,
    detect_signal_call,
    detect_unlock_call,
    detect_wait_call,
    detect_waitgroup_declaration,
    detect_waitgroup_field,
)
from .syntax import NodeKind

Registry = Mapping[NodeKind, Tuple[Detector, ...]]


REGISTRY: Dict[NodeKind, Tuple[Detector, ...]] = {
    NodeKind.CALL_EXPRESSION: (
        detect_channel_make,
        detect_cond_construction,
    ),
    NodeKind.SEND_STATEMENT: (
        detect_channel_send,
    ),
    NodeKind.UNARY_OPERATION: (
        detect_channel_receive,
    ),
    NodeKind.GENERIC_DECLARATION: (
        detect_waitgroup_declaration,
        detect_mutex_declaration,
        detect_rwmutex_declaration,
        detect_locker_declaration,
        detect_once_declaration,
    ),
    NodeKind.STRUCT_FIELD: (
        detect_waitgroup_field,
        detect_mutex_field,
        detect_rwmutex_field,
        detect_locker_field,
        detect_once_field,
    ),
    NodeKind.MEMBER_ACCESS: (
        detect_done_call,
        detect_add_call,
        detect_wait_call,
        detect_lock_call,
        detect_unlock_call,
        detect_signal_call,
        detect_broadcast_call,
        detect_do_call,
    ),
}


# Every kind except OTHER has detectors; OTHER never does.
assert set(REGISTRY) == set(NodeKind) - {NodeKind.OTHER}


def detectors_for(kind: NodeKind, registry: Registry = REGISTRY) -> Tuple[Detector, ...]:
    """Detectors registered for a kind, in registration order."""
    return registry.get(kind, ())
