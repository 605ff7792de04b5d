"""
Channel pattern detectors.

Detects channel allocation (make), sends and receives.

Each detector is a pure function: (node, context) -> [Finding, ...]
"""
from typing import List

from tree_sitter import Node

from . import DetectorContext
from ..data_structures import Finding, IdiomKind
from ..syntax import render
from .utils import INT_LITERAL, LITERAL_TYPES, MAKE_BUILTIN, call_arguments, is_identifier


def detect_channel_make(node: Node, context: DetectorContext) -> List[Finding]:
    """
    Detect make(chan T) and make(chan T, size).

    Buffer description:
    - one argument            -> unbuffered
    - integer literal size    -> literal, reported verbatim
    - any other literal       -> constant ("a buffer size")
    - any other expression    -> computed, rendered

    Three or more arguments never denote a channel and are ignored.
    """
    if node.type != "call_expression":
        return []

    callee = node.child_by_field_name("function")
    if not is_identifier(callee) or render(callee) != MAKE_BUILTIN:
        return []

    args = call_arguments(node)
    if len(args) not in (1, 2) or args[0].type != "channel_type":
        return []

    element = args[0].child_by_field_name("value")
    if element is None:
        return []
    element_type = render(element)

    if len(args) == 1:
        details = (("buffer", "unbuffered"),)
    else:
        size = args[1]
        if size.type == INT_LITERAL:
            details = (("buffer", "literal"), ("buffer_size", render(size)))
        elif size.type in LITERAL_TYPES:
            details = (("buffer", "constant"), ("buffer_size", render(size)))
        else:
            details = (("buffer", "computed"), ("buffer_size", render(size)))

    return [Finding(IdiomKind.CHANNEL_MAKE, context.position(node), element_type, details)]


def detect_channel_send(node: Node, context: DetectorContext) -> List[Finding]:
    """
    Detect ch <- value.

    Only a bare identifier channel is reported; s.ch <- v yields nothing.
    """
    if node.type != "send_statement":
        return []

    channel = node.child_by_field_name("channel")
    value = node.child_by_field_name("value")
    if not is_identifier(channel) or value is None:
        return []

    return [Finding(
        IdiomKind.CHANNEL_SEND,
        context.position(node),
        render(channel),
        (("value", render(value)),),
    )]


def detect_channel_receive(node: Node, context: DetectorContext) -> List[Finding]:
    """Detect <-ch, including receives from compound expressions."""
    if node.type != "unary_expression":
        return []

    operator = node.child_by_field_name("operator")
    if operator is None or operator.type != "<-":
        return []

    operand = node.child_by_field_name("operand")
    if operand is None:
        return []

    shape = "identifier" if is_identifier(operand) else "expression"
    return [Finding(
        IdiomKind.CHANNEL_RECEIVE,
        context.position(node),
        render(operand),
        (("operand", shape),),
    )]
