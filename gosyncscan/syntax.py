"""
Syntax Tree Provider - tree-sitter adapter for Go sources.

Turns one file's bytes into a tree-sitter tree, classifies nodes into the
closed NodeKind enumeration used for detector dispatch, and renders
sub-expressions back to source text.

tree-sitter never refuses input; it builds ERROR / missing nodes instead.
A tree carrying any of those is treated as a failed parse.
"""
import logging
from enum import Enum
from pathlib import Path
from typing import Dict, Optional, Union

import tree_sitter_go
from tree_sitter import Language, Node, Parser, Tree

logger = logging.getLogger(__name__)


class ParseError(Exception):
    """The file text could not become a syntax tree."""

    def __init__(self, path: str, message: str):
        super().__init__(f"{path}: {message}")
        self.path = path
        self.message = message


class NodeKind(Enum):
    CALL_EXPRESSION     = "call_expression"
    SEND_STATEMENT      = "send_statement"
    UNARY_OPERATION     = "unary_operation"
    GENERIC_DECLARATION = "generic_declaration"
    STRUCT_FIELD        = "struct_field"
    MEMBER_ACCESS       = "member_access"
    OTHER               = "other"


_KIND_BY_NODE_TYPE: Dict[str, NodeKind] = {
    "call_expression":                NodeKind.CALL_EXPRESSION,
    "send_statement":                 NodeKind.SEND_STATEMENT,
    "unary_expression":               NodeKind.UNARY_OPERATION,
    "var_declaration":                NodeKind.GENERIC_DECLARATION,
    "const_declaration":              NodeKind.GENERIC_DECLARATION,
    "field_declaration":              NodeKind.STRUCT_FIELD,
    "parameter_declaration":          NodeKind.STRUCT_FIELD,
    "variadic_parameter_declaration": NodeKind.STRUCT_FIELD,
    "selector_expression":            NodeKind.MEMBER_ACCESS,
}


def classify(node: Node) -> NodeKind:
    """Return the dispatch kind of a node."""
    return _KIND_BY_NODE_TYPE.get(node.type, NodeKind.OTHER)


def render(node: Node) -> str:
    """Source text of a node, used to report arbitrary sub-expressions."""
    return node.text.decode("utf-8", errors="replace")


_parser: Optional[Parser] = None


def _get_parser() -> Parser:
    global _parser
    if _parser is None:
        _parser = Parser(Language(tree_sitter_go.language()))
    return _parser


def _first_error(node: Node) -> Optional[Node]:
    """Pre-order search for the first ERROR or missing node."""
    stack = [node]
    while stack:
        current = stack.pop()
        if current.type == "ERROR" or current.is_missing:
            return current
        if current.has_error:
            stack.extend(reversed(current.children))
    return None


def parse_source(source: bytes, path: str = "<source>") -> Tree:
    """
    Parse Go source bytes.

    Raises ParseError when the tree contains syntax errors.
    """
    tree = _get_parser().parse(source)
    if tree.root_node.has_error:
        bad = _first_error(tree.root_node)
        if bad is None:
            raise ParseError(path, "syntax error")
        line, column = bad.start_point[0] + 1, bad.start_point[1] + 1
        what = f"missing {bad.type}" if bad.is_missing else "syntax error"
        raise ParseError(path, f"{what} at {line}:{column}")
    return tree


def parse_file(path: Union[str, Path]) -> Tree:
    """Read and parse one Go file. Raises ParseError on failure."""
    try:
        source = Path(path).read_bytes()
    except OSError as e:
        raise ParseError(str(path), f"cannot read file: {e.strerror or e}") from e
    logger.debug("Parsing %s (%d bytes)", path, len(source))
    return parse_source(source, str(path))
