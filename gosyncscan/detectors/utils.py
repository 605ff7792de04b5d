"""
Stateless utility functions for syntax-tree pattern detection.

These are pure helper functions, not class methods.
Detectors use these as needed but remain standalone.
"""
from typing import List, Optional

from tree_sitter import Node

from ..syntax import render

SYNC_PACKAGE = "sync"
MAKE_BUILTIN = "make"

# Literal node types; int_literal is the only one reported verbatim as a size
INT_LITERAL = "int_literal"
LITERAL_TYPES = frozenset({
    "int_literal",
    "float_literal",
    "imaginary_literal",
    "rune_literal",
    "interpreted_string_literal",
    "raw_string_literal",
})


# Qualified reference utilities

def qualified_parts(node: Optional[Node]) -> Optional[tuple[str, str]]:
    """
    Split a one-level qualified reference into (namespace, member).

    Examples:
        sync.Mutex       (qualified_type)      -> ("sync", "Mutex")
        sync.NewCond     (selector_expression) -> ("sync", "NewCond")
        s.mu.Lock        (selector_expression) -> None, operand not an identifier
        *sync.Mutex      (pointer_type)        -> None
    """
    if node is None:
        return None

    if node.type == "qualified_type":
        package = node.child_by_field_name("package")
        name = node.child_by_field_name("name")
    elif node.type == "selector_expression":
        package = node.child_by_field_name("operand")
        name = node.child_by_field_name("field")
        if package is None or package.type != "identifier":
            return None
    else:
        return None

    if package is None or name is None:
        return None
    return render(package), render(name)


def is_qualified_reference(node: Optional[Node], namespace: str, member: str) -> bool:
    """Check if node is exactly the reference namespace.member."""
    return qualified_parts(node) == (namespace, member)


# Name utilities

def is_identifier(node: Optional[Node]) -> bool:
    return node is not None and node.type == "identifier"


def declared_names(node: Node) -> List[Node]:
    """Name nodes of a spec or field, in declaration order."""
    return node.children_by_field_name("name")


def declaration_specs(decl: Node) -> List[Node]:
    """
    The var_spec / const_spec children of a declaration, in order.

    Grouped declarations may wrap the specs in a *_spec_list node.
    """
    specs = []
    for child in decl.named_children:
        if child.type in ("var_spec", "const_spec"):
            specs.append(child)
        elif child.type in ("var_spec_list", "const_spec_list"):
            specs.extend(
                c for c in child.named_children if c.type in ("var_spec", "const_spec")
            )
    return specs


# Call utilities

def call_arguments(call: Node) -> List[Node]:
    """Argument nodes of a call_expression, comments excluded."""
    args = call.child_by_field_name("arguments")
    if args is None:
        return []
    return [a for a in args.named_children if a.type != "comment"]
