"""
Synchronization-object declaration detectors.

Detects variables and fields declared with one of the sync package types:
WaitGroup, Mutex, RWMutex, Locker and Once.

    var mu sync.Mutex              -> MUTEX_DECLARATION (mu)
    var a, b sync.WaitGroup        -> WAITGROUP_DECLARATION (a), (b)
    type S struct{ mu sync.Mutex } -> MUTEX_FIELD (mu)
    func f(wg sync.WaitGroup)      -> WAITGROUP_FIELD (wg)

Each detector is a pure function: (node, context) -> [Finding, ...]

Only the exact qualified reference sync.<Type> matches. Pointers, aliases
and embedded fields are not reported.
"""
from typing import List

from tree_sitter import Node

from . import Detector, DetectorContext
from ..data_structures import Finding, IdiomKind
from ..syntax import render
from .utils import SYNC_PACKAGE, declaration_specs, declared_names, is_qualified_reference

DECLARATION_TYPES = ("var_declaration", "const_declaration")
# Variadic parameters are excluded: their declared type is ...sync.T, not sync.T.
FIELD_TYPES = (
    "field_declaration",
    "parameter_declaration",
)


def _named_findings(
    holder: Node,
    member: str,
    kind: IdiomKind,
    context: DetectorContext,
) -> List[Finding]:
    """One Finding per declared name when holder's type is sync.<member>."""
    declared_type = holder.child_by_field_name("type")
    if not is_qualified_reference(declared_type, SYNC_PACKAGE, member):
        return []

    type_text = render(declared_type)
    return [
        Finding(kind, context.position(name), render(name), (("type", type_text),))
        for name in declared_names(holder)
    ]


def sync_declaration(member: str, kind: IdiomKind, first_spec_only: bool = False) -> Detector:
    """
    Build a detector for var/const declarations of type sync.<member>.

    With first_spec_only, a grouped declaration is inspected only up to
    its first spec.
    """
    def detector(node: Node, context: DetectorContext) -> List[Finding]:
        if node.type not in DECLARATION_TYPES:
            return []

        specs = declaration_specs(node)
        if first_spec_only:
            specs = specs[:1]

        findings = []
        for spec in specs:
            findings.extend(_named_findings(spec, member, kind, context))
        return findings

    detector.__name__ = f"detect_{member.lower()}_declaration"
    detector.__doc__ = f"Detect declarations of type {SYNC_PACKAGE}.{member}."
    return detector


def sync_field(member: str, kind: IdiomKind) -> Detector:
    """Build a detector for struct fields and parameters of type sync.<member>."""
    def detector(node: Node, context: DetectorContext) -> List[Finding]:
        if node.type not in FIELD_TYPES:
            return []
        return _named_findings(node, member, kind, context)

    detector.__name__ = f"detect_{member.lower()}_field"
    detector.__doc__ = f"Detect fields and parameters of type {SYNC_PACKAGE}.{member}."
    return detector


detect_waitgroup_declaration = sync_declaration("WaitGroup", IdiomKind.WAITGROUP_DECLARATION)
detect_mutex_declaration     = sync_declaration("Mutex",     IdiomKind.MUTEX_DECLARATION)
detect_rwmutex_declaration   = sync_declaration("RWMutex",   IdiomKind.RWMUTEX_DECLARATION)
detect_once_declaration      = sync_declaration("Once",      IdiomKind.ONCE_DECLARATION)

# Known limitation: only the first spec of a grouped declaration is checked.
detect_locker_declaration = sync_declaration(
    "Locker", IdiomKind.LOCKER_DECLARATION, first_spec_only=True
)

detect_waitgroup_field = sync_field("WaitGroup", IdiomKind.WAITGROUP_FIELD)
detect_mutex_field     = sync_field("Mutex",     IdiomKind.MUTEX_FIELD)
detect_rwmutex_field   = sync_field("RWMutex",   IdiomKind.RWMUTEX_FIELD)
detect_locker_field    = sync_field("Locker",    IdiomKind.LOCKER_FIELD)
detect_once_field      = sync_field("Once",      IdiomKind.ONCE_FIELD)
