"""
Explanation Layer

Translate Findings to output: one sentence per finding for people,
one JSON record per finding for tools.
"""
import json
from typing import Any, Dict, Iterable, Iterator

from .data_structures import Finding, IdiomKind

OUTPUT_FORMATS = ("text", "json")


_DECLARATION_LABEL = {
    IdiomKind.WAITGROUP_DECLARATION: "waitgroup",
    IdiomKind.MUTEX_DECLARATION:     "mutex",
    IdiomKind.RWMUTEX_DECLARATION:   "rwmutex",
    IdiomKind.LOCKER_DECLARATION:    "locker",
    IdiomKind.ONCE_DECLARATION:      "once",
}

_FIELD_LABEL = {
    IdiomKind.WAITGROUP_FIELD: "waitgroup",
    IdiomKind.MUTEX_FIELD:     "mutex",
    IdiomKind.RWMUTEX_FIELD:   "rwmutex",
    IdiomKind.LOCKER_FIELD:    "locker",
    IdiomKind.ONCE_FIELD:      "once",
}

_METHOD_CALLS = {
    IdiomKind.LOCK_CALL,
    IdiomKind.UNLOCK_CALL,
    IdiomKind.WAITGROUP_ADD,
    IdiomKind.WAITGROUP_DONE,
    IdiomKind.WAITGROUP_WAIT,
    IdiomKind.COND_SIGNAL,
    IdiomKind.COND_BROADCAST,
    IdiomKind.ONCE_DO,
}


def _sentence_channel_make(finding: Finding) -> str:
    buffer = finding.get("buffer")
    size = finding.get("buffer_size")
    base = f"Found a channel of type {finding.fragment}"

    if buffer == "literal":
        return f"{base} with literal buffer size {size}"
    if buffer == "constant":
        return f"{base} with buffer size {size}"
    if buffer == "computed":
        return f"{base} with computed buffer size {size}"
    return base


def _sentence(finding: Finding) -> str:
    kind = finding.kind

    if kind == IdiomKind.CHANNEL_MAKE:
        return _sentence_channel_make(finding)
    if kind == IdiomKind.CHANNEL_SEND:
        return f"Found a send to channel {finding.fragment} for value {finding.get('value')}"
    if kind == IdiomKind.CHANNEL_RECEIVE:
        if finding.get("operand") == "identifier":
            return f"Found a read of channel {finding.fragment}"
        return f"Found a read of channel from expr {finding.fragment}"
    if kind in _DECLARATION_LABEL:
        return f"Found declaration of {_DECLARATION_LABEL[kind]} {finding.fragment}"
    if kind in _FIELD_LABEL:
        return f"Found declaration of {_FIELD_LABEL[kind]} field {finding.fragment}"
    if kind in _METHOD_CALLS:
        return f"Found call of {finding.get('method')} on node {finding.fragment}"
    if kind == IdiomKind.COND_CONSTRUCTION:
        return "Found call of NewCond"

    raise ValueError(f"Unknown idiom kind: {kind}")


def describe(finding: Finding) -> str:
    """Human-readable sentence ending with the finding's position."""
    return f"{_sentence(finding)} at {finding.position}"


def to_record(finding: Finding) -> Dict[str, Any]:
    """Flat reportable record: idiom, location, then idiom-specific fields."""
    record: Dict[str, Any] = {
        "idiom":  finding.kind.value,
        "file":   finding.position.file,
        "line":   finding.position.line,
        "column": finding.position.column,
    }
    if finding.fragment is not None:
        record["fragment"] = finding.fragment
    record.update(finding.details)
    return record


def render(findings: Iterable[Finding], fmt: str = "text") -> Iterator[str]:
    """Yield one output line per finding, lazily."""
    if fmt not in OUTPUT_FORMATS:
        raise ValueError(f"Unknown output format: {fmt}")

    for finding in findings:
        if fmt == "json":
            yield json.dumps(to_record(finding))
        else:
            yield describe(finding)
