"""
gosyncscan - syntactic audit of Go concurrency primitives.

Walks one Go file at a time and reports channel make/send/receive and
sync package usage (Mutex, RWMutex, WaitGroup, Once, Cond, Locker).
"""
from .data_structures import Finding, IdiomKind, Position
from .orchestrator import scan_file, scan_path, scan_source
from .syntax import ParseError

__version__ = "0.1.0"

__all__ = [
    'Finding',
    'IdiomKind',
    'ParseError',
    'Position',
    'scan_file',
    'scan_path',
    'scan_source',
]
