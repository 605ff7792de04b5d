"""
Orchestrator

Glue layer. Wires parsing, traversal and enumeration together.
No matching logic lives here.

Files are processed one at a time, in enumeration order. A file that
fails to parse is logged and skipped; it never stops the run.
"""
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, List, Optional, Union

from .data_structures import Finding
from .detectors import DetectorContext
from .syntax import ParseError, parse_file, parse_source
from .walker import walk

logger = logging.getLogger(__name__)

SOURCE_SUFFIX = ".go"


@dataclass
class ScanStats:
    files_scanned: int = 0
    files_failed:  int = 0
    findings:      int = 0


def scan_source(source: bytes, path: str = "<source>") -> List[Finding]:
    """Scan in-memory Go source. Raises ParseError on syntax errors."""
    tree = parse_source(source, path)
    return list(walk(tree.root_node, DetectorContext(path=path)))


def scan_file(path: Union[str, Path]) -> List[Finding]:
    """Scan one Go file. Raises ParseError if it cannot be read or parsed."""
    tree = parse_file(path)
    return list(walk(tree.root_node, DetectorContext(path=str(path))))


def _log_walk_error(error: OSError) -> None:
    logger.warning(
        "Encountered an error accessing path %s: %s",
        error.filename,
        error.strerror or error,
    )


def iter_source_files(root: Union[str, Path]) -> Iterator[Path]:
    """
    Recursively yield every Go file under root, in lexical order.

    Inaccessible directories are logged and their subtree skipped.
    Symlinked directories are not followed.
    """
    for dirpath, dirnames, filenames in os.walk(root, onerror=_log_walk_error):
        dirnames.sort()
        for name in sorted(filenames):
            if name.endswith(SOURCE_SUFFIX):
                yield Path(dirpath) / name


def iter_findings(
    path: Union[str, Path],
    stats: Optional[ScanStats] = None,
) -> Iterator[Finding]:
    """
    Yield findings for a file or a whole directory tree.

    A file operand is scanned whatever its suffix; a directory operand
    is enumerated for Go files.
    """
    path = Path(path)
    if stats is None:
        stats = ScanStats()

    if path.is_dir():
        logger.info("Processing all go files in directory %s", path)
        files: Iterator[Path] = iter_source_files(path)
    else:
        files = iter([path])

    for file_path in files:
        logger.info("Processing file %s", file_path)
        stats.files_scanned += 1
        try:
            findings = scan_file(file_path)
        except ParseError as e:
            stats.files_failed += 1
            logger.error("Could not process file %s: %s", file_path, e.message)
            continue

        stats.findings += len(findings)
        yield from findings


def scan_path(path: Union[str, Path]) -> List[Finding]:
    """Scan a file or directory and collect all findings."""
    return list(iter_findings(path))
