"""
End-to-end tests for gosyncscan.orchestrator.

Uses small Go trees written to temporary directories. Asserts on:
    - Idiom kinds and their order
    - Per-file failure isolation and logging
Does NOT assert on output wording.
"""
import logging
import os
import sys
import tempfile
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from gosyncscan.data_structures import IdiomKind
from gosyncscan.orchestrator import (
    ScanStats,
    iter_findings,
    iter_source_files,
    scan_file,
    scan_path,
    scan_source,
)
from gosyncscan.syntax import ParseError

# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

CHANNELS_GO = """package main

func main() {
	ch := make(chan int, 5)
	ch <- 1
	<-ch
}
"""

LOCKS_GO = """package worker

import "sync"

var mu sync.Mutex

func step() {
	mu.Lock()
	defer mu.Unlock()
}
"""

BROKEN_GO = "package main\n\nfunc main( {\n"


def _write_tree(root: Path) -> None:
    (root / "a.go").write_text(CHANNELS_GO)
    (root / "broken.go").write_text(BROKEN_GO)
    (root / "notes.txt").write_text("mu.Lock()\n")
    (root / "pkg").mkdir()
    (root / "pkg" / "worker.go").write_text(LOCKS_GO)


def _kinds(findings):
    return [f.kind for f in findings]


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------

class TestOrchestrator:

    def test_scan_source(self):
        findings = scan_source(CHANNELS_GO.encode("utf-8"), "mem.go")
        assert _kinds(findings) == [
            IdiomKind.CHANNEL_MAKE,
            IdiomKind.CHANNEL_SEND,
            IdiomKind.CHANNEL_RECEIVE,
        ]
        assert all(f.position.file == "mem.go" for f in findings)

    def test_variadic_sync_parameter_not_reported(self):
        source = b'package main\n\nimport "sync"\n\nfunc f(ys ...sync.WaitGroup) {}\n'
        assert scan_source(source, "variadic.go") == []

    def test_scan_file_positions_use_path(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "worker.go"
            path.write_text(LOCKS_GO)

            findings = scan_file(path)
            assert _kinds(findings) == [
                IdiomKind.MUTEX_DECLARATION,
                IdiomKind.LOCK_CALL,
                IdiomKind.UNLOCK_CALL,
            ]
            assert findings[0].position.file == str(path)
            assert findings[0].position.line == 5
            assert findings[0].fragment == "mu"

    def test_scan_file_parse_error_raises(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "broken.go"
            path.write_text(BROKEN_GO)
            with pytest.raises(ParseError):
                scan_file(path)

    def test_enumeration_is_sorted_and_filtered(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            _write_tree(root)

            files = [p.relative_to(root).as_posix() for p in iter_source_files(root)]
            assert files == ["a.go", "broken.go", "pkg/worker.go"]

    def test_directory_mode_skips_broken_files(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            _write_tree(root)

            stats = ScanStats()
            findings = list(iter_findings(root, stats))

            assert _kinds(findings) == [
                IdiomKind.CHANNEL_MAKE,
                IdiomKind.CHANNEL_SEND,
                IdiomKind.CHANNEL_RECEIVE,
                IdiomKind.MUTEX_DECLARATION,
                IdiomKind.LOCK_CALL,
                IdiomKind.UNLOCK_CALL,
            ]
            assert stats.files_scanned == 3
            assert stats.files_failed == 1
            assert stats.findings == 6

    def test_single_file_mode_ignores_suffix(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "snippet.txt"
            path.write_text(CHANNELS_GO)
            assert len(scan_path(path)) == 3

    def test_single_broken_file_yields_nothing(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "broken.go"
            path.write_text(BROKEN_GO)

            stats = ScanStats()
            assert list(iter_findings(path, stats)) == []
            assert stats.files_scanned == 1
            assert stats.files_failed == 1

    def test_empty_directory(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            assert scan_path(tmpdir) == []

    def test_repeatable(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            _write_tree(root)
            assert scan_path(root) == scan_path(root)


# ---------------------------------------------------------------------------
# Logging (pytest fixtures)
# ---------------------------------------------------------------------------

def test_parse_failure_logged_once(caplog):
    caplog.set_level(logging.INFO, logger="gosyncscan")
    with tempfile.TemporaryDirectory() as tmpdir:
        root = Path(tmpdir)
        _write_tree(root)

        findings = scan_path(root)

    errors = [r for r in caplog.records if r.levelno == logging.ERROR]
    assert len(errors) == 1
    assert "broken.go" in errors[0].getMessage()
    assert len(findings) == 6

    processed = [r.getMessage() for r in caplog.records if r.levelno == logging.INFO]
    assert any("worker.go" in m for m in processed)


def test_missing_root_logged(caplog):
    caplog.set_level(logging.WARNING, logger="gosyncscan")
    with tempfile.TemporaryDirectory() as tmpdir:
        missing = Path(tmpdir) / "gone"
        assert list(iter_source_files(missing)) == []

    warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
    assert len(warnings) == 1
    assert "gone" in warnings[0].getMessage()


@pytest.mark.skipif(
    not hasattr(os, "geteuid") or os.geteuid() == 0,
    reason="permission bits are not enforced for root",
)
def test_inaccessible_directory_skipped(caplog):
    caplog.set_level(logging.WARNING, logger="gosyncscan")
    with tempfile.TemporaryDirectory() as tmpdir:
        root = Path(tmpdir)
        _write_tree(root)
        locked = root / "locked"
        locked.mkdir()
        (locked / "hidden.go").write_text(LOCKS_GO)
        locked.chmod(0)
        try:
            files = [p.name for p in iter_source_files(root)]
        finally:
            locked.chmod(0o755)

    assert "hidden.go" not in files
    assert "worker.go" in files
    assert any("locked" in r.getMessage() for r in caplog.records)


# ---------------------------------------------------------------------------
# Runner
# ---------------------------------------------------------------------------

def run_all_tests():
    print("Running orchestrator end-to-end tests...\n")

    test_instance = TestOrchestrator()
    methods = [m for m in dir(test_instance) if m.startswith("test_")]

    passed = 0
    failed = 0

    for method_name in sorted(methods):
        label = f"Orchestrator.{method_name}"
        try:
            getattr(test_instance, method_name)()
            print(f"  ✓ {label}")
            passed += 1
        except Exception as e:
            print(f"  ✗ {label}")
            print(f"      {e}")
            failed += 1

    print(f"\n{'✅' if failed == 0 else '❌'} {passed} passed, {failed} failed")
    return failed == 0


if __name__ == "__main__":
    sys.exit(0 if run_all_tests() else 1)
