from __future__ import annotations

"""
Unit tests for Watch Mode.

Change detection is exercised through explicit polls; no background
threads are started except for the debounce test.
"""

import os
import threading
from pathlib import Path

from next_introspect.interface.cli.watch import ProjectWatcher


def _watcher(root: Path, calls: list) -> ProjectWatcher:
    return ProjectWatcher(str(root), lambda: calls.append(1), interval=0.01, debounce=0.01)


def test_snapshot_filters_files(tmp_path: Path) -> None:
    (tmp_path / "app").mkdir()
    (tmp_path / "app" / "page.tsx").write_text("", encoding="utf-8")
    (tmp_path / "README.md").write_text("", encoding="utf-8")
    (tmp_path / "node_modules" / "x").mkdir(parents=True)
    (tmp_path / "node_modules" / "x" / "index.js").write_text("", encoding="utf-8")

    snapshot = _watcher(tmp_path, []).snapshot()
    assert list(snapshot) == [os.path.join(str(tmp_path), "app", "page.tsx")]


def test_poll_detects_add_modify_remove(tmp_path: Path) -> None:
    watcher = _watcher(tmp_path, [])
    target = tmp_path / "page.tsx"

    assert watcher.poll_once() is False

    target.write_text("a", encoding="utf-8")
    assert watcher.poll_once() is True
    assert watcher.poll_once() is False

    stat = target.stat()
    os.utime(target, (stat.st_atime, stat.st_mtime + 10))
    assert watcher.poll_once() is True

    target.unlink()
    assert watcher.poll_once() is True


def test_trigger_skips_overlapping_runs(tmp_path: Path) -> None:
    calls: list = []
    watcher = _watcher(tmp_path, calls)

    assert watcher.trigger() is True
    with watcher._lock:
        assert watcher.trigger() is False
    assert calls == [1]


def test_schedule_debounces(tmp_path: Path) -> None:
    done = threading.Event()
    calls: list = []

    def _on_change() -> None:
        calls.append(1)
        done.set()

    watcher = ProjectWatcher(str(tmp_path), _on_change, interval=0.01, debounce=0.05)
    watcher.schedule()
    watcher.schedule()

    assert done.wait(2.0)
    watcher.stop()
    assert calls == [1]


def test_run_returns_after_stop(tmp_path: Path) -> None:
    watcher = _watcher(tmp_path, [])
    thread = threading.Thread(target=watcher.run)
    thread.start()
    watcher.stop()
    thread.join(2.0)
    assert not thread.is_alive()
