"""Shared fixtures for dirbackup tests."""

import pytest
from click.testing import CliRunner

from dirbackup import BackupObserver


class RecordingObserver(BackupObserver):
    """Collects every event it receives."""

    def __init__(self):
        self.progress = []
        self.errors = []
        self.completed = []

    def on_progress(self, event):
        self.progress.append(event)

    def on_error(self, event):
        self.errors.append(event)

    def on_complete(self, result):
        self.completed.append(result)


@pytest.fixture
def observer():
    return RecordingObserver()


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def source_tree(tmp_path):
    """A source directory with excluded-looking and hidden entries.

    Tree:
        a.txt, .hidden,
        build/out.o,
        docs/guide.md,
        node_modules/lib.js,
        src/main.py, src/node_modules/pkg/index.js
    """
    root = tmp_path / "proj"
    root.mkdir()
    (root / "a.txt").write_text("a")
    (root / ".hidden").write_text("hidden")

    (root / "build").mkdir()
    (root / "build" / "out.o").write_bytes(b"\x7fELF")

    (root / "docs").mkdir()
    (root / "docs" / "guide.md").write_text("guide")

    (root / "node_modules").mkdir()
    (root / "node_modules" / "lib.js").write_text("lib")

    src = root / "src"
    src.mkdir()
    (src / "main.py").write_text("print('hi')\n")
    pkg = src / "node_modules" / "pkg"
    pkg.mkdir(parents=True)
    (pkg / "index.js").write_text("index")
    return root


@pytest.fixture
def target(tmp_path):
    """A not-yet-created target directory."""
    return tmp_path / "backup"


def files_under(root):
    """Return the set of relative file paths under *root* (forward slashes)."""
    return {
        p.relative_to(root).as_posix()
        for p in root.rglob("*")
        if p.is_file()
    }
