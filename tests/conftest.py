import hashlib
import logging
import os
from pathlib import Path

import pytest

needs_non_root = pytest.mark.skipif(
    hasattr(os, "geteuid") and os.geteuid() == 0,
    reason="root ignores permission bits",
)


@pytest.fixture
def logger():
    log = logging.getLogger("collection_tests")
    log.setLevel(logging.DEBUG)
    return log


def make_tree(root: Path, layout: dict) -> None:
    """Build directories from a nested dict; string values become file contents."""
    for name, value in layout.items():
        p = root / name
        if isinstance(value, dict):
            p.mkdir(parents=True, exist_ok=True)
            make_tree(p, value)
        else:
            p.parent.mkdir(parents=True, exist_ok=True)
            p.write_text(value)


def tree_digest(root: Path) -> str:
    """Hash of every path, type and file content under root."""
    h = hashlib.sha256()
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames.sort()
        for name in sorted(dirnames + filenames):
            p = Path(dirpath) / name
            rel = p.relative_to(root).as_posix()
            kind = "l" if p.is_symlink() else ("d" if p.is_dir() else "f")
            h.update(f"{kind}:{rel}\n".encode())
            if kind == "f":
                h.update(p.read_bytes())
    return h.hexdigest()


@pytest.fixture
def movies(tmp_path):
    """source = target layout from the classic example."""
    make_tree(tmp_path, {
        "MoviesCollection": {
            "Alien": {"alien.mkv": "xenomorph"},
            "Predator": {"predator.mkv": "yautja"},
        },
    })
    return tmp_path
