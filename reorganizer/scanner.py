import logging
from pathlib import Path
from typing import List

from .config import MARKER_SUFFIX
from .models import CollectionDirectory

class CollectionScanner:
    """Finds marker directories directly under root, sorted by name."""

    def __init__(self, root: Path, logger: logging.Logger, suffix: str = MARKER_SUFFIX):
        self.root = root
        self.log = logger
        self.suffix = suffix

    def scan(self) -> List[CollectionDirectory]:
        found: List[CollectionDirectory] = []
        for p in sorted(self.root.iterdir(), key=lambda p: p.name):
            if not p.name.endswith(self.suffix):
                continue
            # is_dir() follows symlinks, so linked collections count too
            try:
                if not p.is_dir():
                    continue
            except OSError as e:
                # keep it; the mover reports it as one unreadable collection
                self.log.warning("Cannot inspect %s: %s", p, e.strerror or e)
            found.append(CollectionDirectory(path=p, name=p.name))
        self.log.info("Found %d collection director%s in %s",
                      len(found), "y" if len(found) == 1 else "ies", self.root)
        return found
