import logging
import os
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

from .errors import SpaceDeclinedError

BLOCK_SIZE = 512  # st_blocks unit, what du reports in


@dataclass(frozen=True)
class SpaceEstimate:
    required: int
    available: int

    @property
    def sufficient(self) -> bool:
        return self.available >= self.required


def _raise(err: OSError):
    raise err


def tree_size(root: Path) -> int:
    """Disk usage of root in bytes, counting allocated blocks like du does.

    Symlinks are not followed and hard-linked inodes are counted once.
    """
    seen = set()
    total = 0
    for dirpath, dirnames, filenames in os.walk(root, onerror=_raise):
        for name in [dirpath] + [os.path.join(dirpath, n) for n in dirnames + filenames]:
            st = os.lstat(name)
            key = (st.st_dev, st.st_ino)
            if key in seen:
                continue
            seen.add(key)
            total += getattr(st, "st_blocks", 0) * BLOCK_SIZE or st.st_size
    return total


def human_size(num: float) -> str:
    for unit in ("B", "K", "M", "G", "T"):
        if num < 1024 or unit == "T":
            return f"{num:.0f}{unit}" if unit == "B" else f"{num:.1f}{unit}"
        num /= 1024
    return f"{num:.1f}T"


class SpaceChecker:
    """Advisory preflight: compares source size with free space on the target."""

    def __init__(self, source: Path, target: Path, logger: logging.Logger,
                 dry_run: bool = False, force: bool = False,
                 confirm: Optional[Callable[[str], bool]] = None):
        self.source = source
        self.target = target
        self.log = logger
        self.dry_run = dry_run
        self.force = force
        self.confirm = confirm

    def estimate(self) -> Optional[SpaceEstimate]:
        """None when either side could not be measured."""
        try:
            required = tree_size(self.source)
            available = shutil.disk_usage(self.target).free
        except OSError as e:
            self.log.warning("Could not check disk space, skipping check: %s", e)
            return None
        return SpaceEstimate(required, available)

    def check(self) -> Optional[SpaceEstimate]:
        """Run the gate. Raises SpaceDeclinedError if the operator says no."""
        est = self.estimate()
        if est is None or est.sufficient:
            return est

        self.log.warning(
            "Not enough free space on %s: need %s, available %s",
            self.target, human_size(est.required), human_size(est.available),
        )
        if self.dry_run or self.force:
            return est

        if self.confirm is None or not self.confirm("Continue anyway?"):
            raise SpaceDeclinedError("Aborted: insufficient space not confirmed")
        return est
