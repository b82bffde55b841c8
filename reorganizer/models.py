from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional

@dataclass(frozen=True)
class ResolvedPath:
    path: Path
    via_symlink: bool = False

@dataclass(frozen=True)
class CollectionDirectory:
    path: Path
    name: str

@dataclass(frozen=True)
class ChildEntry:
    path: Path
    name: str
    dst: Path  # always target root / name


class Outcome(str, Enum):
    MOVED = "moved"
    SKIPPED_COLLISION = "skipped_collision"
    SKIPPED_UNREADABLE = "skipped_unreadable"
    ERROR = "error"


@dataclass(frozen=True)
class TransferResult:
    src: Path
    dst: Optional[Path]  # None when a whole collection could not be read
    outcome: Outcome
    performed: bool  # False if dry-run or skipped
    reason: str = ""  # e.g. "exists at target", "source not reclaimed"


@dataclass
class RunStats:
    moved: int = 0
    skipped: int = 0
    errors: int = 0
    collections: int = 0
    results: List[TransferResult] = field(default_factory=list)
