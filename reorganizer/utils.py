import logging
import os
from pathlib import Path
from typing import Optional, Tuple

from .errors import PathError, PathPermissionError
from .models import ResolvedPath


def resolve_path(path_str: str, role: str = "Source") -> ResolvedPath:
    """Return the canonical directory behind path_str, following symlinks.

    Source material is often a symlinked mount point, so this canonicalizes
    through the filesystem rather than just normalizing ``..`` segments.
    """
    raw = Path(path_str).expanduser()
    try:
        resolved = raw.resolve(strict=True)
    except (OSError, RuntimeError) as e:
        raise PathError(f"{role} directory {path_str} is not a valid directory: {e}") from e
    if not resolved.is_dir():
        raise PathError(f"{role} directory {path_str} is not a valid directory")
    lexical = Path(os.path.abspath(raw))
    return ResolvedPath(resolved, via_symlink=lexical != resolved)


def resolve_roots(source_str: str, target_str: Optional[str] = None,
                  logger: Optional[logging.Logger] = None) -> Tuple[ResolvedPath, ResolvedPath]:
    """Resolve source and target independently; target defaults to the source."""
    log = logger or logging.getLogger(__name__)
    source = resolve_path(source_str, "Source")
    target = resolve_path(target_str, "Target") if target_str else source

    if not os.access(source.path, os.R_OK | os.X_OK):
        raise PathPermissionError(f"Source directory {source.path} is not readable")
    if not os.access(target.path, os.W_OK | os.X_OK):
        raise PathPermissionError(f"Target directory {target.path} is not writable")

    for label, rp in (("Source", source), ("Target", target)):
        note = " (via symlink)" if rp.via_symlink else ""
        log.info("%s directory: %s%s", label, rp.path, note)
    return source, target


def is_readable_dir(path: Path) -> bool:
    return os.access(path, os.R_OK | os.X_OK)
