from dataclasses import dataclass
from typing import Optional

# Directories directly under the source whose name ends with this are flattened.
MARKER_SUFFIX = "Collection"

@dataclass(frozen=True)
class ReorganizeOptions:
    """Everything one run needs; built from the command line, never persisted."""
    source: str
    target: Optional[str] = None  # None = same as source
    dry_run: bool = False
    force: bool = False
    verbose: bool = False
    suffix: str = MARKER_SUFFIX
    json_summary: bool = False
