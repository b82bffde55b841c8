class ReorganizerError(Exception):
    """Anything that stops a reorganize run before or outside per-item transfers."""

class PathError(ReorganizerError):
    """Source or target is missing or not a directory."""

class PathPermissionError(ReorganizerError, PermissionError):
    pass

class SpaceDeclinedError(ReorganizerError):
    pass

class TransferError(ReorganizerError):
    """A rename or copy of one child failed; caught and recorded by the mover."""
