import errno
import logging
import os
import shutil
from pathlib import Path
from typing import List, Set

from .errors import TransferError
from .models import ChildEntry, CollectionDirectory, Outcome, TransferResult
from .utils import is_readable_dir


class SubdirectoryMover:
    """Promotes the immediate child directories of a collection into target.

    One code path serves both modes: with dry_run=True every decision is
    made exactly as in a real run, only the filesystem calls are skipped.
    Destinations handed out earlier in the run are remembered, so a second
    child with the same name collides in a dry run just as it would for real.
    """

    def __init__(self, target: Path, logger: logging.Logger, dry_run: bool = True):
        self.target = target
        self.log = logger
        self.dry_run = dry_run
        self._claimed: Set[Path] = set()

    def children(self, collection: CollectionDirectory) -> List[ChildEntry]:
        entries = []
        for p in sorted(collection.path.iterdir(), key=lambda p: p.name):
            # real directories only; files and symlinks stay where they are
            if p.is_symlink() or not p.is_dir():
                continue
            entries.append(ChildEntry(path=p, name=p.name, dst=self.target / p.name))
        return entries

    def move_collection(self, collection: CollectionDirectory) -> List[TransferResult]:
        self.log.info("Processing: %s", collection.path)
        if not is_readable_dir(collection.path):
            return [self._collection_error(collection, "permission denied")]
        try:
            entries = self.children(collection)
        except OSError as e:
            return [self._collection_error(collection, e.strerror or str(e))]

        if not entries:
            self.log.info("  No subdirectories in %s", collection.name)
        results = [self.move_one(entry, collection) for entry in entries]
        self.log.info("Completed processing: %s", collection.path)
        return results

    def move_one(self, entry: ChildEntry, collection: CollectionDirectory) -> TransferResult:
        if entry.dst in self._claimed or os.path.lexists(entry.dst):
            self.log.warning("Directory '%s' already exists in %s. Skipping.", entry.name, self.target)
            return TransferResult(entry.path, entry.dst, Outcome.SKIPPED_COLLISION,
                                  performed=False, reason="exists at target")

        if not is_readable_dir(entry.path):
            self.log.warning("Cannot read '%s' in %s. Skipping.", entry.name, collection.name)
            return TransferResult(entry.path, entry.dst, Outcome.SKIPPED_UNREADABLE,
                                  performed=False, reason="permission denied")

        self.log.info("  Moving: %s from %s to %s", entry.name, collection.name, self.target)
        if self.dry_run:
            self._claimed.add(entry.dst)
            return TransferResult(entry.path, entry.dst, Outcome.MOVED, performed=False)

        try:
            reason = self._transfer(entry)
        except FileExistsError:
            self.log.warning("Directory '%s' appeared in %s during transfer. Skipping.",
                             entry.name, self.target)
            return TransferResult(entry.path, entry.dst, Outcome.SKIPPED_COLLISION,
                                  performed=False, reason="exists at target")
        except TransferError as e:
            self.log.error("  Error moving %s: %s", entry.name, e)
            return TransferResult(entry.path, entry.dst, Outcome.ERROR,
                                  performed=False, reason=str(e))

        self._claimed.add(entry.dst)
        if reason:
            self.log.warning("  Copied %s but could not remove the source: %s", entry.name, reason)
        else:
            self.log.info("  Successfully moved: %s", entry.name)
        return TransferResult(entry.path, entry.dst, Outcome.MOVED, performed=True, reason=reason)

    # ---------------- transfer ----------------
    def _transfer(self, entry: ChildEntry) -> str:
        """Move entry to its destination. Returns a non-empty reason when the
        data reached the destination but the source could not be reclaimed."""
        if self._same_device(entry.path):
            try:
                self._rename(entry)
                return ""
            except FileExistsError:
                raise
            except OSError as e:
                if e.errno in (errno.EEXIST, errno.ENOTEMPTY):
                    raise FileExistsError(e.errno, e.strerror, str(entry.dst)) from e
                if e.errno != errno.EXDEV:
                    raise TransferError(e.strerror or str(e)) from e
                self.log.info("  %s is on another filesystem, copying instead", entry.name)

        self._copy(entry)
        try:
            shutil.rmtree(entry.path)
        except OSError as e:
            return f"source not reclaimed: {e.strerror or e}"
        return ""

    def _rename(self, entry: ChildEntry) -> None:
        # mkdir claims the name exclusively; rename then swaps the child in
        # over our own empty placeholder and never over someone else's entry
        os.mkdir(entry.dst)
        try:
            os.rename(entry.path, entry.dst)
        except OSError:
            self._release(entry.dst)
            raise

    def _release(self, placeholder: Path) -> None:
        try:
            os.rmdir(placeholder)
        except OSError as e:
            # filled by someone else in the meantime; not ours to delete
            self.log.warning("  Could not remove placeholder %s: %s", placeholder, e)

    def _same_device(self, src: Path) -> bool:
        try:
            return os.stat(src).st_dev == os.stat(self.target).st_dev
        except OSError:
            return True  # let rename report the real problem

    def _copy(self, entry: ChildEntry) -> None:
        # copytree creates dst itself and raises FileExistsError if it is
        # already there, so a concurrent newcomer is never touched
        try:
            shutil.copytree(entry.path, entry.dst, symlinks=True, copy_function=shutil.copy2)
        except FileExistsError:
            raise
        except (shutil.Error, OSError) as e:
            self._discard_partial(entry.dst)
            raise TransferError(f"copy failed: {e}") from e

    def _discard_partial(self, dst: Path) -> None:
        if not os.path.lexists(dst):
            return
        try:
            shutil.rmtree(dst)
        except OSError as e:
            self.log.error("  Could not clean up partial copy %s: %s", dst, e)

    def _collection_error(self, collection: CollectionDirectory, reason: str) -> TransferResult:
        self.log.error("Cannot read collection %s: %s", collection.path, reason)
        return TransferResult(collection.path, None, Outcome.ERROR, performed=False, reason=reason)
