import json
import logging
from typing import Any, Dict, Iterable, List, Optional

from .models import Outcome, RunStats, TransferResult

_SKIPPED = (Outcome.SKIPPED_COLLISION, Outcome.SKIPPED_UNREADABLE)


class RunReporter:
    """Sole owner of RunStats. Fed one TransferResult per item, renders the summary."""

    def __init__(self, logger: logging.Logger, dry_run: bool = False):
        self.log = logger
        self.dry_run = dry_run
        self.stats = RunStats()

    def collections_found(self, count: int) -> None:
        self.stats.collections = count

    def record(self, result: TransferResult) -> None:
        if result.outcome is Outcome.MOVED:
            self.stats.moved += 1
        elif result.outcome in _SKIPPED:
            self.stats.skipped += 1
        else:
            self.stats.errors += 1
        self.stats.results.append(result)
        self.log.debug("%s: %s", result.outcome.value, result.src)

    def record_many(self, results: Iterable[TransferResult]) -> None:
        for r in results:
            self.record(r)

    @property
    def exit_code(self) -> int:
        # nothing was attempted in a dry run, so simulated errors don't fail it
        if self.dry_run:
            return 0
        return 1 if self.stats.errors else 0

    def summary_lines(self) -> List[str]:
        s = self.stats
        if s.collections == 0:
            return ["No collection directories found. Nothing to do."]
        if self.dry_run:
            return [
                "--- DRY RUN SUMMARY ---",
                f"Collections found: {s.collections}",
                f"Would move: {s.moved}",
                f"Would skip: {s.skipped}",
                f"Errors: {s.errors}",
            ]
        lines = [
            "--- SUMMARY ---",
            f"Collections found: {s.collections}",
            f"Moved: {s.moved}",
            f"Skipped: {s.skipped}",
            f"Errors: {s.errors}",
        ]
        unreclaimed = sum(1 for r in s.results if r.outcome is Outcome.MOVED and r.reason)
        if unreclaimed:
            lines.append(f"Sources not reclaimed: {unreclaimed}")
        return lines

    def as_dict(self) -> Dict[str, Any]:
        s = self.stats
        return {
            "dry_run": self.dry_run,
            "collections": s.collections,
            "moved": s.moved,
            "skipped": s.skipped,
            "errors": s.errors,
            "items": [
                {
                    "src": str(r.src),
                    "dst": str(r.dst) if r.dst is not None else None,
                    "outcome": r.outcome.value,
                    "performed": r.performed,
                    "reason": r.reason,
                }
                for r in s.results
            ],
        }

    def render(self, as_json: bool = False) -> str:
        if as_json:
            return json.dumps(self.as_dict(), indent=2)
        return "\n".join(self.summary_lines())
