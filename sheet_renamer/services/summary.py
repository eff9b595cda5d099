from __future__ import annotations

from dataclasses import dataclass

from ..models.outcome import RowOutcome

"""Outcome tally and SUMMARY line rendering.

Format:
SUMMARY edits={edits} renamed={renamed} failed={failed} ignored={ignored}
"""

__all__ = [
    "OutcomeTally",
    "render_summary_line",
]


@dataclass
class OutcomeTally:
    """Counts of handled edits for one CLI run."""
    ignored: int = 0
    renamed: int = 0
    failed: int = 0

    def add(self, outcome: RowOutcome | None) -> None:
        if outcome is None:
            self.ignored += 1
        elif outcome.succeeded:
            self.renamed += 1
        else:
            self.failed += 1

    @property
    def edits(self) -> int:
        return self.ignored + self.renamed + self.failed


def render_summary_line(tally: OutcomeTally) -> str:
    """Render a SUMMARY line from an OutcomeTally.

    Examples:
        >>> render_summary_line(OutcomeTally(ignored=2))
        'SUMMARY edits=2 renamed=0 failed=0 ignored=2'
    """
    return (
        f"SUMMARY edits={tally.edits} "
        f"renamed={tally.renamed} "
        f"failed={tally.failed} "
        f"ignored={tally.ignored}"
    )
