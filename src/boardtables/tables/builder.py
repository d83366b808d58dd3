"""Projects a finished snapshot into one table per column."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from boardtables.board.models import Card, Column, ProjectSnapshot
from boardtables.board.status import get_assignee_names, get_size, previous_column_for

HEADINGS = ("Issue ID", "Title", "Size", "Assignee(s)", "Previous status")
NOTES_HEADING = "Notes"


@dataclass(frozen=True)
class Table:
    """Rendered rows for one board column.

    Attributes:
        title: Column name with its declared card count, e.g. ``Doing (4)``.
        headings: Column headings.
        rows: One tuple of cell text per card, in board order.
    """

    title: str
    headings: tuple[str, ...]
    rows: tuple[tuple[str, ...], ...] = field(default_factory=tuple)


def build_row(card: Card, cutoff: datetime, add_notes_column: bool = False) -> tuple[str, ...]:
    """Cells for one card."""
    if card.issue is None:
        text = card.note.text if card.note is not None else ""
        cells: tuple[str, ...] = ("", text, "", "", "")
    else:
        issue = card.issue
        cells = (
            issue.issue_id,
            issue.title,
            get_size(issue.labels),
            get_assignee_names(issue.assignees, issue.assignee_total),
            previous_column_for(issue, cutoff),
        )
    if add_notes_column:
        cells += ("",)
    return cells


def build_table(column: Column, cutoff: datetime, add_notes_column: bool = False) -> Table:
    headings = HEADINGS + ((NOTES_HEADING,) if add_notes_column else ())
    return Table(
        title=f"{column.name} ({column.total_count})",
        headings=headings,
        rows=tuple(build_row(card, cutoff, add_notes_column) for card in column.cards),
    )


def build_tables(
    snapshot: ProjectSnapshot,
    cutoff: datetime,
    add_notes_column: bool = False,
) -> list[Table]:
    """One table per column, in board order."""
    return [build_table(column, cutoff, add_notes_column) for column in snapshot.columns]
