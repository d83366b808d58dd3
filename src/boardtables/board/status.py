"""Per-issue derived values: previous column, size and assignee names."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import datetime

from boardtables.board.models import Assignee, Issue, TimelineEvent

NEW_ISSUE = "** New Issue **"
SIZE_PREFIX = "size:"
MORE_ASSIGNEES = "..."
# Matches the assignees(first: 3) cap in the project query.
ASSIGNEE_LIMIT = 3


def _aware(moment: datetime) -> datetime:
    # Naive datetimes are local wall-clock time.
    return moment.astimezone() if moment.tzinfo is None else moment


def resolve_previous_column(
    timeline: Iterable[TimelineEvent] | None,
    cutoff: datetime,
) -> str:
    """Column the issue was in immediately before ``cutoff``.

    The timeline is treated as an unordered set. Of the events strictly
    before the cutoff, the latest one wins; among events sharing that
    timestamp the first in input order wins. Issues with no timeline data,
    or whose events are all at or after the cutoff, are ``NEW_ISSUE``.
    """
    if timeline is None:
        return NEW_ISSUE
    cutoff = _aware(cutoff)

    latest: TimelineEvent | None = None
    latest_at: datetime | None = None
    for event in timeline:
        created_at = _aware(event.created_at)
        if created_at >= cutoff:
            continue
        if latest_at is None or created_at > latest_at:
            latest, latest_at = event, created_at

    return NEW_ISSUE if latest is None else latest.column_name


def previous_column_for(issue: Issue, cutoff: datetime) -> str:
    return resolve_previous_column(issue.timeline, cutoff)


def get_size(labels: Iterable[str] | None) -> str:
    """Value of the first ``size:<value>`` label, trimmed, or ``""``."""
    for label in labels or ():
        if label.startswith(SIZE_PREFIX):
            return label.split(":")[1].strip()
    return ""


def get_assignee_names(
    assignees: Sequence[Assignee],
    total_count: int | None = None,
    limit: int = ASSIGNEE_LIMIT,
) -> str:
    """Join assignee display names, marking assignees that were not shown.

    Args:
        assignees: Assignees returned by the query.
        total_count: Total assignees on the issue. Defaults to ``len(assignees)``.
        limit: Maximum number of names to show.

    Returns:
        Comma-separated names, ending in ``...`` when more exist than are shown.
    """
    shown = list(assignees)[:limit]
    if total_count is None:
        total_count = len(assignees)
    names = [assignee.display_name for assignee in shown]
    if total_count > len(shown):
        names.append(MORE_ASSIGNEES)
    return ", ".join(names)
