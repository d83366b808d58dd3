"""Board fetcher - Pages a GitHub project board into an immutable snapshot."""

from boardtables.board.aggregator import (
    FetchProgress,
    fetch_board,
    fetch_project_snapshot,
    iter_pages,
    merge_page,
    next_cursors,
)
from boardtables.board.exceptions import (
    BoardError,
    ProjectNotFoundError,
    ServiceError,
    TransportError,
)
from boardtables.board.models import (
    Assignee,
    Card,
    Column,
    CursorPair,
    Issue,
    Note,
    ProjectPage,
    ProjectSnapshot,
    TimelineEvent,
    TimelineEventKind,
)
from boardtables.board.status import (
    NEW_ISSUE,
    get_assignee_names,
    get_size,
    previous_column_for,
    resolve_previous_column,
)
from boardtables.board.transport import GraphQLTransport

__all__ = [
    "NEW_ISSUE",
    "Assignee",
    "BoardError",
    "Card",
    "Column",
    "CursorPair",
    "FetchProgress",
    "GraphQLTransport",
    "Issue",
    "Note",
    "ProjectNotFoundError",
    "ProjectPage",
    "ProjectSnapshot",
    "ServiceError",
    "TimelineEvent",
    "TimelineEventKind",
    "TransportError",
    "fetch_board",
    "fetch_project_snapshot",
    "get_assignee_names",
    "get_size",
    "iter_pages",
    "merge_page",
    "next_cursors",
    "previous_column_for",
    "resolve_previous_column",
]
