"""Data models for the board fetcher.

All models are frozen so a finished ``ProjectSnapshot`` can be handed to
renderers without any risk of it changing underneath them.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from typing import Any


class TimelineEventKind(StrEnum):
    """Timeline event types requested from the API."""

    ADDED_TO_PROJECT = "AddedToProjectEvent"
    MOVED_COLUMNS = "MovedColumnsInProjectEvent"


def parse_timestamp(value: str) -> datetime:
    """Parse a GitHub ISO-8601 timestamp into an aware datetime."""
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value)


def _nodes(connection: dict[str, Any] | None) -> list[dict[str, Any]]:
    if not connection:
        return []
    return [node for node in connection.get("nodes") or [] if node]


@dataclass(frozen=True)
class Assignee:
    """A user assigned to an issue."""

    login: str
    name: str | None = None

    @property
    def display_name(self) -> str:
        return self.name or self.login


@dataclass(frozen=True)
class TimelineEvent:
    """A card being added to, or moved within, the board.

    Attributes:
        kind: Added-to-board or moved-between-columns.
        column_name: Column the card ended up in.
        created_at: When the event happened (timezone aware).
    """

    kind: TimelineEventKind
    column_name: str
    created_at: datetime

    @classmethod
    def from_node(cls, node: dict[str, Any]) -> TimelineEvent:
        typename = node.get("__typename") or TimelineEventKind.MOVED_COLUMNS.value
        return cls(
            kind=TimelineEventKind(typename),
            column_name=node.get("projectColumnName") or "",
            created_at=parse_timestamp(node["createdAt"]),
        )


@dataclass(frozen=True)
class Issue:
    """An issue (or pull request) linked from a card.

    Attributes:
        repository: Repository name (without owner).
        number: Issue number within the repository.
        title: Issue title.
        assignees: Assignees that were fetched (capped by the query).
        assignee_total: Total assignees on the issue, fetched or not.
        labels: Label names in server order.
        timeline: Column events, or None when the issue was never tracked.
    """

    repository: str
    number: int
    title: str
    assignees: tuple[Assignee, ...] = ()
    assignee_total: int = 0
    labels: tuple[str, ...] = ()
    timeline: tuple[TimelineEvent, ...] | None = None

    @property
    def issue_id(self) -> str:
        return f"{self.repository} #{self.number}"

    @classmethod
    def from_content(cls, content: dict[str, Any]) -> Issue:
        assignee_conn = content.get("assignees") or {}
        assignees = tuple(
            Assignee(login=node.get("login") or "", name=node.get("name"))
            for node in _nodes(assignee_conn)
        )
        timeline_conn = content.get("timelineItems")
        timeline = (
            None
            if timeline_conn is None
            else tuple(
                TimelineEvent.from_node(node)
                for node in _nodes(timeline_conn)
                if node.get("createdAt")
            )
        )
        return cls(
            repository=(content.get("repository") or {}).get("name") or "",
            number=int(content.get("number") or 0),
            title=content.get("title") or "",
            assignees=assignees,
            assignee_total=int(assignee_conn.get("totalCount") or len(assignees)),
            labels=tuple(node.get("name") or "" for node in _nodes(content.get("labels"))),
            timeline=timeline,
        )


@dataclass(frozen=True)
class Note:
    """A free-text note card."""

    text: str


@dataclass(frozen=True)
class Card:
    """A board entry: either a note or a linked issue, never both."""

    note: Note | None = None
    issue: Issue | None = None

    def __post_init__(self) -> None:
        if (self.note is None) == (self.issue is None):
            raise ValueError("Card must hold exactly one of note or issue")

    @property
    def is_note(self) -> bool:
        return self.note is not None

    @classmethod
    def from_node(cls, node: dict[str, Any]) -> Card:
        content = node.get("content")
        if not content:
            return cls(note=Note(text=node.get("note") or ""))
        return cls(issue=Issue.from_content(content))


@dataclass(frozen=True)
class Column:
    """A board column and the cards fetched for it so far.

    Attributes:
        name: Column name.
        total_count: Card count declared by the server.
        cards: Cards in server order.
    """

    name: str
    total_count: int
    cards: tuple[Card, ...] = ()

    def with_cards(self, cards: tuple[Card, ...]) -> Column:
        """Return a copy with ``cards`` appended."""
        return Column(name=self.name, total_count=self.total_count, cards=self.cards + cards)


@dataclass(frozen=True)
class ProjectSnapshot:
    """All columns of one project, in display order."""

    name: str = ""
    columns: tuple[Column, ...] = ()

    @property
    def card_count(self) -> int:
        return sum(len(column.cards) for column in self.columns)


@dataclass(frozen=True)
class CursorPair:
    """Continuation tokens for the column and card pagination axes.

    A card cursor is only meaningful for the column that produced it, so new
    pairs are derived through ``next_cards`` (column cursor kept) and
    ``next_column`` (card cursor reset) rather than built by hand.
    """

    column_cursor: str | None = None
    card_cursor: str | None = None

    @classmethod
    def start(cls) -> CursorPair:
        return cls()

    @property
    def starts_column(self) -> bool:
        """True when this request opens a new column rather than continuing one."""
        return self.card_cursor is None

    def next_cards(self, card_cursor: str) -> CursorPair:
        return CursorPair(column_cursor=self.column_cursor, card_cursor=card_cursor)

    def next_column(self, column_cursor: str) -> CursorPair:
        return CursorPair(column_cursor=column_cursor, card_cursor=None)


@dataclass(frozen=True)
class PageInfo:
    """GraphQL connection page info."""

    end_cursor: str | None = None
    has_next_page: bool = False

    @classmethod
    def from_node(cls, node: dict[str, Any] | None) -> PageInfo:
        node = node or {}
        return cls(end_cursor=node.get("endCursor"), has_next_page=bool(node.get("hasNextPage")))


@dataclass(frozen=True)
class ColumnPage:
    """The single column returned by one page request, with its card page."""

    name: str
    card_total: int
    card_page_info: PageInfo
    cards: tuple[Card, ...] = ()


@dataclass(frozen=True)
class ProjectPage:
    """One parsed response from the project query.

    Attributes:
        project_name: Name of the matched project.
        column_total: Total columns on the board.
        column_page_info: Pagination state of the column axis.
        column: The current column, or None for a board with no columns.
    """

    project_name: str
    column_total: int
    column_page_info: PageInfo
    column: ColumnPage | None = None

    @classmethod
    def from_project_node(cls, project: dict[str, Any]) -> ProjectPage:
        columns = project.get("columns") or {}
        column_nodes = _nodes(columns)
        column: ColumnPage | None = None
        if column_nodes:
            node = column_nodes[0]
            cards = node.get("cards") or {}
            column = ColumnPage(
                name=node.get("name") or "",
                card_total=int(cards.get("totalCount") or 0),
                card_page_info=PageInfo.from_node(cards.get("pageInfo")),
                cards=tuple(Card.from_node(card) for card in _nodes(cards)),
            )
        return cls(
            project_name=project.get("name") or "",
            column_total=int(columns.get("totalCount") or 0),
            column_page_info=PageInfo.from_node(columns.get("pageInfo")),
            column=column,
        )
