"""Aggregator - Walks the column/card pagination of a board into one snapshot.

The board is paged along two axes. Columns come one per request, and each
request also carries one page of cards for that column. A card cursor is only
valid for the column it was issued for, so the walk is depth first: all card
pages of the current column are fetched (column cursor fixed) before the
column cursor advances (card cursor reset).

Pages are produced lazily by ``iter_pages`` and folded into an immutable
``ProjectSnapshot`` by ``merge_page``. Nothing is returned to the caller until
both axes are exhausted, so a failure or cancellation mid-walk never leaks a
partial snapshot.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Callable
from contextlib import aclosing
from dataclasses import dataclass
from typing import Protocol

from boardtables.board.exceptions import BoardError
from boardtables.board.models import Column, CursorPair, ProjectPage, ProjectSnapshot
from boardtables.board.transport import GraphQLTransport
from boardtables.config import BoardQuery

logger = logging.getLogger("boardtables.board.aggregator")


class PageTransport(Protocol):
    """Anything that can fetch a single project page."""

    async def fetch_page(
        self, organization: str, project_name: str, cursors: CursorPair
    ) -> ProjectPage:
        """Fetch one page for the given cursors."""
        ...


@dataclass(frozen=True)
class FetchProgress:
    """Progress of an in-flight aggregation.

    Attributes:
        column_number: 1-based index of the column most recently received.
        column_total: Total columns declared by the server.
        cards_fetched: Cards merged so far across all columns.
    """

    column_number: int
    column_total: int
    cards_fetched: int

    @property
    def message(self) -> str:
        return f"Fetching data for column {self.column_number}/{self.column_total}"


ProgressCallback = Callable[[FetchProgress], None]


def next_cursors(cursors: CursorPair, page: ProjectPage) -> CursorPair | None:
    """Cursors for the request after ``page``, or None when the walk is done.

    Remaining cards of the current column always win over the next column.
    """
    column = page.column
    if column is not None and column.card_page_info.has_next_page:
        if not column.card_page_info.end_cursor:
            raise BoardError(f"Column '{column.name}' reported more cards without a cursor")
        return cursors.next_cards(column.card_page_info.end_cursor)

    if page.column_page_info.has_next_page:
        if not page.column_page_info.end_cursor:
            raise BoardError("Project reported more columns without a cursor")
        return cursors.next_column(page.column_page_info.end_cursor)

    return None


def merge_page(
    snapshot: ProjectSnapshot, cursors: CursorPair, page: ProjectPage
) -> ProjectSnapshot:
    """Fold one page into ``snapshot``, returning a new snapshot.

    A page requested without a card cursor opens a new column; otherwise its
    cards extend the column currently being filled.
    """
    name = snapshot.name or page.project_name
    column = page.column
    if column is None:
        return ProjectSnapshot(name=name, columns=snapshot.columns)

    if cursors.starts_column:
        opened = Column(name=column.name, total_count=column.card_total, cards=column.cards)
        return ProjectSnapshot(name=name, columns=(*snapshot.columns, opened))

    if not snapshot.columns:
        raise BoardError("Received a card page before any column")
    current = snapshot.columns[-1]
    if column.name != current.name:
        raise BoardError(f"Card page for column '{column.name}' while filling '{current.name}'")
    return ProjectSnapshot(
        name=name,
        columns=(*snapshot.columns[:-1], current.with_cards(column.cards)),
    )


async def iter_pages(
    transport: PageTransport,
    organization: str,
    project_name: str,
) -> AsyncIterator[tuple[CursorPair, ProjectPage]]:
    """Yield every page of the board in order, one request at a time.

    Each request's cursors are derived from the previous response, so there
    is never more than one request outstanding.
    """
    cursors: CursorPair | None = CursorPair.start()
    while cursors is not None:
        page = await transport.fetch_page(organization, project_name, cursors)
        yield cursors, page
        cursors = next_cursors(cursors, page)


async def fetch_project_snapshot(
    transport: PageTransport,
    query: BoardQuery,
    on_progress: ProgressCallback | None = None,
) -> ProjectSnapshot:
    """Fetch every column and card of the board matched by ``query``.

    Args:
        transport: Page transport (normally a ``GraphQLTransport``)
        query: Organization and project to fetch
        on_progress: Called after each page is merged

    Returns:
        The complete snapshot

    Raises:
        BoardError: Any transport, service or not-found failure; the walk
            stops at the first error and no snapshot is produced
    """
    logger.info(
        "Fetching project '%s' in organization %s", query.project_name, query.organization
    )
    snapshot = ProjectSnapshot()
    page_count = 0

    async with aclosing(iter_pages(transport, query.organization, query.project_name)) as pages:
        async for cursors, page in pages:
            page_count += 1
            snapshot = merge_page(snapshot, cursors, page)
            if on_progress is not None:
                on_progress(
                    FetchProgress(
                        column_number=len(snapshot.columns),
                        column_total=page.column_total,
                        cards_fetched=snapshot.card_count,
                    )
                )

    logger.info(
        "Fetched project '%s': %d column(s), %d card(s) in %d request(s)",
        snapshot.name,
        len(snapshot.columns),
        snapshot.card_count,
        page_count,
    )
    return snapshot


async def fetch_board(
    query: BoardQuery,
    on_progress: ProgressCallback | None = None,
    base_url: str = "https://api.github.com/graphql",
) -> ProjectSnapshot:
    """Fetch a board with a transport built from ``query.api_key``."""
    async with GraphQLTransport(token=query.api_key, base_url=base_url) as transport:
        return await fetch_project_snapshot(transport, query, on_progress)
