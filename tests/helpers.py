"""Builders for GraphQL project payloads and a scripted board transport."""

from __future__ import annotations

import asyncio
from typing import Any

from boardtables.board import CursorPair, ProjectPage


def issue_content(
    repo: str = "widgets",
    number: int = 1,
    title: str = "An issue",
    assignees: list[tuple[str, str | None]] | None = None,
    assignee_total: int | None = None,
    labels: list[str] | None = None,
    events: list[tuple[str, str]] | None = None,
) -> dict[str, Any]:
    """Issue ``content`` node. ``events`` are (column, createdAt) pairs."""
    assignees = assignees or []
    content: dict[str, Any] = {
        "title": title,
        "number": number,
        "repository": {"name": repo},
        "assignees": {
            "totalCount": len(assignees) if assignee_total is None else assignee_total,
            "nodes": [{"login": login, "name": name} for login, name in assignees],
        },
        "labels": {"nodes": [{"name": name} for name in labels or []]},
    }
    if events is not None:
        content["timelineItems"] = {
            "nodes": [
                {
                    "__typename": "MovedColumnsInProjectEvent",
                    "projectColumnName": column,
                    "createdAt": created_at,
                }
                for column, created_at in events
            ]
        }
    return content


def issue_card(number: int, **kwargs: Any) -> dict[str, Any]:
    return {"note": None, "content": issue_content(number=number, **kwargs)}


def note_card(text: str) -> dict[str, Any]:
    return {"note": text, "content": None}


def project_node(
    column_name: str | None,
    cards: list[dict[str, Any]] | None = None,
    card_total: int | None = None,
    card_end_cursor: str | None = None,
    card_has_next: bool = False,
    column_total: int = 1,
    column_end_cursor: str | None = None,
    column_has_next: bool = False,
    project_name: str = "Roadmap",
) -> dict[str, Any]:
    """A project node holding (at most) one column and one card page."""
    cards = cards or []
    column_nodes = []
    if column_name is not None:
        column_nodes.append(
            {
                "name": column_name,
                "cards": {
                    "totalCount": len(cards) if card_total is None else card_total,
                    "pageInfo": {"endCursor": card_end_cursor, "hasNextPage": card_has_next},
                    "nodes": cards,
                },
            }
        )
    return {
        "name": project_name,
        "columns": {
            "totalCount": column_total,
            "pageInfo": {"endCursor": column_end_cursor, "hasNextPage": column_has_next},
            "nodes": column_nodes,
        },
    }


def graphql_body(*projects: dict[str, Any]) -> dict[str, Any]:
    """Full response body for the project query."""
    return {"data": {"organization": {"name": "Acme", "projects": {"nodes": list(projects)}}}}


class FakeBoard:
    """Serves a board one column page and one card page at a time.

    Column cursors are the index of the last column returned. Card cursors
    encode the column they belong to, and a request mixing a card cursor with
    a different column fails the test.
    """

    def __init__(
        self,
        columns: list[tuple[str, list[dict[str, Any]]]],
        card_page_size: int = 100,
        project_name: str = "Roadmap",
    ) -> None:
        self.columns = columns
        self.card_page_size = card_page_size
        self.project_name = project_name
        self.requests: list[CursorPair] = []
        self.in_flight = 0
        self.max_in_flight = 0
        self.closed = False

    async def __aenter__(self) -> FakeBoard:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        self.closed = True

    async def fetch_page(
        self, organization: str, project_name: str, cursors: CursorPair
    ) -> ProjectPage:
        self.requests.append(cursors)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(0)
            return ProjectPage.from_project_node(self._node(cursors))
        finally:
            self.in_flight -= 1

    def _node(self, cursors: CursorPair) -> dict[str, Any]:
        index = 0 if cursors.column_cursor is None else int(cursors.column_cursor) + 1
        if index >= len(self.columns):
            return project_node(None, column_total=len(self.columns), project_name=self.project_name)

        offset = 0
        if cursors.card_cursor is not None:
            card_column, card_offset = cursors.card_cursor.split(":")
            assert int(card_column) == index, "card cursor used with another column"
            offset = int(card_offset)

        name, cards = self.columns[index]
        chunk = cards[offset : offset + self.card_page_size]
        end = offset + len(chunk)
        return project_node(
            name,
            cards=chunk,
            card_total=len(cards),
            card_end_cursor=f"{index}:{end}" if chunk else None,
            card_has_next=end < len(cards),
            column_total=len(self.columns),
            column_end_cursor=str(index),
            column_has_next=index + 1 < len(self.columns),
            project_name=self.project_name,
        )
