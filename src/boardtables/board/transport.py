"""GraphQLTransport - Fetches single project pages from the GitHub GraphQL API."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from boardtables.board.exceptions import (
    ProjectNotFoundError,
    ServiceError,
    TransportError,
)
from boardtables.board.models import CursorPair, ProjectPage
from boardtables.board.queries import PREVIEW_ACCEPT, PROJECT_PAGE_QUERY
from boardtables.logging import sanitize_for_log, truncate_output

logger = logging.getLogger("boardtables.board.transport")


def _invalid_body(response: httpx.Response) -> TransportError:
    body = response.text
    logger.error("Invalid JSON response: %s", sanitize_for_log(truncate_output(body)))
    return TransportError(
        f"Invalid JSON response - {body}", status_code=response.status_code, body=body
    )


class GraphQLTransport:
    """Issues project page queries against the GitHub GraphQL API.

    One call to ``fetch_page`` is one HTTP request. There are no retries;
    every failure is raised to the caller as a ``BoardError`` subclass.
    """

    def __init__(
        self,
        token: str,
        base_url: str = "https://api.github.com/graphql",
        timeout: float = 30.0,
    ) -> None:
        """Initialize the transport.

        Args:
            token: GitHub personal access token with read:org and repo scope
            base_url: GitHub GraphQL API URL (for testing/enterprise)
            timeout: Per-request timeout in seconds
        """
        self.token = token
        self.base_url = base_url
        self.timeout = timeout
        self._client: httpx.AsyncClient | None = None

    @property
    def client(self) -> httpx.AsyncClient:
        """Get or create the async HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                headers={
                    "Authorization": f"bearer {self.token}",
                    "Content-Type": "application/json",
                    "Accept": PREVIEW_ACCEPT,
                },
                timeout=self.timeout,
            )
        return self._client

    async def aclose(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> GraphQLTransport:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def _graphql(self, query: str, variables: dict[str, Any]) -> dict[str, Any]:
        """Execute a GraphQL query.

        Args:
            query: GraphQL query string
            variables: Query variables

        Returns:
            The ``data`` member of the response

        Raises:
            TransportError: On network failure, a non-200 response or a body
                that is not a JSON object
            ServiceError: If the response carries an ``errors`` list
        """
        payload: dict[str, Any] = {"query": query, "variables": variables}

        try:
            response = await self.client.post(self.base_url, json=payload)
        except httpx.HTTPError as e:
            logger.error("GraphQL request failed: %s", e)
            raise TransportError(f"GraphQL request failed: {e}") from e

        if response.status_code != 200:
            body = response.text
            logger.error(
                "Unexpected response code %d: %s",
                response.status_code,
                sanitize_for_log(truncate_output(body)),
            )
            raise TransportError(
                f"Unexpected response code {response.status_code} - {body}",
                status_code=response.status_code,
                body=body,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise _invalid_body(response) from e
        if not isinstance(data, dict):
            raise _invalid_body(response)

        errors = data.get("errors")
        if errors:
            if not isinstance(errors, list):
                errors = [errors]
            messages = [
                str(error.get("message", error)) if isinstance(error, dict) else str(error)
                for error in errors
            ]
            logger.error("GraphQL errors: %s", messages)
            raise ServiceError(messages)

        return dict(data.get("data") or {})

    async def fetch_page(
        self,
        organization: str,
        project_name: str,
        cursors: CursorPair,
    ) -> ProjectPage:
        """Fetch one column page (with one card page inside it).

        Args:
            organization: Organization login
            project_name: Project search string; the first match is used
            cursors: Column and card continuation cursors

        Returns:
            Parsed page

        Raises:
            TransportError: On network failure, a non-200 response or a body
                that is not a JSON object
            ServiceError: If the response carries an ``errors`` list
            ProjectNotFoundError: If no project matches the search
        """
        logger.debug(
            "Fetching page: column_cursor=%s card_cursor=%s",
            cursors.column_cursor,
            cursors.card_cursor,
        )
        data = await self._graphql(
            PROJECT_PAGE_QUERY,
            {
                "organisation_name": organization,
                "project_name": project_name,
                "column_cursor": cursors.column_cursor,
                "card_cursor": cursors.card_cursor,
            },
        )

        org = data.get("organization") or {}
        projects = [node for node in (org.get("projects") or {}).get("nodes") or [] if node]
        if not projects:
            raise ProjectNotFoundError(project_name, organization)

        return ProjectPage.from_project_node(projects[0])
