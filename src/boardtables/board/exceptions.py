"""Custom exceptions for the board fetcher."""

from __future__ import annotations


class BoardError(Exception):
    """Base exception for board fetching errors."""


class TransportError(BoardError):
    """Network failure or non-success HTTP response from the GraphQL endpoint."""

    def __init__(self, message: str, status_code: int | None = None, body: str = "") -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class ServiceError(BoardError):
    """GraphQL response carried an ``errors`` list."""

    def __init__(self, messages: list[str]) -> None:
        super().__init__("\n".join(messages))
        self.messages = messages


class ProjectNotFoundError(BoardError):
    """No project matched the given name in the organization."""

    def __init__(self, project_name: str, organization: str) -> None:
        super().__init__(
            f'Unable to find a project with name "{project_name}" '
            f'in organisation "{organization}"'
        )
        self.project_name = project_name
        self.organization = organization
