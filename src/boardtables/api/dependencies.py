"""FastAPI dependencies for dependency injection."""

from __future__ import annotations

from collections.abc import Callable, Generator  # noqa: TC003
from typing import TYPE_CHECKING, Annotated, Any, Protocol

from fastapi import Depends

from boardtables.api.events import EventManager
from boardtables.board import GraphQLTransport

if TYPE_CHECKING:
    from boardtables.board import CursorPair, ProjectPage


class ClosableTransport(Protocol):
    """A page transport that is used as an async context manager."""

    async def fetch_page(
        self, organization: str, project_name: str, cursors: CursorPair
    ) -> ProjectPage:
        """Fetch one page for the given cursors."""
        ...

    async def __aenter__(self) -> Any: ...

    async def __aexit__(self, *exc_info: object) -> None: ...


TransportFactory = Callable[[str], ClosableTransport]

# Global settings (initialized on app startup)
_default_token: str = ""
_graphql_url: str = "https://api.github.com/graphql"
_event_manager: EventManager | None = None


def init_settings(default_token: str, graphql_url: str = "https://api.github.com/graphql") -> None:
    """Set the fallback token and GraphQL endpoint."""
    global _default_token, _graphql_url  # noqa: PLW0603
    _default_token = default_token
    _graphql_url = graphql_url


def get_default_token() -> str:
    """Dependency that provides the fallback GitHub token."""
    return _default_token


DefaultTokenDep = Annotated[str, Depends(get_default_token)]


def get_transport_factory() -> TransportFactory:
    """Dependency that builds a transport for a given token."""

    def factory(token: str) -> ClosableTransport:
        return GraphQLTransport(token=token, base_url=_graphql_url)

    return factory


TransportFactoryDep = Annotated[TransportFactory, Depends(get_transport_factory)]


def init_event_manager() -> EventManager:
    """Initialize the global EventManager instance."""
    global _event_manager  # noqa: PLW0603
    _event_manager = EventManager()
    return _event_manager


def close_event_manager() -> None:
    global _event_manager  # noqa: PLW0603
    _event_manager = None


def get_event_manager() -> Generator[EventManager, None, None]:
    """Dependency that provides the EventManager instance."""
    if _event_manager is None:
        raise RuntimeError("EventManager not initialized. Call init_event_manager() first.")
    yield _event_manager


EventManagerDep = Annotated[EventManager, Depends(get_event_manager)]
