"""REST API for boardtables."""

from boardtables.api.app import app, create_app
from boardtables.api.models import (
    APIResponse,
    TableResponse,
    TablesRequest,
    TablesResponse,
)

__all__ = [
    "APIResponse",
    "TableResponse",
    "TablesRequest",
    "TablesResponse",
    "app",
    "create_app",
]
