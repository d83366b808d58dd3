"""Board table generation endpoint."""

from uuid import uuid4

from fastapi import APIRouter, HTTPException, status

from boardtables.api.dependencies import DefaultTokenDep, EventManagerDep, TransportFactoryDep
from boardtables.api.models import (
    APIResponse,
    TablesRequest,
    TablesResponse,
    table_to_response,
)
from boardtables.board import BoardError, fetch_project_snapshot
from boardtables.config import BoardQuery, default_cutoff
from boardtables.tables import build_tables

router = APIRouter(prefix="/tables", tags=["tables"])


@router.post("", response_model=APIResponse[TablesResponse])
async def generate_tables(
    request: TablesRequest,
    default_token: DefaultTokenDep,
    transport_factory: TransportFactoryDep,
    events: EventManagerDep,
) -> APIResponse[TablesResponse]:
    """Fetch the whole board and return one table per column.

    Progress for the fetch is published on the event stream under
    ``request_id`` (generated when not supplied).
    """
    api_key = request.api_key or default_token
    if not api_key:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="An API key is required (or set GITHUB_TOKEN on the server)",
        )

    query = BoardQuery(
        organization=request.organization,
        project_name=request.project_name,
        api_key=api_key,
        cutoff=request.cutoff or default_cutoff(),
        add_notes_column=request.add_notes_column,
    )
    request_id = request.request_id or str(uuid4())
    events.emit_fetch_started(request_id, query.organization, query.project_name)

    try:
        async with transport_factory(query.api_key) as transport:
            snapshot = await fetch_project_snapshot(
                transport,
                query,
                on_progress=lambda progress: events.emit_fetch_progress(request_id, progress),
            )
    except BoardError as e:
        events.emit_fetch_failed(request_id, str(e))
        raise

    events.emit_fetch_completed(request_id, len(snapshot.columns), snapshot.card_count)
    tables = build_tables(snapshot, query.cutoff, query.add_notes_column)
    return APIResponse(
        data=TablesResponse(
            request_id=request_id,
            project_name=snapshot.name,
            cutoff=query.cutoff,
            tables=[table_to_response(t) for t in tables],
        )
    )
