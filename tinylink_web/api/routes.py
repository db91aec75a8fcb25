"""API routes implementation."""

from typing import List, Optional

from fastapi import APIRouter, Request, Response, status
from fastapi.responses import JSONResponse

from tinylink.database.models import Link
from .schemas import (
    CreateLinkRequest,
    ErrorResponse,
    HealthResponse,
    LinkResponse,
    TargetResponse,
)
from ..templating import short_url_for

router = APIRouter()
health_router = APIRouter()


def _link_response(request: Request, link: Link) -> LinkResponse:
    return LinkResponse(
        short_code=link.short_code,
        short_url=short_url_for(request, link.short_code),
        target_url=link.target_url,
        total_clicks=link.total_clicks,
        last_clicked_at=link.last_clicked_at,
        created_at=link.created_at,
    )


@router.post(
    "/links",
    response_model=LinkResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid short code or URL"},
        409: {"model": ErrorResponse, "description": "Custom short code already in use"},
        500: {"model": ErrorResponse, "description": "No unique short code could be generated"},
        503: {"model": ErrorResponse, "description": "Link store unavailable"},
    },
    summary="Create link",
    description="Create a short link. Optionally provide a custom 6-8 character code.",
)
async def create_link(request: Request, body: CreateLinkRequest):
    """Create a short link."""
    registry = request.app.state.registry

    link = await registry.create(
        target_url=body.target_url,
        custom_code=body.custom_code,
    )

    return _link_response(request, link)


@router.get(
    "/links",
    response_model=List[LinkResponse],
    summary="List links",
    description="List links newest first, optionally filtered by a short code substring.",
)
async def list_links(request: Request, query: Optional[str] = None):
    """List links, optionally searching short codes."""
    registry = request.app.state.registry

    links = await registry.list(query)

    return [_link_response(request, link) for link in links]


@router.get(
    "/links/{short_code}",
    response_model=LinkResponse,
    responses={404: {"model": ErrorResponse, "description": "Short code not found"}},
    summary="Get link",
    description="Get a link with its click statistics.",
)
async def get_link(request: Request, short_code: str):
    """Get a link by short code."""
    registry = request.app.state.registry

    link = await registry.get(short_code)

    return _link_response(request, link)


@router.delete(
    "/links/{short_code}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse, "description": "Short code not found"}},
    summary="Delete link",
)
async def delete_link(request: Request, short_code: str):
    """Delete a link by short code."""
    registry = request.app.state.registry

    await registry.delete(short_code)

    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/links/{short_code}/redirect",
    response_model=TargetResponse,
    responses={404: {"model": ErrorResponse, "description": "Short code not found"}},
    summary="Track redirect",
    description="Record a click and return the target URL for the caller to redirect to.",
)
async def track_redirect(request: Request, short_code: str):
    """Record a click and return the target URL."""
    registry = request.app.state.registry

    target_url = await registry.track_click(short_code)

    return TargetResponse(target_url=target_url)


@health_router.get(
    "/healthz",
    response_model=HealthResponse,
    responses={503: {"model": HealthResponse, "description": "Backend unavailable"}},
    summary="Health check",
)
async def health_check(request: Request):
    """Health check endpoint for load balancers and monitoring."""
    registry = request.app.state.registry
    config = request.app.state.config

    healthy = await registry.health_check()

    if healthy:
        body = HealthResponse(ok=True, version=config.app_version, db_status="connected")
        status_code = status.HTTP_200_OK
    elif config.mode == "frontend":
        body = HealthResponse(ok=False, version=config.app_version, message="API Server is unreachable.")
        status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    else:
        body = HealthResponse(
            ok=False,
            version=config.app_version,
            db_status="disconnected",
            error="Database connection failed",
        )
        status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(exclude_none=True),
    )
