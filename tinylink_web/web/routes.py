"""Dashboard routes and public short-code redirects."""

from typing import Optional

from fastapi import APIRouter, Form, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse

from tinylink.common.logging_config import get_logger
from tinylink.errors import NotFound, StoreUnavailable, TinyLinkError
from ..templating import path_prefix, render

router = APIRouter()
logger = get_logger("web")


def _redirect_home(request: Request, query: str = "") -> RedirectResponse:
    return RedirectResponse(
        url=f"{path_prefix(request)}/{query}",
        status_code=status.HTTP_303_SEE_OTHER,
    )


@router.get("/", response_class=HTMLResponse, include_in_schema=False)
async def dashboard(request: Request, error: Optional[str] = None):
    """List every link, newest first."""
    registry = request.app.state.registry

    try:
        links = await registry.list()
    except StoreUnavailable as e:
        logger.error(f"Error fetching links for dashboard: {e}")
        return render(request, "index.html", links=[], error="Failed to load links.")

    message = "Failed to delete link." if error == "DeletionFailed" else None
    return render(request, "index.html", links=links, error=message)


@router.get("/search", response_class=HTMLResponse, include_in_schema=False)
async def search(request: Request, search: Optional[str] = None):
    """List links whose short code contains the search term."""
    registry = request.app.state.registry

    try:
        links = await registry.list(search)
    except StoreUnavailable as e:
        logger.error(f"Error during search: {e}")
        return render(
            request, "index.html", links=[], search_term=search,
            error="Failed to perform search.",
        )

    return render(request, "index.html", links=links, search_term=search)


@router.get("/add", response_class=HTMLResponse, include_in_schema=False)
async def add_form(request: Request):
    """Show the link creation form."""
    return render(request, "add.html")


@router.post("/create", response_class=HTMLResponse, include_in_schema=False)
async def create_link_web(
    request: Request,
    target_url: str = Form(...),
    custom_code: Optional[str] = Form(None),
):
    """Handle the creation form."""
    registry = request.app.state.registry
    custom_code = (custom_code or "").strip() or None

    try:
        await registry.create(target_url=target_url.strip(), custom_code=custom_code)
    except TinyLinkError as e:
        logger.info(f"Link creation rejected: {e}")
        return render(
            request, "add.html", status_code=e.status_code,
            error=str(e), target_url=target_url, custom_code=custom_code,
        )

    return _redirect_home(request)


@router.post("/delete/{short_code}", include_in_schema=False)
async def delete_link_web(request: Request, short_code: str):
    """Delete a link from the dashboard."""
    registry = request.app.state.registry

    try:
        await registry.delete(short_code)
    except TinyLinkError as e:
        logger.error(f"Error deleting link {short_code}: {e}")
        return _redirect_home(request, "?error=DeletionFailed")

    return _redirect_home(request)


@router.get("/code/{short_code}", response_class=HTMLResponse, include_in_schema=False)
async def link_stats(request: Request, short_code: str):
    """Show click statistics for one link."""
    registry = request.app.state.registry

    try:
        link = await registry.get(short_code)
    except NotFound:
        return render(
            request, "error.html", status_code=status.HTTP_404_NOT_FOUND,
            error=f'Stats for short code "{short_code}" not found.',
        )

    return render(request, "stats.html", link=link)


@router.get("/{short_code}", include_in_schema=False)
async def redirect_to_target(request: Request, short_code: str):
    """Track the visit and redirect to the target URL."""
    registry = request.app.state.registry

    try:
        target_url = await registry.track_click(short_code)
    except NotFound:
        return render(
            request, "error.html", status_code=status.HTTP_404_NOT_FOUND,
            error="TinyLink not found.",
        )

    # Temporary redirect so repeat visits are tracked too
    return RedirectResponse(url=target_url, status_code=status.HTTP_302_FOUND)
