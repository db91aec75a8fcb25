"""Jinja2 rendering helpers shared by the dashboard and error pages."""

import os

from fastapi import Request
from fastapi.templating import Jinja2Templates

from tinylink.common.url_builder import build_base_url, build_short_url, forwarded_path_prefix

template_dir = os.path.join(os.path.dirname(__file__), "templates")
templates = Jinja2Templates(directory=template_dir)


def path_prefix(request: Request) -> str:
    """Path prefix from X-Forwarded-Prefix (proxy) or config. Leading slash, no trailing."""
    prefix = forwarded_path_prefix(request.headers)
    if prefix:
        return prefix
    configured = (getattr(request.app.state.config, "path_prefix", "") or "").strip("/")
    return f"/{configured}" if configured else ""


def short_url_for(request: Request, short_code: str) -> str:
    """Public short URL for a code as seen by the requesting client."""
    config = request.app.state.config
    base_url = build_base_url(
        headers=request.headers,
        fallback_base_url=config.base_url,
        request_scheme=request.url.scheme,
        request_host=request.headers.get("host"),
    )
    return build_short_url(short_code, base_url, path_prefix(request))


def render(request: Request, name: str, status_code: int = 200, **context):
    """Render a template with the prefix and short URL helpers in scope."""
    context.setdefault("error", None)
    context["prefix"] = path_prefix(request)
    context["short_url"] = lambda code: short_url_for(request, code)
    return templates.TemplateResponse(request, name, context, status_code=status_code)
