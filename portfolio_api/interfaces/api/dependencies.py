"""FastAPI dependency utilities."""

from dataclasses import dataclass

from fastapi import Query, Request

from portfolio_api.application.use_cases.activity import RequestContext
from portfolio_api.application.use_cases.analytics import SessionTracker
from portfolio_api.config import get_settings
from portfolio_api.domain.errors import StoreUnavailable


@dataclass(frozen=True)
class PageParams:
    page: int
    limit: int


def _resolve_page(page: int, limit: int | None, default_limit: int) -> PageParams:
    settings = get_settings()
    size = limit or default_limit
    return PageParams(page=page, limit=min(size, settings.max_page_size))


def notification_page_params(
    page: int = Query(1, ge=1),
    limit: int | None = Query(None, ge=1),
) -> PageParams:
    return _resolve_page(page, limit, get_settings().notification_page_size)


def activity_page_params(
    page: int = Query(1, ge=1),
    limit: int | None = Query(None, ge=1),
) -> PageParams:
    return _resolve_page(page, limit, get_settings().activity_page_size)


def get_request_context(request: Request) -> RequestContext:
    """Capture the client address and user agent of the current request."""

    return RequestContext.from_headers(request.headers)


def get_session_tracker(request: Request) -> SessionTracker:
    """Return the tracker created by the application lifespan."""

    tracker = getattr(request.app.state, "session_tracker", None)
    if tracker is None:
        raise StoreUnavailable("Analytics tracking is not available")
    return tracker


__all__ = [
    "PageParams",
    "activity_page_params",
    "get_request_context",
    "get_session_tracker",
    "notification_page_params",
]
