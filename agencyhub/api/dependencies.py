from datetime import date
from typing import Generator

from fastapi import Depends, Request

from agencyhub.core.config import get_settings
from agencyhub.services.upstream import AgencyHubClient, ResponseCache


def get_response_cache(request: Request) -> ResponseCache:
    """The application-wide response cache, created at startup."""
    return request.app.state.response_cache


def get_upstream_client(
    cache: ResponseCache = Depends(get_response_cache),
) -> Generator[AgencyHubClient, None, None]:
    """
    Dependency that provides an upstream API client.

    Usage:
        @router.get("/")
        def endpoint(client: AgencyHubClient = Depends(get_upstream_client)):
            ...
    """
    settings = get_settings()
    client = AgencyHubClient(
        base_url=settings.upstream_base_url,
        cache=cache,
        session_cookie=settings.upstream_session_cookie,
        api_token=settings.upstream_api_token,
        timeout=settings.upstream_timeout_seconds,
    )
    try:
        yield client
    finally:
        client.close()


def get_today() -> date:
    """Reference date for period resolution; overridden in tests."""
    return date.today()
