"""Page route guard: locale prefixes and cookie-presence authentication.

Only browser page paths are guarded; API calls, NiceGUI internals, docs and
static files (anything with a dot in the path) pass straight through. The
check is whether a ``chatUser`` cookie exists at all, not whether it is valid.
"""

import logging
from collections.abc import Awaitable, Callable

from fastapi import Request, Response, status
from fastapi.responses import RedirectResponse

from docchat.i18n import LOCALE_COOKIE, SUPPORTED_LOCALES

logger = logging.getLogger(__name__)

AUTH_COOKIE = "chatUser"

_PASSTHROUGH_PREFIXES = (
    "/api",
    "/_nicegui",
    "/_nicegui_ws",
    "/docs",
    "/redoc",
    "/openapi.json",
    "/health",
)
_AUTH_PAGES = ("/login", "/register")


def _is_page_path(path: str) -> bool:
    if "." in path:
        return False
    return not any(path == p or path.startswith(f"{p}/") for p in _PASSTHROUGH_PREFIXES)


def _split_locale(path: str) -> tuple[str | None, str]:
    """Return (locale, path without it) for paths like ``/es/login``."""
    segments = path.lstrip("/").split("/", 1)
    if segments[0] in SUPPORTED_LOCALES:
        rest = segments[1] if len(segments) > 1 else ""
        return segments[0], f"/{rest}"
    return None, path


def _is_protected(path: str) -> bool:
    return path == "/" or path.startswith("/chat")


def _is_auth_page(path: str) -> bool:
    return any(path.startswith(p) for p in _AUTH_PAGES)


def _redirect(url: str) -> RedirectResponse:
    return RedirectResponse(url, status_code=status.HTTP_307_TEMPORARY_REDIRECT)


async def route_guard(
    request: Request, call_next: Callable[[Request], Awaitable[Response]]
) -> Response:
    path = request.url.path
    if not _is_page_path(path):
        return await call_next(request)

    locale, stripped = _split_locale(path)
    if locale is not None:
        target = f"{stripped}?{request.url.query}" if request.url.query else stripped
        response = _redirect(target)
        response.set_cookie(LOCALE_COOKIE, locale, path="/", samesite="lax")
        return response

    signed_in = bool(request.cookies.get(AUTH_COOKIE))
    if _is_auth_page(path) and signed_in:
        return _redirect("/")
    if _is_protected(path) and not signed_in:
        logger.debug(f"Redirecting anonymous request for {path} to /login")
        return _redirect("/login")

    return await call_next(request)
