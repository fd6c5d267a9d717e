# servicedesk/locale/middleware.py
from urllib.parse import urlsplit, urlunsplit

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from servicedesk.core.config import get_settings
from servicedesk.locale.detection import (
    detect_preferred_locale,
    locale_from_path,
    should_skip_path,
    strip_locale_prefix,
)
from servicedesk.locale.registry import LocaleRegistry, get_locale_registry

LOCALE_HEADER = "x-locale"
REDIRECT_STATUSES = (301, 302, 303, 307, 308)


def prefix_location(location: str, prefix: str, host: str) -> str:
    """Put the locale prefix back on a same-host redirect target."""
    parts = urlsplit(location)
    if parts.netloc and parts.netloc != host:
        return location
    if parts.path == f"/{prefix}" or parts.path.startswith(f"/{prefix}/"):
        return location
    return urlunsplit(parts._replace(path=f"/{prefix}{parts.path or '/'}"))


class LocaleMiddleware(BaseHTTPMiddleware):
    """
    Resolves the locale of every request.

    ``/es/tickets/`` is served by the ``/tickets/`` route with ``es`` as the
    request locale. The chosen locale is remembered in a cookie and echoed in
    the ``x-locale`` and ``Content-Language`` headers.
    """

    def __init__(self, app, registry: LocaleRegistry | None = None):
        super().__init__(app)
        self._registry = registry

    @property
    def registry(self) -> LocaleRegistry:
        return self._registry or get_locale_registry()

    async def dispatch(self, request: Request, call_next):
        path = request.url.path
        if should_skip_path(path):
            return await call_next(request)

        settings = get_settings()
        registry = self.registry
        cookie = request.cookies.get(settings.LOCALE_COOKIE)
        locale = detect_preferred_locale(
            registry,
            path=path,
            cookie=cookie,
            accept_language=request.headers.get("accept-language"),
        )

        prefix = locale_from_path(path, registry)
        stripped = strip_locale_prefix(path, registry)
        if stripped != path:
            request.scope["path"] = stripped
            request.scope["raw_path"] = stripped.encode("utf-8")

        request.state.locale = locale
        response = await call_next(request)

        # e.g. the trailing-slash redirect, built from the stripped path
        if prefix and response.status_code in REDIRECT_STATUSES and "location" in response.headers:
            response.headers["location"] = prefix_location(
                response.headers["location"], prefix, request.url.netloc
            )

        # a handler may have switched it, see PUT /locales/current
        locale = getattr(request.state, "locale", locale)
        response.headers[LOCALE_HEADER] = locale
        response.headers["Content-Language"] = locale
        if cookie != locale:
            response.set_cookie(
                settings.LOCALE_COOKIE,
                locale,
                max_age=settings.LOCALE_COOKIE_MAX_AGE,
                path="/",
                samesite="lax",
            )
        return response
