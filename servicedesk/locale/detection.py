# servicedesk/locale/detection.py
from servicedesk.locale.registry import LocaleRegistry

SKIPPED_PATHS = ("/docs", "/openapi.json", "/redoc", "/favicon.ico")
STATIC_EXTENSIONS = (
    ".css", ".js", ".map", ".png", ".jpg", ".jpeg", ".gif", ".svg", ".ico", ".webp", ".woff", ".woff2",
)


def should_skip_path(path: str) -> bool:
    if any(path == skipped or path.startswith(skipped + "/") for skipped in SKIPPED_PATHS):
        return True
    return path.lower().endswith(STATIC_EXTENSIONS)


def locale_from_path(path: str, registry: LocaleRegistry) -> str | None:
    first = path.lstrip("/").split("/", 1)[0]
    return first if registry.is_supported(first) else None


def strip_locale_prefix(path: str, registry: LocaleRegistry) -> str:
    """``/es/tickets`` -> ``/tickets``, ``/es`` -> ``/``."""
    locale = locale_from_path(path, registry)
    if locale is None:
        return path
    rest = path.lstrip("/")[len(locale):]
    return rest if rest.startswith("/") else "/" + rest


def parse_accept_language(header: str | None) -> list[str]:
    # quality values are ignored, header order wins
    if not header:
        return []
    languages = []
    for part in header.split(","):
        tag = part.split(";", 1)[0].strip()
        if tag and tag != "*":
            languages.append(tag)
    return languages


def detect_preferred_locale(
    registry: LocaleRegistry,
    path: str = "/",
    cookie: str | None = None,
    accept_language: str | None = None,
) -> str:
    from_path = locale_from_path(path, registry)
    if from_path:
        return from_path

    if cookie and registry.is_supported(cookie):
        return cookie

    supported = registry.available_locales()
    for tag in parse_accept_language(accept_language):
        if tag in supported:
            return tag
        prefix = tag.split("-", 1)[0].lower()
        if prefix in supported:
            return prefix

    return registry.default_locale
