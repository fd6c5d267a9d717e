# servicedesk/locale/registry.py
"""
String bundles per locale.

A bundle is ``{category: {key: text}}`` built from
``<bundles_dir>/<locale>/<category>.json``. Extra locales can be plugged in
with ``register_loader`` without touching the filesystem.
"""

import json
import logging
import re
import threading
from collections.abc import Callable, Iterable
from functools import lru_cache
from pathlib import Path
from typing import Any

from fastapi import status

from servicedesk.core.config import get_settings
from servicedesk.core.errors import ServiceDeskError

logger = logging.getLogger(__name__)

REQUIRED_CATEGORIES = (
    "common",
    "auth",
    "dashboard",
    "tickets",
    "assets",
    "users",
    "navigation",
    "notifications",
)

LOCALE_CODE = re.compile(r"^[a-z]{2,3}(-[A-Za-z0-9]{2,8})?$")
_PLACEHOLDER = re.compile(r"\{(\w+)\}")

Bundle = dict[str, dict[str, str]]
Loader = Callable[[], Bundle | None]


class LocaleUnavailableError(ServiceDeskError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    code = "LOCALE_UNAVAILABLE"


def required_locale_files() -> list[str]:
    return [f"{category}.json" for category in REQUIRED_CATEGORIES]


def missing_placeholder(category: str, key: str) -> str:
    return f"[Missing: {category}.{key}]"


def interpolate(template: str, values: dict[str, Any] | None = None) -> str:
    """Fill ``{name}`` placeholders; unknown names are left as they are."""
    if not values:
        return template

    def replace(match: re.Match) -> str:
        name = match.group(1)
        return str(values[name]) if name in values else match.group(0)

    return _PLACEHOLDER.sub(replace, template)


class LocaleRegistry:
    def __init__(self, bundles_dir: Path | str, default_locale: str = "en") -> None:
        self.bundles_dir = Path(bundles_dir)
        self.default_locale = default_locale
        self._loaders: dict[str, Loader] = {}
        self._bundles: dict[str, Bundle] = {}
        self._available: list[str] | None = None
        # (locale, reference) -> result, filled by servicedesk.locale.validation
        self.validation_cache: dict[tuple[str, str], Any] = {}
        self._lock = threading.Lock()

    # discovery

    def _discover_on_disk(self) -> set[str]:
        if not self.bundles_dir.is_dir():
            logger.warning("Locale directory %s does not exist", self.bundles_dir)
            return set()
        return {
            entry.name
            for entry in self.bundles_dir.iterdir()
            if entry.is_dir() and LOCALE_CODE.match(entry.name)
        }

    def available_locales(self) -> list[str]:
        with self._lock:
            if self._available is None:
                found = self._discover_on_disk() | set(self._loaders)
                found.add(self.default_locale)
                rest = sorted(found - {self.default_locale})
                self._available = [self.default_locale, *rest]
                logger.debug("Available locales: %s", ", ".join(self._available))
            return list(self._available)

    def is_supported(self, locale: str | None) -> bool:
        return bool(locale) and locale in self.available_locales()

    def register_loader(self, locale: str, loader: Loader) -> None:
        if not LOCALE_CODE.match(locale):
            raise ValueError(f"Invalid locale code: {locale!r}")
        with self._lock:
            self._loaders[locale] = loader
            self._bundles.pop(locale, None)
            self._available = None
        self.validation_cache.clear()
        logger.info("Registered loader for locale %s", locale)

    # loading

    def _read_from_disk(self, locale: str) -> Bundle | None:
        locale_dir = self.bundles_dir / locale
        if not locale_dir.is_dir():
            return None

        bundle: Bundle = {}
        for category in REQUIRED_CATEGORIES:
            path = locale_dir / f"{category}.json"
            if not path.is_file():
                logger.warning("Locale %s has no %s", locale, path.name)
                continue
            with path.open(encoding="utf-8") as fh:
                data = json.load(fh)
            if not isinstance(data, dict):
                raise ValueError(f"{path.name} must contain a JSON object")
            bundle[category] = data
        return bundle

    def load(self, locale: str) -> Bundle | None:
        """Bundle for ``locale``, or None when it cannot be loaded."""
        cached = self._bundles.get(locale)
        if cached is not None:
            return cached

        if not LOCALE_CODE.match(locale or ""):
            logger.warning("No loader available for locale %r", locale)
            return None

        try:
            loader = self._loaders.get(locale)
            bundle = loader() if loader is not None else self._read_from_disk(locale)
        except (OSError, ValueError) as exc:
            logger.error("Error loading locale data for %s: %s", locale, exc)
            return None

        if bundle is None:
            logger.warning("No locale data for %s", locale)
            return None

        with self._lock:
            self._bundles[locale] = bundle
        logger.info("Loaded locale data for %s", locale)
        return bundle

    def clear_caches(self) -> None:
        with self._lock:
            self._bundles.clear()
            self._available = None
        self.validation_cache.clear()
        logger.debug("Locale caches cleared")

    # lookups

    def get_strings(self, locale: str) -> Bundle:
        if self.is_supported(locale):
            bundle = self.load(locale)
            if bundle is not None:
                return bundle

        fallback = self.load(self.default_locale)
        if fallback is None:
            raise LocaleUnavailableError("No locale data available, including fallback")
        if locale != self.default_locale:
            logger.warning("Using fallback locale %s instead of %s", self.default_locale, locale)
        return fallback

    def get_string_with_fallback(
        self,
        locale: str,
        category: str,
        key: str,
        fallback_chain: Iterable[str] | None = None,
    ) -> str | None:
        chain = [locale, *(fallback_chain if fallback_chain is not None else [self.default_locale])]
        # de-duplicate, keep order
        chain = list(dict.fromkeys(chain))

        for candidate in chain:
            bundle = self.load(candidate)
            value = (bundle or {}).get(category, {}).get(key)
            if isinstance(value, str) and value:
                if candidate != locale:
                    logger.info(
                        "Using fallback locale %s for %s.%s (requested %s)",
                        candidate, category, key, locale,
                    )
                return value

        logger.warning("Missing translation %s.%s for %s", category, key, " -> ".join(chain))
        return None

    def get_safe_string(
        self,
        locale: str,
        category: str,
        key: str,
        fallback_chain: Iterable[str] | None = None,
        error_fallback: str | None = None,
    ) -> str:
        value = self.get_string_with_fallback(locale, category, key, fallback_chain)
        if value is not None:
            return value
        return error_fallback or missing_placeholder(category, key)

    def resolve_bundle(self, locale: str) -> Bundle:
        """The locale's strings with gaps filled from the default locale."""
        base = self.get_strings(self.default_locale)
        if locale == self.default_locale or not self.is_supported(locale):
            return {category: dict(strings) for category, strings in base.items()}

        own = self.load(locale) or {}
        resolved: Bundle = {}
        for category in dict.fromkeys([*base, *own]):
            merged = dict(base.get(category, {}))
            merged.update({key: value for key, value in own.get(category, {}).items() if value})
            resolved[category] = merged
        return resolved


@lru_cache
def get_locale_registry() -> LocaleRegistry:
    settings = get_settings()
    return LocaleRegistry(settings.LOCALES_DIR, settings.DEFAULT_LOCALE)
