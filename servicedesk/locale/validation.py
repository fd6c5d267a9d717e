# servicedesk/locale/validation.py
"""Completeness checks of locale bundles against a reference locale."""

import logging
from collections.abc import Iterable

from servicedesk.locale.registry import LocaleRegistry, required_locale_files
from servicedesk.locale.schemas import LocaleValidationResult, LocaleValidationSummary, MissingKeys

logger = logging.getLogger(__name__)


def validate_locale_completeness(
    registry: LocaleRegistry,
    locale: str,
    reference: str | None = None,
) -> LocaleValidationResult:
    reference = reference or registry.default_locale
    cache_key = (locale, reference)
    cached = registry.validation_cache.get(cache_key)
    if cached is not None:
        return cached

    result = LocaleValidationResult(locale=locale)
    locale_data = registry.load(locale)
    reference_data = registry.load(reference)

    if locale_data is None:
        result.is_complete = False
        result.missing_files = required_locale_files()
        result.warnings.append(f"Failed to load locale data for '{locale}'")
    elif reference_data is None:
        result.warnings.append(f"Failed to load reference locale '{reference}'")
    else:
        for category, reference_strings in reference_data.items():
            strings = locale_data.get(category)
            if strings is None:
                result.missing_files.append(f"{category}.json")
                missing = list(reference_strings)
            else:
                missing = [key for key in reference_strings if key not in strings]
            if missing:
                result.is_complete = False
                result.missing_keys.append(MissingKeys(category=category, keys=missing))

        if not result.is_complete:
            logger.warning(
                "Locale %s is incomplete: %d categories with missing keys",
                locale, len(result.missing_keys),
            )

    registry.validation_cache[cache_key] = result
    return result


def validate_all_locales(
    registry: LocaleRegistry,
    locales: Iterable[str] | None = None,
    reference: str | None = None,
) -> LocaleValidationSummary:
    locales = list(locales) if locales is not None else registry.available_locales()
    results = [validate_locale_completeness(registry, locale, reference) for locale in locales]
    return LocaleValidationSummary(
        valid=[result.locale for result in results if result.is_complete],
        invalid=[result.locale for result in results if not result.is_complete],
        results=results,
    )


def format_validation_report(summary: LocaleValidationSummary) -> str:
    lines = [
        "=== Locale Validation Report ===",
        "",
        f"Total locales: {len(summary.results)}",
        f"Valid: {len(summary.valid)} ({', '.join(summary.valid)})",
        f"Invalid: {len(summary.invalid)} ({', '.join(summary.invalid)})",
        "",
    ]
    for result in summary.results:
        lines.append(f"--- {result.locale.upper()} ---")
        lines.append(f"Status: {'Complete' if result.is_complete else 'Incomplete'}")
        if result.missing_files:
            lines.append(f"Missing files: {', '.join(result.missing_files)}")
        if result.missing_keys:
            lines.append("Missing keys:")
            lines.extend(f"  {item.category}: {', '.join(item.keys)}" for item in result.missing_keys)
        if result.warnings:
            lines.append(f"Warnings: {'; '.join(result.warnings)}")
        lines.append("")
    return "\n".join(lines)


def get_validation_report(registry: LocaleRegistry, locales: Iterable[str] | None = None) -> str:
    return format_validation_report(validate_all_locales(registry, locales))
