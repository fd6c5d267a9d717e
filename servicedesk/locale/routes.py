# servicedesk/locale/routes.py
from fastapi import APIRouter, Depends, Query, Request

from servicedesk.auth.dependencies import require_admin
from servicedesk.core.errors import DomainValidationError, NotFoundError
from servicedesk.locale import validation
from servicedesk.locale.registry import LocaleRegistry, get_locale_registry, interpolate, missing_placeholder
from servicedesk.locale.schemas import (
    LocaleInfo,
    LocaleString,
    LocaleStrings,
    LocaleUpdate,
    LocaleValidationReport,
)

router = APIRouter(prefix="/locales", tags=["Locales"])


def request_locale(request: Request, registry: LocaleRegistry) -> str:
    return getattr(request.state, "locale", None) or registry.default_locale


def parse_values(values: list[str]) -> dict[str, str]:
    # ?values=name:John&values=count:3
    parsed = {}
    for item in values:
        name, sep, value = item.partition(":")
        if not sep or not name:
            raise DomainValidationError(f"Invalid interpolation value: {item!r}")
        parsed[name] = value
    return parsed


@router.get("", response_model=LocaleInfo)
def list_locales(request: Request, registry: LocaleRegistry = Depends(get_locale_registry)):
    return LocaleInfo(
        default=registry.default_locale,
        current=request_locale(request, registry),
        supported=registry.available_locales(),
    )


@router.get("/strings", response_model=LocaleStrings)
def current_strings(request: Request, registry: LocaleRegistry = Depends(get_locale_registry)):
    locale = request_locale(request, registry)
    return LocaleStrings(locale=locale, strings=registry.resolve_bundle(locale))


@router.get("/validation", response_model=LocaleValidationReport, dependencies=[Depends(require_admin)])
def validate_locales(registry: LocaleRegistry = Depends(get_locale_registry)):
    summary = validation.validate_all_locales(registry)
    return LocaleValidationReport(
        **summary.model_dump(),
        report=validation.format_validation_report(summary),
    )


@router.get("/{locale}/strings/{category}/{key}", response_model=LocaleString)
def get_string(
    locale: str,
    category: str,
    key: str,
    values: list[str] = Query(default=[]),
    registry: LocaleRegistry = Depends(get_locale_registry),
):
    if not registry.is_supported(locale):
        raise NotFoundError(f"Unsupported locale: {locale}")

    value = registry.get_string_with_fallback(locale, category, key)
    if value is None:
        return LocaleString(
            locale=locale, category=category, key=key,
            value=missing_placeholder(category, key), found=False,
        )
    return LocaleString(
        locale=locale, category=category, key=key,
        value=interpolate(value, parse_values(values)), found=True,
    )


@router.put("/current", response_model=LocaleInfo)
def set_current_locale(
    payload: LocaleUpdate,
    request: Request,
    registry: LocaleRegistry = Depends(get_locale_registry),
):
    if not registry.is_supported(payload.locale):
        raise DomainValidationError(f"Unsupported locale: {payload.locale}")

    # LocaleMiddleware writes the cookie and headers from request.state
    request.state.locale = payload.locale
    return LocaleInfo(
        default=registry.default_locale,
        current=payload.locale,
        supported=registry.available_locales(),
    )
