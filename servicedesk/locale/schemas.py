# servicedesk/locale/schemas.py
from pydantic import BaseModel, Field


class MissingKeys(BaseModel):
    category: str
    keys: list[str]


class LocaleValidationResult(BaseModel):
    locale: str
    is_complete: bool = True
    missing_files: list[str] = Field(default_factory=list)
    missing_keys: list[MissingKeys] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)


class LocaleValidationSummary(BaseModel):
    valid: list[str]
    invalid: list[str]
    results: list[LocaleValidationResult]


class LocaleValidationReport(LocaleValidationSummary):
    report: str


class LocaleInfo(BaseModel):
    default: str
    current: str
    supported: list[str]


class LocaleStrings(BaseModel):
    locale: str
    strings: dict[str, dict[str, str]]


class LocaleString(BaseModel):
    locale: str
    category: str
    key: str
    value: str
    found: bool


class LocaleUpdate(BaseModel):
    locale: str = Field(..., min_length=2, max_length=16)
