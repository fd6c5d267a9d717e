# servicedesk/core/sanitize.py
import re

MAX_TEXT_LENGTH = 10000
MAX_EMAIL_LENGTH = 255

# tab, newline and carriage return survive
_CONTROL_CHARS = re.compile(r"[\u0000-\u0008\u000B\u000C\u000E-\u001F\u007F-\u009F]")
_SCRIPT_BLOCKS = re.compile(r"<script\b[^<]*(?:(?!</script>)<[^<]*)*</script>", re.IGNORECASE)


def sanitize_string(value: str) -> str:
    """Trim, drop control characters and inline script blocks, cap the length."""
    value = _CONTROL_CHARS.sub("", value)
    value = _SCRIPT_BLOCKS.sub("", value)
    return value.strip()[:MAX_TEXT_LENGTH]


def sanitize_email(value: str) -> str:
    return value.strip().lower()[:MAX_EMAIL_LENGTH]
