from typing import Iterable, Optional

from workfriar.exceptions import RequestValidationFailure


def require_non_empty(value: Optional[str], field_name: str, message: Optional[str] = None) -> str:
    if value is None or not str(value).strip():
        raise RequestValidationFailure(message or f"{field_name} is required")
    return str(value).strip()


def require_one_of(value: Optional[str], field_name: str, allowed: Iterable[str], message: Optional[str] = None) -> str:
    allowed = list(allowed)
    if value not in allowed:
        raise RequestValidationFailure(message or f"{field_name} must be one of: {', '.join(allowed)}")
    return value


def require_length(value: str, field_name: str, min_len: int, max_len: int) -> str:
    if value is None or not (min_len <= len(value) <= max_len):
        raise RequestValidationFailure(f"{field_name} must be between {min_len} and {max_len} characters")
    return value
