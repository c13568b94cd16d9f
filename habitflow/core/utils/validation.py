"""Input validation helpers."""

from __future__ import annotations

from typing import Optional

from pydantic import ValidationError


def jsonable_errors(exc: ValidationError) -> list[dict]:
    """Pydantic error list with context values coerced to strings for jsonify."""
    errors = exc.errors(include_url=False)
    for err in errors:
        if "ctx" in err and isinstance(err["ctx"], dict):
            err["ctx"] = {k: str(v) for k, v in err["ctx"].items()}
        if "input" in err and not isinstance(err["input"], (str, int, float, bool, type(None), list, dict)):
            err["input"] = str(err["input"])
    return errors


def parse_positive_int(raw: Optional[str], default: int) -> int:
    """Parse a query-string integer; missing means ``default``, anything else must be > 0."""
    if raw is None or str(raw).strip() == "":
        return default
    try:
        value = int(str(raw).strip())
    except ValueError:
        raise ValueError("validation_error") from None
    if value <= 0:
        raise ValueError("validation_error")
    return value
