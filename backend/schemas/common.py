from typing import Annotated, Optional
from pydantic import BeforeValidator, StringConstraints


def blank_to_none(value):
    # HTML forms send "" for untouched optional inputs
    if isinstance(value, str) and not value.strip():
        return None
    return value


def _strip_optional(value):
    value = blank_to_none(value)
    return value.strip() if isinstance(value, str) else value


# Required text field: surrounding whitespace stripped, must not end up empty
NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]

# Optional text field: blank input is stored as NULL
OptionalText = Annotated[Optional[str], BeforeValidator(_strip_optional)]
