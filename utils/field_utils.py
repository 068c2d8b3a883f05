"""
Helpers for loosely-typed JSON request fields.

Request fields accept any JSON value. A field counts as supplied unless it is
null, false, zero or the empty string; anything else is used as text.
"""

import json
from typing import Any


def is_present(value: Any) -> bool:
    """Return True if a JSON field value counts as supplied."""
    if value is None or value is False:
        return False
    if isinstance(value, str):
        return value != ""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value != 0
    return True


def as_text(value: Any) -> str:
    """Return a string field unchanged; serialize any other JSON value."""
    if isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False)
