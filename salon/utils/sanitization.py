import html
from typing import Any, Optional


def sanitize_string(value: Optional[str]) -> Optional[str]:
    """
    Trim a string and escape HTML special characters to prevent XSS.
    Returns None if input is None.
    """
    if value is None:
        return None
    if not isinstance(value, str):
        return value
    return html.escape(value.strip(), quote=True)


def sanitize_dict(data: dict[str, Any], fields: Optional[list[str]] = None) -> dict[str, Any]:
    """
    Sanitize string values of a flat dictionary.
    If fields is None, sanitizes all strings.
    """
    if not data:
        return data

    return {
        key: (
            sanitize_string(value)
            if isinstance(value, str) and (fields is None or key in fields)
            else value
        )
        for key, value in data.items()
    }
