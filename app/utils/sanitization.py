import html
from typing import Any


def sanitize_string(value: Any) -> str:
    """
    Escape a value for interpolation into an HTML template.
    None renders as an empty string; non-strings are converted with str().
    """
    if value is None:
        return ""
    return html.escape(str(value), quote=True)
