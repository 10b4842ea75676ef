"""Display helpers for admin templates and the admin error fragment."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

_MISSING = object()


@dataclass
class TemplateData:
    """Values handed to an admin template."""

    title: str = ""
    data: dict[str, Any] = field(default_factory=dict)
    user: Any = None
    csrf_token: str = ""
    is_hx: bool = False
    errors: dict[str, str] = field(default_factory=dict)
    current_path: str = ""
    flash: str = ""
    flash_type: str = ""


def _is_zero_time(value: datetime) -> bool:
    return value.replace(tzinfo=None) == datetime.min


def _field(obj: Any, name: str) -> Any:
    """Return a public dataclass field of ``obj``, or ``_MISSING``."""
    if obj is None or isinstance(obj, type) or not dataclasses.is_dataclass(obj):
        return _MISSING
    if name.startswith("_") or name not in {f.name for f in dataclasses.fields(obj)}:
        return _MISSING
    return getattr(obj, name)


def field_value(obj: Any, field_name: str) -> Any:
    """Return a record's field for display: ``Yes``/``No`` for flags, ``-`` for empty values."""
    value = _field(obj, field_name)
    if value is _MISSING:
        return ""
    if value is None:
        return "-"
    if isinstance(value, bool):
        return "Yes" if value else "No"
    if isinstance(value, datetime):
        if _is_zero_time(value):
            return "-"
        return value.strftime("%Y-%m-%d %H:%M:%S")
    return value


def get_id(obj: Any) -> int:
    """Return the record's integer ``id``, or 0 when it has none."""
    value = _field(obj, "id")
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    return 0


def format_datetime_field(obj: Any, field_name: str) -> str:
    """Format a datetime field for a ``datetime-local`` input, or return ``""``."""
    value = _field(obj, field_name)
    if isinstance(value, datetime) and not _is_zero_time(value):
        return value.strftime("%Y-%m-%dT%H:%M")
    return ""


def render_error(status: int, message: str) -> str:
    """Return the HTML fragment shown for an admin error."""
    return (
        '<div class="error">\n'
        f"\t\t<h2>Error {status}</h2>\n"
        f"\t\t<p>{message}</p>\n"
        "\t</div>"
    )