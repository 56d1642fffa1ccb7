"""Display helpers for refresh timestamps."""

from __future__ import annotations

from datetime import datetime

UPDATE_TIME_FORMAT = "%Y/%m/%d %H:%M:%S"


def format_update_time(value: datetime | None) -> str:
    if value is None:
        return "n/a"
    return value.strftime(UPDATE_TIME_FORMAT)
