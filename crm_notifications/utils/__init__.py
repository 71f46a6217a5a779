"""Utility helpers for reusable functionality."""

from .datetime import (
    Clock,
    as_wall_clock,
    ensure_app_timezone,
    get_app_timezone,
    minute_of_day,
    now_in_app_timezone,
    parse_datetime,
)

__all__ = [
    "Clock",
    "as_wall_clock",
    "ensure_app_timezone",
    "get_app_timezone",
    "minute_of_day",
    "now_in_app_timezone",
    "parse_datetime",
]
