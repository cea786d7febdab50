"""Utility helper functions."""

from inkpost.utils.helpers import as_utc, get_summary, host, today_str, utc_now

__all__ = [
    "as_utc",
    "get_summary",
    "host",
    "today_str",
    "utc_now",
]
