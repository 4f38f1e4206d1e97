"""
Canonical forms of feed strings used as comparison keys.
Both functions are pure and never raise.
"""
from __future__ import annotations

import re
from typing import Any

# "1月3日 9:05", "01月03日9:05"
_CN_DATETIME = re.compile(r"([0-9]{1,2})月([0-9]{1,2})日\s*([0-9]{1,2}):([0-9]{2})")
_VS_SPLIT = re.compile(r"^(.*?)(vs)(.*)$", re.IGNORECASE | re.DOTALL)
_WHITESPACE = re.compile(r"\s+")
_HHMM = re.compile(r"[0-9]{2}:[0-9]{2}")


def format_date_time(value: Any) -> Any:
    """
    Zero-pad month and day and drop whitespace before the time.

    "1月3日 9:05" -> "01月03日9:05". Anything not shaped like that, non-strings
    and empty strings are returned unchanged.
    """
    if not value or not isinstance(value, str):
        return value
    match = _CN_DATETIME.fullmatch(value.strip())
    if not match:
        return value
    month, day, hour, minute = match.groups()
    return f"{month.zfill(2)}月{day.zfill(2)}日{hour}:{minute}"


def strip_whitespace(value: str) -> str:
    return _WHITESPACE.sub("", value)


def normalize_team_string(value: Any) -> str:
    """
    Order-insensitive team key: "热火 VS 76人" and "76人vs热火" give the same result.

    Whitespace is removed, the first case-insensitive "vs" splits the two sides,
    the sides are sorted and joined, and the result is lower-cased.
    """
    if not value:
        return ""
    compact = strip_whitespace(str(value))
    match = _VS_SPLIT.match(compact)
    if match:
        first, _, second = match.groups()
        return "".join(sorted((first, second))).lower()
    return compact.lower()


def is_hhmm(value: str) -> bool:
    return bool(_HHMM.fullmatch(value))


def minutes_since_midnight(hhmm: str) -> int:
    """'15:25' -> 925. Caller guarantees the HH:MM shape."""
    return int(hhmm[:2]) * 60 + int(hhmm[3:5])
