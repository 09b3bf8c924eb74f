"""Shared utility functions for the retention backend."""

import math
import re
import unicodedata
from typing import Any, Optional


_LEADING_INT = re.compile(r'^\s*([+-]?\d+)')


def normalize_name(name: str) -> str:
    """
    Normalize a player or team name for matching stored inputs to season data.

    - Removes accents (é → e, ñ → n)
    - Converts to lowercase
    - Collapses internal whitespace

    Args:
        name: The name to normalize

    Returns:
        Normalized name string for comparison
    """
    if not name:
        return ""
    normalized = unicodedata.normalize('NFD', name)
    without_accents = ''.join(c for c in normalized if unicodedata.category(c) != 'Mn')
    return re.sub(r'\s+', ' ', without_accents.lower().strip())


def sanitize_error_message(error: Exception) -> str:
    """
    Sanitize an error message for safe display to clients.

    Removes file paths and database details, and truncates long messages.
    """
    error_str = str(error)
    error_str = re.sub(r'/[^\s]+\.py', '[file]', error_str)
    error_str = re.sub(r'line \d+', 'line [num]', error_str)
    error_str = re.sub(r'sqlite(\+\w+)?:///[^\s]+', '[database]', error_str)
    if len(error_str) > 200:
        error_str = error_str[:200] + '...'
    return error_str


def parse_leading_int(value: Any) -> Optional[int]:
    """
    Read an integer the way a spreadsheet cell is read: leading digits win.

    "3" -> 3, "3rd round" -> 3, 2.7 -> 2, "" / "n/a" / None -> None.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            return None
        return int(value)
    match = _LEADING_INT.match(str(value))
    if not match:
        return None
    return int(match.group(1))


def ordinal_suffix(n: int) -> str:
    """1 -> '1st', 2 -> '2nd', 11 -> '11th', 23 -> '23rd'."""
    if 10 <= n % 100 <= 20:
        suffix = 'th'
    else:
        suffix = {1: 'st', 2: 'nd', 3: 'rd'}.get(n % 10, 'th')
    return f"{n}{suffix}"


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))
