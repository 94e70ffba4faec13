# app/report/formatting.py
from __future__ import annotations

from html import escape
from typing import Any, List, Optional

RUPEE = "₹"


def _safe_float(val: Any) -> Optional[float]:
    if val is None:
        return None
    try:
        if isinstance(val, bool):
            return None
        if isinstance(val, (int, float)):
            num = float(val)
        elif isinstance(val, str) and val.strip() == "":
            return None
        else:
            num = float(val)
    except (TypeError, ValueError):
        return None
    # nan / inf never format as money
    if num != num or num in (float("inf"), float("-inf")):
        return None
    return num


def _format_indian_int(value: int) -> str:
    s = str(abs(value))
    if len(s) <= 3:
        grouped = s
    else:
        last3 = s[-3:]
        rest = s[:-3]
        parts: List[str] = []
        while len(rest) > 2:
            parts.insert(0, rest[-2:])
            rest = rest[:-2]
        if rest:
            parts.insert(0, rest)
        grouped = ",".join(parts + [last3])
    if value < 0:
        grouped = "-" + grouped
    return grouped


def format_inr(value: Any) -> str:
    """Format an amount as rupees with lakh/crore grouping, e.g. ₹2,00,00,000.

    Up to three fraction digits are kept, as en-IN locale formatting does.
    Missing or non-numeric input renders as ₹0.
    """
    num = _safe_float(value)
    if num is None:
        num = 0.0
    negative = num < 0
    num_abs = abs(num)
    raw = f"{num_abs:.3f}".rstrip("0").rstrip(".")
    if "." in raw:
        int_str, frac_part = raw.split(".", 1)
    else:
        int_str, frac_part = raw, ""
    grouped = _format_indian_int(int(int_str))
    if frac_part:
        grouped = f"{grouped}.{frac_part}"
    if negative and (int(int_str) or frac_part):
        return f"-{RUPEE}{grouped}"
    return f"{RUPEE}{grouped}"


def display_text(value: Any, placeholder: str = "") -> str:
    """Render an optional plan value as escaped text.

    ``None``, empty strings, booleans and nested objects or lists fall back
    to ``placeholder``; whole floats drop their trailing ``.0``.
    """
    if value is None or isinstance(value, (bool, dict, list, tuple, set)):
        return escape(placeholder)
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    text = str(value)
    if text.strip() == "":
        return escape(placeholder)
    return escape(text)


def display_number(value: Any) -> str:
    """Percentages and similar counts: missing renders as 0."""
    return display_text(value, "0")
