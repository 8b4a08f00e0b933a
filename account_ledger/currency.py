"""
Currency Support Module

Single display currency (Indian Rupee) with fixed 2 digit precision.
Handles parsing of user-entered amounts and Indian digit grouping for
display. NEVER uses float for monetary values.
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP, getcontext
from typing import Union
import re

# Set global decimal context for financial precision
getcontext().prec = 28

CURRENCY_CODE = "INR"
CURRENCY_SYMBOL = "₹"
PRECISION = 2

ZERO = Decimal("0.00")
_QUANTUM = Decimal("0.1") ** PRECISION

# Digits with optional sign, grouping commas and a fractional part
_AMOUNT_PATTERN = re.compile(r"^[+-]?(\d[\d,]*)?(\.\d*)?([eE][+-]?\d+)?$")

AmountLike = Union[Decimal, int, str]


def quantize_amount(value: AmountLike) -> Decimal:
    """
    Round a value to currency precision using ROUND_HALF_UP

    Args:
        value: Decimal, int or decimal string

    Returns:
        Decimal with exactly 2 fractional digits

    Raises:
        ValueError: If the value is NaN or infinite
    """
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    if not value.is_finite():
        raise ValueError(f"Amount '{value}' is not a finite number")
    return value.quantize(_QUANTUM, rounding=ROUND_HALF_UP)


def parse_amount(text: str) -> Decimal:
    """
    Parse an amount typed by a user into an exact Decimal

    Accepts an optional leading rupee symbol and digit-grouping commas so
    that anything produced by format_inr can be entered back. The result
    is NOT quantized or sign-checked; that is the ledger's job.

    Args:
        text: Raw input string

    Returns:
        Decimal value

    Raises:
        ValueError: If the string is empty or not a finite number
    """
    if not isinstance(text, str) or not text.strip():
        raise ValueError("Amount must be a non-empty string")

    clean_value = text.strip()
    if clean_value.startswith(CURRENCY_SYMBOL):
        clean_value = clean_value[len(CURRENCY_SYMBOL):].strip()
    elif clean_value.startswith("-" + CURRENCY_SYMBOL):
        clean_value = "-" + clean_value[len(CURRENCY_SYMBOL) + 1:].strip()

    if not _AMOUNT_PATTERN.match(clean_value) or not any(c.isdigit() for c in clean_value):
        raise ValueError(f"Cannot convert '{text}' to Decimal")

    try:
        value = Decimal(clean_value.replace(",", ""))
    except InvalidOperation:
        raise ValueError(f"Cannot convert '{text}' to Decimal")

    if not value.is_finite():
        raise ValueError(f"Amount '{text}' is not a finite number")
    return value


def _group_indian(digits: str) -> str:
    """Group an integer digit string as 12,34,567"""
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return ",".join(groups) + "," + tail


def format_inr(amount: AmountLike) -> str:
    """
    Format an amount for display, e.g. ₹1,00,000.50 or -₹500.00
    """
    value = quantize_amount(amount)
    sign = "-" if value < 0 else ""
    integer_part, fractional_part = f"{abs(value):.{PRECISION}f}".split(".")
    return f"{sign}{CURRENCY_SYMBOL}{_group_indian(integer_part)}.{fractional_part}"
