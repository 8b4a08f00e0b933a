"""
Display helpers for presentation layers.

The core hands out raw Decimals and UTC timestamps; these helpers turn
them into the strings shown in history tables and info panels.
"""

from datetime import datetime, tzinfo
from typing import Iterable, List, Optional, Tuple

from .currency import CURRENCY_SYMBOL, format_inr
from .transactions import Transaction, TransactionKind

DEFAULT_TIMESTAMP_FORMAT = "%d %b %Y, %I:%M %p"

HISTORY_COLUMNS = (
    "Time",
    "Transaction",
    f"Amount ({CURRENCY_SYMBOL})",
    f"Balance ({CURRENCY_SYMBOL})",
)

HistoryRow = Tuple[str, str, str, str]


def format_timestamp(
    timestamp: datetime,
    fmt: str = DEFAULT_TIMESTAMP_FORMAT,
    tz: Optional[tzinfo] = None,
) -> str:
    """Render a timestamp, converting to ``tz`` (local time when omitted)."""
    return timestamp.astimezone(tz).strftime(fmt)


def history_row(
    transaction: Transaction,
    fmt: str = DEFAULT_TIMESTAMP_FORMAT,
    tz: Optional[tzinfo] = None,
) -> HistoryRow:
    # The opening record has no amount to show
    if transaction.kind == TransactionKind.ACCOUNT_CREATED:
        amount = "-"
    else:
        amount = format_inr(transaction.signed_amount)
    return (
        format_timestamp(transaction.timestamp, fmt, tz),
        transaction.kind.label,
        amount,
        format_inr(transaction.resulting_balance),
    )


def history_rows(
    history: Iterable[Transaction],
    fmt: str = DEFAULT_TIMESTAMP_FORMAT,
    tz: Optional[tzinfo] = None,
) -> List[HistoryRow]:
    """Table rows for a history, oldest first, matching HISTORY_COLUMNS."""
    return [history_row(transaction, fmt, tz) for transaction in history]
