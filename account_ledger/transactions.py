"""
Transaction Records

Immutable, timestamped records of account creation and balance changes.
Transactions are only ever created by the account ledger as a side effect
of creation, deposit or withdrawal; they are never modified or removed.
"""

from decimal import Decimal
from datetime import datetime
from dataclasses import dataclass
from typing import Any, Dict
from enum import Enum


class TransactionKind(Enum):
    """Kinds of ledger transactions"""
    ACCOUNT_CREATED = "account_created"  # Zero amount opening record
    DEPOSIT = "deposit"                  # Positive signed amount
    WITHDRAW = "withdraw"                # Negative signed amount

    @property
    def label(self) -> str:
        """Display label used by history tables"""
        return _LABELS[self]


_LABELS = {
    TransactionKind.ACCOUNT_CREATED: "Account Created",
    TransactionKind.DEPOSIT: "Deposit",
    TransactionKind.WITHDRAW: "Withdraw",
}


@dataclass(frozen=True)
class Transaction:
    """
    One entry in an account's history

    signed_amount is zero for ACCOUNT_CREATED, positive for DEPOSIT and
    negative for WITHDRAW. resulting_balance is the balance immediately
    after this entry was applied.
    """
    timestamp: datetime
    kind: TransactionKind
    signed_amount: Decimal
    resulting_balance: Decimal

    @property
    def amount(self) -> Decimal:
        """Magnitude of the balance change"""
        return abs(self.signed_amount)

    @property
    def is_balance_change(self) -> bool:
        return self.kind != TransactionKind.ACCOUNT_CREATED

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary with Decimal strings and ISO timestamp"""
        return {
            "timestamp": self.timestamp.isoformat(),
            "kind": self.kind.value,
            "label": self.kind.label,
            "signed_amount": str(self.signed_amount),
            "resulting_balance": str(self.resulting_balance),
        }
