"""
Account Ledger Module

Owns one account's balance and its append-only transaction history.
The balance always equals the sum of the signed amounts in the history
and never goes below zero. All reads and writes on an account are
serialized through a per-account lock; separate accounts never contend.
"""

from decimal import Decimal, InvalidOperation
from datetime import datetime, timezone
from typing import List, Tuple
import threading

from .currency import ZERO, AmountLike, format_inr, quantize_amount
from .errors import InsufficientFunds, InvalidAmount, Result
from .logging_config import get_logger
from .transactions import Transaction, TransactionKind


class Account:
    """
    Checking-style account with an exact Decimal balance

    holder_name and account_number are fixed at creation. A new account
    starts at 0.00 and records a single ACCOUNT_CREATED transaction.
    """

    def __init__(self, holder_name: str, account_number: str):
        self._holder_name = holder_name
        self._account_number = account_number
        self._balance = ZERO
        self._history: List[Transaction] = []
        self._lock = threading.RLock()
        self.logger = get_logger("account_ledger.accounts")

        self._record(TransactionKind.ACCOUNT_CREATED, ZERO)

    @classmethod
    def create(cls, holder_name: str, account_number: str) -> "Account":
        """Open a new account with a zero balance"""
        return cls(holder_name, account_number)

    @property
    def holder_name(self) -> str:
        return self._holder_name

    @property
    def account_number(self) -> str:
        return self._account_number

    @property
    def display_name(self) -> str:
        """Name shown in account pickers, e.g. 'Asha (AC100)'"""
        return f"{self._holder_name} ({self._account_number})"

    @property
    def created_at(self) -> datetime:
        with self._lock:
            return self._history[0].timestamp

    def __repr__(self) -> str:
        return f"Account(holder_name={self._holder_name!r}, account_number={self._account_number!r})"

    def deposit(self, amount: AmountLike) -> Result[Decimal]:
        """
        Add funds to the account

        Args:
            amount: Positive amount; extra precision is rounded half-up

        Returns:
            Result with the new balance, or InvalidAmount
        """
        normalized = self._normalize(amount)
        if not normalized.ok:
            return normalized
        value = normalized.value

        with self._lock:
            self._balance = self._balance + value
            self._record(TransactionKind.DEPOSIT, value)
            new_balance = self._balance

        self.logger.debug(f"Deposited {value} to {self._account_number}, balance {new_balance}")
        return Result.success(new_balance)

    def withdraw(self, amount: AmountLike) -> Result[Decimal]:
        """
        Remove funds from the account

        A withdrawal larger than the balance is rejected without touching
        the balance or the history.

        Args:
            amount: Positive amount; extra precision is rounded half-up

        Returns:
            Result with the new balance, or InvalidAmount / InsufficientFunds
        """
        normalized = self._normalize(amount)
        if not normalized.ok:
            return normalized
        value = normalized.value

        with self._lock:
            if value > self._balance:
                available = self._balance
                self.logger.debug(
                    f"Declined withdrawal of {value} from {self._account_number}, available {available}"
                )
                return Result.failure(InsufficientFunds(
                    message=(
                        f"Insufficient funds: requested {format_inr(value)}, "
                        f"available {format_inr(available)}"
                    ),
                    account_number=self._account_number,
                    requested=value,
                    available=available,
                ))

            self._balance = self._balance - value
            self._record(TransactionKind.WITHDRAW, -value)
            new_balance = self._balance

        self.logger.debug(f"Withdrew {value} from {self._account_number}, balance {new_balance}")
        return Result.success(new_balance)

    def get_balance(self) -> Decimal:
        """Current balance"""
        with self._lock:
            return self._balance

    def get_history(self) -> Tuple[Transaction, ...]:
        """Snapshot of the full history, oldest first"""
        with self._lock:
            return tuple(self._history)

    def info(self) -> str:
        """Multi-line account summary for display"""
        return (
            f"Account Holder: {self._holder_name}\n"
            f"Account No: {self._account_number}\n"
            f"Current Balance: {format_inr(self.get_balance())}"
        )

    @staticmethod
    def _normalize(amount: AmountLike) -> Result[Decimal]:
        """Quantize an amount and require it to be strictly positive"""
        try:
            value = quantize_amount(amount)
        except (InvalidOperation, ValueError):
            return Result.failure(InvalidAmount(
                message=f"Invalid amount: {amount}", amount=str(amount)
            ))

        if value <= ZERO:
            return Result.failure(InvalidAmount(
                message="Amount must be positive", amount=str(amount)
            ))
        return Result.success(value)

    def _record(self, kind: TransactionKind, signed_amount: Decimal) -> None:
        """Append a transaction; caller holds the lock (or is __init__)"""
        timestamp = datetime.now(timezone.utc)
        if self._history and timestamp < self._history[-1].timestamp:
            # Wall clock stepped backwards; keep history non-decreasing
            timestamp = self._history[-1].timestamp

        self._history.append(Transaction(
            timestamp=timestamp,
            kind=kind,
            signed_amount=signed_amount,
            resulting_balance=self._balance,
        ))
