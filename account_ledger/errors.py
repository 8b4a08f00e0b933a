"""
Ledger Result and Error Types

Validation failures in the ledger are returned as values, never raised.
Every core operation returns a Result carrying either the value or one
of the LedgerError kinds below. Callers that prefer exceptions can use
Result.unwrap().

Error taxonomy:
    LedgerError (base)
    ├── InvalidAmount          - non-numeric, zero or negative amount
    ├── InsufficientFunds      - withdrawal larger than the balance
    ├── DuplicateAccount       - account number already registered
    ├── NotFound               - unknown account number
    └── InvalidAccountDetails  - blank holder name or account number
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, Generic, Optional, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class LedgerError:
    """Base error value for all ledger failures"""
    message: str

    code = "ledger_error"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-friendly dictionary"""
        return {"error_type": self.code, "detail": self.message}


@dataclass(frozen=True)
class InvalidAmount(LedgerError):
    """Amount is non-numeric, zero or negative"""
    amount: Optional[str] = None

    code = "invalid_amount"

    def to_dict(self) -> Dict[str, Any]:
        result = super().to_dict()
        result["amount"] = self.amount
        return result


@dataclass(frozen=True)
class InsufficientFunds(LedgerError):
    """
    Withdrawal would take the balance below zero

    Attributes:
        account_number: The account that lacks funds
        requested: The amount the caller tried to withdraw
        available: The balance at the time of the attempt
    """
    account_number: str = ""
    requested: Decimal = Decimal("0.00")
    available: Decimal = Decimal("0.00")

    code = "insufficient_funds"

    def to_dict(self) -> Dict[str, Any]:
        result = super().to_dict()
        result.update({
            "account_number": self.account_number,
            "requested": str(self.requested),
            "available": str(self.available),
        })
        return result


@dataclass(frozen=True)
class DuplicateAccount(LedgerError):
    """Account number is already registered"""
    account_number: str = ""

    code = "duplicate_account"

    def to_dict(self) -> Dict[str, Any]:
        result = super().to_dict()
        result["account_number"] = self.account_number
        return result


@dataclass(frozen=True)
class NotFound(LedgerError):
    """No account is registered under the given number"""
    account_number: str = ""

    code = "account_not_found"

    def to_dict(self) -> Dict[str, Any]:
        result = super().to_dict()
        result["account_number"] = self.account_number
        return result


@dataclass(frozen=True)
class InvalidAccountDetails(LedgerError):
    """Holder name or account number is blank"""
    fields: tuple = field(default_factory=tuple)

    code = "invalid_account_details"

    def to_dict(self) -> Dict[str, Any]:
        result = super().to_dict()
        result["fields"] = list(self.fields)
        return result


class LedgerOperationError(Exception):
    """Raised by Result.unwrap() when the result holds an error"""

    def __init__(self, error: LedgerError):
        self.error = error
        super().__init__(error.message)


@dataclass(frozen=True)
class Result(Generic[T]):
    """
    Outcome of a ledger operation

    Attributes:
        value: Operation payload on success
        error: Error value on failure
    """
    value: Optional[T] = None
    error: Optional[LedgerError] = None

    @classmethod
    def success(cls, value: T) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: LedgerError) -> "Result[T]":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        """Return the value or raise LedgerOperationError"""
        if self.error is not None:
            raise LedgerOperationError(self.error)
        return self.value
