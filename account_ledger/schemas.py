"""
Pydantic schemas for API requests and responses
"""

from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, Field

from .accounts import Account
from .currency import format_inr
from .registry import AccountSummary
from .transactions import Transaction


class RegisterAccountRequest(BaseModel):
    holder_name: str
    account_number: str


class SelectAccountRequest(BaseModel):
    account_number: str


class AmountRequest(BaseModel):
    amount: str = Field(..., description="Decimal amount as string, e.g. \"500.00\"")


class AccountSummaryModel(BaseModel):
    display_name: str
    account_number: str

    @classmethod
    def from_summary(cls, summary: AccountSummary) -> 'AccountSummaryModel':
        return cls(display_name=summary.display_name, account_number=summary.account_number)


class AccountModel(BaseModel):
    holder_name: str
    account_number: str
    display_name: str
    balance: str
    formatted_balance: str

    @classmethod
    def from_account(cls, account: Account) -> 'AccountModel':
        balance = account.get_balance()
        return cls(
            holder_name=account.holder_name,
            account_number=account.account_number,
            display_name=account.display_name,
            balance=str(balance),
            formatted_balance=format_inr(balance),
        )


class AccountListResponse(BaseModel):
    accounts: List[AccountSummaryModel]
    active_account_number: Optional[str] = None


class BalanceResponse(BaseModel):
    account_number: str
    balance: str
    formatted_balance: str

    @classmethod
    def build(cls, account_number: str, balance: Decimal) -> 'BalanceResponse':
        return cls(account_number=account_number, balance=str(balance), formatted_balance=format_inr(balance))


class TransactionModel(BaseModel):
    timestamp: str
    kind: str
    label: str
    signed_amount: str
    resulting_balance: str

    @classmethod
    def from_transaction(cls, transaction: Transaction) -> 'TransactionModel':
        return cls(**transaction.to_dict())


class HistoryResponse(BaseModel):
    account_number: str
    columns: List[str]
    transactions: List[TransactionModel]
    rows: List[List[str]]
