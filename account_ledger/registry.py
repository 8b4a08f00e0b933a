"""
Account Registry Module

Owns every Account keyed by account number, in registration order, and
tracks which account is currently active for the presentation layer.
Registration and selection are serialized by a single lock so two callers
can never both claim the same account number.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional
import threading

from .accounts import Account
from .errors import DuplicateAccount, InvalidAccountDetails, NotFound, Result
from .logging_config import get_logger


@dataclass(frozen=True)
class AccountSummary:
    """Entry in the account picker"""
    display_name: str
    account_number: str


class AccountRegistry:
    """
    Keyed collection of accounts plus the active-account pointer

    The registry starts empty with no active account. The first
    successful registration makes it active; accounts are never removed,
    so once active the registry always has an active account.
    """

    def __init__(self):
        self._accounts: Dict[str, Account] = {}
        self._active: Optional[Account] = None
        self._lock = threading.Lock()
        self.logger = get_logger("account_ledger.registry")

    def register_account(self, holder_name: str, account_number: str) -> Result[Account]:
        """
        Create and register a new account, making it the active one

        Args:
            holder_name: Display name of the account holder
            account_number: Unique account identifier

        Returns:
            Result with the new Account, or InvalidAccountDetails /
            DuplicateAccount
        """
        holder_name = (holder_name or "").strip()
        account_number = (account_number or "").strip()

        missing = tuple(
            name for name, value in (("holder_name", holder_name), ("account_number", account_number))
            if not value
        )
        if missing:
            return Result.failure(InvalidAccountDetails(
                message="Both holder name and account number are required",
                fields=missing,
            ))

        with self._lock:
            if account_number in self._accounts:
                return Result.failure(DuplicateAccount(
                    message=f"Account number {account_number} already exists",
                    account_number=account_number,
                ))

            account = Account.create(holder_name, account_number)
            self._accounts[account_number] = account
            self._active = account

        self.logger.debug(f"Registered account {account.display_name}")
        return Result.success(account)

    def select_account(self, account_number: str) -> Result[Account]:
        """Make an existing account the active one"""
        with self._lock:
            account = self._accounts.get(account_number)
            if account is None:
                return Result.failure(self._not_found(account_number))
            self._active = account

        self.logger.debug(f"Selected account {account.display_name}")
        return Result.success(account)

    def get_account(self, account_number: str) -> Result[Account]:
        """Look up an account without changing the selection"""
        with self._lock:
            account = self._accounts.get(account_number)
        if account is None:
            return Result.failure(self._not_found(account_number))
        return Result.success(account)

    def list_accounts(self) -> List[AccountSummary]:
        """All accounts in registration order"""
        with self._lock:
            return [
                AccountSummary(account.display_name, account.account_number)
                for account in self._accounts.values()
            ]

    def active_account(self) -> Optional[Account]:
        """Currently selected account, None until the first registration"""
        with self._lock:
            return self._active

    @property
    def is_empty(self) -> bool:
        with self._lock:
            return not self._accounts

    def __len__(self) -> int:
        """Number of registered accounts"""
        with self._lock:
            return len(self._accounts)

    def __contains__(self, account_number: str) -> bool:
        """Check if an account number is registered"""
        with self._lock:
            return account_number in self._accounts

    @staticmethod
    def _not_found(account_number: str) -> NotFound:
        return NotFound(
            message=f"Account {account_number} not found",
            account_number=account_number,
        )
