"""
Banking System Module

The narrow call surface used by presentation layers. Holds the account
registry and event dispatcher for the lifetime of its owner, parses
amount strings before they reach the ledger, and logs and publishes
the outcome of every operation.
"""

from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Optional, Tuple

from .accounts import Account
from .config import LedgerConfig, get_config
from .currency import ZERO, format_inr, parse_amount, quantize_amount
from .errors import InvalidAmount, InsufficientFunds, LedgerError, Result
from .events import EventDispatcher, EventPayload, LedgerEvent
from .formatting import HistoryRow, history_rows
from .logging_config import get_logger, log_action
from .registry import AccountRegistry, AccountSummary
from .transactions import Transaction


class BankingSystem:
    """Multi-account banking core with all components initialized"""

    def __init__(
        self,
        config: Optional[LedgerConfig] = None,
        registry: Optional[AccountRegistry] = None,
        event_dispatcher: Optional[EventDispatcher] = None
    ):
        self.config = config or get_config()
        self.registry = registry or AccountRegistry()
        self.events = event_dispatcher or EventDispatcher()
        self.logger = get_logger("account_ledger.system")

    # Account management

    def register_account(self, holder_name: str, account_number: str) -> Result[Account]:
        """Create a user account and make it active"""
        result = self.registry.register_account(holder_name, account_number)
        if not result.ok:
            return self._failed("register_account", account_number, result)

        account = result.value
        log_action(
            self.logger, "info", f"Account {account.display_name} created",
            action="register_account", account_number=account.account_number, outcome="ok"
        )
        self._publish(LedgerEvent.ACCOUNT_CREATED, account, {
            "holder_name": account.holder_name,
            "display_name": account.display_name,
        })
        return result

    def select_account(self, account_number: str) -> Result[Account]:
        """Switch the active account"""
        result = self.registry.select_account(account_number)
        if not result.ok:
            return self._failed("select_account", account_number, result)

        account = result.value
        log_action(
            self.logger, "info", f"Switched to {account.display_name}",
            action="select_account", account_number=account_number, outcome="ok"
        )
        self._publish(LedgerEvent.ACCOUNT_SELECTED, account, {"display_name": account.display_name})
        return result

    def active_account(self) -> Optional[Account]:
        return self.registry.active_account()

    def list_accounts(self) -> List[AccountSummary]:
        return self.registry.list_accounts()

    # Money movement

    def deposit(self, account_number: str, amount: str) -> Result[Decimal]:
        """
        Deposit an amount entered as text

        Args:
            account_number: Target account
            amount: Decimal string, e.g. "500.00"

        Returns:
            Result with the new balance, or NotFound / InvalidAmount
        """
        lookup = self.registry.get_account(account_number)
        if not lookup.ok:
            return self._failed("deposit", account_number, lookup)

        parsed = self._parse(amount)
        if not parsed.ok:
            return self._failed("deposit", account_number, parsed)

        account = lookup.value
        result = account.deposit(parsed.value)
        if not result.ok:
            return self._failed("deposit", account_number, result)

        self._posted(
            "deposit", LedgerEvent.DEPOSIT_POSTED, account,
            parsed.value, result.value
        )
        return result

    def withdraw(self, account_number: str, amount: str) -> Result[Decimal]:
        """
        Withdraw an amount entered as text

        A declined withdrawal leaves no trace in the account history; it
        is only logged and published as WITHDRAWAL_DECLINED.

        Returns:
            Result with the new balance, or NotFound / InvalidAmount /
            InsufficientFunds
        """
        lookup = self.registry.get_account(account_number)
        if not lookup.ok:
            return self._failed("withdraw", account_number, lookup)

        parsed = self._parse(amount)
        if not parsed.ok:
            return self._failed("withdraw", account_number, parsed)

        account = lookup.value
        result = account.withdraw(parsed.value)
        if not result.ok:
            if isinstance(result.error, InsufficientFunds):
                self._publish(LedgerEvent.WITHDRAWAL_DECLINED, account, {
                    "requested": str(result.error.requested),
                    "available": str(result.error.available),
                })
            return self._failed("withdraw", account_number, result)

        self._posted(
            "withdraw", LedgerEvent.WITHDRAWAL_POSTED, account,
            -parsed.value, result.value
        )
        return result

    # Queries

    def get_balance(self, account_number: str) -> Result[Decimal]:
        lookup = self.registry.get_account(account_number)
        if not lookup.ok:
            return lookup
        return Result.success(lookup.value.get_balance())

    def get_history(self, account_number: str) -> Result[Tuple[Transaction, ...]]:
        lookup = self.registry.get_account(account_number)
        if not lookup.ok:
            return lookup
        return Result.success(lookup.value.get_history())

    def get_history_rows(self, account_number: str) -> Result[List[HistoryRow]]:
        """History rendered with the configured timestamp format and timezone"""
        history = self.get_history(account_number)
        if not history.ok:
            return history
        return Result.success(history_rows(
            history.value, self.config.timestamp_format, self.config.display_tz()
        ))

    def account_info(self, account_number: str) -> Result[Dict[str, Any]]:
        """Holder, number and balance of an account"""
        lookup = self.registry.get_account(account_number)
        if not lookup.ok:
            return lookup

        account = lookup.value
        balance = account.get_balance()
        return Result.success({
            "holder_name": account.holder_name,
            "account_number": account.account_number,
            "display_name": account.display_name,
            "balance": balance,
            "currency": self.config.currency_code,
            "formatted_balance": format_inr(balance),
            "summary": account.info(),
        })

    # Internals

    @staticmethod
    def _parse(amount: str) -> Result[Decimal]:
        """Parse and round user input; non-positive amounts never reach the ledger"""
        try:
            value = quantize_amount(parse_amount(amount))
        except (ValueError, InvalidOperation) as e:
            return Result.failure(InvalidAmount(message=f"Invalid amount format: {e}", amount=str(amount)))

        if value <= ZERO:
            return Result.failure(InvalidAmount(message="Enter a positive amount", amount=str(amount)))
        return Result.success(value)

    def _posted(
        self,
        action: str,
        event_type: LedgerEvent,
        account: Account,
        signed_amount: Decimal,
        balance: Decimal
    ) -> None:
        log_action(
            self.logger, "info",
            f"{action.capitalize()} of {format_inr(abs(signed_amount))} on {account.account_number}, "
            f"balance {format_inr(balance)}",
            action=action, account_number=account.account_number, outcome="ok",
            extra={"amount": str(signed_amount), "balance": str(balance)}
        )
        self._publish(event_type, account, {
            "signed_amount": str(signed_amount),
            "resulting_balance": str(balance),
        })

    def _failed(self, action: str, account_number: str, result: Result) -> Result:
        error: LedgerError = result.error
        log_action(
            self.logger, "warning", error.message,
            action=action, account_number=account_number, outcome=error.code
        )
        return result

    def _publish(self, event_type: LedgerEvent, account: Account, data: Dict[str, Any]) -> None:
        self.events.publish(EventPayload(
            event_type=event_type,
            account_number=account.account_number,
            data=data,
        ))
