"""
Test suite for accounts module

Tests the per-account ledger: deposits, withdrawals, history recording,
the balance invariant and serialization under concurrent access.
"""

import pytest
import threading
from decimal import Decimal
from datetime import datetime, timedelta, timezone
from unittest.mock import patch

from account_ledger.accounts import Account
from account_ledger.errors import InsufficientFunds, InvalidAmount, LedgerOperationError
from account_ledger.transactions import TransactionKind


def signed_total(account):
    return sum((t.signed_amount for t in account.get_history()), Decimal('0'))


class TestAccountCreation:
    """Test opening a new account"""

    def test_new_account_state(self):
        """Test that a new account starts at zero with one creation record"""
        account = Account.create("Asha", "AC100")

        assert account.holder_name == "Asha"
        assert account.account_number == "AC100"
        assert account.get_balance() == Decimal('0.00')

        history = account.get_history()
        assert len(history) == 1
        assert history[0].kind == TransactionKind.ACCOUNT_CREATED
        assert history[0].signed_amount == Decimal('0')
        assert history[0].resulting_balance == Decimal('0')
        assert history[0].timestamp.tzinfo is not None
        assert account.created_at == history[0].timestamp

    def test_identity_is_read_only(self):
        account = Account.create("Asha", "AC100")
        with pytest.raises(AttributeError):
            account.holder_name = "Ravi"
        with pytest.raises(AttributeError):
            account.account_number = "AC200"

    def test_display_name_and_info(self):
        """Test display helpers carried over from the desktop UI"""
        account = Account.create("Asha", "AC100")
        account.deposit(Decimal('1500'))

        assert account.display_name == "Asha (AC100)"
        info = account.info()
        assert "Account Holder: Asha" in info
        assert "Account No: AC100" in info
        assert "Current Balance: ₹1,500.00" in info


class TestDeposit:
    """Test deposit rules"""

    def setup_method(self):
        self.account = Account.create("Asha", "AC100")

    def test_deposit_increases_balance(self):
        result = self.account.deposit(Decimal('500.00'))

        assert result.ok
        assert result.value == Decimal('500.00')
        assert self.account.get_balance() == Decimal('500.00')

        history = self.account.get_history()
        assert len(history) == 2
        assert history[1].kind == TransactionKind.DEPOSIT
        assert history[1].signed_amount == Decimal('500.00')
        assert history[1].resulting_balance == Decimal('500.00')

    def test_deposit_rounds_half_up(self):
        """Test that extra precision is rounded before posting"""
        result = self.account.deposit(Decimal('10.005'))
        assert result.value == Decimal('10.01')
        assert self.account.get_history()[-1].signed_amount == Decimal('10.01')

    @pytest.mark.parametrize("amount", [
        Decimal('0'), Decimal('-10'), Decimal('0.004'), "abc", "NaN", Decimal('NaN'), Decimal('-Infinity')
    ])
    def test_invalid_deposit_is_rejected(self, amount):
        """Test that non-positive or non-numeric amounts change nothing"""
        self.account.deposit(Decimal('100'))
        before = self.account.get_history()

        result = self.account.deposit(amount)

        assert not result.ok
        assert isinstance(result.error, InvalidAmount)
        assert self.account.get_balance() == Decimal('100.00')
        assert self.account.get_history() == before

    def test_unwrap_raises_for_errors(self):
        with pytest.raises(LedgerOperationError) as exc_info:
            self.account.deposit(Decimal('-1')).unwrap()
        assert isinstance(exc_info.value.error, InvalidAmount)


class TestWithdraw:
    """Test withdrawal rules"""

    def setup_method(self):
        self.account = Account.create("Asha", "AC100")
        self.account.deposit(Decimal('500.00'))

    def test_withdraw_decreases_balance(self):
        result = self.account.withdraw(Decimal('200.00'))

        assert result.ok
        assert result.value == Decimal('300.00')
        last = self.account.get_history()[-1]
        assert last.kind == TransactionKind.WITHDRAW
        assert last.signed_amount == Decimal('-200.00')
        assert last.amount == Decimal('200.00')
        assert last.resulting_balance == Decimal('300.00')

    def test_withdraw_entire_balance(self):
        result = self.account.withdraw(Decimal('500.00'))
        assert result.value == Decimal('0.00')
        assert self.account.get_balance() == Decimal('0.00')

    def test_insufficient_funds(self):
        """Test that an overdraft is declined without touching state"""
        before = self.account.get_history()

        result = self.account.withdraw(Decimal('600.00'))

        assert not result.ok
        assert isinstance(result.error, InsufficientFunds)
        assert result.error.requested == Decimal('600.00')
        assert result.error.available == Decimal('500.00')
        assert result.error.account_number == "AC100"
        assert self.account.get_balance() == Decimal('500.00')
        assert self.account.get_history() == before

    def test_one_paisa_over_is_declined(self):
        result = self.account.withdraw(Decimal('500.01'))
        assert isinstance(result.error, InsufficientFunds)

    @pytest.mark.parametrize("amount", [Decimal('0'), Decimal('NaN'), "nan", Decimal('Infinity')])
    def test_invalid_withdraw_amount(self, amount):
        result = self.account.withdraw(amount)
        assert isinstance(result.error, InvalidAmount)
        assert self.account.get_balance() == Decimal('500.00')
        assert len(self.account.get_history()) == 2


class TestHistoryInvariants:
    """Test properties that must hold for any sequence of operations"""

    def test_balance_equals_sum_of_signed_amounts(self):
        account = Account.create("Asha", "AC100")
        operations = [
            ("deposit", "100.00"), ("withdraw", "30.50"), ("deposit", "0.75"),
            ("withdraw", "1000"), ("withdraw", "70.25"), ("deposit", "12.345"),
        ]
        expected_balances = []
        for name, amount in operations:
            result = getattr(account, name)(Decimal(amount))
            if result.ok:
                expected_balances.append(result.value)

        history = account.get_history()
        assert account.get_balance() == signed_total(account)
        # One record per successful operation, after the creation record
        assert [t.resulting_balance for t in history[1:]] == expected_balances
        assert all(t.resulting_balance >= 0 for t in history)

    def test_history_snapshot_is_immutable(self):
        account = Account.create("Asha", "AC100")
        history = account.get_history()
        assert isinstance(history, tuple)
        account.deposit(Decimal('1'))
        assert len(history) == 1
        assert len(account.get_history()) == 2

    def test_timestamps_never_decrease(self):
        """Test that a backwards clock step does not reorder history"""
        account = Account.create("Asha", "AC100")
        created = account.get_history()[0].timestamp
        earlier = created - timedelta(hours=1)

        with patch("account_ledger.accounts.datetime") as mock_datetime:
            mock_datetime.now.return_value = earlier
            account.deposit(Decimal('10'))

        history = account.get_history()
        assert history[1].timestamp == created
        assert history[1].timestamp >= history[0].timestamp


class TestConcurrency:
    """Test per-account serialization"""

    def test_concurrent_deposits_and_withdrawals(self):
        """Test the balance invariant under concurrent mutation"""
        account = Account.create("Asha", "AC100")
        account.deposit(Decimal('1000.00'))

        def worker():
            for _ in range(200):
                account.deposit(Decimal('1.00'))
                account.withdraw(Decimal('1.00'))

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert account.get_balance() == Decimal('1000.00')
        assert account.get_balance() == signed_total(account)
        assert len(account.get_history()) == 2 + 8 * 200 * 2

    def test_concurrent_withdrawals_never_overdraw(self):
        """Test that racing withdrawals cannot take the balance negative"""
        account = Account.create("Asha", "AC100")
        account.deposit(Decimal('100.00'))
        successes = []
        lock = threading.Lock()

        def worker():
            for _ in range(50):
                if account.withdraw(Decimal('1.00')).ok:
                    with lock:
                        successes.append(1)

        threads = [threading.Thread(target=worker) for _ in range(6)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(successes) == 100
        assert account.get_balance() == Decimal('0.00')
        history = account.get_history()
        assert all(t.resulting_balance >= 0 for t in history)
        assert account.get_balance() == signed_total(account)
