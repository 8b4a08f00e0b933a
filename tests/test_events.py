"""
Tests for the Event System (Observer Pattern)
"""

import pytest
from datetime import datetime
from unittest.mock import Mock

from account_ledger.events import EventDispatcher, EventPayload, LedgerEvent


class TestEventPayload:
    """Test EventPayload creation and serialization"""

    def test_event_payload_creation(self):
        event = EventPayload(
            event_type=LedgerEvent.DEPOSIT_POSTED,
            account_number="AC100",
            data={"signed_amount": "100.00"}
        )

        assert event.event_type == LedgerEvent.DEPOSIT_POSTED
        assert event.account_number == "AC100"
        assert isinstance(event.timestamp, datetime)
        assert event.timestamp.tzinfo is not None
        assert len(event.event_id) > 0

    def test_event_payload_serialization(self):
        original = EventPayload(
            event_type=LedgerEvent.ACCOUNT_CREATED,
            account_number="AC100",
            data={"holder_name": "Asha"}
        )

        event_dict = original.to_dict()
        assert event_dict['event_type'] == "account.created"
        assert event_dict['account_number'] == "AC100"

        restored = EventPayload.from_dict(event_dict)
        assert restored == original


class TestEventDispatcher:
    """Test subscribe/publish behaviour"""

    def setup_method(self):
        self.dispatcher = EventDispatcher()
        self.event = EventPayload(LedgerEvent.DEPOSIT_POSTED, "AC100", {})

    def test_specific_and_global_handlers(self):
        specific = Mock()
        other = Mock()
        catch_all = Mock()
        self.dispatcher.subscribe(LedgerEvent.DEPOSIT_POSTED, specific)
        self.dispatcher.subscribe(LedgerEvent.WITHDRAWAL_POSTED, other)
        self.dispatcher.subscribe_all(catch_all)

        self.dispatcher.publish(self.event)

        specific.assert_called_once_with(self.event)
        catch_all.assert_called_once_with(self.event)
        other.assert_not_called()

    def test_handler_errors_are_contained(self):
        failing = Mock(side_effect=ValueError("bad handler"))
        healthy = Mock()
        self.dispatcher.subscribe(LedgerEvent.DEPOSIT_POSTED, failing)
        self.dispatcher.subscribe(LedgerEvent.DEPOSIT_POSTED, healthy)

        self.dispatcher.publish(self.event)

        healthy.assert_called_once_with(self.event)

    def test_unsubscribe(self):
        handler = Mock()
        self.dispatcher.subscribe(LedgerEvent.DEPOSIT_POSTED, handler)
        self.dispatcher.unsubscribe(LedgerEvent.DEPOSIT_POSTED, handler)
        # Unknown handlers are ignored with a warning
        self.dispatcher.unsubscribe(LedgerEvent.ACCOUNT_CREATED, handler)
        self.dispatcher.unsubscribe_all(handler)

        self.dispatcher.publish(self.event)

        handler.assert_not_called()

    def test_handler_counts_and_clear(self):
        self.dispatcher.subscribe(LedgerEvent.DEPOSIT_POSTED, Mock())
        self.dispatcher.subscribe(LedgerEvent.DEPOSIT_POSTED, Mock())
        self.dispatcher.subscribe_all(Mock())

        assert self.dispatcher.get_handler_count(LedgerEvent.DEPOSIT_POSTED) == 2
        assert self.dispatcher.get_handler_count(LedgerEvent.ACCOUNT_CREATED) == 0
        assert self.dispatcher.get_handler_count() == 3

        self.dispatcher.clear()
        assert self.dispatcher.get_handler_count() == 0

    def test_handler_may_subscribe_during_publish(self):
        """Test that handlers can call back into the dispatcher"""
        late = Mock()

        def first(event):
            self.dispatcher.subscribe(LedgerEvent.DEPOSIT_POSTED, late)

        self.dispatcher.subscribe(LedgerEvent.DEPOSIT_POSTED, first)
        self.dispatcher.publish(self.event)
        late.assert_not_called()

        self.dispatcher.publish(self.event)
        late.assert_called_once_with(self.event)
