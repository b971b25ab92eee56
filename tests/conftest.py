# tests/conftest.py
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

import pytest
from commerce.event_bus import EventBus
from commerce.services.account_service import AccountService
from commerce.services.order_service import OrderService
from commerce.stores.memory_store import InMemoryStore


@pytest.fixture
def store():
    s = InMemoryStore()
    yield s
    s.clear()

@pytest.fixture
def bus():
    return EventBus()

@pytest.fixture
def accounts(store, bus):
    return AccountService(store, event_bus=bus)

@pytest.fixture
def orders(store, accounts, bus):
    return OrderService(store, accounts, event_bus=bus)

@pytest.fixture
def active_account(accounts):
    """一个已激活的账户 id"""
    aid = accounts.create_account("Alice", "alice@example.com")
    assert aid > 0
    return aid
