# tests/test_order_service.py
from decimal import Decimal

import pytest

from commerce.contracts import AccountManager
from commerce.enums import OrderStatus
from commerce.event_bus import EventBus, TOPIC_ORDER_CREATED, TOPIC_ORDER_STATUS
from commerce.models import Account, INVALID_ID, Order
from commerce.services.order_service import OrderService
from commerce.stores.memory_store import InMemoryStore


class FakeAccounts(AccountManager):
    """Dict-backed AccountManager double; records every lookup."""
    def __init__(self, *accounts: Account):
        self._data = {a.id: a for a in accounts}
        self.lookups = []

    def create_account(self, name, contact):
        raise AssertionError("OrderService must not create accounts")

    def get_account(self, account_id):
        self.lookups.append(account_id)
        return self._data.get(account_id)

    def list_active_accounts(self):
        return [a for a in self._data.values() if a.active]

    def deactivate_account(self, account_id):
        acc = self._data.get(account_id)
        if acc is None:
            return False
        acc.active = False
        return True

    def account_exists(self, account_id):
        return account_id in self._data


ACTIVE = 1
INACTIVE = 2


@pytest.fixture
def fake_accounts():
    return FakeAccounts(
        Account(id=ACTIVE, name="Alice", contact="alice@test.com", active=True),
        Account(id=INACTIVE, name="Bob", contact="bob@test.com", active=False),
    )

@pytest.fixture
def svc(fake_accounts):
    return OrderService(InMemoryStore(), fake_accounts)


def test_create_valid_order_is_pending(svc):
    oid = svc.create_order(ACTIVE, "Widget", 10.0)
    assert oid > 0

    order = svc.get_order(oid)
    assert order.id == oid
    assert order.owner_id == ACTIVE
    assert order.item_description == "Widget"
    assert order.amount == Decimal("10.0")
    assert order.status == OrderStatus.PENDING


@pytest.mark.parametrize("owner,desc,amount", [
    (999, "Widget", 10.0),          # unknown owner
    (INACTIVE, "Widget", 10.0),     # inactive owner
    (ACTIVE, "", 10.0),
    (ACTIVE, None, 10.0),
    (ACTIVE, "Widget", 0.0),
    (ACTIVE, "Widget", -5.0),
    (ACTIVE, "Widget", float("nan")),
    (ACTIVE, "Widget", float("inf")),
    (ACTIVE, "Widget", "ten"),
    (ACTIVE, "Widget", None),
    (ACTIVE, "Widget", True),
    pytest.param(ACTIVE, "Widget", 10 ** 5000, id="int-past-str-limit"),
    (ACTIVE, "Widget", "1e999999999999"),
    (ACTIVE, "Widget", Decimal("1e16")),
    (ACTIVE, "Widget", 1e300),
    (ACTIVE, "Widget", "1e-13"),
])
def test_create_rejections_return_sentinel(svc, owner, desc, amount):
    assert svc.create_order(owner, desc, amount) == INVALID_ID
    assert svc.list_orders_for_owner(owner) == []
    assert svc.get_total_amount(owner) == 0


@pytest.mark.parametrize("amount", [Decimal("9999999999999999"), Decimal("1e-12")])
def test_amount_range_edges_accepted(svc, amount):
    oid = svc.create_order(ACTIVE, "Widget", amount)
    assert oid > 0
    assert svc.get_total_amount(ACTIVE) == amount


def test_owner_checked_before_other_fields(svc, fake_accounts):
    # unknown owner and bad amount: the owner lookup still happens first
    assert svc.create_order(999, "", -1) == INVALID_ID
    assert fake_accounts.lookups == [999]


@pytest.mark.parametrize("amount,expected", [
    (5, Decimal("5")),
    ("19.99", Decimal("19.99")),
    (Decimal("0.01"), Decimal("0.01")),
    (0.1, Decimal("0.1")),
])
def test_amount_kept_as_decimal(svc, amount, expected):
    oid = svc.create_order(ACTIVE, "Widget", amount)
    assert svc.get_order(oid).amount == expected


def test_get_order_unknown(svc):
    assert svc.get_order(12345) is None


def test_set_order_status_any_to_any(svc):
    oid = svc.create_order(ACTIVE, "Widget", 10)
    for st in (OrderStatus.DELIVERED, OrderStatus.PENDING, OrderStatus.CANCELLED,
               OrderStatus.SHIPPED, OrderStatus.CONFIRMED):
        assert svc.set_order_status(oid, st) is True
        assert svc.get_order(oid).status == st

    # string values are accepted
    assert svc.set_order_status(oid, "shipped") is True
    assert svc.get_order(oid).status == OrderStatus.SHIPPED


def test_set_order_status_unknown_order_or_status(svc):
    assert svc.set_order_status(777, OrderStatus.CONFIRMED) is False
    oid = svc.create_order(ACTIVE, "Widget", 10)
    assert svc.set_order_status(oid, "lost-in-transit") is False
    assert svc.get_order(oid).status == OrderStatus.PENDING


@pytest.mark.parametrize("start", [OrderStatus.PENDING, OrderStatus.CONFIRMED, OrderStatus.CANCELLED])
def test_cancel_allowed(svc, start):
    oid = svc.create_order(ACTIVE, "Widget", 10)
    svc.set_order_status(oid, start)
    assert svc.cancel_order(oid) is True
    assert svc.get_order(oid).status == OrderStatus.CANCELLED


@pytest.mark.parametrize("start", [OrderStatus.SHIPPED, OrderStatus.DELIVERED])
def test_cancel_refused(svc, start):
    oid = svc.create_order(ACTIVE, "Widget", 10)
    svc.set_order_status(oid, start)
    assert svc.cancel_order(oid) is False
    assert svc.get_order(oid).status == start


def test_cancel_unknown(svc):
    assert svc.cancel_order(4242) is False


def test_cancel_twice_is_idempotent(svc):
    oid = svc.create_order(ACTIVE, "Widget", 10)
    assert svc.cancel_order(oid) is True
    assert svc.cancel_order(oid) is True
    assert svc.get_order(oid).status == OrderStatus.CANCELLED


def test_total_excludes_cancelled(svc):
    a = svc.create_order(ACTIVE, "A", 100)
    b = svc.create_order(ACTIVE, "B", 200)
    c = svc.create_order(ACTIVE, "C", 300)
    svc.cancel_order(b)
    svc.set_order_status(c, OrderStatus.DELIVERED)
    assert svc.get_total_amount(ACTIVE) == Decimal("400")
    assert svc.get_total_amount(ACTIVE) == 400.0
    assert a > 0


def test_total_zero_without_orders_or_owner(svc):
    assert svc.get_total_amount(ACTIVE) == Decimal("0")
    assert svc.get_total_amount(31337) == 0.0


def test_total_is_exact_for_decimal_cents(svc):
    for _ in range(10):
        svc.create_order(ACTIVE, "Gum", 0.1)
    assert svc.get_total_amount(ACTIVE) == Decimal("1.0")


def test_order_events(fake_accounts):
    bus = EventBus()
    svc = OrderService(InMemoryStore(), fake_accounts, event_bus=bus)
    seen = []
    bus.subscribe(TOPIC_ORDER_CREATED, lambda o: seen.append(("created", o.id, o.status)))
    bus.subscribe(TOPIC_ORDER_STATUS, lambda o: seen.append(("status", o.id, o.status)))

    oid = svc.create_order(ACTIVE, "Widget", 10)
    svc.create_order(INACTIVE, "Widget", 10)
    svc.set_order_status(oid, OrderStatus.CONFIRMED)
    svc.cancel_order(oid)
    svc.cancel_order(oid)

    assert seen == [
        ("created", oid, OrderStatus.PENDING),
        ("status", oid, OrderStatus.CONFIRMED),
        ("status", oid, OrderStatus.CANCELLED),
    ]


class ShipsOnFirstRead(InMemoryStore):
    """Another writer ships the order right after cancel_order reads it."""
    def __init__(self):
        super().__init__()
        self.armed = False

    def get_order(self, order_id):
        order = super().get_order(order_id)
        if self.armed and order is not None:
            self.armed = False
            shipped = super().get_order(order_id)
            shipped.status = OrderStatus.SHIPPED
            self.replace_order(shipped)
        return order


def test_cancel_does_not_overwrite_order_shipped_meanwhile(fake_accounts):
    store = ShipsOnFirstRead()
    svc = OrderService(store, fake_accounts)
    oid = svc.create_order(ACTIVE, "Widget", 10)

    store.armed = True
    assert svc.cancel_order(oid) is False
    assert svc.get_order(oid).status == OrderStatus.SHIPPED


def test_replace_order_if_status():
    store = InMemoryStore()
    oid = store.insert_order(Order(id=0, owner_id=ACTIVE, item_description="Widget",
                                   amount=Decimal("1")))
    order = store.get_order(oid)
    order.status = OrderStatus.CANCELLED
    assert store.replace_order_if_status(order, OrderStatus.CONFIRMED) is False
    assert store.get_order(oid).status == OrderStatus.PENDING
    assert store.replace_order_if_status(order, OrderStatus.PENDING) is True
    assert store.get_order(oid).status == OrderStatus.CANCELLED

    order.id = 999
    assert store.replace_order_if_status(order, OrderStatus.CANCELLED) is False


class ConfirmsRightAfterInsert(InMemoryStore):
    """Another writer confirms each order as soon as it is stored."""
    def insert_order(self, order):
        oid = super().insert_order(order)
        stored = self.get_order(oid)
        stored.status = OrderStatus.CONFIRMED
        self.replace_order(stored)
        return oid


def test_created_event_carries_the_inserted_record(fake_accounts):
    bus = EventBus()
    svc = OrderService(ConfirmsRightAfterInsert(), fake_accounts, event_bus=bus)
    seen = []
    bus.subscribe(TOPIC_ORDER_CREATED, seen.append)

    oid = svc.create_order(ACTIVE, "Widget", "12.50")
    assert svc.get_order(oid).status == OrderStatus.CONFIRMED
    assert len(seen) == 1
    assert seen[0].id == oid
    assert seen[0].status == OrderStatus.PENDING
    assert seen[0].amount == Decimal("12.50")
