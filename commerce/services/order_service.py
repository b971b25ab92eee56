# commerce/services/order_service.py
from dataclasses import replace
from decimal import Decimal
from typing import Any, List, Optional, Union

from commerce.contracts import AccountManager, OrderManager, Store
from commerce.enums import CANCELLABLE_STATUSES, OrderStatus
from commerce.errors import (
    AccountInactiveError,
    AccountNotFoundError,
    AccountStateError,
    ValidationError,
)
from commerce.event_bus import EventBus, TOPIC_ORDER_CREATED, TOPIC_ORDER_STATUS
from commerce.models import INVALID_ID, Order
from commerce.validation import check_amount, check_description
from utils.logger import logger as default_logger


class OrderService(OrderManager):
    """
    Order creation, status transitions and totals.

    Account state is read through the AccountManager contract; order records
    are read and written on the Store directly. The check-then-insert in
    create_order is not atomic: an account deactivated concurrently may still
    receive one more order. cancel_order re-checks the status at write time,
    so it never overwrites an order that moved to SHIPPED/DELIVERED meanwhile.
    """

    def __init__(self,
                 store: Store,
                 accounts: AccountManager,
                 *,
                 event_bus: Optional[EventBus] = None,
                 logger=None) -> None:
        self._store = store
        self._accounts = accounts
        self._bus = event_bus
        self._log = logger or default_logger.bind(component="OrderService")

    def create_order(self, owner_id: int, item_description: str, amount: Any) -> int:
        """
        Checks, first failure wins: owner exists -> owner active ->
        description non-empty -> amount > 0. Returns the order id or INVALID_ID.
        """
        try:
            self._require_active_owner(owner_id)
            check_description(item_description)
            value = check_amount(amount)
        except (AccountStateError, ValidationError) as e:
            self._log.debug(f"create_order rejected: {e}")
            return INVALID_ID

        order = Order(
            id=0,
            owner_id=owner_id,
            item_description=item_description,
            amount=value,
            status=OrderStatus.PENDING,
        )
        oid = self._store.insert_order(order)
        self._log.info(f"order created id={oid} owner_id={owner_id} amount={value}")
        self._publish(TOPIC_ORDER_CREATED, replace(order, id=oid))
        return oid

    def get_order(self, order_id: int) -> Optional[Order]:
        return self._store.get_order(order_id)

    def list_orders_for_owner(self, owner_id: int) -> List[Order]:
        return self._store.list_orders_by_owner(owner_id)

    def set_order_status(self, order_id: int, status: Union[OrderStatus, str]) -> bool:
        """Unconditional overwrite; any status is reachable from any status."""
        try:
            status = OrderStatus(status)
        except ValueError:
            self._log.warning(f"set_order_status: unknown status {status!r} for order {order_id}")
            return False
        return self._write_status(order_id, status, guarded=False)

    def cancel_order(self, order_id: int) -> bool:
        """PENDING/CONFIRMED/CANCELLED -> CANCELLED; SHIPPED/DELIVERED are refused."""
        return self._write_status(order_id, OrderStatus.CANCELLED, guarded=True)

    def get_total_amount(self, owner_id: int) -> Decimal:
        """Sum of non-cancelled order amounts; owner existence is not checked."""
        return sum(
            (o.amount for o in self._store.list_orders_by_owner(owner_id)
             if o.status != OrderStatus.CANCELLED),
            Decimal("0"),
        )

    # -------------------- internals --------------------

    def _require_active_owner(self, owner_id: int) -> None:
        acc = self._accounts.get_account(owner_id)
        if acc is None:
            raise AccountNotFoundError(owner_id)
        if not acc.active:
            raise AccountInactiveError(owner_id)

    def _write_status(self, order_id: int, status: OrderStatus, *, guarded: bool) -> bool:
        while True:
            order = self._store.get_order(order_id)
            if order is None:
                return False
            if guarded and order.status not in CANCELLABLE_STATUSES:
                self._log.debug(f"cancel refused: order {order_id} is {order.status.value}")
                return False

            previous = order.status
            order.status = status
            if not guarded:
                if not self._store.replace_order(order):
                    return False
                break
            # guard and write must see the same status; re-check if it moved
            if self._store.replace_order_if_status(order, previous):
                break

        if previous != status:
            self._log.info(f"order {order_id} status {previous.value} -> {status.value}")
            self._publish(TOPIC_ORDER_STATUS, order)
        return True

    def _publish(self, topic: str, order: Order) -> None:
        if self._bus is not None:
            self._bus.publish(topic, replace(order))
