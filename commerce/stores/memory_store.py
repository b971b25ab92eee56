# commerce/stores/memory_store.py
import threading
from dataclasses import replace
from typing import Dict, List, Optional

from commerce.contracts import Store
from commerce.enums import OrderStatus
from commerce.models import Account, Order
from utils.logger import logger

_FIRST_ID = 1


class InMemoryStore(Store):
    """
    Thread-safe in-memory store for accounts and orders keyed by id.

    - ids come from two independent counters starting at 1; clear() resets them
    - records go in and come out as copies, callers never share stored state
    - one RLock guards both maps and both counters
    """

    def __init__(self) -> None:
        self._accounts: Dict[int, Account] = {}
        self._orders: Dict[int, Order] = {}
        self._next_account_id = _FIRST_ID
        self._next_order_id = _FIRST_ID
        self._lock = threading.RLock()
        self._log = logger.bind(component="InMemoryStore")

    # -------------------- accounts --------------------

    def insert_account(self, account: Account) -> int:
        with self._lock:
            aid = self._next_account_id
            self._next_account_id += 1
            self._accounts[aid] = replace(account, id=aid)
        self._log.debug(f"insert account id={aid}")
        return aid

    def get_account(self, account_id: int) -> Optional[Account]:
        with self._lock:
            acc = self._accounts.get(account_id)
            return replace(acc) if acc is not None else None

    def list_accounts(self) -> List[Account]:
        with self._lock:
            return [replace(a) for a in self._accounts.values()]

    def replace_account(self, account: Account) -> bool:
        with self._lock:
            if account.id not in self._accounts:
                return False
            self._accounts[account.id] = replace(account)
        self._log.debug(f"replace account id={account.id}")
        return True

    def remove_account(self, account_id: int) -> bool:
        with self._lock:
            removed = self._accounts.pop(account_id, None) is not None
        if removed:
            self._log.debug(f"remove account id={account_id}")
        return removed

    def count_accounts(self) -> int:
        with self._lock:
            return len(self._accounts)

    # -------------------- orders --------------------

    def insert_order(self, order: Order) -> int:
        with self._lock:
            oid = self._next_order_id
            self._next_order_id += 1
            self._orders[oid] = replace(order, id=oid)
        self._log.debug(f"insert order id={oid} owner_id={order.owner_id}")
        return oid

    def get_order(self, order_id: int) -> Optional[Order]:
        with self._lock:
            o = self._orders.get(order_id)
            return replace(o) if o is not None else None

    def list_orders_by_owner(self, owner_id: int) -> List[Order]:
        with self._lock:
            return [replace(o) for o in self._orders.values() if o.owner_id == owner_id]

    def list_orders(self) -> List[Order]:
        with self._lock:
            return [replace(o) for o in self._orders.values()]

    def replace_order(self, order: Order) -> bool:
        with self._lock:
            if order.id not in self._orders:
                return False
            self._orders[order.id] = replace(order)
        self._log.debug(f"replace order id={order.id}")
        return True

    def replace_order_if_status(self, order: Order, expected: OrderStatus) -> bool:
        with self._lock:
            current = self._orders.get(order.id)
            if current is None or current.status != expected:
                return False
            self._orders[order.id] = replace(order)
        self._log.debug(f"replace order id={order.id} (was {expected.value})")
        return True

    def remove_order(self, order_id: int) -> bool:
        with self._lock:
            removed = self._orders.pop(order_id, None) is not None
        if removed:
            self._log.debug(f"remove order id={order_id}")
        return removed

    def count_orders(self) -> int:
        with self._lock:
            return len(self._orders)

    # -------------------- admin --------------------

    def clear(self) -> None:
        """Test/reset only: empty both maps and restart ids at 1."""
        with self._lock:
            self._accounts.clear()
            self._orders.clear()
            self._next_account_id = _FIRST_ID
            self._next_order_id = _FIRST_ID
        self._log.debug("store cleared")
