# commerce/contracts.py
from __future__ import annotations
from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Any, List, Optional, Union

from commerce.enums import OrderStatus
from commerce.models import Account, Order


class Store(ABC):
    """存储抽象接口——账户与订单两类记录，id 由存储分配。"""

    # ---- accounts ----
    @abstractmethod
    def insert_account(self, account: Account) -> int:
        """Ignore account.id, assign the next account id, store a copy."""
        ...

    @abstractmethod
    def get_account(self, account_id: int) -> Optional[Account]: ...

    @abstractmethod
    def list_accounts(self) -> List[Account]: ...

    @abstractmethod
    def replace_account(self, account: Account) -> bool:
        """Overwrite the record with account.id; False if unknown."""
        ...

    @abstractmethod
    def remove_account(self, account_id: int) -> bool: ...

    # ---- orders ----
    @abstractmethod
    def insert_order(self, order: Order) -> int: ...

    @abstractmethod
    def get_order(self, order_id: int) -> Optional[Order]: ...

    @abstractmethod
    def list_orders_by_owner(self, owner_id: int) -> List[Order]: ...

    @abstractmethod
    def list_orders(self) -> List[Order]: ...

    @abstractmethod
    def replace_order(self, order: Order) -> bool: ...

    @abstractmethod
    def replace_order_if_status(self, order: Order, expected: OrderStatus) -> bool:
        """Overwrite only while the stored status still equals `expected`."""
        ...

    @abstractmethod
    def remove_order(self, order_id: int) -> bool: ...

    @abstractmethod
    def clear(self) -> None:
        """Drop every record and reset both id counters."""
        ...


class AccountManager(ABC):
    @abstractmethod
    def create_account(self, name: str, contact: str) -> int: ...

    @abstractmethod
    def get_account(self, account_id: int) -> Optional[Account]: ...

    @abstractmethod
    def list_active_accounts(self) -> List[Account]: ...

    @abstractmethod
    def deactivate_account(self, account_id: int) -> bool: ...

    @abstractmethod
    def account_exists(self, account_id: int) -> bool: ...


class OrderManager(ABC):
    @abstractmethod
    def create_order(self, owner_id: int, item_description: str, amount: Any) -> int: ...

    @abstractmethod
    def get_order(self, order_id: int) -> Optional[Order]: ...

    @abstractmethod
    def list_orders_for_owner(self, owner_id: int) -> List[Order]: ...

    @abstractmethod
    def set_order_status(self, order_id: int, status: Union[OrderStatus, str]) -> bool: ...

    @abstractmethod
    def cancel_order(self, order_id: int) -> bool: ...

    @abstractmethod
    def get_total_amount(self, owner_id: int) -> Decimal: ...
