# commerce/models.py
from dataclasses import dataclass, field
from decimal import Decimal

from commerce.enums import OrderStatus

# returned by create_* when a precondition fails; never a valid id
INVALID_ID = -1


@dataclass
class Account:
    id: int                 # assigned by the store, 0 before insert
    name: str
    contact: str            # email-like, see validation.check_contact
    active: bool = True


@dataclass
class Order:
    id: int                 # assigned by the store, 0 before insert
    owner_id: int           # Account.id at creation time
    item_description: str
    amount: Decimal = field(default_factory=lambda: Decimal("0"))
    status: OrderStatus = OrderStatus.PENDING
