"""
Transaction Log Records

Immutable, append-only records of every balance change. A transfer is
logged as a TRANSFER on the sender and a RECEIVED on the receiver.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any, Dict

from .money import format_amount, to_decimal


class TransactionKind(Enum):
    """Kinds of balance change"""
    DEPOSIT = "DEPOSIT"
    WITHDRAW = "WITHDRAW"
    TRANSFER = "TRANSFER"    # Outgoing leg of a transfer
    RECEIVED = "RECEIVED"    # Incoming leg of a transfer

    @property
    def sign(self) -> int:
        """Direction of the balance delta implied by this kind"""
        if self in (TransactionKind.DEPOSIT, TransactionKind.RECEIVED):
            return 1
        return -1


@dataclass(frozen=True)
class TransactionRecord:
    id: int
    customer_id: int
    kind: TransactionKind
    amount: Decimal
    created_at: datetime

    @property
    def balance_delta(self) -> Decimal:
        return self.amount * self.kind.sign

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> 'TransactionRecord':
        """Create instance from a storage row"""
        created_at = row["created_at"]
        if isinstance(created_at, str):
            created_at = datetime.fromisoformat(created_at)
        if created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=timezone.utc)
        return cls(
            id=int(row["id"]),
            customer_id=int(row["customer_id"]),
            kind=TransactionKind(row["type"]),
            amount=to_decimal(row["amount"]),
            created_at=created_at,
        )

    def to_dict(self) -> Dict[str, str]:
        """Client-facing representation"""
        return {
            "type": self.kind.value,
            "amount": format_amount(self.amount),
            "created_at": self.created_at.isoformat(),
        }
