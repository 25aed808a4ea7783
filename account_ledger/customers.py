"""
Customer Records

The credential store shape: identity, contact details, password verifier
and balance.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict

from .money import to_decimal


@dataclass
class Customer:
    """Registered customer. Balance is mutated only by the ledger engine."""
    id: int
    name: str
    email: str
    phone: str
    password_verifier: str
    balance: Decimal

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> 'Customer':
        """Create instance from a storage row"""
        return cls(
            id=int(row["id"]),
            name=row["name"],
            email=row["email"],
            phone=row["phone"],
            password_verifier=row["password_verifier"],
            balance=to_decimal(row["balance"]),
        )
