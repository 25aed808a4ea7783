"""
Ledger Engine Module

Balance reads and balance-affecting operations. Every mutation runs in one
atomic unit of the store: the balance update(s) and the transaction
record(s) commit together or not at all.

Serialization is delegated entirely to the store. Withdrawals and transfers
read balances under an exclusive row lock; transfers lock both parties in
ascending id order so that opposite-direction transfers cannot deadlock.
Deposits take no lock since an addition cannot break non-negativity.
"""

from decimal import Decimal
from typing import Any, List, Optional

from .errors import (
    InsufficientFundsError, NotFoundError, RecipientNotFoundError, ValidationError
)
from .logging_config import get_logger, log_action
from .money import format_amount, parse_amount, to_decimal
from .storage import StorageInterface
from .transactions import TransactionKind, TransactionRecord


class LedgerEngine:
    """Applies deposits, withdrawals and transfers against the store"""

    def __init__(self, storage: StorageInterface):
        self.storage = storage
        self.logger = get_logger("ledger.engine")

    def get_balance(self, customer_id: int) -> Decimal:
        """
        Current balance of a customer.

        Raises:
            NotFoundError: customer does not exist
        """
        row = self.storage.get_customer(customer_id)
        if row is None:
            raise NotFoundError("User not found")
        return to_decimal(row["balance"])

    def deposit(self, customer_id: int, amount: Any) -> Decimal:
        """
        Credit ``amount`` to the customer and log a DEPOSIT.

        Returns:
            The validated amount

        Raises:
            InvalidAmountError: amount is not a positive two-decimal number
            NotFoundError: customer does not exist
        """
        amount = parse_amount(amount)

        with self.storage.atomic() as unit:
            if not unit.adjust_balance(customer_id, amount):
                raise NotFoundError("User not found")
            unit.append_transaction(customer_id, TransactionKind.DEPOSIT.value, amount)

        self._log_committed(TransactionKind.DEPOSIT, customer_id, amount)
        return amount

    def withdraw(self, customer_id: int, amount: Any) -> Decimal:
        """
        Debit ``amount`` from the customer and log a WITHDRAW.

        The balance is read under an exclusive row lock, so concurrent
        withdrawals against the same customer serialize and none of them
        can pass the funds check against a stale balance.

        Raises:
            InvalidAmountError: amount is not a positive two-decimal number
            NotFoundError: customer does not exist
            InsufficientFundsError: amount exceeds the locked balance
        """
        amount = parse_amount(amount)

        with self.storage.atomic() as unit:
            row = unit.lock_customer(customer_id)
            if row is None:
                raise NotFoundError("User not found")

            balance = to_decimal(row["balance"])
            if amount > balance:
                self._log_rejected("withdraw", customer_id, amount, balance)
                raise InsufficientFundsError("Insufficient balance")

            unit.adjust_balance(customer_id, -amount)
            unit.append_transaction(customer_id, TransactionKind.WITHDRAW.value, amount)

        self._log_committed(TransactionKind.WITHDRAW, customer_id, amount)
        return amount

    def transfer(self, from_customer_id: int, to_phone: Optional[str], amount: Any) -> Decimal:
        """
        Move ``amount`` from the sender to the customer owning ``to_phone``.

        Both balance updates and both records (TRANSFER on the sender,
        RECEIVED on the receiver) are written in a single atomic unit.

        Raises:
            InvalidAmountError: amount is not a positive two-decimal number
            ValidationError: phone missing
            NotFoundError: sender does not exist
            InsufficientFundsError: amount exceeds the sender's locked balance
            RecipientNotFoundError: no customer owns ``to_phone``
        """
        amount = parse_amount(amount)
        to_phone = to_phone.strip() if isinstance(to_phone, str) else ""
        if not to_phone:
            raise ValidationError("Recipient phone is required")

        with self.storage.atomic() as unit:
            receiver_id = unit.find_customer_id_by_phone(to_phone)

            # canonical lock order: ascending customer id, whatever the role;
            # a transfer to one's own phone locks the single row once
            lock_ids = sorted({i for i in (from_customer_id, receiver_id) if i is not None})
            locked = {customer_id: unit.lock_customer(customer_id) for customer_id in lock_ids}

            sender = locked.get(from_customer_id)
            if sender is None:
                raise NotFoundError("User not found")

            balance = to_decimal(sender["balance"])
            if amount > balance:
                self._log_rejected("transfer", from_customer_id, amount, balance)
                raise InsufficientFundsError("Insufficient balance")

            if receiver_id is None or locked.get(receiver_id) is None:
                log_action(
                    self.logger, "warning", "Transfer rejected: recipient not found",
                    customer_id=from_customer_id, action="transfer_rejected",
                    resource=f"customer:{from_customer_id}",
                    extra={"amount": format_amount(amount)},
                )
                raise RecipientNotFoundError("Receiver not found")

            unit.adjust_balance(from_customer_id, -amount)
            unit.adjust_balance(receiver_id, amount)
            unit.append_transaction(from_customer_id, TransactionKind.TRANSFER.value, amount)
            unit.append_transaction(receiver_id, TransactionKind.RECEIVED.value, amount)

        self._log_committed(TransactionKind.TRANSFER, from_customer_id, amount,
                            counterparty_id=receiver_id)
        return amount

    def list_transactions(self, customer_id: int) -> List[TransactionRecord]:
        """All transaction records of a customer, most recent first"""
        return [
            TransactionRecord.from_row(row)
            for row in self.storage.list_transactions(customer_id)
        ]

    def _log_committed(self, kind: TransactionKind, customer_id: int, amount: Decimal,
                       counterparty_id: Optional[int] = None) -> None:
        extra = {"type": kind.value, "amount": format_amount(amount)}
        if counterparty_id is not None:
            extra["counterparty_id"] = counterparty_id
        log_action(
            self.logger, "info", f"{kind.value} committed",
            customer_id=customer_id, action=kind.value.lower(),
            resource=f"customer:{customer_id}", extra=extra,
        )

    def _log_rejected(self, action: str, customer_id: int, amount: Decimal,
                      balance: Decimal) -> None:
        log_action(
            self.logger, "warning", f"{action.capitalize()} rejected: insufficient funds",
            customer_id=customer_id, action=f"{action}_rejected",
            resource=f"customer:{customer_id}",
            extra={"amount": format_amount(amount), "balance": format_amount(balance)},
        )
