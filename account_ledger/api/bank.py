"""
Balance, deposit, withdraw, transfer and history endpoints

Every route requires a bearer token. Handlers are plain functions so that
FastAPI runs them in its worker thread pool; a handler waiting on a row
lock never blocks the event loop.
"""

from fastapi import APIRouter, Depends

from .dependencies import LedgerSystem, get_current_customer, get_ledger_system
from .schemas import (
    AmountRequest, BalanceResponse, MessageResponse, TransactionHistory, TransferRequest
)
from ..money import format_amount


router = APIRouter()


@router.get("/balance", response_model=BalanceResponse)
def get_balance(
    customer_id: int = Depends(get_current_customer),
    system: LedgerSystem = Depends(get_ledger_system)
):
    """Get the current balance"""
    balance = system.ledger.get_balance(customer_id)
    return {"balance": format_amount(balance)}


@router.post("/deposit", response_model=MessageResponse)
def deposit(
    request: AmountRequest,
    customer_id: int = Depends(get_current_customer),
    system: LedgerSystem = Depends(get_ledger_system)
):
    """Make a deposit"""
    system.ledger.deposit(customer_id, request.amount)
    return {"message": "Deposit successful"}


@router.post("/withdraw", response_model=MessageResponse)
def withdraw(
    request: AmountRequest,
    customer_id: int = Depends(get_current_customer),
    system: LedgerSystem = Depends(get_ledger_system)
):
    """Make a withdrawal"""
    system.ledger.withdraw(customer_id, request.amount)
    return {"message": "Withdraw successful"}


@router.post("/transfer", response_model=MessageResponse)
def transfer(
    request: TransferRequest,
    customer_id: int = Depends(get_current_customer),
    system: LedgerSystem = Depends(get_ledger_system)
):
    """Transfer to another customer identified by phone number"""
    system.ledger.transfer(customer_id, request.phone, request.amount)
    return {"message": "Transfer successful"}


@router.get("/transactions", response_model=TransactionHistory)
def get_transactions(
    customer_id: int = Depends(get_current_customer),
    system: LedgerSystem = Depends(get_ledger_system)
):
    """Transaction history, most recent first"""
    return [record.to_dict() for record in system.ledger.list_transactions(customer_id)]
