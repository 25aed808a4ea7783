"""
Pydantic schemas for API requests

Fields are optional at the schema level so that missing input is reported
by the service as a 400 with a stable reason rather than a framework 422.
"""

from typing import Any, List, Optional
from pydantic import BaseModel, Field


class RegisterRequest(BaseModel):
    cname: Optional[str] = Field(None, description="Customer display name")
    email: Optional[str] = None
    password: Optional[str] = None
    phone: Optional[str] = Field(None, description="Unique phone number, used as transfer address")


class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class AmountRequest(BaseModel):
    amount: Any = Field(None, description="Positive amount, number or decimal string, at most 2 decimals")


class TransferRequest(BaseModel):
    phone: Optional[str] = Field(None, description="Phone number of the recipient")
    amount: Any = Field(None, description="Positive amount, number or decimal string, at most 2 decimals")


class MessageResponse(BaseModel):
    message: str


class LoginResponse(BaseModel):
    message: str
    token: str


class BalanceResponse(BaseModel):
    balance: str = Field(..., description="Balance as a fixed two-decimal string")


class TransactionEntry(BaseModel):
    type: str
    amount: str
    created_at: str


class ErrorResponse(BaseModel):
    error: str
    message: Optional[str] = None


TransactionHistory = List[TransactionEntry]
