"""
Registration and login endpoints
"""

from fastapi import APIRouter, Depends, status

from .dependencies import LedgerSystem, get_ledger_system
from .schemas import LoginRequest, LoginResponse, MessageResponse, RegisterRequest


router = APIRouter()


@router.post("/register", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
def register(
    request: RegisterRequest,
    system: LedgerSystem = Depends(get_ledger_system)
):
    """Register a new customer"""
    system.authenticator.register(
        name=request.cname,
        email=request.email,
        password=request.password,
        phone=request.phone,
    )
    return {"message": "REGISTRATION_SUCCESS"}


@router.post("/login", response_model=LoginResponse)
def login(
    request: LoginRequest,
    system: LedgerSystem = Depends(get_ledger_system)
):
    """Authenticate and return a bearer token"""
    token = system.authenticator.login(email=request.email, password=request.password)
    return {"message": "LOGIN_SUCCESS", "token": token}
