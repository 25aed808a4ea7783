"""
Service assembly and request dependencies
"""

from datetime import timedelta
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ..auth import Authenticator
from ..config import LedgerConfig
from ..ledger import LedgerEngine
from ..session import SessionGate
from ..storage import StorageInterface


class LedgerSystem:
    """All service components, wired to one explicitly constructed store"""

    def __init__(self, config: LedgerConfig, storage: StorageInterface):
        self.config = config
        self.storage = storage
        self.authenticator = Authenticator(
            storage,
            secret=config.jwt_secret,
            token_lifetime=timedelta(hours=config.jwt_expiry_hours),
            algorithm=config.jwt_algorithm,
        )
        self.session_gate = SessionGate(config.jwt_secret, config.jwt_algorithm)
        self.ledger = LedgerEngine(storage)


security = HTTPBearer(auto_error=False)


def get_ledger_system(request: Request) -> LedgerSystem:
    return request.app.state.system


def get_current_customer(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    system: LedgerSystem = Depends(get_ledger_system)
) -> int:
    """Resolve the bearer token to a customer id or fail with 401"""
    token = credentials.credentials if credentials else None
    return system.session_gate.resolve(token)
