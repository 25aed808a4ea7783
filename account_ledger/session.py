"""
Session Gate

Resolves an inbound bearer credential to a customer id before any ledger
operation runs. Never touches the store.
"""

from typing import Optional

from .errors import UnauthenticatedError
from .security import verify_token


class SessionGate:
    """Validates bearer credentials against the signing secret"""

    def __init__(self, secret: str, algorithm: str = "HS256"):
        self.secret = secret
        self.algorithm = algorithm

    def resolve(self, credential: Optional[str]) -> int:
        """
        Resolve a credential to a customer id.

        Accepts the bare token or a full ``Bearer <token>`` header value.

        Raises:
            UnauthenticatedError: credential absent, malformed or invalid
        """
        if not credential or not credential.strip():
            raise UnauthenticatedError("Not authenticated")

        token = credential.strip()
        scheme, _, rest = token.partition(" ")
        if rest:
            if scheme.lower() != "bearer":
                raise UnauthenticatedError("Unsupported authorization scheme",
                                           reason="INVALID_TOKEN")
            token = rest.strip()
            if not token or " " in token:
                raise UnauthenticatedError("Malformed bearer token",
                                           reason="INVALID_TOKEN")

        return verify_token(token, self.secret, self.algorithm)
