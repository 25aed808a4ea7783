"""
Password verifiers and session tokens.

Passwords are stored as salted scrypt digests. Session tokens are stateless
HS256 JWTs whose subject is the customer id; the signing secret is always
passed in explicitly, nothing is kept server-side.
"""

from datetime import datetime, timedelta, timezone
import hashlib
import hmac
import secrets

import jwt

from .errors import UnauthenticatedError


SCRYPT_N = 16384
SCRYPT_R = 8
SCRYPT_P = 1
VERIFIER_SCHEME = "scrypt"


def _scrypt(password: str, salt: str) -> str:
    return hashlib.scrypt(
        password.encode(),
        salt=salt.encode(),
        n=SCRYPT_N, r=SCRYPT_R, p=SCRYPT_P
    ).hex()


def hash_password(password: str) -> str:
    """Derive a one-way verifier ``scrypt$<salt>$<digest>`` from a password"""
    salt = secrets.token_hex(16)
    return f"{VERIFIER_SCHEME}${salt}${_scrypt(password, salt)}"


def verify_password(password: str, verifier: str) -> bool:
    """Check a password against a stored verifier in constant time"""
    try:
        scheme, salt, digest = verifier.split("$")
    except ValueError:
        return False
    if scheme != VERIFIER_SCHEME:
        return False
    return hmac.compare_digest(_scrypt(password, salt), digest)


def issue_token(customer_id: int, secret: str,
                expires_in: timedelta = timedelta(hours=1),
                algorithm: str = "HS256") -> str:
    """Issue a signed token bound to ``customer_id``"""
    now = datetime.now(timezone.utc)
    payload = {
        "sub": str(customer_id),
        "iat": now,
        "exp": now + expires_in,
    }
    return jwt.encode(payload, secret, algorithm=algorithm)


def verify_token(token: str, secret: str, algorithm: str = "HS256") -> int:
    """
    Verify a token and return the customer id it is bound to.

    Raises:
        UnauthenticatedError: expired, forged or malformed token
    """
    try:
        payload = jwt.decode(
            token, secret,
            algorithms=[algorithm],
            options={"require": ["sub", "exp"]}
        )
    except jwt.ExpiredSignatureError:
        raise UnauthenticatedError("Token expired", reason="TOKEN_EXPIRED")
    except jwt.InvalidTokenError:
        raise UnauthenticatedError("Invalid token", reason="INVALID_TOKEN")

    try:
        return int(payload["sub"])
    except (TypeError, ValueError):
        raise UnauthenticatedError("Invalid token subject", reason="INVALID_TOKEN")
