"""
Ledger Error Taxonomy

Every business-rule failure carries a stable machine-readable ``reason`` and
the HTTP status it maps to. Infrastructure failures derive from
``InternalError`` and are never shown to clients in detail.
"""

from typing import Optional


class LedgerError(Exception):
    """Base exception for all ledger service errors"""

    reason = "LEDGER_ERROR"
    http_status = 400

    def __init__(self, message: Optional[str] = None, reason: Optional[str] = None):
        if reason:
            self.reason = reason
        self.message = message or self.reason
        super().__init__(self.message)


class ValidationError(LedgerError):
    """Missing or malformed input"""

    reason = "INVALID_INPUT"


class InvalidAmountError(ValidationError):
    """Amount is not a positive two-decimal number"""

    reason = "INVALID_AMOUNT"


class ConflictError(LedgerError):
    """A customer with the same email or phone already exists"""

    reason = "USER_ALREADY_EXISTS"


class NotFoundError(LedgerError):
    """Referenced customer does not exist"""

    reason = "ACCOUNT_NOT_FOUND"
    http_status = 404


class UserNotFoundError(NotFoundError):
    """No customer matches the login email"""

    reason = "USER_NOT_FOUND"
    http_status = 400


class RecipientNotFoundError(NotFoundError):
    """No customer matches the transfer phone number"""

    reason = "RECIPIENT_NOT_FOUND"
    http_status = 400


class InvalidCredentialsError(LedgerError):
    reason = "WRONG_PASSWORD"


class InsufficientFundsError(LedgerError):
    reason = "INSUFFICIENT_FUNDS"


class UnauthenticatedError(LedgerError):
    """Bearer credential absent, malformed, expired or forged"""

    reason = "UNAUTHENTICATED"
    http_status = 401


class InternalError(LedgerError):
    """Unexpected store or infrastructure failure"""

    reason = "SERVER_ERROR"
    http_status = 500
