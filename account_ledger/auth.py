"""
Authentication Module

Customer registration and login. Registration stores a one-way password
verifier and a zero balance; login issues a stateless session token.
"""

from datetime import timedelta
from typing import Optional

from .customers import Customer
from .errors import (
    ConflictError, InvalidCredentialsError, UserNotFoundError, ValidationError
)
from .logging_config import get_logger, log_action
from .security import hash_password, issue_token, verify_password
from .storage import DuplicateRecordError, StorageInterface


def _clean(value: Optional[str]) -> str:
    if not isinstance(value, str):
        return ""
    return value.strip()


class Authenticator:
    """Validates credentials and issues session tokens"""

    def __init__(
        self,
        storage: StorageInterface,
        secret: str,
        token_lifetime: timedelta = timedelta(hours=1),
        algorithm: str = "HS256"
    ):
        self.storage = storage
        self.secret = secret
        self.token_lifetime = token_lifetime
        self.algorithm = algorithm
        self.logger = get_logger("ledger.auth")

    def register(self, name: Optional[str], email: Optional[str],
                 password: Optional[str], phone: Optional[str]) -> int:
        """
        Register a new customer.

        Args:
            name: Display name
            email: Unique email address
            password: Plain password, only its verifier is stored
            phone: Unique phone number, used as the transfer address

        Returns:
            ID of the created customer

        Raises:
            ValidationError: a field is missing or blank
            ConflictError: email or phone already registered
        """
        name, email, phone = _clean(name), _clean(email), _clean(phone)
        if not name or not email or not phone or not password or not isinstance(password, str):
            raise ValidationError("All fields are required", reason="ALL_FIELDS_REQUIRED")

        if self.storage.customer_exists(email, phone):
            log_action(
                self.logger, "warning", "Registration rejected: duplicate identity",
                action="register_conflict", resource="customer",
            )
            raise ConflictError("A customer with this email or phone already exists")

        try:
            customer_id = self.storage.insert_customer(
                name=name,
                email=email,
                phone=phone,
                password_verifier=hash_password(password),
            )
        except DuplicateRecordError:
            # concurrent registration won the race after our existence check
            log_action(
                self.logger, "warning", "Registration rejected at insert: duplicate identity",
                action="register_conflict", resource="customer",
            )
            raise ConflictError("A customer with this email or phone already exists")

        log_action(
            self.logger, "info", "Customer registered",
            customer_id=customer_id, action="register", resource=f"customer:{customer_id}",
        )
        return customer_id

    def login(self, email: Optional[str], password: Optional[str]) -> str:
        """
        Verify credentials and issue a session token.

        Returns:
            Signed bearer token valid for ``token_lifetime``

        Raises:
            ValidationError: email or password missing
            UserNotFoundError: no customer with this email
            InvalidCredentialsError: password does not match
        """
        email = _clean(email)
        if not email or not password or not isinstance(password, str):
            raise ValidationError("All fields are required", reason="ALL_FIELDS_REQUIRED")

        row = self.storage.find_customer_by_email(email)
        if row is None:
            log_action(
                self.logger, "warning", "Login failed: unknown email",
                action="login_failed", resource="auth",
            )
            raise UserNotFoundError("User not found")

        customer = Customer.from_row(row)
        if not verify_password(password, customer.password_verifier):
            log_action(
                self.logger, "warning", "Login failed: wrong password",
                customer_id=customer.id, action="login_failed", resource="auth",
            )
            raise InvalidCredentialsError("Wrong password")

        token = issue_token(customer.id, self.secret, self.token_lifetime, self.algorithm)
        log_action(
            self.logger, "info", "Customer authenticated successfully",
            customer_id=customer.id, action="login", resource="auth",
        )
        return token
