"""
User domain service - registration, activation and login.

Activation policy
=================

Controlled by ``require_activation``:
- True: accounts are created inactive, an activation link is sent
  through the ActivationNotifier, and login is refused (AccountNotActivated)
  until GET /users/activate/{id} flips the account to active.
- False: accounts are created active and no link is sent.

Login checks the password before the activation state, so a wrong
password is always reported as InvalidCredentials.
"""

import logging
from dataclasses import dataclass
from functools import lru_cache

import bcrypt

from .entities import User
from .exceptions import (
    AccountNotActivated,
    EmailAlreadyRegistered,
    InvalidCredentials,
    UserNotFound,
    ValidationFailed,
)
from .identifiers import check_identifier
from .ports import ActivationNotifier, UserRepository
from .tokens import TokenService
from .validation import MAX_PASSWORD_BYTES, is_encodable, validate_user

logger = logging.getLogger(__name__)


@lru_cache
def _dummy_hash(cost: int) -> str:
    """
    Hash compared against when the email is unknown.

    Uses the same cost as real hashes so login timing does not reveal
    whether an account exists.
    """
    return bcrypt.hashpw(b"dummy_password_for_timing_safety", bcrypt.gensalt(cost)).decode()


@dataclass
class UserService:
    """
    Domain service for user accounts.

    Orchestrates registration (validation, hashing, persistence,
    activation link), activation and token-issuing login.
    """

    repository: UserRepository
    notifier: ActivationNotifier
    tokens: TokenService
    activation_url: str = "http://localhost:8000/api/v1/users/activate"
    require_activation: bool = True
    bcrypt_cost: int = 10

    def register(self, name: str, email: str, password: str, bio: str | None = None) -> User:
        """
        Register a new user.

        Args:
            name: Display name
            email: Email address (will be normalized)
            password: Plaintext password (will be hashed)
            bio: Optional biography

        Returns:
            The stored user

        Raises:
            ValidationFailed: If any field breaks the user rules
            EmailAlreadyRegistered: If the email already has an account
        """
        normalized_email = self._normalize_email(email) if isinstance(email, str) else email
        result = validate_user({"name": name, "email": normalized_email, "password": password, "bio": bio})
        if not result.ok:
            raise ValidationFailed(result.errors)

        password_hash = self._hash_password(password)

        user = self.repository.add(
            name=name.strip(),
            email=normalized_email,
            password_hash=password_hash,
            bio=bio,
            active=not self.require_activation,
        )
        if user is None:
            raise EmailAlreadyRegistered(normalized_email)

        logger.info("Registered user %s", user.id)
        if self.require_activation:
            self.notifier.send_activation_link(user.email, f"{self.activation_url}/{user.id}")
        return user

    def activate(self, user_id: str) -> User:
        """
        Mark a user as active. Activating an active user is a no-op.

        Raises:
            MalformedIdentifier: If user_id is not a store identifier
            UserNotFound: If no such user exists
        """
        user = self.repository.activate(check_identifier(user_id))
        if user is None:
            raise UserNotFound(user_id)
        logger.info("Activated user %s", user.id)
        return user

    def login(self, email: str, password: str) -> str:
        """
        Verify credentials and issue a bearer token.

        Returns:
            Signed token for the user

        Raises:
            InvalidCredentials: Unknown email or wrong password
            AccountNotActivated: Correct password but account still inactive
        """
        normalized_email = self._normalize_email(email)
        user = self.repository.find_by_email(normalized_email) if is_encodable(normalized_email) else None

        # Always run bcrypt so unknown emails cost the same as known ones
        stored_hash = user.password_hash if user is not None else _dummy_hash(self.bcrypt_cost)
        encoded = password.encode() if is_encodable(password) else None
        secret = encoded[:MAX_PASSWORD_BYTES] if encoded is not None else b""
        password_valid = (
            bcrypt.checkpw(secret, stored_hash.encode())
            and encoded is not None
            and len(encoded) <= MAX_PASSWORD_BYTES
        )

        if user is None or not password_valid:
            logger.info("Rejected login: invalid credentials")
            raise InvalidCredentials()
        if self.require_activation and not user.active:
            logger.info("Rejected login for inactive user %s", user.id)
            raise AccountNotActivated(user.id)

        return self.tokens.issue(user)

    def _normalize_email(self, email: str) -> str:
        """
        Normalize email address for consistent storage and lookup.

        Applies: strip whitespace + lowercase
        """
        return email.strip().lower()

    def _hash_password(self, password: str) -> str:
        """Hash password using bcrypt with the configured cost factor."""
        return bcrypt.hashpw(password.encode(), bcrypt.gensalt(rounds=self.bcrypt_cost)).decode()
