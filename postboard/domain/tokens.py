"""
Bearer token issuance and verification.

Tokens are PyJWT-encoded JWTs carrying the claims:
- userId: identifier of the authenticated user
- email: normalized email of the authenticated user
- iat / exp: issue and expiry times (exp = iat + ttl)

Verification is stateless: there is no session store and no revocation.
"""

from dataclasses import dataclass
from datetime import timedelta

import jwt

from .entities import Identity, User, utcnow
from .exceptions import InvalidToken


@dataclass
class TokenService:
    """Signs and verifies bearer tokens with a shared secret."""

    secret: str
    algorithm: str = "HS256"
    ttl_seconds: int = 3600

    def issue(self, user: User) -> str:
        """Issue a signed token for the given user."""
        now = utcnow()
        claims = {
            "userId": user.id,
            "email": user.email,
            "iat": now,
            "exp": now + timedelta(seconds=self.ttl_seconds),
        }
        return jwt.encode(claims, self.secret, algorithm=self.algorithm)

    def verify(self, token: str) -> Identity:
        """
        Verify signature and expiry, then decode the caller identity.

        Raises:
            InvalidToken: Bad signature, expired, malformed, or missing claims
        """
        try:
            claims = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options={"require": ["exp", "userId", "email"]},
            )
        except jwt.InvalidTokenError as e:
            raise InvalidToken(str(e)) from e
        return Identity(user_id=str(claims["userId"]), email=str(claims["email"]))
