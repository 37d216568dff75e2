"""
Session Token Service

Issues and verifies the signed session tokens carried in the ``token``
cookie. Tokens are HS256 JWTs holding the identity claims posted at login
plus ``iat``/``exp``; nothing is stored server side.

Verification is CPU-bound, so it is a plain synchronous call that either
returns the decoded identity or raises ``AuthInvalidError``.
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any

import jwt

from booking_api.core.exceptions import AuthInvalidError, ConfigurationError
from booking_api.core.setting import Settings

REGISTERED_CLAIMS = frozenset({"iss", "sub", "aud", "nbf", "jti", "iat", "exp"})


@dataclass(frozen=True)
class Identity:
    """Authenticated caller decoded from a session token."""
    email: str
    claims: dict[str, Any] = field(default_factory=dict, compare=False)


class TokenService:
    """
    Signs and verifies session tokens with a shared secret.

    The secret is checked once at construction; an application built
    without one fails to start instead of failing every login.
    """

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        expires_in: timedelta = timedelta(hours=1),
    ):
        if not secret:
            raise ConfigurationError("ACCESS_TOKEN_SECRET", "a signing secret is required")
        self._secret = secret
        self.algorithm = algorithm
        self.expires_in = expires_in

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenService":
        return cls(
            settings.ACCESS_TOKEN_SECRET,
            algorithm=settings.TOKEN_ALGORITHM,
            expires_in=timedelta(minutes=settings.TOKEN_EXPIRE_MINUTES),
        )

    def issue(self, claims: dict[str, Any]) -> str:
        """
        Create a signed token for the given identity claims.

        Registered JWT claim names in ``claims`` are dropped; the token's
        own ``iat``/``exp`` are the only ones it carries.

        Args:
            claims: Identity payload; must contain ``email``

        Returns:
            Encoded JWT string
        """
        now = datetime.now(timezone.utc)
        payload = {k: v for k, v in claims.items() if k not in REGISTERED_CLAIMS}
        payload["iat"] = now
        payload["exp"] = now + self.expires_in
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)

    def verify(self, token: str) -> Identity:
        """
        Decode a token and return the identity it carries.

        Raises:
            AuthInvalidError: Bad signature, malformed token, expired token
                or missing ``email`` claim
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                options={"require": ["exp"]},
            )
        except jwt.ExpiredSignatureError as e:
            raise AuthInvalidError("token expired") from e
        except jwt.PyJWTError as e:
            raise AuthInvalidError(f"token rejected: {e}") from e

        email = payload.get("email")
        if not isinstance(email, str) or not email:
            raise AuthInvalidError("token carries no email claim")

        claims = {k: v for k, v in payload.items() if k not in REGISTERED_CLAIMS}
        return Identity(email=email, claims=claims)
