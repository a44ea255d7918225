"""
Token service - signed bearer tokens carrying identity claims.

Tokens are compact JWS strings (header.payload.signature) signed with
HS512 over a shared secret. Claims:

- sub: email exactly as submitted at registration
- userId: identity key of the user (UUID string)
- iat / exp: issued-at and expiry, seconds since epoch

verify() only ever answers True/False. Claim extraction raises
MalformedToken so callers can tell a bad token from a crash.
"""

import time
from collections.abc import Callable
from uuid import UUID

from authlib.jose import JoseError, JsonWebToken

from .exceptions import ConfigurationError, MalformedToken, UnexpectedError

ALGORITHM = "HS512"

# HS512 needs a key at least as long as its 512-bit output
MIN_SECRET_BYTES = 64

_CLAIMS_OPTIONS = {
    "sub": {"essential": True},
    "userId": {"essential": True},
    "exp": {"essential": True},
}


class TokenService:
    """Issues and verifies HS512 tokens bound to one secret and expiry."""

    def __init__(
        self,
        secret: str,
        expiration_ms: int,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """
        Args:
            secret: Signing secret, at least 64 bytes once UTF-8 encoded
            expiration_ms: Token lifetime in milliseconds
            clock: Source of current time in seconds (injectable for tests)

        Raises:
            ConfigurationError: If the secret is undersized or expiry is under one second
        """
        if not secret or len(secret.encode("utf-8")) < MIN_SECRET_BYTES:
            raise ConfigurationError(
                f"Signing secret must be at least {MIN_SECRET_BYTES} bytes for {ALGORITHM}"
            )
        if expiration_ms < 1000:
            raise ConfigurationError("Token expiration must be at least one second")

        self._secret = secret
        self._expiration_ms = expiration_ms
        self._clock = clock
        self._jwt = JsonWebToken([ALGORITHM])

    def issue(self, email: str, user_id: UUID) -> str:
        """
        Issue a signed token binding email and user id.

        Raises:
            UnexpectedError: If signing fails
        """
        issued_at = int(self._clock())
        payload = {
            "sub": email,
            "userId": str(user_id),
            "iat": issued_at,
            "exp": issued_at + self._expiration_ms // 1000,
        }
        header = {"alg": ALGORITHM, "typ": "JWT"}
        try:
            token = self._jwt.encode(header, payload, self._secret)
        except JoseError as e:
            raise UnexpectedError("Token signing failed") from e
        return token.decode() if isinstance(token, bytes) else token

    def verify(self, token: str) -> bool:
        """Return True only for a well-formed, correctly signed, unexpired token."""
        try:
            self._decode(token)
        except MalformedToken:
            return False
        return True

    def email_of(self, token: str) -> str:
        """
        Extract the subject email.

        Raises:
            MalformedToken: If the token does not decode or validate
        """
        return self._decode(token)["sub"]

    def user_id_of(self, token: str) -> UUID:
        """
        Extract the identity key.

        Raises:
            MalformedToken: If the token does not decode or validate
        """
        claims = self._decode(token)
        try:
            return UUID(claims["userId"])
        except (TypeError, ValueError) as e:
            raise MalformedToken("Token carries an invalid user id") from e

    def _decode(self, token: str) -> dict:
        if not isinstance(token, str) or token.count(".") != 2:
            raise MalformedToken("Token must have three segments")
        try:
            claims = self._jwt.decode(token, self._secret, claims_options=_CLAIMS_OPTIONS)
            claims.validate(now=int(self._clock()), leeway=0)
        except (JoseError, ValueError, TypeError) as e:
            raise MalformedToken("Token is invalid or expired") from e
        return dict(claims)
