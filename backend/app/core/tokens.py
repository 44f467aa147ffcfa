"""Bearer token issuance and verification (JWT, HMAC-signed)."""

from __future__ import annotations

import enum
import json
import uuid
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING, Any

from jose import jws, jwt
from jose.exceptions import JWSError
from jose.utils import base64url_decode

from app.core.config import Settings

if TYPE_CHECKING:  # pragma: no cover - typing only imports
    from app.models.user import User

Clock = Callable[[], datetime]

_REQUIRED_INT_CLAIMS = ("iat", "exp")


def utc_now() -> datetime:
    return datetime.now(UTC)


class TokenError(str, enum.Enum):
    """Reasons a presented bearer token is rejected."""

    MALFORMED = "malformed"
    BAD_SIGNATURE = "bad_signature"
    WRONG_ISSUER = "wrong_issuer"
    WRONG_AUDIENCE = "wrong_audience"
    NOT_YET_VALID = "not_yet_valid"
    EXPIRED = "expired"


@dataclass(frozen=True)
class IssuedToken:
    token: str
    token_id: str
    expires_at: datetime
    claims: dict[str, Any] = field(repr=False)


@dataclass(frozen=True)
class TokenVerification:
    """Tagged outcome of :meth:`TokenService.verify`."""

    claims: dict[str, Any] | None = None
    error: TokenError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.claims is not None

    @classmethod
    def failed(cls, error: TokenError) -> "TokenVerification":
        return cls(claims=None, error=error)


class TokenService:
    """Creates and validates signed, expiring bearer tokens.

    Validity is decided by the signature, the configured issuer and audience,
    and the ``[iat, exp)`` window. There is no clock-skew allowance and no
    server-side session state.
    """

    def __init__(self, settings: Settings, *, clock: Clock | None = None) -> None:
        if not settings.jwt_secret_key:
            raise ValueError("TokenService requires a non-empty signing secret")
        self._secret = settings.jwt_secret_key
        self._algorithm = settings.jwt_algorithm
        self._issuer = settings.jwt_issuer
        self._audience = settings.jwt_audience
        self._lifetime = timedelta(hours=settings.access_token_expire_hours)
        self._clock = clock or utc_now

    def issue(self, user: "User", roles: Iterable[str]) -> IssuedToken:
        """Sign a token for ``user`` carrying the given role names."""
        issued_at = int(self._clock().timestamp())
        expires_at = issued_at + int(self._lifetime.total_seconds())
        token_id = uuid.uuid4().hex
        claims: dict[str, Any] = {
            "sub": str(user.id),
            "email": user.email,
            "name": user.full_name,
            "given_name": user.first_name,
            "family_name": user.last_name,
            "roles": sorted(set(roles)),
            "jti": token_id,
            "iat": issued_at,
            "exp": expires_at,
            "iss": self._issuer,
            "aud": self._audience,
        }
        token = jwt.encode(claims, self._secret, algorithm=self._algorithm)
        return IssuedToken(
            token=token,
            token_id=token_id,
            expires_at=datetime.fromtimestamp(expires_at, UTC),
            claims=claims,
        )

    def verify(self, token: str) -> TokenVerification:
        """Validate ``token`` and return its claims or the reason it failed."""
        if not isinstance(token, str) or token.count(".") != 2:
            return TokenVerification.failed(TokenError.MALFORMED)
        if not self._header_readable(token.split(".", 1)[0]):
            return TokenVerification.failed(TokenError.MALFORMED)

        # claims are only decoded from the payload the signature vouches for
        try:
            payload = jws.verify(token, self._secret, algorithms=[self._algorithm])
        except JWSError:
            return TokenVerification.failed(TokenError.BAD_SIGNATURE)

        try:
            claims = json.loads(payload)
        except ValueError:
            return TokenVerification.failed(TokenError.MALFORMED)
        if not isinstance(claims, dict):
            return TokenVerification.failed(TokenError.MALFORMED)

        if not isinstance(claims.get("sub"), str) or not claims["sub"]:
            return TokenVerification.failed(TokenError.MALFORMED)
        for name in _REQUIRED_INT_CLAIMS:
            value = claims.get(name)
            if not isinstance(value, int) or isinstance(value, bool):
                return TokenVerification.failed(TokenError.MALFORMED)

        if claims.get("iss") != self._issuer:
            return TokenVerification.failed(TokenError.WRONG_ISSUER)
        if not self._audience_matches(claims.get("aud")):
            return TokenVerification.failed(TokenError.WRONG_AUDIENCE)

        now = self._clock().timestamp()
        if now < claims["iat"]:
            return TokenVerification.failed(TokenError.NOT_YET_VALID)
        if now >= claims["exp"]:
            return TokenVerification.failed(TokenError.EXPIRED)
        return TokenVerification(claims=claims)

    @staticmethod
    def _header_readable(segment: str) -> bool:
        try:
            header = json.loads(base64url_decode(segment.encode("ascii")))
        except (ValueError, TypeError):
            return False
        return isinstance(header, dict)

    def _audience_matches(self, audience: Any) -> bool:
        if isinstance(audience, str):
            return audience == self._audience
        if isinstance(audience, list):
            return self._audience in audience
        return False


__all__ = [
    "Clock",
    "IssuedToken",
    "TokenError",
    "TokenService",
    "TokenVerification",
    "utc_now",
]
