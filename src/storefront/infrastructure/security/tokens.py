"""Session tokens: HS256 JWTs signed with the configured secret."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone

import jwt

from storefront.application.ports import TokenClaims, TokenService
from storefront.domain.exceptions import AuthenticationError

logger = logging.getLogger(__name__)

ISSUER = "storefront"
AUDIENCE = "storefront-app"
ALGORITHM = "HS256"


class JwtTokenService(TokenService):

    def __init__(self, secret: str, expiry_hours: int = 24) -> None:
        self._secret = secret
        self._expiry = timedelta(hours=expiry_hours)

    def issue(self, claims: TokenClaims) -> str:
        now = datetime.now(timezone.utc)
        payload = {
            "userId": claims.user_id,
            "email": claims.email,
            "role": claims.role,
            "iss": ISSUER,
            "aud": AUDIENCE,
            "iat": now,
            "exp": now + self._expiry,
        }
        return jwt.encode(payload, self._secret, algorithm=ALGORITHM)

    def verify(self, token: str) -> TokenClaims:
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[ALGORITHM],
                audience=AUDIENCE,
                issuer=ISSUER,
                options={"require": ["exp", "iss", "aud"]},
            )
        except jwt.InvalidTokenError as exc:
            logger.info("Rejected session token: %s", exc)
            raise AuthenticationError(
                "Unauthorized - invalid or expired token", code="INVALID_TOKEN"
            ) from exc
        try:
            return TokenClaims(
                user_id=int(payload["userId"]),
                email=str(payload["email"]),
                role=str(payload["role"]),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise AuthenticationError(
                "Unauthorized - invalid or expired token", code="INVALID_TOKEN"
            ) from exc
