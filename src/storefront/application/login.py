"""Application services: authentication.

``LoginHandler`` trades credentials for a signed session token;
``AuthorizeHandler`` turns a token back into the acting user and enforces
the admin role where the adapters ask for it.
"""

from __future__ import annotations

import logging

from storefront.application.dto import LoginResultDTO, UserDTO
from storefront.application.ports import PasswordHasher, TokenClaims, TokenService
from storefront.domain import validation
from storefront.domain.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ValidationError,
)
from storefront.domain.model.user import Role, User
from storefront.domain.repository.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class LoginHandler:

    def __init__(
        self,
        uow: UnitOfWork,
        hasher: PasswordHasher,
        tokens: TokenService,
    ) -> None:
        self._uow = uow
        self._hasher = hasher
        self._tokens = tokens

    def handle(self, email: str, password: str) -> LoginResultDTO:
        address = validation.email(email)
        validation.password(password)

        with self._uow:
            user = self._uow.users.get_by_email(address)

        # Same message for unknown email and wrong password.
        if user is None or not self._hasher.verify(password, user.password_hash):
            logger.warning("Failed login for %s", address)
            raise AuthenticationError("Invalid email or password")

        token = self._tokens.issue(
            TokenClaims(user_id=user.id, email=user.email, role=user.role.value)  # type: ignore[arg-type]
        )
        logger.info("User %s logged in", user.email)
        return LoginResultDTO(token=token, user=UserDTO.from_domain(user))


class AuthorizeHandler:

    def __init__(self, tokens: TokenService) -> None:
        self._tokens = tokens

    def handle(self, authorization: str | None, require_admin: bool = False) -> TokenClaims:
        """Validate an ``Authorization: Bearer <token>`` header value."""
        if not authorization or not authorization.startswith("Bearer "):
            raise AuthenticationError(
                "Unauthorized - token not provided", code="MISSING_TOKEN"
            )
        claims = self._tokens.verify(authorization[len("Bearer "):].strip())
        if require_admin and claims.role != Role.ADMIN.value:
            raise AuthorizationError("Access denied - administrator role required")
        return claims


class EnsureAdminHandler:
    """Create the configured admin account if it does not exist yet."""

    def __init__(self, uow: UnitOfWork, hasher: PasswordHasher) -> None:
        self._uow = uow
        self._hasher = hasher

    def handle(self, name: str, email: str, password: str) -> bool:
        address = validation.email(email)
        try:
            validation.password(password)
        except ValidationError as exc:
            raise ValidationError(f"Admin {exc}") from exc

        with self._uow:
            if self._uow.users.get_by_email(address) is not None:
                return False
            self._uow.users.add(
                User(
                    id=None,
                    name=name,
                    email=address,
                    password_hash=self._hasher.hash(password),
                    role=Role.ADMIN,
                )
            )
            self._uow.commit()
        logger.info("Admin account %s created", address)
        return True
