"""FastAPI dependencies: the container and bearer-token checks."""

from __future__ import annotations

from typing import Optional

from fastapi import Depends, Header, Request

from storefront.application.login import AuthorizeHandler
from storefront.application.ports import TokenClaims
from storefront.infrastructure.bootstrap import Container


def get_container(request: Request) -> Container:
    return request.app.state.container


def current_user(
    authorization: Optional[str] = Header(default=None),
    container: Container = Depends(get_container),
) -> TokenClaims:
    return AuthorizeHandler(container.token_service()).handle(authorization)


def require_admin(
    authorization: Optional[str] = Header(default=None),
    container: Container = Depends(get_container),
) -> TokenClaims:
    return AuthorizeHandler(container.token_service()).handle(
        authorization, require_admin=True
    )
