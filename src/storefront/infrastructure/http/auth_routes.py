"""Login and token inspection."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from storefront.application.login import LoginHandler
from storefront.application.ports import TokenClaims
from storefront.infrastructure.bootstrap import Container
from storefront.infrastructure.http.dependencies import current_user, get_container
from storefront.infrastructure.http.schemas import LoginIn, LoginOut, UserOut

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/login", response_model=LoginOut)
def login(payload: LoginIn, container: Container = Depends(get_container)):
    handler = LoginHandler(
        container.unit_of_work(),
        container.password_hasher(),
        container.token_service(),
    )
    result = handler.handle(payload.email, payload.password)
    return LoginOut(token=result.token, user=UserOut.from_dto(result.user))


@router.get("/me")
def whoami(claims: TokenClaims = Depends(current_user)):
    return {"userId": claims.user_id, "email": claims.email, "role": claims.role}
