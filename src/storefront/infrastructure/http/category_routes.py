"""Category endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response

from storefront.application.manage_categories import (
    AddCategoryHandler,
    DeleteCategoryHandler,
    ListCategoriesHandler,
    ShowCategoryHandler,
    UpdateCategoryHandler,
)
from storefront.infrastructure.bootstrap import Container
from storefront.infrastructure.http.dependencies import get_container, require_admin
from storefront.infrastructure.http.schemas import CategoryIn, CategoryOut, CategoryUpdate

router = APIRouter(prefix="/api/categories", tags=["categories"])


@router.get("", response_model=list[CategoryOut])
def list_categories(container: Container = Depends(get_container)):
    return [CategoryOut.from_dto(c) for c in ListCategoriesHandler(container.unit_of_work()).handle()]


@router.get("/{slug}", response_model=CategoryOut)
def get_category(slug: str, container: Container = Depends(get_container)):
    return CategoryOut.from_dto(ShowCategoryHandler(container.unit_of_work()).handle(slug))


@router.post(
    "",
    response_model=CategoryOut,
    status_code=201,
    dependencies=[Depends(require_admin)],
)
def create_category(payload: CategoryIn, container: Container = Depends(get_container)):
    dto = AddCategoryHandler(container.unit_of_work()).handle(name=payload.name, slug=payload.slug)
    return CategoryOut.from_dto(dto)


@router.put("/{category_id}", response_model=CategoryOut, dependencies=[Depends(require_admin)])
def update_category(
    category_id: int,
    payload: CategoryUpdate,
    container: Container = Depends(get_container),
):
    dto = UpdateCategoryHandler(container.unit_of_work()).handle(
        category_id, name=payload.name, slug=payload.slug
    )
    return CategoryOut.from_dto(dto)


@router.delete("/{category_id}", status_code=204, dependencies=[Depends(require_admin)])
def delete_category(category_id: int, container: Container = Depends(get_container)):
    DeleteCategoryHandler(container.unit_of_work()).handle(category_id)
    return Response(status_code=204)
