"""Catalog product endpoints. Reads are public, writes need an admin token."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Response

from storefront.application.add_product import AddProductHandler
from storefront.application.delete_product import DeleteProductHandler
from storefront.application.dto import ProductSpec, SizeSpec
from storefront.application.show_product import ListProductsHandler, ShowProductHandler
from storefront.application.update_product import UpdateProductHandler
from storefront.infrastructure.bootstrap import Container
from storefront.infrastructure.http.dependencies import get_container, require_admin
from storefront.infrastructure.http.schemas import ProductIn, ProductOut, ProductUpdate

router = APIRouter(prefix="/api/products", tags=["products"])


@router.get("", response_model=list[ProductOut])
def list_products(
    category: Optional[str] = None,
    featured: Optional[bool] = None,
    container: Container = Depends(get_container),
):
    products = ListProductsHandler(container.unit_of_work()).handle(
        category=category, featured=featured
    )
    return [ProductOut.from_dto(dto) for dto in products]


@router.get("/{product_id}", response_model=ProductOut)
def get_product(product_id: str, container: Container = Depends(get_container)):
    return ProductOut.from_dto(ShowProductHandler(container.unit_of_work()).handle(product_id))


@router.post(
    "",
    response_model=ProductOut,
    status_code=201,
    dependencies=[Depends(require_admin)],
)
def create_product(payload: ProductIn, container: Container = Depends(get_container)):
    spec = ProductSpec(
        id=payload.id,
        name=payload.name,
        brand=payload.brand,
        price=payload.price,
        description=payload.description,
        sizes=[SizeSpec(value=s.value, stock=s.stock) for s in payload.sizes],
        category=payload.category,
        images=payload.images,
        original_price=payload.original_price,
        featured=payload.featured,
    )
    return ProductOut.from_dto(AddProductHandler(container.unit_of_work()).handle(spec))


@router.put("/{product_id}", response_model=ProductOut, dependencies=[Depends(require_admin)])
def update_product(
    product_id: str,
    payload: ProductUpdate,
    container: Container = Depends(get_container),
):
    changes = {name: getattr(payload, name) for name in payload.model_fields_set}
    dto = UpdateProductHandler(container.unit_of_work()).handle(product_id, **changes)
    return ProductOut.from_dto(dto)


@router.delete("/{product_id}", status_code=204, dependencies=[Depends(require_admin)])
def delete_product(product_id: str, container: Container = Depends(get_container)):
    DeleteProductHandler(container.unit_of_work()).handle(product_id)
    return Response(status_code=204)
