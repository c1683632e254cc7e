"""Order endpoints. Placing an order is public; reading orders needs admin."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from storefront.application.dto import CustomerSpec, PlaceOrderCommand
from storefront.application.place_order import PlaceOrderHandler
from storefront.application.show_order import ListOrdersHandler, ShowOrderHandler
from storefront.infrastructure.bootstrap import Container
from storefront.infrastructure.http.dependencies import get_container, require_admin
from storefront.infrastructure.http.schemas import OrderIn, OrderOut

router = APIRouter(prefix="/api/orders", tags=["orders"])


@router.post("", response_model=OrderOut, status_code=201)
def place_order(payload: OrderIn, container: Container = Depends(get_container)):
    customer = payload.customer
    command = PlaceOrderCommand(
        id=payload.id,
        items=[item.to_spec() for item in payload.items],
        customer=CustomerSpec(
            full_name=customer.full_name,
            email=customer.email,
            phone=customer.phone,
            id=customer.id,
            line=customer.line,
            station=customer.station,
            address=customer.address,
        ),
        total=payload.total,
        payment_method=payload.payment_method,
        status=payload.status,
        notes=payload.notes,
    )
    handler = PlaceOrderHandler(
        container.unit_of_work(),
        container.notification_publisher(),
        stock_policy=container.settings.stock_policy_enum,
        accepted_methods=container.settings.accepted_payment_methods,
    )
    return OrderOut.from_dto(handler.handle(command))


@router.get("", response_model=list[OrderOut], dependencies=[Depends(require_admin)])
def list_orders(container: Container = Depends(get_container)):
    return [OrderOut.from_dto(dto) for dto in ListOrdersHandler(container.unit_of_work()).handle()]


@router.get("/{order_id}", response_model=OrderOut, dependencies=[Depends(require_admin)])
def get_order(order_id: str, container: Container = Depends(get_container)):
    return OrderOut.from_dto(ShowOrderHandler(container.unit_of_work()).handle(order_id))
