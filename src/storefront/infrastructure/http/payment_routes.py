"""Checkout preference creation for the hosted payment page."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from storefront.application.create_payment_preference import CreatePaymentPreferenceHandler
from storefront.infrastructure.bootstrap import Container
from storefront.infrastructure.http.dependencies import get_container
from storefront.infrastructure.http.schemas import PaymentPreferenceIn, PaymentPreferenceOut

router = APIRouter(prefix="/api/payments", tags=["payments"])


@router.post("/preference", response_model=PaymentPreferenceOut, status_code=201)
def create_preference(
    payload: PaymentPreferenceIn,
    container: Container = Depends(get_container),
):
    handler = CreatePaymentPreferenceHandler(
        container.unit_of_work(), container.payment_gateway()
    )
    dto = handler.handle(
        order_id=payload.order_id,
        items=[item.to_spec() for item in payload.items],
        customer_name=payload.customer.full_name,
        customer_email=payload.customer.email,
    )
    return PaymentPreferenceOut.from_dto(dto)
