"""MercadoPago-backed PaymentGateway (checkout preferences)."""

from __future__ import annotations

import logging

import mercadopago

from storefront.application.ports import PaymentGateway, PaymentItem
from storefront.domain.exceptions import PaymentGatewayError

logger = logging.getLogger(__name__)


class MercadoPagoGateway(PaymentGateway):

    def __init__(
        self,
        access_token: str,
        success_url: str = "",
        failure_url: str = "",
        pending_url: str = "",
        sdk: mercadopago.SDK | None = None,
    ) -> None:
        self._sdk = sdk
        if self._sdk is None and access_token:
            self._sdk = mercadopago.SDK(access_token)
        self._back_urls = {
            key: url
            for key, url in (
                ("success", success_url),
                ("failure", failure_url),
                ("pending", pending_url),
            )
            if url
        }

    def create_preference(
        self,
        order_id: str,
        items: list[PaymentItem],
        payer_name: str,
        payer_email: str,
    ) -> tuple[str, str]:
        if self._sdk is None:
            raise PaymentGatewayError("Payment gateway is not configured")

        data = {
            "items": [
                {
                    "id": item.product_id,
                    "title": item.title,
                    "quantity": item.quantity,
                    "unit_price": float(item.unit_price),
                    "currency_id": item.currency,
                }
                for item in items
            ],
            "payer": {"name": payer_name, "email": payer_email},
            "external_reference": order_id,
        }
        if self._back_urls:
            data["back_urls"] = self._back_urls
            if "success" in self._back_urls:
                data["auto_return"] = "approved"

        try:
            result = self._sdk.preference().create(data)
        except OSError as exc:
            logger.error("MercadoPago unreachable for order %s: %s", order_id, exc)
            raise PaymentGatewayError("Payment gateway is unavailable") from exc

        status = result.get("status")
        body = result.get("response") or {}
        if status not in (200, 201) or "id" not in body:
            logger.error(
                "MercadoPago rejected preference for order %s: %s %s",
                order_id, status, body.get("message", body),
            )
            raise PaymentGatewayError("Payment gateway rejected the request")

        return str(body["id"]), str(body.get("init_point", ""))
