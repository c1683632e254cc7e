"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the HTTP/CLI adapters and the application layer
without exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal

from storefront.domain.model.category import Category
from storefront.domain.model.order import Order, OrderLine
from storefront.domain.model.product import Product
from storefront.domain.model.user import User


# --- Inputs ---------------------------------------------------------------------


@dataclass(frozen=True)
class OrderItemSpec:
    """Input: what the customer asked for. Any client price is ignored."""

    product_id: str
    quantity: int
    size: str


@dataclass(frozen=True)
class CustomerSpec:
    full_name: str
    email: str
    phone: str | None = None
    id: str | None = None
    line: str | None = None
    station: str | None = None
    address: str | None = None


@dataclass(frozen=True)
class PlaceOrderCommand:
    id: str
    items: list[OrderItemSpec]
    customer: CustomerSpec
    total: Decimal | str | int | float
    payment_method: str
    status: str | None = None
    notes: str | None = None


@dataclass(frozen=True)
class SizeSpec:
    value: str
    stock: int


@dataclass(frozen=True)
class ProductSpec:
    id: str
    name: str
    brand: str
    price: Decimal | str
    description: str
    sizes: list[SizeSpec]
    category: str
    images: list[str] = field(default_factory=list)
    original_price: Decimal | str | None = None
    featured: bool = False


# --- Outputs --------------------------------------------------------------------


@dataclass(frozen=True)
class OrderLineDTO:
    id: int | None
    product_id: str
    product_name: str | None
    brand: str | None
    quantity: int
    size: str
    price_at_purchase: Decimal
    line_total: Decimal

    @staticmethod
    def from_domain(line: OrderLine) -> OrderLineDTO:
        return OrderLineDTO(
            id=line.id,
            product_id=line.product_id,
            product_name=line.product_name,
            brand=line.product_brand,
            quantity=line.quantity.value,
            size=line.size,
            price_at_purchase=line.price_at_purchase.amount,
            line_total=line.line_total.amount,
        )


@dataclass(frozen=True)
class OrderDTO:
    id: str
    customer_id: str | None
    customer_name: str
    customer_email: str
    customer_phone: str | None
    line: str | None
    station: str | None
    address: str | None
    total: Decimal
    payment_method: str
    status: str
    notes: str
    created_at: datetime
    items: list[OrderLineDTO]

    @staticmethod
    def from_domain(order: Order) -> OrderDTO:
        return OrderDTO(
            id=order.id,
            customer_id=order.customer.id,
            customer_name=order.customer.full_name,
            customer_email=order.customer.email,
            customer_phone=order.customer.phone,
            line=order.delivery.line,
            station=order.delivery.station,
            address=order.delivery.address,
            total=order.total.amount,
            payment_method=order.payment_method.value,
            status=order.payment_status.value,
            notes=order.notes,
            created_at=order.created_at,
            items=[OrderLineDTO.from_domain(line) for line in order.lines],
        )


@dataclass(frozen=True)
class SizeDTO:
    value: str
    stock: int


@dataclass(frozen=True)
class ProductDTO:
    id: str
    name: str
    brand: str
    price: Decimal
    original_price: Decimal | None
    images: list[str]
    description: str
    sizes: list[SizeDTO]
    category: str
    featured: bool
    created_at: datetime
    updated_at: datetime

    @staticmethod
    def from_domain(product: Product) -> ProductDTO:
        return ProductDTO(
            id=product.id,
            name=product.name,
            brand=product.brand,
            price=product.price.amount,
            original_price=(
                product.original_price.amount if product.original_price else None
            ),
            images=list(product.images),
            description=product.description,
            sizes=[SizeDTO(value=s.value, stock=s.stock) for s in product.sizes],
            category=product.category,
            featured=product.featured,
            created_at=product.created_at,
            updated_at=product.updated_at,
        )


@dataclass(frozen=True)
class CategoryDTO:
    id: int
    name: str
    slug: str

    @staticmethod
    def from_domain(category: Category) -> CategoryDTO:
        return CategoryDTO(id=category.id, name=category.name, slug=category.slug)  # type: ignore[arg-type]


@dataclass(frozen=True)
class UserDTO:
    id: int
    name: str
    email: str
    role: str

    @staticmethod
    def from_domain(user: User) -> UserDTO:
        return UserDTO(id=user.id, name=user.name, email=user.email, role=user.role.value)  # type: ignore[arg-type]


@dataclass(frozen=True)
class LoginResultDTO:
    token: str
    user: UserDTO


@dataclass(frozen=True)
class PaymentPreferenceDTO:
    preference_id: str
    init_point: str
