"""Request/response schemas for the HTTP API.

JSON field names are camelCase on the wire (``productId``,
``paymentMethod``); Python code uses the snake_case attribute names.
Request bodies are checked here first; the domain factories check again
for callers that do not come through HTTP.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Annotated, Optional

from pydantic import AfterValidator, BaseModel, ConfigDict, EmailStr, Field, PlainSerializer
from pydantic.alias_generators import to_camel

from storefront.application.dto import (
    CategoryDTO,
    OrderDTO,
    OrderItemSpec,
    PaymentPreferenceDTO,
    ProductDTO,
    UserDTO,
)
from storefront.domain.model.value_objects import MAX_LINE_QUANTITY, MAX_PRICE

# Amounts travel as JSON numbers, not strings.
Amount = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _not_blank(value: str) -> str:
    if not value.strip():
        raise ValueError("must not be empty")
    return value.strip()


NonBlank = Annotated[str, AfterValidator(_not_blank)]


# --- Orders ---------------------------------------------------------------------


class OrderItemIn(CamelModel):
    """A requested line. Any price sent by the client is ignored."""

    product_id: NonBlank
    quantity: int = Field(gt=0, le=MAX_LINE_QUANTITY)
    size: NonBlank

    def to_spec(self) -> OrderItemSpec:
        return OrderItemSpec(product_id=self.product_id, quantity=self.quantity, size=self.size)


class CustomerIn(CamelModel):
    id: Optional[str] = None
    full_name: NonBlank
    email: EmailStr
    phone: Optional[str] = None
    line: Optional[str] = None
    station: Optional[str] = None
    address: Optional[str] = None


class OrderIn(CamelModel):
    id: NonBlank
    items: list[OrderItemIn] = Field(min_length=1)
    customer: CustomerIn
    total: Decimal = Field(gt=0)
    payment_method: str
    status: Optional[str] = None
    notes: Optional[str] = None


class CustomerOut(CamelModel):
    id: Optional[str] = None
    full_name: str
    email: str
    phone: Optional[str] = None
    line: Optional[str] = None
    station: Optional[str] = None
    address: Optional[str] = None


class OrderLineOut(CamelModel):
    id: Optional[int] = None
    product_id: str
    name: Optional[str] = None
    brand: Optional[str] = None
    quantity: int
    size: str
    price_at_purchase: Amount


class OrderOut(CamelModel):
    id: str
    customer: CustomerOut
    total: Amount
    payment_method: str
    status: str
    notes: str
    created_at: datetime
    items: list[OrderLineOut]

    @staticmethod
    def from_dto(dto: OrderDTO) -> OrderOut:
        return OrderOut(
            id=dto.id,
            customer=CustomerOut(
                id=dto.customer_id,
                full_name=dto.customer_name,
                email=dto.customer_email,
                phone=dto.customer_phone,
                line=dto.line,
                station=dto.station,
                address=dto.address,
            ),
            total=dto.total,
            payment_method=dto.payment_method,
            status=dto.status,
            notes=dto.notes,
            created_at=dto.created_at,
            items=[
                OrderLineOut(
                    id=item.id,
                    product_id=item.product_id,
                    name=item.product_name,
                    brand=item.brand,
                    quantity=item.quantity,
                    size=item.size,
                    price_at_purchase=item.price_at_purchase,
                )
                for item in dto.items
            ],
        )


# --- Products -------------------------------------------------------------------


class SizeIn(CamelModel):
    value: NonBlank
    stock: int = Field(ge=0)


class ProductIn(CamelModel):
    id: str
    name: str
    brand: str
    price: Decimal = Field(gt=0, le=MAX_PRICE)
    original_price: Optional[Decimal] = Field(default=None, gt=0, le=MAX_PRICE)
    images: list[str] = Field(default_factory=list)
    description: str
    sizes: list[SizeIn] = Field(min_length=1)
    category: str
    featured: bool = False


class ProductUpdate(CamelModel):
    name: Optional[str] = None
    brand: Optional[str] = None
    price: Optional[Decimal] = Field(default=None, gt=0, le=MAX_PRICE)
    original_price: Optional[Decimal] = Field(default=None, gt=0, le=MAX_PRICE)
    images: Optional[list[str]] = None
    description: Optional[str] = None
    sizes: Optional[list[SizeIn]] = Field(default=None, min_length=1)
    category: Optional[str] = None
    featured: Optional[bool] = None


class SizeOut(CamelModel):
    value: str
    stock: int


class ProductOut(CamelModel):
    id: str
    name: str
    brand: str
    price: Amount
    original_price: Optional[Amount] = None
    images: list[str]
    description: str
    sizes: list[SizeOut]
    category: str
    featured: bool
    created_at: datetime
    updated_at: datetime

    @staticmethod
    def from_dto(dto: ProductDTO) -> ProductOut:
        return ProductOut(
            id=dto.id,
            name=dto.name,
            brand=dto.brand,
            price=dto.price,
            original_price=dto.original_price,
            images=dto.images,
            description=dto.description,
            sizes=[SizeOut(value=s.value, stock=s.stock) for s in dto.sizes],
            category=dto.category,
            featured=dto.featured,
            created_at=dto.created_at,
            updated_at=dto.updated_at,
        )


# --- Categories -----------------------------------------------------------------


class CategoryIn(CamelModel):
    name: str
    slug: str


class CategoryUpdate(CamelModel):
    name: Optional[str] = None
    slug: Optional[str] = None


class CategoryOut(CamelModel):
    id: int
    name: str
    slug: str

    @staticmethod
    def from_dto(dto: CategoryDTO) -> CategoryOut:
        return CategoryOut(id=dto.id, name=dto.name, slug=dto.slug)


# --- Auth -----------------------------------------------------------------------


class LoginIn(CamelModel):
    email: EmailStr
    password: str = Field(min_length=6, max_length=128)


class UserOut(CamelModel):
    id: int
    name: str
    email: str
    role: str

    @staticmethod
    def from_dto(dto: UserDTO) -> UserOut:
        return UserOut(id=dto.id, name=dto.name, email=dto.email, role=dto.role)


class LoginOut(CamelModel):
    token: str
    user: UserOut


# --- Payments -------------------------------------------------------------------


class PaymentPreferenceIn(CamelModel):
    order_id: str
    items: list[OrderItemIn] = Field(min_length=1)
    customer: CustomerIn


class PaymentPreferenceOut(CamelModel):
    preference_id: str
    init_point: str

    @staticmethod
    def from_dto(dto: PaymentPreferenceDTO) -> PaymentPreferenceOut:
        return PaymentPreferenceOut(preference_id=dto.preference_id, init_point=dto.init_point)
