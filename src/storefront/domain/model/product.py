"""Product aggregate.

Products live independently of orders. They have their own lifecycle:
prices change, products are added and removed from the catalog.  The
per-size stock list is owned by the product and is the only thing order
placement mutates.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from storefront.domain import validation
from storefront.domain.exceptions import ValidationError
from storefront.domain.model.value_objects import Money


class StockPolicy(Enum):
    """What to do when an order asks for more units than are in stock."""

    CLAMP = "clamp"
    REJECT = "reject"


@dataclass
class SizeStock:
    """Stock counter for one size label of a product."""

    value: str
    stock: int

    def __post_init__(self) -> None:
        if not isinstance(self.value, str) or not self.value.strip():
            raise ValidationError("Size label is required")
        self.value = self.value.strip()
        if not isinstance(self.stock, int) or isinstance(self.stock, bool) or self.stock < 0:
            raise ValidationError(f"Stock for size {self.value} must be a non-negative integer")


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Product:
    """A product in the catalog.

    This is an aggregate root. Use ``Product.create()`` for new products;
    the plain constructor is what repositories use to reconstitute rows.
    """

    id: str
    name: str
    brand: str
    price: Money
    description: str
    sizes: list[SizeStock]
    category: str
    images: list[str] = field(default_factory=list)
    original_price: Money | None = None
    featured: bool = False
    created_at: datetime = field(default_factory=_now)
    updated_at: datetime = field(default_factory=_now)

    # --- Factory ---------------------------------------------------------------

    @staticmethod
    def create(
        id: str,
        name: str,
        brand: str,
        price: Money,
        description: str,
        sizes: list[SizeStock],
        category: str,
        images: list[str] | None = None,
        original_price: Money | None = None,
        featured: bool = False,
    ) -> Product:
        """Create a new product, enforcing all catalog rules."""
        product = Product(
            id=validation.required_text(id, "id"),
            name=validation.person_name(name, "name"),
            brand=validation.required_text(brand, "brand"),
            price=price,
            description=validation.description(description),
            sizes=Product._checked_sizes(sizes),
            category=validation.slug(category),
            images=[validation.image_url(url) for url in images or []],
            original_price=original_price,
            featured=bool(featured),
        )
        if price.is_zero:
            raise ValidationError("Product price must be greater than zero")
        return product

    # --- Catalog management ----------------------------------------------------

    def update_price(self, new_price: Money) -> None:
        """Change the product price.

        This does NOT affect any existing orders because order lines
        capture the price at purchase time.
        """
        if new_price.amount <= 0:
            raise ValidationError("Product price must be greater than zero")
        self.price = new_price
        self.touch()

    def update(self, **changes) -> None:
        """Apply a partial update, validating every supplied field."""
        if "name" in changes:
            self.name = validation.person_name(changes["name"], "name")
        if "brand" in changes:
            self.brand = validation.required_text(changes["brand"], "brand")
        if "price" in changes:
            self.update_price(changes["price"])
        if "original_price" in changes:
            self.original_price = changes["original_price"]
        if "description" in changes:
            self.description = validation.description(changes["description"])
        if "sizes" in changes:
            self.sizes = self._checked_sizes(changes["sizes"])
        if "category" in changes:
            self.category = validation.slug(changes["category"])
        if "images" in changes:
            self.images = [validation.image_url(url) for url in changes["images"] or []]
        if "featured" in changes:
            self.featured = bool(changes["featured"])
        self.touch()

    def touch(self) -> None:
        self.updated_at = _now()

    # --- Stock -----------------------------------------------------------------

    def find_size(self, label: str) -> SizeStock | None:
        for size in self.sizes:
            if size.value == label:
                return size
        return None

    def set_stock(self, label: str, stock: int) -> None:
        size = self.find_size(label)
        if size is None:
            self.sizes.append(SizeStock(value=label, stock=stock))
        else:
            size.stock = SizeStock(value=label, stock=stock).stock
        self.touch()

    def decrement_stock(self, label: str, quantity: int, policy: StockPolicy) -> int:
        """Take *quantity* units of *label* out of stock; return the new count.

        Under ``CLAMP`` an over-sized request leaves the size at zero and
        succeeds. Under ``REJECT`` it raises ValidationError.
        """
        size = self.find_size(label)
        if size is None:
            raise ValidationError(
                f"Size {label} not available for product {self.id}"
            )
        if quantity > size.stock and policy is StockPolicy.REJECT:
            raise ValidationError(
                f"Insufficient stock for {self.name} size {label} "
                f"(need {quantity}, have {size.stock})"
            )
        size.stock = max(0, size.stock - quantity)
        self.touch()
        return size.stock

    @property
    def total_stock(self) -> int:
        return sum(size.stock for size in self.sizes)

    # --- Internal helpers ------------------------------------------------------

    @staticmethod
    def _checked_sizes(sizes: list[SizeStock]) -> list[SizeStock]:
        if not sizes:
            raise ValidationError("Product must have at least one size")
        labels = [size.value for size in sizes]
        if len(set(labels)) != len(labels):
            raise ValidationError("Size labels must be unique")
        return list(sizes)
