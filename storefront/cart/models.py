"""Cart models with Decimal-based pricing."""
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, ValidationError, ValidationInfo, field_validator

from storefront.money import to_decimal, to_price, multiply, to_float


class SizeOption(BaseModel):
    """Price variant offered by a product (e.g. 5 or 10 portions)."""
    model_config = ConfigDict(frozen=True, extra="ignore")

    label: str = ""
    price: Decimal = Decimal("0")

    @field_validator("label", mode="before")
    @classmethod
    def convert_label(cls, v):
        return "" if v is None else str(v)

    @field_validator("price", mode="before")
    @classmethod
    def convert_price(cls, v):
        return to_price(v)

    @classmethod
    def from_data(cls, data: "SizeOption | Mapping[str, Any]") -> "SizeOption":
        """Build from loose catalog data; never raises."""
        if isinstance(data, SizeOption):
            return data
        try:
            return cls.model_validate(dict(data))
        except (ValidationError, TypeError, ValueError):
            return cls()


_TRUE_STRINGS = {"true", "t", "yes", "y", "1", "on"}
_FALSE_STRINGS = {"false", "f", "no", "n", "0", "off", ""}

# Per-size price columns on the catalog row -> size label
SIZE_PRICE_FIELDS = (
    ("5p", "size_5p_price"),
    ("10p", "size_10p_price"),
)


class Product(BaseModel):
    """Catalog product. Read-only to the cart."""
    model_config = ConfigDict(extra="ignore")

    id: str = ""
    name: str = ""
    category_id: Optional[str] = None
    slug: Optional[str] = None
    description: Optional[str] = None
    image_url: Optional[str] = None
    base_price: Decimal = Decimal("0")
    has_size_options: bool = False
    size_5p_price: Optional[Decimal] = None
    size_10p_price: Optional[Decimal] = None
    display_order: Optional[int] = None
    active: bool = True

    @field_validator("id", "name", mode="before")
    @classmethod
    def convert_to_str(cls, v):
        return "" if v is None else str(v)

    @field_validator("category_id", "slug", "description", mode="before")
    @classmethod
    def convert_optional_str(cls, v):
        if isinstance(v, str):
            return v
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return None

    @field_validator("image_url", mode="before")
    @classmethod
    def convert_image_url(cls, v):
        return v if isinstance(v, str) else None

    @field_validator("display_order", mode="before")
    @classmethod
    def convert_display_order(cls, v):
        if v is None or isinstance(v, bool):
            return None
        try:
            return int(v)
        except (TypeError, ValueError, OverflowError):
            return None

    @field_validator("has_size_options", "active", mode="before")
    @classmethod
    def convert_flag(cls, v, info: ValidationInfo):
        if isinstance(v, bool):
            return v
        if isinstance(v, (int, float)):
            return bool(v)
        if isinstance(v, str):
            value = v.strip().lower()
            if value in _TRUE_STRINGS:
                return True
            if value in _FALSE_STRINGS:
                return False
        return cls.model_fields[info.field_name].default

    @field_validator("base_price", mode="before")
    @classmethod
    def convert_base_price(cls, v):
        return to_price(v)

    @field_validator("size_5p_price", "size_10p_price", mode="before")
    @classmethod
    def convert_size_price(cls, v):
        return None if v is None else to_price(v)

    @property
    def size_options(self) -> list[SizeOption]:
        """Size variants offered by this product, in catalog order."""
        if not self.has_size_options:
            return []
        options = []
        for label, field in SIZE_PRICE_FIELDS:
            price = getattr(self, field)
            if price is not None:
                options.append(SizeOption(label=label, price=price))
        return options

    def find_size(self, label: str) -> Optional[SizeOption]:
        return next((s for s in self.size_options if s.label == label), None)

    @classmethod
    def from_data(cls, data: "Product | Mapping[str, Any]") -> "Product":
        """
        Build a Product from loose catalog data without raising.

        Every field validator degrades a bad value on its own, so a
        malformed column never costs the product its price. Data that is
        not a mapping at all yields an empty product.
        """
        if isinstance(data, Product):
            return data
        try:
            return cls.model_validate(dict(data))
        except (ValidationError, TypeError, ValueError):
            return cls()


@dataclass
class LineItem:
    """One cart row: a product/size combination and its quantity."""
    product_id: str
    name: str
    unit_price: Decimal
    quantity: int = 1
    image_url: Optional[str] = None
    size_label: Optional[str] = None
    subtotal: Decimal = Decimal("0")

    def __post_init__(self):
        self.unit_price = to_price(self.unit_price)
        self.quantity = max(1, int(self.quantity))
        self.recalculate()

    @property
    def key(self) -> tuple[str, str]:
        """Uniqueness key; "no size" is the empty label."""
        return self.product_id, self.size_label or ""

    def recalculate(self) -> None:
        self.subtotal = multiply(self.unit_price, self.quantity)

    def to_dict(self) -> dict:
        """Convert to the persisted snapshot layout."""
        return {
            "productId": self.product_id,
            "name": self.name,
            "imageUrl": self.image_url,
            "unitPrice": to_float(self.unit_price),
            "sizeLabel": self.size_label,
            "quantity": self.quantity,
            "subtotal": to_float(self.subtotal),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "LineItem":
        """
        Create from a snapshot entry.

        Older snapshots spell the image field ``image_url``. The subtotal is
        recomputed rather than trusted.

        Raises:
            KeyError, TypeError, ValueError: on structurally invalid entries
        """
        image_url = data.get("imageUrl", data.get("image_url"))
        size_label = data.get("sizeLabel")
        return cls(
            product_id=str(data["productId"]),
            name=str(data.get("name") or ""),
            image_url=str(image_url) if image_url is not None else None,
            unit_price=to_decimal(data["unitPrice"]),
            size_label=str(size_label) if size_label is not None else None,
            quantity=int(data["quantity"]),
        )
