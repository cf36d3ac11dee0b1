"""Cart engine: ordered line items with write-through persistence."""
import copy
import json
from contextlib import contextmanager
from decimal import Decimal
from typing import Any, Mapping, Optional

from storefront import config
from storefront.logging import get_logger, sanitize_string_for_logging
from storefront.money import to_float
from .models import LineItem, Product, SizeOption
from .storage import CartStorage, get_cart_storage

logger = get_logger(__name__)


def _to_quantity(value: Any) -> int:
    """Read a requested quantity, clamped to at least 1."""
    if isinstance(value, bool):
        return 1
    try:
        return max(1, int(value))
    except (TypeError, ValueError, OverflowError):
        return 1


class CartEngine:
    """
    Manages one cart stored in a durable key-value slot.

    Features:
    - Same product + size merges into a single line
    - Sized and unsized variants of a product never merge
    - Every mutation is written through before returning
    - Malformed snapshots start an empty cart instead of failing
    """

    def __init__(self, storage: CartStorage, key: Optional[str] = None):
        self._storage = storage
        self.key = key or config.CART_STORAGE_KEY
        self._items: list[LineItem] = self._restore()

    def _restore(self) -> list[LineItem]:
        """Load the persisted snapshot, or an empty cart."""
        try:
            raw = self._storage.read(self.key)
        except Exception as e:
            logger.warning(f"Cart storage unreadable, starting empty: {e}")
            return []

        if not raw:
            return []

        try:
            data = json.loads(raw)
            if not isinstance(data, list):
                raise TypeError(f"expected a list, got {type(data).__name__}")
            return [LineItem.from_dict(entry) for entry in data]
        except (
            json.JSONDecodeError, KeyError, TypeError, ValueError,
            AttributeError, OverflowError, RecursionError,
        ) as e:
            logger.warning(f"Corrupted cart snapshot under '{self.key}', starting empty: {e}")
            return []

    # ==================== DERIVED ====================

    @property
    def items(self) -> list[LineItem]:
        return list(self._items)

    @property
    def count(self) -> int:
        """Total number of units in the cart."""
        return sum(item.quantity for item in self._items)

    @property
    def total(self) -> Decimal:
        """Sum of line subtotals."""
        return sum((item.subtotal for item in self._items), Decimal("0"))

    def find(self, product_id: str, size_label: Optional[str] = None) -> Optional[int]:
        """Index of the line holding this product/size, if any."""
        key = (str(product_id), size_label or "")
        return next((i for i, item in enumerate(self._items) if item.key == key), None)

    def _in_bounds(self, index: Any) -> bool:
        return isinstance(index, int) and not isinstance(index, bool) and 0 <= index < len(self._items)

    # ==================== MUTATIONS ====================

    @contextmanager
    def _mutation(self):
        """Apply a change and persist it; put the previous lines back if the write fails."""
        previous = copy.deepcopy(self._items)
        try:
            yield
            self.persist()
        except Exception:
            self._items = previous
            raise

    def add(
        self,
        product: "Product | Mapping[str, Any]",
        size: "SizeOption | Mapping[str, Any] | None" = None,
    ) -> None:
        """
        Add one unit of a product (optionally a size variant).

        The unit price is the size price when a size is given, otherwise
        the product's base price. Prices are captured here and never
        refreshed for an existing line.
        """
        product = Product.from_data(product)
        size = SizeOption.from_data(size) if size is not None else None

        unit_price = size.price if size is not None else product.base_price
        size_label = size.label if size is not None else None

        with self._mutation():
            index = self.find(product.id, size_label)
            if index is not None:
                existing = self._items[index]
                existing.quantity += 1
                existing.recalculate()
            else:
                self._items.append(LineItem(
                    product_id=product.id,
                    name=product.name,
                    image_url=product.image_url,
                    unit_price=unit_price,
                    size_label=size_label,
                    quantity=1,
                ))

        logger.debug(
            f"Added {sanitize_string_for_logging(product.id)} "
            f"size={sanitize_string_for_logging(size_label)} to cart '{self.key}'"
        )

    def update_quantity(self, index: int, quantity: Any) -> None:
        """Set a line's quantity (minimum 1). Unknown index is a no-op."""
        if not self._in_bounds(index):
            return
        with self._mutation():
            item = self._items[index]
            item.quantity = _to_quantity(quantity)
            item.recalculate()

    def remove(self, index: int) -> None:
        """Remove the line at index if present; later lines shift left."""
        with self._mutation():
            if self._in_bounds(index):
                del self._items[index]

    def clear(self) -> None:
        with self._mutation():
            self._items = []

    # ==================== PERSISTENCE ====================

    def persist(self) -> None:
        """
        Write the whole sequence to the durable slot.

        Raises:
            CartStorageError: if the backend rejects the write
        """
        payload = json.dumps([item.to_dict() for item in self._items], ensure_ascii=False)
        self._storage.write(self.key, payload)

    def summary(self) -> dict:
        """JSON-ready view of the cart for API responses."""
        return {
            "is_empty": not self._items,
            "items": [item.to_dict() for item in self._items],
            "count": self.count,
            "total": to_float(self.total),
        }


def get_cart_engine(storage: Optional[CartStorage] = None) -> CartEngine:
    """Build a CartEngine over the configured (or given) storage."""
    return CartEngine(storage if storage is not None else get_cart_storage())
