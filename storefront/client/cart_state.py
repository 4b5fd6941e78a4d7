# storefront/client/cart_state.py
"""
Shopper-side cart state.

A single CartState object owns the list of lines. Commands mutate it and
persist it through CartStorage after every change; queries never persist.
The saved file plays the role of browser local storage: it survives a
restart, not a deleted file or another machine.
"""

import logging
from pathlib import Path

from pydantic import TypeAdapter, ValidationError
from sqlmodel import SQLModel, Field

from storefront.services.pricing import final_unit_price

logger = logging.getLogger(__name__)


class CartLine(SQLModel):
    """
    One product in the shopper's cart with the catalog data shown to them.
    """

    product_id: int
    name: str = ""
    price: float
    discount: float = Field(default=0.0, ge=0, lt=1)
    quantity: int = Field(gt=0)

    @property
    def final_price(self) -> float:
        return final_unit_price(self.price, self.discount)


_lines_adapter = TypeAdapter(list[CartLine])


class CartStorage:
    """
    JSON file persistence for cart lines.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def load(self) -> list[CartLine]:
        if not self.path.exists():
            return []
        try:
            return _lines_adapter.validate_json(self.path.read_bytes())
        except (ValidationError, ValueError) as e:
            logger.warning(f"Failed to parse saved cart {self.path}: {e}")
            return []

    def save(self, lines: list[CartLine]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_bytes(_lines_adapter.dump_json(lines))


class MemoryStorage:
    """
    Non-persistent storage; the cart lives as long as the process.
    """

    def __init__(self, lines: list[CartLine] | None = None):
        self._lines = [line.model_copy() for line in lines or []]

    def load(self) -> list[CartLine]:
        return [line.model_copy() for line in self._lines]

    def save(self, lines: list[CartLine]) -> None:
        self._lines = [line.model_copy() for line in lines]


class CartState:
    """
    Controller for the shopper's cart.

    Commands: add, remove, set_quantity, clear.
    Queries:  lines, total, count.
    """

    def __init__(self, storage: CartStorage | MemoryStorage | None = None):
        self.storage = storage or MemoryStorage()
        self._lines: list[CartLine] = self.storage.load()

    # ---- queries ----

    @property
    def lines(self) -> list[CartLine]:
        return [line.model_copy() for line in self._lines]

    @property
    def total(self) -> float:
        return sum((line.final_price * line.quantity for line in self._lines), 0.0)

    @property
    def count(self) -> int:
        return sum(line.quantity for line in self._lines)

    def is_empty(self) -> bool:
        return not self._lines

    # ---- commands ----

    def add(
        self,
        product_id: int,
        price: float,
        quantity: int = 1,
        name: str = "",
        discount: float = 0.0,
    ) -> None:
        """
        Add a product; an existing line has its quantity incremented.
        Non-positive quantities are ignored.
        """
        if quantity <= 0:
            logger.warning(f"Cannot add product {product_id} with quantity {quantity}")
            return

        for line in self._lines:
            if line.product_id == product_id:
                line.quantity += quantity
                break
        else:
            self._lines.append(
                CartLine(
                    product_id=product_id,
                    name=name,
                    price=price,
                    discount=discount,
                    quantity=quantity,
                )
            )
        self._persist()

    def remove(self, product_id: int) -> None:
        self._lines = [line for line in self._lines if line.product_id != product_id]
        self._persist()

    def set_quantity(self, product_id: int, quantity: int) -> None:
        """
        Set a line's quantity; zero or less removes the line.
        """
        if quantity <= 0:
            self.remove(product_id)
            return

        for line in self._lines:
            if line.product_id == product_id:
                line.quantity = quantity
                self._persist()
                return

    def clear(self) -> None:
        self._lines = []
        self._persist()

    def _persist(self) -> None:
        self.storage.save(self._lines)
