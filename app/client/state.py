"""
Client-side application state: the signed-in identity and the shopping cart.

The state is a plain object handed to whatever needs it. It only touches
disk in ``ClientState.load`` and ``ClientState.save``.
"""

from pathlib import Path
from typing import List, Optional
import logging

from pydantic import BaseModel, Field, ValidationError

logger = logging.getLogger(__name__)


class AuthState(BaseModel):
    token: Optional[str] = None
    user: Optional[dict] = None

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token and self.user)

    @property
    def role(self) -> Optional[str]:
        return self.user.get("role") if self.user else None


class CartLine(BaseModel):
    product_id: int
    variant_id: int
    name: str
    price: float
    quantity: int
    color: Optional[dict] = None
    size: Optional[str] = None
    image: Optional[str] = None


class Cart(BaseModel):
    items: List[CartLine] = Field(default_factory=list)

    @property
    def total_items(self) -> int:
        return sum(line.quantity for line in self.items)

    @property
    def total_price(self) -> float:
        return round(sum(line.price * line.quantity for line in self.items), 2)

    def _find(self, product_id: int, variant_id: int) -> Optional[CartLine]:
        for line in self.items:
            if line.product_id == product_id and line.variant_id == variant_id:
                return line
        return None

    def add(self, product: dict, variant: dict, quantity: int = 1):
        """Add a product variant, merging with an existing line."""
        if quantity <= 0:
            raise ValueError("Quantity must be at least 1")

        line = self._find(product["id"], variant["id"])
        if line:
            line.quantity += quantity
            return

        images = product.get("images") or []
        self.items.append(
            CartLine(
                product_id=product["id"],
                variant_id=variant["id"],
                name=product["name"],
                price=variant["price"],
                quantity=quantity,
                color=variant.get("color"),
                size=variant.get("size"),
                image=images[0] if images else None,
            )
        )

    def update_quantity(self, product_id: int, variant_id: int, quantity: int):
        if quantity <= 0:
            self.remove(product_id, variant_id)
            return

        line = self._find(product_id, variant_id)
        if line:
            line.quantity = quantity

    def remove(self, product_id: int, variant_id: int):
        self.items = [
            line for line in self.items
            if not (line.product_id == product_id and line.variant_id == variant_id)
        ]

    def clear(self):
        self.items = []

    def to_order_items(self) -> List[dict]:
        return [
            {"product": line.product_id, "variant": line.variant_id, "quantity": line.quantity}
            for line in self.items
        ]


class ClientState(BaseModel):
    auth: AuthState = Field(default_factory=AuthState)
    cart: Cart = Field(default_factory=Cart)

    def sign_in(self, token: str, user: dict):
        self.auth = AuthState(token=token, user=user)

    def sign_out(self):
        self.auth = AuthState()
        self.cart.clear()

    # -------- SERIALIZATION BOUNDARY --------

    @classmethod
    def load(cls, path: Path | str) -> "ClientState":
        path = Path(path)
        if not path.exists():
            return cls()

        try:
            return cls.model_validate_json(path.read_text(encoding="utf-8"))
        except (ValidationError, UnicodeDecodeError, OSError) as e:
            logger.warning(f"Discarding unreadable client state at {path}: {e}")
            return cls()

    def save(self, path: Path | str):
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.model_dump_json(indent=2), encoding="utf-8")
