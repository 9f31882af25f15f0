from sqlmodel import SQLModel, Field, Relationship
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from app.models.order import Order


class OrderItem(SQLModel, table=True):
    __tablename__ = "order_item"

    id: Optional[int] = Field(default=None, primary_key=True)
    order_id: int = Field(foreign_key="order.id", index=True)
    product_id: int = Field(foreign_key="product.id")
    variant_id: int = Field(foreign_key="product_variant.id")

    # snapshot taken at checkout
    name: str
    color_name: Optional[str] = None
    color_code: Optional[str] = None
    size: Optional[str] = None
    price: float
    quantity: int
    image: Optional[str] = None

    order: Optional["Order"] = Relationship(back_populates="items")
