from sqlmodel import SQLModel, Field, Relationship
from sqlalchemy import Column, JSON
from typing import List, Optional
from datetime import datetime


class Product(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(index=True)
    description: str
    category: str = Field(index=True)  # fan, air-conditioner
    brand: str

    images: List[str] = Field(default_factory=list, sa_column=Column(JSON))
    features: List[str] = Field(default_factory=list, sa_column=Column(JSON))
    specifications: dict = Field(default_factory=dict, sa_column=Column(JSON))

    rating: float = 0.0
    num_reviews: int = 0
    is_active: bool = Field(default=True)

    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    variants: List["ProductVariant"] = Relationship(
        back_populates="product",
        sa_relationship_kwargs={"cascade": "all, delete-orphan"},
    )

    @property
    def base_price(self) -> Optional[float]:
        if not self.variants:
            return None
        return min(v.price for v in self.variants)


class ProductVariant(SQLModel, table=True):
    __tablename__ = "product_variant"

    id: Optional[int] = Field(default=None, primary_key=True)
    product_id: int = Field(foreign_key="product.id", index=True)

    color_name: str
    color_code: str
    size: str
    price: float
    stock: int = 0
    sku: str

    product: Optional[Product] = Relationship(back_populates="variants")
