from pydantic import BaseModel, Field
from typing import Dict, List, Optional
from enum import Enum


class ProductCategory(str, Enum):
    fan = "fan"
    ac = "air-conditioner"


class VariantColor(BaseModel):
    name: str = Field(..., min_length=1)
    code: str = Field(..., pattern=r"^#[0-9A-Fa-f]{3,6}$")


class VariantCreate(BaseModel):
    color: VariantColor
    size: str = Field(..., min_length=1)
    price: float = Field(..., ge=0)
    stock: int = Field(default=0, ge=0)
    sku: str = Field(..., min_length=1)


class ProductCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: str
    category: ProductCategory
    brand: str = Field(..., min_length=1)
    images: List[str] = Field(..., min_length=1)
    variants: List[VariantCreate] = Field(..., min_length=1)
    features: List[str] = []
    specifications: Dict[str, str] = {}


class ProductUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    category: Optional[ProductCategory] = None
    brand: Optional[str] = None
    images: Optional[List[str]] = None
    # matched on sku; unknown skus are added
    variants: Optional[List[VariantCreate]] = None
    features: Optional[List[str]] = None
    specifications: Optional[Dict[str, str]] = None
    is_active: Optional[bool] = None
