from datetime import datetime
import logging

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlmodel import Session, or_, select
from app.constants.roles import Capability
from app.database import get_session
from app.dependencies.capabilities import require_capability
from app.models.product import Product, ProductVariant
from app.schemas.product_schemas import ProductCategory, ProductCreate, ProductUpdate, VariantCreate
from app.utils.pagination import paginate
from app.utils.responses import create_response
from app.utils.serializers import format_product

logger = logging.getLogger(__name__)

public_router = APIRouter()
router = APIRouter(dependencies=[Depends(require_capability(Capability.products_manage))])


def _get_product_or_404(session: Session, product_id: int, active_only: bool = True) -> Product:
    product = session.get(Product, product_id)
    if not product or (active_only and not product.is_active):
        raise HTTPException(404, "Product not found")
    return product


def _variant_from_schema(data: VariantCreate) -> ProductVariant:
    return ProductVariant(
        color_name=data.color.name,
        color_code=data.color.code,
        size=data.size,
        price=data.price,
        stock=data.stock,
        sku=data.sku,
    )


# -------- PUBLIC CATALOG --------

@public_router.get("")
def list_products(
    page: int = 1,
    limit: int | None = None,
    category: ProductCategory | None = None,
    min_price: float | None = Query(None, alias="minPrice"),
    max_price: float | None = Query(None, alias="maxPrice"),
    q: str | None = None,
    session: Session = Depends(get_session),
):
    query = select(Product).where(Product.is_active == True)  # noqa: E712

    if category:
        query = query.where(Product.category == category.value)

    if min_price is not None or max_price is not None:
        variants = select(ProductVariant.product_id)
        if min_price is not None:
            variants = variants.where(ProductVariant.price >= min_price)
        if max_price is not None:
            variants = variants.where(ProductVariant.price <= max_price)
        query = query.where(Product.id.in_(variants))

    if q:
        query = query.where(
            or_(
                Product.name.ilike(f"%{q}%"),
                Product.description.ilike(f"%{q}%"),
                Product.brand.ilike(f"%{q}%"),
            )
        )

    products, meta = paginate(
        session=session,
        query=query.order_by(Product.created_at.desc(), Product.id.desc()),
        page=page,
        limit=limit,
    )

    return create_response(
        True,
        "Products retrieved successfully",
        [format_product(p) for p in products],
        meta,
    )


@public_router.get("/{product_id}")
def get_product(product_id: int, session: Session = Depends(get_session)):
    product = _get_product_or_404(session, product_id)
    return create_response(True, "Product retrieved successfully", format_product(product))


# -------- ADMIN CATALOG --------

@router.post("", status_code=201)
def create_product(payload: ProductCreate, session: Session = Depends(get_session)):
    product = Product(
        name=payload.name,
        description=payload.description,
        category=payload.category.value,
        brand=payload.brand,
        images=payload.images,
        features=payload.features,
        specifications=payload.specifications,
        variants=[_variant_from_schema(v) for v in payload.variants],
    )

    session.add(product)
    session.commit()
    session.refresh(product)

    logger.info(f"Product {product.id} created with {len(product.variants)} variants")
    return create_response(True, "Product created successfully", format_product(product))


@router.patch("/{product_id}")
@router.put("/{product_id}")
def update_product(product_id: int, payload: ProductUpdate, session: Session = Depends(get_session)):
    product = _get_product_or_404(session, product_id, active_only=False)

    data = payload.model_dump(exclude_unset=True, exclude_none=True, exclude={"variants", "category"})
    for key, value in data.items():
        setattr(product, key, value)

    if payload.category is not None:
        product.category = payload.category.value

    if payload.variants is not None:
        by_sku = {v.sku: v for v in product.variants}
        for incoming in payload.variants:
            variant = by_sku.get(incoming.sku)
            if variant is None:
                product.variants.append(_variant_from_schema(incoming))
                continue
            variant.color_name = incoming.color.name
            variant.color_code = incoming.color.code
            variant.size = incoming.size
            variant.price = incoming.price
            variant.stock = incoming.stock

    product.updated_at = datetime.utcnow()
    session.add(product)
    session.commit()
    session.refresh(product)

    return create_response(True, "Product updated successfully", format_product(product))


@router.delete("/{product_id}")
def delete_product(product_id: int, session: Session = Depends(get_session)):
    product = _get_product_or_404(session, product_id, active_only=False)

    # soft delete: order items keep pointing at the product
    product.is_active = False
    product.updated_at = datetime.utcnow()
    session.add(product)
    session.commit()

    return create_response(True, "Product deleted successfully")
