from typing import Optional

from app.models.order import Order
from app.models.product import Product, ProductVariant
from app.models.user import User


def format_user(user: Optional[User]) -> Optional[dict]:
    if user is None:
        return None

    return {
        "id": user.id,
        "name": user.name,
        "email": user.email,
        "role": user.role,
        "profilePicture": user.profile_picture,
        "address": user.address,
        "phone": user.phone,
        "createdAt": user.created_at,
    }


def format_user_brief(user: Optional[User]) -> Optional[dict]:
    if user is None:
        return None
    return {"id": user.id, "name": user.name, "email": user.email, "phone": user.phone}


def format_variant(variant: ProductVariant) -> dict:
    return {
        "id": variant.id,
        "color": {"name": variant.color_name, "code": variant.color_code},
        "size": variant.size,
        "price": variant.price,
        "stock": variant.stock,
        "sku": variant.sku,
    }


def format_product(product: Product) -> dict:
    return {
        "id": product.id,
        "name": product.name,
        "description": product.description,
        "category": product.category,
        "brand": product.brand,
        "images": product.images,
        "variants": [format_variant(v) for v in product.variants],
        "features": product.features,
        "specifications": product.specifications or {},
        "rating": product.rating,
        "numReviews": product.num_reviews,
        "basePrice": product.base_price,
        "isActive": product.is_active,
        "createdAt": product.created_at,
        "updatedAt": product.updated_at,
    }


def format_order(
    order: Order,
    user: Optional[User] = None,
    rider: Optional[User] = None,
) -> dict:
    return {
        "id": order.id,
        "user": format_user_brief(user) if user else order.user_id,
        "orderItems": [
            {
                "id": item.id,
                "product": item.product_id,
                "variant": item.variant_id,
                "name": item.name,
                "color": {"name": item.color_name, "code": item.color_code},
                "size": item.size,
                "price": item.price,
                "quantity": item.quantity,
                "image": item.image,
            }
            for item in order.items
        ],
        "shippingAddress": order.shipping_address,
        "contactInfo": order.contact_info,
        "paymentMethod": order.payment_method,
        "itemsPrice": order.items_price,
        "taxPrice": order.tax_price,
        "shippingPrice": order.shipping_price,
        "totalPrice": order.total_price,
        "status": order.status,
        "assignedRider": format_user_brief(rider) if rider else order.assigned_rider_id,
        "paidAt": order.paid_at,
        "shippedAt": order.shipped_at,
        "deliveredAt": order.delivered_at,
        "cancelledAt": order.cancelled_at,
        "notes": order.notes,
        "trackingNumber": order.tracking_number,
        "createdAt": order.created_at,
        "updatedAt": order.updated_at,
    }


def format_order_event(event) -> dict:
    return {
        "type": event.event_type,
        "label": event.label,
        "from": event.from_status,
        "to": event.to_status,
        "meta": event.meta,
        "createdBy": event.created_by,
        "createdAt": event.created_at,
    }


def format_approved_email(approved) -> dict:
    return {
        "id": approved.id,
        "email": approved.email,
        "role": approved.role,
        "isActive": approved.is_active,
        "addedBy": approved.added_by_id,
        "createdAt": approved.created_at,
    }


def format_order_for_view(session, order: Order) -> dict:
    """Order with customer and rider expanded, like a populated document."""
    user = session.get(User, order.user_id)
    rider = session.get(User, order.assigned_rider_id) if order.assigned_rider_id else None
    return format_order(order, user=user, rider=rider)
