from app.models.user import User
from app.models.approved_email import ApprovedEmail
from app.models.product import Product, ProductVariant
from app.models.order import Order
from app.models.order_item import OrderItem
from app.models.order_event import OrderEvent

# add ALL models here
