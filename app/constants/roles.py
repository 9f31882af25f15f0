from enum import Enum


class UserRole(str, Enum):
    customer = "customer"
    admin = "admin"
    rider = "rider"


class Capability(str, Enum):
    shop = "shop"
    orders_view_own = "orders:view_own"
    orders_manage = "orders:manage"
    products_manage = "products:manage"
    riders_manage = "riders:manage"
    approvals_manage = "approvals:manage"
    admin_access = "admin:access"
    deliveries_manage = "deliveries:manage"


ROLE_CAPABILITIES = {
    UserRole.customer: {
        Capability.shop,
        Capability.orders_view_own,
    },
    UserRole.rider: {
        Capability.deliveries_manage,
    },
    UserRole.admin: {
        Capability.shop,
        Capability.orders_view_own,
        Capability.orders_manage,
        Capability.products_manage,
        Capability.riders_manage,
        Capability.approvals_manage,
        Capability.admin_access,
    },
}


def capabilities_for(role: str | None) -> set:
    try:
        return ROLE_CAPABILITIES[UserRole(role)]
    except ValueError:
        return set()
