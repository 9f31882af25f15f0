from fastapi import Depends, HTTPException, status
from app.constants.roles import Capability, capabilities_for
from app.models.user import User
from app.utils.token import get_current_user


def has_capability(user: User, capability: Capability) -> bool:
    return capability in capabilities_for(user.role)


def require_capability(*required: Capability):
    """
    Router-level guard. FastAPI caches ``get_current_user`` per request, so
    the user is resolved once no matter how many handlers depend on it.
    """

    def guard(current_user: User = Depends(get_current_user)) -> User:
        missing = [c for c in required if not has_capability(current_user, c)]
        if missing:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"User role {current_user.role} is not authorized to access this route",
            )
        return current_user

    return guard


require_admin = require_capability(Capability.admin_access)
require_shopper = require_capability(Capability.shop)
require_rider = require_capability(Capability.deliveries_manage)
