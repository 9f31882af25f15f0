from fastapi import status


class OrderStatusError(Exception):
    """Base class for order lifecycle failures."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidTransition(OrderStatusError):
    def __init__(self, current: str, target: str):
        super().__init__(f"Cannot change order status from {current} to {target}")
        self.current = current
        self.target = target


class InvalidState(OrderStatusError):
    pass


class RiderUnavailable(OrderStatusError):
    pass


class Forbidden(OrderStatusError):
    status_code = status.HTTP_403_FORBIDDEN


class OrderNotFound(OrderStatusError):
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, order_id: int):
        super().__init__("Order not found")
        self.order_id = order_id


class RiderNotFound(OrderStatusError):
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, rider_id: int):
        super().__init__("Rider not found")
        self.rider_id = rider_id
