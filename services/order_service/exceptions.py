from typing import Iterable


class OrderError(Exception):
    """Base class for order failures surfaced to the router."""


class EmptyOrderError(OrderError):
    def __init__(self):
        super().__init__("At least one item is required")


class ArtworkUnavailableError(OrderError):
    """Referenced artworks are missing or not for sale; the whole order is rejected."""

    def __init__(self, artwork_ids: Iterable[int]):
        self.artwork_ids = sorted(set(artwork_ids))
        super().__init__(
            "One or more artworks are not available: " + ", ".join(str(i) for i in self.artwork_ids)
        )


class OrderNotFoundError(OrderError):
    def __init__(self, order_id: int):
        super().__init__("Order not found")
        self.order_id = order_id


class OrderNumberConflictError(OrderError):
    """Every attempt to allocate a unique order number collided."""

    def __init__(self, attempts: int):
        super().__init__(f"Could not allocate a unique order number after {attempts} attempts")
        self.attempts = attempts


class OrderUpdateConflictError(OrderError):
    """The order kept changing underneath a status update."""

    def __init__(self, order_id: int):
        super().__init__(f"Order {order_id} was modified concurrently")
        self.order_id = order_id
