from .setup import setup_observability
from .metrics import (
    gallery_orders_created_total,
    gallery_checkout_duration_seconds,
    gallery_order_number_conflicts_total,
    gallery_order_status_updates_total,
    gallery_attribution_lines_total
)
