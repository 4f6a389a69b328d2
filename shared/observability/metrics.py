from prometheus_client import Counter, Histogram

# Business Metrics
gallery_orders_created_total = Counter(
    "gallery_orders_created_total",
    "Total orders created",
    ["payment_method"]
)

gallery_checkout_duration_seconds = Histogram(
    "gallery_checkout_duration_seconds",
    "Order creation duration in seconds"
)

gallery_order_number_conflicts_total = Counter(
    "gallery_order_number_conflicts_total",
    "Order number collisions recovered by regeneration"
)

gallery_order_status_updates_total = Counter(
    "gallery_order_status_updates_total",
    "Order status updates applied",
    ["status", "payment_status"]
)

gallery_attribution_lines_total = Counter(
    "gallery_attribution_lines_total",
    "Order lines processed by artist sales attribution",
    ["outcome"]  # Labels: 'credited', 'artwork_missing', 'artist_missing', 'artist_inactive'
)
