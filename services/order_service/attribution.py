"""
Artist sales attribution.

When an order newly becomes delivered and paid, every line credits its
artwork's artist with the quantity sold and the snapshot revenue. Lines whose
artwork or artist can no longer be resolved are skipped and reported; they
never fail the status update that triggered them.
"""
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Iterable, List

import structlog

from services.catalog_service.store import CatalogStore
from shared.observability import gallery_attribution_lines_total

from .models import OrderItem
from .schemas import OrderStatus, PaymentStatus

logger = structlog.get_logger(__name__)


def should_credit_artists(previous_payment_status: str, status: str, payment_status: str) -> bool:
    """True only for the transition that newly satisfies delivered + paid."""
    return (
        status == OrderStatus.DELIVERED.value
        and payment_status == PaymentStatus.PAID.value
        and previous_payment_status != PaymentStatus.PAID.value
    )


@dataclass
class AttributionReport:
    credited: List[int] = field(default_factory=list)  # order item ids
    skipped: List[dict] = field(default_factory=list)


async def credit_artist_sales(order_id: int, items: Iterable[OrderItem], catalog: CatalogStore) -> AttributionReport:
    items = list(items)
    report = AttributionReport()
    artworks = {artwork.id: artwork for artwork in await catalog.find_artworks_by_ids(i.artwork_id for i in items)}

    for item in items:
        artwork = artworks.get(item.artwork_id)
        if artwork is None:
            reason = "artwork_missing"
        elif artwork.artist is None:
            reason = "artist_missing"
        elif not artwork.artist.is_active:
            reason = "artist_inactive"
        else:
            revenue = Decimal(item.price) * item.quantity
            if await catalog.increment_artist_stats(artwork.artist.id, item.quantity, revenue):
                report.credited.append(item.id)
                gallery_attribution_lines_total.labels(outcome="credited").inc()
                logger.info(
                    "attribution.credited",
                    order_id=order_id,
                    artwork_id=item.artwork_id,
                    artist_id=artwork.artist.id,
                    quantity=item.quantity,
                    revenue=str(revenue),
                )
                continue
            reason = "artist_missing"

        report.skipped.append({"item_id": item.id, "artwork_id": item.artwork_id, "reason": reason})
        gallery_attribution_lines_total.labels(outcome=reason).inc()
        logger.warning("attribution.skipped", order_id=order_id, artwork_id=item.artwork_id, reason=reason)

    return report
