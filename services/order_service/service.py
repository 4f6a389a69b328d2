import time
from decimal import Decimal
from typing import Dict, Iterable, List, Optional

import structlog
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from services.catalog_service.store import ArtworkRef, CatalogStore
from shared.config import settings
from shared.observability import (
    gallery_checkout_duration_seconds,
    gallery_order_number_conflicts_total,
    gallery_order_status_updates_total,
    gallery_orders_created_total,
)
from shared.security import CurrentUser

from .attribution import credit_artist_sales, should_credit_artists
from .exceptions import (
    ArtworkUnavailableError,
    OrderNotFoundError,
    OrderNumberConflictError,
    OrderUpdateConflictError,
)
from .models import Order, OrderItem
from .order_number import format_order_number
from .pricing import OrderTotals, compute_totals, to_money
from .repository import OrderRepository
from .schemas import (
    ArtistDisplay,
    ArtworkDisplay,
    OrderCreate,
    OrderItemCreate,
    OrderItemResponse,
    OrderResponse,
    OrderStatus,
    OrderStatusUpdate,
    PaymentStatus,
    ShippingAddress,
)

logger = structlog.get_logger(__name__)


class OrderService:

    @staticmethod
    async def _price_items(catalog: CatalogStore, items: List[OrderItemCreate]):
        """Resolve every requested artwork, all-or-nothing, and snapshot its price."""
        artworks = {a.id: a for a in await catalog.find_artworks_by_ids(item.artwork for item in items)}
        unavailable = [
            item.artwork for item in items
            if item.artwork not in artworks or not artworks[item.artwork].is_available
        ]
        if unavailable:
            raise ArtworkUnavailableError(unavailable)

        lines = [(artworks[item.artwork].price, item.quantity) for item in items]
        return lines, compute_totals(lines)

    @staticmethod
    async def quote(catalog: CatalogStore, items: List[OrderItemCreate]) -> dict:
        _, totals = await OrderService._price_items(catalog, items)
        return {
            "item_count": sum(item.quantity for item in items),
            "subtotal": totals.subtotal,
            "tax": totals.tax,
            "shipping": totals.shipping,
            "total": totals.total,
        }

    @staticmethod
    def _build_order(user: CurrentUser, data: OrderCreate, lines, totals: OrderTotals, sequence: int) -> Order:
        return Order(
            order_number=format_order_number(sequence),
            user_id=user.id,
            items=[
                OrderItem(artwork_id=item.artwork, quantity=quantity, price=to_money(price))
                for item, (price, quantity) in zip(data.items, lines)
            ],
            subtotal=totals.subtotal,
            tax=totals.tax,
            shipping=totals.shipping,
            total=totals.total,
            shipping_address=data.shipping_address.model_dump(),
            notes=data.notes,
            status=OrderStatus.PENDING.value,
            payment_status=PaymentStatus.PENDING.value,
            payment_method=data.payment_method.value,
        )

    @staticmethod
    async def create_order(db: AsyncSession, catalog: CatalogStore, user: CurrentUser, data: OrderCreate) -> Order:
        started = time.perf_counter()
        # Validation and referential checks happen before any write
        lines, totals = await OrderService._price_items(catalog, data.items)

        attempts = settings.ORDER_NUMBER_MAX_ATTEMPTS
        for attempt in range(1, attempts + 1):
            sequence = await OrderRepository.count_orders(db) + 1
            order = OrderService._build_order(user, data, lines, totals, sequence)
            try:
                order = await OrderRepository.create_order(db, order)
            except IntegrityError as exc:
                await db.rollback()
                if not OrderRepository.is_order_number_conflict(exc):
                    raise
                gallery_order_number_conflicts_total.inc()
                logger.warning("order.number_conflict", order_number=order.order_number, attempt=attempt)
                continue

            gallery_orders_created_total.labels(payment_method=order.payment_method).inc()
            gallery_checkout_duration_seconds.observe(time.perf_counter() - started)
            logger.info(
                "order.created",
                order_id=order.id,
                order_number=order.order_number,
                user_id=user.id,
                items=len(order.items),
                total=str(order.total),
            )
            return order

        raise OrderNumberConflictError(attempts)

    @staticmethod
    async def list_orders(db: AsyncSession, user: CurrentUser, status: Optional[OrderStatus] = None) -> List[Order]:
        # Non-admins only ever see their own orders
        owner = None if user.is_admin else user.id
        return await OrderRepository.list_orders(db, user_id=owner, status=status.value if status else None)

    @staticmethod
    async def get_order(db: AsyncSession, user: CurrentUser, order_id: int) -> Order:
        """Someone else's order is reported exactly like a missing one."""
        owner = None if user.is_admin else user.id
        order = await OrderRepository.get_order(db, order_id, user_id=owner)
        if not order:
            raise OrderNotFoundError(order_id)
        return order

    @staticmethod
    async def update_order_status(
        db: AsyncSession, catalog: CatalogStore, order_id: int, data: OrderStatusUpdate
    ) -> Order:
        """Admin-only; callers must check the role before calling.

        Any status / paymentStatus value may be set at any time; an omitted
        field is never written. The write is a compare-and-set on both fields
        as read, so a concurrent change to either one forces a re-read, and of
        two racing updates only one can observe the unpaid -> paid transition.
        A store that joins the session credits inside the status transaction;
        any other store is credited only once the status change is committed.
        """
        changes = {}
        if data.status:
            changes["status"] = data.status.value
        if data.payment_status:
            changes["payment_status"] = data.payment_status.value

        for _ in range(settings.STATUS_UPDATE_MAX_ATTEMPTS):
            order = await OrderRepository.get_order(db, order_id)
            if not order:
                raise OrderNotFoundError(order_id)

            previous_status = order.status
            previous_payment_status = order.payment_status
            status = changes.get("status", previous_status)
            payment_status = changes.get("payment_status", previous_payment_status)

            if not await OrderRepository.apply_status(
                db, order_id, previous_status, previous_payment_status, **changes
            ):
                await db.rollback()
                continue

            credit = should_credit_artists(previous_payment_status, status, payment_status)
            if credit and catalog.joins_transaction:
                await OrderService._credit_artists(order, catalog)

            await db.commit()

            if credit and not catalog.joins_transaction:
                await OrderService._credit_artists(order, catalog)

            gallery_order_status_updates_total.labels(status=status, payment_status=payment_status).inc()
            logger.info(
                "order.status_updated",
                order_id=order_id,
                status=status,
                payment_status=payment_status,
                previous_payment_status=previous_payment_status,
            )
            return await OrderRepository.get_order(db, order_id)

        raise OrderUpdateConflictError(order_id)

    @staticmethod
    async def _credit_artists(order: Order, catalog: CatalogStore) -> None:
        report = await credit_artist_sales(order.id, order.items, catalog)
        logger.info(
            "order.artists_credited",
            order_id=order.id,
            credited=len(report.credited),
            skipped=len(report.skipped),
        )

    @staticmethod
    async def stats(db: AsyncSession) -> dict:
        raw = await OrderRepository.stats(db)
        by_status = raw["by_status"]
        return {
            "total_orders": raw["total"],
            **{f"{status.value}_orders": by_status.get(status.value, 0) for status in OrderStatus},
            "total_revenue": to_money(raw["revenue"] or 0),
            "average_order_value": to_money(raw["average"] or 0),
            "recent_orders": raw["recent"],
        }

    # --- Response assembly ---

    @staticmethod
    async def _artworks_for(catalog: CatalogStore, orders: Iterable[Order]) -> Dict[int, ArtworkRef]:
        ids = {item.artwork_id for order in orders for item in order.items}
        return {artwork.id: artwork for artwork in await catalog.find_artworks_by_ids(ids)}

    @staticmethod
    def _to_response(order: Order, artworks: Dict[int, ArtworkRef]) -> OrderResponse:
        items = []
        for item in order.items:
            artwork = artworks.get(item.artwork_id)
            display = None
            if artwork is not None:
                display = ArtworkDisplay(
                    id=artwork.id,
                    title=artwork.title,
                    image_url=artwork.image_url,
                    artist=ArtistDisplay(id=artwork.artist.id, name=artwork.artist.name) if artwork.artist else None,
                )
            items.append(
                OrderItemResponse(
                    id=item.id,
                    artwork_id=item.artwork_id,
                    quantity=item.quantity,
                    price=Decimal(item.price),
                    artwork=display,
                )
            )
        return OrderResponse(
            id=order.id,
            order_number=order.order_number,
            user_id=order.user_id,
            items=items,
            item_count=order.item_count,
            subtotal=order.subtotal,
            tax=order.tax,
            shipping=order.shipping,
            total=order.total,
            shipping_address=ShippingAddress(**order.shipping_address),
            notes=order.notes,
            status=order.status,
            payment_status=order.payment_status,
            payment_method=order.payment_method,
            created_at=order.created_at,
            updated_at=order.updated_at,
        )

    @staticmethod
    async def to_response(catalog: CatalogStore, order: Order) -> OrderResponse:
        return OrderService._to_response(order, await OrderService._artworks_for(catalog, [order]))

    @staticmethod
    async def to_responses(catalog: CatalogStore, orders: List[Order]) -> List[OrderResponse]:
        artworks = await OrderService._artworks_for(catalog, orders)
        return [OrderService._to_response(order, artworks) for order in orders]
