from datetime import datetime, timedelta, timezone
from typing import List, Optional

from sqlalchemy import case, func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from .models import Order, utcnow


class OrderRepository:
    @staticmethod
    async def create_order(db: AsyncSession, order: Order):
        db.add(order)
        await db.commit()
        return await OrderRepository.get_order(db, order.id)

    @staticmethod
    async def get_order(db: AsyncSession, order_id: int, user_id: Optional[str] = None):
        """Fresh read; `user_id` scopes the lookup to one owner."""
        query = select(Order).where(Order.id == order_id)
        if user_id is not None:
            query = query.where(Order.user_id == user_id)
        result = await db.execute(query.execution_options(populate_existing=True))
        return result.scalars().first()

    @staticmethod
    async def list_orders(db: AsyncSession, user_id: Optional[str] = None, status: Optional[str] = None) -> List[Order]:
        query = select(Order)
        if user_id is not None:
            query = query.where(Order.user_id == user_id)
        if status is not None:
            query = query.where(Order.status == status)
        result = await db.execute(query.order_by(Order.created_at.desc(), Order.id.desc()))
        return list(result.scalars().all())

    @staticmethod
    async def count_orders(db: AsyncSession) -> int:
        result = await db.execute(select(func.count()).select_from(Order))
        return result.scalar_one()

    @staticmethod
    def is_order_number_conflict(exc: IntegrityError) -> bool:
        return "order_number" in str(exc.orig)

    @staticmethod
    async def apply_status(
        db: AsyncSession,
        order_id: int,
        expected_status: str,
        expected_payment_status: str,
        **changes,
    ) -> bool:
        """Compare-and-set on (status, payment_status). Does not commit.

        Only the columns in `changes` are written. Returns False when another
        writer changed either field since it was read, so the caller can
        re-read and re-evaluate.
        """
        result = await db.execute(
            update(Order)
            .where(
                Order.id == order_id,
                Order.status == expected_status,
                Order.payment_status == expected_payment_status,
            )
            .values(**changes, updated_at=utcnow())
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    @staticmethod
    async def stats(db: AsyncSession) -> dict:
        since = datetime.now(timezone.utc) - timedelta(days=7)
        counts = await db.execute(select(Order.status, func.count()).group_by(Order.status))
        totals = await db.execute(
            select(
                func.count(),
                func.coalesce(func.avg(Order.total), 0),
                func.coalesce(
                    func.sum(case(((Order.status == "delivered") & (Order.payment_status == "paid"), Order.total), else_=0)),
                    0,
                ),
                func.count(case((Order.created_at >= since, 1))),
            ).select_from(Order)
        )
        total, average, revenue, recent = totals.one()
        return {
            "by_status": dict(counts.all()),
            "total": total,
            "average": average,
            "revenue": revenue,
            "recent": recent,
        }
