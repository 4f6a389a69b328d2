from typing import Iterable, List, Optional

from sqlalchemy import case, delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from .models import Artist, Artwork, utcnow


class ArtistRepository:

    @staticmethod
    async def create_artist(db: AsyncSession, artist: Artist) -> Artist:
        db.add(artist)
        await db.commit()
        await db.refresh(artist)
        return artist

    @staticmethod
    async def get_artist(db: AsyncSession, artist_id: int) -> Optional[Artist]:
        result = await db.execute(
            select(Artist).where(Artist.id == artist_id).execution_options(populate_existing=True)
        )
        return result.scalars().first()

    @staticmethod
    async def update_artist(db: AsyncSession, artist: Artist) -> Artist:
        db.add(artist)
        await db.commit()
        await db.refresh(artist)
        return artist

    @staticmethod
    async def increment_stats(db: AsyncSession, artist_id: int, sales_delta: int, revenue_delta) -> bool:
        """Atomic relative to the stored row; does not commit."""
        result = await db.execute(
            update(Artist)
            .where(Artist.id == artist_id)
            .values(
                total_sales=Artist.total_sales + sales_delta,
                total_revenue=Artist.total_revenue + revenue_delta,
                updated_at=utcnow(),
            )
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    @staticmethod
    async def top_by_sales(db: AsyncSession, limit: int) -> List[Artist]:
        result = await db.execute(
            select(Artist)
            .where(Artist.is_active.is_(True))
            .order_by(Artist.total_sales.desc(), Artist.id)
            .limit(limit)
        )
        return list(result.scalars().all())

    @staticmethod
    async def stats(db: AsyncSession) -> dict:
        result = await db.execute(
            select(
                func.count(case((Artist.is_active.is_(True), 1))),
                func.count(case((Artist.is_active.is_(False), 1))),
                func.coalesce(func.sum(Artist.total_sales), 0),
                func.coalesce(func.sum(Artist.total_revenue), 0),
            )
        )
        active, inactive, sales, revenue = result.one()
        return {"active": active, "inactive": inactive, "sales": sales, "revenue": revenue}


class ArtworkRepository:

    @staticmethod
    async def create_artwork(db: AsyncSession, artwork: Artwork) -> Artwork:
        db.add(artwork)
        await db.commit()
        return await ArtworkRepository.get_artwork(db, artwork.id)

    @staticmethod
    async def get_artwork(db: AsyncSession, artwork_id: int) -> Optional[Artwork]:
        result = await db.execute(
            select(Artwork).where(Artwork.id == artwork_id).execution_options(populate_existing=True)
        )
        return result.scalars().first()

    @staticmethod
    async def get_artworks_by_ids(db: AsyncSession, artwork_ids: Iterable[int]) -> List[Artwork]:
        ids = set(artwork_ids)
        if not ids:
            return []
        result = await db.execute(select(Artwork).where(Artwork.id.in_(ids)))
        return list(result.scalars().all())

    @staticmethod
    async def update_artwork(db: AsyncSession, artwork: Artwork) -> Artwork:
        db.add(artwork)
        await db.commit()
        return await ArtworkRepository.get_artwork(db, artwork.id)

    @staticmethod
    async def delete_artwork(db: AsyncSession, artwork_id: int) -> bool:
        result = await db.execute(delete(Artwork).where(Artwork.id == artwork_id))
        await db.commit()
        return result.rowcount == 1

    @staticmethod
    async def increment_views(db: AsyncSession, artwork_id: int) -> None:
        await db.execute(
            update(Artwork)
            .where(Artwork.id == artwork_id)
            .values(views=Artwork.views + 1)
            .execution_options(synchronize_session=False)
        )
        await db.commit()

    @staticmethod
    async def available_by_artist(db: AsyncSession, artist_id: int, limit: int) -> List[Artwork]:
        result = await db.execute(
            select(Artwork)
            .where(Artwork.artist_id == artist_id, Artwork.is_available.is_(True))
            .order_by(Artwork.created_at.desc(), Artwork.id.desc())
            .limit(limit)
        )
        return list(result.scalars().all())

    @staticmethod
    async def featured(db: AsyncSession, limit: int) -> List[Artwork]:
        result = await db.execute(
            select(Artwork)
            .where(Artwork.is_featured.is_(True), Artwork.is_available.is_(True))
            .order_by(Artwork.created_at.desc(), Artwork.id.desc())
            .limit(limit)
        )
        return list(result.scalars().all())

    @staticmethod
    async def category_counts(db: AsyncSession) -> List[dict]:
        count = func.count(Artwork.id)
        result = await db.execute(
            select(
                Artwork.category,
                count,
                func.count(case((Artwork.is_available.is_(True), 1))),
            )
            .group_by(Artwork.category)
            .order_by(count.desc(), Artwork.category)
        )
        return [
            {"category": category, "count": total, "available": available}
            for category, total, available in result.all()
        ]
