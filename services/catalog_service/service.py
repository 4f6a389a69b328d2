from decimal import ROUND_HALF_UP, Decimal
from typing import List, Optional

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from shared.security import CurrentUser

from .exceptions import ArtistNotFoundError, ArtworkNotFoundError
from .models import Artist, Artwork
from .repository import ArtistRepository, ArtworkRepository
from .schemas import ArtistCreate, ArtistUpdate, ArtworkCreate, ArtworkUpdate

logger = structlog.get_logger(__name__)

CENT = Decimal("0.01")


def _url(value) -> str:
    return str(value) if value else ""


def _social_links(social_media) -> dict:
    return {network: _url(getattr(social_media, network)) for network in ("instagram", "twitter", "facebook")}


class CatalogService:

    # --- Artists ---

    @staticmethod
    async def create_artist(db: AsyncSession, data: ArtistCreate) -> Artist:
        artist = Artist(
            name=data.name,
            bio=data.bio,
            avatar=data.avatar,
            website=_url(data.website),
            social_media=_social_links(data.social_media),
        )
        artist = await ArtistRepository.create_artist(db, artist)
        logger.info("artist.created", artist_id=artist.id)
        return artist

    @staticmethod
    async def get_artist(db: AsyncSession, artist_id: int, viewer: Optional[CurrentUser] = None) -> Artist:
        artist = await ArtistRepository.get_artist(db, artist_id)
        # Deactivated artists stay visible to admins only
        if not artist or (not artist.is_active and not (viewer and viewer.is_admin)):
            raise ArtistNotFoundError(artist_id)
        return artist

    @staticmethod
    async def get_artist_with_artworks(
        db: AsyncSession, artist_id: int, artwork_limit: int, viewer: Optional[CurrentUser] = None
    ):
        artist = await CatalogService.get_artist(db, artist_id, viewer)
        artworks = await ArtworkRepository.available_by_artist(db, artist_id, artwork_limit)
        return artist, artworks

    @staticmethod
    async def update_artist(db: AsyncSession, artist_id: int, data: ArtistUpdate) -> Artist:
        artist = await ArtistRepository.get_artist(db, artist_id)
        if not artist:
            raise ArtistNotFoundError(artist_id)

        changes = data.model_dump(exclude_unset=True)
        if "website" in changes:
            changes["website"] = _url(data.website)
        if "social_media" in changes:
            changes["social_media"] = _social_links(data.social_media) if data.social_media else {}
        for field, value in changes.items():
            if value is not None:
                setattr(artist, field, value)

        artist = await ArtistRepository.update_artist(db, artist)
        logger.info("artist.updated", artist_id=artist.id, fields=sorted(changes))
        return artist

    @staticmethod
    async def deactivate_artist(db: AsyncSession, artist_id: int) -> Artist:
        artist = await ArtistRepository.get_artist(db, artist_id)
        if not artist:
            raise ArtistNotFoundError(artist_id)
        artist.is_active = False
        artist = await ArtistRepository.update_artist(db, artist)
        logger.info("artist.deactivated", artist_id=artist_id)
        return artist

    @staticmethod
    async def top_artists(db: AsyncSession, limit: int) -> List[Artist]:
        return await ArtistRepository.top_by_sales(db, limit)

    @staticmethod
    async def artist_stats(db: AsyncSession) -> dict:
        raw = await ArtistRepository.stats(db)
        revenue = Decimal(raw["revenue"] or 0).quantize(CENT, ROUND_HALF_UP)
        average = (revenue / raw["active"]).quantize(CENT, ROUND_HALF_UP) if raw["active"] else Decimal("0.00")
        return {
            "total_artists": raw["active"],
            "total_inactive_artists": raw["inactive"],
            "total_sales": int(raw["sales"] or 0),
            "total_revenue": revenue,
            "average_revenue": average,
        }

    # --- Artworks ---

    @staticmethod
    async def _require_artist(db: AsyncSession, artist_id: int) -> Artist:
        artist = await ArtistRepository.get_artist(db, artist_id)
        if not artist:
            raise ArtistNotFoundError(artist_id)
        return artist

    @staticmethod
    async def create_artwork(db: AsyncSession, data: ArtworkCreate) -> Artwork:
        await CatalogService._require_artist(db, data.artist)
        artwork = Artwork(
            title=data.title,
            description=data.description,
            price=data.price,
            category=data.category.value,
            images=[image.model_dump() for image in data.images],
            width=data.dimensions.width,
            height=data.dimensions.height,
            dimension_unit=data.dimensions.unit.value,
            medium=data.medium,
            year=data.year,
            artist_id=data.artist,
            is_available=data.is_available,
            is_featured=data.is_featured,
            tags=[tag.strip() for tag in data.tags if tag.strip()],
        )
        artwork = await ArtworkRepository.create_artwork(db, artwork)
        logger.info("artwork.created", artwork_id=artwork.id, artist_id=artwork.artist_id)
        return artwork

    @staticmethod
    async def get_artwork(db: AsyncSession, artwork_id: int) -> Artwork:
        artwork = await ArtworkRepository.get_artwork(db, artwork_id)
        if not artwork:
            raise ArtworkNotFoundError(artwork_id)
        return artwork

    @staticmethod
    async def view_artwork(db: AsyncSession, artwork_id: int) -> Artwork:
        """Public read; counts the view with an atomic increment."""
        await CatalogService.get_artwork(db, artwork_id)
        await ArtworkRepository.increment_views(db, artwork_id)
        return await CatalogService.get_artwork(db, artwork_id)

    @staticmethod
    async def update_artwork(db: AsyncSession, artwork_id: int, data: ArtworkUpdate) -> Artwork:
        artwork = await CatalogService.get_artwork(db, artwork_id)
        changes = data.model_dump(exclude_unset=True, exclude_none=True)

        if "artist" in changes:
            await CatalogService._require_artist(db, changes["artist"])
            artwork.artist_id = changes.pop("artist")
        if "dimensions" in changes:
            dimensions = changes.pop("dimensions")
            artwork.width = dimensions["width"]
            artwork.height = dimensions["height"]
            artwork.dimension_unit = dimensions["unit"].value
        if "category" in changes:
            changes["category"] = changes["category"].value
        if "tags" in changes:
            changes["tags"] = [tag.strip() for tag in changes["tags"] if tag.strip()]
        for field, value in changes.items():
            setattr(artwork, field, value)

        artwork = await ArtworkRepository.update_artwork(db, artwork)
        logger.info("artwork.updated", artwork_id=artwork_id)
        return artwork

    @staticmethod
    async def delete_artwork(db: AsyncSession, artwork_id: int) -> None:
        # Orders keep their own line snapshots, so a hard delete is safe
        if not await ArtworkRepository.delete_artwork(db, artwork_id):
            raise ArtworkNotFoundError(artwork_id)
        logger.info("artwork.deleted", artwork_id=artwork_id)

    @staticmethod
    async def featured_artworks(db: AsyncSession, limit: int) -> List[Artwork]:
        return await ArtworkRepository.featured(db, limit)

    @staticmethod
    async def category_counts(db: AsyncSession) -> List[dict]:
        return await ArtworkRepository.category_counts(db)
