"""
Catalog Store adapters consumed by the order core.

The order service only needs point lookups of artworks (with their owning
artist) and an atomic bump of an artist's sales counters. `SqlCatalogStore`
answers from the request's database session, so increments join the caller's
transaction. `InMemoryCatalogStore` serves the canned catalog in mock mode.
"""
from copy import deepcopy
from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, Iterable, List, Optional, Protocol

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from shared.config import settings
from shared.config.database import get_db

from .fixtures import CANNED_ARTISTS, CANNED_ARTWORKS
from .models import Artwork
from .repository import ArtistRepository, ArtworkRepository


@dataclass(frozen=True)
class ArtistRef:
    id: int
    name: str
    avatar: str = ""
    is_active: bool = True


@dataclass(frozen=True)
class ArtworkRef:
    id: int
    title: str
    price: Decimal
    is_available: bool
    image_url: str = ""
    artist: Optional[ArtistRef] = None


class CatalogStore(Protocol):
    # True when increments ride on the caller's database transaction
    joins_transaction: bool

    async def find_artwork_by_id(self, artwork_id: int) -> Optional[ArtworkRef]: ...

    async def find_artworks_by_ids(self, artwork_ids: Iterable[int]) -> List[ArtworkRef]: ...

    async def increment_artist_stats(self, artist_id: int, sales_delta: int, revenue_delta: Decimal) -> bool: ...


def _artwork_ref(artwork: Artwork) -> ArtworkRef:
    artist = None
    if artwork.artist is not None:
        artist = ArtistRef(
            id=artwork.artist.id,
            name=artwork.artist.name,
            avatar=artwork.artist.avatar or "",
            is_active=artwork.artist.is_active,
        )
    return ArtworkRef(
        id=artwork.id,
        title=artwork.title,
        price=Decimal(artwork.price),
        is_available=artwork.is_available,
        image_url=artwork.primary_image,
        artist=artist,
    )


class SqlCatalogStore:
    joins_transaction = True

    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_artwork_by_id(self, artwork_id: int) -> Optional[ArtworkRef]:
        artwork = await ArtworkRepository.get_artwork(self.db, artwork_id)
        return _artwork_ref(artwork) if artwork else None

    async def find_artworks_by_ids(self, artwork_ids: Iterable[int]) -> List[ArtworkRef]:
        artworks = await ArtworkRepository.get_artworks_by_ids(self.db, artwork_ids)
        return [_artwork_ref(artwork) for artwork in artworks]

    async def increment_artist_stats(self, artist_id: int, sales_delta: int, revenue_delta: Decimal) -> bool:
        return await ArtistRepository.increment_stats(self.db, artist_id, sales_delta, revenue_delta)


class InMemoryCatalogStore:
    # Increments apply immediately and can not be rolled back
    joins_transaction = False

    def __init__(self, artists: List[dict] = CANNED_ARTISTS, artworks: List[dict] = CANNED_ARTWORKS):
        self._artists: Dict[int, dict] = {}
        for artist in deepcopy(artists):
            artist.setdefault("is_active", True)
            artist.setdefault("total_sales", 0)
            artist.setdefault("total_revenue", Decimal("0"))
            self._artists[artist["id"]] = artist
        self._artworks: Dict[int, dict] = {artwork["id"]: dict(artwork) for artwork in artworks}

    def _ref(self, artwork: dict) -> ArtworkRef:
        artist = self._artists.get(artwork["artist_id"])
        images = artwork.get("images") or []
        primary = next((image["url"] for image in images if image.get("is_primary")), None)
        return ArtworkRef(
            id=artwork["id"],
            title=artwork["title"],
            price=Decimal(artwork["price"]),
            is_available=artwork.get("is_available", True),
            image_url=primary or (images[0]["url"] if images else ""),
            artist=ArtistRef(
                id=artist["id"],
                name=artist["name"],
                avatar=artist.get("avatar", ""),
                is_active=artist["is_active"],
            ) if artist else None,
        )

    async def find_artwork_by_id(self, artwork_id: int) -> Optional[ArtworkRef]:
        artwork = self._artworks.get(artwork_id)
        return self._ref(artwork) if artwork else None

    async def find_artworks_by_ids(self, artwork_ids: Iterable[int]) -> List[ArtworkRef]:
        return [self._ref(self._artworks[i]) for i in set(artwork_ids) if i in self._artworks]

    async def increment_artist_stats(self, artist_id: int, sales_delta: int, revenue_delta: Decimal) -> bool:
        # No await between read and write: atomic on the event loop
        artist = self._artists.get(artist_id)
        if artist is None:
            return False
        artist["total_sales"] += sales_delta
        artist["total_revenue"] += Decimal(revenue_delta)
        return True

    def artist_stats(self, artist_id: int) -> dict:
        artist = self._artists[artist_id]
        return {"total_sales": artist["total_sales"], "total_revenue": artist["total_revenue"]}


mock_catalog_store = InMemoryCatalogStore() if settings.MOCK_MODE else None


async def get_catalog_store(db: AsyncSession = Depends(get_db)) -> CatalogStore:
    """Selected once at startup: the canned store in mock mode, the database otherwise."""
    if mock_catalog_store is not None:
        return mock_catalog_store
    return SqlCatalogStore(db)
