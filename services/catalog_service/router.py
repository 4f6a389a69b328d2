from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from shared.config.database import get_db
from shared.security import CurrentUser, get_optional_user, require_admin

from .exceptions import ArtistNotFoundError, ArtworkNotFoundError
from .schemas import (
    ArtistCreate,
    ArtistDetailResponse,
    ArtistEnvelope,
    ArtistStats,
    ArtistUpdate,
    ArtworkCreate,
    ArtworkDetailResponse,
    ArtworkEnvelope,
    ArtworkResponse,
    ArtworkUpdate,
    CategoryCount,
    MessageResponse,
    TopArtist,
)
from .service import CatalogService

artist_router = APIRouter(prefix="/artists", tags=["Artists"])
artwork_router = APIRouter(prefix="/artworks", tags=["Artworks"])
public_router = APIRouter()  # For any public endpoints (e.g. health check)


@public_router.get("/health", include_in_schema=False)
async def health_check():
    return {"service": "catalog", "status": "running"}


# --- Artists ---

@artist_router.post("/", response_model=ArtistEnvelope, status_code=status.HTTP_201_CREATED)
async def create_artist(
    payload: ArtistCreate,
    admin: CurrentUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    artist = await CatalogService.create_artist(db, payload)
    return {"artist": artist, "message": "Artist created successfully"}


@artist_router.get("/top/sales", response_model=dict[str, List[TopArtist]])
async def top_artists(limit: int = Query(default=5, ge=1, le=50), db: AsyncSession = Depends(get_db)):
    return {"topArtists": await CatalogService.top_artists(db, limit)}


@artist_router.get("/stats/overview", response_model=dict[str, ArtistStats])
async def artist_stats(admin: CurrentUser = Depends(require_admin), db: AsyncSession = Depends(get_db)):
    return {"stats": await CatalogService.artist_stats(db)}


@artist_router.get("/{artist_id}", response_model=ArtistDetailResponse)
async def get_artist(
    artist_id: int,
    artwork_limit: int = Query(default=6, ge=1, le=50, alias="artworkLimit"),
    viewer: Optional[CurrentUser] = Depends(get_optional_user),
    db: AsyncSession = Depends(get_db),
):
    try:
        artist, artworks = await CatalogService.get_artist_with_artworks(db, artist_id, artwork_limit, viewer)
    except ArtistNotFoundError:
        raise HTTPException(status_code=404, detail="Artist not found")
    return {"artist": artist, "artworks": artworks}


@artist_router.put("/{artist_id}", response_model=ArtistEnvelope)
async def update_artist(
    artist_id: int,
    payload: ArtistUpdate,
    admin: CurrentUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    try:
        artist = await CatalogService.update_artist(db, artist_id, payload)
    except ArtistNotFoundError:
        raise HTTPException(status_code=404, detail="Artist not found")
    return {"artist": artist, "message": "Artist updated successfully"}


@artist_router.delete("/{artist_id}", response_model=MessageResponse)
async def deactivate_artist(
    artist_id: int,
    admin: CurrentUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    try:
        await CatalogService.deactivate_artist(db, artist_id)
    except ArtistNotFoundError:
        raise HTTPException(status_code=404, detail="Artist not found")
    return {"message": "Artist deactivated successfully"}


# --- Artworks ---

@artwork_router.post("/", response_model=ArtworkEnvelope, status_code=status.HTTP_201_CREATED)
async def create_artwork(
    payload: ArtworkCreate,
    admin: CurrentUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    try:
        artwork = await CatalogService.create_artwork(db, payload)
    except ArtistNotFoundError:
        raise HTTPException(status_code=400, detail="Artist not found")
    return {"artwork": artwork, "message": "Artwork created successfully"}


@artwork_router.get("/featured/list", response_model=dict[str, List[ArtworkResponse]])
async def featured_artworks(limit: int = Query(default=6, ge=1, le=50), db: AsyncSession = Depends(get_db)):
    return {"featuredArtworks": await CatalogService.featured_artworks(db, limit)}


@artwork_router.get("/categories/list", response_model=dict[str, List[CategoryCount]])
async def categories(db: AsyncSession = Depends(get_db)):
    return {"categories": await CatalogService.category_counts(db)}


@artwork_router.get("/{artwork_id}", response_model=ArtworkDetailResponse)
async def get_artwork(artwork_id: int, db: AsyncSession = Depends(get_db)):
    try:
        artwork = await CatalogService.view_artwork(db, artwork_id)
    except ArtworkNotFoundError:
        raise HTTPException(status_code=404, detail="Artwork not found")
    return {"artwork": artwork}


@artwork_router.put("/{artwork_id}", response_model=ArtworkEnvelope)
async def update_artwork(
    artwork_id: int,
    payload: ArtworkUpdate,
    admin: CurrentUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    try:
        artwork = await CatalogService.update_artwork(db, artwork_id, payload)
    except ArtworkNotFoundError:
        raise HTTPException(status_code=404, detail="Artwork not found")
    except ArtistNotFoundError:
        raise HTTPException(status_code=400, detail="Artist not found")
    return {"artwork": artwork, "message": "Artwork updated successfully"}


@artwork_router.delete("/{artwork_id}", response_model=MessageResponse)
async def delete_artwork(
    artwork_id: int,
    admin: CurrentUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    try:
        await CatalogService.delete_artwork(db, artwork_id)
    except ArtworkNotFoundError:
        raise HTTPException(status_code=404, detail="Artwork not found")
    return {"message": "Artwork deleted successfully"}
