from fastapi import FastAPI

from shared.errors import register_error_handlers

from .models import Artist, Artwork  # noqa: F401 (registers models with Base)
from .router import artist_router, artwork_router, public_router

catalog_app = FastAPI(
    title="Catalog Service",
    version="1.0.0",
    description="Artists and artworks: public browsing, admin inventory management.",
)

register_error_handlers(catalog_app)

catalog_app.include_router(public_router)
catalog_app.include_router(artist_router)
catalog_app.include_router(artwork_router)
