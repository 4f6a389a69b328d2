"""
Reset the catalog to the canned demo data and print bearer tokens to try it with.

    python -m scripts.seed_data

Existing orders are left alone; their lines keep their own price snapshots.
"""
import asyncio

from sqlalchemy import delete
from termcolor import colored

from services.catalog_service.fixtures import CANNED_ARTISTS, CANNED_ARTWORKS
from services.catalog_service.models import Artist, Artwork
from services.order_service import models as order_models  # noqa: F401
from shared.config.database import AsyncSessionLocal, engine, init_models
from shared.security import ROLE_ADMIN, ROLE_USER, create_access_token


async def seed():
    await init_models()

    async with AsyncSessionLocal() as db:
        await db.execute(delete(Artwork))
        await db.execute(delete(Artist))

        # Fixture ids are only used to link artworks to artists; the database assigns the real ones
        artists = {}
        for data in CANNED_ARTISTS:
            fields = {key: value for key, value in data.items() if key != "id"}
            artist = Artist(**fields)
            db.add(artist)
            artists[data["id"]] = artist
        await db.flush()

        for data in CANNED_ARTWORKS:
            fields = {key: value for key, value in data.items() if key not in ("id", "artist_id")}
            db.add(Artwork(artist_id=artists[data["artist_id"]].id, **fields))

        await db.commit()

    print(colored(f"Seeded {len(CANNED_ARTISTS)} artists and {len(CANNED_ARTWORKS)} artworks", "green"))


def print_tokens():
    admin = create_access_token("admin-demo", ROLE_ADMIN)
    user = create_access_token("user-demo", ROLE_USER)
    print(colored("\nAdmin token:", "cyan"), admin)
    print(colored("User token: ", "cyan"), user)


async def main():
    try:
        await seed()
    finally:
        await engine.dispose()
    print_tokens()


if __name__ == "__main__":
    asyncio.run(main())
