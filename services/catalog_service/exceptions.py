class CatalogError(Exception):
    """Base class for catalog failures surfaced to the router."""


class ArtistNotFoundError(CatalogError):
    def __init__(self, artist_id: int):
        super().__init__(f"Artist {artist_id} not found")
        self.artist_id = artist_id


class ArtworkNotFoundError(CatalogError):
    def __init__(self, artwork_id: int):
        super().__init__(f"Artwork {artwork_id} not found")
        self.artwork_id = artwork_id
