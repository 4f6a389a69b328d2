"""Canned catalog: seeds the database and backs the in-memory store in mock mode."""
from decimal import Decimal

CANNED_ARTISTS = [
    {
        "id": 1,
        "name": "Vincent Van Gogh",
        "bio": "Dutch post-impressionist painter who is among the most famous and influential figures in the history of Western art.",
        "website": "https://vangoghgallery.com",
        "social_media": {"instagram": "https://instagram.com/vangogh", "twitter": "https://twitter.com/vangogh"},
    },
    {
        "id": 2,
        "name": "Pablo Picasso",
        "bio": "Spanish painter, sculptor, printmaker, ceramicist and stage designer.",
        "website": "https://picasso.org",
        "social_media": {},
    },
    {
        "id": 3,
        "name": "Frida Kahlo",
        "bio": "Mexican painter known for her many portraits, self-portraits, and works inspired by the nature and artifacts of Mexico.",
        "website": "",
        "social_media": {"instagram": "https://instagram.com/fridakahlo"},
    },
    {
        "id": 4,
        "name": "Yayoi Kusama",
        "bio": "Japanese contemporary artist who works primarily in sculpture and installation.",
        "website": "",
        "social_media": {},
    },
]

CANNED_ARTWORKS = [
    {
        "id": 1,
        "title": "The Starry Night (Print)",
        "description": "Museum-quality giclee print of the swirling night sky over Saint-Remy.",
        "price": Decimal("89.99"),
        "category": "painting",
        "images": [{"url": "https://images.example.com/starry-night.jpg", "alt": "The Starry Night", "is_primary": True}],
        "width": 92.1, "height": 73.7, "dimension_unit": "cm",
        "medium": "Giclee print on canvas",
        "year": 1889,
        "artist_id": 1,
        "is_featured": True,
        "tags": ["post-impressionism", "night", "landscape"],
    },
    {
        "id": 2,
        "title": "Sunflowers (Study)",
        "description": "Study of sunflowers in a vase, oil on board.",
        "price": Decimal("450.00"),
        "category": "painting",
        "images": [{"url": "https://images.example.com/sunflowers.jpg", "alt": "Sunflowers", "is_primary": True}],
        "width": 50, "height": 65, "dimension_unit": "cm",
        "medium": "Oil on board",
        "year": 1888,
        "artist_id": 1,
        "is_featured": False,
        "tags": ["still life", "flowers"],
    },
    {
        "id": 3,
        "title": "Guernica Sketch",
        "description": "Preparatory sketch in graphite and ink.",
        "price": Decimal("1200.00"),
        "category": "mixed-media",
        "images": [],
        "width": 40, "height": 30, "dimension_unit": "cm",
        "medium": "Graphite and ink on paper",
        "year": 1937,
        "artist_id": 2,
        "is_featured": True,
        "tags": ["cubism", "war"],
    },
    {
        "id": 4,
        "title": "Self-Portrait with Thorn Necklace",
        "description": "Limited edition photographic reproduction.",
        "price": Decimal("60.00"),
        "category": "photography",
        "images": [{"url": "https://images.example.com/thorn-necklace.jpg", "alt": "", "is_primary": False}],
        "width": 24, "height": 30, "dimension_unit": "in",
        "medium": "Archival pigment print",
        "year": 1940,
        "artist_id": 3,
        "is_featured": False,
        "tags": ["portrait"],
    },
    {
        "id": 5,
        "title": "Pumpkin",
        "description": "Polka-dotted pumpkin sculpture in painted fiberglass.",
        "price": Decimal("30.00"),
        "category": "sculpture",
        "images": [],
        "width": 1, "height": 1, "dimension_unit": "ft",
        "medium": "Painted fiberglass",
        "year": 1994,
        "artist_id": 4,
        "is_featured": True,
        "tags": ["polka dots", "installation"],
    },
    {
        "id": 6,
        "title": "Infinity Net (Digital)",
        "description": "Digital edition of an infinity net composition. Sold out.",
        "price": Decimal("250.00"),
        "category": "digital",
        "images": [],
        "width": 1920, "height": 1080, "dimension_unit": "cm",
        "medium": "Digital",
        "year": 2015,
        "artist_id": 4,
        "is_available": False,
        "tags": ["digital", "infinity"],
    },
]
