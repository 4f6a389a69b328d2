from datetime import datetime
from enum import Enum
from typing import Annotated, List, Optional

from pydantic import AfterValidator, Field, HttpUrl

from shared.schemas import CamelModel, Money, NonEmptyStr


class ArtworkCategory(str, Enum):
    PAINTING = "painting"
    SCULPTURE = "sculpture"
    DIGITAL = "digital"
    PHOTOGRAPHY = "photography"
    MIXED_MEDIA = "mixed-media"


class DimensionUnit(str, Enum):
    CM = "cm"
    IN = "in"
    FT = "ft"


def _check_year(value: int) -> int:
    if value > datetime.now().year:
        raise ValueError("Year cannot be in the future")
    return value


Year = Annotated[int, Field(ge=1000), AfterValidator(_check_year)]


# --- Artists ---

class SocialMedia(CamelModel):
    instagram: Optional[HttpUrl] = None
    twitter: Optional[HttpUrl] = None
    facebook: Optional[HttpUrl] = None


class ArtistCreate(CamelModel):
    name: NonEmptyStr = Field(max_length=100)
    bio: NonEmptyStr = Field(max_length=1000)
    avatar: str = ""
    website: Optional[HttpUrl] = None
    social_media: SocialMedia = Field(default_factory=SocialMedia)


class ArtistUpdate(CamelModel):
    name: Optional[NonEmptyStr] = Field(default=None, max_length=100)
    bio: Optional[NonEmptyStr] = Field(default=None, max_length=1000)
    avatar: Optional[str] = None
    website: Optional[HttpUrl] = None
    social_media: Optional[SocialMedia] = None
    is_active: Optional[bool] = None


class SocialMediaResponse(CamelModel):
    instagram: str = ""
    twitter: str = ""
    facebook: str = ""


class ArtistResponse(CamelModel):
    id: int
    name: str
    bio: str
    avatar: str
    website: str
    social_media: SocialMediaResponse
    is_active: bool
    total_sales: int
    total_revenue: Money
    created_at: datetime
    updated_at: datetime


class ArtistSummary(CamelModel):
    id: int
    name: str
    avatar: str = ""


class TopArtist(CamelModel):
    id: int
    name: str
    avatar: str
    total_sales: int
    total_revenue: Money


class ArtistStats(CamelModel):
    total_artists: int
    total_inactive_artists: int
    total_sales: int
    total_revenue: Money
    average_revenue: Money


# --- Artworks ---

class ArtworkImage(CamelModel):
    url: NonEmptyStr
    alt: str = ""
    is_primary: bool = False


class Dimensions(CamelModel):
    width: float = Field(gt=0)
    height: float = Field(gt=0)
    unit: DimensionUnit = DimensionUnit.CM


class ArtworkCreate(CamelModel):
    title: NonEmptyStr = Field(max_length=100)
    description: NonEmptyStr = Field(max_length=2000)
    price: Money = Field(ge=0)
    category: ArtworkCategory = ArtworkCategory.PAINTING
    images: List[ArtworkImage] = []
    dimensions: Dimensions
    medium: NonEmptyStr = Field(max_length=100)
    year: Year
    artist: int = Field(gt=0)
    is_available: bool = True
    is_featured: bool = False
    tags: List[str] = []


class ArtworkUpdate(CamelModel):
    title: Optional[NonEmptyStr] = Field(default=None, max_length=100)
    description: Optional[NonEmptyStr] = Field(default=None, max_length=2000)
    price: Optional[Money] = Field(default=None, ge=0)
    category: Optional[ArtworkCategory] = None
    images: Optional[List[ArtworkImage]] = None
    dimensions: Optional[Dimensions] = None
    medium: Optional[NonEmptyStr] = Field(default=None, max_length=100)
    year: Optional[Year] = None
    artist: Optional[int] = Field(default=None, gt=0)
    is_available: Optional[bool] = None
    is_featured: Optional[bool] = None
    tags: Optional[List[str]] = None


class ArtworkResponse(CamelModel):
    id: int
    title: str
    description: str
    price: Money
    category: ArtworkCategory
    images: List[ArtworkImage]
    primary_image: str
    dimensions: Dimensions
    medium: str
    year: int
    artist_id: int
    artist: Optional[ArtistSummary] = None
    is_available: bool
    is_featured: bool
    tags: List[str]
    views: int
    likes: int
    created_at: datetime
    updated_at: datetime


class CategoryCount(CamelModel):
    category: ArtworkCategory
    count: int
    available: int


# --- Envelopes ---

class ArtistEnvelope(CamelModel):
    artist: ArtistResponse
    message: str


class ArtistDetailResponse(CamelModel):
    artist: ArtistResponse
    artworks: List[ArtworkResponse]


class ArtworkEnvelope(CamelModel):
    artwork: ArtworkResponse
    message: str


class ArtworkDetailResponse(CamelModel):
    artwork: ArtworkResponse


class MessageResponse(CamelModel):
    message: str
