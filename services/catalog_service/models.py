from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, DateTime, Float, ForeignKey, Integer, JSON, Numeric, String
from sqlalchemy.orm import relationship

from shared.config.database import Base


def utcnow():
    return datetime.now(timezone.utc)


class Artist(Base):
    __tablename__ = "artists"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False, index=True)
    bio = Column(String(1000), nullable=False)
    avatar = Column(String(500), nullable=False, default="")
    website = Column(String(500), nullable=False, default="")
    social_media = Column(JSON, nullable=False, default=dict)  # instagram, twitter, facebook
    is_active = Column(Boolean, nullable=False, default=True)  # soft delete marker
    # Only ever moved by sales attribution, as atomic increments
    total_sales = Column(Integer, nullable=False, default=0)
    total_revenue = Column(Numeric(14, 2), nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)


class Artwork(Base):
    __tablename__ = "artworks"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(100), nullable=False, index=True)
    description = Column(String(2000), nullable=False)
    price = Column(Numeric(12, 2), nullable=False)
    category = Column(String(20), nullable=False, default="painting", index=True)
    images = Column(JSON, nullable=False, default=list)  # [{url, alt, is_primary}]
    width = Column(Float, nullable=False)
    height = Column(Float, nullable=False)
    dimension_unit = Column(String(4), nullable=False, default="cm")
    medium = Column(String(100), nullable=False)
    year = Column(Integer, nullable=False)
    artist_id = Column(Integer, ForeignKey("artists.id"), nullable=False, index=True)
    is_available = Column(Boolean, nullable=False, default=True)
    is_featured = Column(Boolean, nullable=False, default=False)
    tags = Column(JSON, nullable=False, default=list)
    views = Column(Integer, nullable=False, default=0)
    likes = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    artist = relationship("Artist", lazy="selectin")

    @property
    def dimensions(self) -> dict:
        return {"width": self.width, "height": self.height, "unit": self.dimension_unit}

    @property
    def primary_image(self) -> str:
        images = self.images or []
        for image in images:
            if image.get("is_primary"):
                return image["url"]
        return images[0]["url"] if images else ""
