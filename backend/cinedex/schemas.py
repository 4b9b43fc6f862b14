"""Pydantic schemas for scraped records and API responses."""
from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


# Section records
class BasicInfo(BaseModel):
    """Title id and display title."""
    id: str = ""
    title: str = ""


class Storyline(BaseModel):
    """Storyline section."""
    tagline: str = ""
    story: str = ""
    genres: List[str] = Field(default_factory=list)
    keywords: List[str] = Field(default_factory=list)
    certificate: str = ""
    has_parent_guide: bool = False


class RatingScore(BaseModel):
    """IMDb aggregate rating."""
    rating: str = ""
    total_votes: str = ""
    full_rating: str = ""


class SecondaryScore(BaseModel):
    """Metacritic score badge."""
    score: str = ""
    background_color: str = ""


class Ratings(BaseModel):
    """Ratings section."""
    score: RatingScore = Field(default_factory=RatingScore)
    secondary_score: SecondaryScore = Field(default_factory=SecondaryScore)


class CastMember(BaseModel):
    """One top-cast entry."""
    actor_name: str = ""
    actor_url: str = ""
    character_name: str = ""
    character_url: str = ""
    image_url: str = ""
    image_alt: str = ""
    is_voice_role: bool = False


class Video(BaseModel):
    """Trailer or clip card."""
    title: str = ""
    video_url: str = ""
    image_url: str = ""
    image_alt: str = ""


class Image(BaseModel):
    """Photo gallery image."""
    src: str = ""
    alt: str = ""


class VideoSource(BaseModel):
    """Native media source found on the page."""
    model_config = ConfigDict(extra="allow")

    src: str
    type: str = ""
    poster: str = ""
    id: str = ""
    width: Optional[int] = None
    height: Optional[int] = None
    duration: Optional[float] = None
    autoplay: bool = False
    controls: bool = False
    muted: bool = False
    loop: bool = False


class Language(BaseModel):
    """Spoken language link."""
    name: str = ""
    url: str = ""


class TrendingItem(BaseModel):
    """One row of a chart or list page."""
    ranking: Optional[int] = None
    title: str = ""
    year: str = ""
    runtime: str = ""
    certificate: str = ""
    rating: str = ""
    vote_count: str = ""
    metascore: str = ""
    plot: str = ""
    director: str = ""
    stars: List[str] = Field(default_factory=list)
    poster: str = ""
    detail_url: str = ""


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class MovieRecord(BaseModel):
    """Composite record for one title page.

    Every section key is always present. A section that could not be
    extracted holds its empty value (``None``, ``[]`` or an empty
    ``BasicInfo``).
    """
    url: str
    scraped_at: datetime = Field(default_factory=_utcnow)
    basic_info: BasicInfo = Field(default_factory=BasicInfo)
    storyline: Optional[Storyline] = None
    ratings: Optional[Ratings] = None
    cast: List[CastMember] = Field(default_factory=list)
    videos: List[Video] = Field(default_factory=list)
    images: List[Image] = Field(default_factory=list)
    video_sources: List[VideoSource] = Field(default_factory=list)
    poster: Optional[str] = None
    languages: List[Language] = Field(default_factory=list)


# API schemas
class TrendingResponse(BaseModel):
    """Trending list response."""
    url: str
    items: List[TrendingItem]
    count: int


class CacheDeleteResponse(BaseModel):
    """Cache invalidation response."""
    key: str
    deleted: bool


class TaskResponse(BaseModel):
    """Background task response."""
    task_id: str
    status: str
    message: str
