"""Website content: carousel slides, page sections, training programs, featured products."""

from pydantic import BaseModel, Field
from typing import Optional, List
from enum import Enum


class MediaTypeEnum(str, Enum):
    IMAGE = "image"
    VIDEO = "video"


class LevelEnum(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


# ── Carousel ─────────────────────────────────────────────────────


class CarouselItemRequest(BaseModel):
    title: str = Field(..., min_length=1)
    caption: Optional[str] = None
    page: str = Field(..., min_length=1)
    order: int = Field(0, ge=0)
    is_active: bool = True
    media_url: Optional[str] = None
    alt: Optional[str] = None
    type: MediaTypeEnum = MediaTypeEnum.IMAGE


class CarouselItemUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1)
    caption: Optional[str] = None
    page: Optional[str] = Field(None, min_length=1)
    order: Optional[int] = Field(None, ge=0)
    is_active: Optional[bool] = None
    media_url: Optional[str] = None
    alt: Optional[str] = None
    type: Optional[MediaTypeEnum] = None


class ReorderRequest(BaseModel):
    """New display order: ids listed first-to-last."""
    ids: List[str] = Field(..., min_length=1)


# ── Page sections ────────────────────────────────────────────────


class PageSectionRequest(BaseModel):
    page: str = Field(..., min_length=1)
    section: str = Field(..., min_length=1)
    title: Optional[str] = None
    subtitle: Optional[str] = None
    content: Optional[str] = None
    is_active: bool = True
    order: int = Field(0, ge=0)


class PageSectionUpdate(BaseModel):
    page: Optional[str] = Field(None, min_length=1)
    section: Optional[str] = Field(None, min_length=1)
    title: Optional[str] = None
    subtitle: Optional[str] = None
    content: Optional[str] = None
    is_active: Optional[bool] = None
    order: Optional[int] = Field(None, ge=0)


# ── Training programs ────────────────────────────────────────────


class TrainingProgramRequest(BaseModel):
    title: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    duration: str = Field(..., min_length=1)
    level: LevelEnum
    price: float = Field(..., ge=0)
    currency: str = "USD"
    features: List[str] = Field(default_factory=list)
    image_url: Optional[str] = None
    is_active: bool = True
    order: int = Field(0, ge=0)
    max_students: Optional[int] = Field(None, ge=1)


class TrainingProgramUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = Field(None, min_length=1)
    duration: Optional[str] = Field(None, min_length=1)
    level: Optional[LevelEnum] = None
    price: Optional[float] = Field(None, ge=0)
    currency: Optional[str] = None
    features: Optional[List[str]] = None
    image_url: Optional[str] = None
    is_active: Optional[bool] = None
    order: Optional[int] = Field(None, ge=0)
    max_students: Optional[int] = Field(None, ge=1)


# ── Featured products ────────────────────────────────────────────


class FeaturedProductRequest(BaseModel):
    product_id: str = Field(..., min_length=1)
    page: str = "home"
    title: Optional[str] = None
    description: Optional[str] = None
    image_url: Optional[str] = None
    order: int = Field(0, ge=0)
    is_active: bool = True


class FeaturedProductUpdate(BaseModel):
    page: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    image_url: Optional[str] = None
    order: Optional[int] = Field(None, ge=0)
    is_active: Optional[bool] = None
