"""Pydantic schemas for the resource library."""

from datetime import date
from typing import Literal, Optional

from pydantic import BaseModel, Field, model_validator

from components.core.validation import explicit_nulls

ResourceType = Literal["article", "video", "pdf", "link"]


class ResourceBase(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    type: ResourceType = "article"
    category: Optional[str] = Field(None, max_length=100)
    url: Optional[str] = Field(None, max_length=500)
    author: Optional[str] = Field(None, max_length=255)
    published_date: Optional[date] = None
    is_featured: bool = False


class ResourceCreate(ResourceBase):
    pass


class ResourceUpdate(BaseModel):
    """Omitted fields keep their saved value."""
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    type: Optional[ResourceType] = None
    category: Optional[str] = Field(None, max_length=100)
    url: Optional[str] = Field(None, max_length=500)
    author: Optional[str] = Field(None, max_length=255)
    published_date: Optional[date] = None
    is_featured: Optional[bool] = None

    @model_validator(mode="after")
    def check_required_fields(self):
        nulls = explicit_nulls(self, ("title", "type", "is_featured"))
        if nulls:
            raise ValueError(f"{', '.join(nulls)} cannot be null")
        return self


class Resource(ResourceBase):
    id: int
    is_favorite: bool = False

    class Config:
        from_attributes = True


class FavoriteStatus(BaseModel):
    resource_id: int
    is_favorite: bool
