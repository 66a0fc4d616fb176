"""
Artist API schemas (request/response models).
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from albums.schemas import Album


class ArtistCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: str = Field(default="", max_length=5000)


class ArtistUpdate(BaseModel):
    """
    Full replace: every mutable field is overwritten.
    """

    name: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., max_length=5000)


class ArtistPatch(BaseModel):
    # Omitted and null fields are left untouched.
    name: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=5000)


class Artist(BaseModel):
    id: int
    name: str
    description: str


class ArtistWithAlbums(Artist):
    albums: list[Album] = Field(default_factory=list, serialization_alias="Albums")
