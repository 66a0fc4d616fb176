"""
Album API schemas (request/response models).
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from core.fields import Int4, RowId
from songs.schemas import Song


class AlbumCreate(BaseModel):
    artist_id: RowId
    name: str = Field(..., min_length=1, max_length=200)
    release_year: Int4


class AlbumUpdate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    release_year: Int4


class AlbumPatch(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=200)
    release_year: Int4 | None = None


class Album(BaseModel):
    id: int
    artist_id: int | None = None
    # Artist display name; absent when embedded under its artist.
    artist: str | None = None
    name: str
    release_year: int


class AlbumWithSongs(Album):
    songs: list[Song] = Field(default_factory=list, serialization_alias="Songs")
