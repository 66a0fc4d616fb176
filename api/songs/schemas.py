"""
Song API schemas (request/response models).
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from core.fields import Int4, RowId


class SongCreate(BaseModel):
    album_id: RowId
    title: str = Field(..., min_length=1, max_length=300)
    track_number: Int4
    duration_seconds: Int4


class SongUpdate(BaseModel):
    title: str = Field(..., min_length=1, max_length=300)
    track_number: Int4
    duration_seconds: Int4


class SongPatch(BaseModel):
    title: str | None = Field(default=None, min_length=1, max_length=300)
    track_number: Int4 | None = None
    duration_seconds: Int4 | None = None


class Song(BaseModel):
    id: int
    album_id: int | None = None
    artist: str | None = None
    album: str | None = None
    title: str
    track_number: int
    duration_seconds: int
