"""
Song API endpoints.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Response, status

from core.db import Database
from core.dependencies import get_database
from core.fields import PathId
from core.responses import location

from . import schemas
from .repository import SongRepository

COLLECTION = "songs"

logger = logging.getLogger(__name__)

router = APIRouter()


def get_song_repository(database: Database = Depends(get_database)) -> SongRepository:
    return SongRepository(database)


@router.get("/songs", response_model=list[schemas.Song], response_model_exclude_none=True)
async def list_songs(
    repository: SongRepository = Depends(get_song_repository),
) -> list[schemas.Song]:
    return await repository.list()


@router.get("/songs/{song_id}", response_model=schemas.Song, response_model_exclude_none=True)
async def get_song(
    song_id: PathId,
    repository: SongRepository = Depends(get_song_repository),
) -> schemas.Song:
    return await repository.get(song_id)


@router.post(
    "/songs",
    status_code=status.HTTP_201_CREATED,
    response_model=schemas.Song,
    response_model_exclude_none=True,
)
async def create_song(
    payload: schemas.SongCreate,
    response: Response,
    repository: SongRepository = Depends(get_song_repository),
) -> schemas.Song:
    song = await repository.create(payload)
    logger.info("song_created id=%s album_id=%s", song.id, song.album_id)
    response.headers["Location"] = location(COLLECTION, song.id)
    return song


@router.put("/songs/{song_id}", response_model=schemas.Song, response_model_exclude_none=True)
async def update_song(
    song_id: PathId,
    payload: schemas.SongUpdate,
    response: Response,
    repository: SongRepository = Depends(get_song_repository),
) -> schemas.Song:
    song = await repository.update(song_id, payload)
    response.headers["Location"] = location(COLLECTION, song.id)
    return song


@router.patch("/songs/{song_id}", response_model=schemas.Song, response_model_exclude_none=True)
async def patch_song(
    song_id: PathId,
    payload: schemas.SongPatch,
    response: Response,
    repository: SongRepository = Depends(get_song_repository),
) -> schemas.Song:
    song = await repository.patch(song_id, payload)
    response.headers["Location"] = location(COLLECTION, song.id)
    return song


@router.delete("/songs/{song_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def delete_song(
    song_id: PathId,
    repository: SongRepository = Depends(get_song_repository),
) -> Response:
    await repository.delete(song_id)
    logger.info("song_deleted id=%s", song_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
