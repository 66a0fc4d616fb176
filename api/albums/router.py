"""
Album API endpoints.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Response, status

from core.db import Database
from core.dependencies import get_database
from core.fields import PathId
from core.responses import location

from . import schemas
from .repository import AlbumRepository

COLLECTION = "albums"

logger = logging.getLogger(__name__)

router = APIRouter()


def get_album_repository(database: Database = Depends(get_database)) -> AlbumRepository:
    return AlbumRepository(database)


@router.get("/albums", response_model=list[schemas.Album], response_model_exclude_none=True)
async def list_albums(
    repository: AlbumRepository = Depends(get_album_repository),
) -> list[schemas.Album]:
    return await repository.list()


@router.get(
    "/albums/{album_id}",
    response_model=schemas.AlbumWithSongs,
    response_model_exclude_none=True,
)
async def get_album(
    album_id: PathId,
    repository: AlbumRepository = Depends(get_album_repository),
) -> schemas.AlbumWithSongs:
    return await repository.get(album_id)


@router.post(
    "/albums",
    status_code=status.HTTP_201_CREATED,
    response_model=schemas.Album,
    response_model_exclude_none=True,
)
async def create_album(
    payload: schemas.AlbumCreate,
    response: Response,
    repository: AlbumRepository = Depends(get_album_repository),
) -> schemas.Album:
    album = await repository.create(payload)
    logger.info("album_created id=%s artist_id=%s", album.id, album.artist_id)
    response.headers["Location"] = location(COLLECTION, album.id)
    return album


@router.put("/albums/{album_id}", response_model=schemas.Album, response_model_exclude_none=True)
async def update_album(
    album_id: PathId,
    payload: schemas.AlbumUpdate,
    response: Response,
    repository: AlbumRepository = Depends(get_album_repository),
) -> schemas.Album:
    album = await repository.update(album_id, payload)
    response.headers["Location"] = location(COLLECTION, album.id)
    return album


@router.patch("/albums/{album_id}", response_model=schemas.Album, response_model_exclude_none=True)
async def patch_album(
    album_id: PathId,
    payload: schemas.AlbumPatch,
    response: Response,
    repository: AlbumRepository = Depends(get_album_repository),
) -> schemas.Album:
    album = await repository.patch(album_id, payload)
    response.headers["Location"] = location(COLLECTION, album.id)
    return album


@router.delete("/albums/{album_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def delete_album(
    album_id: PathId,
    repository: AlbumRepository = Depends(get_album_repository),
) -> Response:
    await repository.delete(album_id)
    logger.info("album_deleted id=%s", album_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
