"""
Artist API endpoints.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Response, status

from core.db import Database
from core.dependencies import get_database
from core.fields import PathId
from core.responses import location

from . import schemas
from .repository import ArtistRepository

COLLECTION = "artists"

logger = logging.getLogger(__name__)

router = APIRouter()


def get_artist_repository(database: Database = Depends(get_database)) -> ArtistRepository:
    return ArtistRepository(database)


@router.get("/artists", response_model=list[schemas.Artist])
async def list_artists(
    repository: ArtistRepository = Depends(get_artist_repository),
) -> list[schemas.Artist]:
    return await repository.list()


@router.get(
    "/artists/{artist_id}",
    response_model=schemas.ArtistWithAlbums,
    response_model_exclude_none=True,
)
async def get_artist(
    artist_id: PathId,
    repository: ArtistRepository = Depends(get_artist_repository),
) -> schemas.ArtistWithAlbums:
    return await repository.get(artist_id)


@router.post("/artists", status_code=status.HTTP_201_CREATED, response_model=schemas.Artist)
async def create_artist(
    payload: schemas.ArtistCreate,
    response: Response,
    repository: ArtistRepository = Depends(get_artist_repository),
) -> schemas.Artist:
    artist = await repository.create(payload)
    logger.info("artist_created id=%s", artist.id)
    response.headers["Location"] = location(COLLECTION, artist.id)
    return artist


@router.put("/artists/{artist_id}", response_model=schemas.Artist)
async def update_artist(
    artist_id: PathId,
    payload: schemas.ArtistUpdate,
    response: Response,
    repository: ArtistRepository = Depends(get_artist_repository),
) -> schemas.Artist:
    artist = await repository.update(artist_id, payload)
    response.headers["Location"] = location(COLLECTION, artist.id)
    return artist


@router.patch("/artists/{artist_id}", response_model=schemas.Artist)
async def patch_artist(
    artist_id: PathId,
    payload: schemas.ArtistPatch,
    response: Response,
    repository: ArtistRepository = Depends(get_artist_repository),
) -> schemas.Artist:
    artist = await repository.patch(artist_id, payload)
    response.headers["Location"] = location(COLLECTION, artist.id)
    return artist


@router.delete("/artists/{artist_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def delete_artist(
    artist_id: PathId,
    repository: ArtistRepository = Depends(get_artist_repository),
) -> Response:
    await repository.delete(artist_id)
    logger.info("artist_deleted id=%s", artist_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
