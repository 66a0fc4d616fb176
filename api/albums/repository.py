"""
Album persistence (raw SQL).

Writes are wrapped in a CTE so the returned row carries the artist's display
name without a second round trip.
"""

from __future__ import annotations

from core import errors
from core.db import Database
from songs.schemas import Song

from .schemas import Album, AlbumCreate, AlbumPatch, AlbumUpdate, AlbumWithSongs

ENTITY = "Album"

_SELECT_WITH_ARTIST = """
    SELECT al.id, al.artist_id, ar.name AS artist, al.name, al.release_year
    FROM {source} al
    JOIN artist ar ON ar.id = al.artist_id
"""


def _returning_with_artist(statement: str) -> str:
    return f"WITH changed AS ({statement})" + _SELECT_WITH_ARTIST.format(source="changed")


class AlbumRepository:
    def __init__(self, database: Database) -> None:
        self._db = database

    async def list(self) -> list[Album]:
        rows = await self._db.fetch_all(
            _SELECT_WITH_ARTIST.format(source="album") + "ORDER BY ar.name, al.name, al.id"
        )
        return [Album(**row) for row in rows]

    async def get(self, album_id: int) -> AlbumWithSongs:
        """
        Return the album with its songs in track order.
        """
        async with self._db.transaction(readonly=True) as tx:
            row = await tx.fetch_one(
                _SELECT_WITH_ARTIST.format(source="album") + "WHERE al.id = $1",
                album_id,
            )
            if row is None:
                raise errors.NotFound(ENTITY)

            song_rows = await tx.fetch_all(
                """
                SELECT id, album_id, title, track_number, duration_seconds
                FROM song
                WHERE album_id = $1
                ORDER BY track_number, id
                """,
                album_id,
            )
        return AlbumWithSongs(**row, songs=[Song(**s) for s in song_rows])

    async def create(self, payload: AlbumCreate) -> Album:
        try:
            row = await self._db.fetch_one(
                _returning_with_artist(
                    """
                    INSERT INTO album (artist_id, name, release_year)
                    VALUES ($1, $2, $3)
                    RETURNING id, artist_id, name, release_year
                    """
                ),
                payload.artist_id,
                payload.name,
                payload.release_year,
            )
        except errors.ForeignKeyViolation as exc:
            raise errors.ForeignKeyViolation("Artist does not exist", constraint=exc.constraint) from exc
        if row is None:
            raise errors.DataAccessError("Failed to insert album.")
        return Album(**row)

    async def update(self, album_id: int, payload: AlbumUpdate) -> Album:
        row = await self._db.fetch_one(
            _returning_with_artist(
                """
                UPDATE album
                SET name = $2,
                    release_year = $3
                WHERE id = $1
                RETURNING id, artist_id, name, release_year
                """
            ),
            album_id,
            payload.name,
            payload.release_year,
        )
        if row is None:
            raise errors.NotFound(ENTITY)
        return Album(**row)

    async def patch(self, album_id: int, payload: AlbumPatch) -> Album:
        row = await self._db.fetch_one(
            _returning_with_artist(
                """
                UPDATE album
                SET name = COALESCE($2, name),
                    release_year = COALESCE($3, release_year)
                WHERE id = $1
                RETURNING id, artist_id, name, release_year
                """
            ),
            album_id,
            payload.name,
            payload.release_year,
        )
        if row is None:
            raise errors.NotFound(ENTITY)
        return Album(**row)

    async def delete(self, album_id: int) -> None:
        try:
            deleted = await self._db.execute("DELETE FROM album WHERE id = $1", album_id)
        except errors.ForeignKeyViolation as exc:
            raise errors.ForeignKeyViolation("Album still has songs", constraint=exc.constraint) from exc
        if deleted == 0:
            raise errors.NotFound(ENTITY)
