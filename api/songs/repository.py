"""
Song persistence (raw SQL).
"""

from __future__ import annotations

from core import errors
from core.db import Database

from .schemas import Song, SongCreate, SongPatch, SongUpdate

ENTITY = "Song"

_SELECT_WITH_NAMES = """
    SELECT s.id, s.album_id, ar.name AS artist, al.name AS album,
           s.title, s.track_number, s.duration_seconds
    FROM {source} s
    JOIN album al ON al.id = s.album_id
    JOIN artist ar ON ar.id = al.artist_id
"""


def _returning_with_names(statement: str) -> str:
    return f"WITH changed AS ({statement})" + _SELECT_WITH_NAMES.format(source="changed")


class SongRepository:
    def __init__(self, database: Database) -> None:
        self._db = database

    async def list(self) -> list[Song]:
        rows = await self._db.fetch_all(
            _SELECT_WITH_NAMES.format(source="song") + "ORDER BY s.title, s.id"
        )
        return [Song(**row) for row in rows]

    async def get(self, song_id: int) -> Song:
        row = await self._db.fetch_one(
            _SELECT_WITH_NAMES.format(source="song") + "WHERE s.id = $1",
            song_id,
        )
        if row is None:
            raise errors.NotFound(ENTITY)
        return Song(**row)

    async def create(self, payload: SongCreate) -> Song:
        try:
            row = await self._db.fetch_one(
                _returning_with_names(
                    """
                    INSERT INTO song (album_id, title, track_number, duration_seconds)
                    VALUES ($1, $2, $3, $4)
                    RETURNING id, album_id, title, track_number, duration_seconds
                    """
                ),
                payload.album_id,
                payload.title,
                payload.track_number,
                payload.duration_seconds,
            )
        except errors.ForeignKeyViolation as exc:
            raise errors.ForeignKeyViolation("Album does not exist", constraint=exc.constraint) from exc
        if row is None:
            raise errors.DataAccessError("Failed to insert song.")
        return Song(**row)

    async def update(self, song_id: int, payload: SongUpdate) -> Song:
        row = await self._db.fetch_one(
            _returning_with_names(
                """
                UPDATE song
                SET title = $2,
                    track_number = $3,
                    duration_seconds = $4
                WHERE id = $1
                RETURNING id, album_id, title, track_number, duration_seconds
                """
            ),
            song_id,
            payload.title,
            payload.track_number,
            payload.duration_seconds,
        )
        if row is None:
            raise errors.NotFound(ENTITY)
        return Song(**row)

    async def patch(self, song_id: int, payload: SongPatch) -> Song:
        """
        Apply only the supplied fields, in a single statement.
        """
        row = await self._db.fetch_one(
            _returning_with_names(
                """
                UPDATE song
                SET title = COALESCE($2, title),
                    track_number = COALESCE($3, track_number),
                    duration_seconds = COALESCE($4, duration_seconds)
                WHERE id = $1
                RETURNING id, album_id, title, track_number, duration_seconds
                """
            ),
            song_id,
            payload.title,
            payload.track_number,
            payload.duration_seconds,
        )
        if row is None:
            raise errors.NotFound(ENTITY)
        return Song(**row)

    async def delete(self, song_id: int) -> None:
        deleted = await self._db.execute("DELETE FROM song WHERE id = $1", song_id)
        if deleted == 0:
            raise errors.NotFound(ENTITY)
