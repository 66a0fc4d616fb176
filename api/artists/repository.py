"""
Artist persistence (raw SQL).
"""

from __future__ import annotations

from albums.schemas import Album
from core import errors
from core.db import Database

from .schemas import Artist, ArtistCreate, ArtistPatch, ArtistUpdate, ArtistWithAlbums

ENTITY = "Artist"


class ArtistRepository:
    """
    All SQL touching the `artist` table lives here.
    """

    def __init__(self, database: Database) -> None:
        self._db = database

    async def list(self) -> list[Artist]:
        rows = await self._db.fetch_all(
            """
            SELECT id, name, description
            FROM artist
            ORDER BY name, id
            """
        )
        return [Artist(**row) for row in rows]

    async def get(self, artist_id: int) -> ArtistWithAlbums:
        """
        Return the artist with its albums, newest release first.
        """
        # One read-only transaction so the artist and its albums come from the same snapshot.
        async with self._db.transaction(readonly=True) as tx:
            row = await tx.fetch_one(
                """
                SELECT id, name, description
                FROM artist
                WHERE id = $1
                """,
                artist_id,
            )
            if row is None:
                raise errors.NotFound(ENTITY)

            album_rows = await tx.fetch_all(
                """
                SELECT id, artist_id, name, release_year
                FROM album
                WHERE artist_id = $1
                ORDER BY release_year DESC, id
                """,
                artist_id,
            )
        return ArtistWithAlbums(**row, albums=[Album(**a) for a in album_rows])

    async def create(self, payload: ArtistCreate) -> Artist:
        row = await self._db.fetch_one(
            """
            INSERT INTO artist (name, description)
            VALUES ($1, $2)
            RETURNING id, name, description
            """,
            payload.name,
            payload.description,
        )
        if row is None:
            raise errors.DataAccessError("Failed to insert artist.")
        return Artist(**row)

    async def update(self, artist_id: int, payload: ArtistUpdate) -> Artist:
        row = await self._db.fetch_one(
            """
            UPDATE artist
            SET name = $2,
                description = $3
            WHERE id = $1
            RETURNING id, name, description
            """,
            artist_id,
            payload.name,
            payload.description,
        )
        if row is None:
            raise errors.NotFound(ENTITY)
        return Artist(**row)

    async def patch(self, artist_id: int, payload: ArtistPatch) -> Artist:
        """
        Apply only the supplied fields, in a single statement.
        """
        row = await self._db.fetch_one(
            """
            UPDATE artist
            SET name = COALESCE($2, name),
                description = COALESCE($3, description)
            WHERE id = $1
            RETURNING id, name, description
            """,
            artist_id,
            payload.name,
            payload.description,
        )
        if row is None:
            raise errors.NotFound(ENTITY)
        return Artist(**row)

    async def delete(self, artist_id: int) -> None:
        try:
            deleted = await self._db.execute("DELETE FROM artist WHERE id = $1", artist_id)
        except errors.ForeignKeyViolation as exc:
            raise errors.ForeignKeyViolation("Artist still has albums", constraint=exc.constraint) from exc
        if deleted == 0:
            raise errors.NotFound(ENTITY)
