from __future__ import annotations

import pytest

from artists.repository import ArtistRepository
from artists.schemas import ArtistCreate, ArtistPatch, ArtistUpdate
from core import errors

ARTIST = {"id": 1, "name": "King Gizzard", "description": "Psych rock from Melbourne"}


# =============================================================================
# Repository
# =============================================================================


class TestArtistRepository:
    async def test_list_orders_by_name(self, fake_db):
        fake_db.queue([ARTIST, {"id": 2, "name": "Tame Impala", "description": ""}])

        artists = await ArtistRepository(fake_db).list()

        assert [a.name for a in artists] == ["King Gizzard", "Tame Impala"]
        assert "ORDER BY name, id" in fake_db.statements[0]

    async def test_get_embeds_albums_newest_first(self, fake_db):
        fake_db.queue(
            ARTIST,
            [
                {"id": 11, "artist_id": 1, "name": "Flight b741", "release_year": 2024},
                {"id": 10, "artist_id": 1, "name": "Nonagon Infinity", "release_year": 2016},
            ],
        )

        artist = await ArtistRepository(fake_db).get(1)

        assert artist.id == 1
        assert [a.release_year for a in artist.albums] == [2024, 2016]
        assert fake_db.transactions == [True]
        assert "ORDER BY release_year DESC" in fake_db.statements[1]
        assert fake_db.args == [(1,), (1,)]

    async def test_get_missing_raises_not_found(self, fake_db):
        fake_db.queue(None)

        with pytest.raises(errors.NotFound) as exc_info:
            await ArtistRepository(fake_db).get(404)

        assert str(exc_info.value) == "Artist not found"
        assert len(fake_db.calls) == 1

    async def test_create_returns_generated_id(self, fake_db):
        fake_db.queue({"id": 7, "name": "X", "description": "Y"})

        artist = await ArtistRepository(fake_db).create(ArtistCreate(name="X", description="Y"))

        assert artist.model_dump() == {"id": 7, "name": "X", "description": "Y"}
        assert fake_db.args == [("X", "Y")]
        assert fake_db.statements[0].startswith("INSERT INTO artist")

    async def test_update_overwrites_with_empty_description(self, fake_db):
        fake_db.queue({"id": 1, "name": "New", "description": ""})

        await ArtistRepository(fake_db).update(1, ArtistUpdate(name="New", description=""))

        assert fake_db.args == [(1, "New", "")]

    async def test_update_missing_raises_not_found(self, fake_db):
        fake_db.queue(None)
        with pytest.raises(errors.NotFound):
            await ArtistRepository(fake_db).update(9, ArtistUpdate(name="A", description="B"))

    async def test_patch_is_one_statement_with_nulls_for_absent_fields(self, fake_db):
        fake_db.queue({**ARTIST, "name": "KGLW"})

        artist = await ArtistRepository(fake_db).patch(1, ArtistPatch(name="KGLW"))

        assert artist.name == "KGLW"
        assert artist.description == ARTIST["description"]
        assert len(fake_db.calls) == 1
        assert "COALESCE($2, name)" in fake_db.statements[0]
        assert "COALESCE($3, description)" in fake_db.statements[0]
        assert fake_db.args == [(1, "KGLW", None)]

    async def test_patch_missing_raises_not_found(self, fake_db):
        fake_db.queue(None)
        with pytest.raises(errors.NotFound):
            await ArtistRepository(fake_db).patch(9, ArtistPatch(description="x"))

    async def test_delete_checks_affected_rows(self, fake_db):
        fake_db.queue(0)
        with pytest.raises(errors.NotFound):
            await ArtistRepository(fake_db).delete(9)

    async def test_delete_with_albums_is_rejected(self, fake_db):
        fake_db.queue(errors.ForeignKeyViolation("detail from driver", constraint="album_artist_id_fkey"))

        with pytest.raises(errors.ForeignKeyViolation) as exc_info:
            await ArtistRepository(fake_db).delete(1)

        assert str(exc_info.value) == "Artist still has albums"
        assert exc_info.value.constraint == "album_artist_id_fkey"


# =============================================================================
# HTTP
# =============================================================================


async def test_create_artist(client, fake_db):
    fake_db.queue({"id": 42, "name": "X", "description": "Y"})

    resp = await client.post("/artists", json={"name": "X", "description": "Y"})

    assert resp.status_code == 201
    assert resp.json() == {"id": 42, "name": "X", "description": "Y"}
    assert resp.headers["location"] == "/artists/42"


async def test_create_artist_requires_a_name(client, fake_db):
    for body in ({"description": "Y"}, {"name": "", "description": "Y"}, {"name": None}):
        resp = await client.post("/artists", json=body)
        assert resp.status_code == 400
        assert resp.json()["error"] == "Invalid request body"
    assert fake_db.calls == []


async def test_get_artist_with_no_albums(client, fake_db):
    fake_db.queue({"id": 42, "name": "X", "description": "Y"}, [])

    resp = await client.get("/artists/42")

    assert resp.status_code == 200
    assert resp.json() == {"id": 42, "name": "X", "description": "Y", "Albums": []}


async def test_get_artist_embeds_albums_without_artist_name(client, fake_db):
    fake_db.queue(ARTIST, [{"id": 10, "artist_id": 1, "name": "Nonagon Infinity", "release_year": 2016}])

    resp = await client.get("/artists/1")

    assert resp.json()["Albums"] == [
        {"id": 10, "artist_id": 1, "name": "Nonagon Infinity", "release_year": 2016},
    ]


async def test_get_missing_artist(client, fake_db):
    fake_db.queue(None)

    resp = await client.get("/artists/404")

    assert resp.status_code == 404
    assert resp.json() == {"error": "Artist not found"}


async def test_list_artists(client, fake_db):
    fake_db.queue([ARTIST])

    resp = await client.get("/artists")

    assert resp.status_code == 200
    assert resp.json() == [ARTIST]


async def test_list_artists_empty(client, fake_db):
    fake_db.queue([])
    resp = await client.get("/artists")
    assert resp.json() == []


async def test_update_artist(client, fake_db):
    fake_db.queue({"id": 1, "name": "New", "description": "Desc"})

    resp = await client.put("/artists/1", json={"name": "New", "description": "Desc"})

    assert resp.status_code == 200
    assert resp.json() == {"id": 1, "name": "New", "description": "Desc"}
    assert resp.headers["location"] == "/artists/1"


async def test_update_artist_requires_every_field(client, fake_db):
    resp = await client.put("/artists/1", json={"name": "New"})
    assert resp.status_code == 400
    assert fake_db.calls == []


async def test_update_missing_artist(client, fake_db):
    fake_db.queue(None)

    resp = await client.put("/artists/9", json={"name": "New", "description": ""})

    assert resp.status_code == 404
    assert resp.json() == {"error": "Artist not found"}


async def test_patch_artist_description_only(client, fake_db):
    fake_db.queue({**ARTIST, "description": "Updated"})

    resp = await client.patch("/artists/1", json={"description": "Updated"})

    assert resp.status_code == 200
    assert resp.json() == {**ARTIST, "description": "Updated"}
    assert resp.headers["location"] == "/artists/1"
    assert fake_db.args == [(1, None, "Updated")]


async def test_patch_missing_artist(client, fake_db):
    fake_db.queue(None)
    resp = await client.patch("/artists/9", json={"name": "N"})
    assert resp.status_code == 404
    assert resp.json() == {"error": "Artist not found"}


async def test_delete_artist(client, fake_db):
    fake_db.queue(1)

    resp = await client.delete("/artists/1")

    assert resp.status_code == 204
    assert resp.content == b""


async def test_delete_missing_artist(client, fake_db):
    fake_db.queue(0)

    resp = await client.delete("/artists/1")

    assert resp.status_code == 404
    assert resp.json() == {"error": "Artist not found"}


async def test_delete_artist_with_albums_conflicts(client, fake_db):
    fake_db.queue(errors.ForeignKeyViolation('Key (id)=(1) is still referenced from table "album".'))

    resp = await client.delete("/artists/1")

    assert resp.status_code == 409
    assert resp.json() == {"error": "Artist still has albums"}
