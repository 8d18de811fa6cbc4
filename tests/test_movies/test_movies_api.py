import pytest
from bson import ObjectId
from httpx import AsyncClient

from app.repositories.movies import get_movies_repository
from tests.fixtures.repositories import FailingRepository

MATRIX = {"name": "The Matrix", "year": 1999, "genres": ["sci-fi"], "description": "Red or blue."}


# ─────────────────────────────────────────────────────────────
# POST /movies/add/movie
# ─────────────────────────────────────────────────────────────
@pytest.mark.anyio
async def test_add_movie(async_client: AsyncClient, sign_in):
    user = await sign_in()

    resp = await async_client.post("/movies/add/movie", json={"movie": MATRIX})
    assert resp.status_code == 201, resp.text
    data = resp.json()
    assert data["user"] == user["_id"]
    assert {k: data[k] for k in MATRIX} == MATRIX


@pytest.mark.anyio
async def test_add_movie_name_only(async_client: AsyncClient, sign_in):
    await sign_in()

    resp = await async_client.post("/movies/add/movie", json={"movie": {"name": "Dune"}})
    assert resp.status_code == 201
    data = resp.json()
    assert data["year"] is None
    assert data["genres"] == []


@pytest.mark.anyio
async def test_add_movie_missing_information(async_client: AsyncClient):
    resp = await async_client.post("/movies/add/movie", json={"movie": {"year": 2000}})
    assert resp.status_code == 400
    assert resp.json() == {"error": "missing information"}


@pytest.mark.anyio
async def test_add_movie_without_session(async_client: AsyncClient):
    resp = await async_client.post("/movies/add/movie", json={"movie": MATRIX})
    assert resp.status_code == 500
    assert resp.json() == {"error": "You are not authenticated"}


@pytest.mark.anyio
async def test_add_movie_year_out_of_range(async_client: AsyncClient, sign_in):
    await sign_in()
    resp = await async_client.post("/movies/add/movie", json={"movie": {"name": "x", "year": 12}})
    assert resp.status_code == 400
    assert resp.json() == {"error": "Invalid request body"}


@pytest.mark.anyio
async def test_add_movie_store_failure(app, async_client: AsyncClient, sign_in):
    await sign_in()
    app.dependency_overrides[get_movies_repository] = lambda: FailingRepository()

    resp = await async_client.post("/movies/add/movie", json={"movie": MATRIX})
    assert resp.status_code == 500
    assert resp.json() == {"error": "Failed to add movie"}


# ─────────────────────────────────────────────────────────────
# GET /movies, GET /movies/{movieId}
# ─────────────────────────────────────────────────────────────
@pytest.mark.anyio
async def test_list_movies_and_filter_by_owner(async_client: AsyncClient, movies_repo):
    await movies_repo.insert_one({"name": "A", "user": "u1", "genres": []})
    await movies_repo.insert_one({"name": "B", "user": "u2", "genres": []})

    everything = await async_client.get("/movies")
    assert everything.status_code == 200
    assert [m["name"] for m in everything.json()] == ["A", "B"]

    mine = await async_client.get("/movies", params={"user": "u2"})
    assert [m["name"] for m in mine.json()] == ["B"]


@pytest.mark.anyio
async def test_list_movies_store_failure(app, async_client: AsyncClient):
    app.dependency_overrides[get_movies_repository] = lambda: FailingRepository()

    resp = await async_client.get("/movies")
    assert resp.status_code == 500
    assert resp.json() == {"error": "Failed to fetch movies"}


@pytest.mark.anyio
async def test_get_movie(async_client: AsyncClient, movies_repo):
    created = await movies_repo.insert_one({"name": "A", "user": "u1", "genres": ["drama"]})

    resp = await async_client.get(f"/movies/{created['_id']}")
    assert resp.status_code == 200
    assert resp.json()["genres"] == ["drama"]


@pytest.mark.anyio
async def test_get_movie_not_found(async_client: AsyncClient):
    resp = await async_client.get(f"/movies/{ObjectId()}")
    assert resp.status_code == 404
    assert resp.json() == {"error": "Movie not found"}


@pytest.mark.anyio
async def test_get_movie_malformed_id(async_client: AsyncClient):
    resp = await async_client.get("/movies/zzz")
    assert resp.status_code == 500
    assert resp.json() == {"error": "Failed to fetch movie"}


# ─────────────────────────────────────────────────────────────
# PUT /movies/edit/{movieId}
# ─────────────────────────────────────────────────────────────
@pytest.mark.anyio
async def test_edit_movie_partial(async_client: AsyncClient, movies_repo):
    created = await movies_repo.insert_one({**MATRIX, "user": "u1"})

    resp = await async_client.put(f"/movies/edit/{created['_id']}", json={"year": 2000})
    assert resp.status_code == 200
    data = resp.json()
    assert data["year"] == 2000
    assert data["name"] == "The Matrix"


@pytest.mark.anyio
@pytest.mark.parametrize("body", [None, {}, {"name": ""}])
async def test_edit_movie_missing_information(async_client: AsyncClient, movies_repo, body):
    created = await movies_repo.insert_one({**MATRIX, "user": "u1"})

    resp = await async_client.put(f"/movies/edit/{created['_id']}", json=body)
    assert resp.status_code == 400
    assert resp.json() == {"error": "missing information"}


@pytest.mark.anyio
async def test_edit_movie_not_found(async_client: AsyncClient):
    resp = await async_client.put(f"/movies/edit/{ObjectId()}", json={"name": "x"})
    assert resp.status_code == 404
    assert resp.json() == {"error": "Movie not found"}


@pytest.mark.anyio
async def test_edit_movie_malformed_id(async_client: AsyncClient):
    resp = await async_client.put("/movies/edit/123", json={"name": "x"})
    assert resp.status_code == 500
    assert resp.json() == {"error": "Failed to edit movie"}


# ─────────────────────────────────────────────────────────────
# DELETE /movies/delete/{movieId}
# ─────────────────────────────────────────────────────────────
@pytest.mark.anyio
async def test_delete_own_movie(async_client: AsyncClient, sign_in, movies_repo):
    user = await sign_in()
    created = await movies_repo.insert_one({"name": "A", "user": user["_id"]})

    resp = await async_client.delete(f"/movies/delete/{created['_id']}")
    assert resp.status_code == 200
    assert resp.json() == {"message": "Movie deleted"}
    assert await movies_repo.find_by_id(created["_id"]) is None


@pytest.mark.anyio
async def test_delete_someone_elses_movie(async_client: AsyncClient, sign_in, movies_repo):
    await sign_in()
    created = await movies_repo.insert_one({"name": "A", "user": "another-user"})

    resp = await async_client.delete(f"/movies/delete/{created['_id']}")
    assert resp.status_code == 404
    assert resp.json() == {"error": "Movie not found"}
    assert await movies_repo.find_by_id(created["_id"]) is not None


@pytest.mark.anyio
async def test_delete_movie_without_session(async_client: AsyncClient, movies_repo):
    created = await movies_repo.insert_one({"name": "A", "user": "u1"})

    resp = await async_client.delete(f"/movies/delete/{created['_id']}")
    assert resp.status_code == 500
    assert resp.json() == {"error": "You are not authenticated"}


@pytest.mark.anyio
async def test_delete_movie_store_failure(app, async_client: AsyncClient, sign_in):
    await sign_in()
    app.dependency_overrides[get_movies_repository] = lambda: FailingRepository()

    resp = await async_client.delete(f"/movies/delete/{ObjectId()}")
    assert resp.status_code == 500
    assert resp.json() == {"error": "Failed to delete movie"}


@pytest.mark.anyio
@pytest.mark.parametrize("body", [{"movie": "Dune"}, {"movie": []}, [], {"movie": {"name": 1984}}])
async def test_add_movie_wrong_shapes_are_missing_information(async_client: AsyncClient, sign_in, movies_repo, body):
    await sign_in()

    resp = await async_client.post("/movies/add/movie", json=body)
    assert resp.status_code == 400
    assert resp.json() == {"error": "missing information"}
    assert await movies_repo.find_many() == []


@pytest.mark.anyio
@pytest.mark.parametrize("body", [[], "x", {"name": 5}])
async def test_edit_movie_wrong_shapes_are_missing_information(async_client: AsyncClient, movies_repo, body):
    created = await movies_repo.insert_one({**MATRIX, "user": "u1"})

    resp = await async_client.put(f"/movies/edit/{created['_id']}", json=body)
    assert resp.status_code == 400
    assert resp.json() == {"error": "missing information"}
    assert (await movies_repo.find_by_id(created["_id"]))["name"] == "The Matrix"


@pytest.mark.anyio
async def test_edit_movie_year_out_of_range(async_client: AsyncClient, movies_repo):
    created = await movies_repo.insert_one({**MATRIX, "user": "u1"})

    resp = await async_client.put(f"/movies/edit/{created['_id']}", json={"year": 12})
    assert resp.status_code == 400
    assert resp.json() == {"error": "Invalid request body"}
