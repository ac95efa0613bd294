"""Achievement endpoint tests."""
import asyncio

import pytest
from fastapi import FastAPI
from httpx import AsyncClient

from tests.utils import add_failing_route, create_achievement


@pytest.mark.asyncio()
async def test_create_and_get(client: AsyncClient) -> None:
    """A created achievement comes back unchanged with zero likes."""
    created = await create_achievement(client, "First commit", "Hello world")

    assert created["title"] == "First commit"
    assert created["description"] == "Hello world"
    assert created["likes"] == 0
    assert created["image_url"] == ""

    response = await client.get(f"/api/achievements/{created['id']}")
    assert response.status_code == 200
    fetched = response.json()
    assert fetched["id"] == created["id"]
    assert fetched["title"] == "First commit"
    assert fetched["description"] == "Hello world"
    assert fetched["likes"] == 0
    assert fetched["created_at"]


@pytest.mark.asyncio()
async def test_create_trims_title(client: AsyncClient) -> None:
    """Surrounding whitespace is not part of the title."""
    created = await create_achievement(client, "  Shipped v1  ")
    assert created["title"] == "Shipped v1"


@pytest.mark.asyncio()
async def test_create_without_description(client: AsyncClient) -> None:
    """Description is optional."""
    response = await client.post("/api/achievements", data={"title": "Solo"})
    assert response.status_code == 201
    assert response.json()["description"] is None


@pytest.mark.asyncio()
@pytest.mark.parametrize("title", ["", "   "])
async def test_create_blank_title(client: AsyncClient, title: str) -> None:
    """A blank title is rejected and nothing is stored."""
    response = await client.post("/api/achievements",
                                 data={"title": title, "description": "x"})
    assert response.status_code == 400
    assert response.json() == {"error": "Title is required"}

    response = await client.get("/api/achievements")
    assert response.json() == []


@pytest.mark.asyncio()
async def test_create_missing_title(client: AsyncClient) -> None:
    """A request without the title field gets the same answer as a blank one."""
    response = await client.post("/api/achievements",
                                 data={"description": "no title"})
    assert response.status_code == 400
    assert response.json() == {"error": "Title is required"}


@pytest.mark.asyncio()
async def test_list_newest_first(client: AsyncClient) -> None:
    """Listing is ordered by creation time, newest first."""
    ids = []
    for title in ("one", "two", "three", "four"):
        ids.append((await create_achievement(client, title))["id"])

    response = await client.get("/api/achievements")
    assert response.status_code == 200
    assert [item["id"] for item in response.json()] == list(reversed(ids))


@pytest.mark.asyncio()
async def test_get_missing(client: AsyncClient) -> None:
    """An unknown id is a 404 with an error message."""
    response = await client.get("/api/achievements/999")
    assert response.status_code == 404
    assert response.json() == {"error": "Achievement not found"}


@pytest.mark.asyncio()
async def test_get_non_numeric_id(client: AsyncClient) -> None:
    """A non-numeric id is a client error."""
    response = await client.get("/api/achievements/abc")
    assert response.status_code == 400
    assert "error" in response.json()


@pytest.mark.asyncio()
async def test_like_twice(client: AsyncClient) -> None:
    """Each like adds one and returns the new count."""
    created = await create_achievement(client)

    response = await client.post(f"/api/achievements/{created['id']}/like")
    assert response.status_code == 200
    assert response.json() == {"likes": 1}

    response = await client.post(f"/api/achievements/{created['id']}/like")
    assert response.json() == {"likes": 2}

    response = await client.get(f"/api/achievements/{created['id']}")
    assert response.json()["likes"] == 2


@pytest.mark.asyncio()
async def test_concurrent_likes(client: AsyncClient) -> None:
    """Simultaneous likes are all counted."""
    created = await create_achievement(client)
    url = f"/api/achievements/{created['id']}/like"
    count = 10

    responses = await asyncio.gather(*(client.post(url) for _ in range(count)))

    assert all(response.status_code == 200 for response in responses)
    assert sorted(r.json()["likes"] for r in responses) == list(range(1, count + 1))
    response = await client.get(f"/api/achievements/{created['id']}")
    assert response.json()["likes"] == count


@pytest.mark.asyncio()
async def test_like_missing(client: AsyncClient) -> None:
    """Liking an unknown id is a 404 and changes no row."""
    created = await create_achievement(client)

    response = await client.post("/api/achievements/999/like")
    assert response.status_code == 404
    assert response.json() == {"error": "Achievement not found"}

    response = await client.get(f"/api/achievements/{created['id']}")
    assert response.json()["likes"] == 0


@pytest.mark.asyncio()
async def test_storage_fault(client: AsyncClient, app: FastAPI) -> None:
    """A broken table gives a generic 500, not a crash."""
    async with app.state.engine.begin() as conn:
        await conn.exec_driver_sql("DROP TABLE comments")
        await conn.exec_driver_sql("DROP TABLE achievements")

    response = await client.get("/api/achievements")
    assert response.status_code == 500
    assert response.json() == {"error": "Failed to fetch achievements"}

    response = await client.post("/api/achievements/1/like")
    assert response.status_code == 500
    assert response.json() == {"error": "Failed to like achievement"}


@pytest.mark.asyncio()
async def test_unhandled_error(client: AsyncClient, app: FastAPI) -> None:
    """Any unexpected exception is answered with a generic 500."""
    add_failing_route(app)

    response = await client.post("/boom")
    assert response.status_code == 500
    assert response.json() == {"error": "Internal server error"}


@pytest.mark.asyncio()
async def test_health(client: AsyncClient) -> None:
    """Health check."""
    response = await client.get("/api/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


@pytest.mark.asyncio()
async def test_out_of_range_id(client: AsyncClient) -> None:
    """Ids beyond the 64-bit row id range are simply not found."""
    base = "/api/achievements/99999999999999999999"

    response = await client.get(base)
    assert response.status_code == 404
    assert response.json() == {"error": "Achievement not found"}

    response = await client.post(f"{base}/like")
    assert response.status_code == 404
    assert response.json() == {"error": "Achievement not found"}


@pytest.mark.asyncio()
async def test_error_has_cors_headers(client: AsyncClient, app: FastAPI) -> None:
    """500 responses still carry CORS headers for the dev client."""
    add_failing_route(app)

    response = await client.post("/boom",
                                 headers={"Origin": "http://localhost:5173"})
    assert response.status_code == 500
    assert response.headers["access-control-allow-origin"] == \
        "http://localhost:5173"
