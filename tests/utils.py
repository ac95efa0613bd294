"""Test helpers."""
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

INDEX_HTML = "<!doctype html><html><body><div id=\"root\"></div></body></html>"


@asynccontextmanager
async def running_client(app: FastAPI) -> AsyncIterator[AsyncClient]:
    """Run the app lifespan and yield a client bound to it."""
    async with app.router.lifespan_context(app):
        async with AsyncClient(transport=ASGITransport(app=app),
                               base_url="http://test") as client:
            yield client


async def create_achievement(client: AsyncClient, title: str = "First commit",
                             description: str = "Hello world",
                             files: Optional[dict] = None) -> dict:
    """Create an achievement through the API and return the response body."""
    response = await client.post("/api/achievements",
                                 data={"title": title,
                                       "description": description},
                                 files=files)
    assert response.status_code == 201, response.text
    return response.json()


def add_failing_route(app: FastAPI, path: str = "/boom") -> None:
    """Register a POST route that raises, ahead of the catch-all routes."""
    async def boom() -> None:
        raise RuntimeError("internal detail")

    app.add_api_route(path, boom, methods=["POST"])
    app.router.routes.insert(0, app.router.routes.pop())
