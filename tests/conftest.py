"""Test fixtures."""
from pathlib import Path
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import AsyncClient

from achievement_wall.core.config import Settings
from tests.utils import INDEX_HTML, running_client


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    """Settings pointing at a throwaway database, upload dir and bundle."""
    static_dir = tmp_path / "dist"
    (static_dir / "assets").mkdir(parents=True)
    (static_dir / "index.html").write_text(INDEX_HTML)
    (static_dir / "assets" / "app.js").write_text("console.log('wall');")

    return Settings(
        ENVIRONMENT="test",
        DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'db' / 'achievements.db'}",
        UPLOAD_DIRECTORY=str(tmp_path / "uploads"),
        STATIC_DIRECTORY=str(static_dir),
    )


@pytest.fixture()
def app(settings: Settings) -> FastAPI:
    """Application instance."""
    from achievement_wall.main import create_app
    return create_app(settings)


@pytest.fixture()
def upload_dir(settings: Settings) -> Path:
    return Path(settings.UPLOAD_DIRECTORY)


@pytest_asyncio.fixture()
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Async test client with the app lifespan running."""
    async with running_client(app) as client:
        yield client
