from fastapi import Request

from achievement_wall.core.config import Settings
from achievement_wall.core.database import get_db
from achievement_wall.services.storage import LocalStorage

# Shared dependencies. Everything is read from app.state, which create_app fills in.


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_storage(request: Request) -> LocalStorage:
    return request.app.state.storage


__all__ = ["get_db", "get_settings", "get_storage"]
