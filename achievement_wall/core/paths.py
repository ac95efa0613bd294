import os

from achievement_wall.core.config import PROJECT_ROOT, Settings


def get_project_root() -> str:
    """Return the absolute path of the project root.
    This file lives at achievement_wall/core/paths.py, so the root is
    two directories above the package directory.
    """
    return str(PROJECT_ROOT)


def get_upload_dir(settings: Settings) -> str:
    """Return the absolute upload directory path.
    - UPLOAD_DIRECTORY wins when it is set.
    - Otherwise data/uploads under the project root.
    The directory itself is created by ensure_dir at startup.
    """
    if settings.UPLOAD_DIRECTORY:
        return os.path.abspath(settings.UPLOAD_DIRECTORY)
    return os.path.join(get_project_root(), "data", "uploads")


def get_static_dir(settings: Settings) -> str:
    """Return the absolute path of the client bundle (frontend/dist by default)."""
    if settings.STATIC_DIRECTORY:
        return os.path.abspath(settings.STATIC_DIRECTORY)
    return os.path.join(get_project_root(), "frontend", "dist")


def ensure_dir(path: str) -> str:
    os.makedirs(path, exist_ok=True)
    return path


def resolve_inside(base_dir: str, relative_path: str) -> str | None:
    """Join relative_path onto base_dir, refusing anything that escapes it."""
    base = os.path.realpath(base_dir)
    candidate = os.path.realpath(os.path.join(base, relative_path.lstrip("/")))
    if candidate != base and not candidate.startswith(base + os.sep):
        return None
    return candidate
