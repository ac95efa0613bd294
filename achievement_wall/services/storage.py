import logging
import os
import random
import time
from typing import Optional

from fastapi import UploadFile

from achievement_wall.core.exceptions import UploadTooLargeError

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024


def generate_filename(original_filename: Optional[str]) -> str:
    """<epoch ms>-<random suffix><original extension>"""
    ext = os.path.splitext(os.path.basename(original_filename or ""))[1]
    return f"{int(time.time() * 1000)}-{random.randrange(10**9)}{ext}"


def has_file(upload: Optional[UploadFile]) -> bool:
    # Browsers send an empty part with filename="" when no file was picked
    return upload is not None and bool(upload.filename)


class LocalStorage:
    """Saves uploads verbatim under base_dir and hands out public URLs."""

    def __init__(self, base_dir: str, public_base: str = "/uploads", max_size: int = 5 * 1024 * 1024) -> None:
        self.base_dir = base_dir
        self.public_base = public_base.rstrip("/")
        self.max_size = max_size

    def check_size(self, upload: UploadFile) -> None:
        """Reject an upload whose spooled size is already known to be too big."""
        if upload.size is not None and upload.size > self.max_size:
            raise UploadTooLargeError(self.too_large_message())

    def too_large_message(self) -> str:
        return f"Image must not exceed {self.max_size // (1024 * 1024)} MB"

    async def save_upload(self, upload: UploadFile) -> str:
        """Stream the upload to disk and return its public URL."""
        name = generate_filename(upload.filename)
        path = os.path.join(self.base_dir, name)
        written = 0
        try:
            with open(path, "wb") as buffer:
                while True:
                    chunk = await upload.read(CHUNK_SIZE)
                    if not chunk:
                        break
                    written += len(chunk)
                    if written > self.max_size:
                        raise UploadTooLargeError(self.too_large_message())
                    buffer.write(chunk)
        except BaseException:
            if os.path.exists(path):
                os.remove(path)
            raise
        finally:
            await upload.close()

        logger.info(f"Upload saved: {name} ({written} bytes)")
        return f"{self.public_base}/{name}"

    def delete_url(self, url: str) -> None:
        """Remove a file previously returned by save_upload."""
        if not url.startswith(self.public_base + "/"):
            return
        path = os.path.join(self.base_dir, url[len(self.public_base) + 1:])
        if os.path.isfile(path):
            os.remove(path)
