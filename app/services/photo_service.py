"""
app/services/photo_service.py

Purpose: Order photo storage

- Enforces the per-order photo count and per-file size limits
- Writes files under the upload directory as
  "<ms timestamp>-<random>-<sanitized original name>"
- Returns public paths ("uploads/<filename>") for the order record
- Removes files already written by a request that fails midway
"""

import uuid
from pathlib import Path
from typing import List, Sequence

import aiofiles
from fastapi import UploadFile

from app.core.exceptions import UploadLimitError
from app.core.logging import get_logger
from utils.time_utils import timestamp_ms
from utils.validation_utils import sanitize_filename

logger = get_logger(__name__)

PUBLIC_PREFIX = "uploads"


class PhotoStore:
    """
    Stores uploaded order photos on local disk.
    """

    def __init__(self, upload_dir: Path, max_photos: int = 5, max_bytes: int = 10 * 1024 * 1024):
        self.upload_dir = Path(upload_dir)
        self.max_photos = max_photos
        self.max_bytes = max_bytes

    def check_count(self, files: Sequence[UploadFile]):
        """Rejects requests carrying more photos than allowed."""
        if len(files) > self.max_photos:
            raise UploadLimitError(
                f"At most {self.max_photos} photos allowed",
                details={"received": len(files), "max": self.max_photos},
            )

    def _make_filename(self, original: str) -> str:
        return f"{timestamp_ms()}-{uuid.uuid4().hex[:8]}-{sanitize_filename(original)}"

    async def save_all(self, files: Sequence[UploadFile]) -> List[str]:
        """
        Writes every file to disk.

        Returns:
            Public paths in upload order

        Raises:
            UploadLimitError: Too many files or a file over the size limit
            OSError: Disk failures (after cleaning up what was written)
        """
        self.check_count(files)
        self.upload_dir.mkdir(parents=True, exist_ok=True)

        written: List[Path] = []
        try:
            for upload in files:
                content = await upload.read(self.max_bytes + 1)
                if len(content) > self.max_bytes:
                    raise UploadLimitError(
                        f"Photo '{upload.filename}' exceeds the size limit",
                        details={"max_bytes": self.max_bytes},
                    )

                filename = self._make_filename(upload.filename)
                target = self.upload_dir / filename
                async with aiofiles.open(target, "wb") as f:
                    await f.write(content)
                written.append(target)
                logger.debug(f"Stored photo {filename} ({len(content)} bytes)")
        except Exception:
            self.cleanup(written)
            raise

        return [f"{PUBLIC_PREFIX}/{path.name}" for path in written]

    def discard(self, public_paths: Sequence[str]):
        """Removes stored photos given their public paths."""
        self.cleanup([self.upload_dir / Path(p).name for p in public_paths])

    def cleanup(self, paths: Sequence[Path]):
        """Best-effort removal of files from a failed request."""
        for path in paths:
            try:
                path.unlink(missing_ok=True)
                logger.info(f"Cleaned up photo: {path.name}")
            except OSError as e:
                logger.warning(f"Failed to clean up photo {path}: {e}")
