"""Profile image acquisition and upload."""
from __future__ import annotations

import asyncio
import logging
from io import BytesIO
from pathlib import Path
from typing import AsyncIterator, Awaitable, Callable, Optional

from PIL import Image, ImageOps, UnidentifiedImageError

from .api_client import ApiClient, ApiError

logger = logging.getLogger(__name__)

ImagePicker = Callable[[], Awaitable[Optional[Path]]]
ProgressCallback = Callable[[float], None]

_UPLOAD_PATH = "/storage/profile-image"


class StorageServiceError(ApiError):
    """Raised when a profile image cannot be prepared or uploaded."""


def prepare_profile_image(path: Path | str, *, max_dimension: int, quality: int) -> bytes:
    """Return ``path`` as an upright RGB JPEG whose longest side is at most ``max_dimension``."""

    source = Path(path)
    if not source.is_file():
        raise StorageServiceError(f"Image not found: {source.name}")
    try:
        with Image.open(source) as img:
            img = ImageOps.exif_transpose(img)
            if img.mode != "RGB":
                img = img.convert("RGB")
            resampling = getattr(Image, "Resampling", Image)
            img.thumbnail((max_dimension, max_dimension), resampling.LANCZOS)
            buffer = BytesIO()
            img.save(buffer, format="JPEG", quality=quality, optimize=True)
    except UnidentifiedImageError as exc:
        raise StorageServiceError(f"Unsupported image file: {source.name}") from exc
    except OSError as exc:
        raise StorageServiceError(f"Unable to read image: {source.name}") from exc
    return buffer.getvalue()


async def _missing_picker() -> Optional[Path]:
    return None


class StorageService:
    """Picks profile images from the configured sources and uploads them."""

    def __init__(
        self,
        api: ApiClient,
        *,
        camera_picker: ImagePicker | None = None,
        gallery_picker: ImagePicker | None = None,
    ) -> None:
        self._api = api
        self._camera_picker = camera_picker or _missing_picker
        self._gallery_picker = gallery_picker or _missing_picker

    async def pick_image_from_camera(self) -> Path | None:
        return await self._camera_picker()

    async def pick_image_from_gallery(self) -> Path | None:
        return await self._gallery_picker()

    async def _chunks(self, data: bytes, on_progress: ProgressCallback | None) -> AsyncIterator[bytes]:
        total = len(data)
        chunk_size = max(1, self._api.settings.upload_chunk_size)
        sent = 0
        for offset in range(0, total, chunk_size):
            chunk = data[offset : offset + chunk_size]
            yield chunk
            sent += len(chunk)
            if on_progress is not None:
                on_progress(sent / total)

    async def upload_profile_image(
        self,
        image: Path | str,
        on_progress: ProgressCallback | None = None,
    ) -> str | None:
        """Upload ``image`` and return its public URL, or ``None`` if the backend returned none."""

        settings = self._api.settings
        data = await asyncio.to_thread(
            prepare_profile_image,
            image,
            max_dimension=settings.avatar_max_dimension,
            quality=settings.avatar_jpeg_quality,
        )
        if not data:
            raise StorageServiceError("Prepared image was empty")
        response = await self._api.request(
            "PUT",
            _UPLOAD_PATH,
            content=self._chunks(data, on_progress),
            headers={"Content-Type": "image/jpeg", "Content-Length": str(len(data))},
            error_cls=StorageServiceError,
            failure_message="Failed to upload image",
        )
        try:
            payload = response.json()
        except ValueError:
            logger.warning("Upload response was not valid JSON")
            return None
        url = payload.get("url") if isinstance(payload, dict) else None
        if not isinstance(url, str) or not url.strip():
            logger.warning("Upload response did not include a URL")
            return None
        logger.info("Profile image uploaded | bytes=%d", len(data))
        return url.strip()


__all__ = [
    "ImagePicker",
    "ProgressCallback",
    "StorageService",
    "StorageServiceError",
    "prepare_profile_image",
]
