from __future__ import annotations

import logging
from io import BytesIO
from typing import Optional

import customtkinter as ctk
import httpx
from PIL import Image, ImageDraw, UnidentifiedImageError

logger = logging.getLogger(__name__)


def circular_avatar(data: bytes, size: int) -> Image.Image:
    """Crop ``data`` to a centred square and mask it into a circle of ``size`` pixels."""

    img = Image.open(BytesIO(data)).convert("RGBA")
    side = min(img.size)
    left = (img.width - side) // 2
    top = (img.height - side) // 2
    img = img.crop((left, top, left + side, top + side))
    resampling = getattr(Image, "Resampling", None)
    lanczos = getattr(resampling, "LANCZOS", None) if resampling else getattr(Image, "LANCZOS", None)
    img = img.resize((size, size), lanczos or Image.BICUBIC)
    mask = Image.new("L", (size, size), 0)
    ImageDraw.Draw(mask).ellipse((0, 0, size, size), fill=255)
    img.putalpha(mask)
    return img


class AvatarCache:
    """Downloads avatar URLs and keeps the masked images per ``(url, size)``."""

    def __init__(self, *, timeout: float) -> None:
        self._timeout = timeout
        self._cache: dict[tuple[str, int], Image.Image] = {}

    def cached(self, url: str, size: int) -> Optional[ctk.CTkImage]:
        image = self._cache.get((url, size))
        if image is None:
            return None
        return ctk.CTkImage(light_image=image, dark_image=image, size=(size, size))

    def load(self, url: str, size: int) -> Optional[Image.Image]:
        """Blocking fetch; call from a worker thread."""

        key = (url, size)
        if key in self._cache:
            return self._cache[key]
        try:
            response = httpx.get(url, timeout=self._timeout, follow_redirects=True)
            response.raise_for_status()
            image = circular_avatar(response.content, size)
        except httpx.HTTPError as exc:
            logger.warning("Unable to download avatar %s: %s", url, exc)
            return None
        except (UnidentifiedImageError, OSError) as exc:
            logger.warning("Avatar at %s is not a readable image: %s", url, exc)
            return None
        self._cache[key] = image
        return image


__all__ = ["AvatarCache", "circular_avatar"]
