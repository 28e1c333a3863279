"""Desktop image sources: a file dialog for the gallery and OpenCV for the camera."""
from __future__ import annotations

import asyncio
import logging
import tempfile
from pathlib import Path
from tkinter import filedialog
from typing import Any, Optional
from uuid import uuid4

import cv2

from ..services.storage_service import ImagePicker, StorageServiceError
from .bridge import AsyncBridge

logger = logging.getLogger(__name__)

_IMAGE_FILETYPES = [("Images", "*.png;*.jpg;*.jpeg;*.gif;*.webp;*.bmp"), ("All files", "*.*")]
_CAPTURE_DIR = Path(tempfile.gettempdir()) / "onlyus-captures"


def capture_camera_frame(camera_index: int, directory: Path = _CAPTURE_DIR) -> Optional[Path]:
    capture = cv2.VideoCapture(camera_index)
    try:
        if not capture.isOpened():
            raise StorageServiceError("Camera is not available")
        ok, frame = capture.read()
        if not ok or frame is None:
            logger.warning("Camera %s returned no frame", camera_index)
            return None
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / f"capture-{uuid4().hex[:8]}.jpg"
        if not cv2.imwrite(str(path), frame):
            raise StorageServiceError("Unable to save camera capture")
        return path
    finally:
        capture.release()


def camera_picker(camera_index: int) -> ImagePicker:
    async def _pick() -> Optional[Path]:
        return await asyncio.to_thread(capture_camera_frame, camera_index)

    return _pick


def gallery_picker(bridge: AsyncBridge) -> ImagePicker:
    async def _pick() -> Optional[Path]:
        def _ask(resolve: Any) -> None:
            path = filedialog.askopenfilename(title="Choose profile picture", filetypes=_IMAGE_FILETYPES)
            resolve(Path(path) if path else None)

        return await bridge.wait_for_ui(_ask)

    return _pick


__all__ = ["camera_picker", "capture_camera_frame", "gallery_picker"]
