"""Shared fakes for the profile editor tests."""
from __future__ import annotations

import asyncio
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional, Sequence

import pytest

from onlyus.schemas import UserProfile
from onlyus.services.user_state import UserStateStore
from onlyus.ui.profile_editor import ProfileEditor
from onlyus.ui.state import ImageSource


def make_profile(**overrides: Any) -> UserProfile:
    data: dict[str, Any] = {
        "id": "user-1",
        "display_name": "Sam Rivera",
        "email": "sam@example.com",
        "photo_url": None,
        "is_online": True,
        "created_at": datetime(2024, 1, 5, 12, 0, tzinfo=timezone.utc),
        "show_online_status": True,
        "show_last_seen": True,
    }
    data.update(overrides)
    return UserProfile(**data)


class FakeAuth:
    def __init__(self) -> None:
        self.calls: list[tuple[str, dict[str, Any]]] = []
        self.failures: dict[str, Exception] = {}
        self.gate: Optional[asyncio.Event] = None

    async def _record(self, name: str, **kwargs: Any) -> None:
        self.calls.append((name, kwargs))
        if self.gate is not None:
            await self.gate.wait()
        failure = self.failures.get(name)
        if failure is not None:
            raise failure

    async def update_profile(self, *, display_name: Optional[str] = None, photo_url: Optional[str] = None) -> None:
        fields = {k: v for k, v in (("display_name", display_name), ("photo_url", photo_url)) if v is not None}
        await self._record("update_profile", **fields)

    async def update_user_privacy_settings(
        self,
        *,
        show_online_status: Optional[bool] = None,
        show_last_seen: Optional[bool] = None,
    ) -> None:
        fields = {
            k: v
            for k, v in (("show_online_status", show_online_status), ("show_last_seen", show_last_seen))
            if v is not None
        }
        await self._record("update_user_privacy_settings", **fields)

    async def sign_out(self) -> None:
        await self._record("sign_out")

    async def delete_account(self) -> None:
        await self._record("delete_account")

    def names(self) -> list[str]:
        return [name for name, _ in self.calls]


class FakeStorage:
    def __init__(self) -> None:
        self.camera_image: Optional[Path] = Path("camera.jpg")
        self.gallery_image: Optional[Path] = Path("gallery.jpg")
        self.upload_url: Optional[str] = "https://cdn.onlyus.app/avatars/user-1.jpg"
        self.upload_error: Optional[Exception] = None
        self.calls: list[str] = []
        self.uploaded: list[Path] = []

    async def pick_image_from_camera(self) -> Optional[Path]:
        self.calls.append("camera")
        return self.camera_image

    async def pick_image_from_gallery(self) -> Optional[Path]:
        self.calls.append("gallery")
        return self.gallery_image

    async def upload_profile_image(self, image: Path, on_progress: Any = None) -> Optional[str]:
        self.calls.append("upload")
        self.uploaded.append(image)
        if on_progress is not None:
            on_progress(0.5)
            on_progress(1.0)
        if self.upload_error is not None:
            raise self.upload_error
        return self.upload_url


class FakeDialogs:
    def __init__(self) -> None:
        self.source: Optional[ImageSource] = ImageSource.GALLERY
        self.confirm_answer = True
        self.confirmations: list[dict[str, Any]] = []
        self.infos: list[tuple[str, list[str]]] = []
        self.source_requests = 0

    async def choose_image_source(self) -> Optional[ImageSource]:
        self.source_requests += 1
        return self.source

    async def confirm(self, *, title: str, message: str, confirm_label: str, destructive: bool = False) -> bool:
        self.confirmations.append(
            {"title": title, "message": message, "confirm_label": confirm_label, "destructive": destructive}
        )
        return self.confirm_answer

    async def show_info(self, *, title: str, lines: Sequence[str]) -> None:
        self.infos.append((title, list(lines)))


class RecordingNotifier:
    def __init__(self) -> None:
        self.successes: list[str] = []
        self.errors: list[str] = []

    def success(self, message: str) -> None:
        self.successes.append(message)

    def error(self, message: str) -> None:
        self.errors.append(message)


class FakeNavigator:
    def __init__(self) -> None:
        self.resets = 0

    def reset_to_entry(self) -> None:
        self.resets += 1


@pytest.fixture
def auth() -> FakeAuth:
    return FakeAuth()


@pytest.fixture
def storage() -> FakeStorage:
    return FakeStorage()


@pytest.fixture
def dialogs() -> FakeDialogs:
    return FakeDialogs()


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def navigator() -> FakeNavigator:
    return FakeNavigator()


@pytest.fixture
def user_state() -> UserStateStore:
    store = UserStateStore()
    store.publish(make_profile())
    return store


@pytest.fixture
def editor(auth, storage, user_state, dialogs, notifier, navigator) -> ProfileEditor:
    return ProfileEditor(
        auth=auth,
        storage=storage,  # type: ignore[arg-type]
        user_state=user_state,
        dialogs=dialogs,
        notifier=notifier,
        navigator=navigator,
    )
