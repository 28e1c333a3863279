"""Observable state container and the editor's local state records."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Callable, Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Store(Generic[T]):
    """Holds one immutable value and notifies subscribers on every change."""

    def __init__(self, initial: T) -> None:
        self._value = initial
        self._listeners: list[Callable[[T], None]] = []

    @property
    def value(self) -> T:
        return self._value

    def set(self, value: T) -> None:
        if value == self._value:
            return
        self._value = value
        for listener in list(self._listeners):
            try:
                listener(value)
            except Exception:
                logger.exception("State listener %r failed", listener)

    def update(self, fn: Callable[[T], T]) -> T:
        self.set(fn(self._value))
        return self._value

    def subscribe(self, listener: Callable[[T], None]) -> Callable[[], None]:
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe


class ImageSource(str, Enum):
    CAMERA = "camera"
    GALLERY = "gallery"


class PrivacyField(str, Enum):
    SHOW_ONLINE_STATUS = "show_online_status"
    SHOW_LAST_SEEN = "show_last_seen"


@dataclass(frozen=True)
class EditSession:
    is_editing: bool = False
    buffer: str = ""
    is_saving: bool = False


@dataclass(frozen=True)
class UploadSession:
    is_uploading: bool = False
    source: ImageSource | None = None
    progress: float = 0.0


@dataclass(frozen=True)
class PrivacyPreferences:
    show_online_status: bool = True
    show_last_seen: bool = True
    pending: frozenset[PrivacyField] = field(default_factory=frozenset)

    def get(self, name: PrivacyField) -> bool:
        return bool(getattr(self, name.value))

    def with_value(self, name: PrivacyField, value: bool) -> "PrivacyPreferences":
        return replace(self, **{name.value: value})

    def with_pending(self, name: PrivacyField, pending: bool) -> "PrivacyPreferences":
        updated = set(self.pending)
        if pending:
            updated.add(name)
        else:
            updated.discard(name)
        return replace(self, pending=frozenset(updated))


@dataclass(frozen=True)
class NotificationPreferences:
    notifications_enabled: bool = True
    sound_enabled: bool = True
    vibration_enabled: bool = True


@dataclass(frozen=True)
class EditorState:
    edit: EditSession = field(default_factory=EditSession)
    upload: UploadSession = field(default_factory=UploadSession)
    privacy: PrivacyPreferences = field(default_factory=PrivacyPreferences)
    notifications: NotificationPreferences = field(default_factory=NotificationPreferences)


__all__ = [
    "EditSession",
    "EditorState",
    "ImageSource",
    "NotificationPreferences",
    "PrivacyField",
    "PrivacyPreferences",
    "Store",
    "UploadSession",
]
