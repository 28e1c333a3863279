"""Pure mapping from user state and editor state to the profile screen's view tree."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from .. import constants as text
from ..schemas import UserProfile, format_date
from ..services.user_state import UserLoadError, UserLoaded, UserState
from .state import EditorState, PrivacyField


@dataclass(frozen=True)
class LoadingView:
    label: str = text.LOADING_PROFILE


@dataclass(frozen=True)
class ErrorView:
    title: str
    detail: str


@dataclass(frozen=True)
class NotFoundView:
    message: str = text.USER_NOT_FOUND


@dataclass(frozen=True)
class AvatarView:
    photo_url: str | None
    initials: str
    is_uploading: bool
    upload_progress: float
    can_change: bool


@dataclass(frozen=True)
class NameDisplayView:
    display_name: str
    status_text: str
    is_online: bool


@dataclass(frozen=True)
class NameEditorView:
    label: str
    buffer: str
    is_saving: bool
    can_save: bool


@dataclass(frozen=True)
class InfoRow:
    label: str
    value: str


@dataclass(frozen=True)
class ToggleRow:
    key: str
    title: str
    value: bool
    enabled: bool = True


@dataclass(frozen=True)
class ProfileView:
    avatar: AvatarView
    name: Union[NameDisplayView, NameEditorView]
    info: tuple[InfoRow, ...]
    settings: tuple[ToggleRow, ...]
    privacy: tuple[ToggleRow, ...]
    footer: tuple[str, ...]


ScreenView = Union[LoadingView, ErrorView, NotFoundView, ProfileView]


def _render_name(profile: UserProfile, editor: EditorState) -> Union[NameDisplayView, NameEditorView]:
    edit = editor.edit
    if edit.is_editing:
        return NameEditorView(
            label=text.DISPLAY_NAME,
            buffer=edit.buffer,
            is_saving=edit.is_saving,
            can_save=bool(edit.buffer.strip()) and not edit.is_saving,
        )
    return NameDisplayView(
        display_name=profile.display_name,
        status_text=text.ONLINE if profile.is_online else profile.last_seen_text,
        is_online=profile.is_online,
    )


def render_profile(profile: UserProfile, editor: EditorState) -> ProfileView:
    upload = editor.upload
    privacy = editor.privacy
    notifications = editor.notifications
    return ProfileView(
        avatar=AvatarView(
            photo_url=profile.photo_url,
            initials=profile.initials,
            is_uploading=upload.is_uploading,
            upload_progress=upload.progress,
            can_change=not upload.is_uploading,
        ),
        name=_render_name(profile, editor),
        info=(
            InfoRow(label=text.EMAIL, value=profile.email),
            InfoRow(label=text.JOINED_ON, value=format_date(profile.created_at)),
        ),
        settings=(
            ToggleRow("notifications_enabled", text.NOTIFICATION_SETTINGS, notifications.notifications_enabled),
            ToggleRow("sound_enabled", text.SOUND_ENABLED, notifications.sound_enabled),
            ToggleRow("vibration_enabled", text.VIBRATION_ENABLED, notifications.vibration_enabled),
        ),
        privacy=(
            ToggleRow(
                PrivacyField.SHOW_ONLINE_STATUS.value,
                text.ONLINE_STATUS,
                privacy.show_online_status,
                enabled=PrivacyField.SHOW_ONLINE_STATUS not in privacy.pending,
            ),
            ToggleRow(
                PrivacyField.SHOW_LAST_SEEN.value,
                text.LAST_SEEN_STATUS,
                privacy.show_last_seen,
                enabled=PrivacyField.SHOW_LAST_SEEN not in privacy.pending,
            ),
        ),
        footer=(text.VERSION_LABEL, text.COPYRIGHT),
    )


def render_screen(user_state: UserState, editor: EditorState) -> ScreenView:
    if isinstance(user_state, UserLoadError):
        return ErrorView(title=text.ERROR_LOADING_PROFILE, detail=user_state.detail)
    if isinstance(user_state, UserLoaded):
        if user_state.profile is None:
            return NotFoundView()
        return render_profile(user_state.profile, editor)
    return LoadingView()


__all__ = [
    "AvatarView",
    "ErrorView",
    "InfoRow",
    "LoadingView",
    "NameDisplayView",
    "NameEditorView",
    "NotFoundView",
    "ProfileView",
    "ScreenView",
    "ToggleRow",
    "render_profile",
    "render_screen",
]
