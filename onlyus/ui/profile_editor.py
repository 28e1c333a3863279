"""Profile screen behaviour: avatar upload, name editing, settings and account actions.

Every flow follows the same shape: mutate local state, optionally await one
collaborator call, then report the outcome through the notifier. Failures
never escape a flow; they become an error notice and, for privacy toggles, a
rollback of the optimistic value.
"""
from __future__ import annotations

import logging
from dataclasses import replace
from typing import Awaitable, Callable

from .. import constants as text
from ..schemas import UserProfile
from ..services.auth_service import AuthController
from ..services.storage_service import StorageService
from ..services.user_state import UserLoaded, UserState, UserStateStore
from .interaction import DialogPresenter, Navigator, Notifier
from .render import ScreenView, render_screen
from .state import (
    EditSession,
    EditorState,
    ImageSource,
    NotificationPreferences,
    PrivacyField,
    PrivacyPreferences,
    Store,
    UploadSession,
)

logger = logging.getLogger(__name__)

_PRIVACY_MESSAGES: dict[PrivacyField, tuple[str, str]] = {
    PrivacyField.SHOW_ONLINE_STATUS: (text.ONLINE_STATUS_UPDATED, "Failed to update online status"),
    PrivacyField.SHOW_LAST_SEEN: (text.LAST_SEEN_UPDATED, "Failed to update last seen"),
}


def _privacy_from(profile: UserProfile | None) -> PrivacyPreferences:
    if profile is None:
        return PrivacyPreferences()
    return PrivacyPreferences(
        show_online_status=profile.show_online_status,
        show_last_seen=profile.show_last_seen,
    )


class ProfileEditor:
    def __init__(
        self,
        *,
        auth: AuthController,
        storage: StorageService,
        user_state: UserStateStore,
        dialogs: DialogPresenter,
        notifier: Notifier,
        navigator: Navigator,
    ) -> None:
        self._auth = auth
        self._storage = storage
        self._user_state = user_state
        self._dialogs = dialogs
        self._notifier = notifier
        self._navigator = navigator
        self._account_action_running = False
        self.store: Store[EditorState] = Store(EditorState(privacy=_privacy_from(user_state.profile)))
        self._unsubscribe = user_state.subscribe(self._on_user_state)

    @property
    def state(self) -> EditorState:
        return self.store.value

    def subscribe(self, listener: Callable[[EditorState], None]) -> Callable[[], None]:
        return self.store.subscribe(listener)

    def close(self) -> None:
        self._unsubscribe()

    def render(self) -> ScreenView:
        return render_screen(self._user_state.state, self.state)

    def _on_user_state(self, state: UserState) -> None:
        if not isinstance(state, UserLoaded) or state.profile is None:
            return
        remote = _privacy_from(state.profile)

        def _sync(current: EditorState) -> EditorState:
            privacy = current.privacy
            for name in PrivacyField:
                if name not in privacy.pending:
                    privacy = privacy.with_value(name, remote.get(name))
            return replace(current, privacy=privacy)

        self.store.update(_sync)

    def _set_edit(self, edit: EditSession) -> None:
        self.store.update(lambda s: replace(s, edit=edit))

    def _set_upload(self, upload: UploadSession) -> None:
        self.store.update(lambda s: replace(s, upload=upload))

    def _set_privacy(self, fn: Callable[[PrivacyPreferences], PrivacyPreferences]) -> None:
        self.store.update(lambda s: replace(s, privacy=fn(s.privacy)))

    # ------------------------------------------------------------------
    # Avatar
    # ------------------------------------------------------------------

    def _on_upload_progress(self, progress: float) -> None:
        upload = self.state.upload
        if upload.is_uploading:
            self._set_upload(replace(upload, progress=min(1.0, max(0.0, progress))))

    async def update_profile_image(self) -> None:
        if self.state.upload.is_uploading:
            return
        self._set_upload(UploadSession(is_uploading=True))
        try:
            source = await self._dialogs.choose_image_source()
            if source is None:
                return
            self._set_upload(replace(self.state.upload, source=source))

            if source is ImageSource.CAMERA:
                image = await self._storage.pick_image_from_camera()
            else:
                image = await self._storage.pick_image_from_gallery()
            if image is None:
                return

            url = await self._storage.upload_profile_image(image, on_progress=self._on_upload_progress)
            if url:
                await self._auth.update_profile(photo_url=url)
                self._notifier.success(text.PROFILE_UPDATED)
            else:
                self._notifier.error(text.ERROR_UPLOAD_IMAGE)
        except Exception as exc:
            logger.warning("Profile image update failed: %s", exc)
            self._notifier.error(f"Error updating profile: {exc}")
        finally:
            self._set_upload(UploadSession())

    # ------------------------------------------------------------------
    # Display name
    # ------------------------------------------------------------------

    def start_editing(self) -> None:
        if self.state.edit.is_editing:
            return
        profile = self._user_state.profile
        self._set_edit(EditSession(is_editing=True, buffer=profile.display_name if profile else ""))

    def set_name_buffer(self, value: str) -> None:
        edit = self.state.edit
        if edit.is_editing and not edit.is_saving:
            self._set_edit(replace(edit, buffer=value))

    def cancel_editing(self) -> None:
        if self.state.edit.is_saving:
            return
        self._set_edit(EditSession())

    async def save_display_name(self) -> None:
        edit = self.state.edit
        if not edit.is_editing or edit.is_saving:
            return
        new_name = edit.buffer.strip()
        if not new_name:
            return

        self._set_edit(replace(edit, is_saving=True))
        try:
            await self._auth.update_profile(display_name=new_name)
        except Exception as exc:
            logger.warning("Display name update failed: %s", exc)
            self._set_edit(replace(self.state.edit, is_saving=False))
            self._notifier.error(f"Failed to update name: {exc}")
            return
        self._set_edit(EditSession())
        self._notifier.success(text.PROFILE_UPDATED)

    # ------------------------------------------------------------------
    # Privacy (persisted remotely, optimistic)
    # ------------------------------------------------------------------

    async def _toggle_privacy(self, name: PrivacyField, value: bool) -> None:
        privacy = self.state.privacy
        if name in privacy.pending:
            return
        previous = privacy.get(name)
        if previous == value:
            return

        self._set_privacy(lambda p: p.with_value(name, value).with_pending(name, True))
        success_message, failure_prefix = _PRIVACY_MESSAGES[name]
        try:
            await self._auth.update_user_privacy_settings(**{name.value: value})
        except Exception as exc:
            logger.warning("Privacy update failed | field=%s error=%s", name.value, exc)
            self._set_privacy(lambda p: p.with_value(name, previous).with_pending(name, False))
            self._notifier.error(f"{failure_prefix}: {exc}")
            return
        self._set_privacy(lambda p: p.with_pending(name, False))
        self._notifier.success(success_message)

    async def set_show_online_status(self, value: bool) -> None:
        await self._toggle_privacy(PrivacyField.SHOW_ONLINE_STATUS, value)

    async def set_show_last_seen(self, value: bool) -> None:
        await self._toggle_privacy(PrivacyField.SHOW_LAST_SEEN, value)

    # ------------------------------------------------------------------
    # Notifications (local only)
    # ------------------------------------------------------------------

    def _set_notifications(self, **changes: bool) -> None:
        self.store.update(lambda s: replace(s, notifications=replace(s.notifications, **changes)))

    def set_notifications_enabled(self, value: bool) -> None:
        self._set_notifications(notifications_enabled=value)

    def set_sound_enabled(self, value: bool) -> None:
        self._set_notifications(sound_enabled=value)

    def set_vibration_enabled(self, value: bool) -> None:
        self._set_notifications(vibration_enabled=value)

    @property
    def notification_preferences(self) -> NotificationPreferences:
        return self.state.notifications

    # ------------------------------------------------------------------
    # Account
    # ------------------------------------------------------------------

    async def _run_account_action(
        self,
        *,
        title: str,
        message: str,
        confirm_label: str,
        destructive: bool,
        action: Callable[[], Awaitable[None]],
        failure_prefix: str,
    ) -> None:
        if self._account_action_running:
            return
        self._account_action_running = True
        try:
            confirmed = await self._dialogs.confirm(
                title=title,
                message=message,
                confirm_label=confirm_label,
                destructive=destructive,
            )
            if not confirmed:
                return
            try:
                await action()
            except Exception as exc:
                logger.warning("%s failed: %s", title, exc)
                self._notifier.error(f"{failure_prefix}: {exc}")
                return
            self._navigator.reset_to_entry()
        finally:
            self._account_action_running = False

    async def sign_out(self) -> None:
        await self._run_account_action(
            title=text.SIGN_OUT,
            message=text.CONFIRM_SIGN_OUT,
            confirm_label=text.SIGN_OUT,
            destructive=False,
            action=self._auth.sign_out,
            failure_prefix="Failed to sign out",
        )

    async def delete_account(self) -> None:
        await self._run_account_action(
            title=text.DELETE_ACCOUNT,
            message=text.CONFIRM_DELETE_ACCOUNT,
            confirm_label=text.DELETE,
            destructive=True,
            action=self._auth.delete_account,
            failure_prefix="Failed to delete account",
        )

    # ------------------------------------------------------------------
    # Informational dialogs
    # ------------------------------------------------------------------

    async def show_about(self) -> None:
        await self._dialogs.show_info(
            title=f"About {text.APP_NAME}",
            lines=[text.APP_DESCRIPTION, text.VERSION_LABEL, text.COPYRIGHT],
        )

    async def show_support(self) -> None:
        await self._dialogs.show_info(
            title=text.SUPPORT,
            lines=[
                text.SUPPORT_INTRO,
                text.SUPPORT_CONTACT,
                f"• Email: {text.SUPPORT_EMAIL}\n• Website: {text.SUPPORT_WEBSITE}\n• Version: {text.APP_VERSION}",
            ],
        )


__all__ = ["ProfileEditor"]
