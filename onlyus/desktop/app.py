"""Wire the profile editor, its collaborators and the customtkinter window together."""
from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Optional

import customtkinter as ctk

from ..config import Settings, get_settings
from ..deep_links import DeepLink
from ..services import ApiClient, HttpAuthController, StorageService, UserStateStore
from ..ui.profile_editor import ProfileEditor
from .avatars import AvatarCache
from .bridge import AsyncBridge
from .dialogs import CtkDialogPresenter
from .navigation import FrameNavigator
from .pickers import camera_picker, gallery_picker
from .screen import ProfileScreen, ScreenCallbacks
from .theme import PALETTE
from .toasts import ToastNotifier

logger = logging.getLogger(__name__)


class ProfileApp:
    def __init__(self, settings: Optional[Settings] = None, *, entry_link: Optional[DeepLink] = None) -> None:
        self.settings = settings or get_settings()
        self.entry_link = entry_link

        ctk.set_appearance_mode("light")
        self.root = ctk.CTk()
        self.root.title(self.settings.app_name)
        self.root.geometry("460x820")
        self.root.configure(fg_color=PALETTE["bg"])

        self.bridge = AsyncBridge(self.root)
        api = ApiClient(settings=self.settings)
        self.user_state = UserStateStore(api)
        self.navigator = FrameNavigator(self.root, self.bridge)
        self.editor = ProfileEditor(
            auth=HttpAuthController(api, user_state=self.user_state),
            storage=StorageService(
                api,
                camera_picker=camera_picker(self.settings.camera_index),
                gallery_picker=gallery_picker(self.bridge),
            ),
            user_state=self.user_state,
            dialogs=CtkDialogPresenter(self.root, self.bridge),
            notifier=ToastNotifier(self.root, self.bridge),
            navigator=self.navigator,
        )
        self.avatars = AvatarCache(timeout=self.settings.http_timeout)

        self.screen: Optional[ProfileScreen] = ProfileScreen(
            self.root,
            callbacks=self._build_callbacks(),
            request_avatar=self._request_avatar,
        )
        self.screen.apply(self.editor.render())
        self.navigator.push(self.screen)
        self.navigator.on_reset(self._on_session_ended)

        self._unsubscribers = [
            self.editor.subscribe(lambda _state: self._schedule_render()),
            self.user_state.subscribe(lambda _state: self._schedule_render()),
        ]

    def _build_callbacks(self) -> ScreenCallbacks:
        editor = self.editor
        bridge = self.bridge
        toggles: dict[str, Callable[[bool], Any]] = {
            "notifications_enabled": editor.set_notifications_enabled,
            "sound_enabled": editor.set_sound_enabled,
            "vibration_enabled": editor.set_vibration_enabled,
        }
        remote_toggles: dict[str, Callable[[bool], Any]] = {
            "show_online_status": editor.set_show_online_status,
            "show_last_seen": editor.set_show_last_seen,
        }

        def _toggle(key: str, value: bool) -> None:
            if key in remote_toggles:
                bridge.submit(remote_toggles[key](value))
            elif key in toggles:
                bridge.dispatch(toggles[key], value)
            else:
                logger.warning("Unknown toggle %s", key)

        return ScreenCallbacks(
            change_avatar=lambda: bridge.submit(editor.update_profile_image()),
            start_edit=lambda: bridge.dispatch(editor.start_editing),
            buffer_changed=lambda value: bridge.dispatch(editor.set_name_buffer, value),
            cancel_edit=lambda: bridge.dispatch(editor.cancel_editing),
            save_name=lambda: bridge.submit(editor.save_display_name()),
            toggle=_toggle,
            show_support=lambda: bridge.submit(editor.show_support()),
            show_about=lambda: bridge.submit(editor.show_about()),
            sign_out=lambda: bridge.submit(editor.sign_out()),
            delete_account=lambda: bridge.submit(editor.delete_account()),
        )

    def _schedule_render(self) -> None:
        view = self.editor.render()
        self.bridge.call_in_ui(self._apply_view, view)

    def _apply_view(self, view: Any) -> None:
        if self.screen is not None:
            self.screen.apply(view)

    def _request_avatar(self, url: str, size: int, on_ready: Callable[[Optional[ctk.CTkImage]], None]) -> None:
        cached = self.avatars.cached(url, size)
        if cached is not None:
            on_ready(cached)
            return

        async def _load() -> None:
            image = await asyncio.to_thread(self.avatars.load, url, size)
            self.bridge.call_in_ui(lambda: on_ready(self.avatars.cached(url, size) if image is not None else None))

        self.bridge.submit(_load())

    def _on_session_ended(self) -> None:
        self.screen = None
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self.editor.close()

    def _on_close(self) -> None:
        self.bridge.stop()
        self.root.destroy()

    def run(self) -> None:
        if self.entry_link is not None:
            logger.info("Opened from link | path=%s params=%s", self.entry_link.path, self.entry_link.params)
        self.root.protocol("WM_DELETE_WINDOW", self._on_close)
        self.bridge.start()
        self.bridge.submit(self.user_state.refresh())
        self.root.mainloop()


__all__ = ["ProfileApp"]
