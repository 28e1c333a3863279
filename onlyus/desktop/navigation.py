from __future__ import annotations

import logging
from typing import Callable, Optional

import customtkinter as ctk

from .. import constants as text
from .bridge import AsyncBridge
from .theme import PALETTE, Palette

logger = logging.getLogger(__name__)


class EntryScreen(ctk.CTkFrame):
    """Shown once the session ends; signing in again happens outside this client."""

    def __init__(self, master: ctk.CTk, *, palette: Palette) -> None:
        super().__init__(master, fg_color=palette.get("bg", "#fff5f7"))
        ctk.CTkLabel(
            self,
            text=text.APP_NAME,
            font=ctk.CTkFont(size=32, weight="bold"),
            text_color=palette.get("accent", "#e11d74"),
        ).pack(pady=(120, 12))
        ctk.CTkLabel(
            self,
            text="You are signed out. Sign in on your phone to continue.",
            text_color=palette.get("muted", "#9ca3af"),
        ).pack()


class FrameNavigator:
    """A stack of full-window frames; only the top one is visible."""

    def __init__(self, root: ctk.CTk, bridge: AsyncBridge, *, palette: Optional[Palette] = None) -> None:
        self._root = root
        self._bridge = bridge
        self._palette = palette or PALETTE
        self._stack: list[ctk.CTkFrame] = []
        self._on_reset: list[Callable[[], None]] = []

    def push(self, frame: ctk.CTkFrame) -> None:
        if self._stack:
            self._stack[-1].pack_forget()
        self._stack.append(frame)
        frame.pack(fill="both", expand=True)

    def on_reset(self, callback: Callable[[], None]) -> None:
        self._on_reset.append(callback)

    def reset_to_entry(self) -> None:
        self._bridge.call_in_ui(self._reset)

    def _reset(self) -> None:
        while self._stack:
            self._stack.pop().destroy()
        for callback in self._on_reset:
            callback()
        logger.info("Navigation reset to entry screen")
        self.push(EntryScreen(self._root, palette=self._palette))


__all__ = ["EntryScreen", "FrameNavigator"]
