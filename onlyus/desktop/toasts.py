"""Transient success/error banners, the desktop counterpart of a floating snackbar."""
from __future__ import annotations

import logging
from typing import Optional

import customtkinter as ctk

from .bridge import AsyncBridge
from .theme import PALETTE, Palette

logger = logging.getLogger(__name__)

_TOAST_MS = 3000


class ToastNotifier:
    def __init__(self, root: ctk.CTk, bridge: AsyncBridge, *, palette: Optional[Palette] = None) -> None:
        self._root = root
        self._bridge = bridge
        self._palette = palette or PALETTE
        self._current: Optional[ctk.CTkFrame] = None

    def success(self, message: str) -> None:
        logger.info("Notice: %s", message)
        self._bridge.call_in_ui(self._show, message, self._palette.get("success", "#16a34a"))

    def error(self, message: str) -> None:
        logger.info("Error notice: %s", message)
        self._bridge.call_in_ui(self._show, message, self._palette.get("danger", "#ef4444"))

    def _dismiss(self, toast: ctk.CTkFrame) -> None:
        if getattr(toast, "winfo_exists", lambda: False)():
            toast.destroy()
        if self._current is toast:
            self._current = None

    def _show(self, message: str, color: str) -> None:
        if self._current is not None:
            self._dismiss(self._current)
        toast = ctk.CTkFrame(self._root, corner_radius=12, fg_color=color)
        ctk.CTkLabel(
            toast,
            text=message,
            text_color="#ffffff",
            wraplength=360,
            justify="left",
        ).pack(padx=16, pady=10)
        toast.place(relx=0.5, rely=1.0, y=-24, anchor="s")
        toast.lift()
        self._current = toast
        toast.after(_TOAST_MS, lambda t=toast: self._dismiss(t))


__all__ = ["ToastNotifier"]
