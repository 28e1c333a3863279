"""customtkinter dialogs that satisfy the editor's ``DialogPresenter``."""
from __future__ import annotations

from typing import Any, Callable, Optional, Sequence

import customtkinter as ctk

from .. import constants as text
from ..ui.state import ImageSource
from .bridge import AsyncBridge
from .theme import PALETTE, Palette

Resolve = Callable[[Any], None]


def _modal(parent: ctk.CTk, title: str, palette: Palette, *, on_dismiss: Callable[[], None]) -> ctk.CTkToplevel:
    window = ctk.CTkToplevel(parent)
    window.title(title)
    window.configure(fg_color=palette.get("surface", "#ffffff"))
    window.resizable(False, False)
    window.transient(parent)
    window.protocol("WM_DELETE_WINDOW", on_dismiss)
    window.bind("<Escape>", lambda _e: on_dismiss())
    window.lift()
    window.after(50, window.grab_set)
    return window


class CtkDialogPresenter:
    def __init__(self, root: ctk.CTk, bridge: AsyncBridge, *, palette: Optional[Palette] = None) -> None:
        self._root = root
        self._bridge = bridge
        self._palette = palette or PALETTE

    async def choose_image_source(self) -> ImageSource | None:
        return await self._bridge.wait_for_ui(self._open_source_sheet)

    async def confirm(self, *, title: str, message: str, confirm_label: str, destructive: bool = False) -> bool:
        def _build(resolve: Resolve) -> None:
            self._open_confirm(resolve, title=title, message=message, confirm_label=confirm_label, destructive=destructive)

        return bool(await self._bridge.wait_for_ui(_build))

    async def show_info(self, *, title: str, lines: Sequence[str]) -> None:
        def _build(resolve: Resolve) -> None:
            self._open_info(resolve, title=title, lines=lines)

        await self._bridge.wait_for_ui(_build)

    def _open_source_sheet(self, resolve: Resolve) -> None:
        palette = self._palette
        window: ctk.CTkToplevel

        def _finish(choice: Optional[ImageSource]) -> None:
            resolve(choice)
            window.destroy()

        window = _modal(self._root, text.UPDATE_PHOTO_TITLE, palette, on_dismiss=lambda: _finish(None))
        ctk.CTkLabel(
            window,
            text=text.UPDATE_PHOTO_TITLE,
            font=ctk.CTkFont(size=18, weight="bold"),
            text_color=palette.get("text", "#1f2937"),
        ).grid(row=0, column=0, columnspan=2, padx=24, pady=(24, 16))
        for column, (source, label) in enumerate(((ImageSource.CAMERA, text.CAMERA), (ImageSource.GALLERY, text.GALLERY))):
            ctk.CTkButton(
                window,
                text=label,
                width=140,
                height=72,
                corner_radius=16,
                fg_color=palette.get("accent", "#e11d74"),
                hover_color=palette.get("accent_hover", "#be185d"),
                command=lambda s=source: _finish(s),
            ).grid(row=1, column=column, padx=(24 if column == 0 else 8, 24 if column == 1 else 8), pady=(0, 24))

    def _open_confirm(
        self,
        resolve: Resolve,
        *,
        title: str,
        message: str,
        confirm_label: str,
        destructive: bool,
    ) -> None:
        palette = self._palette
        window: ctk.CTkToplevel

        def _finish(confirmed: bool) -> None:
            resolve(confirmed)
            window.destroy()

        window = _modal(self._root, title, palette, on_dismiss=lambda: _finish(False))
        ctk.CTkLabel(
            window,
            text=title,
            font=ctk.CTkFont(size=16, weight="bold"),
            text_color=palette.get("text", "#1f2937"),
        ).grid(row=0, column=0, columnspan=2, sticky="w", padx=24, pady=(24, 8))
        ctk.CTkLabel(
            window,
            text=message,
            wraplength=320,
            justify="left",
            text_color=palette.get("text", "#1f2937"),
        ).grid(row=1, column=0, columnspan=2, sticky="w", padx=24, pady=(0, 20))
        ctk.CTkButton(
            window,
            text=text.CANCEL,
            width=100,
            fg_color="transparent",
            border_width=1,
            border_color=palette.get("muted", "#9ca3af"),
            text_color=palette.get("muted", "#9ca3af"),
            hover_color=palette.get("card", "#fffafb"),
            command=lambda: _finish(False),
        ).grid(row=2, column=0, sticky="e", padx=(24, 4), pady=(0, 20))
        ctk.CTkButton(
            window,
            text=confirm_label,
            width=100,
            fg_color=palette.get("danger" if destructive else "accent", "#e11d74"),
            hover_color=palette.get("danger_hover" if destructive else "accent_hover", "#be185d"),
            command=lambda: _finish(True),
        ).grid(row=2, column=1, sticky="w", padx=(4, 24), pady=(0, 20))

    def _open_info(self, resolve: Resolve, *, title: str, lines: Sequence[str]) -> None:
        palette = self._palette
        window: ctk.CTkToplevel

        def _finish() -> None:
            resolve(None)
            window.destroy()

        window = _modal(self._root, title, palette, on_dismiss=_finish)
        ctk.CTkLabel(
            window,
            text=title,
            font=ctk.CTkFont(size=16, weight="bold"),
            text_color=palette.get("text", "#1f2937"),
        ).pack(fill="x", padx=24, pady=(24, 12))
        for line in lines:
            ctk.CTkLabel(
                window,
                text=line,
                wraplength=340,
                justify="left",
                anchor="w",
                text_color=palette.get("text", "#1f2937"),
            ).pack(fill="x", padx=24, pady=(0, 8))
        ctk.CTkButton(
            window,
            text=text.OK,
            width=90,
            fg_color=palette.get("accent", "#e11d74"),
            hover_color=palette.get("accent_hover", "#be185d"),
            command=_finish,
        ).pack(anchor="e", padx=24, pady=(8, 20))


__all__ = ["CtkDialogPresenter"]
