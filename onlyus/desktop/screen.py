"""
Profile Screen - customtkinter rendering of the profile view tree
=================================================================
Each section keeps its widgets and only reconfigures them when the slice of
the view tree it owns has a different signature than last time.
"""

from __future__ import annotations

import hashlib
import json
import tkinter as tk
from dataclasses import asdict, dataclass, is_dataclass
from typing import Any, Callable, Optional

import customtkinter as ctk

from .. import constants as text
from ..ui.render import (
    AvatarView,
    ErrorView,
    InfoRow,
    LoadingView,
    NameDisplayView,
    NameEditorView,
    NotFoundView,
    ProfileView,
    ScreenView,
    ToggleRow,
)
from .theme import PALETTE, Palette

AVATAR_SIZE = 120

AvatarRequest = Callable[[str, int, Callable[[Optional[ctk.CTkImage]], None]], None]


@dataclass
class ScreenCallbacks:
    change_avatar: Callable[[], None]
    start_edit: Callable[[], None]
    buffer_changed: Callable[[str], None]
    cancel_edit: Callable[[], None]
    save_name: Callable[[], None]
    toggle: Callable[[str, bool], None]
    show_support: Callable[[], None]
    show_about: Callable[[], None]
    sign_out: Callable[[], None]
    delete_account: Callable[[], None]


class Section:
    """Base class for screen sections with signature-based update detection."""

    def __init__(self, master: Any, palette: Palette) -> None:
        self.palette = palette
        self.frame = ctk.CTkFrame(
            master,
            corner_radius=20,
            fg_color=palette.get("card", "#fffafb"),
            border_width=1,
            border_color=palette.get("border", "#f9c6d2"),
        )
        self.frame.grid_columnconfigure(0, weight=1)
        self._signature = ""

    def compute_signature(self, data: Any) -> str:
        payload = asdict(data) if is_dataclass(data) else data
        try:
            serialized = json.dumps(payload, sort_keys=True, ensure_ascii=False, default=str)
        except (TypeError, ValueError):
            serialized = repr(payload)
        return hashlib.sha1(serialized.encode("utf-8", "ignore")).hexdigest()[:16]

    def update(self, data: Any) -> None:
        signature = self.compute_signature(data)
        if signature == self._signature:
            return
        self._signature = signature
        self.render(data)

    def render(self, data: Any) -> None:
        raise NotImplementedError


class AvatarSection(Section):
    def __init__(self, master: Any, palette: Palette, *, on_change: Callable[[], None], request_avatar: AvatarRequest) -> None:
        super().__init__(master, palette)
        self.frame.configure(fg_color="transparent", border_width=0)
        self._request_avatar = request_avatar
        self._photo_url: Optional[str] = None
        self.image_label = ctk.CTkLabel(
            self.frame,
            text="",
            width=AVATAR_SIZE,
            height=AVATAR_SIZE,
            corner_radius=AVATAR_SIZE // 2,
            fg_color=palette.get("accent_soft", "#fbcfe8"),
            text_color="#ffffff",
            font=ctk.CTkFont(size=40, weight="bold"),
        )
        self.image_label.grid(row=0, column=0, pady=(8, 8))
        self.image_label.bind("<Button-1>", lambda _e: on_change())
        self.change_btn = ctk.CTkButton(
            self.frame,
            text="Change photo",
            width=140,
            fg_color=palette.get("accent", "#e11d74"),
            hover_color=palette.get("accent_hover", "#be185d"),
            command=on_change,
        )
        self.change_btn.grid(row=1, column=0, pady=(0, 4))
        self.progress = ctk.CTkProgressBar(self.frame, width=140, progress_color=palette.get("accent", "#e11d74"))
        self.progress.set(0)

    def _show_initials(self, initials: str) -> None:
        self.image_label.configure(image=None, text=initials)

    def _apply_image(self, url: str, image: Optional[ctk.CTkImage], initials: str) -> None:
        if url != self._photo_url:
            return
        if image is None:
            self._show_initials(initials)
            return
        self.image_label.configure(image=image, text="")

    def render(self, data: AvatarView) -> None:
        if data.photo_url and data.photo_url != self._photo_url:
            self._photo_url = data.photo_url
            self._show_initials(data.initials)
            self._request_avatar(
                data.photo_url,
                AVATAR_SIZE,
                lambda image, url=data.photo_url, initials=data.initials: self._apply_image(url, image, initials),
            )
        elif not data.photo_url:
            self._photo_url = None
            self._show_initials(data.initials)

        self.change_btn.configure(state="normal" if data.can_change else "disabled")
        if data.is_uploading:
            self.progress.grid(row=2, column=0, pady=(4, 0))
            self.progress.set(data.upload_progress)
        else:
            self.progress.grid_remove()


class NameSection(Section):
    def __init__(self, master: Any, palette: Palette, callbacks: ScreenCallbacks) -> None:
        super().__init__(master, palette)
        self.frame.configure(fg_color="transparent", border_width=0)
        self._callbacks = callbacks
        self._mode: Optional[str] = None
        self._body: Optional[ctk.CTkFrame] = None
        self._widgets: dict[str, Any] = {}
        self._buffer_var = tk.StringVar(master=self.frame)
        self._buffer_var.trace_add("write", self._on_buffer_write)
        self._suppress_trace = False

    def _on_buffer_write(self, *_args: Any) -> None:
        if not self._suppress_trace:
            self._callbacks.buffer_changed(self._buffer_var.get())

    def _rebuild(self, mode: str) -> ctk.CTkFrame:
        if self._body is not None:
            self._body.destroy()
        self._widgets = {}
        self._mode = mode
        self._body = ctk.CTkFrame(self.frame, fg_color="transparent")
        self._body.grid(row=0, column=0, sticky="we")
        self._body.grid_columnconfigure((0, 1), weight=1)
        return self._body

    def _render_display(self, data: NameDisplayView) -> None:
        palette = self.palette
        if self._mode != "display":
            body = self._rebuild("display")
            name_lbl = ctk.CTkLabel(
                body,
                font=ctk.CTkFont(size=24, weight="bold"),
                text_color=palette.get("text", "#1f2937"),
                cursor="hand2",
            )
            name_lbl.grid(row=0, column=0, columnspan=2, pady=(0, 8))
            name_lbl.bind("<Button-1>", lambda _e: self._callbacks.start_edit())
            status_lbl = ctk.CTkLabel(body, corner_radius=12, text_color="#ffffff", height=26)
            status_lbl.grid(row=1, column=0, columnspan=2)
            ctk.CTkButton(
                body,
                text="Edit name",
                width=90,
                fg_color="transparent",
                text_color=palette.get("accent", "#e11d74"),
                hover_color=palette.get("accent_soft", "#fbcfe8"),
                command=self._callbacks.start_edit,
            ).grid(row=2, column=0, columnspan=2, pady=(8, 0))
            self._widgets.update(name=name_lbl, status=status_lbl)

        self._widgets["name"].configure(text=data.display_name)
        color = palette.get("online" if data.is_online else "offline", "#9ca3af")
        self._widgets["status"].configure(text=f"  ● {data.status_text}  ", fg_color=color)

    def _render_editor(self, data: NameEditorView) -> None:
        palette = self.palette
        if self._mode != "editor":
            body = self._rebuild("editor")
            body.configure(fg_color=palette.get("card", "#fffafb"), corner_radius=20)
            ctk.CTkLabel(body, text=data.label, text_color=palette.get("muted", "#9ca3af")).grid(
                row=0, column=0, columnspan=2, sticky="w", padx=20, pady=(16, 4)
            )
            entry = ctk.CTkEntry(body, textvariable=self._buffer_var, width=280)
            entry.grid(row=1, column=0, columnspan=2, sticky="we", padx=20)
            entry.bind("<Return>", lambda _e: self._callbacks.save_name())
            entry.bind("<Escape>", lambda _e: self._callbacks.cancel_edit())
            cancel_btn = ctk.CTkButton(
                body,
                text=text.CANCEL,
                fg_color="transparent",
                border_width=1,
                border_color=palette.get("muted", "#9ca3af"),
                text_color=palette.get("muted", "#9ca3af"),
                hover_color=palette.get("surface", "#ffffff"),
                command=self._callbacks.cancel_edit,
            )
            cancel_btn.grid(row=2, column=0, sticky="we", padx=(20, 6), pady=16)
            save_btn = ctk.CTkButton(
                body,
                text=text.SAVE,
                fg_color=palette.get("accent", "#e11d74"),
                hover_color=palette.get("accent_hover", "#be185d"),
                command=self._callbacks.save_name,
            )
            save_btn.grid(row=2, column=1, sticky="we", padx=(6, 20), pady=16)
            self._widgets.update(entry=entry, cancel=cancel_btn, save=save_btn)
            entry.after(10, entry.focus_set)

        if self._buffer_var.get() != data.buffer:
            self._suppress_trace = True
            try:
                self._buffer_var.set(data.buffer)
            finally:
                self._suppress_trace = False
        self._widgets["entry"].configure(state="disabled" if data.is_saving else "normal")
        self._widgets["cancel"].configure(state="disabled" if data.is_saving else "normal")
        self._widgets["save"].configure(state="normal" if data.can_save else "disabled")

    def render(self, data: NameDisplayView | NameEditorView) -> None:
        if isinstance(data, NameEditorView):
            self._render_editor(data)
        else:
            self._render_display(data)


class InfoSection(Section):
    def render(self, data: tuple[InfoRow, ...]) -> None:
        for child in self.frame.winfo_children():
            child.destroy()
        muted = self.palette.get("muted", "#9ca3af")
        text_color = self.palette.get("text", "#1f2937")
        for idx, row in enumerate(data):
            ctk.CTkLabel(self.frame, text=row.label, text_color=muted, font=ctk.CTkFont(size=12)).grid(
                row=idx * 2, column=0, sticky="w", padx=24, pady=(16 if idx == 0 else 8, 0)
            )
            ctk.CTkLabel(self.frame, text=row.value or "—", text_color=text_color, font=ctk.CTkFont(size=14)).grid(
                row=idx * 2 + 1, column=0, sticky="w", padx=24, pady=(0, 16 if idx == len(data) - 1 else 8)
            )


class ToggleSection(Section):
    def __init__(self, master: Any, palette: Palette, *, on_toggle: Callable[[str, bool], None]) -> None:
        super().__init__(master, palette)
        self._on_toggle = on_toggle
        self._switches: dict[str, ctk.CTkSwitch] = {}

    def _build_switch(self, row_idx: int, row: ToggleRow) -> ctk.CTkSwitch:
        ctk.CTkLabel(self.frame, text=row.title, text_color=self.palette.get("text", "#1f2937")).grid(
            row=row_idx, column=0, sticky="w", padx=24, pady=10
        )
        switch = ctk.CTkSwitch(
            self.frame,
            text="",
            progress_color=self.palette.get("accent", "#e11d74"),
        )
        switch.configure(command=lambda key=row.key, sw=switch: self._on_toggle(key, bool(sw.get())))
        switch.grid(row=row_idx, column=1, sticky="e", padx=16, pady=10)
        return switch

    def render(self, data: tuple[ToggleRow, ...]) -> None:
        for idx, row in enumerate(data):
            switch = self._switches.get(row.key)
            if switch is None:
                switch = self._build_switch(idx, row)
                self._switches[row.key] = switch
            switch.configure(state="normal")
            if row.value:
                switch.select()
            else:
                switch.deselect()
            switch.configure(state="normal" if row.enabled else "disabled")


class ActionsSection(Section):
    def __init__(self, master: Any, palette: Palette, callbacks: ScreenCallbacks) -> None:
        super().__init__(master, palette)
        self.frame.configure(fg_color="transparent", border_width=0)
        accent = palette.get("accent", "#e11d74")
        muted = palette.get("muted", "#9ca3af")
        links = ctk.CTkFrame(self.frame, fg_color="transparent")
        links.grid(row=0, column=0, pady=(0, 12))
        for column, (label, command) in enumerate(((text.SUPPORT, callbacks.show_support), (text.ABOUT, callbacks.show_about))):
            ctk.CTkButton(
                links,
                text=label,
                width=110,
                fg_color="transparent",
                border_width=1,
                border_color=muted,
                text_color=palette.get("text", "#1f2937"),
                hover_color=palette.get("accent_soft", "#fbcfe8"),
                command=command,
            ).grid(row=0, column=column, padx=6)
        ctk.CTkButton(
            self.frame,
            text=text.SIGN_OUT,
            fg_color=accent,
            hover_color=palette.get("accent_hover", "#be185d"),
            command=callbacks.sign_out,
        ).grid(row=1, column=0, sticky="we", padx=24, pady=(0, 8))
        ctk.CTkButton(
            self.frame,
            text=text.DELETE_ACCOUNT,
            fg_color="transparent",
            border_width=1,
            border_color=palette.get("danger", "#ef4444"),
            text_color=palette.get("danger", "#ef4444"),
            hover_color=palette.get("surface", "#ffffff"),
            command=callbacks.delete_account,
        ).grid(row=2, column=0, sticky="we", padx=24)

    def render(self, data: Any) -> None:
        return


class FooterSection(Section):
    def render(self, data: tuple[str, ...]) -> None:
        self.frame.configure(fg_color="transparent", border_width=0)
        for child in self.frame.winfo_children():
            child.destroy()
        for idx, line in enumerate(data):
            ctk.CTkLabel(
                self.frame,
                text=line,
                text_color=self.palette.get("muted", "#9ca3af"),
                font=ctk.CTkFont(size=11 if idx == 0 else 10),
            ).grid(row=idx, column=0, pady=(0, 2))


class ProfileScreen(ctk.CTkScrollableFrame):
    def __init__(
        self,
        master: Any,
        *,
        callbacks: ScreenCallbacks,
        request_avatar: AvatarRequest,
        palette: Optional[Palette] = None,
    ) -> None:
        self.palette = palette or PALETTE
        super().__init__(master, fg_color=self.palette.get("bg", "#fff5f7"), label_text=text.PROFILE_TITLE)
        self.grid_columnconfigure(0, weight=1)

        self.status_label = ctk.CTkLabel(self, text="", text_color=self.palette.get("muted", "#9ca3af"), justify="center")
        self.avatar = AvatarSection(self, self.palette, on_change=callbacks.change_avatar, request_avatar=request_avatar)
        self.name = NameSection(self, self.palette, callbacks)
        self.info = InfoSection(self, self.palette)
        self.settings = ToggleSection(self, self.palette, on_toggle=callbacks.toggle)
        self.privacy = ToggleSection(self, self.palette, on_toggle=callbacks.toggle)
        self.actions = ActionsSection(self, self.palette, callbacks)
        self.footer = FooterSection(self, self.palette)
        self._sections = [self.avatar, self.name, self.info, self.settings, self.privacy, self.actions, self.footer]
        self._showing_profile = False

    def _show_status(self, message: str, color: str) -> None:
        if self._showing_profile:
            for section in self._sections:
                section.frame.grid_remove()
            self._showing_profile = False
        self.status_label.configure(text=message, text_color=color)
        self.status_label.grid(row=0, column=0, pady=120)

    def _show_profile(self, view: ProfileView) -> None:
        if not self._showing_profile:
            self.status_label.grid_remove()
            for row, section in enumerate(self._sections):
                section.frame.grid(row=row, column=0, sticky="we", padx=24, pady=10)
            self._showing_profile = True
        self.avatar.update(view.avatar)
        self.name.update(view.name)
        self.info.update(view.info)
        self.settings.update(view.settings)
        self.privacy.update(view.privacy)
        self.actions.update(None)
        self.footer.update(view.footer)

    def apply(self, view: ScreenView) -> None:
        muted = self.palette.get("muted", "#9ca3af")
        if isinstance(view, ProfileView):
            self._show_profile(view)
        elif isinstance(view, ErrorView):
            self._show_status(f"{view.title}\n{view.detail}", self.palette.get("danger", "#ef4444"))
        elif isinstance(view, NotFoundView):
            self._show_status(view.message, muted)
        elif isinstance(view, LoadingView):
            self._show_status(view.label, muted)


__all__ = ["ProfileScreen", "ScreenCallbacks"]
