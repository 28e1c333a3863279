"""Seams between the profile editor and whatever shell presents it."""
from __future__ import annotations

from typing import Protocol, Sequence

from .state import ImageSource


class DialogPresenter(Protocol):
    async def choose_image_source(self) -> ImageSource | None:
        """Suspend until the user picks a source; ``None`` when dismissed."""
        ...

    async def confirm(self, *, title: str, message: str, confirm_label: str, destructive: bool = False) -> bool:
        ...

    async def show_info(self, *, title: str, lines: Sequence[str]) -> None:
        ...


class Notifier(Protocol):
    def success(self, message: str) -> None:
        ...

    def error(self, message: str) -> None:
        ...


class Navigator(Protocol):
    def reset_to_entry(self) -> None:
        """Drop navigation history and show the unauthenticated entry screen."""
        ...


__all__ = ["DialogPresenter", "Navigator", "Notifier"]
