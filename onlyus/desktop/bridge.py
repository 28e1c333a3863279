"""Runs the editor's coroutines on a background asyncio loop and hands UI work back to Tk."""
from __future__ import annotations

import asyncio
import logging
import queue
import threading
import tkinter as tk
from concurrent.futures import Future
from typing import Any, Awaitable, Callable, Optional, TypeVar

import customtkinter as ctk

logger = logging.getLogger(__name__)

T = TypeVar("T")

_UI_POLL_MS = 25


class AsyncBridge:
    """All editor state changes happen on the loop thread; all widget work on the Tk thread."""

    def __init__(self, root: ctk.CTk) -> None:
        self._root = root
        self._loop = asyncio.new_event_loop()
        self._thread = threading.Thread(target=self._run_loop, name="onlyus-async", daemon=True)
        self._ui_queue: "queue.Queue[tuple[Callable[..., Any], tuple[Any, ...]]]" = queue.Queue()
        self._poll_handle: Optional[str] = None

    def _run_loop(self) -> None:
        asyncio.set_event_loop(self._loop)
        self._loop.run_forever()

    def start(self) -> None:
        self._thread.start()
        self._poll_handle = self._root.after(_UI_POLL_MS, self._drain_ui_queue)

    def stop(self) -> None:
        if self._poll_handle is not None:
            try:
                self._root.after_cancel(self._poll_handle)
            except tk.TclError:
                logger.debug("UI poll already cancelled")
            self._poll_handle = None
        if self._loop.is_running():
            self._loop.call_soon_threadsafe(self._loop.stop)
        self._thread.join(timeout=2)

    # -- loop side -----------------------------------------------------

    def submit(self, coro: Awaitable[T]) -> "Future[T]":
        future = asyncio.run_coroutine_threadsafe(coro, self._loop)  # type: ignore[arg-type]
        future.add_done_callback(self._log_failure)
        return future

    def dispatch(self, fn: Callable[..., Any], *args: Any) -> None:
        """Run a synchronous editor call on the loop thread."""

        self._loop.call_soon_threadsafe(lambda: fn(*args))

    @staticmethod
    def _log_failure(future: "Future[Any]") -> None:
        if future.cancelled():
            return
        exc = future.exception()
        if exc is not None:
            logger.error("Background task failed", exc_info=exc)

    async def wait_for_ui(self, build: Callable[[Callable[[Any], None]], None]) -> Any:
        """Let ``build`` open UI on the Tk thread and suspend until it calls ``resolve``."""

        loop = asyncio.get_running_loop()
        future: asyncio.Future[Any] = loop.create_future()

        def _settle(value: Any) -> None:
            if not future.done():
                future.set_result(value)

        def resolve(value: Any) -> None:
            loop.call_soon_threadsafe(_settle, value)

        def _build() -> None:
            try:
                build(resolve)
            except Exception:
                logger.exception("Unable to open dialog")
                resolve(None)

        self.call_in_ui(_build)
        return await future

    # -- Tk side -------------------------------------------------------

    def call_in_ui(self, fn: Callable[..., Any], *args: Any) -> None:
        self._ui_queue.put((fn, args))

    def _drain_ui_queue(self) -> None:
        while True:
            try:
                fn, args = self._ui_queue.get_nowait()
            except queue.Empty:
                break
            try:
                fn(*args)
            except Exception:
                logger.exception("UI callback %r failed", fn)
        if getattr(self._root, "winfo_exists", lambda: False)():
            self._poll_handle = self._root.after(_UI_POLL_MS, self._drain_ui_queue)


__all__ = ["AsyncBridge"]
