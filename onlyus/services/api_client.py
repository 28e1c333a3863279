"""Shared HTTP plumbing for the OnlyUs backend collaborators."""
from __future__ import annotations

import logging
from typing import Any

import httpx

from ..config import Settings, get_settings

logger = logging.getLogger(__name__)


class ApiError(RuntimeError):
    """Base class for failures reaching the OnlyUs backend."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


def response_detail(response: httpx.Response | None, fallback: str) -> str:
    """Extract the backend's ``detail`` message, falling back to ``fallback``."""

    if response is None:
        return fallback
    try:
        payload = response.json()
    except ValueError:
        text = (response.text or "").strip()
        return text or fallback
    if isinstance(payload, dict):
        detail = payload.get("detail") or payload.get("message")
        if isinstance(detail, str) and detail.strip():
            return detail.strip()
    return fallback


class ApiClient:
    """Builds authenticated ``httpx.AsyncClient`` instances for the backend."""

    def __init__(
        self,
        *,
        settings: Settings | None = None,
        base_url: str | None = None,
        token: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings or get_settings()
        self.base_url = (base_url or self._settings.api_base_url).rstrip("/")
        self._token = token if token is not None else self._settings.api_token
        self._transport = transport

    @property
    def settings(self) -> Settings:
        return self._settings

    def set_token(self, token: str | None) -> None:
        self._token = (token or "").strip() or None

    def headers(self) -> dict[str, str]:
        headers: dict[str, str] = {"Accept": "application/json"}
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            headers=self.headers(),
            timeout=self._settings.http_timeout,
            transport=self._transport,
        )

    async def request(
        self,
        method: str,
        path: str,
        *,
        error_cls: type[ApiError],
        failure_message: str,
        **kwargs: Any,
    ) -> httpx.Response:
        """Send a request and translate transport/status failures into ``error_cls``."""

        try:
            async with self.client() as client:
                response = await client.request(method, path, **kwargs)
                response.raise_for_status()
        except httpx.TimeoutException as exc:
            logger.error("Backend timeout | method=%s path=%s error=%s", method, path, type(exc).__name__)
            raise error_cls(f"{failure_message}: request timed out") from exc
        except httpx.HTTPStatusError as exc:
            status_code = exc.response.status_code if exc.response is not None else None
            logger.error(
                "Backend HTTP status error | method=%s path=%s status=%s",
                method,
                path,
                status_code or "unknown",
            )
            detail = response_detail(exc.response, failure_message)
            raise error_cls(detail, status_code=status_code) from exc
        except httpx.HTTPError as exc:
            logger.error("Backend transport error | method=%s path=%s error=%s", method, path, type(exc).__name__)
            raise error_cls(f"{failure_message}: network error") from exc
        return response


__all__ = ["ApiClient", "ApiError", "response_detail"]
