"""Account operations the profile screen delegates to the auth backend."""
from __future__ import annotations

import logging
from typing import Protocol

from pydantic import ValidationError

from ..schemas import PrivacyUpdate, ProfileUpdate
from .api_client import ApiClient, ApiError
from .user_state import UserStateError, UserStateStore, parse_profile

logger = logging.getLogger(__name__)


class AuthServiceError(ApiError):
    """Raised when an account operation is rejected or cannot reach the backend."""


class AuthController(Protocol):
    async def update_profile(self, *, display_name: str | None = None, photo_url: str | None = None) -> None:
        ...

    async def update_user_privacy_settings(
        self,
        *,
        show_online_status: bool | None = None,
        show_last_seen: bool | None = None,
    ) -> None:
        ...

    async def sign_out(self) -> None:
        ...

    async def delete_account(self) -> None:
        ...


class HttpAuthController:
    """AuthController backed by the OnlyUs REST API."""

    def __init__(self, api: ApiClient, *, user_state: UserStateStore | None = None) -> None:
        self._api = api
        self._user_state = user_state

    def _publish(self, payload: object) -> None:
        if self._user_state is None or not payload:
            return
        try:
            self._user_state.publish(parse_profile(payload))
        except UserStateError as exc:
            logger.warning("Ignoring unexpected profile payload after update: %s", exc)

    async def _send_update(self, path: str, body: dict[str, object], failure_message: str) -> None:
        response = await self._api.request(
            "PATCH",
            path,
            json=body,
            error_cls=AuthServiceError,
            failure_message=failure_message,
        )
        if response.status_code == 204 or not response.content:
            return
        try:
            payload = response.json()
        except ValueError:
            logger.warning("Non-JSON response from %s; keeping current profile", path)
            return
        self._publish(payload)

    async def update_profile(self, *, display_name: str | None = None, photo_url: str | None = None) -> None:
        fields: dict[str, object] = {}
        if display_name is not None:
            fields["display_name"] = display_name
        if photo_url is not None:
            fields["photo_url"] = photo_url
        if not fields:
            raise AuthServiceError("Nothing to update")
        try:
            payload = ProfileUpdate(**fields)
        except ValidationError as exc:
            raise AuthServiceError("Invalid profile update") from exc
        await self._send_update(
            "/users/me",
            payload.model_dump(exclude_unset=True),
            "Failed to update profile",
        )
        logger.info("Profile updated | fields=%s", ",".join(sorted(fields)))

    async def update_user_privacy_settings(
        self,
        *,
        show_online_status: bool | None = None,
        show_last_seen: bool | None = None,
    ) -> None:
        fields: dict[str, bool] = {}
        if show_online_status is not None:
            fields["show_online_status"] = show_online_status
        if show_last_seen is not None:
            fields["show_last_seen"] = show_last_seen
        if not fields:
            raise AuthServiceError("Nothing to update")
        payload = PrivacyUpdate(**fields)
        await self._send_update(
            "/users/me/privacy",
            payload.model_dump(exclude_unset=True),
            "Failed to update privacy settings",
        )
        logger.info("Privacy settings updated | fields=%s", ",".join(sorted(fields)))

    async def sign_out(self) -> None:
        await self._api.request(
            "POST",
            "/auth/sign-out",
            error_cls=AuthServiceError,
            failure_message="Failed to sign out",
        )
        self._api.set_token(None)
        if self._user_state is not None:
            self._user_state.publish(None)
        logger.info("Signed out")

    async def delete_account(self) -> None:
        await self._api.request(
            "DELETE",
            "/users/me",
            error_cls=AuthServiceError,
            failure_message="Failed to delete account",
        )
        self._api.set_token(None)
        if self._user_state is not None:
            self._user_state.publish(None)
        logger.info("Account deleted")


__all__ = ["AuthController", "AuthServiceError", "HttpAuthController"]
