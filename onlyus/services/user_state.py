"""Observed read model for the signed-in user's profile."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Union

from pydantic import ValidationError

from ..schemas import UserProfile
from ..ui.state import Store
from .api_client import ApiClient, ApiError

logger = logging.getLogger(__name__)


class UserStateError(ApiError):
    """Raised when the current user's profile cannot be fetched."""


@dataclass(frozen=True)
class UserLoading:
    pass


@dataclass(frozen=True)
class UserLoaded:
    profile: UserProfile | None


@dataclass(frozen=True)
class UserLoadError:
    detail: str


UserState = Union[UserLoading, UserLoaded, UserLoadError]


def parse_profile(payload: Any) -> UserProfile:
    if not isinstance(payload, dict):
        raise UserStateError("Profile response was not a JSON object")
    data = payload.get("user", payload)
    try:
        return UserProfile.model_validate(data)
    except ValidationError as exc:
        raise UserStateError("Profile response was malformed") from exc


class UserStateStore:
    """Subscribable ``loading | data(profile | None) | error(detail)`` state."""

    def __init__(self, api: ApiClient | None = None) -> None:
        self._api = api
        self._store: Store[UserState] = Store(UserLoading())

    @property
    def state(self) -> UserState:
        return self._store.value

    @property
    def profile(self) -> UserProfile | None:
        current = self._store.value
        if isinstance(current, UserLoaded):
            return current.profile
        return None

    def subscribe(self, listener: Callable[[UserState], None]) -> Callable[[], None]:
        return self._store.subscribe(listener)

    def publish(self, profile: UserProfile | None) -> None:
        self._store.set(UserLoaded(profile))

    def fail(self, detail: str) -> None:
        self._store.set(UserLoadError(detail))

    async def refresh(self) -> UserState:
        """Fetch ``GET /users/me`` and publish the outcome."""

        if self._api is None:
            raise UserStateError("No backend configured for user state")
        self._store.set(UserLoading())
        try:
            response = await self._api.request(
                "GET",
                "/users/me",
                error_cls=UserStateError,
                failure_message="Failed to load profile",
            )
            profile = parse_profile(response.json())
        except UserStateError as exc:
            if exc.status_code == 404:
                self.publish(None)
            else:
                logger.warning("Unable to load current user: %s", exc)
                self.fail(str(exc))
            return self.state
        except ValueError as exc:
            logger.warning("Profile response was not valid JSON: %s", exc)
            self.fail("Profile response was not valid JSON")
            return self.state
        self.publish(profile)
        return self.state


__all__ = [
    "UserLoadError",
    "UserLoaded",
    "UserLoading",
    "UserState",
    "UserStateError",
    "UserStateStore",
    "parse_profile",
]
