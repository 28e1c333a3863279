"""Schemas for the signed-in user's profile."""
from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, field_validator

_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def format_date(value: datetime) -> str:
    """Render ``value`` as ``Mon D, YYYY``."""

    return f"{_MONTHS[value.month - 1]} {value.day}, {value.year}"


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def describe_last_seen(last_seen: datetime | None, *, now: datetime | None = None) -> str:
    if last_seen is None:
        return "Offline"
    current = _as_utc(now or datetime.now(timezone.utc))
    seconds = max(0, int((current - _as_utc(last_seen)).total_seconds()))
    if seconds < 60:
        return "Last seen just now"
    if seconds < 3600:
        return f"Last seen {seconds // 60}m ago"
    if seconds < 86400:
        return f"Last seen {seconds // 3600}h ago"
    if seconds < 7 * 86400:
        return f"Last seen {seconds // 86400}d ago"
    seen = _as_utc(last_seen)
    return f"Last seen {_MONTHS[seen.month - 1]} {seen.day}"


class UserProfile(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    display_name: str = ""
    email: str = ""
    photo_url: str | None = None
    is_online: bool = False
    last_seen: datetime | None = None
    created_at: datetime
    show_online_status: bool = True
    show_last_seen: bool = True

    @field_validator("photo_url", mode="before")
    def clean_photo_url(cls, v):
        if v in (None, "", "None"):
            return None
        return v

    @field_validator("display_name", "email", mode="before")
    def clean_text(cls, v):
        if v is None:
            return ""
        if isinstance(v, str):
            return v.strip()
        return v

    @property
    def initials(self) -> str:
        words = self.display_name.split()
        if not words:
            return "?"
        return "".join(word[0] for word in words[:2]).upper()

    @property
    def last_seen_text(self) -> str:
        return describe_last_seen(self.last_seen)


class ProfileUpdate(BaseModel):
    display_name: str | None = Field(default=None, min_length=1, max_length=150)
    photo_url: str | None = None


__all__ = ["ProfileUpdate", "UserProfile", "describe_last_seen", "format_date"]
