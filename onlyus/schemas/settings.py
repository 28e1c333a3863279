"""Schemas backing the privacy settings calls."""
from __future__ import annotations

from pydantic import BaseModel


class PrivacyUpdate(BaseModel):
    show_online_status: bool | None = None
    show_last_seen: bool | None = None


__all__ = ["PrivacyUpdate"]
