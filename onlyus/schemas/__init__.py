"""Convenience exports for schema layer."""
from .profiles import ProfileUpdate, UserProfile, describe_last_seen, format_date
from .settings import PrivacyUpdate

__all__ = [
    "PrivacyUpdate",
    "ProfileUpdate",
    "UserProfile",
    "describe_last_seen",
    "format_date",
]
