"""User-facing strings and app metadata shared by the client."""
from __future__ import annotations

APP_NAME = "OnlyUs"
APP_VERSION = "1.0.0"
VERSION_LABEL = f"Version {APP_VERSION}"
COPYRIGHT = "© 2025 OnlyUs. Made with love for couples."
APP_DESCRIPTION = (
    "OnlyUs is a private space for two. Share messages, moments and memories "
    "with the one person who matters most."
)

SUPPORT_EMAIL = "support@onlyus.app"
SUPPORT_WEBSITE = "www.onlyus.app"

PROFILE_TITLE = "Profile"
LOADING_PROFILE = "Loading profile..."
ERROR_LOADING_PROFILE = "Error loading profile"
USER_NOT_FOUND = "User not found"

UPDATE_PHOTO_TITLE = "Update Profile Photo"
CAMERA = "Camera"
GALLERY = "Gallery"
DISPLAY_NAME = "Display Name"
EMAIL = "Email"
JOINED_ON = "Joined on"
ONLINE = "Online"

NOTIFICATION_SETTINGS = "Notifications"
SOUND_ENABLED = "Sound"
VIBRATION_ENABLED = "Vibration"
ONLINE_STATUS = "Show Online Status"
LAST_SEEN_STATUS = "Show Last Seen"
SUPPORT = "Support"
ABOUT = "About"

CANCEL = "Cancel"
SAVE = "Save"
OK = "OK"
DELETE = "Delete"
SIGN_OUT = "Sign Out"
DELETE_ACCOUNT = "Delete Account"
CONFIRM_SIGN_OUT = "Are you sure you want to sign out?"
CONFIRM_DELETE_ACCOUNT = "Are you sure you want to delete your account? This action cannot be undone."

PROFILE_UPDATED = "Profile updated successfully!"
ERROR_UPLOAD_IMAGE = "Failed to upload image"
ONLINE_STATUS_UPDATED = "Online status visibility updated"
LAST_SEEN_UPDATED = "Last seen visibility updated"

SUPPORT_INTRO = "Need help? We're here for you!"
SUPPORT_CONTACT = "Contact us:"

__all__ = [name for name in dir() if name.isupper()]
