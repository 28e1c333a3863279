"""Convenience exports for service layer."""
from .api_client import ApiClient, ApiError
from .auth_service import AuthController, AuthServiceError, HttpAuthController
from .storage_service import StorageService, StorageServiceError, prepare_profile_image
from .user_state import (
    UserLoadError,
    UserLoaded,
    UserLoading,
    UserState,
    UserStateError,
    UserStateStore,
)

__all__ = [
    "ApiClient",
    "ApiError",
    "AuthController",
    "AuthServiceError",
    "HttpAuthController",
    "StorageService",
    "StorageServiceError",
    "UserLoadError",
    "UserLoaded",
    "UserLoading",
    "UserState",
    "UserStateError",
    "UserStateStore",
    "prepare_profile_image",
]
