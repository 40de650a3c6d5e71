"""Public interface for the Admin SDK directory adapter."""

from __future__ import annotations

from .client import AdminDirectoryAPIError, AdminDirectoryClient
from .directory import GoogleDirectory, classify_error
from .schema import UserListResponse, UserPayload
from .translator import build_user_payload, parse_user

__all__ = [
    "AdminDirectoryAPIError",
    "AdminDirectoryClient",
    "GoogleDirectory",
    "UserListResponse",
    "UserPayload",
    "build_user_payload",
    "classify_error",
    "parse_user",
]
