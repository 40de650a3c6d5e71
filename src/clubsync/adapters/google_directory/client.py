"""HTTP client for the Admin SDK Directory API."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from clubsync.adapters.http_resilience import ResilientClient

from .schema import ErrorResponse, MemberPayload, UserListResponse, UserPayload

if TYPE_CHECKING:
    from collections.abc import Callable

    from clubsync.config import GoogleDirectoryConfig, ResilienceConfig

log = getLogger(__name__)

DEFAULT_PAGE_SIZE = 500


class AdminDirectoryAPIError(RuntimeError):
    """Raised when the Directory API answers with an error status."""

    def __init__(self, message: str, *, status_code: int, reason: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.reason = reason


def _default_client_factory(config: ResilienceConfig) -> ResilientClient:
    return ResilientClient(config)


@dataclass(slots=True)
class AdminDirectoryClient:
    """Thin REST client; one method per endpoint used by ``GoogleDirectory``."""

    config: GoogleDirectoryConfig
    customer: str = "my_customer"
    client_factory: Callable[[ResilienceConfig], ResilientClient] = field(
        default=_default_client_factory
    )
    _client: ResilientClient | None = field(default=None, init=False)

    @property
    def client(self) -> ResilientClient:
        if self._client is None:
            self._client = self.client_factory(self.config.resilience)
        return self._client

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None

    def list_users(self, *, query: str, page_token: str | None = None) -> UserListResponse:
        params: dict[str, str | int] = {
            "customer": self.customer,
            "query": query,
            "projection": "full",
            "maxResults": DEFAULT_PAGE_SIZE,
        }
        if page_token:
            params["pageToken"] = page_token
        response = self._send("GET", "users", params=params)
        return UserListResponse.model_validate(response.json())

    def get_user(self, user_key: str) -> UserPayload:
        response = self._send("GET", f"users/{_quote(user_key)}", params={"projection": "full"})
        return UserPayload.model_validate(response.json())

    def insert_user(self, user: UserPayload) -> UserPayload:
        response = self._send("POST", "users", json=user.to_request())
        return UserPayload.model_validate(response.json())

    def update_user(self, user_key: str, user: UserPayload) -> UserPayload:
        response = self._send("PUT", f"users/{_quote(user_key)}", json=user.to_request())
        return UserPayload.model_validate(response.json())

    def delete_user(self, user_key: str) -> None:
        self._send("DELETE", f"users/{_quote(user_key)}")

    def insert_group_member(self, group_key: str, email: str) -> None:
        member = MemberPayload(email=email)
        self._send(
            "POST",
            f"groups/{_quote(group_key)}/members",
            json=member.model_dump(by_alias=True),
        )

    def delete_group_member(self, group_key: str, member_key: str) -> None:
        self._send("DELETE", f"groups/{_quote(group_key)}/members/{_quote(member_key)}")

    def _send(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, str | int] | None = None,
        json: object = None,
    ) -> httpx.Response:
        headers = {"Authorization": f"Bearer {self.config.access_token}"}
        response = self.client.request(method, path, params=params, json=json, headers=headers)
        if response.is_error:
            raise _api_error(response)
        return response


def _quote(value: str) -> str:
    return quote(value, safe="@")


def _api_error(response: httpx.Response) -> AdminDirectoryAPIError:
    message = response.reason_phrase or f"HTTP {response.status_code}"
    reason: str | None = None
    try:
        payload = ErrorResponse.model_validate(response.json())
    except (ValueError, ValidationError):
        log.debug("Unparseable error body for HTTP %s", response.status_code)
    else:
        message = payload.error.message or message
        if payload.error.errors:
            reason = payload.error.errors[0].reason
    log.error("Directory API error %s: %s", response.status_code, message)
    return AdminDirectoryAPIError(message, status_code=response.status_code, reason=reason)
