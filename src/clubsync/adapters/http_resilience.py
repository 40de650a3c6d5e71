"""Synchronous HTTP client with transport-level retries."""

from __future__ import annotations

from typing import TYPE_CHECKING, TypedDict, Unpack

import httpx
from httpx_retries import RetryTransport

if TYPE_CHECKING:
    from httpx._types import HeaderTypes, QueryParamTypes, URLTypes

    from clubsync.config import ResilienceConfig


class RequestOptions(TypedDict, total=False):
    json: object
    params: QueryParamTypes | None
    headers: HeaderTypes | None


class ClientOptions(TypedDict, total=False):
    base_url: str
    timeout: float
    headers: HeaderTypes
    transport: httpx.BaseTransport


class ResilientClient:
    """``httpx.Client`` wrapped in a ``RetryTransport`` built from the config.

    ``transport`` replaces the network transport underneath the retry layer,
    which is how tests plug in ``httpx.MockTransport``.
    """

    def __init__(
        self,
        config: ResilienceConfig,
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.config = config
        inner = transport or httpx.HTTPTransport()
        retry_transport = RetryTransport(transport=inner, retry=config.retry.build())

        client_kwargs: ClientOptions = {
            "timeout": config.timeout_seconds,
            "transport": retry_transport,
        }
        if config.base_url is not None:
            client_kwargs["base_url"] = config.base_url
        if config.default_headers:
            client_kwargs["headers"] = dict(config.default_headers)
        self._client = httpx.Client(**client_kwargs)

    def close(self) -> None:
        self._client.close()

    def request(
        self,
        method: str,
        url: URLTypes,
        **kwargs: Unpack[RequestOptions],
    ) -> httpx.Response:
        return self._client.request(method, url, **kwargs)
