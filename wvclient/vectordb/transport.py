from __future__ import annotations

import logging
from typing import Any, List, Mapping

import httpx

from .config import ClientConfig
from .errors import WeaviateError

logger = logging.getLogger("wvclient")


def build_async_client(
    config: ClientConfig,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Create an ``httpx.AsyncClient`` bound to the configured service."""
    kwargs = config.client_kwargs()
    return httpx.AsyncClient(
        base_url=kwargs["base_url"],
        headers=kwargs["headers"],
        timeout=httpx.Timeout(kwargs["timeout"]),
        transport=transport,
    )


class HttpTransport:
    """Send JSON requests and normalise error responses into ``WeaviateError``."""

    def __init__(
        self,
        config: ClientConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config
        self._client = build_async_client(config, transport=transport)

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, str] | None = None,
        json: Any = None,
    ) -> Any:
        try:
            response = await self._client.request(
                method,
                path,
                params=dict(params) if params else None,
                json=json,
            )
        except httpx.RequestError as exc:
            logger.error("Request %s %s failed: %s", method, path, exc)
            raise WeaviateError(None, None, [{"message": str(exc)}]) from exc

        if response.is_error:
            error = WeaviateError(
                response.status_code,
                response.reason_phrase,
                _error_payload(response),
            )
            logger.error("Detailed error: %s", error.to_dict())
            raise error

        return _decode_body(response)

    async def aclose(self) -> None:
        await self._client.aclose()


def _decode_body(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


def _error_payload(response: httpx.Response) -> List[dict[str, Any]]:
    try:
        body = response.json()
    except ValueError:
        return [{"message": response.text or response.reason_phrase}]

    errors = body.get("error") if isinstance(body, dict) else None
    if isinstance(errors, list) and errors:
        return [
            entry if isinstance(entry, dict) else {"message": str(entry)}
            for entry in errors
        ]
    if isinstance(body, dict) and body.get("message"):
        return [{"message": str(body["message"])}]
    return [{"message": str(body)}]


__all__ = ["HttpTransport", "build_async_client"]
