# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Async HTTP collaborator built on httpx.

HttpClient issues exactly one request per call and decodes the JSON body.
Any failure, whether a non-2xx status or a transport error, is logged and
raised as RemoteError carrying a structured ErrorInfo. There is no retry
and no request de-duplication: connection pooling, TLS and timeouts are
left to the underlying httpx.AsyncClient.

Example:
    ::

        async with HttpClient("https://api.example.com") as http:
            page = await http.get("/country", params={"page_size": 10})
"""

from __future__ import annotations

import logging
import re
from typing import Any
from urllib.parse import unquote

import httpx

from .errors import RemoteError
from .models import ErrorInfo, ExportedFile

logger = logging.getLogger(__name__)

API_TOKEN_HEADER = "X-API-Token"

_FILENAME_PATTERN = re.compile(r"filename\*=(?:UTF-8'')?([^;]+)|filename=\"([^\"]+)\"", re.IGNORECASE)


def content_disposition_filename(header: str | None) -> str | None:
    """Extract the filename from a Content-Disposition header.

    Supports the RFC 5987 ``filename*=UTF-8''...`` form and the quoted
    ``filename="..."`` form. Returns None when no filename is present.
    """
    if not header:
        return None
    match = _FILENAME_PATTERN.search(header)
    if not match:
        return None
    if match.group(1):
        return unquote(match.group(1).strip())
    return match.group(2)


def _decode_body(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


def _error_info(response: httpx.Response) -> ErrorInfo:
    """Build ErrorInfo from an error response, whatever its body looks like."""
    body = _decode_body(response)
    if isinstance(body, dict):
        if isinstance(body.get("error"), dict):
            body = body["error"]
        try:
            info = ErrorInfo.model_validate(body)
        except ValueError:
            info = ErrorInfo(message=str(body))
        if not info.message:
            info.message = str(body.get("detail") or response.reason_phrase)
        return info
    message = body if isinstance(body, str) and body else response.reason_phrase
    return ErrorInfo(type="HTTP_ERROR", code=str(response.status_code), message=message)


class HttpClient:
    """Thin async wrapper around httpx.AsyncClient.

    Attributes:
        base_url: Base URL prepended to every request path.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 30.0,
        api_token: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        headers = {"Accept": "application/json"}
        if api_token:
            headers[API_TOKEN_HEADER] = api_token
        self.base_url = base_url
        self.timeout = timeout
        self._headers = headers
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def client(self) -> httpx.AsyncClient:
        """Underlying httpx client, created on first use and again after aclose()."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                headers=self._headers,
                transport=self._transport,
            )
        return self._client

    async def __aenter__(self) -> HttpClient:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._client is not None:
            client, self._client = self._client, None
            await client.aclose()

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,
        files: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        """Send one request and return the raw response.

        Raises:
            RemoteError: On transport failure or non-2xx status.
        """
        url = f"{self.base_url.rstrip('/')}/{path.lstrip('/')}"
        try:
            response = await self.client.request(
                method,
                path,
                params=params or None,
                json=json,
                files=files,
                headers=headers,
            )
        except httpx.HTTPError as e:
            info = ErrorInfo(type="NETWORK_ERROR", code=type(e).__name__, message=str(e) or type(e).__name__)
            logger.error("%s %s failed: %s", method, url, info.message)
            raise RemoteError(method, url, info) from e

        # redirects are not followed, so a 3xx is a failure too
        if not response.is_success:
            info = _error_info(response)
            logger.error(
                "%s %s failed with status %d: %s", method, url, response.status_code, info.message
            )
            raise RemoteError(method, url, info, status_code=response.status_code)
        return response

    async def get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        return _decode_body(await self.request("GET", path, params=params))

    async def head(self, path: str, params: dict[str, Any] | None = None) -> bool:
        await self.request("HEAD", path, params=params)
        return True

    async def post(
        self,
        path: str,
        json: Any = None,
        params: dict[str, Any] | None = None,
        files: dict[str, Any] | None = None,
    ) -> Any:
        return _decode_body(await self.request("POST", path, params=params, json=json, files=files))

    async def put(self, path: str, json: Any = None, params: dict[str, Any] | None = None) -> Any:
        return _decode_body(await self.request("PUT", path, params=params, json=json))

    async def patch(self, path: str, json: Any = None, params: dict[str, Any] | None = None) -> Any:
        return _decode_body(await self.request("PATCH", path, params=params, json=json))

    async def delete(self, path: str, json: Any = None, params: dict[str, Any] | None = None) -> Any:
        return _decode_body(await self.request("DELETE", path, params=params, json=json))

    async def download(
        self,
        path: str,
        params: dict[str, Any] | None,
        mime_type: str,
        default_filename: str,
    ) -> ExportedFile:
        """GET a binary payload, requesting mime_type through the Accept header."""
        response = await self.request("GET", path, params=params, headers={"Accept": mime_type})
        filename = content_disposition_filename(response.headers.get("content-disposition"))
        content_type = response.headers.get("content-type", mime_type).split(";")[0].strip()
        return ExportedFile(
            filename=filename or default_filename,
            mime_type=content_type or mime_type,
            content=response.content,
        )


__all__ = ["API_TOKEN_HEADER", "HttpClient", "content_disposition_filename"]
