# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Exception hierarchy for the entity REST client.

Two tiers are distinguished:

- InvalidArgumentError: local contract violation, raised synchronously by
  the validators before any request is built.
- RemoteError: the single HTTP request of an operation failed, either with a
  non-2xx status or at transport level. Carries a structured ErrorInfo.

UnresolvedTokenError signals a URL template that still contains a token
after substitution; it is a programming error in the caller.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .models import ErrorInfo


class InvalidArgumentError(TypeError):
    """Raised when an operation argument fails its declared type or shape."""

    def __init__(self, name: str, message: str):
        self.name = name
        super().__init__(message)


class UnresolvedTokenError(LookupError):
    """Raised when a URL template token has no value to substitute."""

    def __init__(self, template: str, token: str):
        self.template = template
        self.token = token
        super().__init__(f"No value provided for token '{{{token}}}' in URL template '{template}'")


class RemoteError(Exception):
    """Raised when the server rejects a request or the request cannot complete.

    Attributes:
        method: HTTP verb of the failed request.
        url: Request URL.
        status_code: HTTP status, or None for transport failures.
        error_info: Structured error payload decoded from the response body.
    """

    def __init__(
        self,
        method: str,
        url: str,
        error_info: ErrorInfo,
        status_code: int | None = None,
    ):
        self.method = method
        self.url = url
        self.status_code = status_code
        self.error_info = error_info
        status = status_code if status_code is not None else "-"
        super().__init__(f"{method} {url} failed [{status}]: {error_info.message}")

    @property
    def code(self) -> str | None:
        """Error code reported by the server."""
        return self.error_info.code

    @property
    def params(self) -> list[Any]:
        return self.error_info.params


class DecodeError(RemoteError):
    """Raised when a successful response cannot be decoded into the target model."""


__all__ = ["DecodeError", "InvalidArgumentError", "RemoteError", "UnresolvedTokenError"]
