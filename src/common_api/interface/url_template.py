# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""URL template resolution.

Templates contain zero or more ``{name}`` tokens. Every token is matched
as a whole, so ``{id}`` and ``{parent_id}`` never interfere, and all tokens
are substituted in one pass: the result does not depend on the order of
the values mapping, and substituted values are never re-scanned.

Example:
    ::

        resolve_url("/dict/{dict_id}/entry/code/{code}", {"dict_id": 7, "code": "RED"})
        # "/dict/7/entry/code/RED"
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from enum import Enum
from typing import Any
from urllib.parse import quote

from ..errors import UnresolvedTokenError

TOKEN_PATTERN = re.compile(r"\{([A-Za-z_][A-Za-z0-9_]*)\}")


def stringify_id(value: Any) -> str:
    """Canonical string form of an identifier.

    Integers go through exact decimal conversion so 64-bit and larger IDs
    never lose precision.
    """
    if isinstance(value, bool):
        raise TypeError("A boolean is not an identifier")
    if isinstance(value, int):
        return int.__str__(value)
    if isinstance(value, str):
        return value
    raise TypeError(f"Cannot stringify identifier of type {type(value).__name__}")


def template_tokens(template: str) -> set[str]:
    """Names of the tokens appearing in template."""
    return set(TOKEN_PATTERN.findall(template))


def resolve_url(template: str, values: Mapping[str, Any] | None = None) -> str:
    """Substitute every token of template with its path-quoted value.

    Raises:
        UnresolvedTokenError: If a token has no entry in values, or its value is
            None or renders as an empty string.
    """
    values = values or {}

    def substitute(match: re.Match[str]) -> str:
        token = match.group(1)
        value = values.get(token)
        if value is None:
            raise UnresolvedTokenError(template, token)
        if isinstance(value, Enum):
            value = value.value
        text = stringify_id(value)
        # an empty segment would address the parent collection instead
        if not text:
            raise UnresolvedTokenError(template, token)
        return quote(text, safe="")

    return TOKEN_PATTERN.sub(substitute, template)


__all__ = ["TOKEN_PATTERN", "resolve_url", "stringify_id", "template_tokens"]
