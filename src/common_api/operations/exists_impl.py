# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Exists templates: HEAD request telling whether an entity is present."""

from __future__ import annotations

from collections.abc import Awaitable, Mapping, Sequence
from typing import Any

from ..errors import RemoteError
from ..interface.url_template import resolve_url
from ..progress import Activity
from .base import (
    EntityContext,
    KeyPart,
    build_params,
    check_keys,
    check_show_loading,
    describe_keys,
    id_key,
    parent_and_key,
    send,
    string_key,
)

NOT_FOUND = 404


def _exists(
    api: EntityContext,
    url: str,
    keys: Sequence[KeyPart],
    show_loading: bool,
    options: Mapping[str, Any] | None,
) -> Awaitable[bool]:
    values = check_keys(keys)
    check_show_loading(show_loading)
    path = resolve_url(url, values)
    params = build_params(options)
    name = api.descriptor.name

    async def run() -> bool:
        try:
            await send(api, Activity.GETTING, show_loading, "head", path, params=params)
        except RemoteError as e:
            if e.status_code != NOT_FOUND:
                raise
            api.logger.info("Checked the %s by %s: not found", name, describe_keys(keys))
            return False
        api.logger.info("Checked the %s by %s: found", name, describe_keys(keys))
        return True

    return run()


def exists_impl(
    api: EntityContext,
    url: str,
    id: Any,
    show_loading: bool = False,
    options: Mapping[str, Any] | None = None,
) -> Awaitable[bool]:
    """Check whether the entity with the given ID exists.

    Returns:
        Awaitable resolving to True, or False when the server answers 404.
        Any other remote failure propagates as RemoteError.
    """
    return _exists(api, url, id_key(id), show_loading, options)


def exists_by_key_impl(
    api: EntityContext,
    url: str,
    key_name: str,
    key_value: Any,
    show_loading: bool = False,
    options: Mapping[str, Any] | None = None,
) -> Awaitable[bool]:
    return _exists(api, url, string_key(key_name, key_value), show_loading, options)


def exists_by_parent_and_key_impl(
    api: EntityContext,
    url: str,
    parent_key_name: str,
    parent_key_value: Any,
    key_name: str,
    key_value: Any,
    show_loading: bool = False,
    options: Mapping[str, Any] | None = None,
) -> Awaitable[bool]:
    keys = parent_and_key(parent_key_name, parent_key_value, key_name, key_value)
    return _exists(api, url, keys, show_loading, options)


def exists_by_keys_impl(
    api: EntityContext,
    url: str,
    keys: Sequence[KeyPart],
    show_loading: bool = False,
    options: Mapping[str, Any] | None = None,
) -> Awaitable[bool]:
    return _exists(api, url, keys, show_loading, options)


__all__ = [
    "exists_by_key_impl",
    "exists_by_keys_impl",
    "exists_by_parent_and_key_impl",
    "exists_impl",
]
