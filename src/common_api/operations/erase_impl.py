# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Erase templates: permanent removal regardless of the entity state."""

from __future__ import annotations

from collections.abc import Awaitable, Mapping, Sequence
from typing import Any

from ..progress import Activity
from .base import EntityContext, KeyPart, id_key, parent_and_key, string_key
from .lifecycle import all_transition, batch_transition, single_transition


def erase_impl(
    api: EntityContext,
    url: str,
    id: Any,
    show_loading: bool = False,
    options: Mapping[str, Any] | None = None,
) -> Awaitable[None]:
    """Erase an entity, deleted or not. Resolves to None."""
    return single_transition(
        api, Activity.ERASING, "erase", "delete", url, id_key(id), show_loading, options,
        returns_timestamp=False,
    )


def erase_by_key_impl(
    api: EntityContext,
    url: str,
    key_name: str,
    key_value: Any,
    show_loading: bool = False,
    options: Mapping[str, Any] | None = None,
) -> Awaitable[None]:
    keys = string_key(key_name, key_value)
    return single_transition(
        api, Activity.ERASING, "erase", "delete", url, keys, show_loading, options,
        returns_timestamp=False,
    )


def erase_by_parent_and_key_impl(
    api: EntityContext,
    url: str,
    parent_key_name: str,
    parent_key_value: Any,
    key_name: str,
    key_value: Any,
    show_loading: bool = False,
    options: Mapping[str, Any] | None = None,
) -> Awaitable[None]:
    keys = parent_and_key(parent_key_name, parent_key_value, key_name, key_value)
    return single_transition(
        api, Activity.ERASING, "erase", "delete", url, keys, show_loading, options,
        returns_timestamp=False,
    )


def erase_by_keys_impl(
    api: EntityContext,
    url: str,
    keys: Sequence[KeyPart],
    show_loading: bool = False,
    options: Mapping[str, Any] | None = None,
) -> Awaitable[None]:
    return single_transition(
        api, Activity.ERASING, "erase", "delete", url, keys, show_loading, options,
        returns_timestamp=False,
    )


def batch_erase_impl(
    api: EntityContext,
    url: str,
    ids: Sequence[Any],
    show_loading: bool = False,
    options: Mapping[str, Any] | None = None,
) -> Awaitable[int]:
    """Erase the entities whose IDs are listed.

    Raises:
        InvalidArgumentError: Immediately, when ids is empty.
    """
    return batch_transition(
        api, Activity.ERASING, "erase", "delete", url, ids, show_loading, options,
        allow_empty=False,
    )


def erase_all_impl(
    api: EntityContext,
    url: str,
    criteria: Mapping[str, Any] | None = None,
    show_loading: bool = False,
    options: Mapping[str, Any] | None = None,
) -> Awaitable[int]:
    return all_transition(api, Activity.ERASING, "erase", "delete", url, criteria, show_loading, options)


__all__ = [
    "batch_erase_impl",
    "erase_all_impl",
    "erase_by_key_impl",
    "erase_by_keys_impl",
    "erase_by_parent_and_key_impl",
    "erase_impl",
]
