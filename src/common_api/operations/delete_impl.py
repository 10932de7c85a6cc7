# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Delete templates: soft delete, reversible through restore."""

from __future__ import annotations

import datetime as dt
from collections.abc import Awaitable, Mapping, Sequence
from typing import Any

from ..progress import Activity
from .base import EntityContext, KeyPart, id_key, parent_and_key, string_key
from .lifecycle import all_transition, batch_transition, single_transition


def delete_impl(
    api: EntityContext,
    url: str,
    id: Any,
    show_loading: bool = False,
    options: Mapping[str, Any] | None = None,
) -> Awaitable[dt.datetime | None]:
    """Soft-delete the entity with the given ID.

    Returns:
        Awaitable resolving to the deletion timestamp, or None when the
        server answers with an empty body.
    """
    return single_transition(
        api, Activity.DELETING, "delete", "delete", url, id_key(id), show_loading, options
    )


def delete_by_key_impl(
    api: EntityContext,
    url: str,
    key_name: str,
    key_value: Any,
    show_loading: bool = False,
    options: Mapping[str, Any] | None = None,
) -> Awaitable[dt.datetime | None]:
    keys = string_key(key_name, key_value)
    return single_transition(api, Activity.DELETING, "delete", "delete", url, keys, show_loading, options)


def delete_by_parent_and_key_impl(
    api: EntityContext,
    url: str,
    parent_key_name: str,
    parent_key_value: Any,
    key_name: str,
    key_value: Any,
    show_loading: bool = False,
    options: Mapping[str, Any] | None = None,
) -> Awaitable[dt.datetime | None]:
    keys = parent_and_key(parent_key_name, parent_key_value, key_name, key_value)
    return single_transition(api, Activity.DELETING, "delete", "delete", url, keys, show_loading, options)


def delete_by_keys_impl(
    api: EntityContext,
    url: str,
    keys: Sequence[KeyPart],
    show_loading: bool = False,
    options: Mapping[str, Any] | None = None,
) -> Awaitable[dt.datetime | None]:
    return single_transition(api, Activity.DELETING, "delete", "delete", url, keys, show_loading, options)


def batch_delete_impl(
    api: EntityContext,
    url: str,
    ids: Sequence[Any],
    show_loading: bool = False,
    options: Mapping[str, Any] | None = None,
) -> Awaitable[int]:
    """Soft-delete the entities whose IDs are listed; the IDs travel as a JSON array body."""
    return batch_transition(api, Activity.DELETING, "delete", "delete", url, ids, show_loading, options)


def delete_all_impl(
    api: EntityContext,
    url: str,
    criteria: Mapping[str, Any] | None = None,
    show_loading: bool = False,
    options: Mapping[str, Any] | None = None,
) -> Awaitable[int]:
    return all_transition(api, Activity.DELETING, "delete", "delete", url, criteria, show_loading, options)


__all__ = [
    "batch_delete_impl",
    "delete_all_impl",
    "delete_by_key_impl",
    "delete_by_keys_impl",
    "delete_by_parent_and_key_impl",
    "delete_impl",
]
