# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Common shapes of the lifecycle transitions (delete, restore, purge, erase).

Each transition comes in three forms:

- single: one entity addressed by key parts, answering with the
  transition timestamp (erase answers with nothing);
- batch: a JSON array of identifiers in the request body, answering with
  the number of affected entities;
- all: every entity matching optional criteria, answering with a count.
"""

from __future__ import annotations

import datetime as dt
from collections.abc import Awaitable, Mapping, Sequence
from typing import Any

from ..interface.url_template import resolve_url
from ..interface.validators import validate_criteria, validate_id_array
from ..progress import Activity
from .base import (
    EntityContext,
    KeyPart,
    build_params,
    check_keys,
    check_show_loading,
    decode_count,
    decode_timestamp,
    log_success,
    send,
    to_json,
)


def single_transition(
    api: EntityContext,
    activity: Activity,
    verb: str,
    method: str,
    url: str,
    keys: Sequence[KeyPart],
    show_loading: bool,
    options: Mapping[str, Any] | None,
    returns_timestamp: bool = True,
) -> Awaitable[dt.datetime | None]:
    values = check_keys(keys)
    check_show_loading(show_loading)
    path = resolve_url(url, values)
    params = build_params(options)

    async def run() -> dt.datetime | None:
        obj = await send(api, activity, show_loading, method, path, params=params)
        timestamp = decode_timestamp(obj, path) if returns_timestamp else None
        log_success(api.logger, verb, api.descriptor.name, keys)
        return timestamp

    return run()


def batch_transition(
    api: EntityContext,
    activity: Activity,
    verb: str,
    method: str,
    url: str,
    ids: Any,
    show_loading: bool,
    options: Mapping[str, Any] | None,
    allow_empty: bool = True,
) -> Awaitable[int]:
    validate_id_array(ids, allow_empty=allow_empty)
    check_show_loading(show_loading)
    path = resolve_url(url)
    params = build_params(options)
    body = to_json(list(ids))

    async def run() -> int:
        obj = await send(api, activity, show_loading, method, path, json=body, params=params)
        count = decode_count(obj, path)
        api.logger.info("Successfully %s %d %s(s) in batch", verb, count, api.descriptor.name)
        return count

    return run()


def all_transition(
    api: EntityContext,
    activity: Activity,
    verb: str,
    method: str,
    url: str,
    criteria: Mapping[str, Any] | None,
    show_loading: bool,
    options: Mapping[str, Any] | None,
) -> Awaitable[int]:
    validate_criteria(criteria, api.descriptor.criteria_definitions)
    check_show_loading(show_loading)
    path = resolve_url(url)
    params = build_params(criteria, options)

    async def run() -> int:
        obj = await send(api, activity, show_loading, method, path, params=params)
        count = decode_count(obj, path)
        api.logger.info("Successfully %s all %s(s): %d affected", verb, api.descriptor.name, count)
        return count

    return run()


__all__ = ["all_transition", "batch_transition", "single_transition"]
