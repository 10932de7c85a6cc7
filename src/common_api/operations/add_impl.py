# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Add template: POST a new entity."""

from __future__ import annotations

from collections.abc import Awaitable, Mapping
from typing import Any

from ..interface.url_template import resolve_url
from ..progress import Activity
from .base import EntityContext, build_params, check_entity, check_show_loading, decode_entity, send, to_json


def add_impl(
    api: EntityContext,
    url: str,
    entity: Any,
    show_loading: bool = False,
    options: Mapping[str, Any] | None = None,
) -> Awaitable[Any]:
    """Create an entity.

    The entity is sent as JSON with None fields omitted, so the server
    assigns its ID and defaults. The created entity is decoded from the
    response body.

    Args:
        entity: An entity_class instance or an equivalent mapping.
    """
    check_entity(api, entity)
    check_show_loading(show_loading)
    path = resolve_url(url)
    params = build_params(options)
    body = to_json(entity)
    name = api.descriptor.name

    async def run() -> Any:
        obj = await send(api, Activity.ADDING, show_loading, "post", path, json=body, params=params)
        result = decode_entity(api.descriptor.entity_class, obj, path)
        api.logger.info("Successfully add the %s", name)
        api.logger.debug("The added %s is: %s", name, result)
        return result

    return run()


__all__ = ["add_impl"]
