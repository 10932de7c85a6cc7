# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Update templates: PUT a whole entity or a single property.

Entity updates take their key from the entity itself (its ``id`` or the
named business key) and return the updated entity. Property updates send
the bare value and return the server's modification timestamp.
"""

from __future__ import annotations

import datetime as dt
from collections.abc import Awaitable, Mapping, Sequence
from enum import Enum
from typing import Any

from ..interface.descriptor import TypeSpec
from ..interface.url_template import resolve_url
from ..interface.validators import validate_string, validate_value
from ..progress import Activity
from .base import (
    EntityContext,
    KeyPart,
    build_params,
    check_entity,
    check_keys,
    check_show_loading,
    decode_entity,
    decode_timestamp,
    describe_keys,
    entity_value,
    id_key,
    log_success,
    parent_and_key,
    send,
    string_key,
    to_json,
)


def _update(
    api: EntityContext,
    url: str,
    keys: Sequence[KeyPart],
    entity: Any,
    show_loading: bool,
    options: Mapping[str, Any] | None,
) -> Awaitable[Any]:
    values = check_keys(keys)
    check_show_loading(show_loading)
    path = resolve_url(url, values)
    params = build_params(options)
    body = to_json(entity)
    name = api.descriptor.name

    async def run() -> Any:
        obj = await send(api, Activity.UPDATING, show_loading, "put", path, json=body, params=params)
        result = decode_entity(api.descriptor.entity_class, obj, path)
        log_success(api.logger, "update", name, keys)
        api.logger.debug("The updated %s is: %s", name, result)
        return result

    return run()


def _entity_key(entity: Any, key_name: Any) -> list[KeyPart]:
    validate_string("key_name", key_name)
    return string_key(key_name, entity_value(entity, key_name))


def update_impl(
    api: EntityContext,
    url: str,
    entity: Any,
    show_loading: bool = False,
    options: Mapping[str, Any] | None = None,
) -> Awaitable[Any]:
    """Update an entity addressed by its own ``id``.

    Raises:
        InvalidArgumentError: If entity is not an entity or has no valid id.
    """
    check_entity(api, entity)
    keys = id_key(entity_value(entity, "id"))
    return _update(api, url, keys, entity, show_loading, options)


def update_by_key_impl(
    api: EntityContext,
    url: str,
    key_name: str,
    entity: Any,
    show_loading: bool = False,
    options: Mapping[str, Any] | None = None,
) -> Awaitable[Any]:
    """Update an entity addressed by the string business key key_name it carries."""
    check_entity(api, entity)
    return _update(api, url, _entity_key(entity, key_name), entity, show_loading, options)


def update_by_parent_and_key_impl(
    api: EntityContext,
    url: str,
    parent_key_name: str,
    parent_key_value: Any,
    key_name: str,
    entity: Any,
    show_loading: bool = False,
    options: Mapping[str, Any] | None = None,
) -> Awaitable[Any]:
    check_entity(api, entity)
    validate_string("key_name", key_name)
    keys = parent_and_key(parent_key_name, parent_key_value, key_name, entity_value(entity, key_name))
    return _update(api, url, keys, entity, show_loading, options)


def update_by_keys_impl(
    api: EntityContext,
    url: str,
    keys: Sequence[KeyPart],
    entity: Any,
    show_loading: bool = False,
    options: Mapping[str, Any] | None = None,
) -> Awaitable[Any]:
    check_entity(api, entity)
    return _update(api, url, keys, entity, show_loading, options)


def _update_property(
    api: EntityContext,
    url: str,
    keys: Sequence[KeyPart],
    property_name: Any,
    property_type: TypeSpec | type,
    value: Any,
    enum: type[Enum] | None,
    show_loading: bool,
    options: Mapping[str, Any] | None,
) -> Awaitable[dt.datetime | None]:
    validate_string("property_name", property_name)
    validate_value(property_name, value, property_type, enum=enum, nullable=True)
    values = check_keys(keys)
    check_show_loading(show_loading)
    path = resolve_url(url, {**values, "property_name": property_name})
    params = build_params(options)
    body = to_json(value)
    name = api.descriptor.name

    async def run() -> dt.datetime | None:
        obj = await send(api, Activity.UPDATING, show_loading, "put", path, json=body, params=params)
        timestamp = decode_timestamp(obj, path)
        api.logger.info(
            'Successfully update the property "%s" of the %s by %s',
            property_name, name, describe_keys(keys),
        )
        return timestamp

    return run()


def update_property_impl(
    api: EntityContext,
    url: str,
    id: Any,
    property_name: str,
    property_type: TypeSpec | type,
    value: Any,
    show_loading: bool = False,
    options: Mapping[str, Any] | None = None,
    enum: type[Enum] | None = None,
) -> Awaitable[dt.datetime | None]:
    """Update a single property of the entity with the given ID.

    Args:
        property_type: Type tag(s) or class the value must match. None is
            always accepted and clears the property.
        enum: Enumeration backing an ENUM-tagged property.

    Returns:
        Awaitable resolving to the modification timestamp.
    """
    return _update_property(
        api, url, id_key(id), property_name, property_type, value, enum, show_loading, options
    )


def update_property_by_key_impl(
    api: EntityContext,
    url: str,
    key_name: str,
    key_value: Any,
    property_name: str,
    property_type: TypeSpec | type,
    value: Any,
    show_loading: bool = False,
    options: Mapping[str, Any] | None = None,
    enum: type[Enum] | None = None,
) -> Awaitable[dt.datetime | None]:
    keys = string_key(key_name, key_value)
    return _update_property(
        api, url, keys, property_name, property_type, value, enum, show_loading, options
    )


__all__ = [
    "update_by_key_impl",
    "update_by_keys_impl",
    "update_by_parent_and_key_impl",
    "update_impl",
    "update_property_by_key_impl",
    "update_property_impl",
]
