# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Get templates: read one entity, its info view or one of its properties.

Every variant reduces to a list of key parts ``(name, value, type)`` that
are validated, substituted into the URL template in a single pass and
described in the success log message.
"""

from __future__ import annotations

from collections.abc import Awaitable, Mapping, Sequence
from typing import Any

from pydantic import BaseModel, TypeAdapter, ValidationError

from ..interface.url_template import resolve_url
from ..interface.validators import validate_string
from ..progress import Activity
from .base import (
    EntityContext,
    KeyPart,
    build_params,
    check_keys,
    check_show_loading,
    decode_entity,
    decode_error,
    describe_keys,
    id_key,
    log_success,
    parent_and_key,
    send,
    string_key,
)


def decode_property(property_class: Any, obj: Any, path: str) -> Any:
    """Decode a property value with property_class; a None body stays None."""
    if obj is None:
        return None
    if isinstance(property_class, type) and issubclass(property_class, BaseModel):
        return decode_entity(property_class, obj, path)
    try:
        return TypeAdapter(property_class).validate_python(obj)
    except ValidationError as e:
        raise decode_error(path, getattr(property_class, "__name__", str(property_class)), e) from e


def _get(
    api: EntityContext,
    url: str,
    keys: Sequence[KeyPart],
    factory: type[BaseModel],
    label: str,
    show_loading: bool,
    options: Mapping[str, Any] | None,
) -> Awaitable[Any]:
    values = check_keys(keys)
    check_show_loading(show_loading)
    path = resolve_url(url, values)
    params = build_params(options)
    name = api.descriptor.name

    async def run() -> Any:
        obj = await send(api, Activity.GETTING, show_loading, "get", path, params=params)
        result = decode_entity(factory, obj, path)
        log_success(api.logger, "get", f"{label}{name}", keys)
        api.logger.debug("The %s%s is: %s", label, name, result)
        return result

    return run()


def _get_property(
    api: EntityContext,
    url: str,
    property_name: Any,
    property_class: Any,
    keys: Sequence[KeyPart],
    show_loading: bool,
    options: Mapping[str, Any] | None,
) -> Awaitable[Any]:
    validate_string("property_name", property_name)
    values = check_keys(keys)
    check_show_loading(show_loading)
    path = resolve_url(url, {**values, "property_name": property_name})
    params = build_params(options)
    name = api.descriptor.name

    async def run() -> Any:
        obj = await send(api, Activity.GETTING, show_loading, "get", path, params=params)
        result = decode_property(property_class, obj, path)
        api.logger.info(
            'Successfully get the property "%s" of the %s by %s',
            property_name, name, describe_keys(keys),
        )
        api.logger.debug("The property %s of the %s is: %s", property_name, name, result)
        return result

    return run()


# =============================================================================
# Entity
# =============================================================================


def get_impl(
    api: EntityContext,
    url: str,
    id: Any,
    show_loading: bool = False,
    options: Mapping[str, Any] | None = None,
) -> Awaitable[Any]:
    """Get an entity by its ID.

    Args:
        api: Entity context providing descriptor, http, logger and progress.
        url: URL template containing an ``{id}`` token.
        id: Entity identifier, a string or an integer.
        show_loading: Display the progress indicator during the request.
        options: Extra query parameters.

    Returns:
        Awaitable resolving to an entity_class instance, or None on an empty body.

    Raises:
        InvalidArgumentError: Immediately, if an argument fails validation.
    """
    return _get(api, url, id_key(id), api.descriptor.entity_class, "", show_loading, options)


def get_by_key_impl(
    api: EntityContext,
    url: str,
    key_name: str,
    key_value: Any,
    show_loading: bool = False,
    options: Mapping[str, Any] | None = None,
) -> Awaitable[Any]:
    """Get an entity by a string business key; url holds a ``{key_name}`` token."""
    keys = string_key(key_name, key_value)
    return _get(api, url, keys, api.descriptor.entity_class, "", show_loading, options)


def get_by_parent_and_key_impl(
    api: EntityContext,
    url: str,
    parent_key_name: str,
    parent_key_value: Any,
    key_name: str,
    key_value: Any,
    show_loading: bool = False,
    options: Mapping[str, Any] | None = None,
) -> Awaitable[Any]:
    keys = parent_and_key(parent_key_name, parent_key_value, key_name, key_value)
    return _get(api, url, keys, api.descriptor.entity_class, "", show_loading, options)


def get_by_keys_impl(
    api: EntityContext,
    url: str,
    keys: Sequence[KeyPart],
    show_loading: bool = False,
    options: Mapping[str, Any] | None = None,
) -> Awaitable[Any]:
    """Get an entity addressed by an ordered list of ``(name, value, type)`` key parts."""
    return _get(api, url, keys, api.descriptor.entity_class, "", show_loading, options)


# =============================================================================
# Info
# =============================================================================


def get_info_impl(
    api: EntityContext,
    url: str,
    id: Any,
    show_loading: bool = False,
    options: Mapping[str, Any] | None = None,
) -> Awaitable[Any]:
    return _get(api, url, id_key(id), api.descriptor.info_class, "info of ", show_loading, options)


def get_info_by_key_impl(
    api: EntityContext,
    url: str,
    key_name: str,
    key_value: Any,
    show_loading: bool = False,
    options: Mapping[str, Any] | None = None,
) -> Awaitable[Any]:
    keys = string_key(key_name, key_value)
    return _get(api, url, keys, api.descriptor.info_class, "info of ", show_loading, options)


def get_info_by_parent_and_key_impl(
    api: EntityContext,
    url: str,
    parent_key_name: str,
    parent_key_value: Any,
    key_name: str,
    key_value: Any,
    show_loading: bool = False,
    options: Mapping[str, Any] | None = None,
) -> Awaitable[Any]:
    keys = parent_and_key(parent_key_name, parent_key_value, key_name, key_value)
    return _get(api, url, keys, api.descriptor.info_class, "info of ", show_loading, options)


def get_info_by_keys_impl(
    api: EntityContext,
    url: str,
    keys: Sequence[KeyPart],
    show_loading: bool = False,
    options: Mapping[str, Any] | None = None,
) -> Awaitable[Any]:
    return _get(api, url, keys, api.descriptor.info_class, "info of ", show_loading, options)


# =============================================================================
# Property
# =============================================================================


def get_property_impl(
    api: EntityContext,
    url: str,
    property_name: str,
    property_class: Any,
    id: Any,
    show_loading: bool = False,
    options: Mapping[str, Any] | None = None,
) -> Awaitable[Any]:
    """Get a single property of an entity.

    The url template may reference ``{property_name}`` besides ``{id}``.
    property_class is a pydantic model or any type pydantic can validate
    (``str``, ``int``, ``list[str]``, ...).

    Returns:
        Awaitable resolving to the decoded property, or None on an empty body.
    """
    return _get_property(api, url, property_name, property_class, id_key(id), show_loading, options)


def get_property_by_key_impl(
    api: EntityContext,
    url: str,
    property_name: str,
    property_class: Any,
    key_name: str,
    key_value: Any,
    show_loading: bool = False,
    options: Mapping[str, Any] | None = None,
) -> Awaitable[Any]:
    keys = string_key(key_name, key_value)
    return _get_property(api, url, property_name, property_class, keys, show_loading, options)


def get_property_by_parent_and_key_impl(
    api: EntityContext,
    url: str,
    property_name: str,
    property_class: Any,
    parent_key_name: str,
    parent_key_value: Any,
    key_name: str,
    key_value: Any,
    show_loading: bool = False,
    options: Mapping[str, Any] | None = None,
) -> Awaitable[Any]:
    keys = parent_and_key(parent_key_name, parent_key_value, key_name, key_value)
    return _get_property(api, url, property_name, property_class, keys, show_loading, options)


__all__ = [
    "decode_property",
    "get_by_key_impl",
    "get_by_keys_impl",
    "get_by_parent_and_key_impl",
    "get_impl",
    "get_info_by_key_impl",
    "get_info_by_keys_impl",
    "get_info_by_parent_and_key_impl",
    "get_info_impl",
    "get_property_by_key_impl",
    "get_property_by_parent_and_key_impl",
    "get_property_impl",
]
