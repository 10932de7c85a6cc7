# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Shared plumbing for the operation templates.

Every template follows the same shape: validate arguments and resolve the
URL synchronously, then return a coroutine that performs one HTTP request
through ``api.http``, decodes the body, logs and returns. The helpers here
cover the request/decode/serialize steps so each template only states its
own contract.
"""

from __future__ import annotations

import datetime as dt
import logging
from collections.abc import Mapping, Sequence
from enum import Enum
from pathlib import Path
from typing import Any, Protocol

from pydantic import BaseModel, TypeAdapter, ValidationError

from ..errors import DecodeError
from ..http import HttpClient
from ..interface.descriptor import ID_TYPES, EntityDescriptor, TypeSpec, TypeTag
from ..interface.validators import validate_boolean, validate_keys, validate_string, validate_value
from ..models import ErrorInfo, Page
from ..progress import Activity, ProgressIndicator, showing

KeyPart = tuple[str, Any, TypeSpec]

_timestamp_adapter = TypeAdapter(dt.datetime)
_count_adapter = TypeAdapter(int)


class EntityContext(Protocol):
    """What an operation template needs from the façade invoking it."""

    descriptor: EntityDescriptor
    http: HttpClient
    logger: logging.Logger
    progress: ProgressIndicator
    download_dir: str | Path


# =============================================================================
# Serialization
# =============================================================================


def to_json(value: Any) -> Any:
    """Convert a value to its JSON form, dropping None fields of mappings and models."""
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", exclude_none=True)
    if isinstance(value, Mapping):
        return {key: to_json(item) for key, item in value.items() if item is not None}
    if isinstance(value, (list, tuple)):
        return [to_json(item) for item in value]
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (dt.date, dt.datetime)):
        return value.isoformat()
    return value


def build_params(*sources: Mapping[str, Any] | BaseModel | None) -> dict[str, Any]:
    """Shallow-merge query parameter sources; later sources win, None values are dropped."""
    params: dict[str, Any] = {}
    for source in sources:
        if source is None:
            continue
        if isinstance(source, BaseModel):
            source = source.model_dump(exclude_none=True)
        for key, value in source.items():
            if value is None:
                params.pop(key, None)
                continue
            params[key] = to_json(value)
    return params


# =============================================================================
# Request and decode
# =============================================================================


async def send(
    api: EntityContext,
    activity: Activity,
    show_loading: bool,
    method: str,
    path: str,
    **kwargs: Any,
) -> Any:
    """Issue one request through api.http with the progress indicator shown."""
    with showing(api.progress, activity, show_loading):
        return await getattr(api.http, method)(path, **kwargs)


def decode_error(path: str, target: str, error: ValidationError) -> DecodeError:
    info = ErrorInfo(type="DECODE_ERROR", code=target, message=str(error))
    return DecodeError("DECODE", path, info)


def decode_entity(factory: type[BaseModel], obj: Any, path: str) -> Any:
    """Decode a single object with factory; a None body stays None."""
    if obj is None:
        return None
    try:
        return factory.model_validate(obj)
    except ValidationError as e:
        raise decode_error(path, factory.__name__, e) from e


def decode_page(factory: type[BaseModel], obj: Any, path: str) -> Page[Any]:
    """Decode a paginated collection of factory instances; a missing body is a DecodeError."""
    page_class = Page[factory]  # type: ignore[valid-type]
    try:
        return page_class.model_validate(obj)
    except ValidationError as e:
        raise decode_error(path, page_class.__name__, e) from e


def decode_timestamp(obj: Any, path: str) -> dt.datetime | None:
    if obj is None or obj == "":
        return None
    try:
        return _timestamp_adapter.validate_python(obj)
    except ValidationError as e:
        raise decode_error(path, "datetime", e) from e


def decode_count(obj: Any, path: str) -> int:
    if obj is None:
        return 0
    try:
        return _count_adapter.validate_python(obj)
    except ValidationError as e:
        raise decode_error(path, "int", e) from e


# =============================================================================
# Key handling
# =============================================================================


def check_show_loading(show_loading: Any) -> None:
    validate_boolean("show_loading", show_loading)


def id_key(id: Any, name: str = "id") -> list[KeyPart]:
    return [(name, id, ID_TYPES)]


def string_key(key_name: Any, key_value: Any) -> list[KeyPart]:
    validate_string("key_name", key_name)
    return [(key_name, key_value, TypeTag.STRING)]


def parent_and_key(
    parent_key_name: Any,
    parent_key_value: Any,
    key_name: Any,
    key_value: Any,
) -> list[KeyPart]:
    validate_string("parent_key_name", parent_key_name)
    validate_string("key_name", key_name)
    return [
        (parent_key_name, parent_key_value, ID_TYPES),
        (key_name, key_value, TypeTag.STRING),
    ]


def check_keys(keys: Sequence[KeyPart]) -> dict[str, Any]:
    """Validate key parts and return the token mapping for the URL resolver."""
    validate_keys(keys)
    return {name: value for name, value, _ in keys}


def describe_keys(keys: Sequence[KeyPart]) -> str:
    """Human-readable key description for log messages."""
    if len(keys) == 1:
        name, value, _ = keys[0]
        label = "ID" if name == "id" else name
        return f'its {label} "{value}"'
    *parents, (name, value, _) = keys
    parent_text = " and ".join(f'parent {p_name} "{p_value}"' for p_name, p_value, _ in parents)
    return f'{parent_text} and its {name} "{value}"'


def log_success(logger: logging.Logger, verb: str, subject: str, keys: Sequence[KeyPart]) -> None:
    """Log the success of a single-entity operation addressed by keys."""
    if len(keys) == 1 and keys[0][0] == "id":
        logger.info(f'Successfully {verb} the %s by its ID "%s"', subject, keys[0][1])
    else:
        logger.info(f"Successfully {verb} the %s by %s", subject, describe_keys(keys))


def entity_value(entity: Any, field: str) -> Any:
    """Read a field from an entity given as a model or a mapping."""
    if isinstance(entity, Mapping):
        return entity.get(field)
    return getattr(entity, field, None)


def check_entity(api: EntityContext, entity: Any) -> None:
    validate_value("entity", entity, api.descriptor.entity_class)


__all__ = [
    "EntityContext",
    "KeyPart",
    "build_params",
    "check_entity",
    "check_keys",
    "check_show_loading",
    "decode_count",
    "decode_error",
    "decode_entity",
    "decode_page",
    "decode_timestamp",
    "describe_keys",
    "entity_value",
    "id_key",
    "log_success",
    "parent_and_key",
    "send",
    "string_key",
    "to_json",
]
