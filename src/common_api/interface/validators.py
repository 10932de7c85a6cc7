# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Synchronous argument validators used by every operation template.

All validators raise InvalidArgumentError (a TypeError) with a message
naming the offending parameter, and never perform I/O. They run before the
URL is resolved and before any request is built.

Components:
    matches_type: Check one value against one TypeTag.
    validate_value: Check a value against tags or a class.
    validate_id / validate_id_array: Identifier checks.
    validate_boolean / validate_string / validate_integer: Scalar checks.
    validate_keys: Check a sequence of (name, value, type) key parts.
    validate_criteria: Check a criteria mapping against its FieldSpecs.
    validate_sort_request / validate_page_request: Query object shape checks.
"""

from __future__ import annotations

import datetime as dt
from collections.abc import Mapping, Sequence
from enum import Enum
from typing import Any

from pydantic import BaseModel

from ..errors import InvalidArgumentError
from ..models import PageRequest, SortOrder, SortRequest
from .descriptor import ID_TYPES, FieldSpec, TypeSpec, TypeTag, as_tags

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

_TAG_LABELS = {
    TypeTag.STRING: "a string",
    TypeTag.INTEGER: "a 64-bit integer",
    TypeTag.BIG_INTEGER: "an integer",
    TypeTag.NUMBER: "a number",
    TypeTag.BOOLEAN: "a boolean",
    TypeTag.DATE: "a date",
    TypeTag.DATETIME: "a datetime",
    TypeTag.ENUM: "an enumerator",
}


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def matches_type(tag: TypeTag, value: Any, enum: type[Enum] | None = None) -> bool:
    """Return True if value is an accepted representation of tag."""
    if tag is TypeTag.STRING:
        return isinstance(value, str)
    if tag is TypeTag.INTEGER:
        return _is_int(value) and INT64_MIN <= value <= INT64_MAX
    if tag is TypeTag.BIG_INTEGER:
        return _is_int(value)
    if tag is TypeTag.NUMBER:
        return _is_int(value) or isinstance(value, float)
    if tag is TypeTag.BOOLEAN:
        return isinstance(value, bool)
    if tag is TypeTag.DATE:
        return isinstance(value, dt.date) and not isinstance(value, dt.datetime)
    if tag is TypeTag.DATETIME:
        return isinstance(value, dt.datetime)
    if tag is TypeTag.ENUM:
        if enum is None:
            return isinstance(value, Enum)
        if isinstance(value, enum):
            return True
        return any(value == member.value or value == member.name for member in enum)
    raise AssertionError(f"Unhandled type tag: {tag!r}")


def _describe(tags: tuple[TypeTag, ...]) -> str:
    labels = [_TAG_LABELS[tag] for tag in tags]
    if len(labels) == 1:
        return labels[0]
    return ", ".join(labels[:-1]) + " or " + labels[-1]


def _check_name(name: Any) -> None:
    if not isinstance(name, str):
        raise InvalidArgumentError("name", "The name must be a string.")


def validate_value(
    name: str,
    value: Any,
    type_spec: TypeSpec | type,
    enum: type[Enum] | None = None,
    nullable: bool = False,
) -> None:
    """Validate value against one tag, a tuple of tags, or a class.

    A pydantic model class also accepts a plain mapping, since the payload
    is serialized to JSON either way.
    """
    if value is None:
        if nullable:
            return
        raise InvalidArgumentError(name, f"The value of the argument '{name}' cannot be None.")
    if isinstance(type_spec, type) and not issubclass(type_spec, TypeTag):
        if isinstance(value, type_spec):
            return
        if issubclass(type_spec, BaseModel) and isinstance(value, Mapping):
            return
        raise InvalidArgumentError(
            name,
            f"The value of the argument '{name}' must be of type {type_spec.__name__}, "
            f"got {type(value).__name__}.",
        )
    tags = as_tags(type_spec)
    if any(matches_type(tag, value, enum) for tag in tags):
        return
    raise InvalidArgumentError(
        name,
        f"The value of the argument '{name}' must be {_describe(tags)}, got {type(value).__name__}.",
    )


def validate_id(value: Any, name: str = "id") -> None:
    """Validate a primary key: a string or an integer of any size, never None."""
    _check_name(name)
    validate_value(name, value, ID_TYPES)


def validate_id_array(values: Any, name: str = "ids", allow_empty: bool = True) -> None:
    """Validate a list of identifiers, reporting the index of a bad element."""
    _check_name(name)
    if not isinstance(values, (list, tuple)):
        raise InvalidArgumentError(
            name, f"The value of the argument '{name}' must be a list of IDs, got {type(values).__name__}."
        )
    if not values and not allow_empty:
        raise InvalidArgumentError(name, f"The value of the argument '{name}' cannot be empty.")
    for index, value in enumerate(values):
        validate_id(value, f"{name}[{index}]")


def validate_boolean(name: str, value: Any, nullable: bool = False) -> None:
    validate_value(name, value, TypeTag.BOOLEAN, nullable=nullable)


def validate_string(name: str, value: Any, nullable: bool = False) -> None:
    validate_value(name, value, TypeTag.STRING, nullable=nullable)


def validate_integer(name: str, value: Any, nullable: bool = False) -> None:
    validate_value(name, value, TypeTag.BIG_INTEGER, nullable=nullable)


def validate_keys(keys: Sequence[tuple[str, Any, TypeSpec]]) -> None:
    """Validate compound key parts given as (name, value, type) tuples."""
    if not keys:
        raise InvalidArgumentError("keys", "At least one key part is required.")
    for key_name, key_value, key_type in keys:
        _check_name(key_name)
        validate_value(key_name, key_value, key_type)


def validate_criteria(
    criteria: Any,
    field_specs: Sequence[FieldSpec] = (),
    name: str = "criteria",
) -> None:
    """Validate a criteria mapping against the declared fields.

    None is a valid criteria (no filter). Fields set to None are ignored.
    When no field is declared, keys are not checked.
    """
    if criteria is None:
        return
    if isinstance(criteria, BaseModel):
        criteria = criteria.model_dump(exclude_none=True)
    if not isinstance(criteria, Mapping):
        raise InvalidArgumentError(
            name, f"The value of the argument '{name}' must be a mapping, got {type(criteria).__name__}."
        )
    if not criteria or not field_specs:
        return
    specs = {spec.name: spec for spec in field_specs}
    for key, value in criteria.items():
        if value is None:
            continue
        spec = specs.get(key)
        if spec is None:
            raise InvalidArgumentError(f"{name}.{key}", f'Unsupported field: "{name}.{key}"')
        validate_value(f"{name}.{key}", value, spec.type, enum=spec.enum)


def _as_mapping(name: str, value: Any, model: type[BaseModel]) -> Mapping[str, Any]:
    if isinstance(value, model):
        return value.model_dump()
    if isinstance(value, Mapping):
        return value
    raise InvalidArgumentError(
        name,
        f"The value of the argument '{name}' must be a {model.__name__} or a mapping, "
        f"got {type(value).__name__}.",
    )


def validate_page_request(page_request: Any) -> None:
    """Validate the shape of a page request. Bounds are left to the server."""
    if page_request is None:
        return
    page = _as_mapping("page_request", page_request, PageRequest)
    validate_value("page_request.page_index", page.get("page_index"), TypeTag.BIG_INTEGER, nullable=True)
    validate_value("page_request.page_size", page.get("page_size"), TypeTag.BIG_INTEGER, nullable=True)


def validate_sort_request(sort_request: Any, entity_class: type[BaseModel] | None = None) -> None:
    """Validate a sort request; sort_field must be a field of entity_class."""
    if sort_request is None:
        return
    sort = _as_mapping("sort_request", sort_request, SortRequest)
    sort_field = sort.get("sort_field")
    sort_order = sort.get("sort_order")
    validate_string("sort_request.sort_field", sort_field, nullable=True)
    if sort_order is not None and not isinstance(sort_order, SortOrder):
        if not isinstance(sort_order, str) or sort_order.upper() not in SortOrder.__members__:
            raise InvalidArgumentError(
                "sort_request.sort_order",
                f"The value of the argument 'sort_request.sort_order' must be ASC or DESC, got {sort_order!r}.",
            )
    if entity_class is not None and sort_field and sort_field not in entity_class.model_fields:
        raise InvalidArgumentError(
            "sort_request.sort_field",
            f"The sort field '{sort_field}' is not a field of the class {entity_class.__name__}.",
        )


__all__ = [
    "INT64_MAX",
    "INT64_MIN",
    "matches_type",
    "validate_boolean",
    "validate_criteria",
    "validate_id",
    "validate_id_array",
    "validate_integer",
    "validate_keys",
    "validate_page_request",
    "validate_sort_request",
    "validate_string",
    "validate_value",
]
