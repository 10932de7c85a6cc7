# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Entity descriptors: the configuration that parameterizes the generic engine.

One EntityDescriptor exists per entity type. It names the pydantic model
classes used to decode responses, the criteria schema accepted by list and
export requests, and the base URL from which the bound façade derives the
conventional endpoint paths.

Components:
    TypeTag: Closed set of value kinds accepted by criteria and keys.
    FieldSpec: One declared criteria field.
    KeySpec: One part of a compound key.
    EntityDescriptor: Immutable per-entity configuration.

Example:
    ::

        DESCRIPTOR = EntityDescriptor(
            entity_class=Country,
            entity_info_class=StatefulInfo,
            base_url="/country",
            key_name="code",
            criteria_definitions=(
                FieldSpec("name", TypeTag.STRING),
                FieldSpec("deleted", TypeTag.BOOLEAN),
            ),
        )
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Union

from pydantic import BaseModel


class TypeTag(str, Enum):
    """Kinds of values accepted by criteria fields, keys and properties."""

    STRING = "string"
    INTEGER = "integer"
    BIG_INTEGER = "big_integer"
    NUMBER = "number"
    BOOLEAN = "boolean"
    DATE = "date"
    DATETIME = "datetime"
    ENUM = "enum"


TypeSpec = Union[TypeTag, tuple[TypeTag, ...]]

# Representations accepted for a primary key or a parent key.
ID_TYPES: tuple[TypeTag, ...] = (TypeTag.STRING, TypeTag.INTEGER, TypeTag.BIG_INTEGER)


def as_tags(type_spec: TypeSpec) -> tuple[TypeTag, ...]:
    """Normalize a single tag or a tuple of tags to a tuple."""
    if isinstance(type_spec, TypeTag):
        return (type_spec,)
    return tuple(type_spec)


@dataclass(frozen=True)
class FieldSpec:
    """A criteria field and its accepted representation(s).

    Attributes:
        name: Field name, as sent in the query string.
        type: One tag or a tuple of tags.
        enum: Enum class for TypeTag.ENUM fields.
    """

    name: str
    type: TypeSpec
    enum: type[Enum] | None = None

    @property
    def tags(self) -> tuple[TypeTag, ...]:
        return as_tags(self.type)


@dataclass(frozen=True)
class KeySpec:
    """One named part of a compound key (e.g. a parent ID followed by a code)."""

    name: str
    type: TypeSpec = TypeTag.STRING


_TIME = (TypeTag.DATETIME, TypeTag.STRING)

# Lifecycle criteria understood by every collection endpoint.
AUDIT_CRITERIA: tuple[FieldSpec, ...] = (
    FieldSpec("deleted", TypeTag.BOOLEAN),
    FieldSpec("create_time_start", _TIME),
    FieldSpec("create_time_end", _TIME),
    FieldSpec("modify_time_start", _TIME),
    FieldSpec("modify_time_end", _TIME),
    FieldSpec("delete_time_start", _TIME),
    FieldSpec("delete_time_end", _TIME),
)


@dataclass(frozen=True)
class EntityDescriptor:
    """Per-entity configuration for the generic operation templates.

    Attributes:
        entity_class: Pydantic model decoding a full entity.
        base_url: Collection URL (e.g. "/country").
        entity_info_class: Pydantic model decoding the info projection.
        criteria_definitions: Criteria fields accepted by list/export.
        key_name: Secondary unique key addressable as <base>/<key>/{<key>}.
        composite_url: URL template of the compound-key resource.
        composite_keys: Ordered key parts resolved into composite_url.
    """

    entity_class: type[BaseModel]
    base_url: str
    entity_info_class: type[BaseModel] | None = None
    criteria_definitions: tuple[FieldSpec, ...] = ()
    key_name: str | None = None
    composite_url: str | None = None
    composite_keys: tuple[KeySpec, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if not self.base_url.startswith("/"):
            raise ValueError(f"base_url must start with '/': {self.base_url!r}")
        if bool(self.composite_url) != bool(self.composite_keys):
            raise ValueError("composite_url and composite_keys must be declared together")

    @property
    def name(self) -> str:
        """Entity type name used in log messages."""
        return self.entity_class.__name__

    @property
    def info_class(self) -> type[BaseModel]:
        """Info projection model, falling back to the entity model."""
        return self.entity_info_class or self.entity_class

    def field_names(self) -> set[str]:
        """Field names exposed by the entity model."""
        return set(self.entity_class.model_fields)


__all__ = [
    "AUDIT_CRITERIA",
    "EntityDescriptor",
    "FieldSpec",
    "ID_TYPES",
    "KeySpec",
    "TypeSpec",
    "TypeTag",
    "as_tags",
]
