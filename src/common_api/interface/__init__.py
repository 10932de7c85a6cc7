# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Interface layer of the entity REST client.

This package provides the pieces that bind the generic operation templates
to concrete entities and expose them:

- descriptor: EntityDescriptor and the criteria/key schema types
- validators: synchronous argument validators
- url_template: URL template resolution
- entity_api: EntityApi façade and EntityRegistry discovery
- cli_base: Click CLI command generation

Example:
    ::

        from common_api.interface import EntityApi, EntityDescriptor

        DESCRIPTOR = EntityDescriptor(entity_class=Country, base_url="/country", key_name="code")
        countries = EntityApi(DESCRIPTOR, http)
        country = await countries.get_by_key("FR")
"""

from .descriptor import AUDIT_CRITERIA, ID_TYPES, EntityDescriptor, FieldSpec, KeySpec, TypeTag
from .url_template import resolve_url, stringify_id
from .validators import (
    validate_criteria,
    validate_id,
    validate_id_array,
    validate_page_request,
    validate_sort_request,
)
from .entity_api import EntityApi, EntityRegistry, discover_descriptors
from .cli_base import CliManager, console, register_entity

__all__ = [
    # Descriptors
    "AUDIT_CRITERIA",
    "EntityDescriptor",
    "FieldSpec",
    "ID_TYPES",
    "KeySpec",
    "TypeTag",
    # URL and validation
    "resolve_url",
    "stringify_id",
    "validate_criteria",
    "validate_id",
    "validate_id_array",
    "validate_page_request",
    "validate_sort_request",
    # Entities
    "EntityApi",
    "EntityRegistry",
    "discover_descriptors",
    # CLI
    "CliManager",
    "console",
    "register_entity",
]
