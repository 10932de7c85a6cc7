# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Category endpoint descriptor."""

from __future__ import annotations

from ...interface.descriptor import AUDIT_CRITERIA, ID_TYPES, EntityDescriptor, FieldSpec, TypeTag
from .model import Category, CategoryInfo

DESCRIPTOR = EntityDescriptor(
    entity_class=Category,
    entity_info_class=CategoryInfo,
    base_url="/category",
    key_name="code",
    criteria_definitions=(
        FieldSpec("code", TypeTag.STRING),
        FieldSpec("name", TypeTag.STRING),
        FieldSpec("entity", TypeTag.STRING),
        FieldSpec("parent_id", ID_TYPES),
        FieldSpec("state", TypeTag.STRING),
        FieldSpec("predefined", TypeTag.BOOLEAN),
        *AUDIT_CRITERIA,
    ),
)

__all__ = ["DESCRIPTOR"]
