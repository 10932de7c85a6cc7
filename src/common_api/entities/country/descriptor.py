# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Country endpoint descriptor."""

from __future__ import annotations

from ...interface.descriptor import AUDIT_CRITERIA, EntityDescriptor, FieldSpec, TypeTag
from .model import Country, CountryInfo

DESCRIPTOR = EntityDescriptor(
    entity_class=Country,
    entity_info_class=CountryInfo,
    base_url="/country",
    key_name="code",
    criteria_definitions=(
        FieldSpec("name", TypeTag.STRING),
        FieldSpec("phone_area", TypeTag.STRING),
        FieldSpec("postalcode", TypeTag.STRING),
        FieldSpec("level", TypeTag.INTEGER),
        FieldSpec("predefined", TypeTag.BOOLEAN),
        *AUDIT_CRITERIA,
    ),
)

__all__ = ["DESCRIPTOR"]
