# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Dictionary entry endpoint descriptor.

Entries are addressed by ID under ``/dict/entry`` or by the compound key
(dictionary ID, entry code) under ``/dict/{dict_id}/entry/code/{code}``.
"""

from __future__ import annotations

from ...interface.descriptor import (
    AUDIT_CRITERIA,
    ID_TYPES,
    EntityDescriptor,
    FieldSpec,
    KeySpec,
    TypeTag,
)
from .model import DictEntry, DictEntryInfo

DESCRIPTOR = EntityDescriptor(
    entity_class=DictEntry,
    entity_info_class=DictEntryInfo,
    base_url="/dict/entry",
    composite_url="/dict/{dict_id}/entry/code/{code}",
    composite_keys=(KeySpec("dict_id", ID_TYPES), KeySpec("code", TypeTag.STRING)),
    criteria_definitions=(
        FieldSpec("name", TypeTag.STRING),
        FieldSpec("dict_id", ID_TYPES),
        FieldSpec("dict_code", TypeTag.STRING),
        FieldSpec("dict_name", TypeTag.STRING),
        FieldSpec("parent_id", ID_TYPES),
        FieldSpec("parent_code", TypeTag.STRING),
        FieldSpec("parent_name", TypeTag.STRING),
        *AUDIT_CRITERIA,
    ),
)

__all__ = ["DESCRIPTOR"]
