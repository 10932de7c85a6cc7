# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Social network account endpoint descriptor.

Besides its ID, an account is addressed by the triple (social network,
app ID, open ID).
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
from .model import SocialNetwork, SocialNetworkAccount

DESCRIPTOR = EntityDescriptor(
    entity_class=SocialNetworkAccount,
    base_url="/social-network-account",
    composite_url="/social-network-account/open-id/{social_network}/{app_id}/{open_id}",
    composite_keys=(
        KeySpec("social_network"),
        KeySpec("app_id"),
        KeySpec("open_id"),
    ),
    criteria_definitions=(
        FieldSpec("user_id", ID_TYPES),
        FieldSpec("username", TypeTag.STRING),
        FieldSpec("social_network", TypeTag.ENUM, enum=SocialNetwork),
        FieldSpec("app_id", TypeTag.STRING),
        *AUDIT_CRITERIA,
    ),
)

__all__ = ["DESCRIPTOR"]
