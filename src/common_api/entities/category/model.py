# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Category models."""

from __future__ import annotations

from ...models import AuditedEntity, StatefulInfo


class Category(AuditedEntity):
    """A category of some entity type; codes are unique per entity type."""

    code: str | None = None
    name: str | None = None
    entity: str | None = None
    parent_id: int | str | None = None
    description: str | None = None
    icon: str | None = None
    url: str | None = None
    state: str | None = None
    predefined: bool = False


CategoryInfo = StatefulInfo

__all__ = ["Category", "CategoryInfo"]
