# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Dictionary entry models."""

from __future__ import annotations

from pydantic import BaseModel

from ...models import AuditedEntity


class DictEntry(AuditedEntity):
    """An entry of a dictionary; its code is unique within the dictionary."""

    dict_id: int | str | None = None
    code: str | None = None
    name: str | None = None
    parent_id: int | str | None = None
    description: str | None = None


class DictEntryInfo(BaseModel):
    id: int | str | None = None
    dict_id: int | str | None = None
    code: str | None = None
    name: str | None = None


__all__ = ["DictEntry", "DictEntryInfo"]
