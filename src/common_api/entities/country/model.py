# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Country models."""

from __future__ import annotations

from pydantic import BaseModel

from ...models import AuditedEntity


class Country(AuditedEntity):
    """A country, addressable by ID or by its unique code."""

    code: str | None = None
    name: str | None = None
    phone_area: str | None = None
    postalcode: str | None = None
    level: int | None = None
    icon: str | None = None
    url: str | None = None
    description: str | None = None
    predefined: bool = False


class CountryInfo(BaseModel):
    id: int | str | None = None
    code: str | None = None
    name: str | None = None


__all__ = ["Country", "CountryInfo"]
