# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Wire models shared by every entity.

Components:
    SortOrder: Ascending/descending sort direction.
    PageRequest: Pagination parameters of a list request.
    SortRequest: Sort field and direction of a list or export request.
    Page: Paginated collection returned by list endpoints.
    ErrorInfo: Structured error payload returned by the server.
    MimeType: Export/import formats and their MIME types.
    ExportedFile: Downloaded export payload.
    AuditedEntity: Base model carrying the lifecycle timestamps.
    StatefulInfo: Common shape of the "info" projection of an entity.
"""

from __future__ import annotations

import datetime as dt
from enum import Enum
from pathlib import Path
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class SortOrder(str, Enum):
    """Sort direction."""

    ASC = "ASC"
    DESC = "DESC"


class PageRequest(BaseModel):
    """Pagination parameters. Bounds are enforced by the server."""

    page_index: int | None = None
    page_size: int | None = None


class SortRequest(BaseModel):
    """Sort parameters.

    Attributes:
        sort_field: Name of a field of the listed entity model.
        sort_order: Sort direction.
    """

    sort_field: str | None = None
    sort_order: SortOrder | None = None


class Page(BaseModel, Generic[T]):
    """One page of a paginated collection."""

    page_index: int = 0
    page_size: int = 0
    total_count: int = 0
    total_pages: int = 0
    content: list[T] = Field(default_factory=list)

    def __len__(self) -> int:
        return len(self.content)


class ErrorInfo(BaseModel):
    """Error payload reported by the server (or built locally for transport failures)."""

    model_config = ConfigDict(extra="allow")

    type: str = "SERVER_ERROR"
    code: str | None = None
    message: str = ""
    params: list[Any] = Field(default_factory=list)


class MimeType(str, Enum):
    """Formats supported by import/export endpoints."""

    XML = "application/xml"
    JSON = "application/json"
    CSV = "text/csv"
    EXCEL = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

    @classmethod
    def of(cls, format: str) -> MimeType:
        """Look up a format by name ("xml", "Excel", ...)."""
        try:
            return cls[format.upper()]
        except KeyError:
            raise ValueError(f"Unsupported format '{format}'") from None

    @property
    def extension(self) -> str:
        return {"EXCEL": "xlsx"}.get(self.name, self.name.lower())


class ExportedFile(BaseModel):
    """Binary payload of an export request.

    The caller owns the buffer: call save() to write it somewhere and
    release() to drop the bytes once they are no longer needed.
    """

    filename: str
    mime_type: str
    content: bytes = b""

    @property
    def size(self) -> int:
        return len(self.content)

    def save(self, directory: str | Path) -> Path:
        """Write the payload into directory and return the file path."""
        target_dir = Path(directory)
        target_dir.mkdir(parents=True, exist_ok=True)
        target = target_dir / Path(self.filename).name
        target.write_bytes(self.content)
        return target

    def release(self) -> None:
        self.content = b""


class AuditedEntity(BaseModel):
    """Base of entities carrying the server-managed lifecycle timestamps."""

    id: int | str | None = None
    create_time: dt.datetime | None = None
    modify_time: dt.datetime | None = None
    delete_time: dt.datetime | None = None

    @property
    def deleted(self) -> bool:
        return self.delete_time is not None


class StatefulInfo(BaseModel):
    """Basic projection (id, code, name, state) returned by */info endpoints."""

    id: int | str | None = None
    code: str | None = None
    name: str | None = None
    state: str | None = None
    delete_time: dt.datetime | None = None


__all__ = [
    "AuditedEntity",
    "ErrorInfo",
    "ExportedFile",
    "MimeType",
    "Page",
    "PageRequest",
    "SortOrder",
    "SortRequest",
    "StatefulInfo",
]
