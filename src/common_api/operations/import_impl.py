# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Import template: upload a file of entities as multipart form data."""

from __future__ import annotations

import io
from collections.abc import Awaitable
from pathlib import Path
from typing import Any

from ..errors import InvalidArgumentError
from ..interface.url_template import resolve_url
from ..interface.validators import validate_boolean, validate_integer
from ..models import MimeType
from ..progress import Activity
from .base import EntityContext, build_params, check_show_loading, decode_count, send


def check_format(format: Any) -> MimeType:
    """Resolve format (a MimeType or its name) or raise InvalidArgumentError."""
    if isinstance(format, MimeType):
        return format
    if isinstance(format, str):
        try:
            return MimeType.of(format)
        except ValueError:
            pass
    supported = ", ".join(member.name for member in MimeType)
    raise InvalidArgumentError(
        "format", f"The value of the argument 'format' must be one of {supported}, got {format!r}."
    )


def _check_file(file: Any) -> None:
    if isinstance(file, Path):
        if not file.is_file():
            raise InvalidArgumentError("file", f"The file '{file}' does not exist or is not a regular file.")
        return
    if isinstance(file, io.TextIOBase) or not callable(getattr(file, "read", None)):
        raise InvalidArgumentError(
            "file", f"The value of the argument 'file' must be a Path or a binary file, got {type(file).__name__}."
        )


def import_impl(
    api: EntityContext,
    url: str,
    format: MimeType | str,
    file: Path | Any,
    parallel: bool | None = None,
    threads: int | None = None,
    show_loading: bool = False,
) -> Awaitable[int]:
    """Import entities from a file.

    Args:
        url: URL template, may contain a ``{format}`` token (lowercase name).
        format: One of XML, JSON, CSV, EXCEL.
        file: Path of an existing file, or a readable binary file object.
        parallel: Ask the server to import rows in parallel.
        threads: Worker hint, only transmitted when parallel is true.

    Returns:
        Awaitable resolving to the number of imported entities.
    """
    mime_type = check_format(format)
    _check_file(file)
    validate_boolean("parallel", parallel, nullable=True)
    validate_integer("threads", threads, nullable=True)
    if threads is not None and threads <= 0:
        raise InvalidArgumentError("threads", "The value of the argument 'threads' must be positive.")
    check_show_loading(show_loading)
    path = resolve_url(url, {"format": mime_type.name.lower()})
    params = build_params({"parallel": parallel, "threads": threads if parallel else None})
    name = api.descriptor.name

    async def upload(stream: Any, filename: str) -> Any:
        files = {"file": (filename, stream, mime_type.value)}
        return await send(api, Activity.IMPORTING, show_loading, "post", path, params=params, files=files)

    async def run() -> int:
        if isinstance(file, Path):
            with file.open("rb") as stream:
                obj = await upload(stream, file.name)
        else:
            raw_name = getattr(file, "name", None)
            if isinstance(raw_name, str) and raw_name:
                filename = Path(raw_name).name
            else:
                filename = f"{name.lower()}.{mime_type.extension}"
            obj = await upload(file, filename)
        count = decode_count(obj, path)
        api.logger.info("Successfully import %d %s(s) from %s", count, name, mime_type.name)
        return count

    return run()


__all__ = ["check_format", "import_impl"]
