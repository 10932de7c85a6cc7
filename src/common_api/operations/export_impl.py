# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Export template: download entities matching criteria as a file."""

from __future__ import annotations

from collections.abc import Awaitable, Mapping
from pathlib import Path
from typing import Any

from ..interface.url_template import resolve_url
from ..interface.validators import validate_boolean, validate_criteria, validate_sort_request
from ..models import ExportedFile, MimeType, SortRequest
from ..progress import Activity
from .base import EntityContext, build_params, check_show_loading, send
from .import_impl import check_format


def export_impl(
    api: EntityContext,
    url: str,
    format: MimeType | str,
    criteria: Mapping[str, Any] | None = None,
    sort_request: SortRequest | Mapping[str, Any] | None = None,
    auto_download: bool = False,
    show_loading: bool = False,
    download_dir: str | Path | None = None,
) -> Awaitable[ExportedFile | None]:
    """Export the entities matching criteria.

    The request carries an ``Accept`` header with the format MIME type. The
    file name comes from the ``Content-Disposition`` response header and
    falls back to ``<entity>.<extension>``.

    Args:
        format: One of XML, JSON, CSV, EXCEL.
        auto_download: Save the file into download_dir (default: the
            context's download directory) and resolve to None.

    Returns:
        Awaitable resolving to the ExportedFile, or None when auto_download is set.
    """
    mime_type = check_format(format)
    descriptor = api.descriptor
    validate_criteria(criteria, descriptor.criteria_definitions)
    validate_sort_request(sort_request, descriptor.entity_class)
    validate_boolean("auto_download", auto_download)
    check_show_loading(show_loading)
    path = resolve_url(url, {"format": mime_type.name.lower()})
    params = build_params(criteria, sort_request)
    default_filename = f"{descriptor.name.lower()}.{mime_type.extension}"

    async def run() -> ExportedFile | None:
        exported = await send(
            api, Activity.EXPORTING, show_loading, "download", path,
            params=params, mime_type=mime_type.value, default_filename=default_filename,
        )
        api.logger.info(
            "Successfully export the %ss as %s (%d bytes)", descriptor.name, mime_type.name, exported.size
        )
        if not auto_download:
            return exported
        target = exported.save(download_dir or api.download_dir)
        exported.release()
        api.logger.info("Saved the exported %ss to %s", descriptor.name, target)
        return None

    return run()


__all__ = ["export_impl"]
