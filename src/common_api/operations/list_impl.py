# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""List templates: paginated, filtered and sorted GET of a collection."""

from __future__ import annotations

from collections.abc import Awaitable, Mapping
from typing import Any

from pydantic import BaseModel

from ..interface.validators import validate_criteria, validate_page_request, validate_sort_request
from ..models import Page, PageRequest, SortRequest
from ..progress import Activity
from .base import EntityContext, build_params, check_show_loading, decode_page, send


def _list(
    api: EntityContext,
    url: str,
    factory: type[BaseModel],
    label: str,
    page_request: PageRequest | Mapping[str, Any] | None,
    criteria: Mapping[str, Any] | None,
    sort_request: SortRequest | Mapping[str, Any] | None,
    show_loading: bool,
    options: Mapping[str, Any] | None,
) -> Awaitable[Page[Any]]:
    descriptor = api.descriptor
    validate_page_request(page_request)
    validate_criteria(criteria, descriptor.criteria_definitions)
    validate_sort_request(sort_request, descriptor.entity_class)
    check_show_loading(show_loading)
    params = build_params(page_request, criteria, sort_request, options)

    async def run() -> Page[Any]:
        obj = await send(api, Activity.GETTING, show_loading, "get", url, params=params)
        page = decode_page(factory, obj, url)
        api.logger.info("Successfully list %s%ss.", label, descriptor.name)
        api.logger.debug("The page of %s%ss is: %s", label, descriptor.name, page)
        return page

    return run()


def list_impl(
    api: EntityContext,
    url: str,
    page_request: PageRequest | Mapping[str, Any] | None = None,
    criteria: Mapping[str, Any] | None = None,
    sort_request: SortRequest | Mapping[str, Any] | None = None,
    show_loading: bool = False,
    options: Mapping[str, Any] | None = None,
) -> Awaitable[Page[Any]]:
    """List the entities matching criteria.

    The query string is the shallow merge of page_request, criteria,
    sort_request and options, in that order, with None values omitted.
    Criteria are AND-combined by the server.

    Returns:
        Awaitable resolving to a Page of entity_class instances.

    Raises:
        InvalidArgumentError: Immediately, if an argument fails validation.
    """
    return _list(
        api, url, api.descriptor.entity_class, "",
        page_request, criteria, sort_request, show_loading, options,
    )


def list_info_impl(
    api: EntityContext,
    url: str,
    page_request: PageRequest | Mapping[str, Any] | None = None,
    criteria: Mapping[str, Any] | None = None,
    sort_request: SortRequest | Mapping[str, Any] | None = None,
    show_loading: bool = False,
    options: Mapping[str, Any] | None = None,
) -> Awaitable[Page[Any]]:
    """Like list_impl, decoding each item with the entity info class."""
    return _list(
        api, url, api.descriptor.info_class, "infos of ",
        page_request, criteria, sort_request, show_loading, options,
    )


__all__ = ["list_impl", "list_info_impl"]
