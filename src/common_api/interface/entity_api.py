# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Per-entity façade binding the operation templates to one descriptor.

This module wires the generic ``*_impl`` templates to the URL conventions
of a REST collection, so that callers only deal with IDs, keys and
entities.

Components:
    EntityApi: Bound operations for one EntityDescriptor.
    EntityRegistry: Discovery of descriptors from entity packages.

Example:
    ::

        api = EntityApi(COUNTRY, http)
        page = await api.list(page_request={"page_size": 20})
        country = await api.get_by_key("FR")
        await api.delete(country.id)

Note:
    URL conventions, relative to ``descriptor.base_url`` (here ``/e``)::

        GET    /e                  list            PATCH  /e/{id}        restore
        GET    /e/info             list_info       PATCH  /e/batch       batch_restore
        GET    /e/{id}             get             PATCH  /e/restore     restore_all
        GET    /e/{id}/info        get_info        DELETE /e/{id}/purge  purge
        GET    /e/{id}/<prop>      get_property    DELETE /e/purge       purge_all
        HEAD   /e/{id}             exists          DELETE /e/batch/purge batch_purge
        POST   /e                  add             DELETE /e/{id}/erase  erase
        PUT    /e/{id}             update          DELETE /e/erase       erase_all
        PUT    /e/{id}/<prop>      update_property DELETE /e/batch/erase batch_erase
        DELETE /e/{id}             delete          GET    /e/export/<f>  export
        DELETE /e                  delete_all      POST   /e/import/<f>  import_
        DELETE /e/batch            batch_delete

    Business-key variants live under ``/e/<key>/{<key>}``, compound-key
    variants under ``descriptor.composite_url``, with the same suffixes.
"""

from __future__ import annotations

import datetime as dt
import importlib
import logging
import pkgutil
from collections.abc import Awaitable, Mapping, Sequence
from pathlib import Path
from typing import Any

from ..errors import InvalidArgumentError
from ..http import HttpClient
from ..models import ExportedFile, MimeType, Page, PageRequest, SortRequest
from ..operations.add_impl import add_impl
from ..operations.base import KeyPart
from ..operations.delete_impl import (
    batch_delete_impl,
    delete_all_impl,
    delete_by_key_impl,
    delete_by_keys_impl,
    delete_impl,
)
from ..operations.erase_impl import (
    batch_erase_impl,
    erase_all_impl,
    erase_by_key_impl,
    erase_by_keys_impl,
    erase_impl,
)
from ..operations.exists_impl import exists_by_key_impl, exists_by_keys_impl, exists_impl
from ..operations.export_impl import export_impl
from ..operations.get_impl import (
    get_by_key_impl,
    get_by_keys_impl,
    get_impl,
    get_info_by_key_impl,
    get_info_by_keys_impl,
    get_info_impl,
    get_property_impl,
)
from ..operations.import_impl import import_impl
from ..operations.list_impl import list_impl, list_info_impl
from ..operations.purge_impl import (
    batch_purge_impl,
    purge_all_impl,
    purge_by_key_impl,
    purge_by_keys_impl,
    purge_impl,
)
from ..operations.restore_impl import (
    batch_restore_impl,
    restore_all_impl,
    restore_by_key_impl,
    restore_by_keys_impl,
    restore_impl,
)
from ..operations.update_impl import (
    update_by_key_impl,
    update_by_keys_impl,
    update_impl,
    update_property_impl,
)
from ..progress import NullProgress, ProgressIndicator
from .descriptor import EntityDescriptor, TypeSpec

logger = logging.getLogger(__name__)


class EntityApi:
    """Bound lifecycle operations for one entity type.

    Every method validates its arguments immediately (raising
    InvalidArgumentError) and returns an awaitable performing one request.
    A show_loading left to None falls back to the instance default.

    Attributes:
        name: Registry name of the entity (e.g. "country").
        descriptor: The EntityDescriptor driving URLs and decoding.
        http: HttpClient used for every request.
        logger: Logger receiving success messages.
        progress: Indicator shown when show_loading is requested.
        download_dir: Default target directory of auto-downloaded exports.
        show_loading: Default of the show_loading argument of every method.
    """

    def __init__(
        self,
        descriptor: EntityDescriptor,
        http: HttpClient,
        logger: logging.Logger | None = None,
        progress: ProgressIndicator | None = None,
        download_dir: str | Path = ".",
        name: str | None = None,
        show_loading: bool = False,
    ):
        self.descriptor = descriptor
        self.http = http
        self.name = name or descriptor.base_url.strip("/").replace("-", "_").replace("/", "_")
        self.logger = logger or logging.getLogger(f"common_api.entities.{self.name}")
        self.progress = progress or NullProgress()
        self.download_dir = download_dir
        self.show_loading = show_loading

    def __repr__(self) -> str:
        return f"EntityApi({self.descriptor.name}, {self.descriptor.base_url!r})"

    # -------------------------------------------------------------------------
    # URL helpers
    # -------------------------------------------------------------------------

    def _loading(self, show_loading: bool | None) -> bool:
        return self.show_loading if show_loading is None else show_loading

    def _url(self, suffix: str = "") -> str:
        return f"{self.descriptor.base_url}{suffix}"

    def _key_url(self, suffix: str = "") -> str:
        key_name = self.descriptor.key_name
        if not key_name:
            raise NotImplementedError(f"{self.descriptor.name} declares no business key")
        return f"{self.descriptor.base_url}/{key_name}/{{{key_name}}}{suffix}"

    def _composite(self, keys: Mapping[str, Any], suffix: str = "") -> tuple[str, list[KeyPart]]:
        if not self.descriptor.composite_url:
            raise NotImplementedError(f"{self.descriptor.name} declares no compound key")
        if not isinstance(keys, Mapping):
            raise InvalidArgumentError("keys", "The value of the argument 'keys' must be a mapping.")
        parts = [(spec.name, keys.get(spec.name), spec.type) for spec in self.descriptor.composite_keys]
        return f"{self.descriptor.composite_url}{suffix}", parts

    # -------------------------------------------------------------------------
    # Read
    # -------------------------------------------------------------------------

    def list(
        self,
        page_request: PageRequest | Mapping[str, Any] | None = None,
        criteria: Mapping[str, Any] | None = None,
        sort_request: SortRequest | Mapping[str, Any] | None = None,
        show_loading: bool | None = None,
        options: Mapping[str, Any] | None = None,
    ) -> Awaitable[Page[Any]]:
        """List entities, paginated, filtered by criteria and sorted."""
        return list_impl(
            self, self._url(), page_request, criteria, sort_request,
            self._loading(show_loading), options,
        )

    def list_info(
        self,
        page_request: PageRequest | Mapping[str, Any] | None = None,
        criteria: Mapping[str, Any] | None = None,
        sort_request: SortRequest | Mapping[str, Any] | None = None,
        show_loading: bool | None = None,
        options: Mapping[str, Any] | None = None,
    ) -> Awaitable[Page[Any]]:
        return list_info_impl(
            self, self._url("/info"), page_request, criteria, sort_request,
            self._loading(show_loading), options,
        )

    def get(
        self, id: Any, show_loading: bool | None = None, options: Mapping[str, Any] | None = None
    ) -> Awaitable[Any]:
        return get_impl(self, self._url("/{id}"), id, self._loading(show_loading), options)

    def get_info(
        self, id: Any, show_loading: bool | None = None, options: Mapping[str, Any] | None = None
    ) -> Awaitable[Any]:
        return get_info_impl(self, self._url("/{id}/info"), id, self._loading(show_loading), options)

    def get_property(
        self,
        id: Any,
        property_name: str,
        property_class: Any = str,
        show_loading: bool | None = None,
        options: Mapping[str, Any] | None = None,
    ) -> Awaitable[Any]:
        """Get one property of an entity, decoded with property_class."""
        return get_property_impl(
            self, self._url("/{id}/{property_name}"), property_name, property_class, id,
            self._loading(show_loading), options,
        )

    def exists(
        self, id: Any, show_loading: bool | None = None, options: Mapping[str, Any] | None = None
    ) -> Awaitable[bool]:
        return exists_impl(self, self._url("/{id}"), id, self._loading(show_loading), options)

    # -------------------------------------------------------------------------
    # Write
    # -------------------------------------------------------------------------

    def add(
        self, entity: Any, show_loading: bool | None = None, options: Mapping[str, Any] | None = None
    ) -> Awaitable[Any]:
        return add_impl(self, self._url(), entity, self._loading(show_loading), options)

    def update(
        self, entity: Any, show_loading: bool | None = None, options: Mapping[str, Any] | None = None
    ) -> Awaitable[Any]:
        return update_impl(self, self._url("/{id}"), entity, self._loading(show_loading), options)

    def update_property(
        self,
        id: Any,
        property_name: str,
        property_type: TypeSpec | type,
        value: Any,
        show_loading: bool | None = None,
        options: Mapping[str, Any] | None = None,
    ) -> Awaitable[dt.datetime | None]:
        return update_property_impl(
            self, self._url("/{id}/{property_name}"), id, property_name, property_type, value,
            self._loading(show_loading), options,
        )

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def delete(
        self, id: Any, show_loading: bool | None = None, options: Mapping[str, Any] | None = None
    ) -> Awaitable[dt.datetime | None]:
        """Soft-delete an entity; resolves to the deletion timestamp."""
        return delete_impl(self, self._url("/{id}"), id, self._loading(show_loading), options)

    def batch_delete(
        self, ids: Sequence[Any], show_loading: bool | None = None, options: Mapping[str, Any] | None = None
    ) -> Awaitable[int]:
        return batch_delete_impl(self, self._url("/batch"), ids, self._loading(show_loading), options)

    def delete_all(
        self,
        criteria: Mapping[str, Any] | None = None,
        show_loading: bool | None = None,
        options: Mapping[str, Any] | None = None,
    ) -> Awaitable[int]:
        return delete_all_impl(self, self._url(), criteria, self._loading(show_loading), options)

    def restore(
        self, id: Any, show_loading: bool | None = None, options: Mapping[str, Any] | None = None
    ) -> Awaitable[dt.datetime | None]:
        return restore_impl(self, self._url("/{id}"), id, self._loading(show_loading), options)

    def batch_restore(
        self, ids: Sequence[Any], show_loading: bool | None = None, options: Mapping[str, Any] | None = None
    ) -> Awaitable[int]:
        return batch_restore_impl(self, self._url("/batch"), ids, self._loading(show_loading), options)

    def restore_all(
        self,
        criteria: Mapping[str, Any] | None = None,
        show_loading: bool | None = None,
        options: Mapping[str, Any] | None = None,
    ) -> Awaitable[int]:
        return restore_all_impl(self, self._url("/restore"), criteria, self._loading(show_loading), options)

    def purge(
        self, id: Any, show_loading: bool | None = None, options: Mapping[str, Any] | None = None
    ) -> Awaitable[dt.datetime | None]:
        """Permanently remove a soft-deleted entity."""
        return purge_impl(self, self._url("/{id}/purge"), id, self._loading(show_loading), options)

    def batch_purge(
        self, ids: Sequence[Any], show_loading: bool | None = None, options: Mapping[str, Any] | None = None
    ) -> Awaitable[int]:
        return batch_purge_impl(self, self._url("/batch/purge"), ids, self._loading(show_loading), options)

    def purge_all(
        self,
        criteria: Mapping[str, Any] | None = None,
        show_loading: bool | None = None,
        options: Mapping[str, Any] | None = None,
    ) -> Awaitable[int]:
        return purge_all_impl(self, self._url("/purge"), criteria, self._loading(show_loading), options)

    def erase(
        self, id: Any, show_loading: bool | None = None, options: Mapping[str, Any] | None = None
    ) -> Awaitable[None]:
        """Permanently remove an entity whatever its state."""
        return erase_impl(self, self._url("/{id}/erase"), id, self._loading(show_loading), options)

    def batch_erase(
        self, ids: Sequence[Any], show_loading: bool | None = None, options: Mapping[str, Any] | None = None
    ) -> Awaitable[int]:
        return batch_erase_impl(self, self._url("/batch/erase"), ids, self._loading(show_loading), options)

    def erase_all(
        self,
        criteria: Mapping[str, Any] | None = None,
        show_loading: bool | None = None,
        options: Mapping[str, Any] | None = None,
    ) -> Awaitable[int]:
        return erase_all_impl(self, self._url("/erase"), criteria, self._loading(show_loading), options)

    # -------------------------------------------------------------------------
    # Import / export
    # -------------------------------------------------------------------------

    def export(
        self,
        format: MimeType | str,
        criteria: Mapping[str, Any] | None = None,
        sort_request: SortRequest | Mapping[str, Any] | None = None,
        auto_download: bool = False,
        show_loading: bool | None = None,
    ) -> Awaitable[ExportedFile | None]:
        return export_impl(
            self, self._url("/export/{format}"), format, criteria, sort_request, auto_download,
            self._loading(show_loading),
        )

    def import_(
        self,
        format: MimeType | str,
        file: Path | Any,
        parallel: bool | None = None,
        threads: int | None = None,
        show_loading: bool | None = None,
    ) -> Awaitable[int]:
        """Upload a file of entities; resolves to the number imported."""
        return import_impl(
            self, self._url("/import/{format}"), format, file, parallel, threads,
            self._loading(show_loading),
        )

    # -------------------------------------------------------------------------
    # Business key variants
    # -------------------------------------------------------------------------

    def get_by_key(
        self, key_value: str, show_loading: bool | None = None, options: Mapping[str, Any] | None = None
    ) -> Awaitable[Any]:
        url = self._key_url()
        return get_by_key_impl(
            self, url, self.descriptor.key_name, key_value, self._loading(show_loading), options
        )

    def get_info_by_key(
        self, key_value: str, show_loading: bool | None = None, options: Mapping[str, Any] | None = None
    ) -> Awaitable[Any]:
        url = self._key_url("/info")
        return get_info_by_key_impl(
            self, url, self.descriptor.key_name, key_value, self._loading(show_loading), options
        )

    def exists_by_key(
        self, key_value: str, show_loading: bool | None = None, options: Mapping[str, Any] | None = None
    ) -> Awaitable[bool]:
        url = self._key_url()
        return exists_by_key_impl(
            self, url, self.descriptor.key_name, key_value, self._loading(show_loading), options
        )

    def update_by_key(
        self, entity: Any, show_loading: bool | None = None, options: Mapping[str, Any] | None = None
    ) -> Awaitable[Any]:
        url = self._key_url()
        return update_by_key_impl(
            self, url, self.descriptor.key_name, entity, self._loading(show_loading), options
        )

    def delete_by_key(
        self, key_value: str, show_loading: bool | None = None, options: Mapping[str, Any] | None = None
    ) -> Awaitable[dt.datetime | None]:
        url = self._key_url()
        return delete_by_key_impl(
            self, url, self.descriptor.key_name, key_value, self._loading(show_loading), options
        )

    def restore_by_key(
        self, key_value: str, show_loading: bool | None = None, options: Mapping[str, Any] | None = None
    ) -> Awaitable[dt.datetime | None]:
        url = self._key_url()
        return restore_by_key_impl(
            self, url, self.descriptor.key_name, key_value, self._loading(show_loading), options
        )

    def purge_by_key(
        self, key_value: str, show_loading: bool | None = None, options: Mapping[str, Any] | None = None
    ) -> Awaitable[dt.datetime | None]:
        url = self._key_url("/purge")
        return purge_by_key_impl(
            self, url, self.descriptor.key_name, key_value, self._loading(show_loading), options
        )

    def erase_by_key(
        self, key_value: str, show_loading: bool | None = None, options: Mapping[str, Any] | None = None
    ) -> Awaitable[None]:
        url = self._key_url("/erase")
        return erase_by_key_impl(
            self, url, self.descriptor.key_name, key_value, self._loading(show_loading), options
        )

    # -------------------------------------------------------------------------
    # Compound key variants
    # -------------------------------------------------------------------------

    def get_by_keys(
        self,
        keys: Mapping[str, Any],
        show_loading: bool | None = None,
        options: Mapping[str, Any] | None = None,
    ) -> Awaitable[Any]:
        """Get an entity by its compound key, given as a name to value mapping."""
        url, parts = self._composite(keys)
        return get_by_keys_impl(self, url, parts, self._loading(show_loading), options)

    def get_info_by_keys(
        self,
        keys: Mapping[str, Any],
        show_loading: bool | None = None,
        options: Mapping[str, Any] | None = None,
    ) -> Awaitable[Any]:
        url, parts = self._composite(keys, "/info")
        return get_info_by_keys_impl(self, url, parts, self._loading(show_loading), options)

    def exists_by_keys(
        self,
        keys: Mapping[str, Any],
        show_loading: bool | None = None,
        options: Mapping[str, Any] | None = None,
    ) -> Awaitable[bool]:
        url, parts = self._composite(keys)
        return exists_by_keys_impl(self, url, parts, self._loading(show_loading), options)

    def update_by_keys(
        self, entity: Any, show_loading: bool | None = None, options: Mapping[str, Any] | None = None
    ) -> Awaitable[Any]:
        """Update an entity addressed by the compound key values it carries."""
        if isinstance(entity, Mapping):
            values = entity
        else:
            values = {spec.name: getattr(entity, spec.name, None) for spec in self.descriptor.composite_keys}
        url, parts = self._composite(values)
        return update_by_keys_impl(self, url, parts, entity, self._loading(show_loading), options)

    def delete_by_keys(
        self,
        keys: Mapping[str, Any],
        show_loading: bool | None = None,
        options: Mapping[str, Any] | None = None,
    ) -> Awaitable[dt.datetime | None]:
        url, parts = self._composite(keys)
        return delete_by_keys_impl(self, url, parts, self._loading(show_loading), options)

    def restore_by_keys(
        self,
        keys: Mapping[str, Any],
        show_loading: bool | None = None,
        options: Mapping[str, Any] | None = None,
    ) -> Awaitable[dt.datetime | None]:
        url, parts = self._composite(keys)
        return restore_by_keys_impl(self, url, parts, self._loading(show_loading), options)

    def purge_by_keys(
        self,
        keys: Mapping[str, Any],
        show_loading: bool | None = None,
        options: Mapping[str, Any] | None = None,
    ) -> Awaitable[dt.datetime | None]:
        url, parts = self._composite(keys, "/purge")
        return purge_by_keys_impl(self, url, parts, self._loading(show_loading), options)

    def erase_by_keys(
        self,
        keys: Mapping[str, Any],
        show_loading: bool | None = None,
        options: Mapping[str, Any] | None = None,
    ) -> Awaitable[None]:
        url, parts = self._composite(keys, "/erase")
        return erase_by_keys_impl(self, url, parts, self._loading(show_loading), options)


def _find_entity_modules(base_package: str, module_name: str) -> dict[str, Any]:
    """Find entity modules in a package."""
    result: dict[str, Any] = {}
    try:
        package = importlib.import_module(base_package)
    except ImportError:
        logger.warning("Entity package %s not found", base_package)
        return result

    package_path = getattr(package, "__path__", None)
    if not package_path:
        return result

    for _, name, is_pkg in pkgutil.iter_modules(package_path):
        if not is_pkg:
            continue
        try:
            result[name] = importlib.import_module(f"{base_package}.{name}.{module_name}")
        except ModuleNotFoundError:
            pass
    return result


def discover_descriptors(*packages: str) -> dict[str, EntityDescriptor]:
    """Map entity names to the DESCRIPTOR of ``<package>.<entity>.descriptor`` modules."""
    descriptors: dict[str, EntityDescriptor] = {}
    for package in packages:
        for entity_name, module in _find_entity_modules(package, "descriptor").items():
            descriptor = getattr(module, "DESCRIPTOR", None)
            if isinstance(descriptor, EntityDescriptor):
                descriptors[entity_name] = descriptor
    return descriptors


class EntityRegistry:
    """Discovery and instantiation of entity façades.

    Scans entity packages for ``<package>.<entity>.descriptor`` modules
    exposing a ``DESCRIPTOR`` and builds one EntityApi per entity. Provides
    dict-like access by entity name.
    """

    def __init__(
        self,
        http: HttpClient,
        progress: ProgressIndicator | None = None,
        download_dir: str | Path = ".",
        show_loading: bool = False,
    ):
        self.http = http
        self.progress = progress or NullProgress()
        self.download_dir = download_dir
        self.show_loading = show_loading
        self._apis: dict[str, EntityApi] = {}

    def discover(self, *packages: str) -> list[EntityApi]:
        """Discover descriptors in packages and register their façades."""
        for entity_name, descriptor in discover_descriptors(*packages).items():
            self.register(descriptor, entity_name)
        return list(self._apis.values())

    def register(self, descriptor: EntityDescriptor, name: str | None = None) -> EntityApi:
        api = EntityApi(
            descriptor,
            self.http,
            progress=self.progress,
            download_dir=self.download_dir,
            name=name,
            show_loading=self.show_loading,
        )
        self._apis[api.name] = api
        logger.debug("Registered entity %s at %s", api.name, descriptor.base_url)
        return api

    def __getitem__(self, name: str) -> EntityApi:
        if name not in self._apis:
            raise KeyError(f"Entity '{name}' not found")
        return self._apis[name]

    def __contains__(self, name: str) -> bool:
        return name in self._apis

    def __iter__(self):
        return iter(self._apis)

    def __len__(self) -> int:
        return len(self._apis)

    def values(self):
        return self._apis.values()

    def items(self):
        return self._apis.items()


__all__ = ["EntityApi", "EntityRegistry", "discover_descriptors"]
