# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""common-api: generic entity-lifecycle REST client."""

__version__ = "0.1.0"

from .client_base import ApiClient, ClientConfig, config_from_env
from .errors import DecodeError, InvalidArgumentError, RemoteError, UnresolvedTokenError
from .http import HttpClient
from .interface import EntityApi, EntityDescriptor, EntityRegistry, FieldSpec, KeySpec, TypeTag
from .models import ErrorInfo, ExportedFile, MimeType, Page, PageRequest, SortOrder, SortRequest
from .progress import Activity, ConsoleProgress, NullProgress

__all__ = [
    "Activity",
    "ApiClient",
    "ClientConfig",
    "ConsoleProgress",
    "DecodeError",
    "EntityApi",
    "EntityDescriptor",
    "EntityRegistry",
    "ErrorInfo",
    "ExportedFile",
    "FieldSpec",
    "HttpClient",
    "InvalidArgumentError",
    "KeySpec",
    "MimeType",
    "NullProgress",
    "Page",
    "PageRequest",
    "RemoteError",
    "SortOrder",
    "SortRequest",
    "TypeTag",
    "UnresolvedTokenError",
    "config_from_env",
]
