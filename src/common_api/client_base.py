# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Configuration and root object of the entity REST client.

This module provides:
- ClientConfig: Dataclass with the client settings
- config_from_env(): Factory to build config from COMMON_API_* env vars
- ApiClient: Root object wiring HTTP client, entities and CLI

Configuration via environment variables:
    COMMON_API_BASE_URL: Server base URL (default: http://localhost:8000/api)
    COMMON_API_TIMEOUT: Request timeout in seconds (default: 30)
    COMMON_API_TOKEN: API token sent as X-API-Token header
    COMMON_API_DOWNLOAD_DIR: Target directory of exports (default: .)
    COMMON_API_SHOW_LOADING: Show a console spinner during requests
    COMMON_API_INSTANCE: Instance name for display

ApiClient provides:
1. Configuration: ClientConfig instance at self.config
2. HTTP: HttpClient at self.http (one httpx.AsyncClient pool)
3. Entities: EntityRegistry at self.entities with discovered descriptors
4. CLI: CliManager at self.cli (creates Click group lazily)

Usage:
    # From environment:
    client = ApiClient(config_from_env())

    # Explicit configuration:
    async with ApiClient(ClientConfig(base_url="https://api.example.com")) as client:
        page = await client.entities["country"].list()
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Any

import httpx

from .http import HttpClient
from .interface.cli_base import CliManager
from .interface.entity_api import EntityApi, EntityRegistry
from .progress import ConsoleProgress

logger = logging.getLogger(__name__)

_TRUE_VALUES = ("1", "true", "yes")


@dataclass
class ClientConfig:
    """Client configuration.

    Attributes:
        base_url: Server base URL; entity paths are appended to it.
        timeout: Request timeout in seconds.
        api_token: API token sent as X-API-Token header. If None, no auth header.
        download_dir: Directory where auto-downloaded exports are saved.
        show_loading: Show a console spinner while requests are in flight.
        instance_name: Client identifier for display.
    """

    base_url: str = "http://localhost:8000/api"
    timeout: float = 30.0
    api_token: str | None = None
    download_dir: str = "."
    show_loading: bool = False
    instance_name: str = "common-api"


def config_from_env() -> ClientConfig:
    """Build ClientConfig from COMMON_API_* environment variables.

    Returns:
        ClientConfig instance populated from environment.
    """
    return ClientConfig(
        base_url=os.environ.get("COMMON_API_BASE_URL", "http://localhost:8000/api"),
        timeout=float(os.environ.get("COMMON_API_TIMEOUT", "30")),
        api_token=os.environ.get("COMMON_API_TOKEN") or None,
        download_dir=os.environ.get("COMMON_API_DOWNLOAD_DIR", "."),
        show_loading=os.environ.get("COMMON_API_SHOW_LOADING", "").lower() in _TRUE_VALUES,
        instance_name=os.environ.get("COMMON_API_INSTANCE", "common-api"),
    )


class ApiClient:
    """Root object: config, HTTP client, entity façades, CLI.

    Attributes:
        config: ClientConfig instance with all configuration
        http: HttpClient shared by every entity
        entities: EntityRegistry with discovered EntityApi instances
        cli: CliManager (creates Click group lazily)

    Class Attributes (override in subclass):
        entity_packages: List of package names to scan for entity descriptors
    """

    # Override in subclass to specify entity discovery packages
    entity_packages: list[str] = ["common_api.entities"]

    def __init__(
        self,
        config: ClientConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize the client and discover entities.

        Args:
            config: ClientConfig instance. If None, creates default.
            transport: Optional httpx transport (MockTransport, ASGITransport) for tests.
        """
        self.config = config or ClientConfig()

        self.http = HttpClient(
            self.config.base_url,
            timeout=self.config.timeout,
            api_token=self.config.api_token,
            transport=transport,
        )
        self.progress = ConsoleProgress()

        self.entities = EntityRegistry(
            self.http,
            progress=self.progress,
            download_dir=self.config.download_dir,
            show_loading=self.config.show_loading,
        )
        self.entities.discover(*self.entity_packages)
        logger.debug(
            "%s: %d entities registered against %s",
            self.config.instance_name, len(self.entities), self.config.base_url,
        )

        self.cli = CliManager(parent=self)

    def entity(self, name: str) -> EntityApi:
        """Get entity façade by name."""
        if name not in self.entities:
            raise ValueError(f"Entity '{name}' not found")
        return self.entities[name]

    async def __aenter__(self) -> ApiClient:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.shutdown()

    async def shutdown(self) -> None:
        """Close the HTTP connection pool."""
        await self.http.aclose()


__all__ = ["ApiClient", "ClientConfig", "config_from_env"]
