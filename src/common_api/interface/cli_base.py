# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Click command generation for registered entities.

Each EntityApi becomes a Click group named after the entity, holding one
command per lifecycle operation. Results are printed with Rich.

Components:
    register_entity: Register the lifecycle commands of one entity.
    CliManager: Lazily built root group with every entity and service command.

Example:
    Generated commands::

        capi country list --page-size 20 --where name=Italy --sort-field code
        capi country get 42
        capi country get-by-key IT
        capi country delete 42
        capi country batch-erase 1 2 3
        capi country export CSV --output ./exports
        capi country import CSV ./countries.csv --parallel --threads 4
        capi serve-mock --port 8000

Note:
    - IDs are passed as strings; the server parses them
    - --where takes field=value pairs, converted using the entity's criteria schema
    - InvalidArgumentError and RemoteError become a Click error (exit code 1)
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from pathlib import Path
from typing import Any

import click
from pydantic import BaseModel
from rich.console import Console
from rich.table import Table

from ..errors import InvalidArgumentError, RemoteError
from ..models import MimeType, Page, SortOrder
from .descriptor import TypeTag
from .entity_api import EntityApi

console = Console()

_TRUE_VALUES = {"1", "true", "yes", "on"}


def _plain(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", exclude_none=True)
    return value


def _print_result(result: Any) -> None:
    """Print command result with rich formatting."""
    if isinstance(result, Page):
        _print_result([_plain(item) for item in result.content])
        console.print(
            f"[dim]page {result.page_index + 1}/{max(result.total_pages, 1)}, "
            f"{result.total_count} total[/dim]"
        )
        return
    result = _plain(result)
    if isinstance(result, list) and result and isinstance(result[0], dict):
        # List of dicts → table
        table = Table(show_header=True, header_style="bold cyan")
        keys = list(dict.fromkeys(key for row in result for key in row))
        for key in keys:
            table.add_column(key)
        for row in result:
            table.add_row(*[str(row.get(k, "")) for k in keys])
        console.print(table)
    elif isinstance(result, dict):
        # Single dict → key: value pairs
        for key, value in result.items():
            console.print(f"[bold]{key}:[/bold] {value}")
    elif isinstance(result, list):
        # Empty page or simple list
        if not result:
            console.print("[dim]No results[/dim]")
        for item in result:
            console.print(f"  • {item}")
    else:
        console.print(result)


def parse_where(api: EntityApi, pairs: tuple[str, ...]) -> dict[str, Any] | None:
    """Turn ``field=value`` pairs into criteria, typed after the criteria schema.

    Unknown fields are kept as strings so the validator reports them.
    """
    if not pairs:
        return None
    specs = {spec.name: spec for spec in api.descriptor.criteria_definitions}
    criteria: dict[str, Any] = {}
    for pair in pairs:
        name, sep, raw = pair.partition("=")
        if not sep or not name:
            raise click.BadParameter(f"expected field=value, got '{pair}'", param_hint="--where")
        spec = specs.get(name)
        tags = spec.tags if spec else ()
        value: Any = raw
        if TypeTag.BOOLEAN in tags:
            value = raw.lower() in _TRUE_VALUES
        elif (TypeTag.INTEGER in tags or TypeTag.BIG_INTEGER in tags) and TypeTag.STRING not in tags:
            try:
                value = int(raw)
            except ValueError:
                raise click.BadParameter(f"'{name}' expects an integer", param_hint="--where") from None
        elif TypeTag.ENUM in tags and spec is not None and spec.enum is not None:
            try:
                value = spec.enum(raw)
            except ValueError:
                raise click.BadParameter(f"unknown {name} '{raw}'", param_hint="--where") from None
        criteria[name] = value
    return criteria


def _where_option(func: Callable) -> Callable:
    return click.option(
        "--where", "-w", multiple=True, metavar="FIELD=VALUE", help="Criteria (repeatable, AND-combined)"
    )(func)


def _format_argument(func: Callable) -> Callable:
    return click.argument(
        "format", type=click.Choice([member.name for member in MimeType], case_sensitive=False)
    )(func)


def register_entity(
    group: click.Group, api: EntityApi, run_async: Callable[[Awaitable[Any]], Any] | None = None
) -> click.Group:
    """Register the lifecycle commands of an entity.

    Creates a subgroup named after the entity (underscores become dashes).

    Args:
        group: Click group to add the subgroup to.
        api: Entity façade whose operations back the commands.
        run_async: Function running an awaitable to completion. Defaults to asyncio.run.

    Returns:
        The created Click subgroup.
    """
    if run_async is None:
        run_async = asyncio.run

    def call(factory: Callable[[], Awaitable[Any]]) -> Any:
        try:
            return run_async(factory())
        except (InvalidArgumentError, RemoteError) as e:
            raise click.ClickException(str(e)) from e

    name = api.name.replace("_", "-")

    @group.group(name=name)
    def entity_group() -> None:
        pass

    entity_group.help = f"Manage {api.descriptor.name} entities."

    @entity_group.command("list")
    @click.option("--page-index", type=int, default=None, help="Zero-based page index")
    @click.option("--page-size", type=int, default=None, help="Page size")
    @click.option("--sort-field", default=None, help="Field to sort by")
    @click.option(
        "--sort-order", type=click.Choice([o.value for o in SortOrder], case_sensitive=False), default=None
    )
    @click.option("--info/--full", default=False, help="List the info projection")
    @_where_option
    def list_cmd(
        page_index: int | None,
        page_size: int | None,
        sort_field: str | None,
        sort_order: str | None,
        info: bool,
        where: tuple[str, ...],
    ) -> None:
        """List entities."""
        page_request = {"page_index": page_index, "page_size": page_size}
        sort_request = {"sort_field": sort_field, "sort_order": sort_order.upper() if sort_order else None}
        criteria = parse_where(api, where)
        method = api.list_info if info else api.list
        _print_result(call(lambda: method(page_request, criteria, sort_request)))

    @entity_group.command("get")
    @click.argument("id")
    @click.option("--info/--full", default=False, help="Get the info projection")
    def get_cmd(id: str, info: bool) -> None:
        """Get an entity by ID."""
        method = api.get_info if info else api.get
        _print_result(call(lambda: method(id)))

    @entity_group.command("exists")
    @click.argument("id")
    def exists_cmd(id: str) -> None:
        """Tell whether an entity exists."""
        _print_result(call(lambda: api.exists(id)))

    def single(command: str, done: str, help_text: str) -> None:
        @entity_group.command(command, help=help_text)
        @click.argument("id")
        def cmd(id: str) -> None:
            result = call(lambda: getattr(api, command)(id))
            suffix = f" at {result}" if result else ""
            console.print(f"{api.descriptor.name} {id} {done}{suffix}")

    single("delete", "deleted", "Soft-delete an entity.")
    single("restore", "restored", "Restore a soft-deleted entity.")
    single("purge", "purged", "Permanently remove a soft-deleted entity.")
    single("erase", "erased", "Permanently remove an entity.")

    def batch(command: str, method_name: str, help_text: str) -> None:
        @entity_group.command(command, help=help_text)
        @click.argument("ids", nargs=-1)
        def cmd(ids: tuple[str, ...]) -> None:
            count = call(lambda: getattr(api, method_name)(list(ids)))
            console.print(f"{count} {api.descriptor.name}(s) affected")

    batch("batch-delete", "batch_delete", "Soft-delete the listed entities.")
    batch("batch-restore", "batch_restore", "Restore the listed entities.")
    batch("batch-purge", "batch_purge", "Purge the listed entities.")
    batch("batch-erase", "batch_erase", "Erase the listed entities.")

    def bulk(command: str, method_name: str, help_text: str) -> None:
        @entity_group.command(command, help=help_text)
        @_where_option
        def cmd(where: tuple[str, ...]) -> None:
            criteria = parse_where(api, where)
            count = call(lambda: getattr(api, method_name)(criteria))
            console.print(f"{count} {api.descriptor.name}(s) affected")

    bulk("restore-all", "restore_all", "Restore every soft-deleted entity matching the criteria.")
    bulk("purge-all", "purge_all", "Purge every soft-deleted entity matching the criteria.")

    @entity_group.command("export")
    @_format_argument
    @_where_option
    @click.option("--output", "-o", type=click.Path(file_okay=False), default=None, help="Target directory")
    def export_cmd(format: str, where: tuple[str, ...], output: str | None) -> None:
        """Export entities to a file."""
        criteria = parse_where(api, where)
        exported = call(lambda: api.export(format, criteria))
        target = exported.save(output or api.download_dir)
        console.print(f"Exported {exported.size} bytes to {target}")

    @entity_group.command("import")
    @_format_argument
    @click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
    @click.option("--parallel/--sequential", default=None, help="Import rows in parallel")
    @click.option("--threads", type=int, default=None, help="Worker threads hint (with --parallel)")
    def import_cmd(format: str, file: Path, parallel: bool | None, threads: int | None) -> None:
        """Import entities from a file."""
        count = call(lambda: api.import_(format, file, parallel, threads))
        console.print(f"Imported {count} {api.descriptor.name}(s)")

    if api.descriptor.key_name:

        @entity_group.command("get-by-key")
        @click.argument("key")
        def get_by_key_cmd(key: str) -> None:
            """Get an entity by its business key."""
            _print_result(call(lambda: api.get_by_key(key)))

        get_by_key_cmd.help = f"Get an entity by its {api.descriptor.key_name}."

    return entity_group


class CliManager:
    """Manager for Click CLI application. Creates CLI lazily on first access."""

    def __init__(self, parent: Any):
        self.client = parent
        self._cli: click.Group | None = None

    @property
    def cli(self) -> click.Group:
        """Lazy-create Click CLI group."""
        if self._cli is None:
            self._cli = self._create_cli()
        return self._cli

    def run_async(self, awaitable: Awaitable[Any]) -> Any:
        """Run one command's awaitable, closing the HTTP pool afterwards."""

        async def session() -> Any:
            try:
                return await awaitable
            finally:
                await self.client.http.aclose()

        return asyncio.run(session())

    def _create_cli(self) -> click.Group:
        """Build Click CLI: entity commands + service commands."""

        @click.group()
        @click.version_option(package_name="common-api")
        def cli() -> None:
            """Entity lifecycle REST client."""
            pass

        for api in self.client.entities.values():
            register_entity(cli, api, self.run_async)

        @cli.command("serve-mock")
        @click.option("--host", default="127.0.0.1", help="Bind host")
        @click.option("--port", "-p", default=8000, help="Bind port")
        def serve_mock_cmd(host: str, port: int) -> None:
            """Start the in-memory mock server (requires the testing extra)."""
            import uvicorn

            uvicorn.run(self._get_server_module(), host=host, port=port, factory=True)

        return cli

    def _get_server_module(self) -> str:
        """Get the mock server factory path for uvicorn."""
        return "common_api.testing.mock_server:create_app"


__all__ = ["CliManager", "console", "parse_where", "register_entity"]
