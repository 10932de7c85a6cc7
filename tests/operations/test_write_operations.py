# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Tests for the add, update and update-property templates."""

import datetime as dt
import logging

import pytest

from common_api.entities.country.model import Country
from common_api.entities.dict_entry.descriptor import DESCRIPTOR as DICT_ENTRY
from common_api.entities.dict_entry.model import DictEntry
from common_api.errors import InvalidArgumentError
from common_api.interface.descriptor import ID_TYPES, TypeTag
from common_api.operations.add_impl import add_impl
from common_api.operations.update_impl import (
    update_by_key_impl,
    update_by_keys_impl,
    update_by_parent_and_key_impl,
    update_impl,
    update_property_by_key_impl,
    update_property_impl,
)
from common_api.progress import Activity

STAMP = "2025-03-01T10:00:00+00:00"


class TestAddImpl:
    """Tests for add_impl."""

    async def test_posts_entity_without_none_fields(self, ctx, recorder, caplog):
        caplog.set_level(logging.INFO)
        recorder.reply(json={"id": 9, "code": "IT", "name": "Italy", "create_time": STAMP})
        created = await add_impl(ctx, "/country", Country(code="IT", name="Italy"))
        assert recorder.last.method == "POST"
        assert recorder.last_json() == {"code": "IT", "name": "Italy", "predefined": False}
        assert created.id == 9
        assert created.create_time == dt.datetime(2025, 3, 1, 10, tzinfo=dt.timezone.utc)
        assert "Successfully add the Country" in caplog.text

    async def test_mapping_entity(self, ctx, recorder):
        recorder.reply(json={"id": 1})
        await add_impl(ctx, "/country", {"code": "FR", "icon": None})
        assert recorder.last_json() == {"code": "FR"}

    async def test_progress_activity(self, ctx, recorder):
        recorder.reply(json={"id": 1})
        await add_impl(ctx, "/country", {"code": "FR"}, show_loading=True)
        ctx.progress.show.assert_called_once_with(Activity.ADDING)

    def test_rejects_non_entity(self, ctx, recorder):
        with pytest.raises(InvalidArgumentError) as exc_info:
            add_impl(ctx, "/country", "IT")
        assert exc_info.value.name == "entity"
        with pytest.raises(InvalidArgumentError):
            add_impl(ctx, "/country", None)
        assert recorder.requests == []


class TestUpdateImpl:
    """Tests for the update templates."""

    async def test_update_by_own_id(self, ctx, recorder, caplog):
        caplog.set_level(logging.INFO)
        recorder.reply(json={"id": 3, "code": "IT", "name": "Italia"})
        updated = await update_impl(ctx, "/country/{id}", Country(id=3, code="IT", name="Italia"))
        assert recorder.last.method == "PUT"
        assert recorder.last.url.path == "/api/country/3"
        assert updated.name == "Italia"
        assert 'Successfully update the Country by its ID "3"' in caplog.text

    def test_update_requires_id(self, ctx):
        with pytest.raises(InvalidArgumentError) as exc_info:
            update_impl(ctx, "/country/{id}", Country(code="IT"))
        assert exc_info.value.name == "id"

    async def test_update_by_key(self, ctx, recorder):
        recorder.reply(json={"id": 3, "code": "IT"})
        await update_by_key_impl(ctx, "/country/code/{code}", "code", {"code": "IT", "name": "Italia"})
        assert recorder.last.url.path == "/api/country/code/IT"
        assert recorder.last_json() == {"code": "IT", "name": "Italia"}

    def test_update_by_key_name_must_be_string(self, ctx):
        with pytest.raises(InvalidArgumentError) as exc_info:
            update_by_key_impl(ctx, "/country/code/{code}", None, {"code": "IT"})
        assert exc_info.value.name == "key_name"

    async def test_update_by_parent_and_key(self, make_context, recorder):
        ctx = make_context(DICT_ENTRY)
        recorder.reply(json={"id": 5, "dict_id": 7, "code": "RED"})
        entry = DictEntry(dict_id=7, code="RED", name="Red")
        await update_by_parent_and_key_impl(
            ctx, "/dict/{dict_id}/entry/code/{code}", "dict_id", 7, "code", entry
        )
        assert recorder.last.url.path == "/api/dict/7/entry/code/RED"

    async def test_update_by_keys(self, make_context, recorder):
        ctx = make_context(DICT_ENTRY)
        recorder.reply(json={"id": 5})
        keys = [("dict_id", 7, ID_TYPES), ("code", "RED", TypeTag.STRING)]
        await update_by_keys_impl(ctx, "/dict/{dict_id}/entry/code/{code}", keys, {"name": "Red"})
        assert recorder.last.url.path == "/api/dict/7/entry/code/RED"


class TestUpdatePropertyImpl:
    """Tests for the update-property templates."""

    async def test_update_property(self, ctx, recorder, caplog):
        caplog.set_level(logging.INFO)
        recorder.reply(json=STAMP)
        stamp = await update_property_impl(
            ctx, "/country/{id}/{property_name}", 3, "level", TypeTag.INTEGER, 2
        )
        assert recorder.last.method == "PUT"
        assert recorder.last.url.path == "/api/country/3/level"
        assert recorder.last_json() == 2
        assert stamp == dt.datetime(2025, 3, 1, 10, tzinfo=dt.timezone.utc)
        assert 'Successfully update the property "level" of the Country by its ID "3"' in caplog.text

    async def test_none_clears_property(self, ctx, recorder):
        recorder.reply(json=STAMP)
        await update_property_impl(ctx, "/country/{id}/{property_name}", 3, "icon", TypeTag.STRING, None)
        assert recorder.last.content == b""

    def test_value_type_checked(self, ctx):
        with pytest.raises(InvalidArgumentError) as exc_info:
            update_property_impl(ctx, "/country/{id}/{property_name}", 3, "level", TypeTag.INTEGER, "2")
        assert exc_info.value.name == "level"

    async def test_update_property_by_key(self, ctx, recorder):
        recorder.reply(json=STAMP)
        await update_property_by_key_impl(
            ctx, "/country/code/{code}/{property_name}", "code", "IT", "name", str, "Italia"
        )
        assert recorder.last.url.path == "/api/country/code/IT/name"
        assert recorder.last_json() == "Italia"
