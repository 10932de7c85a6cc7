# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Tests for the list, get and exists templates."""

import logging

import pytest

from common_api.entities.country.model import Country, CountryInfo
from common_api.entities.dict_entry.descriptor import DESCRIPTOR as DICT_ENTRY
from common_api.entities.dict_entry.model import DictEntry, DictEntryInfo
from common_api.errors import DecodeError, InvalidArgumentError, RemoteError, UnresolvedTokenError
from common_api.interface.descriptor import ID_TYPES, TypeTag
from common_api.models import Page, PageRequest, SortOrder, SortRequest
from common_api.operations.exists_impl import exists_by_key_impl, exists_by_parent_and_key_impl, exists_impl
from common_api.operations.get_impl import (
    get_by_key_impl,
    get_by_keys_impl,
    get_by_parent_and_key_impl,
    get_impl,
    get_info_by_keys_impl,
    get_info_by_parent_and_key_impl,
    get_info_impl,
    get_property_by_key_impl,
    get_property_by_parent_and_key_impl,
    get_property_impl,
)
from common_api.operations.list_impl import list_impl, list_info_impl
from common_api.progress import Activity

PAGE = {
    "page_index": 0,
    "page_size": 2,
    "total_count": 3,
    "total_pages": 2,
    "content": [{"id": 1, "code": "IT", "name": "Italy"}, {"id": 2, "code": "FR", "name": "France"}],
}


class TestListImpl:
    """Tests for list_impl and list_info_impl."""

    async def test_list_decodes_page(self, ctx, recorder):
        recorder.reply(json=PAGE)
        page = await list_impl(ctx, "/country")
        assert isinstance(page, Page)
        assert page.total_count == 3
        assert [c.code for c in page.content] == ["IT", "FR"]
        assert isinstance(page.content[0], Country)

    async def test_query_is_merged(self, ctx, recorder):
        """page_request, criteria, sort_request and options are merged, None dropped."""
        recorder.reply(json=PAGE)
        await list_impl(
            ctx,
            "/country",
            PageRequest(page_index=1, page_size=2),
            {"name": "Italy", "level": None, "predefined": True},
            SortRequest(sort_field="code", sort_order=SortOrder.DESC),
            options={"lang": "it"},
        )
        params = recorder.last.url.params
        assert params["page_index"] == "1"
        assert params["page_size"] == "2"
        assert params["name"] == "Italy"
        assert params["predefined"] == "true"
        assert params["sort_field"] == "code"
        assert params["sort_order"] == "DESC"
        assert params["lang"] == "it"
        assert "level" not in params

    async def test_options_override(self, ctx, recorder):
        """Later sources win on key collisions."""
        recorder.reply(json=PAGE)
        await list_impl(ctx, "/country", {"page_size": 2}, options={"page_size": 50})
        assert recorder.last.url.params["page_size"] == "50"

    async def test_list_info_uses_info_class(self, ctx, recorder):
        recorder.reply(json=PAGE)
        page = await list_info_impl(ctx, "/country/info")
        assert isinstance(page.content[0], CountryInfo)

    async def test_success_log(self, ctx, recorder, caplog):
        caplog.set_level(logging.INFO)
        recorder.reply(json=PAGE)
        await list_info_impl(ctx, "/country/info")
        assert "Successfully list infos of Countrys." in caplog.text

    def test_validation_is_synchronous(self, ctx, recorder):
        """Bad arguments raise before any request is built."""
        with pytest.raises(InvalidArgumentError):
            list_impl(ctx, "/country", criteria={"unknown": 1})
        with pytest.raises(InvalidArgumentError):
            list_impl(ctx, "/country", sort_request={"sort_field": "population"})
        with pytest.raises(InvalidArgumentError):
            list_impl(ctx, "/country", page_request={"page_size": "ten"})
        with pytest.raises(InvalidArgumentError):
            list_impl(ctx, "/country", show_loading="yes")
        assert recorder.requests == []

    async def test_progress_shown_when_requested(self, ctx, recorder):
        recorder.reply(json=PAGE)
        await list_impl(ctx, "/country", show_loading=True)
        ctx.progress.show.assert_called_once_with(Activity.GETTING)
        ctx.progress.hide.assert_called_once()

    async def test_progress_hidden_on_error(self, ctx, recorder):
        recorder.reply(500, json={"message": "down"})
        with pytest.raises(RemoteError):
            await list_impl(ctx, "/country", show_loading=True)
        ctx.progress.hide.assert_called_once()

    async def test_bad_page_is_decode_error(self, ctx, recorder):
        recorder.reply(json={"content": "not a list"})
        with pytest.raises(DecodeError):
            await list_impl(ctx, "/country")


class TestGetImpl:
    """Tests for the get templates."""

    async def test_get_by_id(self, ctx, recorder, caplog):
        caplog.set_level(logging.INFO)
        recorder.reply(json={"id": 42, "code": "IT"})
        country = await get_impl(ctx, "/country/{id}", 42)
        assert country == Country(id=42, code="IT")
        assert recorder.last.url.path == "/api/country/42"
        assert 'Successfully get the Country by its ID "42"' in caplog.text

    async def test_plain_get_without_params(self, ctx, recorder, caplog):
        """A string ID is substituted verbatim and no query string is sent."""
        caplog.set_level(logging.INFO)
        recorder.reply(json={"id": 42})
        await get_impl(ctx, "/x/{id}", "42", False)
        assert recorder.last.method == "GET"
        assert recorder.last.url.path == "/api/x/42"
        assert recorder.last.url.query == b""
        record = next(r for r in caplog.records if r.name == ctx.logger.name and r.levelno == logging.INFO)
        assert record.msg == 'Successfully get the %s by its ID "%s"'
        assert record.args == ("Country", "42")

    async def test_big_integer_id(self, ctx, recorder):
        recorder.reply(json={"id": 1})
        await get_impl(ctx, "/country/{id}", 2**64 + 1)
        assert recorder.last.url.path == "/api/country/18446744073709551617"

    async def test_empty_body_is_none(self, ctx, recorder):
        recorder.reply(200)
        assert await get_impl(ctx, "/country/{id}", "7") is None

    def test_invalid_id(self, ctx):
        with pytest.raises(InvalidArgumentError):
            get_impl(ctx, "/country/{id}", 4.2)

    def test_template_without_token_value(self, ctx):
        with pytest.raises(UnresolvedTokenError):
            get_impl(ctx, "/country/{code}", 1)

    async def test_get_info(self, ctx, recorder, caplog):
        caplog.set_level(logging.INFO)
        recorder.reply(json={"id": 1, "code": "IT", "name": "Italy", "level": 1})
        info = await get_info_impl(ctx, "/country/{id}/info", 1)
        assert isinstance(info, CountryInfo)
        assert 'Successfully get the info of Country by its ID "1"' in caplog.text

    async def test_get_by_key(self, ctx, recorder, caplog):
        caplog.set_level(logging.INFO)
        recorder.reply(json={"id": 1, "code": "IT"})
        await get_by_key_impl(ctx, "/country/code/{code}", "code", "IT")
        assert recorder.last.url.path == "/api/country/code/IT"
        assert 'Successfully get the Country by its code "IT"' in caplog.text

    def test_get_by_key_requires_string(self, ctx):
        with pytest.raises(InvalidArgumentError) as exc_info:
            get_by_key_impl(ctx, "/country/code/{code}", "code", 12)
        assert exc_info.value.name == "code"

    async def test_get_by_parent_and_key(self, make_context, recorder, caplog):
        caplog.set_level(logging.INFO)
        ctx = make_context(DICT_ENTRY)
        recorder.reply(json={"id": 5, "dict_id": 7, "code": "RED"})
        entry = await get_by_parent_and_key_impl(
            ctx, "/dict/{dict_id}/entry/code/{code}", "dict_id", 7, "code", "RED"
        )
        assert isinstance(entry, DictEntry)
        assert recorder.last.url.path == "/api/dict/7/entry/code/RED"
        assert 'by parent dict_id "7" and its code "RED"' in caplog.text

    async def test_get_by_keys(self, make_context, recorder):
        ctx = make_context(DICT_ENTRY)
        recorder.reply(json={"id": 5})
        keys = [("dict_id", "d-1", ID_TYPES), ("code", "a b", TypeTag.STRING)]
        await get_by_keys_impl(ctx, "/dict/{dict_id}/entry/code/{code}", keys)
        assert recorder.last.url.raw_path == b"/api/dict/d-1/entry/code/a%20b"

    async def test_get_decode_error(self, ctx, recorder):
        recorder.reply(json={"id": 1, "level": "high"})
        with pytest.raises(DecodeError) as exc_info:
            await get_impl(ctx, "/country/{id}", 1)
        assert exc_info.value.code == "Country"

    async def test_not_found_propagates(self, ctx, recorder):
        recorder.reply(404, json={"code": "NOT_FOUND", "message": "no such country"})
        with pytest.raises(RemoteError) as exc_info:
            await get_impl(ctx, "/country/{id}", 1)
        assert exc_info.value.status_code == 404


class TestParentAndKeyReads:
    """Tests for the parent/key and compound-key read forms."""

    URL = "/dict/{dict_id}/entry/code/{code}"

    async def test_get_info_by_parent_and_key(self, make_context, recorder, caplog):
        caplog.set_level(logging.INFO)
        ctx = make_context(DICT_ENTRY)
        recorder.reply(json={"id": 5, "dict_id": 7, "code": "RED", "name": "Red"})
        info = await get_info_by_parent_and_key_impl(ctx, self.URL + "/info", "dict_id", 7, "code", "RED")
        assert isinstance(info, DictEntryInfo)
        assert recorder.last.method == "GET"
        assert recorder.last.url.path == "/api/dict/7/entry/code/RED/info"
        assert 'Successfully get the info of DictEntry by parent dict_id "7" and its code "RED"' in caplog.text

    async def test_get_info_by_keys(self, make_context, recorder, caplog):
        caplog.set_level(logging.INFO)
        ctx = make_context(DICT_ENTRY)
        recorder.reply(json={"id": 5, "code": "a b"})
        keys = [("dict_id", "d-1", ID_TYPES), ("code", "a b", TypeTag.STRING)]
        info = await get_info_by_keys_impl(ctx, self.URL + "/info", keys)
        assert info.code == "a b"
        assert recorder.last.url.raw_path == b"/api/dict/d-1/entry/code/a%20b/info"
        assert 'Successfully get the info of DictEntry by parent dict_id "d-1" and its code "a b"' in caplog.text

    async def test_get_property_by_parent_and_key(self, make_context, recorder, caplog):
        """The property name and class come before the parent and child keys."""
        caplog.set_level(logging.INFO)
        ctx = make_context(DICT_ENTRY)
        recorder.reply(json="Red")
        name = await get_property_by_parent_and_key_impl(
            ctx, self.URL + "/{property_name}", "name", str, "dict_id", 7, "code", "RED"
        )
        assert name == "Red"
        assert recorder.last.url.path == "/api/dict/7/entry/code/RED/name"
        assert (
            'Successfully get the property "name" of the DictEntry by parent dict_id "7" and its code "RED"'
            in caplog.text
        )

    async def test_exists_by_parent_and_key(self, make_context, recorder, caplog):
        caplog.set_level(logging.INFO)
        ctx = make_context(DICT_ENTRY)
        recorder.reply(200).reply(404)
        assert await exists_by_parent_and_key_impl(ctx, self.URL, "dict_id", 7, "code", "RED") is True
        assert recorder.last.method == "HEAD"
        assert recorder.last.url.path == "/api/dict/7/entry/code/RED"
        assert await exists_by_parent_and_key_impl(ctx, self.URL, "dict_id", 7, "code", "BLUE") is False
        assert 'Checked the DictEntry by parent dict_id "7" and its code "RED": found' in caplog.text
        assert 'Checked the DictEntry by parent dict_id "7" and its code "BLUE": not found' in caplog.text

    def test_child_key_must_be_a_string(self, make_context, recorder):
        ctx = make_context(DICT_ENTRY)
        with pytest.raises(InvalidArgumentError) as exc_info:
            get_info_by_parent_and_key_impl(ctx, self.URL + "/info", "dict_id", 7, "code", 3)
        assert exc_info.value.name == "code"
        assert recorder.requests == []


class TestGetPropertyImpl:
    """Tests for get_property_impl."""

    async def test_scalar_property(self, ctx, recorder, caplog):
        caplog.set_level(logging.INFO)
        recorder.reply(json=3)
        level = await get_property_impl(ctx, "/country/{id}/{property_name}", "level", int, 1)
        assert level == 3
        assert recorder.last.url.path == "/api/country/1/level"
        assert 'Successfully get the property "level" of the Country by its ID "1"' in caplog.text

    async def test_model_property(self, ctx, recorder):
        recorder.reply(json={"id": 1, "code": "IT"})
        info = await get_property_impl(ctx, "/country/{id}/{property_name}", "summary", CountryInfo, 1)
        assert info.code == "IT"

    async def test_property_by_key(self, ctx, recorder):
        recorder.reply(json="Italia")
        name = await get_property_by_key_impl(
            ctx, "/country/code/{code}/{property_name}", "name", str, "code", "IT"
        )
        assert name == "Italia"
        assert recorder.last.url.path == "/api/country/code/IT/name"

    async def test_property_decode_error(self, ctx, recorder):
        recorder.reply(json="three")
        with pytest.raises(DecodeError):
            await get_property_impl(ctx, "/country/{id}/{property_name}", "level", int, 1)

    def test_property_name_must_be_string(self, ctx):
        with pytest.raises(InvalidArgumentError):
            get_property_impl(ctx, "/country/{id}/{property_name}", None, int, 1)


class TestExistsImpl:
    """Tests for exists_impl."""

    async def test_found(self, ctx, recorder, caplog):
        caplog.set_level(logging.INFO)
        recorder.reply(200)
        assert await exists_impl(ctx, "/country/{id}", 1) is True
        assert recorder.last.method == "HEAD"
        assert 'Checked the Country by its ID "1": found' in caplog.text

    async def test_not_found(self, ctx, recorder):
        recorder.reply(404)
        assert await exists_by_key_impl(ctx, "/country/code/{code}", "code", "XX") is False

    async def test_other_errors_propagate(self, ctx, recorder):
        recorder.reply(403)
        with pytest.raises(RemoteError) as exc_info:
            await exists_impl(ctx, "/country/{id}", 1)
        assert exc_info.value.status_code == 403
