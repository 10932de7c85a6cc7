# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Tests for the shared operation plumbing."""

import datetime as dt
from enum import Enum

import pytest

from common_api.entities.country.model import Country
from common_api.errors import DecodeError
from common_api.interface.descriptor import ID_TYPES, TypeTag
from common_api.models import PageRequest
from common_api.operations.base import (
    build_params,
    decode_count,
    decode_page,
    decode_timestamp,
    describe_keys,
    entity_value,
    to_json,
)


class Level(Enum):
    LOW = 1


class TestToJson:
    """Tests for to_json."""

    def test_model_drops_none(self):
        assert to_json(Country(code="IT")) == {"code": "IT", "predefined": False}

    def test_nested_values(self):
        value = {"when": dt.date(2025, 1, 2), "level": Level.LOW, "tags": ("a", None), "skip": None}
        assert to_json(value) == {"when": "2025-01-02", "level": 1, "tags": ["a", None]}


class TestBuildParams:
    """Tests for build_params."""

    def test_merge_order(self):
        params = build_params(PageRequest(page_size=10), {"name": "x"}, None, {"page_size": 20})
        assert params == {"page_size": 20, "name": "x"}

    def test_later_none_removes_key(self):
        assert build_params({"a": 1}, {"a": None}) == {}


class TestDescribeKeys:
    """Tests for describe_keys."""

    def test_id(self):
        assert describe_keys([("id", 3, ID_TYPES)]) == 'its ID "3"'

    def test_named_key(self):
        assert describe_keys([("code", "IT", TypeTag.STRING)]) == 'its code "IT"'

    def test_parent_and_key(self):
        keys = [("dict_id", 7, ID_TYPES), ("code", "RED", TypeTag.STRING)]
        assert describe_keys(keys) == 'parent dict_id "7" and its code "RED"'


class TestDecoders:
    """Tests for the body decoders."""

    def test_timestamp(self):
        assert decode_timestamp("2025-01-02T03:04:05Z", "/x") == dt.datetime(
            2025, 1, 2, 3, 4, 5, tzinfo=dt.timezone.utc
        )
        assert decode_timestamp("", "/x") is None
        assert decode_timestamp(None, "/x") is None

    def test_count(self):
        assert decode_count(4, "/x") == 4
        assert decode_count(None, "/x") == 0
        with pytest.raises(DecodeError) as exc_info:
            decode_count("four", "/x")
        assert exc_info.value.url == "/x"

    def test_entity_value(self):
        assert entity_value({"code": "IT"}, "code") == "IT"
        assert entity_value(Country(code="FR"), "code") == "FR"
        assert entity_value(object(), "code") is None

    def test_page(self):
        page = decode_page(Country, {"total_count": 1, "content": [{"code": "IT"}]}, "/country")
        assert page.content == [Country(code="IT")]

    @pytest.mark.parametrize("body", [None, [], "oops"])
    def test_page_requires_an_envelope(self, body):
        """A missing or non-object collection body is not an empty page."""
        with pytest.raises(DecodeError) as exc_info:
            decode_page(Country, body, "/country")
        assert exc_info.value.url == "/country"
