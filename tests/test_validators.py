# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Tests for the synchronous argument validators."""

import datetime as dt
from enum import Enum

import pytest

from common_api.errors import InvalidArgumentError
from common_api.interface.descriptor import ID_TYPES, FieldSpec, TypeTag
from common_api.interface.validators import (
    INT64_MAX,
    matches_type,
    validate_criteria,
    validate_id,
    validate_id_array,
    validate_keys,
    validate_page_request,
    validate_sort_request,
    validate_value,
)
from common_api.entities.country.model import Country
from common_api.models import PageRequest, SortOrder, SortRequest


class Color(str, Enum):
    RED = "red"
    GREEN = "green"


class TestMatchesType:
    """Tests for matches_type."""

    def test_bool_is_not_an_integer(self):
        """Booleans never count as integers."""
        assert not matches_type(TypeTag.INTEGER, True)
        assert not matches_type(TypeTag.BIG_INTEGER, False)

    def test_integer_range(self):
        """INTEGER is bounded to 64 bits, BIG_INTEGER is not."""
        assert matches_type(TypeTag.INTEGER, INT64_MAX)
        assert not matches_type(TypeTag.INTEGER, INT64_MAX + 1)
        assert matches_type(TypeTag.BIG_INTEGER, INT64_MAX + 1)

    def test_date_excludes_datetime(self):
        """A datetime is not accepted as a date."""
        assert matches_type(TypeTag.DATE, dt.date(2024, 1, 1))
        assert not matches_type(TypeTag.DATE, dt.datetime(2024, 1, 1))
        assert matches_type(TypeTag.DATETIME, dt.datetime(2024, 1, 1))

    def test_enum_by_member_value_or_name(self):
        """ENUM accepts members, values and names of the declared enum."""
        assert matches_type(TypeTag.ENUM, Color.RED, Color)
        assert matches_type(TypeTag.ENUM, "green", Color)
        assert matches_type(TypeTag.ENUM, "GREEN", Color)
        assert not matches_type(TypeTag.ENUM, "blue", Color)

    def test_number(self):
        assert matches_type(TypeTag.NUMBER, 1.5)
        assert matches_type(TypeTag.NUMBER, 3)
        assert not matches_type(TypeTag.NUMBER, "3")


class TestValidateId:
    """Tests for validate_id and validate_id_array."""

    @pytest.mark.parametrize("value", ["abc", 0, -5, 2**70])
    def test_accepted_ids(self, value):
        validate_id(value)

    @pytest.mark.parametrize("value", [None, True, 1.5, b"1", [1]])
    def test_rejected_ids(self, value):
        with pytest.raises(InvalidArgumentError) as exc_info:
            validate_id(value)
        assert exc_info.value.name == "id"

    def test_invalid_argument_is_type_error(self):
        """Local contract violations are TypeErrors."""
        with pytest.raises(TypeError):
            validate_id(None)

    def test_non_string_name_rejected(self):
        with pytest.raises(InvalidArgumentError, match="name must be a string"):
            validate_id(1, name=3)

    def test_array_reports_bad_index(self):
        """The offending element is named with its index."""
        with pytest.raises(InvalidArgumentError) as exc_info:
            validate_id_array([1, "b", None])
        assert exc_info.value.name == "ids[2]"

    def test_array_must_be_a_list(self):
        with pytest.raises(InvalidArgumentError, match="must be a list of IDs"):
            validate_id_array("1,2")

    def test_empty_array(self):
        """Empty arrays are allowed unless disallowed explicitly."""
        validate_id_array([])
        with pytest.raises(InvalidArgumentError, match="cannot be empty"):
            validate_id_array([], allow_empty=False)


class TestValidateValue:
    """Tests for validate_value."""

    def test_none_and_nullable(self):
        validate_value("x", None, TypeTag.STRING, nullable=True)
        with pytest.raises(InvalidArgumentError, match="cannot be None"):
            validate_value("x", None, TypeTag.STRING)

    def test_message_lists_alternatives(self):
        """Multiple tags are joined in the error message."""
        with pytest.raises(InvalidArgumentError) as exc_info:
            validate_value("id", 1.5, ID_TYPES)
        assert "a string, a 64-bit integer or an integer" in str(exc_info.value)

    def test_model_class_accepts_mapping(self):
        """A pydantic model class accepts instances and plain mappings."""
        validate_value("entity", Country(code="IT"), Country)
        validate_value("entity", {"code": "IT"}, Country)
        with pytest.raises(InvalidArgumentError, match="must be of type Country"):
            validate_value("entity", "IT", Country)

    def test_plain_class(self):
        validate_value("value", 3, int)
        with pytest.raises(InvalidArgumentError):
            validate_value("value", "3", int)


class TestValidateKeys:
    """Tests for validate_keys."""

    def test_empty_keys_rejected(self):
        with pytest.raises(InvalidArgumentError, match="At least one key part"):
            validate_keys([])

    def test_each_part_checked(self):
        validate_keys([("dict_id", 7, ID_TYPES), ("code", "RED", TypeTag.STRING)])
        with pytest.raises(InvalidArgumentError) as exc_info:
            validate_keys([("dict_id", 7, ID_TYPES), ("code", 12, TypeTag.STRING)])
        assert exc_info.value.name == "code"


class TestValidateCriteria:
    """Tests for validate_criteria."""

    specs = (
        FieldSpec("name", TypeTag.STRING),
        FieldSpec("level", TypeTag.INTEGER),
        FieldSpec("color", TypeTag.ENUM, enum=Color),
    )

    def test_none_and_empty_accepted(self):
        validate_criteria(None, self.specs)
        validate_criteria({}, self.specs)

    def test_must_be_mapping(self):
        with pytest.raises(InvalidArgumentError, match="must be a mapping"):
            validate_criteria([("name", "x")], self.specs)

    def test_unsupported_field(self):
        with pytest.raises(InvalidArgumentError, match='Unsupported field: "criteria.size"'):
            validate_criteria({"size": 3}, self.specs)

    def test_field_type(self):
        with pytest.raises(InvalidArgumentError) as exc_info:
            validate_criteria({"level": "high"}, self.specs)
        assert exc_info.value.name == "criteria.level"

    def test_none_fields_ignored(self):
        validate_criteria({"level": None, "color": "red"}, self.specs)

    def test_undeclared_schema_skips_key_check(self):
        validate_criteria({"anything": 1})


class TestQueryObjects:
    """Tests for validate_page_request and validate_sort_request."""

    def test_page_request_model_or_mapping(self):
        validate_page_request(PageRequest(page_index=0, page_size=10))
        validate_page_request({"page_size": 10})
        validate_page_request(None)

    def test_page_request_bad_shapes(self):
        with pytest.raises(InvalidArgumentError, match="PageRequest or a mapping"):
            validate_page_request(10)
        with pytest.raises(InvalidArgumentError) as exc_info:
            validate_page_request({"page_size": "10"})
        assert exc_info.value.name == "page_request.page_size"

    def test_sort_request(self):
        validate_sort_request(SortRequest(sort_field="name", sort_order=SortOrder.DESC), Country)
        validate_sort_request({"sort_field": "name", "sort_order": "asc"}, Country)

    def test_sort_order_must_be_known(self):
        with pytest.raises(InvalidArgumentError, match="must be ASC or DESC"):
            validate_sort_request({"sort_order": "up"})

    def test_sort_field_must_belong_to_model(self):
        with pytest.raises(InvalidArgumentError, match="not a field of the class Country"):
            validate_sort_request({"sort_field": "population"}, Country)
