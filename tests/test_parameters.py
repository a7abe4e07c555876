"""
Tests for request parameters, reserved-name validation and encoding.
"""

import itertools
from urllib.parse import parse_qsl

import pytest

from graph_client import InvalidParameterError, Parameter, ParameterSet
from graph_client.exceptions import ErrorKind
from graph_client.parameters import (
    BASE_RESERVED_NAMES,
    FETCH_OBJECTS_RESERVED_NAMES,
    MULTIQUERY_RESERVED_NAMES,
    QUERY_RESERVED_NAMES,
    encode_parameters,
    to_form_body,
    validate_parameters,
    verify_presence,
)

ALL_RESERVED = sorted(
    FETCH_OBJECTS_RESERVED_NAMES | QUERY_RESERVED_NAMES | MULTIQUERY_RESERVED_NAMES
)


# =============================================================================
# Parameter
# =============================================================================

@pytest.mark.unit
class TestParameter:
    """Tests for Parameter construction and value serialization."""

    def test_string_value_kept(self):
        assert Parameter.with_value("fields", "id,name").value == "id,name"

    def test_int_value(self):
        assert Parameter.with_value("limit", 25).value == "25"

    def test_bool_value_lowercase(self):
        assert Parameter.with_value("include_hidden", True).value == "true"
        assert Parameter.with_value("include_hidden", False).value == "false"

    def test_container_value_compact_json(self):
        param = Parameter.with_value("filter", {"a": [1, 2]})
        assert param.value == '{"a":[1,2]}'

    def test_constructor_serializes_like_with_value(self):
        assert Parameter("limit", 25) == Parameter.with_value("limit", 25)
        assert Parameter("limit", 25).value == "25"
        assert Parameter("include_hidden", True).value == "true"

    def test_nested_non_json_value_serialized(self):
        param = Parameter("since", {"ids": (1, 2)})
        assert param.value == '{"ids":[1,2]}'

    def test_none_value_rejected_by_constructor(self):
        with pytest.raises(InvalidParameterError):
            Parameter("limit", None)

    def test_blank_name_rejected(self):
        with pytest.raises(InvalidParameterError):
            Parameter("  ", "x")

    def test_none_value_rejected(self):
        with pytest.raises(InvalidParameterError):
            Parameter.with_value("limit", None)

    def test_parameter_is_immutable(self):
        param = Parameter("a", "b")
        with pytest.raises(AttributeError):
            param.name = "c"


@pytest.mark.unit
class TestParameterSet:
    """Tests for ParameterSet ordering and immutability."""

    def test_preserves_order(self):
        params = ParameterSet.of(Parameter("b", "1"), Parameter("a", "2"))
        assert params.names() == ("b", "a")

    def test_with_parameter_returns_new_set(self):
        original = ParameterSet.of(Parameter("a", "1"))
        extended = original.with_parameter(Parameter("b", "2"))

        assert len(original) == 1
        assert extended.names() == ("a", "b")

    def test_equality(self):
        assert ParameterSet.of(Parameter("a", "1")) == ParameterSet([Parameter("a", "1")])


# =============================================================================
# Reserved names
# =============================================================================

@pytest.mark.unit
class TestValidateParameters:
    """Tests for reserved-name collision detection."""

    @pytest.mark.parametrize("name", ALL_RESERVED)
    def test_each_reserved_name_rejected(self, name):
        reserved = FETCH_OBJECTS_RESERVED_NAMES | QUERY_RESERVED_NAMES | MULTIQUERY_RESERVED_NAMES
        with pytest.raises(InvalidParameterError) as exc_info:
            validate_parameters([Parameter(name, "x")], reserved)

        assert name in str(exc_info.value)
        assert exc_info.value.kind is ErrorKind.INVALID_PARAMETER

    @pytest.mark.parametrize("names", list(itertools.combinations(sorted(BASE_RESERVED_NAMES), 2)))
    def test_reserved_names_in_combination_rejected(self, names):
        params = [Parameter("fields", "id")] + [Parameter(n, "x") for n in names]
        with pytest.raises(InvalidParameterError):
            validate_parameters(params, BASE_RESERVED_NAMES)

    def test_unreserved_names_pass(self):
        validate_parameters(
            [Parameter("fields", "id"), Parameter("limit", "5")], BASE_RESERVED_NAMES
        )

    def test_reserved_sets_are_per_operation(self):
        # 'ids' only collides for the multi-object fetch
        validate_parameters([Parameter("ids", "1,2")], QUERY_RESERVED_NAMES)
        with pytest.raises(InvalidParameterError):
            validate_parameters([Parameter("ids", "1,2")], FETCH_OBJECTS_RESERVED_NAMES)

    def test_base_names_reserved_everywhere(self):
        for reserved in (FETCH_OBJECTS_RESERVED_NAMES, QUERY_RESERVED_NAMES, MULTIQUERY_RESERVED_NAMES):
            assert BASE_RESERVED_NAMES <= reserved


@pytest.mark.unit
class TestVerifyPresence:

    def test_none_rejected(self):
        with pytest.raises(InvalidParameterError, match="'path'"):
            verify_presence("path", None)

    def test_blank_string_rejected(self):
        with pytest.raises(InvalidParameterError, match="empty string"):
            verify_presence("path", "   ")

    def test_non_string_accepted(self):
        verify_presence("object_type", dict)


# =============================================================================
# Encoding
# =============================================================================

@pytest.mark.unit
class TestEncodeParameters:
    """Tests for query string encoding."""

    def test_access_token_appended_last(self):
        encoded = encode_parameters([Parameter("a", "1"), Parameter("b", "2")], "tok")
        assert encoded == "?a=1&b=2&access_token=tok"

    def test_only_access_token(self):
        assert encode_parameters([], "tok") == "?access_token=tok"

    def test_deterministic(self):
        params = ParameterSet.of(Parameter("q", "a b"), Parameter("x", "ü"))
        assert encode_parameters(params, "tok") == encode_parameters(params, "tok")

    def test_special_characters_escaped(self):
        encoded = encode_parameters([Parameter("q", "a b&c=d")], "tok")
        assert encoded == "?q=a%20b%26c%3Dd&access_token=tok"

    @pytest.mark.parametrize("value", [
        "hello world",
        "a&b=c",
        "SELECT uid FROM user WHERE uid = 4",
        "naïve café ☕",
        "100%+/?#",
    ])
    def test_round_trip(self, value):
        encoded = encode_parameters([Parameter("name with space", value)], "t&k")
        decoded = parse_qsl(encoded[1:], keep_blank_values=True)

        assert decoded == [("name with space", value), ("access_token", "t&k")]

    def test_form_body_has_no_question_mark(self):
        body = to_form_body([Parameter("query", "SELECT 1")], "tok")
        assert body == "query=SELECT%201&access_token=tok"
