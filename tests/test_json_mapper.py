"""
Tests for DefaultJsonMapper.
"""

from dataclasses import dataclass, field
from typing import Annotated, Any, Dict, List, Optional

import pytest
from pydantic import BaseModel, Field

from graph_client import DefaultJsonMapper, JsonMapper, MappingError


@dataclass
class Location:
    city: str
    country: Optional[str] = None


@dataclass
class User:
    id: str
    name: str
    first_name: Optional[str] = None
    location: Optional[Location] = None
    languages: List[str] = field(default_factory=list)
    link: Annotated[Optional[str], Field(alias="profile_url")] = None


@dataclass
class MultiqueryResults:
    users: List[Dict[str, Any]]
    pages: List[Dict[str, Any]] = field(default_factory=list)


class Page(BaseModel):
    id: str
    likes: int = 0


class Opaque:
    def __init__(self, raw):
        self.raw = raw


class Checkin:
    def __init__(self, checkin_id: str):
        self.checkin_id = checkin_id

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Checkin":
        return cls(data["id"])


@pytest.fixture
def mapper():
    return DefaultJsonMapper()


@pytest.mark.unit
class TestDecodeOne:
    """Tests for DefaultJsonMapper.decode_one."""

    def test_satisfies_protocol(self, mapper):
        assert isinstance(mapper, JsonMapper)

    def test_dict_passthrough(self, mapper):
        assert mapper.decode_one('{"id": "4"}', dict) == {"id": "4"}

    def test_any_passthrough(self, mapper):
        assert mapper.decode_one("[1, 2]", Any) == [1, 2]

    def test_dataclass(self, mapper):
        user = mapper.decode_one('{"id": "4", "name": "Mark", "extra": true}', User)
        assert user == User(id="4", name="Mark")

    def test_nested_dataclass_and_list(self, mapper):
        text = (
            '{"id": "4", "name": "Mark", "location": {"city": "Palo Alto"},'
            ' "languages": ["en", "fr"], "profile_url": "https://x"}'
        )
        user = mapper.decode_one(text, User)

        assert user.location == Location(city="Palo Alto")
        assert user.languages == ["en", "fr"]
        assert user.link == "https://x"

    def test_optional_null(self, mapper):
        user = mapper.decode_one('{"id": "4", "name": "Mark", "first_name": null}', User)
        assert user.first_name is None

    def test_pydantic_model(self, mapper):
        page = mapper.decode_one('{"id": "cocacola", "likes": "42", "other": 1}', Page)
        assert page == Page(id="cocacola", likes=42)

    def test_missing_required_field(self, mapper):
        with pytest.raises(MappingError, match="name"):
            mapper.decode_one('{"id": "4"}', User)

    def test_wrong_scalar_type(self, mapper):
        with pytest.raises(MappingError):
            mapper.decode_one('{"id": "4", "name": ["Mark"]}', User)

    def test_from_dict_class(self, mapper):
        checkin = mapper.decode_one('{"id": "99"}', Checkin)
        assert checkin.checkin_id == "99"

    def test_multiquery_shape(self, mapper):
        results = mapper.decode_one('{"users": [{"uid": 1}]}', MultiqueryResults)
        assert results.users == [{"uid": 1}]
        assert results.pages == []

    @pytest.mark.parametrize("text,target,expected", [
        ('"abc"', str, "abc"),
        ("5", int, 5),
        ('"5"', int, 5),
        ("1.5", float, 1.5),
        ("true", bool, True),
    ])
    def test_scalars(self, mapper, text, target, expected):
        assert mapper.decode_one(text, target) == expected

    def test_non_numeric_string_to_int(self, mapper):
        with pytest.raises(MappingError):
            mapper.decode_one('"five"', int)

    def test_unsupported_target_type(self, mapper):
        with pytest.raises(MappingError, match="Opaque"):
            mapper.decode_one('{"id": "1"}', Opaque)

    def test_from_dict_missing_key(self, mapper):
        with pytest.raises(MappingError, match="from_dict"):
            mapper.decode_one('{"name": "x"}', Checkin)

    def test_invalid_json(self, mapper):
        with pytest.raises(MappingError):
            mapper.decode_one("{", dict)


@pytest.mark.unit
class TestDecodeMany:

    def test_list_of_dataclasses(self, mapper):
        users = mapper.decode_many('[{"id": "1", "name": "A"}, {"id": "2", "name": "B"}]', User)
        assert [u.id for u in users] == ["1", "2"]

    def test_requires_array(self, mapper):
        with pytest.raises(MappingError):
            mapper.decode_many('{"id": "1"}', dict)

    def test_one_bad_element_fails_all(self, mapper):
        with pytest.raises(MappingError):
            mapper.decode_many('[{"id": "1", "name": "A"}, {"id": "2"}]', User)

    def test_from_dict_items(self, mapper):
        checkins = mapper.decode_many('[{"id": "1"}, {"id": "2"}]', Checkin)
        assert [c.checkin_id for c in checkins] == ["1", "2"]

    def test_object_target_passthrough(self, mapper):
        assert mapper.decode_many('[{"a": 1}, 2]', object) == [{"a": 1}, 2]
