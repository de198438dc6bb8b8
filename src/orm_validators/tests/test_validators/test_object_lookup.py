from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest

from orm_validators.exceptions.base import InvalidArgumentError, ValidationRuntimeError
from orm_validators.validators.object_lookup import ObjectLookup
from ..test_fixtures.models import User


@pytest.fixture
def fake_repository():
    return SimpleNamespace(model=User, find_one_by=AsyncMock(return_value=None))


class TestObjectLookupConfiguration:

    def test_missing_repository(self):
        with pytest.raises(InvalidArgumentError) as exc_info:
            ObjectLookup(fields="username")

        assert "nothing given" in str(exc_info.value)

    def test_repository_without_find_one_by(self):
        with pytest.raises(InvalidArgumentError) as exc_info:
            ObjectLookup(SimpleNamespace(model=User), "username")

        assert "types.SimpleNamespace given" in str(exc_info.value)

    def test_missing_fields(self, fake_repository):
        with pytest.raises(InvalidArgumentError) as exc_info:
            ObjectLookup(fake_repository)

        assert 'Key "fields" must be provided' in str(exc_info.value)

    def test_none_fields(self, fake_repository):
        with pytest.raises(InvalidArgumentError):
            ObjectLookup(fake_repository, None)

    def test_empty_fields(self, fake_repository):
        with pytest.raises(InvalidArgumentError) as exc_info:
            ObjectLookup(fake_repository, [])

        assert "empty" in str(exc_info.value)

    def test_non_string_field(self, fake_repository):
        with pytest.raises(InvalidArgumentError) as exc_info:
            ObjectLookup(fake_repository, ["username", 3])

        assert "Provided fields must be strings, int provided" in str(exc_info.value)

    def test_single_field_is_wrapped(self, fake_repository):
        assert ObjectLookup(fake_repository, "username").fields == ["username"]

    def test_tuple_of_fields(self, fake_repository):
        assert ObjectLookup(fake_repository, ("username", "email")).fields == ["username", "email"]


class TestCleanSearchValue:

    def test_scalar_value(self, fake_repository):
        lookup = ObjectLookup(fake_repository, "username")

        assert lookup.clean_search_value("alice") == {"username": "alice"}

    def test_positional_values(self, fake_repository):
        lookup = ObjectLookup(fake_repository, ["username", "email"])

        assert lookup.clean_search_value(["alice", "a@example.com"]) == {
            "username": "alice",
            "email": "a@example.com",
        }

    def test_mapping_picks_configured_fields_only(self, fake_repository):
        lookup = ObjectLookup(fake_repository, ["email"])

        assert lookup.clean_search_value({"email": "a@example.com", "username": "alice"}) == {
            "email": "a@example.com",
        }

    def test_mapping_missing_field(self, fake_repository):
        lookup = ObjectLookup(fake_repository, ["username", "email"])

        with pytest.raises(ValidationRuntimeError) as exc_info:
            lookup.clean_search_value({"username": "alice"})

        assert 'Field "email" was not provided' in str(exc_info.value)
        assert exc_info.value.fields == ["email"]

    def test_wrong_value_count(self, fake_repository):
        lookup = ObjectLookup(fake_repository, ["username", "email"])

        with pytest.raises(ValidationRuntimeError) as exc_info:
            lookup.clean_search_value("alice")

        assert "Provided values count is 1, while expected number of fields to be matched is 2" in str(exc_info.value)

    def test_none_is_a_value(self, fake_repository):
        lookup = ObjectLookup(fake_repository, "display_name")

        assert lookup.clean_search_value(None) == {"display_name": None}


@pytest.mark.asyncio
class TestFindMatch:

    async def test_delegates_to_repository(self, fake_repository):
        lookup = ObjectLookup(fake_repository, "username")

        assert await lookup.find_match({"username": "alice"}) is None
        fake_repository.find_one_by.assert_awaited_once_with({"username": "alice"})

    async def test_returns_persisted_object(self, user_repository, created_user):
        lookup = ObjectLookup(user_repository, "email")

        match = await lookup.find_match(lookup.clean_search_value(created_user.email))

        assert match is not None
        assert match.id == created_user.id
