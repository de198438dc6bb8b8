import uuid

import pytest

from orm_validators.exceptions.base import InvalidArgumentError
from orm_validators.metadata.object_manager import ClassMetadata, ObjectManager, SQLAlchemyObjectManager
from orm_validators.repositories.base_repository import BaseRepository
from ..test_fixtures.models import Membership, Tag, User


class TestClassMetadata:

    def test_single_identifier(self):
        metadata = SQLAlchemyObjectManager().get_class_metadata(User)

        assert metadata.name == "User"
        assert metadata.get_identifier_field_names() == ["id"]
        assert metadata.is_identifier("id")
        assert not metadata.is_identifier("username")

    def test_composite_identifier_uses_attribute_keys_in_order(self):
        metadata = SQLAlchemyObjectManager().get_class_metadata(Membership)

        # the member_id attribute is stored in a column named "member"
        assert metadata.get_identifier_field_names() == ["team_id", "member_id"]

    def test_identifier_values(self):
        metadata = ClassMetadata(Membership)

        assert metadata.get_identifier_values(Membership(team_id=1, member_id=10, nickname="ace")) == {
            "team_id": 1,
            "member_id": 10,
        }

    def test_identifier_values_skip_unset_identifiers(self):
        metadata = ClassMetadata(User)

        assert metadata.get_identifier_values(User(username="alice", email="a@example.com")) == {}

    def test_identifier_values_reject_other_classes(self):
        metadata = ClassMetadata(User)

        with pytest.raises(InvalidArgumentError):
            metadata.get_identifier_values(Tag(id=1, slug="x"))

    def test_returned_names_are_a_copy(self):
        metadata = ClassMetadata(User)
        metadata.get_identifier_field_names().append("oops")

        assert metadata.get_identifier_field_names() == ["id"]


class TestSQLAlchemyObjectManager:

    def test_satisfies_object_manager_protocol(self):
        assert isinstance(SQLAlchemyObjectManager(), ObjectManager)

    def test_metadata_is_cached_per_model(self):
        manager = SQLAlchemyObjectManager()

        assert manager.get_class_metadata(User) is manager.get_class_metadata(User)
        assert manager.get_class_metadata(User) is not manager.get_class_metadata(Tag)

    def test_unmapped_class_raises(self):
        class Plain:
            pass

        with pytest.raises(InvalidArgumentError) as exc_info:
            SQLAlchemyObjectManager().get_class_metadata(Plain)

        assert "is not a mapped class" in str(exc_info.value)

    def test_instance_instead_of_class_raises(self):
        with pytest.raises(InvalidArgumentError):
            SQLAlchemyObjectManager().get_class_metadata("User")

    def test_get_repository_requires_session(self):
        with pytest.raises(InvalidArgumentError):
            SQLAlchemyObjectManager().get_repository(User)

    async def test_get_repository(self, object_manager, created_user):
        repository = object_manager.get_repository(User)

        assert isinstance(repository, BaseRepository)
        assert repository.model is User
        got = await repository.find_one_by({"id": created_user.id})
        assert got.username == created_user.username

    async def test_identifier_values_of_persisted_row(self, object_manager, created_user):
        values = object_manager.get_class_metadata(User).get_identifier_values(created_user)

        assert isinstance(values["id"], uuid.UUID)
        assert values == {"id": created_user.id}
