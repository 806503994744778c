"""
Townhall Backend — User Service Unit Tests
============================================

What:  UserService business rules against mocked repositories.

What we test:
    ✅ Create stores the payload fields and returns the assigned id
    ✅ Email / mobile uniqueness → ConflictError
    ✅ Update overwrites exactly name, mobile number and email
    ✅ Missing ids → NotFoundError, never a silent success
    ✅ Delete removes dependents before the user
"""

from unittest.mock import call

import pytest

from townhall.exceptions import ConflictError, NotFoundError
from townhall.models.user import User
from townhall.schemas.user import UserCreate, UserUpdate
from townhall.services.user_service import UserService


def make_user(user_id=1, name="Ana", mobile_no="555", email="a@x.com"):
    return User(id=user_id, name=name, mobile_no=mobile_no, email=email)


class TestUserServiceCreate:
    @pytest.fixture(autouse=True)
    def setup(self, repos):
        self.repos = repos
        self.service = UserService(
            users=repos.users,
            discussions=repos.discussions,
            comments=repos.comments,
            likes=repos.likes,
            hashtags=repos.hashtags,
        )
        repos.users.find_by_email.return_value = None
        repos.users.find_by_mobile_no.return_value = None

    @pytest.mark.asyncio
    async def test_create_user_returns_stored_fields(self):
        """The response matches the payload on every field except the new id."""

        async def assign_id(record):
            record.id = 7
            return record

        self.repos.users.create.side_effect = assign_id

        result = await self.service.create_user(
            UserCreate(name="Ana", mobile_no="555", email="Ana@X.com")
        )

        assert result.id == 7
        assert result.name == "Ana"
        assert result.mobile_no == "555"
        assert result.email == "Ana@X.com"
        self.repos.users.create.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_create_user_duplicate_email(self):
        self.repos.users.find_by_email.return_value = make_user(user_id=3)

        with pytest.raises(ConflictError) as exc_info:
            await self.service.create_user(
                UserCreate(name="Bo", mobile_no="777", email="a@x.com")
            )

        assert exc_info.value.context["field"] == "email"
        self.repos.users.create.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_create_user_duplicate_mobile(self):
        self.repos.users.find_by_mobile_no.return_value = make_user(user_id=3)

        with pytest.raises(ConflictError) as exc_info:
            await self.service.create_user(
                UserCreate(name="Bo", mobile_no="555", email="bo@x.com")
            )

        assert exc_info.value.context["field"] == "mobileNo"


class TestUserServiceReadUpdate:
    @pytest.fixture(autouse=True)
    def setup(self, repos):
        self.repos = repos
        self.service = UserService(
            users=repos.users,
            discussions=repos.discussions,
            comments=repos.comments,
            likes=repos.likes,
            hashtags=repos.hashtags,
        )
        repos.users.find_by_email.return_value = None
        repos.users.find_by_mobile_no.return_value = None

    @pytest.mark.asyncio
    async def test_get_user_not_found(self):
        self.repos.users.find_by_id.return_value = None

        with pytest.raises(NotFoundError) as exc_info:
            await self.service.get_user(42)

        assert exc_info.value.context == {"resource": "user", "resource_id": 42}

    @pytest.mark.asyncio
    async def test_update_overwrites_only_mutable_fields(self):
        """update() receives exactly name, mobile_no and email."""
        self.repos.users.find_by_id.return_value = make_user()
        self.repos.users.update.return_value = make_user(
            name="Ana Maria", mobile_no="556", email="am@x.com"
        )

        result = await self.service.update_user(
            1, UserUpdate(name="Ana Maria", mobile_no="556", email="am@x.com")
        )

        self.repos.users.update.assert_awaited_once_with(
            1, {"name": "Ana Maria", "mobile_no": "556", "email": "am@x.com"}
        )
        assert result.id == 1
        assert result.name == "Ana Maria"

    @pytest.mark.asyncio
    async def test_update_may_keep_own_email(self):
        """A user's own email is not a conflict."""
        own = make_user()
        self.repos.users.find_by_id.return_value = own
        self.repos.users.find_by_email.return_value = own
        self.repos.users.find_by_mobile_no.return_value = own
        self.repos.users.update.return_value = make_user(name="Ana B")

        result = await self.service.update_user(
            1, UserUpdate(name="Ana B", mobile_no="555", email="a@x.com")
        )

        assert result.name == "Ana B"

    @pytest.mark.asyncio
    async def test_update_missing_user(self):
        self.repos.users.find_by_id.return_value = None

        with pytest.raises(NotFoundError):
            await self.service.update_user(
                9, UserUpdate(name="X", mobile_no="123", email="x@x.com")
            )

        self.repos.users.update.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_search_returns_matches_and_total(self):
        self.repos.users.find_by_name_containing.return_value = [make_user()]
        self.repos.users.count_by_name_containing.return_value = 1

        users, total = await self.service.search_users("an", limit=10)

        assert [u.id for u in users] == [1]
        assert total == 1
        self.repos.users.find_by_name_containing.assert_awaited_once_with(
            "an", limit=10, offset=0
        )


class TestUserServiceDelete:
    @pytest.fixture(autouse=True)
    def setup(self, repos):
        self.repos = repos
        self.service = UserService(
            users=repos.users,
            discussions=repos.discussions,
            comments=repos.comments,
            likes=repos.likes,
            hashtags=repos.hashtags,
        )

    @pytest.mark.asyncio
    async def test_delete_missing_user_raises(self):
        """Deleting a non-existent id is NotFound and touches nothing."""
        self.repos.users.find_by_id.return_value = None

        with pytest.raises(NotFoundError):
            await self.service.delete_user(99)

        self.repos.users.delete.assert_not_awaited()
        self.repos.discussions.delete_by_user.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_delete_cascades_to_owned_records(self):
        self.repos.users.find_by_id.return_value = make_user()
        self.repos.discussions.find_ids_by_user.return_value = [10, 11]
        self.repos.likes.delete_for.return_value = 3
        self.repos.comments.delete_for.return_value = 2
        self.repos.users.delete.return_value = True

        await self.service.delete_user(1)

        self.repos.likes.delete_for.assert_awaited_once_with([10, 11], user_id=1)
        self.repos.comments.delete_for.assert_awaited_once_with([10, 11], user_id=1)
        self.repos.hashtags.unlink_discussions.assert_awaited_once_with([10, 11])
        self.repos.discussions.delete_by_user.assert_awaited_once_with(1)
        self.repos.users.delete.assert_awaited_once_with(1)
