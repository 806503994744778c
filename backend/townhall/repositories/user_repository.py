"""
Townhall Backend — User Repository
====================================

What:  Data access for the `users` table.
Who:   UserService.

Name search and email lookup ignore case; mobile numbers match exactly.
"""

from typing import List, Optional

from sqlalchemy import func, select

from townhall.models.user import User
from townhall.repositories.base import Repository, contains_pattern


class UserRepository(Repository[User]):
    """Users, with name search and unique-field lookups."""

    model = User
    resource = "user"

    def _name_query(self, substring: str):
        return (
            select(User)
            .where(User.name.ilike(contains_pattern(substring), escape="\\"))
            .order_by(User.id)
        )

    async def find_by_name_containing(
        self, substring: str, limit: Optional[int] = None, offset: int = 0
    ) -> List[User]:
        """Users whose name contains ``substring``, ignoring case."""
        stmt = self._paginate(self._name_query(substring), limit, offset)
        return await self._scalars(stmt)

    async def count_by_name_containing(self, substring: str) -> int:
        return await self._count(self._name_query(substring))

    async def find_by_email(self, email: str) -> Optional[User]:
        """Case-insensitive: 'Ana@X.com' finds the user stored as 'ana@x.com'."""
        result = await self._execute(
            select(User).where(func.lower(User.email) == email.lower()), "find_by_email"
        )
        return result.scalar_one_or_none()

    async def find_by_mobile_no(self, mobile_no: str) -> Optional[User]:
        result = await self._execute(
            select(User).where(User.mobile_no == mobile_no), "find_by_mobile_no"
        )
        return result.scalar_one_or_none()
