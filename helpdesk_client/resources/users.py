"""Users endpoints."""
from typing import Optional

from helpdesk_client.api.pagination import Page, PageOptions
from helpdesk_client.schema.models import User

from .base import Operation, ResourceClient


class UsersResource(ResourceClient):
    """CRUD over /users, plus the authenticated user."""

    PATH = "users"

    def _op_get_all_users(self, paging: Optional[PageOptions] = None) -> Operation:
        return self._list(self.PATH, "users", User, paging)

    def _op_get_user(self, user_id) -> Operation:
        return self._show(f"{self.PATH}/{user_id}", "user", User)

    def _op_create_user(self, user: User) -> Operation:
        return self._create(self.PATH, "user", user)

    def _op_update_user(self, user: User) -> Operation:
        return self._update(self.PATH, "user", user)

    def _op_delete_user(self, user_id: int) -> Operation:
        return self._destroy(f"{self.PATH}/{user_id}")

    def get_all_users(self, paging: Optional[PageOptions] = None) -> Page[User]:
        return self._run(self._op_get_all_users(paging))

    async def get_all_users_async(self, paging: Optional[PageOptions] = None) -> Page[User]:
        return await self._run_async(self._op_get_all_users(paging))

    def get_user(self, user_id: int) -> User:
        return self._run(self._op_get_user(user_id))

    async def get_user_async(self, user_id: int) -> User:
        return await self._run_async(self._op_get_user(user_id))

    def get_current_user(self) -> User:
        """The user the credentials belong to."""
        return self._run(self._op_get_user("me"))

    async def get_current_user_async(self) -> User:
        return await self._run_async(self._op_get_user("me"))

    def create_user(self, user: User) -> User:
        return self._run(self._op_create_user(user))

    async def create_user_async(self, user: User) -> User:
        return await self._run_async(self._op_create_user(user))

    def update_user(self, user: User) -> User:
        return self._run(self._op_update_user(user))

    async def update_user_async(self, user: User) -> User:
        return await self._run_async(self._op_update_user(user))

    def delete_user(self, user_id: int) -> bool:
        return self._run(self._op_delete_user(user_id))

    async def delete_user_async(self, user_id: int) -> bool:
        return await self._run_async(self._op_delete_user(user_id))
