"""Groups and group memberships endpoints."""
from typing import Optional

from helpdesk_client.api.pagination import Page, PageOptions
from helpdesk_client.api.request_builder import MembershipScope
from helpdesk_client.schema.models import Group, GroupMembership

from .base import Operation, ResourceClient


class GroupsResource(ResourceClient):
    """
    Groups plus the group membership collections nested under groups and users.

    Memberships are reachable through four scopes (global, by group, by user,
    by id) which all return the same GroupMembership shape.
    """

    PATH = "groups"

    # -- operation factories --------------------------------------------------

    def _op_get_groups(self, paging: Optional[PageOptions] = None) -> Operation:
        return self._list(self.PATH, "groups", Group, paging)

    def _op_get_assignable_groups(self, paging: Optional[PageOptions] = None) -> Operation:
        return self._list(f"{self.PATH}/assignable", "groups", Group, paging)

    def _op_get_group_by_id(self, group_id: int) -> Operation:
        return self._show(f"{self.PATH}/{group_id}", "group", Group)

    def _op_create_group(self, name: str) -> Operation:
        return self._create(self.PATH, "group", Group(name=name))

    def _op_update_group(self, group: Group) -> Operation:
        return self._update(self.PATH, "group", group)

    def _op_delete_group(self, group_id: int) -> Operation:
        return self._destroy(f"{self.PATH}/{group_id}")

    def _op_list_memberships(self, scope: MembershipScope, paging: Optional[PageOptions] = None) -> Operation:
        return self._list(scope.path(), "group_memberships", GroupMembership, paging)

    def _op_show_membership(self, scope: MembershipScope) -> Operation:
        return self._show(scope.path(), "group_membership", GroupMembership)

    def _op_create_group_membership(self, membership: GroupMembership) -> Operation:
        if membership.user_id is None or membership.group_id is None:
            raise ValueError("A group membership needs both user_id and group_id")
        return self._create(MembershipScope().path(), "group_membership", membership)

    def _op_set_group_membership_as_default(self, user_id: int, membership_id: int) -> Operation:
        scope = MembershipScope(user_id=user_id, membership_id=membership_id)
        return Operation(
            self.builder.put(f"{scope.path()}/make_default", envelope="group_memberships"),
            lambda body: Page.from_response(body, "group_memberships", GroupMembership.from_dict),
        )

    def _op_delete_group_membership(self, membership_id: int) -> Operation:
        return self._destroy(MembershipScope(membership_id=membership_id).path())

    def _op_delete_user_group_membership(self, user_id: int, membership_id: int) -> Operation:
        return self._destroy(MembershipScope(user_id=user_id, membership_id=membership_id).path())

    # -- groups ---------------------------------------------------------------

    def get_groups(self, paging: Optional[PageOptions] = None) -> Page[Group]:
        return self._run(self._op_get_groups(paging))

    async def get_groups_async(self, paging: Optional[PageOptions] = None) -> Page[Group]:
        return await self._run_async(self._op_get_groups(paging))

    def get_assignable_groups(self, paging: Optional[PageOptions] = None) -> Page[Group]:
        """Groups the authenticated identity may assign tickets to."""
        return self._run(self._op_get_assignable_groups(paging))

    async def get_assignable_groups_async(self, paging: Optional[PageOptions] = None) -> Page[Group]:
        return await self._run_async(self._op_get_assignable_groups(paging))

    def get_group_by_id(self, group_id: int) -> Group:
        return self._run(self._op_get_group_by_id(group_id))

    async def get_group_by_id_async(self, group_id: int) -> Group:
        return await self._run_async(self._op_get_group_by_id(group_id))

    def create_group(self, name: str) -> Group:
        return self._run(self._op_create_group(name))

    async def create_group_async(self, name: str) -> Group:
        return await self._run_async(self._op_create_group(name))

    def update_group(self, group: Group) -> Group:
        return self._run(self._op_update_group(group))

    async def update_group_async(self, group: Group) -> Group:
        return await self._run_async(self._op_update_group(group))

    def delete_group(self, group_id: int) -> bool:
        return self._run(self._op_delete_group(group_id))

    async def delete_group_async(self, group_id: int) -> bool:
        return await self._run_async(self._op_delete_group(group_id))

    # -- memberships ----------------------------------------------------------

    def get_group_memberships(self, paging: Optional[PageOptions] = None) -> Page[GroupMembership]:
        return self._run(self._op_list_memberships(MembershipScope(), paging))

    async def get_group_memberships_async(self, paging: Optional[PageOptions] = None) -> Page[GroupMembership]:
        return await self._run_async(self._op_list_memberships(MembershipScope(), paging))

    def get_group_memberships_by_user(self, user_id: int, paging: Optional[PageOptions] = None) -> Page[GroupMembership]:
        return self._run(self._op_list_memberships(MembershipScope(user_id=user_id), paging))

    async def get_group_memberships_by_user_async(
        self, user_id: int, paging: Optional[PageOptions] = None
    ) -> Page[GroupMembership]:
        return await self._run_async(self._op_list_memberships(MembershipScope(user_id=user_id), paging))

    def get_group_memberships_by_group(self, group_id: int, paging: Optional[PageOptions] = None) -> Page[GroupMembership]:
        return self._run(self._op_list_memberships(MembershipScope(group_id=group_id), paging))

    async def get_group_memberships_by_group_async(
        self, group_id: int, paging: Optional[PageOptions] = None
    ) -> Page[GroupMembership]:
        return await self._run_async(self._op_list_memberships(MembershipScope(group_id=group_id), paging))

    def get_assignable_group_memberships(self, paging: Optional[PageOptions] = None) -> Page[GroupMembership]:
        return self._run(self._op_list_memberships(MembershipScope(assignable=True), paging))

    async def get_assignable_group_memberships_async(
        self, paging: Optional[PageOptions] = None
    ) -> Page[GroupMembership]:
        return await self._run_async(self._op_list_memberships(MembershipScope(assignable=True), paging))

    def get_assignable_group_memberships_by_group(
        self, group_id: int, paging: Optional[PageOptions] = None
    ) -> Page[GroupMembership]:
        scope = MembershipScope(group_id=group_id, assignable=True)
        return self._run(self._op_list_memberships(scope, paging))

    async def get_assignable_group_memberships_by_group_async(
        self, group_id: int, paging: Optional[PageOptions] = None
    ) -> Page[GroupMembership]:
        scope = MembershipScope(group_id=group_id, assignable=True)
        return await self._run_async(self._op_list_memberships(scope, paging))

    def get_group_memberships_by_membership_id(self, membership_id: int) -> GroupMembership:
        return self._run(self._op_show_membership(MembershipScope(membership_id=membership_id)))

    async def get_group_memberships_by_membership_id_async(self, membership_id: int) -> GroupMembership:
        return await self._run_async(self._op_show_membership(MembershipScope(membership_id=membership_id)))

    def get_group_memberships_by_user_and_membership_id(self, user_id: int, membership_id: int) -> GroupMembership:
        scope = MembershipScope(user_id=user_id, membership_id=membership_id)
        return self._run(self._op_show_membership(scope))

    async def get_group_memberships_by_user_and_membership_id_async(
        self, user_id: int, membership_id: int
    ) -> GroupMembership:
        scope = MembershipScope(user_id=user_id, membership_id=membership_id)
        return await self._run_async(self._op_show_membership(scope))

    def create_group_membership(self, membership: GroupMembership) -> GroupMembership:
        return self._run(self._op_create_group_membership(membership))

    async def create_group_membership_async(self, membership: GroupMembership) -> GroupMembership:
        return await self._run_async(self._op_create_group_membership(membership))

    def set_group_membership_as_default(self, user_id: int, membership_id: int) -> Page[GroupMembership]:
        """
        Make one membership the user's default group.

        The service clears the flag on the user's other memberships; the
        returned page is the user's membership list after the change.
        """
        return self._run(self._op_set_group_membership_as_default(user_id, membership_id))

    async def set_group_membership_as_default_async(self, user_id: int, membership_id: int) -> Page[GroupMembership]:
        return await self._run_async(self._op_set_group_membership_as_default(user_id, membership_id))

    def delete_group_membership(self, membership_id: int) -> bool:
        return self._run(self._op_delete_group_membership(membership_id))

    async def delete_group_membership_async(self, membership_id: int) -> bool:
        return await self._run_async(self._op_delete_group_membership(membership_id))

    def delete_user_group_membership(self, user_id: int, membership_id: int) -> bool:
        return self._run(self._op_delete_user_group_membership(user_id, membership_id))

    async def delete_user_group_membership_async(self, user_id: int, membership_id: int) -> bool:
        return await self._run_async(self._op_delete_user_group_membership(user_id, membership_id))
