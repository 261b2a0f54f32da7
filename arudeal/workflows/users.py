"""User role management screen"""

from typing import List, Optional

from .base import ActionResult, Screen
from ..notifications.notification_manager import NotificationManager
from ..schema.listing import Role, User
from ..services.users import DEFAULT_ROLE, UserRoleService


class UserRoleScreen(Screen):
    def __init__(self, service: UserRoleService, notifier: Optional[NotificationManager] = None):
        super().__init__(notifier)
        self.service = service
        self.users: List[User] = []
        self.roles: List[Role] = []
        self.search_email = ""

    def load(self, email: Optional[str] = None) -> ActionResult:
        if email is not None:
            self.search_email = email
        result = self.run(
            "load_users",
            lambda: self.service.list_users(self.search_email or None),
            error_message="Failed to load users",
        )
        if result.success:
            self.users = result.data
        return result

    def load_roles(self) -> ActionResult:
        result = self.run("load_roles", self.service.list_roles, error_message="Failed to load roles")
        if result.success:
            self.roles = result.data
        return result

    def assign_role(self, user_id: str, role_id: str) -> ActionResult:
        if not user_id or not role_id:
            return self.reject("assign_role", "Select a user and a role")

        result = self.run(
            "assign_role",
            lambda: self.service.assign_role(user_id, role_id),
            success_message=lambda _: "Role updated successfully",
            error_message="Failed to Update Role",
        )
        if result.success:
            self.load()
        return result

    def remove_role(self, user_id: str) -> ActionResult:
        """Put the user back on the plain "user" role."""
        if not self.roles:
            self.load_roles()

        default = next((r for r in self.roles if r.name.lower() == DEFAULT_ROLE), None)
        if default is None:
            return self.reject("remove_role", "User role not found")
        return self.assign_role(user_id, default.id)
