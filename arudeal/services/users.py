"""
User Role Service
=================
Talks to the separate user service (USER_API_URL, v1/user-roles/*).
"""

from typing import Any, List, Optional

from ..api.client import ApiClient
from ..api.errors import ArudealError
from ..schema.forms import AssignRolePayload
from ..schema.listing import Role, User
from ..utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_ROLE = "user"


class RoleNotFoundError(ArudealError):
    """No role with the requested name exists"""


class UserRoleService:
    def __init__(self, client: ApiClient):
        self.client = client

    def list_users(self, email: Optional[str] = None) -> List[User]:
        data = self.client.get(
            "v1/user-roles/list_users",
            params={"email": email or None},
            error_message="Failed to load users",
        )
        return [User.from_api(u) for u in data or []]

    def list_roles(self) -> List[Role]:
        data = self.client.get("v1/user-roles/list_role", error_message="Failed to load roles")
        return [Role(id=str(r.get("id")), name=r.get("name") or "") for r in data or []]

    def assign_role(self, user_id: str, role_id: str) -> Any:
        payload = AssignRolePayload(user_id=user_id, role_id=role_id)
        logger.info("Assigning role %s to user %s", role_id, user_id)
        return self.client.post(
            "v1/user-roles/assign_role",
            json=payload.model_dump(),
            error_message="Failed to assign role",
        )

    def remove_role(self, user_id: str) -> Any:
        """
        Drop a user back to the default role.

        The backend's remove endpoint leaves users role-less, so removal is
        an assignment of the role named "user".

        Raises:
            RoleNotFoundError: no "user" role exists
        """
        default = self.find_role(DEFAULT_ROLE)
        if default is None:
            raise RoleNotFoundError("User role not found")
        return self.assign_role(user_id, default.id)

    def find_role(self, name: str) -> Optional[Role]:
        for role in self.list_roles():
            if role.name.lower() == name.lower():
                return role
        return None
