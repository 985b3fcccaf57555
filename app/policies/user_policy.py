#app/policies/user_policy.py
from __future__ import annotations

from typing import Any, List, Optional, Protocol

from app.policies.rbac import Viewer, done_by_owner_or_admin, is_admin
from app.schemas.projects import UserRecord

PermittedKeys = List[Any]


class NestedPolicy(Protocol):
    """
    Anything that can compute permitted attributes for an embedded record.
    ProjectPolicy receives one of these for the owner's user record.
    """

    def permitted_attributes(self, viewer: Optional[Viewer], record: Any) -> PermittedKeys:
        ...


# ---- user sub-resource groups ----
LINKS_ATTRIBUTES = {"links_attributes": ["id", "_destroy", "link"]}
BANK_ACCOUNT_ATTRIBUTES = {
    "bank_account_attributes": [
        "id",
        "bank_id",
        "input_bank_number",
        "agency",
        "agency_digit",
        "account",
        "account_digit",
        "account_type",
        "owner_name",
        "owner_document",
    ]
}

# fields only an admin may submit on a user
ADMIN_ONLY_USER_KEYS = frozenset(
    {
        "admin",
        "banned_at",
        "whitelisted_at",
        "zero_credits",
        "created_at",
        "updated_at",
    }
)


class UserPolicy:
    def permitted_attributes(self, viewer: Optional[Viewer], record: UserRecord) -> PermittedKeys:
        """
        Admins and the user themself may edit the user record; anybody else
        gets nothing.
        """
        if not done_by_owner_or_admin(viewer, record.id):
            return []

        keys = [k for k in record.attribute_names if k != "id"]
        if not is_admin(viewer):
            keys = [k for k in keys if k not in ADMIN_ONLY_USER_KEYS]

        return keys + [LINKS_ATTRIBUTES, BANK_ACCOUNT_ATTRIBUTES]
