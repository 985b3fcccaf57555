#/app/policies/projects_policy.py
from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional

from app.core.config import Settings
from app.models.enums import ProjectAction, ProjectState
from app.policies.rbac import Viewer, done_by_owner_or_admin, is_admin
from app.policies.service_fee_policy import allow_conditionally
from app.policies.user_policy import NestedPolicy, UserPolicy
from app.schemas.projects import ProjectSnapshot

logger = logging.getLogger(__name__)

PermittedKey = Any  # str, or {"<group>_attributes": [...]}

# states in which anyone signed in gets the full writable set
OPEN_EDIT_STATES = frozenset({ProjectState.draft, ProjectState.rejected})

# once funding closes the delivery date is locked
DELIVERY_LOCKED_STATES = frozenset(
    {ProjectState.waiting_funds, ProjectState.failed, ProjectState.successful}
)

STRUCTURAL_KEYS = ("all_tags", "all_public_tags")

PUBLIC_KEYS = (
    "about_html",
    "online_days",
    "video_url",
    "cover_image",
    "uploaded_image",
    "headline",
    "budget",
    "city_id",
    "city",
)

# legacy dashboard: fields only an admin may submit
ADMIN_ONLY_KEYS = frozenset(
    {
        "audited_user_name",
        "audited_user_cpf",
        "audited_user_phone_number",
        "state",
        "origin_id",
        "service_fee",
        "total_installments",
        "recommended",
        "created_at",
        "updated_at",
        "expires_at",
        "all_tags",
    }
)

BUDGET_KEYS = ["id", "name", "value", "_destroy"]
POST_KEYS = ["_destroy", "title", "comment_html", "exclusive", "id"]
GOAL_KEYS = ["_destroy", "id", "value", "description", "title"]
SHIPPING_FEE_KEYS = ["_destroy", "id", "value", "destination"]
REWARD_KEYS = [
    "_destroy",
    "id",
    "maximum_contributions",
    "description",
    "deliver_at",
    "minimum_value",
    "title",
    "shipping_options",
]
INTEGRATION_KEYS = ["_destroy", "name", "id", {"data": ["name"]}]


def _unique(keys: Iterable[PermittedKey]) -> List[PermittedKey]:
    out: List[PermittedKey] = []
    for key in keys:
        if key not in out:
            out.append(key)
    return out


class ProjectPolicy:
    """
    Decides what a viewer may do to a project and which attributes they may
    submit while doing it.
    """

    def __init__(
        self,
        viewer: Optional[Viewer],
        project: ProjectSnapshot,
        params: Optional[Mapping[str, Any]] = None,
        *,
        user_policy: Optional[NestedPolicy] = None,
        settings: Optional[Settings] = None,
    ):
        self.viewer = viewer
        self.project = project
        self.params = params or {}
        self.user_policy = user_policy or UserPolicy()
        self.settings = settings

    # ---- actions ----

    def _owner_or_admin(self) -> bool:
        return done_by_owner_or_admin(self.viewer, self.project.user_id)

    def can_create(self) -> bool:
        return self._owner_or_admin()

    def can_push_to_online(self) -> bool:
        return self._owner_or_admin()

    def can_update(self) -> bool:
        return self.can_create() and self.project.state != ProjectState.deleted

    def can_publish(self) -> bool:
        return self._owner_or_admin()

    def can_publish_by_steps(self) -> bool:
        return self._owner_or_admin()

    def can_validate_publish(self) -> bool:
        return self._owner_or_admin()

    def allowed(self, action: ProjectAction) -> bool:
        return getattr(self, f"can_{ProjectAction(action).value}")()

    def require(self, action: ProjectAction) -> None:
        if not self.allowed(action):
            logger.debug(
                "project action denied",
                extra={
                    "action": ProjectAction(action).value,
                    "project_id": self.project.id,
                    "viewer_id": getattr(self.viewer, "id", None),
                },
            )
            raise PermissionError(
                f"Not permitted to {ProjectAction(action).value} this project."
            )

    # ---- nested groups ----

    def user_attributes(self) -> Dict[str, List[PermittedKey]]:
        return {
            "user_attributes": self.user_policy.permitted_attributes(
                self.viewer, self.project.owner
            )
        }

    def budget_attributes(self) -> Dict[str, List[PermittedKey]]:
        return {"budgets_attributes": list(BUDGET_KEYS)}

    def posts_attributes(self) -> Dict[str, List[PermittedKey]]:
        return {"posts_attributes": list(POST_KEYS)}

    def reward_attributes(self) -> Dict[str, List[PermittedKey]]:
        keys: List[PermittedKey] = list(REWARD_KEYS)
        if self.project.state in DELIVERY_LOCKED_STATES:
            keys.remove("deliver_at")
        keys.append({"shipping_fees_attributes": list(SHIPPING_FEE_KEYS)})
        return {"rewards_attributes": keys}

    def goal_attributes(self) -> Dict[str, List[PermittedKey]]:
        return {"goals_attributes": list(GOAL_KEYS)}

    def integrations_attributes(self) -> Dict[str, List[PermittedKey]]:
        return {"integrations_attributes": list(INTEGRATION_KEYS)}

    # ---- attribute whitelist ----

    def is_privileged(self) -> bool:
        # ownership is deliberately not checked here; see DESIGN.md
        if self.viewer is None:
            return False
        return is_admin(self.viewer) or self.project.state in OPEN_EDIT_STATES

    def permitted_attributes(self) -> List[PermittedKey]:
        if not self.is_privileged():
            return _unique(
                [
                    *PUBLIC_KEYS,
                    self.user_attributes(),
                    self.posts_attributes(),
                    self.budget_attributes(),
                    self.reward_attributes(),
                    self.integrations_attributes(),
                ]
            )

        base = [
            *self.project.attribute_names,
            *STRUCTURAL_KEYS,
            self.user_attributes(),
            self.budget_attributes(),
            self.posts_attributes(),
            self.reward_attributes(),
            self.goal_attributes(),
            self.integrations_attributes(),
            "content_rating",
        ]
        if not is_admin(self.viewer):
            base = [k for k in base if not (isinstance(k, str) and k in ADMIN_ONLY_KEYS)]

        granted = allow_conditionally(self.project, self.params, self.settings)
        if granted:
            base.append(granted)

        return _unique(base)
