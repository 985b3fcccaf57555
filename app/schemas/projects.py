#app/schemas/projects.py
from __future__ import annotations

from datetime import date
from typing import Any, Dict, List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

from app.models.enums import ProjectAction, ProjectState


# -----------------------
# Read-only record snapshots
# -----------------------


class Snapshot(BaseModel):
    model_config = ConfigDict(frozen=True)


class Integration(Snapshot):
    name: str
    data: Dict[str, str] = Field(default_factory=dict)


class ShippingFee(Snapshot):
    id: Optional[int] = None
    value: float = 0.0
    destination: Optional[str] = None


class Reward(Snapshot):
    id: Optional[int] = None
    maximum_contributions: Optional[int] = None
    description: str = ""
    deliver_at: Optional[date] = None
    minimum_value: float = 0.0
    title: Optional[str] = None
    shipping_options: Optional[str] = None
    shipping_fees: Tuple[ShippingFee, ...] = ()


class UserRecord(Snapshot):
    id: int
    attribute_names: Tuple[str, ...] = ()


class ProjectSnapshot(Snapshot):
    """
    Everything the policy engine reads from a project. Built by the caller
    (or from an ORM row via from_model) and never mutated here.
    """

    id: Optional[int] = None
    user_id: int
    state: ProjectState = ProjectState.draft
    service_fee: float = 0.0
    permalink: Optional[str] = None
    all_public_tags: Optional[str] = None
    integrations: Tuple[Integration, ...] = ()
    rewards: Tuple[Reward, ...] = ()
    attribute_names: Tuple[str, ...] = ()
    user: Optional[UserRecord] = None

    @property
    def owner(self) -> UserRecord:
        return self.user or UserRecord(id=self.user_id)

    @classmethod
    def from_model(cls, project, *, user: Optional[UserRecord] = None) -> "ProjectSnapshot":
        # materializes the persisted integrations into the same shape params use
        return cls(
            id=project.id,
            user_id=project.user_id,
            state=ProjectState(project.state),
            service_fee=project.service_fee or 0.0,
            permalink=project.permalink,
            all_public_tags=project.all_public_tags,
            integrations=tuple(
                Integration(name=i.name, data={k: str(v) for k, v in (i.data or {}).items()})
                for i in project.integrations
            ),
            attribute_names=tuple(type(project).attribute_names()),
            user=user,
        )


# -----------------------
# Request/Response models
# -----------------------


class ViewerPayload(BaseModel):
    id: int
    is_admin: bool = False


class PolicyRequest(BaseModel):
    viewer: Optional[ViewerPayload] = None
    project: ProjectSnapshot
    params: Dict[str, Any] = Field(default_factory=dict)


class ActionDecisionResponse(BaseModel):
    action: ProjectAction
    allowed: bool


PermittedKey = Union[str, Dict[str, Any]]


class PermittedAttributesResponse(BaseModel):
    permitted: List[PermittedKey]
    params: Dict[str, Any]


class ScopeRequest(BaseModel):
    viewer: Optional[ViewerPayload] = None
    owner_id: Optional[int] = None
    projects: List[ProjectSnapshot]


class ScopeResponse(BaseModel):
    excluded_states: List[ProjectState]
    projects: List[ProjectSnapshot]


class ValidationErrorItem(BaseModel):
    field: str
    message: str
