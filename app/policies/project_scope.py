#app/policies/project_scope.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Any, FrozenSet, Iterable, List, Optional

from sqlalchemy import Select

from app.models.enums import ProjectState
from app.models.project import Project
from app.policies.rbac import Viewer, done_by_owner_or_admin

HIDDEN_FROM_EVERYONE = frozenset({ProjectState.deleted})
HIDDEN_FROM_PUBLIC = frozenset(
    {ProjectState.deleted, ProjectState.draft, ProjectState.rejected}
)


@dataclass(frozen=True)
class ProjectScope:
    """
    Which projects of `owner_id` the viewer may see in a listing.
    """

    viewer: Optional[Viewer]
    owner_id: Any = None

    @property
    def excluded_states(self) -> FrozenSet[ProjectState]:
        if done_by_owner_or_admin(self.viewer, self.owner_id):
            return HIDDEN_FROM_EVERYONE
        return HIDDEN_FROM_PUBLIC

    def resolve(self, candidates: Iterable[Any]) -> List[Any]:
        excluded = {s.value for s in self.excluded_states}
        return [p for p in candidates if getattr(p.state, "value", p.state) not in excluded]

    def apply(self, stmt: Select) -> Select:
        excluded = sorted(s.value for s in self.excluded_states)
        return stmt.where(Project.state.not_in(excluded))
