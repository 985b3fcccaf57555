#app/policies/rbac.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class Viewer:
    id: Any
    is_admin: bool = False

    @classmethod
    def from_payload(cls, payload) -> Optional["Viewer"]:
        if payload is None:
            return None
        return cls(id=payload.id, is_admin=bool(payload.is_admin))


def is_admin(viewer: Optional[Viewer]) -> bool:
    return viewer is not None and viewer.is_admin


def is_owner(viewer: Optional[Viewer], owner_id: Any) -> bool:
    # an anonymous viewer never owns anything, even an ownerless record
    return viewer is not None and owner_id is not None and viewer.id == owner_id


def done_by_owner_or_admin(viewer: Optional[Viewer], owner_id: Any) -> bool:
    """
    The shared action gate: admins may act on any record, everyone else
    only on records they own.
    """
    return is_admin(viewer) or is_owner(viewer, owner_id)
