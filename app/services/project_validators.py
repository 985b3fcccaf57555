# app/services/project_validators.py
from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, Iterator, List, Optional

from app.core.config import get_settings
from app.models.enums import ProjectState

logger = logging.getLogger(__name__)

# reward count is only enforced once the project has left the editing states
REWARDS_OPTIONAL_STATES = frozenset(
    {ProjectState.draft.value, ProjectState.rejected.value, ProjectState.deleted.value}
)


class ValidationErrors:
    """
    Append-only error collection owned by whoever is saving the record.
    Validators add to it and never raise.
    """

    def __init__(self) -> None:
        self._items: List[Dict[str, str]] = []

    def add(self, field: str, message: str) -> None:
        self._items.append({"field": field, "message": message})

    def __getitem__(self, field: str) -> List[str]:
        return [e["message"] for e in self._items if e["field"] == field]

    def __iter__(self) -> Iterator[Dict[str, str]]:
        return iter(list(self._items))

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)

    def to_list(self) -> List[Dict[str, str]]:
        return [dict(e) for e in self._items]


def permalink_on_routes(permalink: Optional[str], reserved_routes: Iterable[str]) -> bool:
    if not permalink:
        return False
    return permalink in set(reserved_routes)


def parse_tag_ids(raw: Optional[str]) -> List[str]:
    if not raw:
        return []
    return [t.strip() for t in raw.split(",") if t.strip()]


def validate_permalink(record: Any, errors: ValidationErrors, reserved_routes: Iterable[str]) -> None:
    if permalink_on_routes(getattr(record, "permalink", None), reserved_routes):
        errors.add("permalink", "is reserved by an application route")


def ensure_at_least_one_reward(record: Any, errors: ValidationErrors) -> None:
    if not list(getattr(record, "rewards", None) or ()):
        errors.add("rewards.size", "must have at least one reward")


def validate_tags(record: Any, errors: ValidationErrors, max_tags: Optional[int] = None) -> None:
    if max_tags is None:
        max_tags = get_settings().max_public_tags
    if len(parse_tag_ids(getattr(record, "all_public_tags", None))) > max_tags:
        errors.add("public_tags", f"cannot have more than {max_tags} tags")


def validate_project(
    record: Any,
    errors: ValidationErrors,
    reserved_routes: Optional[Iterable[str]] = None,
) -> ValidationErrors:
    """
    Runs every validator the record's state triggers. Each one appends to
    `errors` independently; a failure never stops the next check.
    """
    settings = get_settings()
    if reserved_routes is None:
        reserved_routes = settings.reserved_routes

    validate_permalink(record, errors, reserved_routes)
    validate_tags(record, errors, settings.max_public_tags)
    if getattr(record.state, "value", record.state) not in REWARDS_OPTIONAL_STATES:
        ensure_at_least_one_reward(record, errors)

    if errors:
        logger.info(
            "project failed validation",
            extra={"project_id": getattr(record, "id", None), "fields": [e["field"] for e in errors]},
        )
    return errors
