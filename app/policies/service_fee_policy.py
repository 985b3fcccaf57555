#app/policies/service_fee_policy.py
from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping, Optional, Sequence

from app.core.config import Settings, get_settings
from app.models.enums import ProjectState
from app.schemas.projects import ProjectSnapshot

logger = logging.getLogger(__name__)

SERVICE_FEE_KEY = "service_fee"


def coerce_fee(value: Any) -> float:
    """
    Lenient numeric coercion: anything that is not a number becomes 0.0,
    which always fails the fee bounds.
    """
    if isinstance(value, bool):
        return 0.0
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def _is_present(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return value.strip() != ""
    return True


def _integration_name(item: Any) -> Optional[str]:
    if isinstance(item, Mapping):
        return item.get("name")
    return getattr(item, "name", None)


def _as_sequence(integrations: Any) -> Iterable[Any]:
    # nested form params may arrive index-keyed: {"0": {...}, "1": {...}}
    if isinstance(integrations, Mapping):
        return integrations.values()
    if isinstance(integrations, Sequence) and not isinstance(integrations, (str, bytes)):
        return integrations
    return ()


def find_integration(name: str, *collections: Any) -> Optional[Any]:
    """First integration called `name`, searching the collections in order."""
    for collection in collections:
        for item in _as_sequence(collection):
            if _integration_name(item) == name:
                return item
    return None


def allow_conditionally(
    project: ProjectSnapshot,
    params: Optional[Mapping[str, Any]],
    settings: Optional[Settings] = None,
) -> Optional[str]:
    """
    Grants the service_fee key to a draft project carrying the solidarity
    integration, as long as the submitted fee stays inside the configured
    bounds (inclusive). Returns None when any condition fails.
    """
    settings = settings or get_settings()
    params = params or {}

    service_fee = params.get(SERVICE_FEE_KEY)
    if not _is_present(service_fee) or project.state != ProjectState.draft:
        return None

    solidarity = find_integration(
        settings.solidarity_integration_name,
        params.get("integrations_attributes"),
        project.integrations,
    )
    if solidarity is None:
        return None

    fee = coerce_fee(service_fee)
    if settings.min_service_fee <= fee <= settings.max_service_fee:
        logger.debug(
            "service fee override granted",
            extra={"project_id": project.id, "service_fee": fee},
        )
        return SERVICE_FEE_KEY
    return None
