# app/api/v1/project_policy.py
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Response

from app.core.config import Settings, get_settings
from app.models.enums import ProjectAction
from app.policies.project_scope import ProjectScope
from app.policies.projects_policy import ProjectPolicy
from app.policies.rbac import Viewer
from app.schemas.projects import (
    ActionDecisionResponse,
    PermittedAttributesResponse,
    PolicyRequest,
    ScopeRequest,
    ScopeResponse,
)
from app.services.params_filter import permit_params
from app.services.project_validators import ValidationErrors, validate_project

router = APIRouter(prefix="/projects")


def _policy(body: PolicyRequest, settings: Settings) -> ProjectPolicy:
    return ProjectPolicy(
        Viewer.from_payload(body.viewer),
        body.project,
        body.params,
        settings=settings,
    )


@router.post("/policy/actions/{action}", response_model=ActionDecisionResponse)
async def check_action(
    action: ProjectAction,
    body: PolicyRequest,
    settings: Settings = Depends(get_settings),
):
    return {"action": action, "allowed": _policy(body, settings).allowed(action)}


@router.post("/policy/permitted-attributes", response_model=PermittedAttributesResponse)
async def permitted_attributes(
    body: PolicyRequest,
    settings: Settings = Depends(get_settings),
):
    policy = _policy(body, settings)

    # attributes are only worth computing for a viewer allowed to write
    try:
        policy.require(ProjectAction.update)
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))

    permitted = policy.permitted_attributes()
    return {"permitted": permitted, "params": permit_params(body.params, permitted)}


@router.post("/policy/scope", response_model=ScopeResponse)
async def resolve_scope(body: ScopeRequest):
    scope = ProjectScope(Viewer.from_payload(body.viewer), body.owner_id)
    return {
        "excluded_states": sorted(scope.excluded_states, key=lambda s: s.value),
        "projects": scope.resolve(body.projects),
    }


@router.post("/validate", status_code=204)
async def validate(body: PolicyRequest, settings: Settings = Depends(get_settings)):
    errors = validate_project(body.project, ValidationErrors(), settings.reserved_routes)
    if errors:
        raise HTTPException(status_code=422, detail=errors.to_list())
    return Response(status_code=204)
