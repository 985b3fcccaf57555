from fastapi import APIRouter

from app.api.v1.health import router as health_router
from app.api.v1.project_policy import router as project_policy_router


v1_router = APIRouter()

# ------------------------------------------------------------------
# SYSTEM / CORE
# ------------------------------------------------------------------
v1_router.include_router(health_router, tags=["health"])

# ------------------------------------------------------------------
# PROJECT POLICY
# ------------------------------------------------------------------
v1_router.include_router(project_policy_router, tags=["project-policy"])
