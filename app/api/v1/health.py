from fastapi import APIRouter, Depends, Request

from app.core.config import Settings, get_settings

router = APIRouter()


@router.get("/health")
async def health(request: Request, settings: Settings = Depends(get_settings)):
    """Liveness plus the project rules the engine is currently enforcing."""
    return {
        "status": "ok",
        "request_id": getattr(request.state, "request_id", None),
        "environment": settings.environment,
        "rules": {
            "max_public_tags": settings.max_public_tags,
            "service_fee_bounds": [settings.min_service_fee, settings.max_service_fee],
            "solidarity_integration": settings.solidarity_integration_name,
            "reserved_routes": len(settings.reserved_routes),
        },
    }
