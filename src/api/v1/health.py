from typing import Any

from fastapi import APIRouter

from core.config import get_settings
from schemas.api import ApiResponse


router = APIRouter()


def _mask(key: str | None) -> str | None:
    # Enough of the key to tell apps apart, never the credential itself
    return f"{key[:8]}..." if key else None


@router.get("/health", response_model=ApiResponse[dict[str, str]])
def health_check() -> ApiResponse[dict[str, str]]:
    """Health check endpoint for monitoring and load balancer health checks."""
    settings = get_settings()
    return ApiResponse(
        success=True,
        data={"status": "healthy", "message": f"{settings.APP_NAME} API is running"},
        message="Health check successful",
    )


@router.get("/health/config", response_model=ApiResponse[dict[str, Any]])
def config_check() -> ApiResponse[dict[str, Any]]:
    """Report which workflow apps are configured, with keys masked."""
    settings = get_settings()
    keys = {
        "resume": settings.DIFY_RESUME_API_KEY,
        "jd": settings.DIFY_JD_API_KEY,
        "recruit": settings.DIFY_RECRUIT_API_KEY,
        "completion": settings.completion_api_key,
    }
    return ApiResponse(
        success=True,
        data={
            "api_url": settings.DIFY_API_URL,
            "apps": {
                name: {"configured": bool(key), "key_prefix": _mask(key)}
                for name, key in keys.items()
            },
        },
        message="Configuration check complete",
    )
