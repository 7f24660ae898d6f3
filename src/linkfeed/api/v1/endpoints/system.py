"""System endpoints for the LinkFeed API."""

from __future__ import annotations

from fastapi import APIRouter

from linkfeed.core.settings import settings

router = APIRouter(tags=["system"])


@router.get("/health")
async def health_check() -> dict[str, str]:
    """Liveness marker for the API."""
    return {"status": "ok", "message": "Server is running"}


@router.get("/system/config")
async def get_public_config() -> dict[str, object]:
    """Return a sanitized snapshot of public runtime configuration.

    Excludes secrets and connection strings.
    """
    return {
        "app": {
            "name": settings.app_name,
            "version": settings.app_version,
        },
        "auth": {
            "jwt_algorithm": settings.jwt_algorithm,
            "access_token_expire_minutes": settings.access_token_expire_minutes,
        },
        "uploads": {
            "url_path": settings.upload_url_path,
            "allowed_extensions": settings.allowed_image_extensions,
            "max_bytes": settings.max_image_bytes,
        },
    }
