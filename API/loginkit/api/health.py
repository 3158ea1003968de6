from fastapi import APIRouter

from loginkit.core.settings import settings

router = APIRouter(tags=["health"])


@router.get("/health")
async def health():
    return {
        "status": "ok",
        "service": "loginkit-api",
        "env": settings.app_env,
        "token_ttl_seconds": settings.jwt_expire_seconds,
    }
