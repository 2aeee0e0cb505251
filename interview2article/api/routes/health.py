"""Health check endpoint."""

from fastapi import APIRouter

from interview2article.api.response import success_response
from interview2article.services.verification_service import is_ai_verification_enabled

router = APIRouter(tags=["System"])


@router.get("/health")
async def health_check() -> dict:
    """Return system health status and whether AI quote checks are on."""
    return success_response({"status": "ok", "aiVerification": is_ai_verification_enabled()})
