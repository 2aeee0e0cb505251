"""AI-assisted feature endpoints.

Provides endpoints for:
- POST /ai/extract-key-points: Extract key points from a transcript
- POST /ai/generate-draft: Write an article draft from key points
"""

from typing import Annotated, Any

from fastapi import APIRouter
from pydantic import BaseModel, ConfigDict, Field, field_validator

from interview2article.api.response import success_response
from interview2article.models import SupportingSource, Tone, normalize_tone
from interview2article.services import ai_service

router = APIRouter(prefix="/ai", tags=["AI"])


class ExtractKeyPointsRequest(BaseModel):
    """Request body for key point extraction."""

    transcript: Annotated[str, Field(min_length=1, max_length=ai_service.MAX_TRANSCRIPT_LENGTH)]
    sources: list[SupportingSource] = Field(default_factory=list)


class GenerateDraftRequest(BaseModel):
    """Request body for draft generation."""

    model_config = ConfigDict(populate_by_name=True)

    key_points: Annotated[list[str], Field(min_length=1, alias="keyPoints")]
    tone: Tone | None = None
    custom_prompt: str | None = Field(default=None, alias="customPrompt")

    @field_validator("tone", mode="before")
    @classmethod
    def _accept_legacy_tone(cls, value: Any) -> Tone | None:
        return normalize_tone(value)


@router.post("/extract-key-points")
async def extract_key_points(request: ExtractKeyPointsRequest) -> dict:
    """Extract 5-10 key points from the transcript using AI."""
    key_points = await ai_service.extract_key_points(request.transcript, request.sources)
    return success_response({"keyPoints": key_points})


@router.post("/generate-draft")
async def generate_draft(request: GenerateDraftRequest) -> dict:
    """Generate an article draft in the requested tone.

    Errors:
        - DRAFT_TOO_LONG (422): The draft hit the token limit
        - AI_SERVICE_ERROR (503): Generation failed; retryable
    """
    draft = await ai_service.generate_draft(request.key_points, request.tone, request.custom_prompt)
    return success_response({"draft": draft})
