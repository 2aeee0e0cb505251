"""Quote verification endpoint.

- POST /quotes/check: Verify every quotation in a draft against the
  transcript and supporting sources.
"""

from fastapi import APIRouter
from pydantic import BaseModel, ConfigDict, Field

from interview2article.api.response import success_response
from interview2article.models import SupportingSource
from interview2article.services import verification_service

router = APIRouter(prefix="/quotes", tags=["Quotes"])


class CheckQuotesRequest(BaseModel):
    """Request body for a quote check.

    ``useAi`` narrows the server setting; it cannot enable AI checks
    the server has turned off.
    """

    model_config = ConfigDict(populate_by_name=True)

    draft: str = ""
    transcript: str = ""
    sources: list[SupportingSource] = Field(default_factory=list)
    use_ai: bool | None = Field(default=None, alias="useAi")


@router.post("/check")
async def check_quotes(request: CheckQuotesRequest) -> dict:
    """Verify the draft's quotes.

    An empty draft, or one without quotes, returns an empty report.
    """
    matcher = verification_service.build_matcher(request.use_ai)
    report = await verification_service.check_quotes(
        request.draft,
        request.transcript,
        request.sources,
        matcher=matcher,
    )
    return success_response(report.to_dict())
