"""Export endpoints.

- POST /export/markdown: Download the draft as ``article-draft.md``
- POST /export/provenance: Download ``article-provenance.json``

The provenance report is recomputed from the submitted state at export
time, so the file always reflects the draft being downloaded.
"""

import logging
from typing import Any

from fastapi import APIRouter
from fastapi.responses import Response
from pydantic import BaseModel, ConfigDict, Field

from interview2article.services import provenance_exporter, verification_service
from interview2article.services.provenance_exporter import ExportArtifact

from .workflow import load_state

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/export", tags=["Export"])


class MarkdownExportRequest(BaseModel):
    """Request body for Markdown export."""

    draft: str


class ProvenanceExportRequest(BaseModel):
    """Request body for provenance export.

    ``state`` may be a stored payload of any known version.
    """

    model_config = ConfigDict(populate_by_name=True)

    state: dict[str, Any]
    use_ai: bool | None = Field(default=None, alias="useAi")


def _attachment(artifact: ExportArtifact) -> Response:
    logger.info(f"Serving {artifact.media_type} download: {artifact.filename}")
    return Response(
        content=artifact.data,
        media_type=artifact.media_type,
        headers={
            "Content-Disposition": f'attachment; filename="{artifact.filename}"',
        },
    )


@router.post("/markdown")
async def export_markdown(request: MarkdownExportRequest) -> Response:
    """Download the draft as Markdown."""
    artifact = await provenance_exporter.export_markdown(request.draft)
    return _attachment(artifact)


@router.post("/provenance")
async def export_provenance(request: ProvenanceExportRequest) -> Response:
    """Verify the state's draft and download its provenance record."""
    state = load_state(request.state)
    report = await verification_service.check_quotes(
        state.draft,
        state.transcript,
        state.supporting_sources,
        matcher=verification_service.build_matcher(request.use_ai),
    )
    artifact = await provenance_exporter.export_provenance(state, report)
    return _attachment(artifact)
