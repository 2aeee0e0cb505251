"""Workflow state endpoint.

- POST /workflow/normalize: Upgrade a stored workflow payload (any
  known version) to the current ``WorkflowState`` shape.
"""

from typing import Any

from fastapi import APIRouter, Body
from pydantic import ValidationError as PydanticValidationError

from interview2article.api.exceptions import ValidationError
from interview2article.api.response import success_response
from interview2article.models import WorkflowState

router = APIRouter(prefix="/workflow", tags=["Workflow"])


def load_state(payload: dict[str, Any] | None) -> WorkflowState:
    """Restore a workflow state, reporting bad payloads as 400s."""
    try:
        return WorkflowState.from_payload(payload)
    except PydanticValidationError as e:
        raise ValidationError(f"Invalid workflow state: {e.error_count()} error(s)") from e
    except ValueError as e:
        raise ValidationError(f"Invalid workflow state: {e}") from e


@router.post("/normalize")
async def normalize_workflow(payload: dict[str, Any] = Body(...)) -> dict:
    """Return the payload as a current-version workflow state."""
    state = load_state(payload)
    return success_response({**state.to_payload(), "stage": state.stage.value})
