"""Typed workflow state passed between editorial stages.

Stages: setup (transcript + supporting sources) -> key points ->
draft (tone + custom direction) -> review/export. Each stage handler
receives a ``WorkflowState`` and returns an updated copy; persistence
between stages is left to the caller, which stores ``to_payload()``
and restores with ``from_payload()``.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

WORKFLOW_STATE_VERSION = 2


class Tone(str, Enum):
    """Tone/angle of the generated article."""

    professional = "professional"
    conversational = "conversational"
    analytical = "analytical"
    storytelling = "storytelling"


DEFAULT_TONE = Tone.professional


class SourceType(str, Enum):
    """Kind of supporting source attached in the setup stage."""

    url = "url"
    file = "file"


class SupportingSource(BaseModel):
    """A supporting source (URL or uploaded file).

    ``content`` holds the retrieved text. When it is missing the source
    is still listed in citations but can never verify a quote.
    """

    model_config = ConfigDict(extra="ignore")

    id: str = Field(min_length=1)
    type: SourceType
    name: str = ""
    value: str = ""
    content: str | None = None

    @property
    def display_name(self) -> str:
        if self.type == SourceType.url:
            return self.value or self.name or "Link"
        return self.name or self.value or "Document"

    @property
    def has_text(self) -> bool:
        return bool(self.content and self.content.strip())


class WorkflowStage(str, Enum):
    setup = "setup"
    key_points = "key_points"
    draft = "draft"
    review = "review"


class WorkflowState(BaseModel):
    """Everything one workflow run has produced so far."""

    model_config = ConfigDict(extra="forbid")

    version: int = WORKFLOW_STATE_VERSION
    transcript: str = ""
    supporting_sources: list[SupportingSource] = Field(default_factory=list)
    key_points: list[str] = Field(default_factory=list)
    tone: Tone | None = None
    custom_prompt: str = ""
    draft: str = ""

    @property
    def stage(self) -> WorkflowStage:
        """Furthest stage the collected data allows."""
        if self.draft.strip():
            return WorkflowStage.review
        if self.key_points:
            return WorkflowStage.draft
        if self.transcript.strip():
            return WorkflowStage.key_points
        return WorkflowStage.setup

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json")

    @classmethod
    def from_payload(cls, payload: dict[str, Any] | None) -> WorkflowState:
        """Restore state from a stored payload of any known version."""
        from .workflow_migrations import migrate_workflow_state

        if not payload:
            return cls()
        return cls.model_validate(migrate_workflow_state(dict(payload)))
