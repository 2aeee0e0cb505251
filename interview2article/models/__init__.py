"""Models package.

Workflow state and the provenance record are the two persisted shapes;
everything else is derived per verification pass.
"""

from .provenance import (
    TRANSCRIPT_SOURCE_TYPE,
    DraftEntry,
    ProvenanceMetadata,
    ProvenanceQuote,
    ProvenanceRecord,
    ProvenanceSources,
    SupportingSourceEntry,
    TranscriptEntry,
)
from .workflow import (
    DEFAULT_TONE,
    WORKFLOW_STATE_VERSION,
    SourceType,
    SupportingSource,
    Tone,
    WorkflowStage,
    WorkflowState,
)
from .workflow_migrations import migrate_workflow_state, normalize_tone

__all__ = [
    # Workflow
    "WorkflowState",
    "WorkflowStage",
    "SupportingSource",
    "SourceType",
    "Tone",
    "DEFAULT_TONE",
    "WORKFLOW_STATE_VERSION",
    "migrate_workflow_state",
    "normalize_tone",
    # Provenance
    "ProvenanceRecord",
    "ProvenanceMetadata",
    "ProvenanceSources",
    "TranscriptEntry",
    "SupportingSourceEntry",
    "ProvenanceQuote",
    "DraftEntry",
    "TRANSCRIPT_SOURCE_TYPE",
]
