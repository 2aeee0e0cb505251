"""Workflow state migrations.

Version 1 is the untyped key/value layout the browser client kept in
local storage (``transcript``, ``sourceUrl``, ``fileName``,
``keyPoints``, ``selectedTone``, ``generatedDraft``). Version 2 is
``WorkflowState``.
"""

from __future__ import annotations

import json
from typing import Any, Dict

from .workflow import DEFAULT_TONE, WORKFLOW_STATE_VERSION, Tone

# Tone values offered by the old UI
LEGACY_TONES = {
    "neutral": Tone.professional,
    "excited": Tone.conversational,
    "critical": Tone.analytical,
}


def normalize_tone(value: Any) -> Tone | None:
    """Map a stored tone (current or legacy) to ``Tone``.

    Unknown non-empty values fall back to the default tone.
    """
    if value is None or value == "":
        return None
    if isinstance(value, Tone):
        return value
    text = str(value).strip().lower()
    if text in Tone.__members__:
        return Tone(text)
    return LEGACY_TONES.get(text, DEFAULT_TONE)


def _legacy_key_points(raw: Any) -> list[str]:
    # local storage held keyPoints as a JSON string
    if isinstance(raw, str):
        try:
            raw = json.loads(raw) if raw.strip() else []
        except json.JSONDecodeError:
            raw = [raw]
    if not isinstance(raw, list):
        return []
    return [str(point) for point in raw if str(point).strip()]


def _migrate_v1(payload: Dict[str, Any]) -> Dict[str, Any]:
    sources: list[dict[str, Any]] = []
    if payload.get("sourceUrl"):
        sources.append({"id": "source-1", "type": "url", "value": payload["sourceUrl"]})
    if payload.get("fileName"):
        sources.append({
            "id": f"source-{len(sources) + 1}",
            "type": "file",
            "name": payload["fileName"],
        })

    tone = normalize_tone(payload.get("selectedTone"))
    return {
        "version": 2,
        "transcript": payload.get("transcript") or "",
        "supporting_sources": sources,
        "key_points": _legacy_key_points(payload.get("keyPoints")),
        "tone": tone.value if tone else None,
        "custom_prompt": payload.get("customPrompt") or "",
        "draft": payload.get("generatedDraft") or "",
    }


def migrate_workflow_state(payload: Dict[str, Any]) -> Dict[str, Any]:
    """Bring a stored payload up to ``WORKFLOW_STATE_VERSION``.

    Raises:
        ValueError: If ``version`` is not a known version number.
    """
    # derived from the data, never stored
    payload.pop("stage", None)
    raw_version = payload.get("version", 1)
    try:
        version = int(raw_version)
    except (TypeError, ValueError) as e:
        raise ValueError(f"Invalid workflow state version: {raw_version!r}") from e
    if not 1 <= version <= WORKFLOW_STATE_VERSION:
        raise ValueError(f"Unsupported workflow state version: {version}")

    if version == 1:
        payload = _migrate_v1(payload)
        version = 2

    if version == 2 and payload.get("tone") is not None:
        tone = normalize_tone(payload["tone"])
        payload["tone"] = tone.value if tone else None

    return payload
