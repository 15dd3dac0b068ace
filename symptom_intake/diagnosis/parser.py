"""Turns free-form model text into ranked diagnosis candidates."""

from __future__ import annotations

import json
import logging
import math

from symptom_intake.errors import ParseError
from symptom_intake.llm.json_utils import extract_json_object
from symptom_intake.models import DiagnosisCandidate

logger = logging.getLogger(__name__)

WARNING_KEYS = ("urgent_warnings", "whenToSeeDoctorUrgently")


def _probability(value: object) -> int:
    if isinstance(value, bool):
        return 0
    if isinstance(value, str):
        value = value.strip().rstrip("%").strip()
        try:
            value = float(value)
        except ValueError:
            return 0
    if not isinstance(value, (int, float)) or not math.isfinite(value):
        return 0
    return max(0, min(100, round(value)))


def _string_list(value: object) -> list[str]:
    if not isinstance(value, list):
        return []
    return [str(item).strip() for item in value if str(item).strip()]


def _candidate(item: dict, rank: int) -> DiagnosisCandidate:
    warnings: object = []
    for key in WARNING_KEYS:
        if key in item:
            warnings = item[key]
            break
    description = item.get("description")
    return DiagnosisCandidate(
        name=str(item["name"]).strip(),
        probability=_probability(item.get("probability")),
        rank=rank,
        description=str(description).strip() if description is not None else "",
        treatments=_string_list(item.get("treatments")),
        urgent_warnings=_string_list(warnings),
    )


def parse_diagnosis_response(raw: str) -> list[DiagnosisCandidate]:
    """Extract the `diseases` list from model output.

    Rank follows the order the model returned, not probability. Entries that
    are not objects or have no name are skipped.
    """
    payload = extract_json_object(raw)
    if payload is None:
        raise ParseError("No JSON object found in model response.")

    try:
        data = json.loads(payload)
    except json.JSONDecodeError as e:
        raise ParseError(f"Model response is not valid JSON: {e}") from e

    diseases = data.get("diseases") if isinstance(data, dict) else None
    if not isinstance(diseases, list):
        raise ParseError("Model response has no 'diseases' list.")

    candidates: list[DiagnosisCandidate] = []
    for item in diseases:
        if not isinstance(item, dict) or not str(item.get("name") or "").strip():
            logger.debug("Skipping malformed disease entry: %r", item)
            continue
        candidates.append(_candidate(item, rank=len(candidates) + 1))
    return candidates
