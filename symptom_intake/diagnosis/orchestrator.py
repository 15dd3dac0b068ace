"""Analysis pipeline: session symptoms → emergency check → model call → ranked result."""

from __future__ import annotations

import logging

from symptom_intake.diagnosis.emergency import classify_emergency
from symptom_intake.diagnosis.parser import parse_diagnosis_response
from symptom_intake.diagnosis.prompt_builder import build_diagnosis_prompt
from symptom_intake.errors import ParseError
from symptom_intake.llm.client import CompletionClient
from symptom_intake.models import DiagnosisResult, PatientProfile
from symptom_intake.prompts import DIAGNOSIS_SYSTEM
from symptom_intake.sessions.store import SessionStore

logger = logging.getLogger(__name__)

DISCLAIMER = (
    "IMPORTANT NOTICE: This tool is for information only and does NOT replace a "
    "professional medical diagnosis. Always consult a doctor. In an emergency, "
    "call your local emergency number (112 / 911) immediately."
)

DEFAULT_TEMPERATURE = 0.1


class DiagnosisOrchestrator:
    """Runs one analysis request. Never mutates session state and never retries."""

    def __init__(
        self,
        store: SessionStore,
        client: CompletionClient,
        temperature: float = DEFAULT_TEMPERATURE,
    ) -> None:
        self.store = store
        self.client = client
        self.temperature = temperature

    async def analyze(
        self,
        session_id: str,
        profile: PatientProfile | None = None,
    ) -> DiagnosisResult:
        symptoms = self.store.get_symptoms(session_id)
        if not symptoms:
            return DiagnosisResult(session_id=session_id, disclaimer=DISCLAIMER)

        assessment = classify_emergency(symptoms)
        if assessment.is_emergency:
            logger.warning("Emergency detected for %s: %s", session_id, assessment.reason)

        logger.info(
            "Analyzing %s symptom(s) for %s: %s",
            len(symptoms),
            session_id,
            ", ".join(s.name for s in symptoms),
        )
        prompt = build_diagnosis_prompt(symptoms, profile)
        # ConfigError and UpstreamError propagate unchanged.
        raw = await self.client.complete(
            system_prompt=DIAGNOSIS_SYSTEM,
            user_prompt=prompt,
            temperature=self.temperature,
        )

        try:
            diseases = parse_diagnosis_response(raw)
        except ParseError as e:
            logger.warning("Failed to parse diagnosis response for %s: %s", session_id, e)
            raise

        logger.info("Analysis for %s returned %s candidate(s).", session_id, len(diseases))
        return DiagnosisResult(
            session_id=session_id,
            diseases=diseases,
            is_emergency=assessment.is_emergency,
            emergency_reason=assessment.reason,
            disclaimer=DISCLAIMER,
        )
