"""Keyword and intensity heuristic that flags a symptom set as urgent."""

from __future__ import annotations

from symptom_intake.models import EmergencyAssessment, SymptomReport

EMERGENCY_KEYWORDS = (
    "chest pain",
    "severe chest pain",
    "difficulty breathing",
    "shortness of breath",
    "severe dyspnea",
    "loss of consciousness",
    "unconscious",
    "confusion",
    "severe bleeding",
    "heavy bleeding",
    "severe abdominal pain",
    "sudden severe headache",
    "paralysis",
    "weakness in limbs",
    "seizure",
    "convulsion",
    "stroke symptoms",
    "heart attack",
    "anaphylaxis",
    "severe allergic reaction",
)

EMERGENCY_INTENSITY_THRESHOLD = 9


def matches_emergency_keyword(name: str) -> bool:
    lowered = name.lower()
    return any(keyword in lowered for keyword in EMERGENCY_KEYWORDS)


def classify_emergency(symptoms: list[SymptomReport]) -> EmergencyAssessment:
    """Flag the first symptom, in list order, that is critical.

    Each symptom is checked for an emergency keyword first, then for a
    critical intensity; the sweep stops at the first hit of either kind.
    """
    for symptom in symptoms:
        if matches_emergency_keyword(symptom.name):
            return EmergencyAssessment(
                is_emergency=True,
                reason=f"Critical symptom detected: {symptom.name}",
            )
        if symptom.intensity is not None and symptom.intensity >= EMERGENCY_INTENSITY_THRESHOLD:
            return EmergencyAssessment(
                is_emergency=True,
                reason=f"Critical intensity ({symptom.intensity}/10) for: {symptom.name}",
            )
    return EmergencyAssessment()
