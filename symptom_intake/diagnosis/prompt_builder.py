"""Builds the diagnosis user prompt from session symptoms and a patient profile."""

from __future__ import annotations

from symptom_intake.models import PatientProfile, Sex, SymptomReport
from symptom_intake.prompts import DIAGNOSIS_USER

DEFAULT_AGE = 30

_SEX_LABELS = {
    Sex.MALE: "Male",
    Sex.FEMALE: "Female",
    Sex.OTHER: "Other",
}


def _number(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)


def describe_patient(profile: PatientProfile) -> str:
    age = profile.age if profile.age is not None else DEFAULT_AGE
    parts = [f"Patient: {age} years old"]
    if profile.sex is not None:
        parts.append(_SEX_LABELS[profile.sex])
    if profile.weight is not None and profile.height is not None:
        parts.append(f"{_number(profile.weight)}kg")
        parts.append(f"{_number(profile.height)}cm")
    bmi = profile.resolved_bmi
    if bmi is not None:
        parts.append(f"BMI: {_number(bmi)}")
    return ", ".join(parts)


def describe_history(profile: PatientProfile) -> str:
    """Antecedent and allergy lines; each present only when its list is non-empty."""
    lines = ""
    if profile.medical_history:
        lines += f"\nMedical history: {', '.join(profile.medical_history)}"
    if profile.allergies:
        lines += f"\nKnown allergies: {', '.join(profile.allergies)}"
    return lines


def describe_symptom(symptom: SymptomReport) -> str:
    detail = symptom.name
    if symptom.duration is not None:
        detail += f" (for {symptom.duration} days)"
    if symptom.intensity is not None:
        detail += f" [intensity: {symptom.intensity}/10]"
    return detail


def describe_symptoms(symptoms: list[SymptomReport]) -> str:
    return ", ".join(describe_symptom(s) for s in symptoms)


def build_diagnosis_prompt(
    symptoms: list[SymptomReport],
    profile: PatientProfile | None = None,
) -> str:
    profile = profile or PatientProfile()
    return DIAGNOSIS_USER.format(
        patient_info=describe_patient(profile),
        additional_info=describe_history(profile),
        symptom_details=describe_symptoms(symptoms),
    )
