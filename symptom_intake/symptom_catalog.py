"""Fixed catalog of common symptoms for the search-as-you-type box."""

from __future__ import annotations

from symptom_intake.models import CatalogSymptom

_COMMON_SYMPTOMS = [
    ("Fever", "Fever", "General"),
    ("Headache", "Headache", "Neurology"),
    ("Cough", "Cough", "Respiratory"),
    ("SoreThroat", "Sore throat", "Respiratory"),
    ("Fatigue", "Fatigue", "General"),
    ("Nausea", "Nausea", "Digestive"),
    ("Vomiting", "Vomiting", "Digestive"),
    ("Diarrhea", "Diarrhea", "Digestive"),
    ("AbdominalPain", "Abdominal pain", "Digestive"),
    ("ChestPain", "Chest pain", "Cardiology"),
    ("ShortnessOfBreath", "Shortness of breath", "Respiratory"),
    ("Dizziness", "Dizziness", "Neurology"),
]


def _normalize(text: str) -> str:
    return " ".join(text.lower().strip().split())


def search_symptoms(query: str) -> list[CatalogSymptom]:
    """Case-insensitive substring match on id or display name. Empty query matches nothing."""
    needle = _normalize(query)
    if not needle:
        return []
    return [
        CatalogSymptom(id=symptom_id, name=name, category=category)
        for symptom_id, name, category in _COMMON_SYMPTOMS
        if needle in name.lower() or needle in symptom_id.lower()
    ]
