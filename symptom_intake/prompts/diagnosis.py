"""Prompt templates for the differential diagnosis call."""

DIAGNOSIS_SYSTEM = """\
You are a medical information assistant. You answer ONLY with strict JSON, \
no markdown fences, no commentary."""

DIAGNOSIS_USER = """\
{patient_info}{additional_info}
Detailed symptoms: {symptom_details}.
Find exactly 3 probable diagnoses.
Answer ONLY in JSON matching this schema:
{{
  "diseases": [
    {{
      "name": "Disease name",
      "probability": 75,
      "description": "Short description",
      "treatments": ["Treatment 1", "Treatment 2"],
      "urgent_warnings": ["Warning sign 1", "Warning sign 2"]
    }}
  ]
}}

Rules:
1. "probability" is an integer percentage from 0 to 100.
2. "urgent_warnings" lists the signs that require seeing a doctor urgently.
3. Order the diseases from most to least probable."""
