"""Centralized prompt templates for upstream model calls.

Import any prompt constant directly:
    from symptom_intake.prompts import DIAGNOSIS_SYSTEM, DIAGNOSIS_USER
"""

from symptom_intake.prompts.diagnosis import DIAGNOSIS_SYSTEM, DIAGNOSIS_USER

__all__ = [
    "DIAGNOSIS_SYSTEM",
    "DIAGNOSIS_USER",
]
