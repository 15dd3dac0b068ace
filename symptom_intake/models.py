from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


# --- Session state ---

class SymptomReport(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    duration: int | None = Field(default=None, ge=1)    # days, patient reported
    intensity: int | None = Field(default=None, ge=1, le=10)


# --- Per-request patient data ---

class Sex(str, Enum):
    MALE = "male"
    FEMALE = "female"
    OTHER = "other"


class PatientProfile(BaseModel):
    age: int | None = Field(default=None, ge=0, le=130)
    sex: Sex | None = None
    weight: float | None = Field(default=None, gt=0)    # kg
    height: float | None = Field(default=None, gt=0)    # cm
    bmi: float | None = Field(default=None, gt=0)
    medical_history: list[str] = Field(default_factory=list)
    allergies: list[str] = Field(default_factory=list)

    @property
    def resolved_bmi(self) -> float | None:
        """Explicit BMI if given, otherwise derived from weight and height."""
        if self.bmi is not None:
            return self.bmi
        if self.weight is None or self.height is None:
            return None
        meters = self.height / 100
        return round(self.weight / (meters * meters), 1)


# --- Diagnosis output ---

class EmergencyAssessment(BaseModel):
    is_emergency: bool = False
    reason: str | None = None


class DiagnosisCandidate(BaseModel):
    name: str
    probability: int = Field(default=0, ge=0, le=100)
    rank: int = Field(ge=1)
    description: str = ""
    treatments: list[str] = Field(default_factory=list)
    urgent_warnings: list[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("urgent_warnings", "whenToSeeDoctorUrgently"),
    )


class DiagnosisResult(BaseModel):
    session_id: str
    diseases: list[DiagnosisCandidate] = Field(default_factory=list)
    is_emergency: bool = False
    emergency_reason: str | None = None
    disclaimer: str
    generated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


# --- HTTP request/response bodies ---

class SessionCreated(BaseModel):
    session_id: str
    status: str = "created"


class AddSymptomRequest(BaseModel):
    session_id: str = ""
    symptom: str = ""
    duration: int | None = Field(default=None, ge=1)
    intensity: int | None = Field(default=None, ge=1, le=10)


class RemoveSymptomRequest(BaseModel):
    session_id: str = ""
    symptom: str = ""


class AnalyzeRequest(PatientProfile):
    session_id: str = ""
    sex: Sex | None = Field(default=None, validation_alias=AliasChoices("sex", "gender"))

    def to_profile(self) -> PatientProfile:
        return PatientProfile(**self.model_dump(exclude={"session_id"}))


class OperationStatus(BaseModel):
    success: bool = True


class CatalogSymptom(BaseModel):
    id: str
    name: str
    category: str
