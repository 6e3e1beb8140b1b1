from pydantic import BaseModel, Field
from typing import Optional, Literal, Any
from datetime import datetime

Severity = Literal["mild", "moderate", "severe"]

class HealthCheckCreate(BaseModel):
    symptoms: list[str] = Field(..., min_length=1)
    severity: Optional[Severity] = None
    duration: Optional[str] = None
    previous_conditions: list[str] = []
    medications: list[str] = []
    notes: Optional[str] = None
    analysis_results: Optional[dict[str, Any]] = None
    urgency_level: Optional[str] = None
    overall_assessment: Optional[str] = None
    comprehensive_analysis: bool = False

class HealthCheckOut(BaseModel):
    id: str
    user_id: str
    symptoms: list[str]
    severity: Optional[str] = None
    duration: Optional[str] = None
    previous_conditions: list[str] = []
    medications: list[str] = []
    notes: Optional[str] = None
    analysis_results: Optional[dict[str, Any]] = None
    urgency_level: Optional[str] = None
    overall_assessment: Optional[str] = None
    comprehensive_analysis: bool = False
    symptom_photos: dict[str, str] = {}
    created_at: datetime

    class Config:
        from_attributes = True

class ForwardIn(BaseModel):
    appointment_id: Optional[str] = None

class ForwardOut(BaseModel):
    sent: bool
    appointment_id: Optional[str] = None
    message: str
