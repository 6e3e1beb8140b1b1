from pydantic import BaseModel, Field
from typing import Optional, Literal
from datetime import datetime

from app.schemas.doctor import NearbyDoctorOut

EmergencyStatus = Literal["pending", "assigned", "resolved"]
LocationSource = Literal["GPS", "Address", "Profile Address"]

class NearbyDoctorsIn(BaseModel):
    # coordenadas del dispositivo; ausentes si el GPS fue denegado
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)
    address: Optional[str] = None
    specialization: Optional[str] = None

class NearbyDoctorsOut(BaseModel):
    doctors: list[NearbyDoctorOut] = []
    location_source: Optional[LocationSource] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    message: Optional[str] = None
    error: Optional[str] = None
    error_code: Optional[str] = None

class EmergencyCallCreate(BaseModel):
    patient_name: str = Field(..., min_length=1)
    address: str = ""
    age: Optional[int] = Field(None, ge=0, le=150)
    gender: Optional[str] = None
    symptoms: list[str] = []
    severity: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    doctor_id: Optional[str] = None    # si viene, se asigna en el acto

class EmergencyCallOut(BaseModel):
    id: str
    user_id: Optional[str] = None
    doctor_id: Optional[str] = None
    patient_name: str
    address: str
    age: Optional[int] = None
    gender: Optional[str] = None
    symptoms: list[str] = []
    severity: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    status: EmergencyStatus
    created_at: datetime

    class Config:
        from_attributes = True

class EmergencySubmitOut(BaseModel):
    call: Optional[EmergencyCallOut] = None
    message: Optional[str] = None
    error: Optional[str] = None
