from pydantic import BaseModel, Field
from typing import Optional, Literal
from datetime import date, time

from app.schemas.doctor import DoctorSummary

SlotStatus = Literal["available", "booked", "cancelled", "completed"]

class SlotCreate(BaseModel):
    doctor_id: Optional[str] = None        # si el que crea es doctor, puede omitirse
    date: date
    start_time: time
    end_time: time
    duration: int = Field(30, ge=1)
    max_patients: int = Field(1, ge=1)
    status: SlotStatus = "available"

class SlotStatusIn(BaseModel):
    status: SlotStatus

class SlotBookIn(BaseModel):
    patient_name: str = Field(..., min_length=1)
    reason: Optional[str] = None

class SlotOut(BaseModel):
    id: str
    doctor_id: str
    date: date
    start_time: time
    end_time: time
    duration: int
    max_patients: int
    status: SlotStatus
    user_id: Optional[str] = None
    patient_name: Optional[str] = None
    reason: Optional[str] = None

    class Config:
        from_attributes = True

class AvailableSlotOut(SlotOut):
    doctor: Optional[DoctorSummary] = None

# ---------- selector de turnos ----------
class SlotDayGroup(BaseModel):
    date: date
    slots: list[AvailableSlotOut]
    more: int = 0          # franjas del día que no se muestran

class SlotPickerOut(BaseModel):
    days: list[SlotDayGroup]
    more_days: int = 0
    total: int = 0
