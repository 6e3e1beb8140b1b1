from pydantic import BaseModel, Field
from typing import Optional, Literal
from datetime import date, time, datetime

ApptStatus = Literal["pending", "confirmed", "cancelled", "completed"]
ApptSource = Literal["direct", "slot"]
UnifiedStatus = Literal["pending", "confirmed", "cancelled", "completed"]  # booked se muestra como confirmed

class AppointmentCreate(BaseModel):
    doctor_name: str
    doctor_id: Optional[str] = None        # si no viene, se busca por nombre
    date: date
    time: time
    reason: Optional[str] = None
    notes: Optional[str] = None

class AppointmentOut(BaseModel):
    id: str
    user_id: str
    doctor_id: str
    doctor_name: str
    doctor_specialty: Optional[str] = None
    date: date
    time: time
    status: ApptStatus
    reason: Optional[str] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True

# ---------- vista unificada (doctor) ----------
class UnifiedAppointment(BaseModel):
    id: str
    date: date
    time: time
    patient_name: str
    reason: str
    status: UnifiedStatus
    notes: Optional[str] = None
    type: ApptSource
    user_id: Optional[str] = None
    doctor_id: Optional[str] = None
    doctor_name: Optional[str] = None
    start_time: Optional[time] = None
    end_time: Optional[time] = None

class UnifiedAppointmentsOut(BaseModel):
    appointments: list[UnifiedAppointment] = Field(default_factory=list)
    error: Optional[str] = None

class AppointmentStatusIn(BaseModel):
    status: ApptStatus
    type: ApptSource

class AppointmentStatusOut(UnifiedAppointmentsOut):
    ok: bool
    message: str
