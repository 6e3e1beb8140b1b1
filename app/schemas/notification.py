from pydantic import BaseModel
from typing import Optional, Literal, Any
from datetime import date, time, datetime

NotificationStatus = Literal["sent", "read", "acknowledged"]

class NotificationOut(BaseModel):
    id: str
    doctor_id: str
    patient_id: str
    appointment_id: str
    health_check_id: str
    symptoms_data: dict[str, Any]
    status: NotificationStatus
    created_at: datetime
    patient_name: Optional[str] = None
    appointment_date: Optional[date] = None
    appointment_time: Optional[time] = None

    class Config:
        from_attributes = True
