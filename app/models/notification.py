import uuid
import enum
from datetime import datetime
from typing import Any
from sqlalchemy import String, Enum, ForeignKey, DateTime, JSON
from sqlalchemy.orm import Mapped, mapped_column

from app.core.db import Base

class NotificationStatus(str, enum.Enum):
    sent = "sent"
    read = "read"
    acknowledged = "acknowledged"

# sólo avanza: sent -> read -> acknowledged
NOTIFICATION_STATUS_ORDER = {
    NotificationStatus.sent: 0,
    NotificationStatus.read: 1,
    NotificationStatus.acknowledged: 2,
}

class DoctorNotification(Base):
    __tablename__ = "doctor_notifications"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    doctor_id: Mapped[str] = mapped_column(String(36), ForeignKey("doctors.id"), index=True)
    patient_id: Mapped[str] = mapped_column(String(36), ForeignKey("profiles.id"), index=True)
    appointment_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("appointments.id", ondelete="CASCADE"), index=True
    )
    health_check_id: Mapped[str] = mapped_column(String(36), index=True)

    symptoms_data: Mapped[dict[str, Any]] = mapped_column(JSON, default=dict)
    status: Mapped[NotificationStatus] = mapped_column(Enum(NotificationStatus), default=NotificationStatus.sent)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, index=True)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
