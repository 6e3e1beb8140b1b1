import uuid
import enum
from datetime import datetime
from sqlalchemy import String, Enum, ForeignKey, DateTime, Integer, Float, JSON
from sqlalchemy.orm import Mapped, mapped_column
from app.core.db import Base

class EmergencyStatus(str, enum.Enum):
    pending = "pending"
    assigned = "assigned"
    resolved = "resolved"

class EmergencyCall(Base):
    __tablename__ = "emergency_calls"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id: Mapped[str | None] = mapped_column(String(36), ForeignKey("profiles.id"), nullable=True, index=True)
    doctor_id: Mapped[str | None] = mapped_column(String(36), ForeignKey("doctors.id"), nullable=True, index=True)

    patient_name: Mapped[str] = mapped_column(String(255))
    address: Mapped[str] = mapped_column(String(255), default="")
    age: Mapped[int | None] = mapped_column(Integer, nullable=True)
    gender: Mapped[str | None] = mapped_column(String(20), nullable=True)

    symptoms: Mapped[list[str]] = mapped_column(JSON, default=list)
    severity: Mapped[str | None] = mapped_column(String(20), nullable=True)

    latitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    longitude: Mapped[float | None] = mapped_column(Float, nullable=True)

    status: Mapped[EmergencyStatus] = mapped_column(Enum(EmergencyStatus), default=EmergencyStatus.pending, index=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, index=True)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
