import uuid
import enum
import datetime as dt
from sqlalchemy import String, Enum, ForeignKey, DateTime, Date, Time, Text, Index
from sqlalchemy.orm import Mapped, mapped_column

from app.core.db import Base

class ApptStatus(str, enum.Enum):
    pending = "pending"
    confirmed = "confirmed"
    cancelled = "cancelled"
    completed = "completed"

class Appointment(Base):
    """Turno directo (reservado por el paciente contra un doctor)."""
    __tablename__ = "appointments"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    user_id: Mapped[str] = mapped_column(String(36), ForeignKey("profiles.id"), index=True)
    doctor_id: Mapped[str] = mapped_column(String(36), ForeignKey("doctors.id"), index=True)
    doctor_name: Mapped[str] = mapped_column(String(255))
    doctor_specialty: Mapped[str | None] = mapped_column(String(100), nullable=True)

    date: Mapped[dt.date] = mapped_column(Date, index=True)
    time: Mapped[dt.time] = mapped_column(Time)

    status: Mapped[ApptStatus] = mapped_column(Enum(ApptStatus), default=ApptStatus.pending, index=True)
    reason: Mapped[str | None] = mapped_column(String(255), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    created_at: Mapped[dt.datetime] = mapped_column(DateTime, default=dt.datetime.utcnow)
    updated_at: Mapped[dt.datetime] = mapped_column(DateTime, default=dt.datetime.utcnow, onupdate=dt.datetime.utcnow)

    __table_args__ = (
        Index("ix_appt_doctor_date_time", "doctor_id", "date", "time"),
        Index("ix_appt_user_date", "user_id", "date"),
    )
