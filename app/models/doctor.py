from datetime import datetime
from sqlalchemy import String, Boolean, Integer, Float, DateTime
from sqlalchemy.orm import Mapped, mapped_column
from app.core.db import Base

class Doctor(Base):
    __tablename__ = "doctors"

    # id == profiles.id del doctor
    id: Mapped[str] = mapped_column(String(36), primary_key=True)

    name: Mapped[str] = mapped_column(String(255), index=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)

    specialization: Mapped[str] = mapped_column(String(100), index=True)
    hospital: Mapped[str] = mapped_column(String(255), default="")
    region: Mapped[str] = mapped_column(String(100), default="")
    address: Mapped[str] = mapped_column(String(255), default="")

    degrees: Mapped[str] = mapped_column(String(255), default="")
    experience: Mapped[int] = mapped_column(Integer, default=0)
    registration_number: Mapped[str] = mapped_column(String(64), default="")

    latitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    longitude: Mapped[float | None] = mapped_column(Float, nullable=True)

    photo_url: Mapped[str | None] = mapped_column(String(1024), nullable=True)

    verified: Mapped[bool] = mapped_column(Boolean, default=False)
    available: Mapped[bool] = mapped_column(Boolean, default=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
