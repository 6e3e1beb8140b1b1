import uuid
from datetime import datetime
from typing import Any
from sqlalchemy import String, ForeignKey, DateTime, Text, Boolean, JSON
from sqlalchemy.orm import Mapped, mapped_column
from app.core.db import Base

class HealthCheck(Base):
    __tablename__ = "health_checks"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id: Mapped[str] = mapped_column(String(36), ForeignKey("profiles.id"), index=True)

    symptoms: Mapped[list[str]] = mapped_column(JSON, default=list)
    severity: Mapped[str | None] = mapped_column(String(20), nullable=True)
    duration: Mapped[str | None] = mapped_column(String(50), nullable=True)
    previous_conditions: Mapped[list[str]] = mapped_column(JSON, default=list)
    medications: Mapped[list[str]] = mapped_column(JSON, default=list)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    analysis_results: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)
    urgency_level: Mapped[str | None] = mapped_column(String(20), nullable=True)
    overall_assessment: Mapped[str | None] = mapped_column(Text, nullable=True)
    comprehensive_analysis: Mapped[bool] = mapped_column(Boolean, default=False)

    # {"photo_1": url, "photo_2": url, ...}
    symptom_photos: Mapped[dict[str, str]] = mapped_column(JSON, default=dict)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, index=True)
