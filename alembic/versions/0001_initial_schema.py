"""initial schema

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-19 10:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0001_initial'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


APPT_STATUS = sa.Enum("pending", "confirmed", "cancelled", "completed", name="apptstatus")
SLOT_STATUS = sa.Enum("available", "booked", "cancelled", "completed", name="slotstatus")
NOTIFICATION_STATUS = sa.Enum("sent", "read", "acknowledged", name="notificationstatus")
EMERGENCY_STATUS = sa.Enum("pending", "assigned", "resolved", name="emergencystatus")


def upgrade() -> None:
    op.create_table(
        "profiles",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("first_name", sa.String(100), nullable=True),
        sa.Column("last_name", sa.String(100), nullable=True),
        sa.Column("phone", sa.String(50), nullable=True),
        sa.Column("gender", sa.String(20), nullable=True),
        sa.Column("date_of_birth", sa.String(10), nullable=True),
        sa.Column("address", sa.String(255), nullable=True),
        sa.Column("city", sa.String(100), nullable=True),
        sa.Column("region", sa.String(100), nullable=True),
        sa.Column("avatar_url", sa.String(1024), nullable=True),
        sa.Column("allergies", sa.Text(), nullable=True),
        sa.Column("medical_history", sa.Text(), nullable=True),
        sa.Column("medications", sa.Text(), nullable=True),
        sa.Column("emergency_contact_name", sa.String(255), nullable=True),
        sa.Column("emergency_contact_phone", sa.String(50), nullable=True),
        sa.Column("emergency_contact_relationship", sa.String(50), nullable=True),
        sa.Column("is_doctor", sa.Boolean(), nullable=False),
        sa.Column("is_admin", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
    )

    op.create_table(
        "doctors",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("specialization", sa.String(100), nullable=False),
        sa.Column("hospital", sa.String(255), nullable=False),
        sa.Column("region", sa.String(100), nullable=False),
        sa.Column("address", sa.String(255), nullable=False),
        sa.Column("degrees", sa.String(255), nullable=False),
        sa.Column("experience", sa.Integer(), nullable=False),
        sa.Column("registration_number", sa.String(64), nullable=False),
        sa.Column("latitude", sa.Float(), nullable=True),
        sa.Column("longitude", sa.Float(), nullable=True),
        sa.Column("photo_url", sa.String(1024), nullable=True),
        sa.Column("verified", sa.Boolean(), nullable=False),
        sa.Column("available", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_doctors_name", "doctors", ["name"])
    op.create_index("ix_doctors_specialization", "doctors", ["specialization"])

    op.create_table(
        "appointments",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("user_id", sa.String(36), sa.ForeignKey("profiles.id"), nullable=False),
        sa.Column("doctor_id", sa.String(36), sa.ForeignKey("doctors.id"), nullable=False),
        sa.Column("doctor_name", sa.String(255), nullable=False),
        sa.Column("doctor_specialty", sa.String(100), nullable=True),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("time", sa.Time(), nullable=False),
        sa.Column("status", APPT_STATUS, nullable=False),
        sa.Column("reason", sa.String(255), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_appointments_user_id", "appointments", ["user_id"])
    op.create_index("ix_appointments_doctor_id", "appointments", ["doctor_id"])
    op.create_index("ix_appointments_date", "appointments", ["date"])
    op.create_index("ix_appointments_status", "appointments", ["status"])
    # agenda del doctor ordenada por (fecha, hora)
    op.create_index("ix_appt_doctor_date_time", "appointments", ["doctor_id", "date", "time"])
    # próximos turnos del paciente
    op.create_index("ix_appt_user_date", "appointments", ["user_id", "date"])

    op.create_table(
        "appointment_slots",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("doctor_id", sa.String(36), sa.ForeignKey("doctors.id"), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("start_time", sa.Time(), nullable=False),
        sa.Column("end_time", sa.Time(), nullable=False),
        sa.Column("duration", sa.Integer(), nullable=False),
        sa.Column("max_patients", sa.Integer(), nullable=False),
        sa.Column("status", SLOT_STATUS, nullable=False),
        sa.Column("user_id", sa.String(36), sa.ForeignKey("profiles.id"), nullable=True),
        sa.Column("patient_name", sa.String(255), nullable=True),
        sa.Column("reason", sa.String(255), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_appointment_slots_doctor_id", "appointment_slots", ["doctor_id"])
    op.create_index("ix_appointment_slots_date", "appointment_slots", ["date"])
    op.create_index("ix_appointment_slots_status", "appointment_slots", ["status"])
    op.create_index("ix_appointment_slots_user_id", "appointment_slots", ["user_id"])
    op.create_index("ix_slot_doctor_date_start", "appointment_slots", ["doctor_id", "date", "start_time"])

    op.create_table(
        "health_checks",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("user_id", sa.String(36), sa.ForeignKey("profiles.id"), nullable=False),
        sa.Column("symptoms", sa.JSON(), nullable=False),
        sa.Column("severity", sa.String(20), nullable=True),
        sa.Column("duration", sa.String(50), nullable=True),
        sa.Column("previous_conditions", sa.JSON(), nullable=False),
        sa.Column("medications", sa.JSON(), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("analysis_results", sa.JSON(), nullable=True),
        sa.Column("urgency_level", sa.String(20), nullable=True),
        sa.Column("overall_assessment", sa.Text(), nullable=True),
        sa.Column("comprehensive_analysis", sa.Boolean(), nullable=False),
        sa.Column("symptom_photos", sa.JSON(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_health_checks_user_id", "health_checks", ["user_id"])
    op.create_index("ix_health_checks_created_at", "health_checks", ["created_at"])

    op.create_table(
        "doctor_notifications",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("doctor_id", sa.String(36), sa.ForeignKey("doctors.id"), nullable=False),
        sa.Column("patient_id", sa.String(36), sa.ForeignKey("profiles.id"), nullable=False),
        sa.Column("appointment_id", sa.String(36),
                  sa.ForeignKey("appointments.id", ondelete="CASCADE"), nullable=False),
        sa.Column("health_check_id", sa.String(36), nullable=False),
        sa.Column("symptoms_data", sa.JSON(), nullable=False),
        sa.Column("status", NOTIFICATION_STATUS, nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_doctor_notifications_doctor_id", "doctor_notifications", ["doctor_id"])
    op.create_index("ix_doctor_notifications_patient_id", "doctor_notifications", ["patient_id"])
    op.create_index("ix_doctor_notifications_appointment_id", "doctor_notifications", ["appointment_id"])
    op.create_index("ix_doctor_notifications_health_check_id", "doctor_notifications", ["health_check_id"])
    op.create_index("ix_doctor_notifications_created_at", "doctor_notifications", ["created_at"])

    op.create_table(
        "emergency_calls",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("user_id", sa.String(36), sa.ForeignKey("profiles.id"), nullable=True),
        sa.Column("doctor_id", sa.String(36), sa.ForeignKey("doctors.id"), nullable=True),
        sa.Column("patient_name", sa.String(255), nullable=False),
        sa.Column("address", sa.String(255), nullable=False),
        sa.Column("age", sa.Integer(), nullable=True),
        sa.Column("gender", sa.String(20), nullable=True),
        sa.Column("symptoms", sa.JSON(), nullable=False),
        sa.Column("severity", sa.String(20), nullable=True),
        sa.Column("latitude", sa.Float(), nullable=True),
        sa.Column("longitude", sa.Float(), nullable=True),
        sa.Column("status", EMERGENCY_STATUS, nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_emergency_calls_user_id", "emergency_calls", ["user_id"])
    op.create_index("ix_emergency_calls_doctor_id", "emergency_calls", ["doctor_id"])
    op.create_index("ix_emergency_calls_status", "emergency_calls", ["status"])
    op.create_index("ix_emergency_calls_created_at", "emergency_calls", ["created_at"])


def downgrade() -> None:
    # orden inverso por las FKs
    op.drop_table("emergency_calls")
    op.drop_table("doctor_notifications")
    op.drop_table("health_checks")
    op.drop_table("appointment_slots")
    op.drop_table("appointments")
    op.drop_table("doctors")
    op.drop_table("profiles")
