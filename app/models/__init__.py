from app.models.profile import Profile
from app.models.doctor import Doctor
from app.models.appointment import Appointment, ApptStatus
from app.models.slot import AppointmentSlot, SlotStatus
from app.models.notification import DoctorNotification, NotificationStatus
from app.models.health_check import HealthCheck
from app.models.emergency import EmergencyCall, EmergencyStatus
