from pydantic import BaseModel, EmailStr
from typing import Optional


class DoctorOut(BaseModel):
    id: str
    name: str
    specialization: str
    hospital: str
    region: str
    address: str
    email: Optional[EmailStr] = None
    degrees: str = ""
    experience: int = 0
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    photo_url: str
    verified: bool = False
    available: bool = True

    class Config:
        from_attributes = True

    @staticmethod
    def from_model(d) -> "DoctorOut":
        """Construye seguro sin usar __dict__ (foto con fallback)."""
        from app.utils.images import image_or_fallback

        return DoctorOut(
            id=d.id,
            name=d.name,
            specialization=d.specialization,
            hospital=d.hospital,
            region=d.region,
            address=d.address,
            email=d.email,
            degrees=d.degrees,
            experience=d.experience,
            latitude=d.latitude,
            longitude=d.longitude,
            photo_url=image_or_fallback(d.photo_url),
            verified=bool(d.verified),
            available=bool(d.available),
        )


class DoctorSummary(BaseModel):
    name: str
    specialization: str
    hospital: str


class NearbyDoctorOut(BaseModel):
    """Fila devuelta por find_nearest_doctor."""
    id: str
    name: str
    specialization: str
    hospital: str
    address: str
    distance: float   # km
