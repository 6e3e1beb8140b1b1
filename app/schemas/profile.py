from pydantic import BaseModel
from typing import Optional


class ProfileUpdate(BaseModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone: Optional[str] = None
    gender: Optional[str] = None
    date_of_birth: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    region: Optional[str] = None
    avatar_url: Optional[str] = None
    allergies: Optional[str] = None
    medical_history: Optional[str] = None
    medications: Optional[str] = None
    emergency_contact_name: Optional[str] = None
    emergency_contact_phone: Optional[str] = None
    emergency_contact_relationship: Optional[str] = None


class ProfileOut(BaseModel):
    id: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone: Optional[str] = None
    gender: Optional[str] = None
    date_of_birth: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    region: Optional[str] = None
    avatar_url: str
    allergies: Optional[str] = None
    medical_history: Optional[str] = None
    medications: Optional[str] = None
    emergency_contact_name: Optional[str] = None
    emergency_contact_phone: Optional[str] = None
    emergency_contact_relationship: Optional[str] = None
    is_doctor: bool = False
    is_admin: bool = False

    class Config:
        from_attributes = True

    @staticmethod
    def from_model(p) -> "ProfileOut":
        from app.utils.images import image_or_fallback

        data = {k: getattr(p, k) for k in ProfileOut.model_fields if k != "avatar_url"}
        return ProfileOut(**data, avatar_url=image_or_fallback(p.avatar_url))
