from pydantic import BaseModel
from typing import Optional


class DisplayNameIn(BaseModel):
    user_uuid: str


class NearestDoctorIn(BaseModel):
    lat: float
    long: float
    specialization_filter: Optional[str] = None
