from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

URL_PATTERN = r"^https?://\S+$"
EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class Career(str, Enum):
    WEB_DEVELOPMENT = "Web Development"
    MOBILE_DEVELOPMENT = "Mobile Development"
    UI_UX = "UI/UX"
    DATA_SCIENCE = "Data Science"
    BUSINESS = "Business"
    OTHER = "Other"


class Bootcamp(BaseModel):
    """Editable bootcamp fields, validated on create and on every merged update."""
    name: str = Field(..., min_length=1, max_length=50)
    description: str = Field(..., min_length=1, max_length=500)
    website: Optional[str] = Field(None, pattern=URL_PATTERN)
    phone: Optional[str] = Field(None, max_length=20)
    email: Optional[str] = Field(None, pattern=EMAIL_PATTERN)
    careers: List[Career] = Field(..., min_length=1)
    average_rating: Optional[float] = Field(None, ge=1, le=10)
    average_cost: Optional[float] = Field(None, ge=0)
    housing: bool = False
    job_assistance: bool = False
    job_guarantee: bool = False
    accept_gi: bool = False


class BootcampCreate(Bootcamp):
    model_config = ConfigDict(extra="forbid")

    address: str = Field(..., min_length=1)


class BootcampUpdate(BaseModel):
    # Owner, location and photo are not patchable
    model_config = ConfigDict(extra="forbid")

    name: Optional[str] = None
    description: Optional[str] = None
    website: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    careers: Optional[List[Career]] = None
    average_rating: Optional[float] = None
    average_cost: Optional[float] = None
    housing: Optional[bool] = None
    job_assistance: Optional[bool] = None
    job_guarantee: Optional[bool] = None
    accept_gi: Optional[bool] = None


def bootcamp_to_dict(bootcamp):
    return {
        "id": bootcamp.id,
        "user": bootcamp.user_id,
        "name": bootcamp.name,
        "slug": bootcamp.slug,
        "description": bootcamp.description,
        "website": bootcamp.website,
        "phone": bootcamp.phone,
        "email": bootcamp.email,
        "location": {
            "type": "Point",
            "coordinates": [bootcamp.longitude, bootcamp.latitude],
            "formatted_address": bootcamp.formatted_address,
            "street": bootcamp.street,
            "city": bootcamp.city,
            "state": bootcamp.state,
            "zipcode": bootcamp.zipcode,
            "country": bootcamp.country,
        },
        "careers": bootcamp.careers,
        "average_rating": bootcamp.average_rating,
        "average_cost": bootcamp.average_cost,
        "photo": bootcamp.photo,
        "housing": bootcamp.housing,
        "job_assistance": bootcamp.job_assistance,
        "job_guarantee": bootcamp.job_guarantee,
        "accept_gi": bootcamp.accept_gi,
        "created_at": bootcamp.created_at.isoformat() if bootcamp.created_at else None,
    }
