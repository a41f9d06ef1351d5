from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Review(BaseModel):
    title: str = Field(..., min_length=1, max_length=100)
    text: str = Field(..., min_length=1)
    rating: int = Field(..., ge=1, le=10)


class ReviewCreate(Review):
    model_config = ConfigDict(extra="forbid")


class ReviewUpdate(BaseModel):
    # The bootcamp reference is fixed at creation
    model_config = ConfigDict(extra="forbid")

    title: Optional[str] = None
    text: Optional[str] = None
    rating: Optional[int] = None


def review_to_dict(review, bootcamp=None):
    data = {
        "id": review.id,
        "title": review.title,
        "text": review.text,
        "rating": review.rating,
        "bootcamp": review.bootcamp_id,
        "user": review.user_id,
        "created_at": review.created_at.isoformat() if review.created_at else None,
    }
    if bootcamp is not None:
        data["bootcamp"] = {
            "id": bootcamp.id,
            "name": bootcamp.name,
            "description": bootcamp.description,
        }
    return data
