import logging

from src.db.database import ReviewDB
from src.db.repository import BootcampRepository, Repository
from src.models.review import Review, ReviewCreate, ReviewUpdate
from src.services.authorization import ensure_can_mutate
from src.services.errors import NotFound
from src.services.validation import validate_new, validate_patch

logger = logging.getLogger(__name__)


def _load(repo, review_id):
    review = repo.find_by_id(review_id)
    if review is None:
        raise NotFound(f"No review found with the ID of {review_id}")
    return review


def list_reviews(db, bootcamp_id=None):
    repo = Repository(db, ReviewDB)
    if bootcamp_id is not None:
        return repo.find_all(bootcamp_id=bootcamp_id)
    return repo.find_all()


def get_review(db, review_id):
    """Return the review together with the bootcamp it belongs to (None if that bootcamp is gone)."""
    review = _load(Repository(db, ReviewDB), review_id)
    return review, BootcampRepository(db).find_by_id(review.bootcamp_id)


def create_review(db, actor, bootcamp_id, payload: dict):
    if BootcampRepository(db).find_by_id(bootcamp_id) is None:
        raise NotFound(f"No bootcamp with the ID of {bootcamp_id}")

    data = validate_new(ReviewCreate, payload)
    data.update(bootcamp_id=bootcamp_id, user_id=actor.id)
    review = Repository(db, ReviewDB).insert(data)
    logger.info(f"User {actor.id} reviewed bootcamp {bootcamp_id}")
    return review


def update_review(db, actor, review_id, patch: dict):
    repo = Repository(db, ReviewDB)
    review = _load(repo, review_id)
    ensure_can_mutate(actor, review.user_id, "update", "review")

    values = validate_patch(Review, ReviewUpdate, review, patch)
    if not values:
        return review
    updated = repo.atomic_update(review_id, values)
    if updated is None:
        raise NotFound(f"No review found with the ID of {review_id}")
    return updated


def delete_review(db, actor, review_id):
    repo = Repository(db, ReviewDB)
    review = _load(repo, review_id)
    ensure_can_mutate(actor, review.user_id, "delete", "review")

    if not repo.atomic_delete(review_id):
        raise NotFound(f"No review found with the ID of {review_id}")
    logger.info(f"Deleted review {review_id}")
