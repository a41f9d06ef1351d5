"""
Bootcamp operations.

Every mutation loads the bootcamp first (NotFound if absent), checks the
ownership policy, and only then writes with a single-row statement.
"""
import re
import logging

from src.db.database import ReviewDB
from src.db.repository import BootcampRepository, Repository
from src.models.bootcamp import Bootcamp, BootcampCreate, BootcampUpdate
from src.services.authorization import ensure_can_mutate
from src.services.errors import NotFound, PolicyViolation
from src.services.radius_search import find_within, parse_distance
from src.services.uploads import photo_filename, store_file, validate_upload
from src.services.validation import validate_new, validate_patch

logger = logging.getLogger(__name__)


def slugify(name):
    return re.sub(r"[^a-z0-9]+", "-", name.lower()).strip("-")


def _load(repo, bootcamp_id):
    bootcamp = repo.find_by_id(bootcamp_id)
    if bootcamp is None:
        raise NotFound(f"Bootcamp not found with ID of {bootcamp_id}")
    return bootcamp


def list_bootcamps(db):
    return BootcampRepository(db).find_all()


def get_bootcamp(db, bootcamp_id):
    return _load(BootcampRepository(db), bootcamp_id)


def create_bootcamp(db, actor, payload: dict, geocode):
    """
    Create a bootcamp owned by ``actor``.

    A non-admin may own a single bootcamp. The check reads existing bootcamps
    before inserting, without a transaction around both steps, so two
    concurrent creates by the same user can both succeed.
    """
    repo = BootcampRepository(db)
    data = validate_new(BootcampCreate, payload)

    published = repo.find_one(user_id=actor.id)
    if published is not None and not actor.is_admin:
        raise PolicyViolation(f"The user with ID {actor.id} has already published a bootcamp")

    address = data.pop("address")
    location = geocode(address)

    data.update(
        user_id=actor.id,
        slug=slugify(data["name"]),
        longitude=location.longitude,
        latitude=location.latitude,
        formatted_address=location.formatted_address,
        street=location.street,
        city=location.city,
        state=location.state,
        zipcode=location.zipcode,
        country=location.country,
    )
    bootcamp = repo.insert(data)
    logger.info(f"Created bootcamp {bootcamp.id} for user {actor.id}")
    return bootcamp


def update_bootcamp(db, actor, bootcamp_id, patch: dict):
    repo = BootcampRepository(db)
    bootcamp = _load(repo, bootcamp_id)
    ensure_can_mutate(actor, bootcamp.user_id, "update", "bootcamp")

    values = validate_patch(Bootcamp, BootcampUpdate, bootcamp, patch)
    if not values:
        return bootcamp
    if "name" in values:
        values["slug"] = slugify(values["name"])

    updated = repo.atomic_update(bootcamp_id, values)
    if updated is None:
        raise NotFound(f"Bootcamp not found with ID of {bootcamp_id}")
    return updated


def delete_bootcamp(db, actor, bootcamp_id, cascade_reviews=False):
    repo = BootcampRepository(db)
    bootcamp = _load(repo, bootcamp_id)
    ensure_can_mutate(actor, bootcamp.user_id, "delete", "bootcamp")

    removed_reviews = 0
    if cascade_reviews:
        removed_reviews = Repository(db, ReviewDB).delete_many(commit=False, bootcamp_id=bootcamp_id)
    if not repo.atomic_delete(bootcamp_id, commit=False):
        db.rollback()
        raise NotFound(f"Bootcamp not found with ID of {bootcamp_id}")
    repo.commit()
    logger.info(f"Deleted bootcamp {bootcamp_id} ({removed_reviews} reviews removed)")


def bootcamps_in_radius(db, zipcode, distance, geocode):
    distance = parse_distance(distance)
    center = geocode(zipcode)
    return find_within(BootcampRepository(db), center, distance)


def upload_bootcamp_photo(db, actor, bootcamp_id, filename, media_type, size, stream, max_size, upload_path):
    """
    Validate and store a bootcamp photo; returns the stored filename.

    ``size`` is the declared upload size, checked before ``stream`` is read.
    """
    repo = BootcampRepository(db)
    bootcamp = _load(repo, bootcamp_id)
    ensure_can_mutate(actor, bootcamp.user_id, "update", "bootcamp")

    validate_upload(media_type, size or 0, max_size)

    stored_name = photo_filename(bootcamp.id, filename)
    store_file(stream, upload_path, stored_name)

    if repo.atomic_update(bootcamp_id, {"photo": stored_name}) is None:
        raise NotFound(f"Bootcamp not found with ID of {bootcamp_id}")
    logger.info(f"Stored photo {stored_name} for bootcamp {bootcamp_id}")
    return stored_name
