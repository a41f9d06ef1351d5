"""
Account administration. Every operation here is restricted to admins by the
API layer; credentials are managed elsewhere.
"""
import logging

from src.db.database import UserDB
from src.db.repository import Repository
from src.models.account import Actor, Role, User, UserCreate, UserUpdate
from src.services.errors import NotAuthenticated, NotFound
from src.services.validation import validate_new, validate_patch

logger = logging.getLogger(__name__)


def _load(repo, user_id):
    user = repo.find_by_id(user_id)
    if user is None:
        raise NotFound(f"No user found with the ID of {user_id}")
    return user


def resolve_actor(db, user_id):
    """Turn the caller's account id into an Actor, reading the role from storage."""
    if not user_id:
        raise NotAuthenticated("Not authorized to access this route")
    user = Repository(db, UserDB).find_by_id(user_id)
    if user is None:
        raise NotAuthenticated("Not authorized to access this route")
    return Actor(id=user.id, role=Role(user.role))


def list_users(db):
    return Repository(db, UserDB).find_all()


def get_user(db, user_id):
    return _load(Repository(db, UserDB), user_id)


def create_user(db, payload: dict):
    user = Repository(db, UserDB).insert(validate_new(UserCreate, payload))
    logger.info(f"Created user {user.id} with role {user.role}")
    return user


def update_user(db, user_id, patch: dict):
    repo = Repository(db, UserDB)
    user = _load(repo, user_id)
    values = validate_patch(User, UserUpdate, user, patch)
    if not values:
        return user
    updated = repo.atomic_update(user_id, values)
    if updated is None:
        raise NotFound(f"No user found with the ID of {user_id}")
    return updated


def delete_user(db, user_id):
    if not Repository(db, UserDB).atomic_delete(user_id):
        raise NotFound(f"No user found with the ID of {user_id}")
    logger.info(f"Deleted user {user_id}")
