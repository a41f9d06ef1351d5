"""
Ownership policy shared by bootcamps and reviews: the owner or an admin may
mutate a resource, nobody else may.
"""
import logging

from src.models.account import Actor, Role
from src.services.errors import NotAuthorized

logger = logging.getLogger(__name__)


def can_mutate(actor: Actor, owner_id: str) -> bool:
    return actor.role == Role.ADMIN or actor.id == owner_id


def ensure_can_mutate(actor: Actor, owner_id: str, action: str, resource: str):
    if not can_mutate(actor, owner_id):
        logger.warning(f"User {actor.id} denied: {action} {resource}")
        raise NotAuthorized(f"User {actor.id} is not authorized to {action} this {resource}")


def ensure_role(actor: Actor, *roles: Role):
    if actor.role not in roles:
        raise NotAuthorized(f"User role {actor.role.value} is not authorized to access this route")
