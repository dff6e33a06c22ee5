"""Ownership-or-admin access rules for categories and tasks.

Every function is a pure predicate over the acting user and the entity;
``authorize`` turns a denial into ``Forbidden`` so callers never leak a
403 as a 404 or an empty result.
"""
import logging

from app.exceptions import Forbidden
from app.models.category import Category
from app.models.tasks import Task
from app.models.user import Role, User

logger = logging.getLogger(__name__)


def owns_or_admin(actor: User, owner_id: int | None) -> bool:
    match actor.role:
        case Role.ADMIN:
            return True
        case Role.USER:
            return owner_id is not None and actor.user_id == owner_id
    raise ValueError(f"Unknown role: {actor.role!r}")


def can_create(actor: User) -> bool:
    match actor.role:
        case Role.USER | Role.ADMIN:
            return True
    return False


# ── Category ───────────────────────────────────────────

def can_view_category(actor: User, category: Category) -> bool:
    # Any authenticated user may view any category by id, owned or not.
    # Listing is still scoped to own + default categories.
    return True


def can_create_category(actor: User) -> bool:
    return can_create(actor)


def can_update_category(actor: User, category: Category) -> bool:
    return owns_or_admin(actor, category.owner_id)


def can_delete_category(actor: User, category: Category) -> bool:
    return owns_or_admin(actor, category.owner_id)


# ── Task ───────────────────────────────────────────────

def can_view_task(actor: User, task: Task) -> bool:
    return owns_or_admin(actor, task.owner_id)


def can_create_task(actor: User) -> bool:
    return can_create(actor)


def can_update_task(actor: User, task: Task) -> bool:
    return owns_or_admin(actor, task.owner_id)


def can_delete_task(actor: User, task: Task) -> bool:
    return owns_or_admin(actor, task.owner_id)


def authorize(allowed: bool, actor: User, action: str) -> None:
    if not allowed:
        logger.warning("Denied %s for user %s", action, actor.user_id)
        raise Forbidden()
