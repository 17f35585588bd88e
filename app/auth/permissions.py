"""Capability checks shared by the route handlers.

Every ownership-scoped write goes through these helpers so create, update
and delete agree on who may touch a row.
"""

from app.models.user import Role

STORE_MANAGERS = frozenset({Role.ADMIN, Role.STORE_OWNER})


def can_manage_store(actor, store) -> bool:
    if actor.is_admin:
        return True
    return actor.role == Role.STORE_OWNER and store.owner_id == actor.id


def can_access_user(actor, user_id: int) -> bool:
    return actor.is_admin or actor.id == user_id


def can_delete_rating(actor, rating) -> bool:
    return actor.is_admin or rating.user_id == actor.id


def resolve_store_owner(actor, requested_owner_id: int | None) -> int | None:
    """Owner id to persist for a store written by ``actor``.

    Store owners always own what they write; only admins may pick an owner.
    """
    if actor.role == Role.STORE_OWNER:
        return actor.id
    return requested_owner_id
