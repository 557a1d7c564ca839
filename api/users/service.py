"""
User business logic.

A user's group list is written together with the user row: create and update
run the user procedure and then replace the user's group links on the same
connection, inside one transaction. Either both land or neither does.
"""

from __future__ import annotations

import logging

import asyncpg

from core import db
from core.entities import User
from core.errors import StoreError, ValidationError
from membership import repository as membership_repository

from . import repository, schemas

logger = logging.getLogger(__name__)


def validate(payload: schemas.UserPayload) -> None:
    if not payload.first_name or not payload.last_name or not payload.userid:
        raise ValidationError("first_name, last_name, and userid must all be populated")


def _to_user(payload: schemas.UserPayload) -> User:
    return User(
        first_name=payload.first_name,
        last_name=payload.last_name,
        userid=payload.userid,
    )


async def get_user_with_groups(pool: asyncpg.Pool, userid: str) -> schemas.UserResponse | None:
    """
    Return the user and the names of their groups, or None if the user does
    not exist.

    A failed group lookup does not fail the read: the user comes back with an
    empty group list and the failure is logged.
    """
    user = await repository.get_user(pool, userid)
    if user is None:
        return None

    try:
        groups = await membership_repository.groups_for_user(pool, user.id)
    except StoreError:
        logger.warning("user_groups_lookup_failed userid=%s", userid, exc_info=True)
        groups = []

    return schemas.UserResponse(
        first_name=user.first_name,
        last_name=user.last_name,
        userid=user.userid,
        groups=[g.name for g in groups],
    )


async def create_user(pool: asyncpg.Pool, payload: schemas.UserPayload) -> int:
    """
    Insert the user and link it to `payload.groups` in one transaction.
    Returns the new surrogate id.
    """
    validate(payload)

    async with db.transaction(pool) as conn:
        user_id = await repository.insert_user(conn, _to_user(payload))
        if payload.groups:
            await membership_repository.replace_links_for_user(conn, user_id, payload.groups)

    logger.info(
        "user_created userid=%s user_id=%s requested_groups=%d",
        payload.userid,
        user_id,
        len(payload.groups or []),
    )
    return user_id


async def update_user(pool: asyncpg.Pool, payload: schemas.UserPayload) -> int:
    """
    Update the user named by `payload.userid` and replace its group links.

    The userid itself is never changed here: the row matched is the one whose
    userid equals the payload's. A null or empty group list leaves the
    existing links as they are.
    """
    validate(payload)

    async with db.transaction(pool) as conn:
        user_id = await repository.update_user(conn, _to_user(payload))
        await membership_repository.replace_links_for_user(conn, user_id, payload.groups)

    logger.info(
        "user_updated userid=%s user_id=%s requested_groups=%d",
        payload.userid,
        user_id,
        len(payload.groups or []),
    )
    return user_id


async def delete_user(pool: asyncpg.Pool, userid: str) -> None:
    # Links are removed by del_user itself.
    await repository.delete_user(pool, userid)
    logger.info("user_deleted userid=%s", userid)
