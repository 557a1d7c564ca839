"""
Group business logic.

Groups are created empty. Their member list is replaced as a standalone
operation, outside of any transaction with a group write.
"""

from __future__ import annotations

import logging

import asyncpg

from core.entities import Group
from core.errors import NotFound, ValidationError
from membership import repository as membership_repository

from . import repository, schemas

logger = logging.getLogger(__name__)


def validate(payload: schemas.GroupPayload) -> None:
    if not payload.name:
        raise ValidationError("name field must be populated")


async def get_group_with_users(pool: asyncpg.Pool, name: str) -> schemas.GroupMembers | None:
    """
    Return the userids of the group's members, or None if the group does not
    exist.
    """
    group = await repository.get_group(pool, name)
    if group is None:
        return None

    users = await membership_repository.users_for_group(pool, group.id)
    return schemas.GroupMembers(userids=[u.userid for u in users])


async def create_group(pool: asyncpg.Pool, payload: schemas.GroupPayload) -> int:
    validate(payload)
    group_id = await repository.insert_group(pool, Group(name=payload.name))
    logger.info("group_created name=%s group_id=%s", payload.name, group_id)
    return group_id


async def update_group_membership(pool: asyncpg.Pool, name: str, userids: list[str] | None) -> None:
    """
    Replace the group's members with `userids`.

    The group must exist, even when `userids` is empty and the replace itself
    would do nothing. Unknown userids are skipped by the store.
    """
    group = await repository.get_group(pool, name)
    if group is None:
        raise NotFound(f"group {name} not found")

    await membership_repository.replace_links_for_group(pool, name, userids)
    logger.info("group_members_replaced name=%s requested_users=%d", name, len(userids or []))


async def delete_group(pool: asyncpg.Pool, name: str) -> None:
    await repository.delete_group(pool, name)
    logger.info("group_deleted name=%s", name)
