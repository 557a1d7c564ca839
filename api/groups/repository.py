"""
Group persistence (procedure calls).
"""

from __future__ import annotations

from core import db
from core.entities import Group


async def get_group(executor: db.Executor, name: str) -> Group | None:
    row = await db.fetch_one(executor, "SELECT id, name FROM get_group($1)", name)
    return Group.from_row(row) if row is not None else None


async def insert_group(executor: db.Executor, group: Group) -> int:
    group_id = await db.fetch_value(executor, "SELECT ins_group($1)", group.name)
    if group_id is None:
        raise RuntimeError("Failed to insert group.")
    return int(group_id)


async def delete_group(executor: db.Executor, name: str) -> None:
    # Membership rows go with the group (cascade inside del_group).
    await db.execute(executor, "SELECT del_group($1)", name)
