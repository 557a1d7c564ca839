"""
User persistence.

All relational logic lives in the database procedures; this module only calls
them. `upd_user` and `del_user` raise P0002 when the userid is unknown, and
`ins_user` trips the unique constraint on a duplicate userid.
"""

from __future__ import annotations

from core import db
from core.entities import User


async def get_user(executor: db.Executor, userid: str) -> User | None:
    row = await db.fetch_one(
        executor,
        "SELECT id, first_name, last_name, userid FROM get_user($1)",
        userid,
    )
    return User.from_row(row) if row is not None else None


async def insert_user(executor: db.Executor, user: User) -> int:
    user_id = await db.fetch_value(
        executor,
        "SELECT ins_user($1, $2, $3)",
        user.first_name,
        user.last_name,
        user.userid,
    )
    if user_id is None:
        raise RuntimeError("Failed to insert user.")
    return int(user_id)


async def update_user(executor: db.Executor, user: User) -> int:
    """
    Update first/last name of the user matched by `user.userid`.
    Returns the surrogate id of the updated row.
    """
    user_id = await db.fetch_value(
        executor,
        "SELECT upd_user($1, $2, $3)",
        user.first_name,
        user.last_name,
        user.userid,
    )
    if user_id is None:
        raise RuntimeError("Failed to update user.")
    return int(user_id)


async def delete_user(executor: db.Executor, userid: str) -> None:
    await db.execute(executor, "SELECT del_user($1)", userid)
