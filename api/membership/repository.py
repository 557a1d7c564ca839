"""
Membership persistence: the user <-> group link table.

Name sets are sent as a `text[]` parameter. The replace procedures drop every
existing link on their side of the relation and insert one row per known
name; names the store does not know are skipped without an error, so callers
must not assume every requested name was linked.
"""

from __future__ import annotations

from collections.abc import Iterable

from core import db
from core.entities import Group, User


def _name_list(names: Iterable[str]) -> list[str]:
    """
    Drop duplicates, keeping first-seen order.
    """
    return list(dict.fromkeys(names))


async def groups_for_user(executor: db.Executor, user_id: int) -> list[Group]:
    rows = await db.fetch_all(executor, "SELECT id, name FROM get_user_membership($1)", user_id)
    return [Group.from_row(r) for r in rows]


async def users_for_group(executor: db.Executor, group_id: int) -> list[User]:
    rows = await db.fetch_all(
        executor,
        "SELECT id, first_name, last_name, userid FROM get_group_membership($1)",
        group_id,
    )
    return [User.from_row(r) for r in rows]


async def replace_links_for_user(
    executor: db.Executor,
    user_id: int,
    group_names: Iterable[str] | None,
) -> None:
    """
    Replace the user's group links with exactly `group_names`.

    No-op (storage untouched) when the list is None or empty. Pass the
    transaction's connection when the user row was written in the same unit
    of work.
    """
    if not group_names:
        return
    names = _name_list(group_names)
    await db.execute(executor, "SELECT upd_user_membership($1, $2::text[])", user_id, names)


async def replace_links_for_group(
    executor: db.Executor,
    group_name: str,
    userids: Iterable[str] | None,
) -> None:
    """
    Replace the group's members with exactly `userids`. No-op when empty.
    """
    if not userids:
        return
    names = _name_list(userids)
    await db.execute(executor, "SELECT upd_group_membership($1, $2::text[])", group_name, names)
