"""
Group API endpoints.
"""

from __future__ import annotations

import asyncpg
from fastapi import APIRouter, Depends, status

from core import db
from core.errors import NotFound

from . import schemas, service

router = APIRouter()


@router.get("/groups/{name}")
async def get_group(name: str, pool: asyncpg.Pool = Depends(db.pool)) -> dict:
    """
    List the userids of the group's members.
    """
    members = await service.get_group_with_users(pool, name)
    if members is None:
        raise NotFound(f"group {name} not found")
    return members.model_dump()


@router.post("/groups", status_code=status.HTTP_201_CREATED)
async def create_group(payload: schemas.GroupPayload, pool: asyncpg.Pool = Depends(db.pool)) -> dict:
    await service.create_group(pool, payload)
    return {"result": f"group {payload.name} has been created"}


@router.put("/groups/{name}")
async def update_group(
    name: str,
    payload: schemas.GroupMembers,
    pool: asyncpg.Pool = Depends(db.pool),
) -> dict:
    """
    Replace the group's members with `userids`.
    """
    await service.update_group_membership(pool, name, payload.userids)
    return {"result": f"group {name} has been updated"}


@router.delete("/groups/{name}")
async def delete_group(name: str, pool: asyncpg.Pool = Depends(db.pool)) -> dict:
    """
    Delete a group and every link to its members.
    """
    await service.delete_group(pool, name)
    return {"result": f"group {name} has been deleted"}
