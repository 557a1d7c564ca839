"""
User API endpoints.
"""

from __future__ import annotations

import logging

import asyncpg
from fastapi import APIRouter, Depends, status

from core import db
from core.errors import NotFound

from . import schemas, service

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/users/{userid}")
async def get_user(userid: str, pool: asyncpg.Pool = Depends(db.pool)) -> dict:
    """
    Get a user and the names of the groups they belong to.
    """
    user = await service.get_user_with_groups(pool, userid)
    if user is None:
        raise NotFound(f"user id {userid} was not found")
    return user.model_dump()


@router.post("/users", status_code=status.HTTP_201_CREATED)
async def create_user(payload: schemas.UserPayload, pool: asyncpg.Pool = Depends(db.pool)) -> dict:
    """
    Create a user, linked to any existing groups named in `groups`.
    """
    await service.create_user(pool, payload)
    return {"result": f"user {payload.userid} created"}


@router.put("/users/{userid}")
async def update_user(
    userid: str,
    payload: schemas.UserPayload,
    pool: asyncpg.Pool = Depends(db.pool),
) -> dict:
    """
    Update a user and replace their group links.

    The row updated is the one named by the body's `userid`.
    """
    if payload.userid and payload.userid != userid:
        logger.info("user_update_key_mismatch path_userid=%s body_userid=%s", userid, payload.userid)
    await service.update_user(pool, payload)
    return {"result": f"user {payload.userid} has been updated"}


@router.delete("/users/{userid}")
async def delete_user(userid: str, pool: asyncpg.Pool = Depends(db.pool)) -> dict:
    await service.delete_user(pool, userid)
    return {"result": f"user {userid} has been deleted"}
