"""
Group API schemas.
"""

from __future__ import annotations

from pydantic import BaseModel


class GroupPayload(BaseModel):
    name: str = ""


class GroupMembers(BaseModel):
    """
    Request and response body for a group's member list.
    """

    userids: list[str] | None = None
