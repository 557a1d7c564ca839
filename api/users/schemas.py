"""
User API schemas (request/response models).
"""

from __future__ import annotations

from pydantic import BaseModel


class UserPayload(BaseModel):
    # Presence of the required fields is checked in users.service.validate().
    first_name: str = ""
    last_name: str = ""
    userid: str = ""
    groups: list[str] | None = None


class UserResponse(BaseModel):
    first_name: str
    last_name: str
    userid: str
    groups: list[str]
