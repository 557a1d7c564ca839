"""
Rows returned by the store procedures.

`id` is the surrogate key assigned by the store; `userid` and `name` are the
caller-supplied natural keys.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class User:
    first_name: str
    last_name: str
    userid: str
    id: int | None = None

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> User:
        return cls(
            id=int(row["id"]),
            first_name=str(row["first_name"]),
            last_name=str(row["last_name"]),
            userid=str(row["userid"]),
        )


@dataclass(frozen=True)
class Group:
    name: str
    id: int | None = None

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> Group:
        return cls(id=int(row["id"]), name=str(row["name"]))
