"""
Async database access helpers (raw SQL) using asyncpg.

This module owns the connection pool. FastAPI initializes it on startup and
closes it on shutdown (see `api/main.py`).

Every helper takes the executor as its first argument: the pool for one-shot
calls, or a connection handed out by `transaction()` for calls that must share
a unit of work. Store errors are translated here, once, into the types in
`core.errors`.

SQL parameter style:
- asyncpg uses positional placeholders: $1, $2, $3, ...
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Iterator
from contextlib import asynccontextmanager, contextmanager
from typing import Any
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

import asyncpg

from .config import Settings
from .errors import ConstraintConflict, NotFound, StoreError

Executor = asyncpg.Pool | asyncpg.Connection

_pool: asyncpg.Pool | None = None


def _sanitize_database_url(url: str) -> str:
    parts = urlsplit(url)
    if not parts.query:
        return url

    params = [(k, v) for (k, v) in parse_qsl(parts.query, keep_blank_values=True) if k != "sslmode"]
    query = urlencode(params)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment))


def database_url(settings: Settings) -> str:
    return _sanitize_database_url(settings.dsn)


async def init_pool(settings: Settings) -> None:
    global _pool
    if _pool is not None:
        return None
    _pool = await asyncpg.create_pool(
        dsn=database_url(settings),
        min_size=settings.db_pool_min_size,
        max_size=settings.db_pool_max_size,
        command_timeout=settings.db_command_timeout,
    )


async def close_pool() -> None:
    global _pool
    if _pool is None:
        return None
    await _pool.close()
    _pool = None


def pool() -> asyncpg.Pool:
    """
    Current pool. Also used as the FastAPI dependency that hands the pool to
    routes (tests override it).
    """
    if _pool is None:
        raise RuntimeError("DB pool is not initialized. Call init_pool() on startup.")
    return _pool


@contextmanager
def _translate_store_errors() -> Iterator[None]:
    # The procedures raise P0002 (no_data_found) for an absent target row.
    try:
        yield
    except asyncpg.UniqueViolationError as exc:
        raise ConstraintConflict(str(exc)) from exc
    except asyncpg.exceptions.NoDataFoundError as exc:
        raise NotFound(str(exc)) from exc
    except (asyncpg.PostgresError, asyncpg.InterfaceError, OSError, TimeoutError) as exc:
        raise StoreError(str(exc) or type(exc).__name__) from exc


@asynccontextmanager
async def transaction(executor: asyncpg.Pool) -> AsyncIterator[asyncpg.Connection]:
    """
    Acquire a dedicated connection and run the block in one transaction.

    Commits when the block exits normally; rolls back on any exception,
    including cancellation. The connection goes back to the pool either way.
    """
    with _translate_store_errors():
        async with executor.acquire() as conn:
            async with conn.transaction():
                yield conn


def _record_to_dict(record: asyncpg.Record) -> dict[str, Any]:
    return dict(record)


async def fetch_one(executor: Executor, sql: str, *args: Any) -> dict[str, Any] | None:
    """
    Run a query and return a single row as a dict (or None).
    """
    with _translate_store_errors():
        row = await executor.fetchrow(sql, *args)
    return _record_to_dict(row) if row is not None else None


async def fetch_all(executor: Executor, sql: str, *args: Any) -> list[dict[str, Any]]:
    """
    Run a query and return all rows as a list of dicts.
    """
    with _translate_store_errors():
        rows = await executor.fetch(sql, *args)
    return [_record_to_dict(r) for r in rows]


async def fetch_value(executor: Executor, sql: str, *args: Any) -> Any:
    """
    Run a query and return the first column of the first row.
    """
    with _translate_store_errors():
        return await executor.fetchval(sql, *args)


async def execute(executor: Executor, sql: str, *args: Any) -> None:
    """
    Run a statement (procedure call with no result). No result returned.
    """
    with _translate_store_errors():
        await executor.execute(sql, *args)
