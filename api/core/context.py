"""
Application context: settings plus the connection pool, built once per process.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from fastapi import Request

from .settings import Settings


@dataclass(frozen=True)
class AppContext:
    settings: Settings
    # asyncpg.Pool in production; anything with acquire()/release() in tests.
    pool: Any


def get_context(request: Request) -> AppContext:
    ctx = getattr(request.app.state, "context", None)
    if ctx is None:
        raise RuntimeError("App context is not initialized. Start the app through its lifespan.")
    return ctx
