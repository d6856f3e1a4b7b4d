"""
Coordinate ingestion orchestration.

Flow (one pass per request):
1) Wait the configured interval
2) Generate the waveform samples
3) For each sample: check out a connection, insert the x row, insert the y row
4) The router then returns the static index page

The two inserts of a sample are independent. If the y insert fails, the x row
stays in the table and the request fails; nothing is rolled back.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass

from core import db
from core.context import AppContext

from . import repository, waveform
from .schemas import to_records

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IngestStats:
    pairs: int
    rows: int


async def ingest_waveform(ctx: AppContext) -> IngestStats:
    settings = ctx.settings
    params = settings.waveform

    # Paid on every request; this is not a shared ticker.
    await asyncio.sleep(settings.interval_s)

    pairs = waveform.generate(params.amplitude, params.frequency, params.phase, params.points)

    rows = 0
    for pair in pairs:
        record_x, record_y = to_records(pair)
        async with db.acquire(ctx.pool, timeout=settings.pool.acquire_timeout_s) as conn:
            await repository.insert_coordinate(conn, record_x)
            rows += 1
            await repository.insert_coordinate(conn, record_y)
            rows += 1

    logger.info("ingest_complete pairs=%s rows=%s", len(pairs), rows)
    return IngestStats(pairs=len(pairs), rows=rows)
