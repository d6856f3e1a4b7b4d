"""
Shared fixtures: in-memory stand-ins for the asyncpg pool and connection.
"""

from pathlib import Path

import pytest

from core.settings import PoolSettings, Settings, WaveformSettings


class FakeStatement:
    def __init__(self, conn, sql):
        self.conn = conn
        self.sql = sql

    async def fetch(self, *args):
        self.conn.executed.append(args)
        if self.conn.fail is not None:
            error = self.conn.fail(args)
            if error is not None:
                raise error
        if self.conn.rows is not None:
            return self.conn.rows
        row = {"value": args[0], "axis": args[1]}
        self.conn.table.append(row)
        return [row]


class FakeConnection:
    """
    Appends one row per fetch to `table` unless `rows` overrides the result
    or `fail(args)` returns an exception to raise.
    """

    def __init__(self, table):
        self.table = table
        self.prepared = []
        self.executed = []
        self.rows = None
        self.fail = None

    async def prepare(self, sql):
        self.prepared.append(sql)
        return FakeStatement(self, sql)


class FakePool:
    def __init__(self):
        self.table = []
        self.conn = FakeConnection(self.table)
        self.acquire_error = None
        self.fail_after = None
        self.acquired = 0
        self.released = 0
        self.timeouts = []

    async def acquire(self, timeout=None):
        self.timeouts.append(timeout)
        if self.acquire_error is not None and (self.fail_after is None or self.acquired >= self.fail_after):
            raise self.acquire_error
        self.acquired += 1
        return self.conn

    async def release(self, conn):
        self.released += 1


@pytest.fixture
def fake_pool():
    return FakePool()


@pytest.fixture
def index_file(tmp_path) -> Path:
    path = tmp_path / "index.html"
    path.write_text("<h1>stored</h1>", encoding="utf-8")
    return path


@pytest.fixture
def settings(tmp_path, index_file) -> Settings:
    return Settings(
        host="127.0.0.1",
        port=8080,
        pool=PoolSettings(dsn="postgresql://postgres@localhost:5432/postgres", acquire_timeout_s=1.5),
        waveform=WaveformSettings(amplitude=2.0, frequency=0.1, phase=0.0, points=3),
        interval_s=0.0,
        static_dir=tmp_path,
        index_file=index_file,
    )
