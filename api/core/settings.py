"""
Process settings, read from the environment once at startup.

A local `.env` file is loaded first (if present) so development runs don't
need exported variables. Nothing here is re-read after `load_settings()`.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from urllib.parse import parse_qsl, quote, urlencode, urlsplit, urlunsplit

from dotenv import load_dotenv

DEFAULT_SERVER_ADDR = "127.0.0.1:8080"
DEFAULT_INTERVAL_MS = 10_000

# Names both stdlib logging and uvicorn accept ("WARN" and "TRACE" are not).
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class SettingsError(RuntimeError):
    pass


def _env_str(name: str, default: str) -> str:
    return os.environ.get(name, "").strip() or default


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise SettingsError(f"Invalid {name}. It must be an integer.") from exc


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise SettingsError(f"Invalid {name}. It must be a number.") from exc


def _sanitize_database_url(url: str) -> str:
    # asyncpg rejects some libpq-only query params.
    parts = urlsplit(url)
    if not parts.query:
        return url

    params = [(k, v) for (k, v) in parse_qsl(parts.query, keep_blank_values=True) if k != "sslmode"]
    query = urlencode(params)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment))


def parse_server_addr(raw: str) -> tuple[str, int]:
    """
    Split "host:port" into its parts. IPv6 hosts must be bracketed: "[::1]:8080".
    """
    host, sep, port = (raw or "").strip().rpartition(":")
    if not sep or not host or not port.isdigit():
        raise SettingsError(f"Invalid SERVER_ADDR {raw!r}. Expected host:port.")
    port_n = int(port)
    if not 0 < port_n < 65536:
        raise SettingsError(f"Invalid SERVER_ADDR port {port_n}.")
    return host.strip("[]"), port_n


@dataclass(frozen=True)
class PoolSettings:
    dsn: str
    min_size: int = 0
    max_size: int = 5
    acquire_timeout_s: float = 30.0
    command_timeout_s: float = 30.0


@dataclass(frozen=True)
class WaveformSettings:
    amplitude: float = 2.0
    frequency: float = 0.1
    phase: float = 0.0
    points: int = 10


@dataclass(frozen=True)
class Settings:
    host: str
    port: int
    pool: PoolSettings
    waveform: WaveformSettings = field(default_factory=WaveformSettings)
    interval_s: float = DEFAULT_INTERVAL_MS / 1000
    static_dir: Path = Path("static")
    index_file: Path = Path("templates/index.html")
    log_level: str = "INFO"


def database_url() -> str:
    """
    DATABASE_URL wins; otherwise the DSN is assembled from PG__* parts.
    """
    url = os.environ.get("DATABASE_URL", "").strip()
    if url:
        return _sanitize_database_url(url)

    user = quote(_env_str("PG__USER", "postgres"), safe="")
    password = quote(os.environ.get("PG__PASSWORD", ""), safe="")
    host = _env_str("PG__HOST", "localhost")
    port = _env_int("PG__PORT", 5432)
    dbname = _env_str("PG__DBNAME", "postgres")
    auth = f"{user}:{password}" if password else user
    return f"postgresql://{auth}@{host}:{port}/{dbname}"


def pool_settings() -> PoolSettings:
    min_size = _env_int("PG__POOL__MIN_SIZE", 0)
    max_size = _env_int("PG__POOL__MAX_SIZE", 5)
    if min_size < 0 or max_size < 1 or min_size > max_size:
        raise SettingsError(
            f"Invalid pool size: min={min_size} max={max_size}. Need 0 <= min <= max and max >= 1."
        )
    return PoolSettings(
        dsn=database_url(),
        min_size=min_size,
        max_size=max_size,
        acquire_timeout_s=_env_float("PG__POOL__TIMEOUT_S", 30.0),
        command_timeout_s=_env_float("PG__COMMAND_TIMEOUT_S", 30.0),
    )


def waveform_settings() -> WaveformSettings:
    points = _env_int("WAVE_POINTS", 10)
    if points < 0:
        raise SettingsError("Invalid WAVE_POINTS. It must be >= 0.")
    return WaveformSettings(
        amplitude=_env_float("WAVE_AMPLITUDE", 2.0),
        frequency=_env_float("WAVE_FREQUENCY", 0.1),
        phase=_env_float("WAVE_PHASE", 0.0),
        points=points,
    )


def load_settings(*, dotenv: bool = True) -> Settings:
    if dotenv:
        load_dotenv()

    host, port = parse_server_addr(_env_str("SERVER_ADDR", DEFAULT_SERVER_ADDR))
    interval_ms = _env_int("INGEST_INTERVAL_MS", DEFAULT_INTERVAL_MS)
    if interval_ms < 0:
        raise SettingsError("Invalid INGEST_INTERVAL_MS. It must be >= 0.")

    log_level = _env_str("LOG_LEVEL", "INFO").upper()
    if log_level not in LOG_LEVELS:
        raise SettingsError(f"Invalid LOG_LEVEL {log_level!r}. Allowed: {list(LOG_LEVELS)}")

    return Settings(
        host=host,
        port=port,
        pool=pool_settings(),
        waveform=waveform_settings(),
        interval_s=interval_ms / 1000,
        static_dir=Path(_env_str("STATIC_DIR", "static")),
        index_file=Path(_env_str("INDEX_FILE", "templates/index.html")),
        log_level=log_level,
    )
