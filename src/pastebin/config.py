"""Application configuration builder."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from .db.db_init import init_db
from .exceptions import ConfigurationError, StorageRootError

_TRUTHY = {"1", "true", "yes", "on"}
# ten years; keeps updated_at + hold inside the datetime range
MAX_HOLD_SECONDS = 10 * 365 * 24 * 60 * 60


@dataclass(slots=True, frozen=True)
class PasteLimits:
    default_hold_seconds: int
    max_hold_seconds: int
    max_upload_bytes: int
    chunk_size_bytes: int
    title_max_length: int
    author_max_length: int


@dataclass(slots=True, frozen=True)
class ReaperSettings:
    interval_seconds: int
    orphan_sweep_enabled: bool
    orphan_grace_seconds: int


@dataclass(slots=True, frozen=True)
class AppConfig:
    storage_root: Path
    limits: PasteLimits
    reaper: ReaperSettings
    database_url: str
    engine: Engine
    session_factory: sessionmaker[Session]
    history_enabled: bool
    listen_host: str
    listen_port: int
    secret_key: str
    log_level: str


def ensure_storage_root(root: Path) -> Path:
    """Create the blob directory; the service must not start without it."""
    try:
        root.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise StorageRootError(f"cannot create storage root '{root}': {exc}") from exc
    if not os.access(root, os.W_OK):
        raise StorageRootError(f"storage root '{root}' is not writable")
    return root


def _int(environ: Mapping[str, str], name: str, default: int) -> int:
    raw = environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from exc


def _bool(environ: Mapping[str, str], name: str, default: bool) -> bool:
    raw = environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in _TRUTHY


def build_session_factory(database_url: str) -> tuple[Engine, sessionmaker[Session]]:
    connect_args = {"check_same_thread": False} if database_url.startswith("sqlite") else {}
    engine = create_engine(database_url, future=True, connect_args=connect_args)
    session_factory: sessionmaker[Session] = sessionmaker(bind=engine, expire_on_commit=False)
    return engine, session_factory


def load_config(environ: Mapping[str, str] | None = None) -> AppConfig:
    """Load configuration from environment (SQLite by default)."""
    env = os.environ if environ is None else environ

    storage_root = ensure_storage_root(Path(env.get("PASTE_ROOT", "pastes")))

    limits = PasteLimits(
        default_hold_seconds=_int(env, "PASTE_DEFAULT_HOLD_SECONDS", 24 * 60 * 60),
        max_hold_seconds=_int(env, "PASTE_MAX_HOLD_SECONDS", MAX_HOLD_SECONDS),
        max_upload_bytes=_int(env, "PASTE_MAX_UPLOAD_BYTES", 10 * 1024 * 1024),
        chunk_size_bytes=_int(env, "PASTE_UPLOAD_CHUNK_BYTES", 64 * 1024),
        title_max_length=_int(env, "PASTE_TITLE_MAX_LENGTH", 100),
        author_max_length=_int(env, "PASTE_AUTHOR_MAX_LENGTH", 50),
    )
    if limits.default_hold_seconds < 0:
        raise ConfigurationError("PASTE_DEFAULT_HOLD_SECONDS must be non-negative")
    if not 0 <= limits.max_hold_seconds <= MAX_HOLD_SECONDS:
        raise ConfigurationError(
            f"PASTE_MAX_HOLD_SECONDS must be between 0 and {MAX_HOLD_SECONDS}"
        )
    if limits.default_hold_seconds > limits.max_hold_seconds:
        raise ConfigurationError(
            "PASTE_DEFAULT_HOLD_SECONDS must not exceed PASTE_MAX_HOLD_SECONDS"
        )

    reaper = ReaperSettings(
        interval_seconds=_int(env, "REAP_INTERVAL_SECONDS", 300),
        orphan_sweep_enabled=_bool(env, "ORPHAN_SWEEP_ENABLED", False),
        orphan_grace_seconds=_int(env, "ORPHAN_GRACE_SECONDS", 3600),
    )

    database_url = env.get("DATABASE_URL", "sqlite:///pastebin.db")
    engine, session_factory = build_session_factory(database_url)
    init_db(engine)

    return AppConfig(
        storage_root=storage_root,
        limits=limits,
        reaper=reaper,
        database_url=database_url,
        engine=engine,
        session_factory=session_factory,
        history_enabled=_bool(env, "HISTORY_ENABLED", True),
        listen_host=env.get("LISTEN_HOST", "127.0.0.1"),
        listen_port=_int(env, "LISTEN_PORT", 8000),
        secret_key=env.get("SECRET_KEY", "change-me"),
        log_level=env.get("LOG_LEVEL", "INFO").upper(),
    )
