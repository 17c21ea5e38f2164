from pathlib import Path

import pytest

from pastebin.config import load_config
from pastebin.exceptions import ConfigurationError, StorageRootError

pytestmark = pytest.mark.unit


def _env(tmp_path: Path, **overrides: str) -> dict[str, str]:
    env = {
        "PASTE_ROOT": str(tmp_path / "store" / "blobs"),
        "DATABASE_URL": f"sqlite:///{(tmp_path / 'cfg.db').as_posix()}",
    }
    env.update(overrides)
    return env


def test_load_config_defaults(tmp_path: Path) -> None:
    config = load_config(_env(tmp_path))

    assert config.storage_root.is_dir()
    assert config.limits.default_hold_seconds == 86400
    assert config.limits.max_hold_seconds == 10 * 365 * 24 * 60 * 60
    assert config.limits.max_upload_bytes == 10 * 1024 * 1024
    assert config.reaper.interval_seconds == 300
    assert config.reaper.orphan_sweep_enabled is False
    assert config.history_enabled is True
    assert (config.listen_host, config.listen_port) == ("127.0.0.1", 8000)


def test_load_config_reads_overrides(tmp_path: Path) -> None:
    config = load_config(
        _env(
            tmp_path,
            PASTE_DEFAULT_HOLD_SECONDS="60",
            PASTE_MAX_UPLOAD_BYTES="2048",
            REAP_INTERVAL_SECONDS="5",
            HISTORY_ENABLED="no",
            ORPHAN_SWEEP_ENABLED="TRUE",
        )
    )

    assert config.limits.default_hold_seconds == 60
    assert config.limits.max_upload_bytes == 2048
    assert config.reaper.interval_seconds == 5
    assert config.history_enabled is False
    assert config.reaper.orphan_sweep_enabled is True


def test_load_config_is_immutable(tmp_path: Path) -> None:
    config = load_config(_env(tmp_path))

    with pytest.raises(AttributeError):
        config.history_enabled = False  # type: ignore[misc]


def test_load_config_rejects_non_integer(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError):
        load_config(_env(tmp_path, REAP_INTERVAL_SECONDS="often"))


def test_load_config_fails_when_storage_root_cannot_be_created(tmp_path: Path) -> None:
    blocker = tmp_path / "file"
    blocker.write_text("not a directory")

    with pytest.raises(StorageRootError):
        load_config(_env(tmp_path, PASTE_ROOT=str(blocker / "blobs")))


@pytest.mark.parametrize(
    "overrides",
    [
        {"PASTE_MAX_HOLD_SECONDS": "-1"},
        {"PASTE_MAX_HOLD_SECONDS": str(10**12)},
        {"PASTE_DEFAULT_HOLD_SECONDS": "7200", "PASTE_MAX_HOLD_SECONDS": "3600"},
    ],
)
def test_load_config_rejects_bad_hold_bounds(tmp_path: Path, overrides: dict[str, str]) -> None:
    with pytest.raises(ConfigurationError):
        load_config(_env(tmp_path, **overrides))
