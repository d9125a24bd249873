from collections.abc import Iterator
from pathlib import Path

import pytest

from ytlive.core.config import ConfigManager
from ytlive.util import log as log_module
from ytlive.util.log import Log


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture(autouse=True)
def isolated_dirs(monkeypatch, tmp_path: Path) -> Iterator[Path]:  # type: ignore[no-untyped-def]
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    monkeypatch.setenv("YTLIVE_CONFIG_DIR", str(config_dir))
    monkeypatch.setenv("YTLIVE_DATA_DIR", str(tmp_path / "data"))
    for key in ("YTLIVE_API_KEY", "YTLIVE_BASE_URL", "YTLIVE_LOG_LEVEL"):
        monkeypatch.delenv(key, raising=False)
    yield config_dir


@pytest.fixture(autouse=True)
def config_context() -> Iterator[None]:
    token = ConfigManager.provide(ConfigManager())
    try:
        yield
    finally:
        ConfigManager.restore(token)


@pytest.fixture(autouse=True)
def _log_teardown() -> Iterator[None]:
    yield
    Log.close()
    log_module._config = log_module.LogConfig()
