from __future__ import annotations

from pathlib import Path

import pytest

from ytlive.core.config import ConfigError, ConfigManager
from ytlive.core.config_loader import deep_merge, substitute_env_vars
from ytlive.core.config_schema import DEFAULT_BASE_URL


@pytest.mark.anyio
async def test_defaults_without_any_config(monkeypatch, tmp_path: Path) -> None:  # type: ignore[no-untyped-def]
    monkeypatch.chdir(tmp_path)

    cfg = await ConfigManager.load(str(tmp_path))

    assert cfg.api_key is None
    assert cfg.base_url == DEFAULT_BASE_URL
    assert cfg.timeout == 30.0
    assert ConfigManager.sources() == []


@pytest.mark.anyio
async def test_project_config_overrides_global(monkeypatch, tmp_path: Path, isolated_dirs: Path) -> None:  # type: ignore[no-untyped-def]
    (isolated_dirs / "ytlive.json").write_text(
        '{"apiKey": "global-key", "timeout": 5, "logging": {"level": "debug"}}',
        encoding="utf-8",
    )
    project = tmp_path / "project"
    nested = project / "nested"
    nested.mkdir(parents=True)
    (project / "ytlive.jsonc").write_text(
        '{\n  // project key\n  "apiKey": "project-key",\n  "baseUrl": "https://api.test/v3/"\n}\n',
        encoding="utf-8",
    )

    cfg = await ConfigManager.load(str(nested))

    assert cfg.api_key == "project-key"
    assert cfg.base_url == "https://api.test/v3"
    assert cfg.timeout == 5
    assert cfg.logging is not None and cfg.logging.level == "debug"
    assert ConfigManager.sources()[-1] == str(project / "ytlive.jsonc")


@pytest.mark.anyio
async def test_environment_overrides_files(monkeypatch, tmp_path: Path, isolated_dirs: Path) -> None:  # type: ignore[no-untyped-def]
    (isolated_dirs / "config.json").write_text('{"apiKey": "file-key"}', encoding="utf-8")
    monkeypatch.setenv("YTLIVE_API_KEY", "env-key")
    monkeypatch.setenv("YTLIVE_LOG_LEVEL", "error")

    cfg = await ConfigManager.load(str(tmp_path))

    assert cfg.api_key == "env-key"
    assert cfg.log_level == "error"


@pytest.mark.anyio
async def test_env_substitution_in_files(monkeypatch, tmp_path: Path, isolated_dirs: Path) -> None:  # type: ignore[no-untyped-def]
    monkeypatch.setenv("MY_SECRET", "from-env")
    (isolated_dirs / "ytlive.json").write_text('{"apiKey": "{env:MY_SECRET}"}', encoding="utf-8")

    cfg = await ConfigManager.load(str(tmp_path))

    assert cfg.api_key == "from-env"


@pytest.mark.anyio
async def test_unknown_keys_raise_config_error(tmp_path: Path, isolated_dirs: Path) -> None:
    (isolated_dirs / "ytlive.json").write_text('{"apiKey": "k", "colour": "blue"}', encoding="utf-8")

    with pytest.raises(ConfigError) as excinfo:
        await ConfigManager.load(str(tmp_path))

    assert str(isolated_dirs / "ytlive.json") in str(excinfo.value)


@pytest.mark.anyio
async def test_unknown_log_level_from_environment_raises_config_error(monkeypatch, tmp_path: Path) -> None:  # type: ignore[no-untyped-def]
    monkeypatch.setenv("YTLIVE_LOG_LEVEL", "trace")

    with pytest.raises(ConfigError) as excinfo:
        await ConfigManager.load(str(tmp_path))

    assert excinfo.value.path == "<environment>"


@pytest.mark.anyio
async def test_log_levels_are_case_insensitive(tmp_path: Path, isolated_dirs: Path) -> None:
    (isolated_dirs / "ytlive.json").write_text(
        '{"logLevel": "INFO", "logging": {"level": " Warning ", "format": "JSON"}}',
        encoding="utf-8",
    )

    cfg = await ConfigManager.load(str(tmp_path))

    assert cfg.log_level == "info"
    assert cfg.logging is not None
    assert cfg.logging.level == "warning"
    assert cfg.logging.format == "json"


@pytest.mark.anyio
async def test_unknown_logging_level_in_file_raises_config_error(tmp_path: Path, isolated_dirs: Path) -> None:
    (isolated_dirs / "ytlive.json").write_text('{"logging": {"level": "loud"}}', encoding="utf-8")

    with pytest.raises(ConfigError):
        await ConfigManager.load(str(tmp_path))


@pytest.mark.anyio
async def test_get_caches_until_reset(tmp_path: Path, isolated_dirs: Path, monkeypatch) -> None:  # type: ignore[no-untyped-def]
    monkeypatch.chdir(tmp_path)
    config_file = isolated_dirs / "ytlive.json"
    config_file.write_text('{"apiKey": "first"}', encoding="utf-8")

    assert (await ConfigManager.get()).api_key == "first"
    config_file.write_text('{"apiKey": "second"}', encoding="utf-8")
    assert (await ConfigManager.get()).api_key == "first"

    ConfigManager.reset()
    assert (await ConfigManager.get()).api_key == "second"


def test_deep_merge_merges_nested_objects() -> None:
    merged = deep_merge({"logging": {"level": "info", "console": True}}, {"logging": {"level": "debug"}, "timeout": 3})

    assert merged == {"logging": {"level": "debug", "console": True}, "timeout": 3}


def test_substitute_env_vars_blanks_unset_variables(monkeypatch) -> None:  # type: ignore[no-untyped-def]
    monkeypatch.delenv("YTLIVE_UNSET_FOR_TEST", raising=False)

    assert substitute_env_vars('{"k": "{env:YTLIVE_UNSET_FOR_TEST}"}') == '{"k": ""}'
