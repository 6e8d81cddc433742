from pathlib import Path

import pytest

from sora_risk.config import SoraSettings


def test_settings_load_defaults() -> None:
    settings = SoraSettings()
    assert settings.logging.level
    assert settings.output.include_oso


def test_settings_from_toml(tmp_path: Path) -> None:
    path = tmp_path / "sora.toml"
    path.write_text('[logging]\nlevel = "DEBUG"\njson_format = false\n\n[output]\nindent = 4\n')
    settings = SoraSettings.from_toml(path)
    assert settings.logging.level == "DEBUG"
    assert not settings.logging.json_format
    assert settings.output.indent == 4


def test_settings_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SORA_LOGGING__LEVEL", "ERROR")
    monkeypatch.setenv("SORA_OUTPUT__INCLUDE_OSO", "false")
    settings = SoraSettings()
    assert settings.logging.level == "ERROR"
    assert not settings.output.include_oso
