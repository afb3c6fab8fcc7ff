from __future__ import annotations

from pathlib import Path

from fourleaf.config import DEFAULT_API_BASE, load_settings
from fourleaf.network import DEFAULT_PROBE_HOSTS


def test_defaults(monkeypatch) -> None:
    for name in ("FOURLEAF_API_BASE", "FOURLEAF_LANGUAGE", "FOURLEAF_RETRY_DELAY_SECONDS"):
        monkeypatch.delenv(name, raising=False)
    settings = load_settings()
    assert settings.api_base == DEFAULT_API_BASE
    assert settings.chat_path == "/api/chat"
    assert settings.language == "繁體中文"
    assert settings.retry_delay_seconds == 1.0


def test_environment_overrides(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setenv("FOURLEAF_API_BASE", "http://localhost:9000")
    monkeypatch.setenv("FOURLEAF_RETRY_DELAY_SECONDS", "0.5")
    monkeypatch.setenv("FOURLEAF_HOME", str(tmp_path))

    settings = load_settings()

    assert settings.api_base == "http://localhost:9000"
    assert settings.retry_delay_seconds == 0.5
    assert settings.client_id_path == tmp_path / "client_id"


def test_explicit_overrides_skip_none(monkeypatch) -> None:
    monkeypatch.setenv("FOURLEAF_API_BASE", "http://from-env")
    assert load_settings(api_base=None).api_base == "http://from-env"
    assert load_settings(api_base="http://from-cli").api_base == "http://from-cli"


def test_connectivity_targets(monkeypatch) -> None:
    monkeypatch.delenv("FOURLEAF_PROBE_HOSTS", raising=False)
    assert load_settings().probe_hosts == list(DEFAULT_PROBE_HOSTS)

    monkeypatch.setenv("FOURLEAF_PROBE_HOSTS", '["10.0.0.1:443"]')
    assert load_settings().probe_hosts == ["10.0.0.1:443"]
