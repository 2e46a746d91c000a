import pytest
from pydantic import ValidationError

from src.utils.config_loader import DEFAULT_CONFIG_PATH, UpstreamConfig, load_gateway_config


def test_repository_config_loads(monkeypatch):
    monkeypatch.delenv("SHORTDRAMA_API_BASE_URL", raising=False)
    monkeypatch.delenv("SHORTDRAMA_API_TIMEOUT", raising=False)
    monkeypatch.delenv("ADMIN_CONFIG_REDIS_URL", raising=False)

    cfg = load_gateway_config(DEFAULT_CONFIG_PATH)

    assert cfg.upstream.timeout_seconds == 5.0
    assert cfg.upstream.timeout_for("/vod/categories") == 5.0
    assert cfg.upstream.timeout_for("/vod/parse/all") == 60.0
    assert "default" in cfg.theme.available_themes
    assert cfg.admin_config_redis_url is None


def test_env_overrides_yaml(tmp_path, monkeypatch):
    path = tmp_path / "gateway.yml"
    path.write_text("upstream:\n  base_url: https://from-yaml.test\n", encoding="utf-8")
    monkeypatch.setenv("SHORTDRAMA_API_BASE_URL", "https://from-env.test")
    monkeypatch.setenv("SHORTDRAMA_API_TIMEOUT", "2.5")
    monkeypatch.setenv("ADMIN_CONFIG_REDIS_URL", "redis://localhost:6379/0")

    cfg = load_gateway_config(path)

    assert cfg.upstream.base_url == "https://from-env.test"
    assert cfg.upstream.timeout_seconds == 2.5
    assert cfg.admin_config_redis_url == "redis://localhost:6379/0"


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_gateway_config(tmp_path / "absent.yml")


def test_upstream_config_is_immutable():
    cfg = UpstreamConfig(base_url="https://x.test")
    with pytest.raises(ValidationError):
        cfg.base_url = "https://y.test"
