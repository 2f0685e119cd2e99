from pathlib import Path

from faultdemo import config


def test_defaults(monkeypatch):
    for name in ("PORT", "UPSTREAM_BASE_URL", "UPSTREAM_TIMEOUT_SECONDS", "RATE_LATENCY_MS", "CORS_ORIGINS"):
        monkeypatch.delenv(name, raising=False)

    assert config.port() == 3000
    assert config.upstream_base_url() == "http://localhost:3000"
    assert config.upstream_timeout_seconds() == 5.0
    assert config.rate_latency_ms() == 120
    assert config.cors_origins() == ["*"]


def test_bad_numbers_fall_back_to_defaults(monkeypatch):
    monkeypatch.setenv("PORT", "not-a-port")
    monkeypatch.setenv("UPSTREAM_TIMEOUT_SECONDS", "soon")
    monkeypatch.setenv("RATE_LATENCY_MS", "1.5")

    assert config.port() == 3000
    assert config.upstream_timeout_seconds() == 5.0
    assert config.rate_latency_ms() == 120


def test_negative_latency_is_clamped(monkeypatch):
    monkeypatch.setenv("RATE_LATENCY_MS", "-50")
    assert config.rate_latency_ms() == 0


def test_upstream_follows_port(monkeypatch):
    monkeypatch.delenv("UPSTREAM_BASE_URL", raising=False)
    monkeypatch.setenv("PORT", "8080")
    assert config.upstream_base_url() == "http://localhost:8080"


def test_cors_origins_list_and_data_dir(monkeypatch, tmp_path):
    monkeypatch.setenv("CORS_ORIGINS", "http://a.test, http://b.test,")
    monkeypatch.setenv("APP_DATA_DIR", str(tmp_path))

    assert config.cors_origins() == ["http://a.test", "http://b.test"]
    assert config.data_dir() == Path(str(tmp_path))
