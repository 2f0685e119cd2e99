import importlib

import httpx
import pytest
from fastapi.testclient import TestClient


@pytest.fixture()
def app(tmp_path, monkeypatch):
    # isolate data dir per test
    monkeypatch.setenv("APP_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("RATE_LATENCY_MS", "0")
    monkeypatch.setenv("UPSTREAM_BASE_URL", "http://upstream.test")

    # reload modules so that api/notes.py picks up new env vars
    import faultdemo.api.notes
    import faultdemo.main
    importlib.reload(faultdemo.api.notes)
    importlib.reload(faultdemo.main)

    yield faultdemo.main.app
    faultdemo.main.app.dependency_overrides.clear()


@pytest.fixture()
def client(app):
    return TestClient(app)


@pytest.fixture()
def loopback(app):
    """Route priceView's upstream calls back into the app under test, in-process."""
    from faultdemo.utils.upstream import get_upstream_client

    async def _loopback_client():
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://loopback") as c:
            yield c

    app.dependency_overrides[get_upstream_client] = _loopback_client
    return app
