import json
import logging
import uuid

import httpx
import pytest
import respx


def _failure_records(caplog):
    return [json.loads(r.getMessage()) for r in caplog.records if r.name == "faultdemo.failures"]


def test_price_view_composes_base_price_and_rate(client, loopback):
    r = client.get("/api/priceView?target=eur")
    assert r.status_code == 200
    body = r.json()
    uuid.UUID(body["correlationId"])
    assert body["baseCurrency"] == "USD"
    assert body["targetCurrency"] == "EUR"
    assert body["baseAmount"] == 129.99
    assert body["rate"] == 0.92
    assert body["convertedAmount"] == 119.59


def test_price_view_gbp_conversion(client, loopback):
    r = client.get("/api/priceView?target=GBP")
    assert r.status_code == 200
    assert r.json()["convertedAmount"] == 101.39


def test_injected_failure_maps_to_502(client, loopback, caplog):
    caplog.set_level(logging.ERROR, logger="faultdemo.failures")

    r = client.get("/api/priceView?failure=true")
    assert r.status_code == 502
    body = r.json()
    assert body["code"] == "INTERDEPENDENCY_FAIL"
    assert body["error"] == "Upstream failure: rates-service unavailable (500)"
    assert body["humanMessage"] == "Upstream failure: rates-service unavailable (500/slow)"

    # rate logs its own failure, then priceView logs the propagated one; same correlation id
    records = _failure_records(caplog)
    assert [rec["statusOrReason"] for rec in records] == ["500 internal failure", "HTTP_500"]
    assert {rec["correlationId"] for rec in records} == {body["correlationId"]}


def test_failure_header_is_propagated_downstream(client, loopback):
    r = client.get("/api/priceView", headers={"X-Failure-Mode": "true"})
    assert r.status_code == 502


def test_unsupported_target_surfaces_as_upstream_failure(client, loopback, caplog):
    caplog.set_level(logging.ERROR, logger="faultdemo.failures")

    r = client.get("/api/priceView?target=JPY")
    assert r.status_code == 502
    assert r.json()["error"] == "Upstream failure: rates-service unavailable (400)"
    assert _failure_records(caplog)[-1]["statusOrReason"] == "HTTP_400"


@pytest.fixture()
def upstream():
    with respx.mock(base_url="http://upstream.test", assert_all_called=False) as router:
        yield router


def test_chain_sends_correlation_and_failure_headers(client, upstream):
    base_route = upstream.get("/api/basePrice").respond(
        json={"correlationId": "x", "currency": "USD", "amount": 129.99}
    )
    rate_route = upstream.get("/api/rate").respond(
        json={"correlationId": "x", "base": "USD", "target": "GBP", "rate": 0.78}
    )

    r = client.get("/api/priceView?target=gbp")
    assert r.status_code == 200
    correlation_id = r.json()["correlationId"]

    base_req = base_route.calls.last.request
    assert base_req.headers["X-Correlation-Id"] == correlation_id

    rate_req = rate_route.calls.last.request
    assert rate_req.headers["X-Correlation-Id"] == correlation_id
    assert rate_req.headers["X-Failure-Mode"] == "false"
    assert rate_req.url.params["target"] == "GBP"
    assert rate_req.url.params["failure"] == "false"


def test_base_price_unreachable(client, upstream, caplog):
    caplog.set_level(logging.ERROR, logger="faultdemo.failures")
    upstream.get("/api/basePrice").mock(side_effect=httpx.ConnectError("Connection refused"))
    rate_route = upstream.get("/api/rate")

    r = client.get("/api/priceView")
    assert r.status_code == 502
    body = r.json()
    assert body["error"] == "Upstream failure: base-price-service unavailable (CONNECT_ERROR)"
    assert body["code"] == "INTERDEPENDENCY_FAIL"
    assert not rate_route.called

    record = _failure_records(caplog)[-1]
    assert record["upstreamService"] == "base-price-service"
    assert record["statusOrReason"] == "CONNECT_ERROR"


def test_slow_rate_service_times_out(client, upstream, caplog):
    caplog.set_level(logging.ERROR, logger="faultdemo.failures")
    upstream.get("/api/basePrice").respond(json={"correlationId": "x", "currency": "USD", "amount": 129.99})
    upstream.get("/api/rate").mock(side_effect=httpx.ReadTimeout("Request timed out"))

    r = client.get("/api/priceView")
    assert r.status_code == 502
    body = r.json()
    assert body["error"] == "Upstream failure: rates-service unavailable (timeout)"
    assert body["humanMessage"] == "Upstream failure: rates-service unavailable (500/slow)"
    assert _failure_records(caplog)[-1]["statusOrReason"] == "TIMEOUT"
