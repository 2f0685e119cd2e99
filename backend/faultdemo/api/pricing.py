import asyncio
import logging
import uuid

import httpx
from fastapi import APIRouter, Depends

from faultdemo import config
from faultdemo.errors import InterdependencyFailure, UnsupportedCurrency
from faultdemo.models.pricing import BasePriceOut, PriceViewOut, RateOut
from faultdemo.utils.failure_log import log_structured_failure
from faultdemo.utils.headers import get_correlation_id, get_failure_mode, get_target
from faultdemo.utils.upstream import UpstreamError, fetch_json, get_upstream_client

logger = logging.getLogger(__name__)

router = APIRouter(tags=["pricing"])

BASE_CURRENCY = "USD"
BASE_PRICE_USD = 129.99
SUPPORTED_RATES = {
    "EUR": 0.92,
    "GBP": 0.78,
}

BASE_PRICE_SERVICE = "base-price-service"
RATES_SERVICE = "rates-service"


async def _artificial_latency() -> None:
    delay_ms = config.rate_latency_ms()
    if delay_ms:
        await asyncio.sleep(delay_ms / 1000)


# B
@router.get("/basePrice", response_model=BasePriceOut)
def base_price(correlation_id: str = Depends(get_correlation_id)) -> BasePriceOut:
    return BasePriceOut(correlationId=correlation_id, currency=BASE_CURRENCY, amount=BASE_PRICE_USD)


# C
@router.get("/rate", response_model=RateOut)
async def rate(
    target: str = Depends(get_target),
    failure_injected: bool = Depends(get_failure_mode),
    correlation_id: str = Depends(get_correlation_id),
) -> RateOut:
    if failure_injected:
        await _artificial_latency()
        log_structured_failure(
            upstream_service=RATES_SERVICE,
            status_or_reason="500 internal failure",
            correlation_id=correlation_id,
        )
        raise InterdependencyFailure(
            correlation_id=correlation_id,
            error=f"{RATES_SERVICE} internal failure",
            status_code=500,
        )

    value = SUPPORTED_RATES.get(target)
    if value is None:
        raise UnsupportedCurrency(correlation_id=correlation_id, target=target)

    await _artificial_latency()
    return RateOut(correlationId=correlation_id, base=BASE_CURRENCY, target=target, rate=value)


def _failure_label(err: UpstreamError) -> str:
    if err.status is not None:
        return str(err.status)
    if err.reason == "TIMEOUT":
        return "timeout"
    return err.reason


# A: composes B then C, sequentially, under one correlation id
@router.get("/priceView", response_model=PriceViewOut)
async def price_view(
    target: str = Depends(get_target),
    failure_injected: bool = Depends(get_failure_mode),
    client: httpx.AsyncClient = Depends(get_upstream_client),
) -> PriceViewOut:
    correlation_id = str(uuid.uuid4())
    flag = "true" if failure_injected else "false"

    try:
        base = await fetch_json(
            client,
            BASE_PRICE_SERVICE,
            "/api/basePrice",
            headers={"X-Correlation-Id": correlation_id},
        )
        quote = await fetch_json(
            client,
            RATES_SERVICE,
            "/api/rate",
            params={"target": target, "failure": flag},
            headers={"X-Correlation-Id": correlation_id, "X-Failure-Mode": flag},
        )
    except UpstreamError as err:
        log_structured_failure(
            upstream_service=err.service,
            status_or_reason=err.reason,
            correlation_id=correlation_id,
        )
        raise InterdependencyFailure(
            correlation_id=correlation_id,
            error=f"Upstream failure: {err.service} unavailable ({_failure_label(err)})",
            human_message=f"Upstream failure: {err.service} unavailable (500/slow)",
            status_code=502,
        ) from err

    converted = round(float(base["amount"]) * float(quote["rate"]), 2)
    logger.debug("priceView %s %s -> %s", correlation_id, target, converted)

    return PriceViewOut(
        correlationId=correlation_id,
        baseCurrency=base["currency"],
        targetCurrency=target,
        baseAmount=base["amount"],
        rate=quote["rate"],
        convertedAmount=converted,
    )
