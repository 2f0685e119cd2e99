from pydantic import BaseModel


class BasePriceOut(BaseModel):
    correlationId: str
    currency: str
    amount: float


class RateOut(BaseModel):
    correlationId: str
    base: str
    target: str
    rate: float


class PriceViewOut(BaseModel):
    correlationId: str
    baseCurrency: str
    targetCurrency: str
    baseAmount: float
    rate: float
    convertedAmount: float
