from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from faultdemo import config
from faultdemo.api import notes, pricing
from faultdemo.errors import register_exception_handlers
from faultdemo.logging_setup import configure_logging

configure_logging()

app = FastAPI(title="Failure Simulation Demo API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.cors_origins(),
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

API_PREFIX = "/api"

app.include_router(pricing.router, prefix=API_PREFIX)
app.include_router(notes.router, prefix=API_PREFIX)


@app.get("/health")
def health():
    return {"ok": True}
