# app/main.py
import time

from fastapi import FastAPI, Request

from app.core.logging_config import setup_logging, logger
from app.core.settings import settings
from app.observability.metrics import router as metrics_router
from app.verticals.autoinvoice.api.invoice import router as autoinvoice_router


# ----------------------------------------------------
# App init
# ----------------------------------------------------
app = FastAPI(title="AutoInvoice", version="0.1.0")

setup_logging(settings.log_level)
logger.info("startup", service="autoinvoice-api", shop=settings.shop_name)


# ----------------------------------------------------
# Health
# ----------------------------------------------------
@app.get("/health", include_in_schema=True)
def health() -> dict:
    return {"status": "ok"}


# ----------------------------------------------------
# Logging middleware
# ----------------------------------------------------
@app.middleware("http")
async def logging_middleware(request: Request, call_next):
    start = time.time()

    request_id = request.headers.get("X-Request-ID", "unknown")
    client_ip = request.client.host if request.client else "unknown"

    bound_logger = logger.bind(
        request_id=request_id,
        ip=client_ip,
        endpoint=str(request.url.path),
        method=request.method,
    )

    bound_logger.info("request_started")
    response = await call_next(request)
    latency_ms = round((time.time() - start) * 1000, 2)

    bound_logger.bind(status_code=response.status_code, latency_ms=latency_ms).info(
        "request_finished"
    )
    return response


# ----------------------------------------------------
# Routers
# ----------------------------------------------------
app.include_router(autoinvoice_router)
app.include_router(metrics_router)  # /metrics
