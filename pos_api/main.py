# pos_api/main.py
#
# Run with: uvicorn pos_api.main:app --reload

import logging
import time

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from pos_api.core.config import settings
from pos_api.core.errors import POSError
from pos_api.core.rate_limiter import limiter
from pos_api.routers import (
    cart,
    employees,
    inventory,
    item_features,
    items,
    job_positions,
    orders,
    query,
    reports,
    sellable_categories,
    sellables,
    transcription,
    translate,
)


# LOGGING CONFIGURATION

logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s | %(levelname)s | %(message)s",
)

logger = logging.getLogger("app")


# APP INIT

app = FastAPI(
    title="Restaurant POS & Kiosk API",
    description="Menu, ordering, kitchen and reporting backend for a restaurant point of sale",
    version="1.0.0",
)



# CORS

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=False,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE"],
    allow_headers=["Authorization", "Content-Type"],
)


# RATE LIMITING

app.state.limiter = limiter
app.add_exception_handler(
    RateLimitExceeded,
    _rate_limit_exceeded_handler
)


# DOMAIN ERRORS

@app.exception_handler(POSError)
async def pos_error_handler(request: Request, exc: POSError):
    logger.warning(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


# REQUEST LOGGING MIDDLEWARE

@app.middleware("http")
async def log_requests(request: Request, call_next):
    started = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - started) * 1000

    logger.info(
        f"{request.method} {request.url.path} -> {response.status_code} "
        f"in {elapsed_ms:.1f}ms"
    )

    return response


# ROUTERS

app.include_router(employees.router)
app.include_router(job_positions.router)
app.include_router(item_features.router)
app.include_router(items.router)
app.include_router(inventory.router)
app.include_router(sellables.router)
app.include_router(sellable_categories.router)
app.include_router(cart.router)
app.include_router(orders.router)
app.include_router(reports.router)
app.include_router(transcription.router)
app.include_router(translate.router)
app.include_router(query.router)



# ROOT

@app.get("/")
def root():
    logger.info("Health check endpoint called")
    return {"message": "Restaurant POS API is running"}
