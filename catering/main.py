# catering/main.py
import time
import uuid

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from slowapi.errors import RateLimitExceeded

from catering import models  # noqa: F401  (registers SQLAlchemy models)
from catering.core.logging_config import logger, setup_logging
from catering.core.rate_limit import limiter
from catering.core.settings import settings
from catering.db import Base, engine
from catering.errors import (
    ContractError,
    EstimateLockedError,
    FunctionInvocationError,
    InvalidTransitionError,
    NotFoundError,
    PricingError,
)
from catering.observability.metrics import router as metrics_router
from catering.routers import contracts, estimates, quotes, reports

# ----------------------------------------------------
# App init
# ----------------------------------------------------
app = FastAPI(title="Soul Train's Eatery back office", version="0.1.0")

setup_logging()
logger.info("startup", service="catering-api")


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

    request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
    request.state.request_id = request_id
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
    response.headers["X-Request-ID"] = request_id
    return response


# ----------------------------------------------------
# Middleware
# ----------------------------------------------------
app.state.limiter = limiter

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ----------------------------------------------------
# Error mapping
# ----------------------------------------------------
@app.exception_handler(RateLimitExceeded)
def ratelimit_handler(request: Request, exc: RateLimitExceeded):
    return PlainTextResponse(str(exc), status_code=429)


@app.exception_handler(NotFoundError)
def not_found_handler(request: Request, exc: NotFoundError):
    return JSONResponse(status_code=404, content={"detail": str(exc)})


@app.exception_handler(InvalidTransitionError)
def invalid_transition_handler(request: Request, exc: InvalidTransitionError):
    return JSONResponse(
        status_code=409,
        content={
            "detail": str(exc),
            "entity": exc.entity,
            "current": exc.current,
            "requested": exc.new,
        },
    )


@app.exception_handler(EstimateLockedError)
def locked_handler(request: Request, exc: EstimateLockedError):
    return JSONResponse(status_code=409, content={"detail": str(exc)})


@app.exception_handler(ContractError)
def contract_handler(request: Request, exc: ContractError):
    return JSONResponse(status_code=409, content={"detail": str(exc)})


@app.exception_handler(PricingError)
def pricing_handler(request: Request, exc: PricingError):
    return JSONResponse(status_code=422, content={"detail": str(exc)})


@app.exception_handler(FunctionInvocationError)
def function_error_handler(request: Request, exc: FunctionInvocationError):
    logger.error("function_error_response", function=exc.function_name, status_code=exc.status_code)
    return JSONResponse(
        status_code=502,
        content={"detail": str(exc), "function": exc.function_name},
    )


# ----------------------------------------------------
# Routers
# ----------------------------------------------------
app.include_router(quotes.router)
app.include_router(estimates.router)
app.include_router(contracts.router)
app.include_router(reports.router)
app.include_router(metrics_router)  # /metrics


# ----------------------------------------------------
# Startup
# ----------------------------------------------------
@app.on_event("startup")
def on_startup():
    Base.metadata.create_all(bind=engine)
