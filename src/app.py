"""
src/app.py

FastAPI application entrypoint for the transaction service.

This module wires together:
- Logging configuration (rotating file under logs/)
- Request logging middleware
- The account service client, owned by the app lifespan
- The transactions router under /api
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from starlette.requests import Request

from api.schemas import HealthOut
from api.transactions import router as transactions_router
from clients.account_service_client import AccountServiceClient
from config import get_account_service_timeout, get_account_service_url, get_port
from logging_config import get_logger, setup_logging

# Configure logging before creating the app
log_file = setup_logging()
logger = get_logger("transaction_service")
logger.info("Logging configured. Log file: %s", log_file)


@asynccontextmanager
async def lifespan(app: FastAPI):
    base_url = get_account_service_url()
    app.state.account_service = AccountServiceClient(
        base_url, timeout=get_account_service_timeout()
    )
    logger.info("Transaction service starting up (account service: %s)", base_url)
    try:
        yield
    finally:
        try:
            await app.state.account_service.close()
        except Exception:
            logger.exception("Error closing account service client on shutdown")
        logger.info("Transaction service shutting down")


app = FastAPI(title="Transaction Service", version="1.0.0", lifespan=lifespan)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """
    Lightweight request logger to help trace transaction traffic.
    """
    try:
        body = await request.body()
        logger.info(
            "HTTP %s %s from %s body=%s",
            request.method,
            request.url.path,
            request.client.host if request.client else "?",
            body.decode(errors="ignore")[:200],
        )
    except Exception:
        logger.exception("Failed to read request body for logging")
    return await call_next(request)


@app.get("/api/health", response_model=HealthOut)
async def health():
    return HealthOut(status="healthy")


app.include_router(transactions_router, prefix="/api")


def run():
    import uvicorn

    uvicorn.run("app:app", host="0.0.0.0", port=get_port())
