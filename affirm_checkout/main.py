"""
Affirm Checkout Application

Confirms Affirm installment checkouts against store orders: reconciles the
customer's Affirm details with the order and records the Affirm payment.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from .core.config import settings
from .errors import (
    CheckoutError,
    GatewayError,
    NotFoundError,
    StateConflictError,
    ValidationError,
)
from .routes import orders_router, affirm_router, payments_router
from .routes.affirm import affirm_client


# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

ERROR_STATUS_CODES = {
    NotFoundError: 404,
    ValidationError: 422,
    StateConflictError: 409,
    GatewayError: 502,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    logger.info("Affirm Checkout starting up...")
    logger.info(f"Affirm API: {settings.get_affirm_base_url()}")
    logger.info(f"Affirm credentials configured: {settings.affirm_credentials_configured}")

    yield

    logger.info("Affirm Checkout shutting down...")
    await affirm_client.close()


# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    description="Affirm checkout confirmation and payment reconciliation",
    version="1.0.0",
    lifespan=lifespan,
)


@app.exception_handler(CheckoutError)
async def checkout_error_handler(request: Request, exc: CheckoutError):
    """Map checkout errors to HTTP responses"""
    status_code = next(
        (code for error, code in ERROR_STATUS_CODES.items() if isinstance(exc, error)),
        400,
    )
    logger.warning(f"{request.method} {request.url.path} failed: {exc}")

    content = {"detail": str(exc)}
    if isinstance(exc, ValidationError) and exc.errors:
        content["errors"] = exc.errors
    return JSONResponse(status_code=status_code, content=content)


# Include API routers
app.include_router(orders_router)
app.include_router(affirm_router)
app.include_router(payments_router)


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "service": "affirm-checkout",
        "affirm_configured": settings.affirm_credentials_configured,
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "affirm_checkout.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
