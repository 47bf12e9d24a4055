from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import logging
from datetime import datetime
from contextlib import asynccontextmanager

from storefront.config import settings
from storefront.models.schemas import ErrorResponse
from storefront.api.routes import router
from storefront.services.storefront_client import StorefrontClient, StorefrontQueryError

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Application starting up...")
    app.state.storefront = StorefrontClient()
    logger.info(f"Storefront API client ready for {settings.SHOPIFY_STORE_DOMAIN}")
    if not settings.CONTACT_FORM_ENDPOINT:
        logger.warning("CONTACT_FORM_ENDPOINT is not set; contact submissions will fail")

    yield

    await app.state.storefront.close()
    logger.info("Application shutting down...")

app = FastAPI(
    title=settings.API_TITLE,
    description=settings.API_DESCRIPTION,
    version=settings.API_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routes with prefix
app.include_router(router, prefix="/api/v1", tags=["Storefront"])


@app.get("/", tags=["Root"])
async def root():
    """Root endpoint with API information"""
    return {
        "message": f"{settings.STORE_NAME} Storefront API",
        "version": settings.API_VERSION,
        "documentation": {
            "swagger_ui": "/docs",
            "redoc": "/redoc",
            "openapi_json": "/openapi.json"
        },
        "endpoints": {
            "home": "/api/v1/home",
            "footer": "/api/v1/footer",
            "contact": "/api/v1/contact",
            "health": "/api/v1/health"
        },
        "status": "active"
    }


@app.get("/health", tags=["Health"])
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "timestamp": datetime.now(),
        "version": settings.API_VERSION,
        "service": settings.API_TITLE,
        "storefront_domain": settings.SHOPIFY_STORE_DOMAIN,
        "contact_endpoint_configured": bool(settings.CONTACT_FORM_ENDPOINT)
    }


# Global exception handlers
@app.exception_handler(404)
async def not_found_handler(request, exc):
    return JSONResponse(
        status_code=404,
        content=ErrorResponse(
            error="Not Found",
            message="The requested resource was not found",
            status_code=404
        ).model_dump(mode="json")
    )


@app.exception_handler(500)
async def internal_server_error_handler(request, exc):
    logger.error(f"Internal server error: {exc}")
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(
            error="Internal Server Error",
            message="An internal server error occurred",
            status_code=500
        ).model_dump(mode="json")
    )


@app.exception_handler(StorefrontQueryError)
async def storefront_error_handler(request, exc: StorefrontQueryError):
    logger.error(f"Storefront query failed for {request.url.path}: {exc}")
    return JSONResponse(
        status_code=502,
        content=ErrorResponse(
            error="Bad Gateway",
            message="The storefront data could not be loaded",
            status_code=502
        ).model_dump(mode="json")
    )


@app.exception_handler(HTTPException)
async def http_exception_handler(request, exc: HTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(
            error="HTTP Error",
            message=exc.detail,
            status_code=exc.status_code
        ).model_dump(mode="json")
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("storefront.main:app", host=settings.HOST, port=settings.PORT, reload=settings.DEBUG)
