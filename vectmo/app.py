"""
Vectmo Microservice
Main application entry point

Exposes training, prediction and embedding lookups for the character
transition model over HTTP.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from vectmo.config import settings
from vectmo.utils.logger import setup_logger

# Setup logging
logger = setup_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifecycle manager for service initialization"""
    from vectmo.services.model import get_vectmo_model

    logger.info("[BOOT] Starting Vectmo service...")
    try:
        model = get_vectmo_model()
        app.state.vectmo_model = model
        if model.load():
            logger.info(f"[BOOT] Model restored from {model.base_path}")
        else:
            logger.info("[BOOT] No stored model yet; POST /vectmo/train to create one")
        logger.info("[BOOT] Vectmo service ready!")
        yield
    except Exception as e:
        logger.error(f"[ERR] Failed to initialize: {e}", exc_info=True)
        raise
    finally:
        logger.info("[SHUTDOWN] Vectmo service stopped")


# Create FastAPI app
app = FastAPI(
    title="Vectmo Service",
    description="Character transition text model with vocabulary snapping",
    version=settings.SERVICE_VERSION,
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Global exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"[ERR] Unhandled exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={
            "ok": False,
            "error": {
                "code": "VECTMO_SERVICE_ERROR",
                "message": "Internal server error occurred",
                "details": {"type": type(exc).__name__},
            },
        },
    )


# Health check
@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {
        "ok": True,
        "data": {
            "status": "healthy",
            "service": settings.SERVICE_NAME,
        },
    }


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "service": settings.SERVICE_NAME,
        "version": settings.SERVICE_VERSION,
        "endpoints": {
            "health": "/health",
            "docs": "/docs",
            "vectmo": "/vectmo/*",
        },
    }


from vectmo.api.routers import vectmo_router

app.include_router(vectmo_router.router, tags=["Vectmo"])


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "vectmo.app:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower(),
    )
