import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from clb_retention.config import settings
from clb_retention.database import init_db
from clb_retention.api.v1.router import api_router
from clb_retention.services.tiers import ConfigurationError
from clb_retention.utils import sanitize_error_message

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    await init_db()
    logger.info("Retention input store ready")
    yield


app = FastAPI(
    title=settings.app_name,
    description="Retention probability grades for CLB league seasons",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:5173", "http://localhost:3000", "http://127.0.0.1:5173"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routes
app.include_router(api_router, prefix="/api/v1")


@app.exception_handler(ConfigurationError)
async def configuration_error_handler(request: Request, exc: ConfigurationError):
    logger.error(f"Invalid retention configuration: {exc}")
    return JSONResponse(
        status_code=500,
        content={"detail": f"Invalid retention configuration: {sanitize_error_message(exc)}"},
    )


@app.get("/health")
async def health_check():
    return {"status": "healthy", "app": settings.app_name}
