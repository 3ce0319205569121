# bloom backend api
# fastapi app with async mongodb serving the practitioner dashboard

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from bloom.config import settings
from bloom.dependencies import InvalidDashboardDate
from bloom.models.dashboard import DashboardResponse
from bloom.services.db import db
from bloom.routers import dashboard

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """startup: connect to mongodb. shutdown: close connection."""
    logger.info("Starting Bloom backend...")
    await db.connect()
    logger.info("Bloom backend ready")
    yield
    logger.info("Shutting down Bloom backend...")
    await db.close()


app = FastAPI(
    title="Bloom API",
    description="Backend API for the Bloom practice platform: practitioner dashboard, schedule and practice metrics",
    version="0.1.0",
    lifespan=lifespan,
)

# cors: allow frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.FRONTEND_URL, "http://localhost:5173"],
    allow_credentials=True,
    allow_methods=["GET", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)

# register routers
app.include_router(dashboard.router)


@app.exception_handler(InvalidDashboardDate)
async def invalid_date_handler(request: Request, exc: InvalidDashboardDate):
    """bad ?date= values get the same envelope as every other dashboard error"""
    logger.info(f"Rejected dashboard date: {exc.value}")
    body = DashboardResponse(success=False, error="Invalid date format. Use YYYY-MM-DD.")
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=body.model_dump(by_alias=True))


@app.get("/health")
async def health_check():
    """basic health check endpoint"""
    return {"status": "ok", "service": "bloom-api"}
