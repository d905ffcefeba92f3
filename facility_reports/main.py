"""
Facility Reports - Backend API
FastAPI + SQLModel key-value persistence
"""
from dotenv import load_dotenv
load_dotenv()  # Load .env before settings are read

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from facility_reports import __version__
from facility_reports.api.deps import get_report_store
from facility_reports.api.v1 import buildings, reports, sessions
from facility_reports.config import settings
from facility_reports.log_config import configure_logging

configure_logging()
logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: load the collection once so the first request is not the one paying for it
    store = app.dependency_overrides.get(get_report_store, get_report_store)()
    logger.info("service_started", service=settings.service_name, reports=len(store))

    yield

    # Shutdown
    logger.info("service_stopping", service=settings.service_name)


app = FastAPI(
    title="Facility Reports API",
    description="Campus facility fault reporting: submission, tracking and statistics",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routers
app.include_router(sessions.router, prefix="/api/v1/sessions", tags=["sessions"])
app.include_router(reports.router, prefix="/api/v1/reports", tags=["reports"])
app.include_router(buildings.router, prefix="/api/v1/buildings", tags=["buildings"])


@app.get("/health")
async def health_check():
    return {"status": "healthy", "service": settings.service_name}


@app.get("/")
async def root():
    return {"message": "Facility Reports API", "docs": "/docs"}
