"""
Visa Case Manager - immigration case management for companies hiring foreign workers
FastAPI application entry point
"""
import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from casework.core.config import settings
from casework.core.database import create_tables
from casework.api import (
    users,
    companies,
    people,
    process_types,
    legal_frameworks,
    document_types,
    process_requests,
    main_processes,
    individual_processes,
    documents,
    tasks,
    exports,
    activity_logs,
    dashboard,
)
# Import models to ensure they're registered with Base.metadata
import casework.models  # noqa: F401

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title=settings.PROJECT_NAME,
    description="Process requests, visa processes, requirements checklists and government submission tracking",
    version=settings.VERSION,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(users.router, prefix="/users", tags=["users"])
app.include_router(companies.router, prefix="/companies", tags=["companies"])
app.include_router(people.router, prefix="/people", tags=["people"])
app.include_router(process_types.router, prefix="/process-types", tags=["catalog"])
app.include_router(legal_frameworks.router, prefix="/legal-frameworks", tags=["catalog"])
app.include_router(document_types.router, prefix="/document-types", tags=["catalog"])
app.include_router(process_requests.router, prefix="/process-requests", tags=["process-requests"])
app.include_router(main_processes.router, prefix="/main-processes", tags=["main-processes"])
app.include_router(individual_processes.router, prefix="/individual-processes", tags=["individual-processes"])
app.include_router(documents.router, prefix="/documents", tags=["documents"])
app.include_router(tasks.router, prefix="/tasks", tags=["tasks"])
app.include_router(exports.router, prefix="/exports", tags=["exports"])
app.include_router(activity_logs.router, prefix="/activity-logs", tags=["activity-logs"])
app.include_router(dashboard.router, prefix="/dashboard", tags=["dashboard"])

@app.on_event("startup")
async def startup_event():
    """Initialize database on startup"""
    await create_tables()
    logger.info("%s %s started", settings.PROJECT_NAME, settings.VERSION)

@app.get("/")
async def root():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "service": settings.PROJECT_NAME,
        "version": settings.VERSION
    }

@app.get("/health")
async def health():
    """Detailed health check"""
    return {
        "status": "healthy",
        "database": "connected",
        "bucket": str(settings.BUCKET_DIR)
    }
