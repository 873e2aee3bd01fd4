"""
HR Careers Portal - Main Application

FastAPI backend with:
- MongoDB for job postings and applications
- Resume uploads stored on disk and served from /uploads
- SMTP notifications to HR and applicants

Run: uvicorn app.main:app --reload
"""

import logging
import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.routes import api_router
from app.core.config import get_settings
from app.core.errors import register_exception_handlers
from app.core.log import setup_logging
from app.db.mongodb import init_mongo_indexes, close_mongo_client, test_mongo_connection
from app.utils.file_upload import RESUME_SUBDIR, UploadFiles

settings = get_settings()

setup_logging(settings.log_level)
LOG = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title="HR Careers Portal",
    description="""
    Job posting and application backend for the careers site and HR dashboard.

    ## Features
    - **Jobs**: Create, filter, search, update, open/close and delete postings
    - **Apply**: Multipart application with resume upload and email notification
    - **Applications**: HR dashboard listing of received applications
    """,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    debug=settings.debug
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Include API routes
app.include_router(api_router, prefix="/api")

# Uploaded resumes (directory is created on startup)
app.mount("/uploads", UploadFiles(settings), name="uploads")


# Startup event
@app.on_event("startup")
async def startup_event():
    """Create the upload directory and MongoDB indexes."""
    os.makedirs(os.path.join(settings.upload_dir, RESUME_SUBDIR), exist_ok=True)
    try:
        init_mongo_indexes()
    except Exception as e:
        LOG.warning(f"MongoDB index initialization failed: {e}")
    if not settings.mail_configured:
        LOG.warning("MAIL_USER / MAIL_PASSWORD not set; application emails are disabled")


@app.on_event("shutdown")
async def shutdown_event():
    close_mongo_client()


@app.get("/", tags=["Health"])
async def root():
    return {"status": "healthy", "app": "HR Careers Portal", "docs": "/docs"}


@app.get("/health", tags=["Health"])
async def health_check():
    """Detailed health check."""
    return {
        "status": "healthy",
        "mongodb": "connected" if test_mongo_connection() else "disconnected"
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host=settings.host, port=settings.port)
