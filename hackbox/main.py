"""
Hackbox - Main FastAPI Application

Coding challenges with automatic grading, XP and levels.
"""

import logging
import time

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import LOG_LEVEL
from .db import init_db
from .api import tasks_router, users_router, admin_router
from .api.schemas import ErrorResponse
from . import __version__

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Hackbox",
    description="Coding challenges with automatic grading against test cases. Earn XP, level up, keep your streak.",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
)

# CORS - the browser editor is served from another origin
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Request timing middleware
@app.middleware("http")
async def add_timing_header(request: Request, call_next):
    start_time = time.time()
    response = await call_next(request)
    process_time = time.time() - start_time
    response.headers["X-Process-Time"] = f"{process_time:.3f}s"
    return response


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(
            error_code="INTERNAL_ERROR",
            message="An unexpected error occurred",
        ).model_dump(),
    )


app.include_router(tasks_router)
app.include_router(users_router)
app.include_router(admin_router)


@app.get("/")
async def root():
    return {
        "name": "Hackbox",
        "version": __version__,
        "description": "Coding challenges with automatic grading",
        "docs": "/docs",
        "endpoints": {
            "tasks": "/tasks",
            "run": "/tasks/{id}/run",
            "users": "/users",
            "progress": "/users/{id}/progress",
            "admin": "/admin",
        },
    }


@app.get("/health")
async def health():
    """Health check endpoint for monitoring."""
    from datetime import datetime
    from sqlalchemy import text
    from .db import SessionLocal

    health_status = {
        "status": "healthy",
        "version": __version__,
        "timestamp": datetime.utcnow().isoformat() + "Z",
    }

    try:
        db = SessionLocal()
        db.execute(text("SELECT 1"))
        db.close()
        health_status["database"] = "connected"
    except Exception as e:
        health_status["status"] = "degraded"
        health_status["database"] = f"error: {str(e)}"

    return health_status


@app.on_event("startup")
async def startup():
    """Initialize database and bundled tasks on startup."""
    init_db()
    logger.info("Hackbox v%s started", __version__)


# For direct running
if __name__ == "__main__":
    import uvicorn
    from .config import API_HOST, API_PORT

    uvicorn.run(app, host=API_HOST, port=API_PORT)
