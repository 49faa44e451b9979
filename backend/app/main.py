"""Main FastAPI application."""
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from app.config import settings
from app.api import users, courses
from app.database import Base, engine
from app.utils.exceptions import register_exception_handlers
from app.utils.logger import logger

# Register models on Base.metadata
from app.models import Course, User  # noqa: F401

VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    # No migrations; tables are created from the models
    Base.metadata.create_all(bind=engine)
    logger.info(f"Course Catalog API started ({settings.environment})")
    yield


app = FastAPI(
    title="Course Catalog API",
    description="Accounts and the courses they own, behind HTTP Basic authentication",
    version=VERSION,
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["Location"],
)

register_exception_handlers(app)

# Include routers
app.include_router(users.router, prefix=settings.api_prefix)
app.include_router(courses.router, prefix=settings.api_prefix)


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "Course Catalog API",
        "version": VERSION,
        "docs": "/docs",
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}
