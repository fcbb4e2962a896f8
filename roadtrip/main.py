"""
FastAPI application with all routes.
"""
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from roadtrip.config import get_settings
from roadtrip.planner.routes import router as planner_router

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

settings = get_settings()

app = FastAPI(
    title="Road Trip Planner API",
    description="Route segmentation by driving time with LLM-recommended stops",
    version="1.0.0",
)

# CORS middleware (the map UI is served from another origin)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allow_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(planner_router)


# ============ Health Check ============

@app.get("/health")
def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


# ============ Startup Event ============

@app.on_event("startup")
async def startup_event():
    """Log startup information."""
    logger.info("Starting Road Trip Planner API")
    logger.info(f"Chat model: {settings.llm_chat_model}")
    logger.info(f"Default segment hours: {settings.default_segment_hours}")
