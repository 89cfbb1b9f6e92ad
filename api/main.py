# Main FastAPI application file
# File: api/main.py

from fastapi import FastAPI, Depends
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
from typing import Dict

from api.utils.auth import get_api_key
from api.utils.config import Config
from api.utils.logging import api_logger as logger
from api.endpoints.sizing import router as sizing_router


# Define lifespan context manager (replaces on_event)
@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Run on application startup.")
    Config.validate()

    yield  # This is where the application runs

    logger.info("Application shutting down.")


app = FastAPI(
    title="Sanitary Pipe Sizing API",
    description="""
    # Sanitary Pipe Sizing API

    Sizes sanitary drainage pipe networks from drainage fixture unit (DFU) loads.

    ## Rules

    - IPC Table 710.1(1) for vertical stacks
    - IPC Table 710.1(2) and §704.1 minimum slope for horizontal drains
    - IPC Table 703.2 horizontal branch limits
    - IPC §710.1.8 no reduction in size in the direction of flow

    ## Authentication

    Sizing endpoints require an API key in the `X-API-Key` header.

    ## Workflow

    1. Submit segments with endpoints and DFU loads to `POST /sizing/size`
    2. Read the final diameters from `segments` and the per-segment decisions from `records`
    """,
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_tags=[
        {
            "name": "Sizing",
            "description": "Sanitary pipe sizing operations"
        },
        {
            "name": "Status",
            "description": "API status and health check endpoints"
        },
    ],
    lifespan=lifespan,
)


# Root endpoint
@app.get("/", tags=["Status"])
async def root():
    return {"status": "online", "message": "Sanitary Pipe Sizing API is running"}


# Health check endpoint (general API health)
@app.get("/health", tags=["Status"], response_model=Dict[str, str])
async def health_check():
    """Check if the API service is healthy."""
    logger.info("Health check requested")
    return {"status": "healthy", "message": "Sanitary Pipe Sizing API is running"}


# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Restrict this in production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(
    sizing_router,
    prefix="/sizing",
    tags=["Sizing"],
    dependencies=[Depends(get_api_key)]
)
logger.info("Included sizing router with prefix /sizing")

# Run with: uvicorn api.main:app --reload
