# backend/app/main.py
import logging

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.tutorial_api import get_tutorial_service
from app.api.tutorial_api import router as tutorial_router
from app.core.tutorial import TutorialService, load_settings

SERVICE_NAME = "Tutorial Catalogue Backend"
SERVICE_VERSION = "1.0"

logger = logging.getLogger("uvicorn.error")

settings = load_settings()


# -----------------------------
# App
# -----------------------------
app = FastAPI(title=SERVICE_NAME, version=SERVICE_VERSION)


# -----------------------------
# CORS (browser frontend on another origin)
# -----------------------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# -----------------------------
# Routers
# -----------------------------
app.include_router(tutorial_router, tags=["Tutorial"])


@app.exception_handler(Exception)
async def unhandled_error(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content={"detail": "Some error occurred while processing the tutorial request."},
    )


# -----------------------------
# Home / health
# -----------------------------
@app.get("/")
def home():
    return {
        "status": "running",
        "message": "Welcome to the tutorial catalogue.",
        "routes": [
            "/api/tutorials",
            "/api/tutorials/published",
            "/api/tutorials/{id}",
            "/health",
        ],
    }


@app.get("/health")
def health_check(service: TutorialService = Depends(get_tutorial_service)):
    return {
        "status": "ok",
        "service": SERVICE_NAME,
        "version": SERVICE_VERSION,
        "tutorials": service.repository.count(),
    }
