"""FastAPI application entrypoint. No business logic; only wiring and middleware."""

from dotenv import load_dotenv

load_dotenv()

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from quizdeck.api.v1 import router as v1_router
from quizdeck.core.config import settings
from quizdeck.core.logging import configure_logging

configure_logging(settings.DEBUG)

app = FastAPI(
    title="Quizdeck API",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.APP_ENV == "dev" else [],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(v1_router, prefix=settings.API_V1_PREFIX)


@app.get("/")
def root() -> dict[str, str]:
    """Root route; points clients at the versioned API."""
    return {"message": "Quizdeck API", "api": settings.API_V1_PREFIX}
