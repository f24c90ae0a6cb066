"""API v1 routes."""

from fastapi import APIRouter

from quizdeck.api.v1 import admin, auth, flashcards, health, questions, stats

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(questions.router, prefix="/questions", tags=["questions"])
router.include_router(flashcards.router, prefix="/flashcards", tags=["flashcards"])
router.include_router(stats.router, prefix="/user", tags=["user"])
router.include_router(admin.router, prefix="/admin", tags=["admin"])
