"""
Health Check Route — GET /health
"""

from __future__ import annotations

from fastapi import APIRouter

from modgate.config import current_thresholds

router = APIRouter()


@router.get("/health")
async def health():
    """Health check endpoint."""
    thresholds = current_thresholds()
    return {
        "status": "ok",
        "version": "1.0.0",
        "risk_bounds": thresholds.model_dump(),
    }
