"""
Checkfile Routes — POST /generate, POST /diff
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from modgate.api.dependencies import get_check_worker
from modgate.models.api_models import (
    DiffRequest,
    DiffResponse,
    GenerateRequest,
    GenerateResponse,
)
from modgate.workers.check_worker import CheckWorker

router = APIRouter()


@router.post("/generate", response_model=GenerateResponse)
async def generate(
    request: GenerateRequest,
    worker: CheckWorker = Depends(get_check_worker),
):
    """Generate a starter checkfile that the module satisfies exactly."""
    return GenerateResponse(checkfile=worker.generate(request.module))


@router.post("/diff", response_model=DiffResponse)
async def diff(
    request: DiffRequest,
    worker: CheckWorker = Depends(get_check_worker),
):
    """Diff the checkfiles generated for two modules."""
    text = worker.diff(
        request.a, request.b, color=request.color, with_context=request.with_context
    )
    return DiffResponse(diff=text, identical=text == "")
