from __future__ import annotations

from datetime import datetime, timezone
from typing import Annotated

from fastapi import APIRouter, Depends

from guide_api.api.routes.dependencies import get_llm_queue
from guide_api.core.config import settings
from guide_api.schemas.chat import HealthResponse
from guide_api.utils.api_queue import ApiQueue

router = APIRouter(tags=["Health"])


@router.get("/health", response_model=HealthResponse)
def health_check(queue: Annotated[ApiQueue, Depends(get_llm_queue)]) -> HealthResponse:
    """Health check endpoint.

    Always answers 200 while the process is up. ``has_api_key`` tells
    whether chat requests can reach the upstream provider.
    """

    return HealthResponse(
        timestamp=datetime.now(timezone.utc).isoformat(),
        provider=settings.llm.provider,
        has_api_key=bool(settings.llm.api_key),
        queued_requests=queue.length,
    )
