from __future__ import annotations

from guide_api.api.routes.chat import router as chat_router
from guide_api.api.routes.health import router as health_router

__all__ = ["chat_router", "health_router"]
