"""Run the assistant proxy with uvicorn.

Usage:
    python -m guide_api

Host and port come from APP_HOST / APP_PORT (default 0.0.0.0:3001).
"""

import uvicorn

from guide_api.core.config import settings


def main() -> None:
    uvicorn.run(
        "guide_api.main:app",
        host=settings.app.host,
        port=settings.app.port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
