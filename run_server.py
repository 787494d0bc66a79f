#!/usr/bin/env python3
"""Run the FastAPI server with auto-reload for local development."""

import uvicorn

from health_concierge.config import get_settings


def main():
    """Run the FastAPI server."""
    settings = get_settings()

    uvicorn.run(
        "health_concierge.app:app",
        host=settings.server_host,
        port=settings.server_port,
        reload=True,
        log_level="info"
    )

if __name__ == "__main__":
    main()
