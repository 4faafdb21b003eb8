#!/usr/bin/env python
"""
Run the Estudar.Pro API server.

Usage:
    uv run python run_api.py
    uv run python run_api.py --reload          # Development mode
    uv run python run_api.py --workers 4       # Production, behind the web proxy
"""

import argparse
import uvicorn

from api.config import get_settings


def main():
    settings = get_settings()

    parser = argparse.ArgumentParser(description="Run Estudar.Pro API server")
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload")
    parser.add_argument("--host", type=str, default=settings.host, help="Host to bind to")
    parser.add_argument("--port", type=int, default=settings.port, help="Port to bind to")
    parser.add_argument("--workers", type=int, default=settings.workers, help="Worker processes")
    parser.add_argument("--log-level", default=settings.log_level, help="uvicorn log level")
    args = parser.parse_args()

    reload = args.reload or settings.reload
    uvicorn.run(
        "api:app",
        host=args.host,
        port=args.port,
        reload=reload,
        # uvicorn refuses multiple workers together with reload
        workers=1 if reload else args.workers,
        log_level=args.log_level,
        proxy_headers=True,
        forwarded_allow_ips=settings.forwarded_allow_ips,
    )


if __name__ == "__main__":
    main()
