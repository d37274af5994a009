#!/usr/bin/env python3
"""
CMS Core Runner
===============

Usage:
    python run_app.py                    # Development server with auto-reload
    python run_app.py --port 8001        # Custom port
    python run_app.py --host 127.0.0.1   # Custom host
    python run_app.py --no-reload        # Production-style single process
"""

import argparse
import sys

import uvicorn

from cmscore.core.config import settings


def main():
    parser = argparse.ArgumentParser(description="CMS Core Runner")
    parser.add_argument(
        "--host",
        default=settings.HOST,
        help=f"Host to bind to (default: {settings.HOST})"
    )
    parser.add_argument(
        "--port",
        type=int,
        default=settings.PORT,
        help=f"Port to bind to (default: {settings.PORT})"
    )
    parser.add_argument(
        "--no-reload",
        action="store_true",
        help="Disable auto-reload"
    )

    args = parser.parse_args()

    reload = not args.no_reload and settings.ENVIRONMENT != "production"

    print(f"Starting {settings.APP_NAME} on {args.host}:{args.port}")
    print(f"API Docs: http://{args.host}:{args.port}/api/docs")

    uvicorn.run(
        "cmscore.main:app",
        host=args.host,
        port=args.port,
        reload=reload,
        log_level=settings.LOG_LEVEL.lower()
    )
    return 0


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print("\nServer stopped by user")
        sys.exit(0)
