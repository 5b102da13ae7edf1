#!/usr/bin/env python3
"""Startup script for the git2parquet API server."""

import argparse

import uvicorn


def main():
    """Main entry point for API server."""
    parser = argparse.ArgumentParser(
        description="Start git2parquet API server",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python scripts/start_api.py                    # Development server
  python scripts/start_api.py --port 9000        # Custom port
  python scripts/start_api.py --reload           # Auto-reload on changes
        """
    )

    parser.add_argument(
        "--host",
        default="127.0.0.1",
        help="Host to bind to (default: 127.0.0.1)"
    )
    parser.add_argument(
        "--port",
        type=int,
        default=8000,
        help="Port to bind to (default: 8000)"
    )
    parser.add_argument(
        "--reload",
        action="store_true",
        help="Enable auto-reload for development"
    )
    parser.add_argument(
        "--log-level",
        default="info",
        choices=["critical", "error", "warning", "info", "debug", "trace"],
        help="Log level (default: info)"
    )

    args = parser.parse_args()

    print("Starting git2parquet API server...")
    print(f"   Host: {args.host}")
    print(f"   Port: {args.port}")
    print(f"   API Docs: http://{args.host}:{args.port}/docs")
    print()

    config = {
        "app": "git2parquet.api.app:app",
        "host": args.host,
        "port": args.port,
        "log_level": args.log_level,
    }

    if args.reload:
        config["reload"] = True
        config["reload_dirs"] = ["src"]

    uvicorn.run(**config)


if __name__ == "__main__":
    main()
