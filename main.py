"""
Lead Intent Scoring Engine - Main Entry Point
=============================================
Run this file to start the FastAPI server.

Usage:
    python main.py                    # Start server on port 8000
    python main.py --port 8080        # Start server on custom port
    python main.py --reload           # Start with auto-reload (dev mode)

API Documentation:
    http://localhost:8000/docs        # Swagger UI
    http://localhost:8000/redoc       # ReDoc
"""

import argparse
import uvicorn
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

from intent_engine.config.settings import SERVER_CONFIG


def main():
    parser = argparse.ArgumentParser(description="Lead Intent Scoring Engine API Server")
    parser.add_argument(
        "--host",
        type=str,
        default=SERVER_CONFIG["host"],
        help=f"Host to bind the server to (default: {SERVER_CONFIG['host']})",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=SERVER_CONFIG["port"],
        help=f"Port to run the server on (default: {SERVER_CONFIG['port']})",
    )
    parser.add_argument(
        "--reload",
        action="store_true",
        help="Enable auto-reload for development",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="info",
        help="Log level (default: info)",
    )

    args = parser.parse_args()

    # Leads, offers and results live in process memory, so one worker only
    uvicorn.run(
        "intent_engine.api.endpoints:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        workers=1,
        log_level=args.log_level,
    )


if __name__ == "__main__":
    main()
