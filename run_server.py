#!/usr/bin/env python3
"""
Lead Intent Scoring Engine - API Server
=======================================
Run this file to start the FastAPI server with a startup banner.

Usage:
    python run_server.py                # Start on port 8000
    python run_server.py --port 8080    # Start on custom port
    python run_server.py --reload       # Development mode with auto-reload
"""

import os

# Load environment variables FIRST
from dotenv import load_dotenv
load_dotenv()

import argparse
import uvicorn


def main():
    parser = argparse.ArgumentParser(description="Lead Intent Scoring Engine API Server")
    parser.add_argument("--host", type=str, default="0.0.0.0", help="Host (default: 0.0.0.0)")
    parser.add_argument("--port", type=int, default=8000, help="Port (default: 8000)")
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload")
    args = parser.parse_args()

    # Check for API key
    api_key = os.getenv("GROQ_API_KEY", "")
    llm_status = "Enabled" if api_key else "Disabled (no GROQ_API_KEY, AI scores will be 0)"

    print(f"""
Lead Intent Scoring Engine API v1.0.0
  Server:    http://{args.host}:{args.port}
  Docs:      http://localhost:{args.port}/docs
  Health:    http://localhost:{args.port}/api/health
  LLM:       {llm_status}

  Endpoints:
    POST /api/offer          - Create an offer
    POST /api/leads/upload   - Upload leads CSV
    POST /api/score          - Score leads against an offer
    GET  /api/results        - Results with summary
    """)

    uvicorn.run(
        "intent_engine.api.endpoints:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
    )


if __name__ == "__main__":
    main()
