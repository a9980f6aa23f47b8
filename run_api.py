#!/usr/bin/env python3
"""Serve the Konkan Travel API with uvicorn. Usage: python run_api.py [--no-reload]. HOST=0.0.0.0 exposes it on the network."""
import argparse
import os
from pathlib import Path

# .env next to this file wins over the shell so the reload worker sees the same Gemini/Supabase keys
from dotenv import load_dotenv
load_dotenv(Path(__file__).resolve().parent / ".env", override=True)

import uvicorn

if __name__ == "__main__":
    ap = argparse.ArgumentParser(description="Run the Konkan Travel API")
    ap.add_argument("--no-reload", action="store_true", help="Disable auto-reload (production)")
    args = ap.parse_args()

    uvicorn.run(
        "app.main:app",
        host=os.getenv("HOST", "127.0.0.1"),
        port=int(os.getenv("PORT", "8000")),
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
        reload=not args.no_reload,
    )
