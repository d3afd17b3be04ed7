"""Thin launcher so platform auto-detection (main.py) starts the API server."""
import os

os.execvp("uvicorn", [
    "uvicorn", "trending.api:app",
    "--host=0.0.0.0",
    "--port=" + os.environ.get("PORT", "8000"),
])
