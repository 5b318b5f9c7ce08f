"""Centralized configuration for the comparador web app."""

import os

# Content directory served by the API (COMPARADOR_CONTENT_DIR overrides)
from comparador.config import CONTENT_DIR  # noqa: F401

# Flask app settings (allow env overrides; default debug off for safety)
# PORT is set by most hosting platforms; fall back to FLASK_PORT or 5000.
FLASK_HOST = os.getenv("FLASK_HOST", "0.0.0.0")
FLASK_PORT = int(os.getenv("FLASK_PORT", os.getenv("PORT", "5000")))
FLASK_DEBUG = os.getenv("FLASK_DEBUG", "False").lower() == "true"

# Write JSONL catalog events alongside console logs
LOG_TO_FILE = os.getenv("COMPARADOR_LOG_TO_FILE", "False").lower() == "true"
