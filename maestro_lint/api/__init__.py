"""
Maestro Lint API - FastAPI REST API for linting flow text.

Endpoints:
    POST /api/lint     - Lint flow text
    GET  /api/health   - Health check
"""

from .server import create_app

__all__ = ["create_app"]
