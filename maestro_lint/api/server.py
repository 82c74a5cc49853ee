"""
FastAPI REST API for linting flow text.

Lets editors and CI bots lint a flow without shelling out to the CLI.

Usage:
    # Run standalone
    python -m maestro_lint.api.server

    # Or via factory
    from maestro_lint.api import create_app
    app = create_app()
    uvicorn.run(app, port=5002)

API Structure:
    POST /api/lint     - Lint flow text
    GET  /api/health   - Health check
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import List, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from maestro_lint import __version__
from maestro_lint.validator import LintResult, lint

logger = logging.getLogger(__name__)


# =============================================================================
# Pydantic Models for Request/Response
# =============================================================================


class LintRequest(BaseModel):
    """Request for lint endpoint."""

    text: str = Field(..., description="Full content of the flow file")
    path: Optional[str] = Field(default=None, description="File path, echoed back for reporting")


class DiagnosticResponse(BaseModel):
    """A single diagnostic."""

    message: str
    line: Optional[int] = None


class LintResponse(BaseModel):
    """Response for lint endpoint."""

    valid: bool
    path: Optional[str] = None
    diagnostics: List[DiagnosticResponse] = Field(default_factory=list)
    formatted: List[str] = Field(default_factory=list)


class HealthResponse(BaseModel):
    """Response for health check endpoint."""

    status: str
    version: str
    timestamp: str


# =============================================================================
# Application Factory
# =============================================================================


def create_app(enable_cors: bool = True) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        enable_cors: Whether to enable CORS middleware.

    Returns:
        Configured FastAPI application.
    """
    app = FastAPI(
        title="Maestro Lint API",
        description="Static lint of Maestro flow files",
        version=__version__,
    )

    if enable_cors:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=["*"],
            allow_methods=["GET", "POST", "OPTIONS"],
            allow_headers=["*"],
        )

    @app.post("/api/lint", response_model=LintResponse)
    def lint_flow(request: LintRequest):
        """Lint flow text and return its diagnostics."""
        result = LintResult(path=request.path, diagnostics=lint(request.text))
        logger.info(
            "Linted %s: %d diagnostic(s)",
            request.path or "<inline>",
            len(result.diagnostics),
        )
        return LintResponse(
            valid=result.passed,
            path=result.path,
            diagnostics=[DiagnosticResponse(**d.to_dict()) for d in result.diagnostics],
            formatted=result.formatted(),
        )

    @app.get("/api/health", response_model=HealthResponse)
    def health_check():
        """Health check endpoint."""
        return HealthResponse(
            status="ok",
            version=__version__,
            timestamp=datetime.now(timezone.utc).isoformat(timespec="seconds"),
        )

    return app


# =============================================================================
# Main Entry Point
# =============================================================================


def main():
    """Run the API server."""
    import argparse

    import uvicorn

    parser = argparse.ArgumentParser(description="Maestro Lint API Server")
    parser.add_argument("--host", default="127.0.0.1", help="Host to bind to")
    parser.add_argument("--port", type=int, default=5002, help="Port to bind to")
    parser.add_argument("--no-cors", action="store_true", help="Disable CORS")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO)
    app = create_app(enable_cors=not args.no_cors)

    print(f"Starting Maestro Lint API on http://{args.host}:{args.port}")
    print("  POST   /api/lint     - Lint flow text")
    print("  GET    /api/health   - Health check")

    uvicorn.run(app, host=args.host, port=args.port)


if __name__ == "__main__":
    main()
