"""
CORS Middleware Configuration
Enables Cross-Origin Resource Sharing for the portfolio frontend.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import settings


def setup_cors(app: FastAPI) -> None:
    """
    Configure CORS middleware for the FastAPI application.

    Allowed origins come from CORS_ORIGINS (a JSON list in
    the environment). In production restrict it to the frontend domain.

    Args:
        app: FastAPI application instance
    """
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,  # Allow auth headers
        allow_methods=["*"],
        allow_headers=["*"],
    )
