"""Middleware registration."""

from fastapi import FastAPI

from edulink.config import Settings
from edulink.middleware.error_handler import setup_error_handlers
from edulink.middleware.logging import setup_logging
from edulink.middleware.request_id import RequestIdMiddleware


def setup_middleware(app: FastAPI, settings: Settings) -> None:
    """Configure logging, register error handlers and add request middleware."""
    setup_logging(settings)
    setup_error_handlers(app)
    app.add_middleware(RequestIdMiddleware)
