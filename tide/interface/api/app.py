"""FastAPI application."""

from typing import Optional

from dishka import AsyncContainer
from fastapi import FastAPI

from tide.domain.error import DomainError
from tide.interface.api.routes import communities, health, ledger, offers, selection
from tide.interface.error import domain_error_handler
from tide.util.di.container import create_container, setup_di
from tide.util.observability import instrument_fastapi


def create_app(container: Optional[AsyncContainer] = None) -> FastAPI:
    """Create FastAPI application.

    Note: Logfire should be configured before calling this function.
    In production, start_app.py handles this.

    Args:
        container: DI container to use; the production container when omitted
    """
    app_instance = FastAPI(
        title="Trueque Tide Engine API",
        description="Barter offers, Trust Token settlement and community trust",
        version="0.1.0",
    )

    # Instrument FastAPI for automatic tracing of HTTP requests
    instrument_fastapi(app_instance)

    # Setup dependency injection
    # Settings are loaded from environment automatically
    setup_di(app_instance, container or create_container())

    app_instance.add_exception_handler(DomainError, domain_error_handler)

    # Register routes
    app_instance.include_router(health.router)
    app_instance.include_router(communities.router)
    app_instance.include_router(selection.router)
    app_instance.include_router(offers.router)
    app_instance.include_router(ledger.router)

    return app_instance
