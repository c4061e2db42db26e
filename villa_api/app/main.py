"""
Main entrypoint for the Villa API.

This module assembles the FastAPI application, sets up logging,
creates the villa store and service, registers the error handlers and
includes the versioned routers.  The ``create_app`` function builds
and configures the app, which is then instantiated at module import
time as ``app``, e.g.::

    uvicorn villa_api.app.main:app --reload
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .api.v1.router import legacy_router, router as v1_router
from .core.config import Settings, settings
from .core.errors import VillaAPIError, field_errors
from .core.logging_config import setup_logging
from .core.store import DEFAULT_VILLAS, VillaStore
from .services.villa_service import VillaService


logger = logging.getLogger(__name__)


async def villa_error_handler(request: Request, exc: VillaAPIError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Reject malformed payloads with 400 and per-field messages."""
    logger.warning("Rejected malformed request to %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": "Invalid request", "errors": field_errors(exc.errors())},
    )


def create_app(app_settings: Optional[Settings] = None, store: Optional[VillaStore] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    app_settings : Optional[Settings]
        Settings to use instead of the module level ``settings``.
    store : Optional[VillaStore]
        Store to serve.  A new, empty store is created when omitted and
        seeded with the demo villas if ``seed_villas`` is enabled.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.  The service is
        available as ``app.state.villa_service``.
    """
    app_settings = app_settings or settings
    setup_logging(app_settings.log_level, app_settings.log_file or None)

    app = FastAPI(
        title=app_settings.project_name,
        version=app_settings.api_version,
        debug=app_settings.debug,
    )

    if store is None:
        store = VillaStore()
        if app_settings.seed_villas:
            store.seed(DEFAULT_VILLAS)
            logger.info("Seeded %s demo villas", len(DEFAULT_VILLAS))
    app.state.villa_service = VillaService(store)

    app.add_exception_handler(VillaAPIError, villa_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)

    # The versioned routes come first so that ``url_for("get_villa")``
    # resolves to ``/api/v1/villas/{villa_id}``.
    app.include_router(v1_router, prefix="/api/v1")
    app.include_router(legacy_router)

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
