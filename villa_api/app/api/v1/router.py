"""
Top‑level router for version 1 of the API.

Only the villa collection is exposed.  The same router is mounted by
``main.create_app`` under ``/api/v1`` and under the legacy
``/api/VillaAPI`` prefix used by existing clients.
"""

from fastapi import APIRouter

from .endpoints import villas

router = APIRouter()

router.include_router(villas.router, prefix="/villas", tags=["villas"])

# Existing clients call ``/api/VillaAPI`` directly.  The router is
# mounted at the application root so the path stays unchanged.
legacy_router = APIRouter()
legacy_router.include_router(villas.router, prefix="/api/VillaAPI", tags=["villas"])
