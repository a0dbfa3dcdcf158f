"""
Top‑level router for the ``/api`` prefix.

This router aggregates the domain‑specific routers.  When new domains
are introduced, update this file to include their routers.
"""

from fastapi import APIRouter

from .endpoints import admin, auth, markets, search

router = APIRouter()

# Taxonomy and search routes define their own paths (/markets,
# /dropdown-data, /search), so they are included without a prefix.
router.include_router(markets.router, tags=["markets"])
router.include_router(search.router, tags=["search"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(admin.router, prefix="/admin", tags=["admin"])
