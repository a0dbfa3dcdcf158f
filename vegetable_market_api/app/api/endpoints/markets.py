"""
Taxonomy endpoints.

Public routes returning the district → markets mapping and the data
needed to populate the record entry form.  Neither requires
authentication.
"""

import logging
import sqlite3
from typing import Dict, List

from fastapi import APIRouter, Depends, HTTPException, status

from vegetable_market_api.app.core.db import get_db
from vegetable_market_api.app.schemas.taxonomy import DropdownData
from vegetable_market_api.app.services.taxonomy_service import TaxonomyService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/markets", response_model=Dict[str, List[str]])
def list_markets(conn: sqlite3.Connection = Depends(get_db)) -> Dict[str, List[str]]:
    """Return every district with its sorted list of markets."""
    try:
        return TaxonomyService.list_markets_by_district(conn)
    except sqlite3.Error:
        logger.exception("Markets route error")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch market data.",
        )


@router.get("/dropdown-data", response_model=DropdownData)
def get_dropdown_data(conn: sqlite3.Connection = Depends(get_db)) -> DropdownData:
    """Return the sorted vegetable names and the district → markets mapping."""
    try:
        return TaxonomyService.list_dropdown_data(conn)
    except sqlite3.Error:
        logger.exception("Error fetching dropdown data")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch dropdown data.",
        )
