"""Public search over price records by arbitrary query parameters."""

import logging
import sqlite3
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Request, status

from vegetable_market_api.app.core.db import get_db
from vegetable_market_api.app.schemas.vegetable import VegetableRead
from vegetable_market_api.app.services.search_service import SearchService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/search", response_model=List[VegetableRead])
def search_vegetables(
    request: Request,
    conn: sqlite3.Connection = Depends(get_db),
) -> List[VegetableRead]:
    """Return records matching the query string, e.g. ``?name=Tomato&district=Pune``.

    Parameters that do not name a record field are ignored.
    """
    try:
        return SearchService.search(conn, request.query_params.multi_items())
    except sqlite3.Error:
        logger.exception("Search error")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Database error",
        )
