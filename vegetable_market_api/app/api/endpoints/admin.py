"""
Protected administration endpoints for price records.

Every route requires a bearer token.  Listing and adding are confined
to the district embedded in the token, whatever district the request
body names.  Update and delete address records by identifier alone.
"""

import logging
import sqlite3
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from vegetable_market_api.app.core.db import get_db
from vegetable_market_api.app.core.security import get_current_account
from vegetable_market_api.app.schemas.account import MessageResponse
from vegetable_market_api.app.schemas.vegetable import VegetableCreate, VegetableRead, VegetableUpdate
from vegetable_market_api.app.services.vegetable_service import VegetableService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/items", response_model=List[VegetableRead])
def list_items(
    market: Optional[str] = Query(None, description="Market name, or 'All' for every market"),
    conn: sqlite3.Connection = Depends(get_db),
    current_account: dict = Depends(get_current_account),
) -> List[VegetableRead]:
    """List the records of the caller's district, newest date first."""
    try:
        return VegetableService.list_items(conn, current_account["district"], market)
    except sqlite3.Error:
        logger.exception("Fetch items error")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to fetch items.")


@router.post("/add", response_model=VegetableRead, status_code=status.HTTP_201_CREATED)
def add_item(
    item: VegetableCreate,
    conn: sqlite3.Connection = Depends(get_db),
    current_account: dict = Depends(get_current_account),
) -> VegetableRead:
    """Add a record to the caller's district."""
    try:
        return VegetableService.add_item(conn, current_account["district"], item)
    except sqlite3.Error:
        logger.exception("Add item error")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to add item.")


@router.put("/update/{item_id}", response_model=VegetableRead)
def update_item(
    item_id: str,
    item: VegetableUpdate,
    conn: sqlite3.Connection = Depends(get_db),
    current_account: dict = Depends(get_current_account),
) -> VegetableRead:
    """Overwrite the submitted fields of a record.  Returns 404 if it does not exist."""
    try:
        updated = VegetableService.update_item(conn, item_id, item)
    except sqlite3.Error:
        logger.exception("Update item error")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to update item.")
    if updated is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Item not found.")
    return updated


@router.delete("/delete/{item_id}", response_model=MessageResponse)
def delete_item(
    item_id: str,
    conn: sqlite3.Connection = Depends(get_db),
    current_account: dict = Depends(get_current_account),
) -> MessageResponse:
    """Delete a record.  Returns 404 if it does not exist."""
    try:
        deleted = VegetableService.delete_item(conn, item_id)
    except sqlite3.Error:
        logger.exception("Delete item error")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to delete item.")
    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Item not found.")
    return MessageResponse(message="Item deleted successfully")
