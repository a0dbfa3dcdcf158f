"""
Pydantic models for vegetable price records.

A price record describes the high and low price of one vegetable in
one market of a district on a given date.  ``date`` is kept as the
free‑form string the client submitted; listings sort on it as a
string, so clients should send ISO‑8601 dates.

Field names follow the wire format (``highPrice``, ``lowPrice``,
``_id``) through aliases; unknown fields in request bodies are
ignored.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class VegetableBase(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = Field(None, examples=["Tomato"])
    district: Optional[str] = Field(None, examples=["Pune"])
    market: Optional[str] = Field(None, examples=["Gultekdi"])
    high_price: Optional[float] = Field(None, alias="highPrice", examples=[40])
    low_price: Optional[float] = Field(None, alias="lowPrice", examples=[25])
    date: Optional[str] = Field(None, examples=["2024-06-01"])


class VegetableCreate(VegetableBase):
    """Schema for adding a record.

    ``district`` is accepted but always replaced by the district of the
    authenticated account.
    """


class VegetableUpdate(VegetableBase):
    """Schema for updating a record.

    All fields are optional; only the fields present in the request body
    are written.
    """


class VegetableRead(VegetableBase):
    """Schema for reading a record from the API."""

    id: int = Field(..., alias="_id")
