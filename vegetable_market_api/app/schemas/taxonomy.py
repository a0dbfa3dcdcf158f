"""Pydantic models for dropdown taxonomy."""

from typing import Dict, List

from pydantic import BaseModel, ConfigDict, Field


class DropdownData(BaseModel):
    """Distinct vegetable names plus the district → markets mapping."""

    model_config = ConfigDict(populate_by_name=True)

    vegetables: List[str]
    district_markets: Dict[str, List[str]] = Field(..., alias="districtMarkets")
