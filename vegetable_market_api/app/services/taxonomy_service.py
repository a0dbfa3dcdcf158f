"""
Dropdown taxonomy derived from the stored price records.

Clients build their district/market pickers and vegetable lists from
these queries instead of from a separate reference table, so the
taxonomy always reflects the records that actually exist.
"""

import sqlite3
from collections import defaultdict
from typing import Dict, List

from ..schemas.taxonomy import DropdownData


class TaxonomyService:
    """Read‑only queries over the ``vegetables`` collection."""

    @classmethod
    def list_markets_by_district(cls, conn: sqlite3.Connection) -> Dict[str, List[str]]:
        """Group markets by district.

        Returns a mapping from district name to its distinct markets,
        sorted ascending.  Records with a NULL or empty district are
        filtered out, as are NULL markets.
        """
        rows = conn.execute(
            """
            SELECT DISTINCT district, market FROM vegetables
            WHERE district IS NOT NULL AND district != '' AND market IS NOT NULL
            """
        ).fetchall()
        grouped: Dict[str, set] = defaultdict(set)
        for row in rows:
            grouped[row["district"]].add(row["market"])
        return {district: sorted(markets) for district, markets in grouped.items()}

    @classmethod
    def list_vegetable_names(cls, conn: sqlite3.Connection) -> List[str]:
        """Return the distinct vegetable names in ascending order."""
        rows = conn.execute(
            "SELECT DISTINCT name FROM vegetables WHERE name IS NOT NULL"
        ).fetchall()
        return sorted(row["name"] for row in rows)

    @classmethod
    def list_dropdown_data(cls, conn: sqlite3.Connection) -> DropdownData:
        return DropdownData(
            vegetables=cls.list_vegetable_names(conn),
            district_markets=cls.list_markets_by_district(conn),
        )
