"""
Free‑form search over price records.

The filter is taken as‑is from the request's query string: every
recognised field becomes an equality condition and the conditions are
ANDed.  A field given more than once matches any of its values.
Unrecognised field names are ignored rather than rejected, so clients
can filter on any record attribute by its wire name without the API
having to enumerate the combinations.
"""

import sqlite3
from typing import Iterable, List, Tuple

from ..schemas.vegetable import VegetableRead
from .vegetable_service import VegetableService

# Wire name -> column name.
SEARCHABLE_FIELDS = {
    "_id": "id",
    "name": "name",
    "district": "district",
    "market": "market",
    "highPrice": "high_price",
    "lowPrice": "low_price",
    "date": "date",
}


class SearchService:

    @classmethod
    def search(
        cls, conn: sqlite3.Connection, filters: Iterable[Tuple[str, str]]
    ) -> List[VegetableRead]:
        """Return records matching every recognised ``(field, value)`` pair.

        Values arrive as strings; numeric columns compare them as
        numbers through SQLite's column affinity.  No ordering or limit
        is applied.
        """
        values_by_column: dict = {}
        for field, value in filters:
            column = SEARCHABLE_FIELDS.get(field)
            if column is not None:
                values_by_column.setdefault(column, []).append(value)

        conditions = []
        params: list = []
        for column, values in values_by_column.items():
            if len(values) == 1:
                conditions.append(f"{column} = ?")
            else:
                conditions.append(f"{column} IN ({', '.join('?' for _ in values)})")
            params.extend(values)

        query = "SELECT * FROM vegetables"
        if conditions:
            query += " WHERE " + " AND ".join(conditions)
        rows = conn.execute(query, params).fetchall()
        return [VegetableService.row_to_read(row) for row in rows]
