"""
Business logic for administering price records.

Every operation is a single round trip to the store.  Listing and
adding are scoped to the district of the authenticated account; the
caller passes that district in explicitly.  Updating and deleting
address a record by identifier only and do not check its district:
any authenticated account can modify any record it knows the
identifier of.
"""

import logging
import sqlite3
from typing import List, Optional, Union

from ..schemas.vegetable import VegetableCreate, VegetableRead, VegetableUpdate


logger = logging.getLogger(__name__)

# Pydantic field names double as column names in the ``vegetables`` table.
RECORD_COLUMNS = ("name", "district", "market", "high_price", "low_price", "date")

ALL_MARKETS = "All"


def parse_item_id(item_id: Union[int, str]) -> Optional[int]:
    """Convert a path identifier to a row id, or ``None`` if it cannot match."""
    try:
        return int(item_id)
    except (TypeError, ValueError):
        return None


class VegetableService:
    """District‑scoped CRUD over the ``vegetables`` collection."""

    @classmethod
    def list_items(
        cls,
        conn: sqlite3.Connection,
        district: str,
        market: Optional[str] = None,
    ) -> List[VegetableRead]:
        """Return records of ``district``, newest ``date`` first.

        ``market`` narrows the result unless it is empty or the sentinel
        ``"All"``.  Dates are compared as strings.
        """
        query = "SELECT * FROM vegetables WHERE district = ?"
        params: list = [district]
        if market and market != ALL_MARKETS:
            query += " AND market = ?"
            params.append(market)
        query += " ORDER BY date DESC"
        rows = conn.execute(query, params).fetchall()
        return [cls.row_to_read(row) for row in rows]

    @classmethod
    def add_item(
        cls, conn: sqlite3.Connection, district: str, data: VegetableCreate
    ) -> VegetableRead:
        """Insert a record in ``district`` and return it with its identifier.

        The ``district`` submitted in ``data`` is discarded.
        """
        values = data.model_dump(include=set(RECORD_COLUMNS))
        values["district"] = district
        cursor = conn.execute(
            f"INSERT INTO vegetables ({', '.join(RECORD_COLUMNS)}) "
            f"VALUES ({', '.join('?' for _ in RECORD_COLUMNS)})",
            tuple(values[column] for column in RECORD_COLUMNS),
        )
        item_id = cursor.lastrowid
        conn.commit()
        logger.info("Added %s in %s/%s as item %s", values["name"], district, values["market"], item_id)
        return cls.get_item(conn, item_id)

    @classmethod
    def get_item(cls, conn: sqlite3.Connection, item_id: Union[int, str]) -> Optional[VegetableRead]:
        row_id = parse_item_id(item_id)
        if row_id is None:
            return None
        row = conn.execute("SELECT * FROM vegetables WHERE id = ?", (row_id,)).fetchone()
        return cls.row_to_read(row) if row else None

    @classmethod
    def update_item(
        cls, conn: sqlite3.Connection, item_id: Union[int, str], data: VegetableUpdate
    ) -> Optional[VegetableRead]:
        """Overwrite the fields present in ``data``.

        Returns the updated record, or ``None`` if no record has that
        identifier.  ``district`` may be changed like any other field.
        """
        row_id = parse_item_id(item_id)
        if row_id is None:
            return None
        updates = data.model_dump(include=set(RECORD_COLUMNS), exclude_unset=True)
        if updates:
            assignments = ", ".join(f"{column} = ?" for column in updates)
            cursor = conn.execute(
                f"UPDATE vegetables SET {assignments} WHERE id = ?",
                (*updates.values(), row_id),
            )
            if cursor.rowcount == 0:
                conn.rollback()
                return None
            conn.commit()
            logger.info("Updated item %s: %s", row_id, sorted(updates))
        return cls.get_item(conn, row_id)

    @classmethod
    def delete_item(cls, conn: sqlite3.Connection, item_id: Union[int, str]) -> bool:
        """Delete a record by identifier.

        Returns ``True`` if a record was deleted, ``False`` otherwise.
        """
        row_id = parse_item_id(item_id)
        if row_id is None:
            return False
        cursor = conn.execute("DELETE FROM vegetables WHERE id = ?", (row_id,))
        affected = cursor.rowcount
        conn.commit()
        if affected:
            logger.info("Deleted item %s", row_id)
        return affected > 0

    @staticmethod
    def row_to_read(row: sqlite3.Row) -> VegetableRead:
        """Convert a database row to a VegetableRead schema instance."""
        return VegetableRead(
            id=row["id"],
            name=row["name"],
            district=row["district"],
            market=row["market"],
            high_price=row["high_price"],
            low_price=row["low_price"],
            date=row["date"],
        )
