"""
Business logic for accounts.

Registration checks that the username is free, hashes the password and
stores the account.  The pre‑check gives the common case a friendly
error; the UNIQUE constraint on ``users.username`` still decides when
two registrations for the same name race, and that conflict is
reported the same way.
"""

import logging
import sqlite3
from typing import Optional

from ..core.security import hash_password, verify_password
from ..schemas.account import AccountCreate


logger = logging.getLogger(__name__)


class DuplicateUsernameError(ValueError):
    """Raised when registering a username that is already taken."""


class AccountService:
    """Registration and credential checks over the ``users`` collection."""

    @classmethod
    def register(
        cls, conn: sqlite3.Connection, data: AccountCreate, iterations: int = 100_000
    ) -> int:
        """Create an account and return its identifier.

        Raises
        ------
        DuplicateUsernameError
            If an account with ``data.username`` already exists.
        """
        if cls.get_by_username(conn, data.username) is not None:
            raise DuplicateUsernameError(f"Username {data.username!r} already exists")
        hashed = hash_password(data.password, iterations)
        try:
            cursor = conn.execute(
                "INSERT INTO users (username, password, district, market) VALUES (?, ?, ?, ?)",
                (data.username, hashed, data.district, data.market),
            )
            conn.commit()
        except sqlite3.IntegrityError as e:
            conn.rollback()
            # Lost a race with a concurrent registration of the same name.
            raise DuplicateUsernameError(f"Username {data.username!r} already exists") from e
        logger.info("Registered account %s for %s/%s", data.username, data.district, data.market)
        return cursor.lastrowid

    @classmethod
    def get_by_username(cls, conn: sqlite3.Connection, username: str) -> Optional[sqlite3.Row]:
        return conn.execute(
            "SELECT id, username, password, district, market FROM users WHERE username = ?",
            (username,),
        ).fetchone()

    @classmethod
    def authenticate(
        cls, conn: sqlite3.Connection, username: str, password: str
    ) -> Optional[sqlite3.Row]:
        """Return the account if ``password`` matches, otherwise ``None``.

        An unknown username and a wrong password both return ``None`` so
        callers cannot tell which one occurred.
        """
        row = cls.get_by_username(conn, username)
        if row is None or not verify_password(password, row["password"]):
            return None
        return row
