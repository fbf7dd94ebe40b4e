"""
PersonRegistry — SQLite-backed persistence for the people listing.

Usage::

    registry = PersonRegistry(db_path="~/.pocketstore/peopledb.db")

    # Add a row (validation happens before any statement runs)
    person = registry.insert("Ana", "30")

    # Paginated listing, newest first
    state = PaginationState()
    rows = registry.refresh(state)      # also recomputes state.total_pages

    # Mutations on a row that no longer exists raise NotFoundError
    registry.update(person.id, "Ana María", 31)
    registry.delete(person.id)
"""

from __future__ import annotations

import logging
import math
import re
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional, Union

from pocketstore.exceptions import NotFoundError, StorageError, ValidationError
from pocketstore.store.models import ITEMS_PER_PAGE, PaginationState, Person

__all__ = ["PersonRegistry", "parse_person_input"]

logger = logging.getLogger(__name__)

# Path to the SQL schema file bundled with this package
_SCHEMA_PATH = Path(__file__).parent / "migrations" / "schema.sql"

# Leading integer of a decimal string: " 30" -> 30, "30 years" -> 30
_LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)")


def parse_person_input(name: str, age: Union[str, int]) -> tuple[str, int]:
    """
    Validate raw form input for a person.

    Args:
        name: Display name; must be non-empty.
        age:  An int, or decimal text whose leading integer is taken.

    Returns:
        (name, age) with age converted to int.

    Raises:
        ValidationError: name is empty, or age has no leading integer.
    """
    if not isinstance(name, str) or name == "":
        raise ValidationError("Please enter a name and an age")
    if isinstance(age, bool):
        raise ValidationError("Age must be a number")
    if isinstance(age, int):
        return name, age
    if not isinstance(age, str) or age == "":
        raise ValidationError("Please enter a name and an age")
    m = _LEADING_INT_RE.match(age)
    if not m:
        raise ValidationError("Age must be a number")
    return name, int(m.group(1))


class PersonRegistry:
    """
    CRUD + pagination interface for the ``people`` table.

    The database file and schema are created on construction; a registry
    instance only exists once the schema is in place. No persistent
    connection is kept open between calls. Each mutation is one explicit
    transaction, so a failure leaves the table exactly as it was.
    """

    def __init__(self, db_path: str) -> None:
        self._db_path = Path(db_path).expanduser()
        self.ready = False
        try:
            self._db_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StorageError(f"Cannot create database directory: {exc}") from exc
        self._ensure_schema()
        self.ready = True
        logger.debug("People table ready at %s", self._db_path)

    @property
    def db_path(self) -> Path:
        return self._db_path

    # ── Internal helpers ──────────────────────────────────────────────────

    def _connect(self) -> sqlite3.Connection:
        # Autocommit mode; transactions are opened explicitly in _transaction()
        conn = sqlite3.connect(str(self._db_path), isolation_level=None)
        conn.row_factory = sqlite3.Row
        return conn

    @contextmanager
    def _reading(self) -> Iterator[sqlite3.Connection]:
        try:
            conn = self._connect()
        except sqlite3.Error as exc:
            raise StorageError(f"Cannot open database: {exc}") from exc
        try:
            yield conn
        except sqlite3.Error as exc:
            logger.debug("Statement failed: %s", exc)
            raise StorageError(str(exc)) from exc
        finally:
            conn.close()

    @contextmanager
    def _transaction(self) -> Iterator[sqlite3.Connection]:
        """Exclusive write unit: BEGIN IMMEDIATE ... COMMIT, ROLLBACK on error."""
        with self._reading() as conn:
            conn.execute("BEGIN IMMEDIATE")
            try:
                yield conn
            except BaseException:
                # SQLite may already have rolled back (RAISE(ROLLBACK), disk errors)
                if conn.in_transaction:
                    conn.execute("ROLLBACK")
                raise
            conn.execute("COMMIT")

    def _ensure_schema(self) -> None:
        """Create the people table if it doesn't already exist."""
        try:
            sql = _SCHEMA_PATH.read_text(encoding="utf-8")
        except OSError as exc:
            raise StorageError(f"Cannot read schema: {exc}") from exc
        with self._reading() as conn:
            conn.executescript(sql)

    @staticmethod
    def _row_to_person(row: sqlite3.Row) -> Person:
        return Person(id=row["id"], name=row["name"], age=row["age"])

    # ── Queries ───────────────────────────────────────────────────────────

    def count(self) -> int:
        """Return the total number of rows."""
        with self._reading() as conn:
            row = conn.execute("SELECT COUNT(*) AS count FROM people").fetchone()
        return row["count"]

    def count_pages(self, items_per_page: int = ITEMS_PER_PAGE) -> int:
        """
        Number of pages needed to show every row.

        An empty table is still one (empty) page.
        """
        return max(1, math.ceil(self.count() / items_per_page))

    def list(self, page: int, items_per_page: int = ITEMS_PER_PAGE) -> list[Person]:
        """
        Return one page of people, most recently inserted first.

        A page past the last one yields an empty list, not an error.

        Raises:
            ValueError: page < 1.
        """
        if page < 1:
            raise ValueError(f"page must be >= 1, got {page}")
        offset = (page - 1) * items_per_page
        with self._reading() as conn:
            rows = conn.execute(
                "SELECT id, name, age FROM people ORDER BY id DESC LIMIT ? OFFSET ?",
                (items_per_page, offset),
            ).fetchall()
        return [self._row_to_person(r) for r in rows]

    def get(self, person_id: int) -> Optional[Person]:
        """Return the person with *person_id*, or None."""
        with self._reading() as conn:
            row = conn.execute(
                "SELECT id, name, age FROM people WHERE id=?", (person_id,)
            ).fetchone()
        return self._row_to_person(row) if row else None

    def refresh(self, state: PaginationState) -> list[Person]:
        """
        Recompute ``state.total_pages`` and list ``state.current_page``.

        current_page is left as is even when it now lies past the last page.
        """
        state.total_pages = self.count_pages(state.items_per_page)
        return self.list(state.current_page, state.items_per_page)

    # ── Mutations ─────────────────────────────────────────────────────────

    def insert(self, name: str, age: Union[str, int]) -> Person:
        """
        Validate and insert a new person.

        Returns:
            The stored Person, carrying its newly assigned id.

        Raises:
            ValidationError: bad input (no statement is executed).
            StorageError:    the insert failed or affected no row.
        """
        name, age_num = parse_person_input(name, age)
        with self._transaction() as conn:
            cur = conn.execute(
                "INSERT INTO people (name, age) VALUES (?, ?)", (name, age_num)
            )
            if cur.rowcount < 1:
                raise StorageError("Could not add the person")
            person_id = cur.lastrowid
        logger.info("Inserted person id=%d", person_id)
        return Person(id=person_id, name=name, age=age_num)

    def update(self, person_id: int, name: str, age: Union[str, int]) -> Person:
        """
        Validate and overwrite name/age of the row with *person_id*.

        Raises:
            ValidationError: bad input (no statement is executed).
            NotFoundError:   no row has that id.
        """
        name, age_num = parse_person_input(name, age)
        with self._transaction() as conn:
            cur = conn.execute(
                "UPDATE people SET name = ?, age = ? WHERE id = ?",
                (name, age_num, person_id),
            )
            if cur.rowcount == 0:
                raise NotFoundError(person_id)
        logger.info("Updated person id=%d", person_id)
        return Person(id=person_id, name=name, age=age_num)

    def delete(self, person_id: int) -> None:
        """
        Delete the row with *person_id*.

        Raises:
            NotFoundError: no row has that id.
        """
        with self._transaction() as conn:
            cur = conn.execute("DELETE FROM people WHERE id = ?", (person_id,))
            if cur.rowcount == 0:
                raise NotFoundError(person_id)
        logger.info("Deleted person id=%d", person_id)

    def delete_all(self) -> int:
        """
        Remove every row.

        Returns:
            Number of rows deleted.
        """
        with self._transaction() as conn:
            cur = conn.execute("DELETE FROM people")
            removed = cur.rowcount
        logger.info("Deleted all people (%d rows)", removed)
        return removed
