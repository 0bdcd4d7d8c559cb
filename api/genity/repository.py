"""
Genity persistence.

`GenityRepository` is the interface the service depends on;
`PostgresGenityRepository` implements it with raw SQL against:

    genity(id text primary key, name varchar(128) not null,
           created_at timestamptz not null, updated_at timestamptz not null)

Missing rows surface as `core.db.NoRowsError`; any other driver error
propagates unchanged.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from core.db import Database, NoRowsError

from .entity import Genity

_COLUMNS = "id, name, created_at, updated_at"


class GenityRepository(ABC):
    @abstractmethod
    async def get(self, genity_id: str) -> Genity:
        """Return the genity with the given id. Raises NoRowsError if absent."""

    @abstractmethod
    async def count(self) -> int:
        """Return the number of genitys."""

    @abstractmethod
    async def query(self, offset: int, limit: int) -> list[Genity]:
        """Return at most `limit` genitys ordered by id, skipping `offset`."""

    @abstractmethod
    async def create(self, genity: Genity) -> None:
        """Insert a fully populated genity."""

    @abstractmethod
    async def update(self, genity: Genity) -> None:
        """Overwrite the row matching `genity.id`. Raises NoRowsError if absent."""

    @abstractmethod
    async def delete(self, genity_id: str) -> None:
        """Remove the genity with the given id. Raises NoRowsError if absent."""


def _row_to_genity(row: dict) -> Genity:
    return Genity(
        id=str(row["id"]),
        name=str(row["name"]),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


class PostgresGenityRepository(GenityRepository):
    def __init__(self, db: Database) -> None:
        self._db = db

    async def get(self, genity_id: str) -> Genity:
        row = await self._db.fetch_one(
            f"""
            SELECT {_COLUMNS}
            FROM genity
            WHERE id = $1
            """,
            genity_id,
        )
        if row is None:
            raise NoRowsError(f"genity {genity_id!r} not found")
        return _row_to_genity(row)

    async def count(self) -> int:
        value = await self._db.fetch_value("SELECT COUNT(*) FROM genity")
        return int(value or 0)

    async def query(self, offset: int, limit: int) -> list[Genity]:
        rows = await self._db.fetch_all(
            f"""
            SELECT {_COLUMNS}
            FROM genity
            ORDER BY id ASC
            OFFSET $1
            LIMIT $2
            """,
            max(offset, 0),
            max(limit, 0),
        )
        return [_row_to_genity(r) for r in rows]

    async def create(self, genity: Genity) -> None:
        await self._db.execute(
            """
            INSERT INTO genity (id, name, created_at, updated_at)
            VALUES ($1, $2, $3, $4)
            """,
            genity.id,
            genity.name,
            genity.created_at,
            genity.updated_at,
        )

    async def update(self, genity: Genity) -> None:
        row = await self._db.fetch_one(
            """
            UPDATE genity
            SET name = $2,
                created_at = $3,
                updated_at = $4
            WHERE id = $1
            RETURNING id
            """,
            genity.id,
            genity.name,
            genity.created_at,
            genity.updated_at,
        )
        if row is None:
            raise NoRowsError(f"genity {genity.id!r} not found")

    async def delete(self, genity_id: str) -> None:
        genity = await self.get(genity_id)
        await self._db.execute(
            """
            DELETE FROM genity
            WHERE id = $1
            """,
            genity.id,
        )
