"""In-memory repository used in place of Postgres by service and route tests."""

from __future__ import annotations

from core.db import NoRowsError
from genity.entity import Genity
from genity.repository import GenityRepository


class CrudError(RuntimeError):
    pass


class InMemoryGenityRepository(GenityRepository):
    """Dict-backed repository. Names equal to "error" simulate a storage failure."""

    def __init__(self, items: list[Genity] | None = None) -> None:
        self.items: dict[str, Genity] = {item.id: item for item in items or []}

    async def get(self, genity_id: str) -> Genity:
        try:
            return self.items[genity_id]
        except KeyError:
            raise NoRowsError(genity_id) from None

    async def count(self) -> int:
        return len(self.items)

    async def query(self, offset: int, limit: int) -> list[Genity]:
        ordered = sorted(self.items.values(), key=lambda g: g.id)
        return ordered[offset : offset + limit]

    async def create(self, genity: Genity) -> None:
        if genity.name == "error":
            raise CrudError("error crud")
        if genity.id in self.items:
            raise CrudError(f"duplicate id {genity.id}")
        self.items[genity.id] = genity

    async def update(self, genity: Genity) -> None:
        if genity.name == "error":
            raise CrudError("error crud")
        if genity.id not in self.items:
            raise NoRowsError(genity.id)
        self.items[genity.id] = genity

    async def delete(self, genity_id: str) -> None:
        genity = await self.get(genity_id)
        del self.items[genity.id]


class VanishingGenityRepository(InMemoryGenityRepository):
    """Rows are removed by a concurrent writer right after they are read."""

    async def update(self, genity: Genity) -> None:
        self.items.pop(genity.id, None)
        await super().update(genity)

    async def delete(self, genity_id: str) -> None:
        self.items.pop(genity_id, None)
        await super().delete(genity_id)
