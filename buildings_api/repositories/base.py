"""Storage port and its in-memory reference implementation."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from pydantic import BaseModel

ModelT = TypeVar("ModelT", bound=BaseModel)


class BaseRepository(ABC, Generic[ModelT]):
    """Narrow keyed-store interface the services depend on.

    Swap the implementation to change the storage engine; services and
    routers only see get / put / delete / list.
    """

    @abstractmethod
    def get(self, entity_id: str) -> ModelT | None: ...

    @abstractmethod
    def put(self, entity_id: str, entity: ModelT) -> ModelT: ...

    @abstractmethod
    def delete(self, entity_id: str) -> bool: ...

    @abstractmethod
    def list(self) -> list[ModelT]: ...

    @abstractmethod
    def __contains__(self, entity_id: object) -> bool: ...

    @abstractmethod
    def __len__(self) -> int: ...


class InMemoryRepository(BaseRepository[ModelT]):
    """Dict-backed store. Records come back as copies, never the stored object.

    Mutations are plain dict operations and never await, so two requests
    cannot interleave inside one of them.
    """

    def __init__(self, items: dict[str, ModelT] | None = None):
        self._items: dict[str, ModelT] = {}
        for entity_id, entity in (items or {}).items():
            self.put(entity_id, entity)

    def get(self, entity_id: str) -> ModelT | None:
        entity = self._items.get(entity_id)
        return entity.model_copy(deep=True) if entity is not None else None

    def put(self, entity_id: str, entity: ModelT) -> ModelT:
        self._items[entity_id] = entity.model_copy(deep=True)
        return entity

    def delete(self, entity_id: str) -> bool:
        return self._items.pop(entity_id, None) is not None

    def list(self) -> list[ModelT]:
        return [e.model_copy(deep=True) for e in self._items.values()]

    def __contains__(self, entity_id: object) -> bool:
        return entity_id in self._items

    def __len__(self) -> int:
        return len(self._items)
