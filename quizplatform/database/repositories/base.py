"""Базовый класс для всех репозиториев-коллекций."""

import json
from typing import Any, Dict, Generic, List, Sequence, Type, TypeVar

import aiosqlite
from loguru import logger

from ...errors import StorageUnavailableError
from ...models.base import DocumentModel

ModelT = TypeVar("ModelT", bound=DocumentModel)


class BaseRepository(Generic[ModelT]):
    """
    Коллекция документов с семантикой «прочитать всё / записать всё».

    Частичных обновлений нет: каждый переход читает коллекцию целиком,
    меняет копию в памяти и записывает ее обратно. Вызывать только внутри
    StoreManager.transaction(), иначе чтение и запись не атомарны.
    """

    collection: str = ""
    model: Type[ModelT]

    def __init__(self, conn: aiosqlite.Connection):
        """
        Инициализация репозитория.

        :param conn: Соединение с базой данных.
        """
        self.conn = conn

    async def read_all(self) -> List[Dict[str, Any]]:
        """Все записи коллекции в порядке добавления."""
        query = f"SELECT doc FROM {self.collection} ORDER BY seq"
        try:
            async with self.conn.execute(query) as cursor:
                rows = await cursor.fetchall()
            return [json.loads(row[0]) for row in rows]
        except (aiosqlite.Error, OSError, ValueError) as e:
            logger.error(f"❌ Ошибка чтения коллекции {self.collection}: {e}")
            raise StorageUnavailableError(f"Коллекция {self.collection} недоступна") from e

    async def write_all(self, records: Sequence[Dict[str, Any]]) -> None:
        """Полная замена содержимого коллекции."""
        try:
            await self.conn.execute(f"DELETE FROM {self.collection}")
            await self.conn.executemany(
                f"INSERT INTO {self.collection} (doc) VALUES (?)",
                [(json.dumps(record, ensure_ascii=False),) for record in records],
            )
        except (aiosqlite.Error, OSError) as e:
            logger.error(f"❌ Ошибка записи коллекции {self.collection}: {e}")
            raise StorageUnavailableError(f"Коллекция {self.collection} недоступна") from e

    async def load(self) -> List[ModelT]:
        return [self.model.from_document(doc) for doc in await self.read_all()]

    async def save(self, items: Sequence[ModelT]) -> None:
        await self.write_all([item.to_document() for item in items])

    async def append(self, item: ModelT) -> None:
        """Добавление одной записи в конец коллекции."""
        items = await self.load()
        items.append(item)
        await self.save(items)
