import asyncio
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, Optional

import aiosqlite
from loguru import logger

from ..errors import StorageUnavailableError
from .repositories import (
    ChatRepository,
    NotificationRepository,
    ResultRepository,
    TestRepository,
    UserRepository,
    VerificationRepository,
)


class StoreManager:
    """
    Общее хранилище коллекций на SQLite, которое используют и API, и бот.

    Отвечает за соединение, создание таблиц и транзакции, а также
    предоставляет доступ к репозиториям коллекций.

    Внутри процесса транзакции упорядочены одной asyncio.Lock. Между процессами
    их упорядочивает сам SQLite: BEGIN IMMEDIATE берет блокировку на запись
    сразу, второй процесс ждет до STORE_BUSY_TIMEOUT секунд.
    """

    def __init__(self, db_path: str, busy_timeout: float = 5.0):
        """Инициализация менеджера хранилища."""
        self.db_path = db_path
        self.busy_timeout = busy_timeout
        self.conn: Optional[aiosqlite.Connection] = None
        self._lock = asyncio.Lock()
        self.users: Optional[UserRepository] = None
        self.verifications: Optional[VerificationRepository] = None
        self.notifications: Optional[NotificationRepository] = None
        self.tests: Optional[TestRepository] = None
        self.results: Optional[ResultRepository] = None
        self.chats: Optional[ChatRepository] = None

    async def init_database(self) -> None:
        """Открытие соединения и создание таблиц коллекций."""
        try:
            if self.db_path != ":memory:":
                Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
            # isolation_level=None: транзакциями управляем явно через BEGIN
            self.conn = await aiosqlite.connect(
                self.db_path, timeout=self.busy_timeout, isolation_level=None
            )
            await self.conn.execute("PRAGMA journal_mode=WAL;")
            await self._run_sql_scripts()
        except (aiosqlite.Error, OSError) as e:
            logger.error(f"❌ Не удалось открыть хранилище {self.db_path}: {e}")
            raise StorageUnavailableError("Хранилище недоступно") from e

        self._init_repositories()
        logger.info(f"Хранилище {self.db_path} и репозитории успешно инициализированы")

    def _init_repositories(self) -> None:
        """Инициализация всех репозиториев."""
        self.users = UserRepository(self.conn)
        self.verifications = VerificationRepository(self.conn)
        self.notifications = NotificationRepository(self.conn)
        self.tests = TestRepository(self.conn)
        self.results = ResultRepository(self.conn)
        self.chats = ChatRepository(self.conn)

    async def _run_sql_scripts(self) -> None:
        """
        Выполнение SQL-скриптов для создания таблиц.

        Скрипты читаются из директории database/sql
        и выполняются в алфавитном порядке.
        """
        sql_dir = Path(__file__).parent / "sql"
        scripts = sorted(sql_dir.glob("*.sql"))

        for script_path in scripts:
            try:
                sql_script = script_path.read_text(encoding="utf-8")
                await self.conn.executescript(sql_script)
            except aiosqlite.Error as e:
                logger.error(f"❌ Ошибка выполнения SQL-скрипта {script_path.name}: {e}")
                raise

        logger.info(f"Инициализация БД завершена: выполнено {len(scripts)} SQL-скриптов")

    @asynccontextmanager
    async def transaction(self, readonly: bool = False) -> AsyncIterator["StoreManager"]:
        """
        Атомарный read-modify-write над одной или несколькими коллекциями.

        Любое исключение внутри блока откатывает транзакцию и пробрасывается
        дальше без повторных попыток.
        """
        if self.conn is None:
            raise StorageUnavailableError("Хранилище не инициализировано")

        async with self._lock:
            try:
                await self.conn.execute("BEGIN" if readonly else "BEGIN IMMEDIATE")
            except aiosqlite.Error as e:
                logger.error(f"❌ Не удалось начать транзакцию: {e}")
                raise StorageUnavailableError("Хранилище занято или недоступно") from e

            try:
                yield self
            except BaseException:
                await self._rollback()
                raise

            try:
                await self.conn.commit()
            except aiosqlite.Error as e:
                logger.error(f"❌ Не удалось зафиксировать транзакцию: {e}")
                await self._rollback()
                raise StorageUnavailableError("Не удалось сохранить изменения") from e

    async def _rollback(self) -> None:
        try:
            await self.conn.rollback()
        except aiosqlite.Error as e:
            logger.error(f"Ошибка при откате транзакции: {e}")

    async def close(self) -> None:
        """Закрытие соединения с базой данных."""
        if self.conn:
            await self.conn.close()
            self.conn = None
            logger.info("Соединение с базой данных закрыто")
