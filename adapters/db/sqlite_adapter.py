"""
SQLite 어댑터

WAL 모드로 SQLite 연결 관리.
여러 요청이 동시에 읽고 쓸 수 있도록 설정.

주의: SQLite alias로 time, count 사용 금지 (예약어)
"""

import logging
from contextlib import asynccontextmanager, contextmanager
from pathlib import Path
from typing import Any, AsyncIterator, Iterator

import aiosqlite

from core.constants import Tables
from core.exceptions import StorageError

logger = logging.getLogger(__name__)


async def create_connection(
    db_path: Path | str,
    readonly: bool = False,
) -> aiosqlite.Connection:
    """SQLite 연결 생성 (WAL 모드)

    Args:
        db_path: DB 파일 경로
        readonly: 읽기 전용 여부

    Returns:
        aiosqlite 연결 객체 (row_factory = aiosqlite.Row)
    """
    db_path_str = str(db_path)

    # 디렉토리가 없으면 생성
    Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    if readonly:
        conn = await aiosqlite.connect(f"file:{db_path_str}?mode=ro", uri=True)
    else:
        conn = await aiosqlite.connect(db_path_str)
        # WAL 모드는 파일에 유지되므로 쓰기 연결에서만 설정
        await conn.execute("PRAGMA journal_mode=WAL")

    # 컬럼 이름으로 접근
    conn.row_factory = aiosqlite.Row

    # 동시 접근 설정
    await conn.execute("PRAGMA busy_timeout=30000")  # 30초 대기
    await conn.execute("PRAGMA foreign_keys=ON")

    logger.debug(
        "SQLite 연결 생성",
        extra={"db_path": db_path_str, "readonly": readonly},
    )

    return conn


@contextmanager
def storage_errors(action: str) -> Iterator[None]:
    """DB 예외를 StorageError로 변환

    원인은 서버 로그에 남기고 호출자에게는 일반 메시지만 전달한다.

    Args:
        action: 실패 시 메시지에 들어갈 작업 설명 (예: "save data")
    """
    try:
        yield
    except aiosqlite.Error as e:
        logger.error(f"DB 작업 실패: {action}", exc_info=True)
        raise StorageError(f"Failed to {action}") from e


class SQLiteAdapter:
    """SQLite 어댑터

    WAL 모드로 SQLite 연결 관리.
    트랜잭션 컨텍스트 매니저 제공.

    Args:
        db_path: DB 파일 경로
        readonly: 읽기 전용 여부 (조회 요청용)

    사용 예시:
    ```python
    async with SQLiteAdapter(db_path) as db:
        async with db.transaction(immediate=True):
            await db.execute("DELETE FROM inventory")
            await db.executemany("INSERT INTO inventory ...", rows)
    ```
    """

    def __init__(self, db_path: Path | str, readonly: bool = False):
        self.db_path = Path(db_path)
        self.readonly = readonly
        self._conn: aiosqlite.Connection | None = None

    @property
    def is_connected(self) -> bool:
        """연결 상태 확인"""
        return self._conn is not None

    async def connect(self) -> None:
        """연결 생성"""
        if self._conn is not None:
            return

        self._conn = await create_connection(self.db_path, self.readonly)

    async def close(self) -> None:
        """연결 종료"""
        if self._conn is not None:
            await self._conn.close()
            self._conn = None
            logger.debug("SQLite 연결 종료")

    async def execute(
        self,
        sql: str,
        parameters: tuple[Any, ...] | None = None,
    ) -> aiosqlite.Cursor:
        """SQL 실행"""
        if self._conn is None:
            raise RuntimeError("Not connected to database")

        if parameters:
            return await self._conn.execute(sql, parameters)
        return await self._conn.execute(sql)

    async def executemany(
        self,
        sql: str,
        parameters: list[tuple[Any, ...]],
    ) -> aiosqlite.Cursor:
        """SQL 다중 실행"""
        if self._conn is None:
            raise RuntimeError("Not connected to database")

        return await self._conn.executemany(sql, parameters)

    async def fetchone(
        self,
        sql: str,
        parameters: tuple[Any, ...] | None = None,
    ) -> aiosqlite.Row | None:
        """단일 행 조회"""
        cursor = await self.execute(sql, parameters)
        return await cursor.fetchone()

    async def fetchall(
        self,
        sql: str,
        parameters: tuple[Any, ...] | None = None,
    ) -> list[aiosqlite.Row]:
        """전체 행 조회"""
        cursor = await self.execute(sql, parameters)
        return list(await cursor.fetchall())

    async def commit(self) -> None:
        """커밋"""
        if self._conn is not None:
            await self._conn.commit()

    async def rollback(self) -> None:
        """롤백"""
        if self._conn is not None:
            await self._conn.rollback()

    @asynccontextmanager
    async def transaction(self, immediate: bool = False) -> AsyncIterator[aiosqlite.Connection]:
        """트랜잭션 컨텍스트 매니저

        성공 시 자동 커밋, 예외 시 자동 롤백.

        Args:
            immediate: True면 BEGIN IMMEDIATE로 시작하여
                첫 조회 시점부터 쓰기 잠금을 잡는다 (읽고-다시-쓰는 작업용).
        """
        if self._conn is None:
            raise RuntimeError("Not connected to database")

        if immediate and not self._conn.in_transaction:
            await self._conn.execute("BEGIN IMMEDIATE")

        try:
            yield self._conn
            await self._conn.commit()
        except Exception:
            await self.rollback()
            raise

    async def table_exists(self, table_name: str) -> bool:
        """테이블 존재 여부 확인"""
        result = await self.fetchone(
            "SELECT name FROM sqlite_master WHERE type='table' AND name=?",
            (table_name,),
        )
        return result is not None

    # -------------------------------------------------------------------------
    # 컨텍스트 매니저
    # -------------------------------------------------------------------------

    async def __aenter__(self) -> "SQLiteAdapter":
        await self.connect()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()


def _ledger_ddl(table: str) -> str:
    return f"""
        CREATE TABLE IF NOT EXISTS {table} (
            id               TEXT PRIMARY KEY,
            drawing_number   TEXT NOT NULL,
            specification    TEXT NOT NULL,
            quantity         INTEGER NOT NULL CHECK (quantity > 0),
            finishing        TEXT,
            supplier         TEXT,
            note             TEXT,
            date             TEXT NOT NULL,
            created_at       TEXT NOT NULL
        )
    """


async def init_schema(adapter: SQLiteAdapter) -> None:
    """스키마 초기화 (테이블 생성)

    inbound / outbound 원장과 파생 스냅샷 inventory.

    Args:
        adapter: 연결된 SQLiteAdapter
    """
    await adapter.execute(_ledger_ddl(Tables.INBOUND))
    await adapter.execute(_ledger_ddl(Tables.OUTBOUND))

    # inventory (원장에서 재계산되는 스냅샷)
    await adapter.execute(f"""
        CREATE TABLE IF NOT EXISTS {Tables.INVENTORY} (
            id               TEXT PRIMARY KEY,
            drawing_number   TEXT NOT NULL,
            specification    TEXT NOT NULL,
            stock            INTEGER NOT NULL,
            finishing        TEXT,
            supplier         TEXT,
            note             TEXT
        )
    """)

    # 인덱스 생성
    for table in (Tables.INBOUND, Tables.OUTBOUND, Tables.INVENTORY):
        await adapter.execute(f"""
            CREATE INDEX IF NOT EXISTS ix_{table}_part
            ON {table}(drawing_number, specification)
        """)

    for table in (Tables.INBOUND, Tables.OUTBOUND):
        await adapter.execute(f"""
            CREATE INDEX IF NOT EXISTS ix_{table}_date
            ON {table}(date)
        """)

    await adapter.commit()

    logger.info("스키마 초기화 완료")
