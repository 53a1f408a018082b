"""
재고 스냅샷 저장소

inventory 테이블 조회 및 삭제.
스냅샷 쓰기는 StockReconciler와 여기의 삭제 메서드만 수행한다.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from core.constants import Defaults, Tables
from core.inventory.keys import PartKey, empty_field_clause, key_match_clause
from core.inventory.models import StockPosition
from core.types import LedgerType, SuggestField
from core.utils.formatting import like_pattern

if TYPE_CHECKING:
    from adapters.db.sqlite_adapter import SQLiteAdapter

_COLUMNS = "id, drawing_number, specification, stock, finishing, supplier, note"


@dataclass(frozen=True)
class StockFilter:
    """재고 목록 필터

    모든 필드는 부분 일치. None이면 조건 없음.
    finishing만 예외로 '' 는 "후처리가 비어 있는 위치만"을 뜻한다.
    """

    drawing_number: str | None = None
    specification: str | None = None
    finishing: str | None = None

    def to_where(self) -> tuple[str, tuple[str, ...]]:
        """WHERE 절과 파라미터 (조건이 없으면 빈 문자열)"""
        conditions: list[str] = []
        params: list[str] = []

        if self.drawing_number:
            conditions.append("drawing_number LIKE ? ESCAPE '\\'")
            params.append(like_pattern(self.drawing_number))

        if self.specification:
            conditions.append("specification LIKE ? ESCAPE '\\'")
            params.append(like_pattern(self.specification))

        if self.finishing is not None:
            if self.finishing == "":
                conditions.append(empty_field_clause("finishing"))
            else:
                conditions.append("finishing LIKE ? ESCAPE '\\'")
                params.append(like_pattern(self.finishing))

        if not conditions:
            return "", ()

        return "WHERE " + " AND ".join(conditions), tuple(params)


class StockStore:
    """재고 스냅샷 저장소

    Args:
        db: SQLite 어댑터
    """

    def __init__(self, db: SQLiteAdapter):
        self.db = db

    async def count_positions(self, filters: StockFilter) -> int:
        """필터에 맞는 재고 위치 수"""
        where_clause, params = filters.to_where()
        row = await self.db.fetchone(
            f"SELECT COUNT(*) AS total FROM {Tables.INVENTORY} {where_clause}",
            params,
        )
        return int(row["total"]) if row else 0

    async def list_positions(
        self,
        filters: StockFilter,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[StockPosition]:
        """재고 위치 목록 (도번, 규격 오름차순)

        Args:
            filters: 검색 필터
            limit: 최대 개수 (None이면 전체)
            offset: 시작 위치
        """
        where_clause, params = filters.to_where()
        sql = f"""
            SELECT {_COLUMNS} FROM {Tables.INVENTORY}
            {where_clause}
            ORDER BY drawing_number, specification, id
        """
        if limit is not None:
            sql += " LIMIT ? OFFSET ?"
            params = params + (limit, offset)

        rows = await self.db.fetchall(sql, params)
        return [StockPosition.from_row(row) for row in rows]

    async def get(self, position_id: str) -> StockPosition | None:
        """id로 단건 조회"""
        row = await self.db.fetchone(
            f"SELECT {_COLUMNS} FROM {Tables.INVENTORY} WHERE id = ?",
            (position_id,),
        )
        return StockPosition.from_row(row) if row else None

    async def delete_matching(self, key: PartKey) -> int:
        """PartKey가 일치하는 재고 위치 삭제

        Returns:
            삭제된 행 수
        """
        cursor = await self.db.execute(
            f"DELETE FROM {Tables.INVENTORY} WHERE {key_match_clause()}",
            key.to_params(),
        )
        return cursor.rowcount

    async def delete_by_id(self, position_id: str) -> bool:
        """id로 재고 위치 삭제"""
        cursor = await self.db.execute(
            f"DELETE FROM {Tables.INVENTORY} WHERE id = ?",
            (position_id,),
        )
        return cursor.rowcount > 0

    async def suggest(
        self,
        field: SuggestField,
        term: str,
        limit: int = Defaults.SUGGESTION_LIMIT,
    ) -> list[str]:
        """자동완성 후보

        입고/출고 원장과 스냅샷 전체에서 중복 없이 부분 일치하는 값을 찾는다.
        """
        column = field.value
        tables = (LedgerType.INBOUND.table, LedgerType.OUTBOUND.table, Tables.INVENTORY)
        union_sql = "\nUNION\n".join(f"SELECT {column} AS value FROM {table}" for table in tables)

        rows = await self.db.fetchall(
            f"""
            SELECT value FROM (
                {union_sql}
            ) AS combined
            WHERE value LIKE ? ESCAPE '\\'
            ORDER BY value
            LIMIT ?
            """,
            (like_pattern(term), limit),
        )
        return [row["value"] for row in rows]

