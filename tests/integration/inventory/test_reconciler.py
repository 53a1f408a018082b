"""StockReconciler 통합 테스트"""

from datetime import date

import aiosqlite
import pytest

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.constants import Tables
from core.exceptions import StorageError
from core.inventory.keys import PartKey
from core.inventory.ledger_store import LedgerStore
from core.inventory.models import NewTransaction
from core.inventory.reconciler import StockReconciler
from core.inventory.stock_store import StockFilter, StockStore
from core.types import LedgerType


def _tx(dno: str, spec: str, qty: int, day: str = "2024-01-01", **optional) -> NewTransaction:
    return NewTransaction(PartKey(dno, spec, **optional), qty, date.fromisoformat(day))


async def _record(db: SQLiteAdapter, ledger: LedgerType, *items: NewTransaction) -> None:
    async with db.transaction():
        await LedgerStore(db).insert_many(ledger, list(items))


async def _snapshot(db: SQLiteAdapter) -> dict[tuple[str, ...], int]:
    positions = await StockStore(db).list_positions(StockFilter())
    return {position.key.group_key: position.stock for position in positions}


class TestRebuild:
    """rebuild 테스트"""

    @pytest.mark.asyncio
    async def test_inbound_minus_outbound(self, db: SQLiteAdapter) -> None:
        """입고 10, 출고 4 → 재고 6"""
        await _record(db, LedgerType.INBOUND, _tx("A", "spec1", 10, "2024-01-01"))
        await _record(db, LedgerType.OUTBOUND, _tx("A", "spec1", 4, "2024-01-02"))

        result = await StockReconciler(db).rebuild()

        assert result.positions == 1
        assert await _snapshot(db) == {("A", "spec1", "", "", ""): 6}

    @pytest.mark.asyncio
    async def test_zero_stock_pruned(self, db: SQLiteAdapter) -> None:
        """입고 5, 출고 5 → 위치 없음"""
        await _record(db, LedgerType.INBOUND, _tx("A", "spec1", 5))
        await _record(db, LedgerType.OUTBOUND, _tx("A", "spec1", 5))

        result = await StockReconciler(db).rebuild()

        assert result.positions == 0
        assert await _snapshot(db) == {}

    @pytest.mark.asyncio
    async def test_negative_stock_pruned(self, db: SQLiteAdapter) -> None:
        """출고만 있는 위치는 제외"""
        await _record(db, LedgerType.OUTBOUND, _tx("A", "spec1", 3))

        await StockReconciler(db).rebuild()

        assert await _snapshot(db) == {}

    @pytest.mark.asyncio
    async def test_null_and_empty_grouped(self, db: SQLiteAdapter) -> None:
        """finishing NULL 행과 '' 행은 하나의 위치"""
        await _record(db, LedgerType.INBOUND, _tx("A", "spec1", 2))
        await db.execute(
            f"""
            INSERT INTO {Tables.INBOUND}
            (id, drawing_number, specification, quantity, finishing, supplier, note, date, created_at)
            VALUES ('legacy', 'A', 'spec1', 3, '', NULL, '', '2024-01-01', '2024-01-01 00:00:00')
            """
        )
        await db.commit()

        await StockReconciler(db).rebuild()

        assert await _snapshot(db) == {("A", "spec1", "", "", ""): 5}
        row = await db.fetchone(f"SELECT finishing, note FROM {Tables.INVENTORY}")
        assert row["finishing"] is None
        assert row["note"] is None

    @pytest.mark.asyncio
    async def test_distinct_optional_values(self, db: SQLiteAdapter) -> None:
        """선택 필드가 다르면 다른 위치"""
        await _record(
            db,
            LedgerType.INBOUND,
            _tx("A", "spec1", 1),
            _tx("A", "spec1", 2, supplier="S1"),
            _tx("A", "spec1", 3, supplier="S2"),
        )

        await StockReconciler(db).rebuild()

        assert await _snapshot(db) == {
            ("A", "spec1", "", "", ""): 1,
            ("A", "spec1", "", "S1", ""): 2,
            ("A", "spec1", "", "S2", ""): 3,
        }

    @pytest.mark.asyncio
    async def test_replaces_stale_rows(self, db: SQLiteAdapter) -> None:
        """원장에 없는 스냅샷 행은 사라진다"""
        await db.execute(
            f"""
            INSERT INTO {Tables.INVENTORY} (id, drawing_number, specification, stock)
            VALUES ('stale', 'X', 'old', 99)
            """
        )
        await db.commit()
        await _record(db, LedgerType.INBOUND, _tx("A", "spec1", 1))

        await StockReconciler(db).rebuild()

        assert await _snapshot(db) == {("A", "spec1", "", "", ""): 1}

    @pytest.mark.asyncio
    async def test_idempotent(self, db: SQLiteAdapter) -> None:
        """두 번 실행해도 같은 위치/재고 (id는 새로 발급)"""
        await _record(
            db,
            LedgerType.INBOUND,
            _tx("A", "spec1", 10),
            _tx("B", "spec2", 4, finishing="도금"),
        )
        await _record(db, LedgerType.OUTBOUND, _tx("A", "spec1", 3))
        reconciler = StockReconciler(db)

        await reconciler.rebuild()
        first = await _snapshot(db)
        first_ids = {p.id for p in await StockStore(db).list_positions(StockFilter())}

        await reconciler.rebuild()
        second = await _snapshot(db)
        second_ids = {p.id for p in await StockStore(db).list_positions(StockFilter())}

        assert first == second
        assert first_ids.isdisjoint(second_ids)

    @pytest.mark.asyncio
    async def test_failure_keeps_previous_snapshot(
        self, db: SQLiteAdapter, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """삽입 중 실패하면 StorageError, 이전 스냅샷 유지"""
        await _record(db, LedgerType.INBOUND, _tx("A", "spec1", 5))
        reconciler = StockReconciler(db)
        await reconciler.rebuild()
        await _record(db, LedgerType.INBOUND, _tx("B", "spec2", 7))

        async def failing_executemany(*args, **kwargs):
            raise aiosqlite.OperationalError("disk I/O error")

        monkeypatch.setattr(db, "executemany", failing_executemany)

        with pytest.raises(StorageError, match="Failed to rebuild inventory"):
            await reconciler.rebuild()

        monkeypatch.undo()
        assert await _snapshot(db) == {("A", "spec1", "", "", ""): 5}

    @pytest.mark.asyncio
    async def test_empty_ledgers(self, db: SQLiteAdapter) -> None:
        """원장이 비어 있으면 빈 스냅샷"""
        result = await StockReconciler(db).rebuild()

        assert result.positions == 0
        assert result.elapsed_ms >= 0


class TestComputePositions:
    """compute_positions 테스트"""

    @pytest.mark.asyncio
    async def test_does_not_write(self, db: SQLiteAdapter) -> None:
        """계산만 하고 저장하지 않음"""
        await _record(db, LedgerType.INBOUND, _tx("A", "spec1", 10))

        positions = await StockReconciler(db).compute_positions()

        assert positions == [(PartKey("A", "spec1"), 10)]
        assert await _snapshot(db) == {}
