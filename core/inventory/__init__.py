"""
입출고 원장 / 재고 스냅샷

입고(inbound)와 출고(outbound) 원장이 유일한 원본이고,
재고(inventory)는 원장에서 다시 계산되는 스냅샷이다.

사용 예시:
```python
from core.inventory import LedgerStore, PartKey, StockReconciler

key = PartKey("A-1001", "M8 볼트", finishing="아연도금")

# 원장 기준 현재 재고
stock = await LedgerStore(db).current_stock(key)

# 스냅샷 재생성
result = await StockReconciler(db).rebuild()
```
"""

from core.inventory.keys import PartKey
from core.inventory.ledger_store import LedgerStore
from core.inventory.models import NewTransaction, StockPosition, TransactionRecord
from core.inventory.reconciler import ReconcileResult, StockReconciler
from core.inventory.stock_store import StockFilter, StockStore

__all__ = [
    "PartKey",
    "LedgerStore",
    "NewTransaction",
    "StockPosition",
    "TransactionRecord",
    "ReconcileResult",
    "StockReconciler",
    "StockFilter",
    "StockStore",
]
