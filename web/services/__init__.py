"""
Web 서비스 패키지

비즈니스 로직 처리
"""

from web.services.inventory_service import InventoryService
from web.services.transaction_service import TransactionService

__all__ = [
    "InventoryService",
    "TransactionService",
]
