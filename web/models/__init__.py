"""
Web 모델 패키지

Pydantic 스키마 정의
"""

from web.models.requests import (
    DeleteConditionRequest,
    TransactionItemRequest,
)
from web.models.responses import (
    ErrorResponse,
    HealthResponse,
    InventoryPageResponse,
    MonthlyRecordsResponse,
    RebuildResponse,
    SuccessResponse,
)

__all__ = [
    # Requests
    "DeleteConditionRequest",
    "TransactionItemRequest",
    # Responses
    "ErrorResponse",
    "HealthResponse",
    "InventoryPageResponse",
    "MonthlyRecordsResponse",
    "RebuildResponse",
    "SuccessResponse",
]
