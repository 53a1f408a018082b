"""
입출고 라우트

POST /api/inbound, /api/outbound - 일괄 등록
PUT  /api/inbound/{id}, /api/outbound/{id} - 수정
GET  /api/inbound, /api/outbound - 검색
GET  /api/monthly-records - 월간 기록
"""

from datetime import date as date_type

from fastapi import APIRouter, Depends, Path, Query, status

from core.exceptions import ValidationError
from core.types import LedgerType
from web.dependencies import get_transaction_reader, get_transaction_writer
from web.models.requests import TransactionItemRequest
from web.models.responses import ERROR_RESPONSES, MonthlyRecordsResponse, SuccessResponse
from web.services.transaction_service import TransactionService

router = APIRouter(prefix="/api", tags=["Transactions"], responses=ERROR_RESPONSES)


async def _create(
    service: TransactionService,
    ledger: LedgerType,
    items: list[TransactionItemRequest],
) -> SuccessResponse:
    count = await service.create(ledger, [item.to_new_transaction() for item in items])
    return SuccessResponse(success=True, count=count)


async def _update(
    service: TransactionService,
    ledger: LedgerType,
    record_id: str,
    item: TransactionItemRequest,
) -> SuccessResponse:
    await service.update(ledger, record_id, item.to_new_transaction())
    return SuccessResponse(success=True)


# =========================================================================
# 입고
# =========================================================================


@router.post(
    "/inbound",
    response_model=SuccessResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
async def create_inbound(
    items: list[TransactionItemRequest],
    service: TransactionService = Depends(get_transaction_writer),
):
    """입고 일괄 등록"""
    return await _create(service, LedgerType.INBOUND, items)


@router.put("/inbound/{record_id}", response_model=SuccessResponse, response_model_exclude_none=True)
async def update_inbound(
    item: TransactionItemRequest,
    record_id: str = Path(...),
    service: TransactionService = Depends(get_transaction_writer),
):
    """입고 기록 수정"""
    return await _update(service, LedgerType.INBOUND, record_id, item)


@router.get("/inbound")
async def search_inbound(
    search: str | None = Query(default=None, description="도번/규격/공급처 부분 일치"),
    on_date: date_type | None = Query(default=None, alias="date"),
    service: TransactionService = Depends(get_transaction_reader),
):
    """입고 기록 검색"""
    return await service.search(LedgerType.INBOUND, search, on_date)


# =========================================================================
# 출고
# =========================================================================


@router.post(
    "/outbound",
    response_model=SuccessResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
async def create_outbound(
    items: list[TransactionItemRequest],
    service: TransactionService = Depends(get_transaction_writer),
):
    """출고 일괄 등록 (재고 부족 시 전체 거부)"""
    return await _create(service, LedgerType.OUTBOUND, items)


@router.put("/outbound/{record_id}", response_model=SuccessResponse, response_model_exclude_none=True)
async def update_outbound(
    item: TransactionItemRequest,
    record_id: str = Path(...),
    service: TransactionService = Depends(get_transaction_writer),
):
    """출고 기록 수정"""
    return await _update(service, LedgerType.OUTBOUND, record_id, item)


@router.get("/outbound")
async def search_outbound(
    search: str | None = Query(default=None, description="도번/규격/공급처 부분 일치"),
    on_date: date_type | None = Query(default=None, alias="date"),
    service: TransactionService = Depends(get_transaction_reader),
):
    """출고 기록 검색"""
    return await service.search(LedgerType.OUTBOUND, search, on_date)


# =========================================================================
# 월간 기록
# =========================================================================


@router.get("/monthly-records", response_model=MonthlyRecordsResponse)
async def get_monthly_records(
    year: int | None = Query(default=None),
    month: int | None = Query(default=None),
    service: TransactionService = Depends(get_transaction_reader),
):
    """해당 월의 입고/출고 기록"""
    if year is None or month is None:
        raise ValidationError("Year and month parameters are required")

    return await service.monthly_records(year, month)
