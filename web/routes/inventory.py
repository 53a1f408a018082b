"""
재고 라우트

GET    /api/inventory - 재고 목록 (입출고 내역 포함)
GET    /api/product - 재고 조회 (내역 없음)
POST   /api/inventory/delete-by-condition - 조건 삭제
POST   /api/inventory/rebuild - 수동 재계산
DELETE /api/inventory/{id} - id 삭제
"""

from fastapi import APIRouter, Depends, Path, Query

from core.constants import Defaults
from core.inventory.stock_store import StockFilter
from web.dependencies import get_inventory_reader, get_inventory_writer
from web.models.requests import DeleteConditionRequest
from web.models.responses import (
    ERROR_RESPONSES,
    InventoryPageResponse,
    RebuildResponse,
    SuccessResponse,
)
from web.services.inventory_service import InventoryService

router = APIRouter(prefix="/api", tags=["Inventory"], responses=ERROR_RESPONSES)


@router.get("/inventory", response_model=InventoryPageResponse)
async def get_inventory(
    dno: str | None = Query(default=None, description="도번 부분 일치"),
    spec: str | None = Query(default=None, description="규격 부분 일치"),
    fin: str | None = Query(default=None, description="후처리 부분 일치 (빈 값이면 후처리 없는 항목만)"),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=Defaults.PAGE_SIZE, ge=1, le=Defaults.MAX_PAGE_SIZE),
    service: InventoryService = Depends(get_inventory_reader),
):
    """재고 목록 조회"""
    filters = StockFilter(drawing_number=dno, specification=spec, finishing=fin)
    return await service.list_positions(filters, page, limit)


@router.get("/product")
async def get_products(
    dno: str | None = Query(default=None),
    spec: str | None = Query(default=None),
    fin: str | None = Query(default=None),
    service: InventoryService = Depends(get_inventory_reader),
):
    """재고 조회 (입출고 내역 없음, 빈 fin은 조건 없음)"""
    filters = StockFilter(drawing_number=dno, specification=spec, finishing=fin or None)
    return await service.find_products(filters)


@router.post("/inventory/delete-by-condition", response_model=SuccessResponse, response_model_exclude_none=True)
async def delete_by_condition(
    request: DeleteConditionRequest,
    service: InventoryService = Depends(get_inventory_writer),
):
    """PartKey 조건으로 재고 위치 삭제 (입출고 원장도 정리)"""
    await service.delete_by_condition(request.to_part_key())
    return SuccessResponse(success=True)


@router.post("/inventory/rebuild", response_model=RebuildResponse)
async def rebuild_inventory(
    service: InventoryService = Depends(get_inventory_writer),
):
    """재고 스냅샷 수동 재계산"""
    result = await service.rebuild()
    return RebuildResponse(success=True, positions=result.positions, elapsed_ms=result.elapsed_ms)


@router.delete("/inventory/{position_id}", response_model=SuccessResponse, response_model_exclude_none=True)
async def delete_inventory_item(
    position_id: str = Path(...),
    service: InventoryService = Depends(get_inventory_writer),
):
    """재고 행 id로 삭제"""
    await service.delete_position(position_id)
    return SuccessResponse(success=True)
