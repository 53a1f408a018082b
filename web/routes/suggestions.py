"""
자동완성 라우트

GET /api/suggestions/drowing - 도번 후보 (기존 클라이언트 경로)
GET /api/suggestions/drawing - 도번 후보
GET /api/suggestions/product - 규격 후보
"""

from fastapi import APIRouter, Depends, Query

from core.exceptions import ValidationError
from core.types import SuggestField
from web.dependencies import get_inventory_reader
from web.models.responses import ERROR_RESPONSES
from web.services.inventory_service import InventoryService

router = APIRouter(prefix="/api/suggestions", tags=["Suggestions"], responses=ERROR_RESPONSES)


async def _suggest(service: InventoryService, field: SuggestField, term: str | None) -> list[str]:
    if not term:
        raise ValidationError("Term parameter is required")
    return await service.suggest(field, term)


@router.get("/drowing", response_model=list[str])
@router.get("/drawing", response_model=list[str])
async def suggest_drawing_numbers(
    term: str | None = Query(default=None),
    service: InventoryService = Depends(get_inventory_reader),
):
    """도번 자동완성"""
    return await _suggest(service, SuggestField.DRAWING_NUMBER, term)


@router.get("/product", response_model=list[str])
async def suggest_specifications(
    term: str | None = Query(default=None),
    service: InventoryService = Depends(get_inventory_reader),
):
    """규격 자동완성"""
    return await _suggest(service, SuggestField.SPECIFICATION, term)
