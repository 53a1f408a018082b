"""
응답 스키마 (Pydantic)

Web API 응답 데이터 직렬화 (JSON 키는 camelCase)
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class HealthResponse(BaseModel):
    """헬스 체크 응답"""

    status: str = Field(default="ok", description="서비스 상태")
    version: str = Field(..., description="애플리케이션 버전")
    database: str = Field(..., description="DB 연결 상태 (ok/error)")


class SuccessResponse(_CamelModel):
    """등록/수정/삭제 성공 응답"""

    success: bool = True
    count: int | None = Field(default=None, description="저장된 항목 수 (일괄 등록)")


class RebuildResponse(_CamelModel):
    """재고 재계산 응답"""

    success: bool = True
    positions: int = Field(..., description="재계산된 재고 위치 수")
    elapsed_ms: float = Field(..., description="소요 시간 (ms)")


class InventoryPageResponse(_CamelModel):
    """재고 목록 페이지"""

    items: list[dict[str, Any]]
    total_items: int
    total_pages: int
    current_page: int


class MonthlyRecordsResponse(BaseModel):
    """월간 입출고 기록"""

    inbound: list[dict[str, Any]]
    outbound: list[dict[str, Any]]


class ErrorResponse(BaseModel):
    """오류 응답"""

    error: str


# 라우터 공통 오류 응답 (OpenAPI 문서용)
ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    400: {"model": ErrorResponse, "description": "잘못된 요청"},
    404: {"model": ErrorResponse, "description": "대상 없음"},
    500: {"model": ErrorResponse, "description": "저장소 오류"},
}
