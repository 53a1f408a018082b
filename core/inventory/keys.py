"""
PartKey 비교 규칙

재고 위치의 식별자는 (도번, 규격, 후처리, 공급처, 비고) 복합키다.
선택 필드(후처리/공급처/비고)는 NULL과 빈 문자열을 같은 값으로 본다.

이 규칙은 다음 네 곳에서 동일하게 쓰인다.
- 재계산 시 그룹핑
- 재고 위치 ↔ 원장 행 조인
- 조건 삭제
- 빈 값 필터 (fin='' → 후처리가 비어 있는 위치만)

SQL 쪽은 선택 컬럼마다 COALESCE(col, '')로 비교하므로
과거에 ''로 저장된 행도 NULL 행과 같은 위치로 묶인다.
"""

from dataclasses import dataclass
from typing import Any, Iterable, Mapping

from core.exceptions import ValidationError

REQUIRED_FIELDS: tuple[str, ...] = ("drawing_number", "specification")
OPTIONAL_FIELDS: tuple[str, ...] = ("finishing", "supplier", "note")
KEY_FIELDS: tuple[str, ...] = REQUIRED_FIELDS + OPTIONAL_FIELDS


def normalize_optional(value: str | None) -> str | None:
    """선택 필드 정규화 (None/'' → None)"""
    if value is None or value == "":
        return None
    return value


@dataclass(frozen=True)
class PartKey:
    """재고 위치 복합키

    생성 시 선택 필드를 정규화하므로 PartKey끼리는 == 로 비교해도 된다.

    Args:
        drawing_number: 도번 (필수)
        specification: 규격/품명 (필수)
        finishing: 후처리
        supplier: 공급처
        note: 비고
    """

    drawing_number: str
    specification: str
    finishing: str | None = None
    supplier: str | None = None
    note: str | None = None

    def __post_init__(self) -> None:
        if not self.drawing_number or not self.specification:
            raise ValidationError("drawingNumber and specification are required")
        for name in OPTIONAL_FIELDS:
            object.__setattr__(self, name, normalize_optional(getattr(self, name)))

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "PartKey":
        """DB 행(aiosqlite.Row 또는 dict)에서 생성"""
        return cls(*(row[name] for name in KEY_FIELDS))

    @property
    def group_key(self) -> tuple[str, str, str, str, str]:
        """그룹핑용 튜플 (빈 선택 필드는 '')"""
        return (
            self.drawing_number,
            self.specification,
            self.finishing or "",
            self.supplier or "",
            self.note or "",
        )

    def matches(self, other: "PartKey") -> bool:
        """같은 재고 위치인지 여부 (선택 필드의 NULL과 ''는 같다)"""
        return self.group_key == other.group_key

    def to_params(self) -> tuple[str, str, str, str, str]:
        """key_match_clause()에 대응하는 바인딩 파라미터"""
        return self.group_key


def _column(alias: str, name: str) -> str:
    return f"{alias}.{name}" if alias else name


def group_by_columns(alias: str = "") -> str:
    """GROUP BY 절 (선택 컬럼은 COALESCE로 NULL/'' 통합)"""
    columns = [_column(alias, name) for name in REQUIRED_FIELDS]
    columns += [f"COALESCE({_column(alias, name)}, '')" for name in OPTIONAL_FIELDS]
    return ", ".join(columns)


def key_match_clause(alias: str = "") -> str:
    """단일 PartKey 일치 조건 (파라미터 5개)"""
    conditions = [f"{_column(alias, name)} = ?" for name in REQUIRED_FIELDS]
    conditions += [f"COALESCE({_column(alias, name)}, '') = ?" for name in OPTIONAL_FIELDS]
    return "(" + " AND ".join(conditions) + ")"


def keys_match_clause(keys: Iterable[PartKey], alias: str = "") -> tuple[str, tuple[str, ...]]:
    """여러 PartKey 중 하나와 일치하는 조건 (벌크 조인용)

    Returns:
        (WHERE 조건, 바인딩 파라미터). keys가 비어 있으면 항상 거짓인 조건.
    """
    clauses: list[str] = []
    params: list[str] = []
    for key in dict.fromkeys(keys):
        clauses.append(key_match_clause(alias))
        params.extend(key.to_params())

    if not clauses:
        return "0", ()

    return " OR ".join(clauses), tuple(params)


def empty_field_clause(column: str) -> str:
    """선택 컬럼이 비어 있는 행만 (NULL 또는 '')"""
    return f"COALESCE({column}, '') = ''"
