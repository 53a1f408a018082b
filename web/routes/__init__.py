"""
API 라우트 패키지

각 기능별 라우터 모듈:
- health: 헬스 체크
- transactions: 입고/출고 등록, 수정, 검색, 월간 기록
- inventory: 재고 목록, 조회, 삭제, 재계산
- suggestions: 도번/규격 자동완성
"""
