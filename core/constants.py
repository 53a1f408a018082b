"""
하드코딩 상수 - 변경될 일이 거의 없는 고정값

중요: 경로는 반드시 pathlib.Path 사용 (Windows/Linux 크로스 플랫폼)
"""

from pathlib import Path


# 프로젝트 루트 (이 파일 기준 2단계 상위: core/constants.py → partstock/)
PROJECT_ROOT: Path = Path(__file__).resolve().parent.parent

APP_VERSION: str = "1.0.0"


class Defaults:
    """기본값 상수"""

    WEB_HOST: str = "0.0.0.0"
    WEB_PORT: int = 3000

    LOG_LEVEL: str = "INFO"

    # 재고 목록 페이지네이션
    PAGE_SIZE: int = 20
    MAX_PAGE_SIZE: int = 100

    # 자동완성 최대 개수
    SUGGESTION_LIMIT: int = 10


class Paths:
    """프로젝트 경로 상수 (pathlib 사용 - OS 독립적)"""

    # 디렉토리
    CONFIG_DIR: Path = PROJECT_ROOT / "config"
    DATA_DIR: Path = PROJECT_ROOT / "data"
    LOGS_DIR: Path = PROJECT_ROOT / "logs"
    WEB_LOGS_DIR: Path = LOGS_DIR / "web"

    # 설정 파일
    SETTINGS_FILE: Path = CONFIG_DIR / "settings.yaml"

    # DB 파일
    DEFAULT_DB: Path = DATA_DIR / "partstock.db"


class Tables:
    """테이블 이름"""

    INBOUND: str = "inbound"
    OUTBOUND: str = "outbound"
    INVENTORY: str = "inventory"
