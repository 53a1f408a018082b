"""
설정 로더

settings.yaml 로드 및 애플리케이션 설정 생성
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from core.constants import Defaults, Paths, PROJECT_ROOT


@dataclass(frozen=True)
class AppConfig:
    """애플리케이션 설정 (settings.yaml에서 로드)

    불변 데이터 구조로 설정 변경 방지
    """

    db_path: Path = Paths.DEFAULT_DB
    web_host: str = Defaults.WEB_HOST
    web_port: int = Defaults.WEB_PORT
    log_level: str = Defaults.LOG_LEVEL
    cors_origins: tuple[str, ...] = field(default=("*",))


class ConfigLoadError(Exception):
    """설정 로드 실패 예외"""

    pass


def _resolve_path(value: str) -> Path:
    """상대 경로는 프로젝트 루트 기준으로 변환"""
    path = Path(value)
    if not path.is_absolute():
        path = PROJECT_ROOT / path
    return path


def load_config(path: Path | None = None) -> AppConfig:
    """settings.yaml 파일 로드

    파일이 없으면 기본값으로 동작한다.

    Args:
        path: settings.yaml 경로 (None이면 기본 경로 사용)

    Returns:
        AppConfig 인스턴스

    Raises:
        ConfigLoadError: 형식이 잘못되었거나 값이 유효하지 않은 경우
    """
    if path is None:
        path = Paths.SETTINGS_FILE

    if not path.exists():
        return AppConfig()

    try:
        content = path.read_text(encoding="utf-8")
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigLoadError(f"settings.yaml 파싱 실패: {e}") from e

    if data is None:
        return AppConfig()

    if not isinstance(data, dict):
        raise ConfigLoadError("settings.yaml 최상위는 매핑이어야 합니다")

    database: dict[str, Any] = data.get("database") or {}
    web: dict[str, Any] = data.get("web") or {}
    logging_config: dict[str, Any] = data.get("logging") or {}

    db_path = Paths.DEFAULT_DB
    if database.get("path"):
        db_path = _resolve_path(str(database["path"]))

    port = web.get("port", Defaults.WEB_PORT)
    try:
        port = int(port)
    except (TypeError, ValueError) as e:
        raise ConfigLoadError(f"web.port가 정수가 아닙니다: {port!r}") from e

    if not 0 < port < 65536:
        raise ConfigLoadError(f"web.port 범위 오류: {port}")

    log_level = str(logging_config.get("level", Defaults.LOG_LEVEL)).upper()
    if log_level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
        raise ConfigLoadError(f"유효하지 않은 로그 레벨입니다: '{log_level}'")

    origins = web.get("cors_origins", ["*"])
    if isinstance(origins, str):
        origins = [origins]

    return AppConfig(
        db_path=db_path,
        web_host=str(web.get("host", Defaults.WEB_HOST)),
        web_port=port,
        log_level=log_level,
        cors_origins=tuple(str(o) for o in origins),
    )


class Settings:
    """애플리케이션 설정 (싱글턴 패턴)

    settings.yaml을 로드하고 관련 설정을 제공
    """

    _instance: "Settings | None" = None
    _config: AppConfig | None = None

    def __new__(cls, settings_path: Path | None = None) -> "Settings":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self, settings_path: Path | None = None) -> None:
        if self._config is None:
            self._config = load_config(settings_path)

    @property
    def db_path(self) -> Path:
        """SQLite DB 경로"""
        assert self._config is not None
        return self._config.db_path

    @property
    def web_host(self) -> str:
        """Web 바인딩 호스트"""
        assert self._config is not None
        return self._config.web_host

    @property
    def web_port(self) -> int:
        """Web 포트"""
        assert self._config is not None
        return self._config.web_port

    @property
    def log_level(self) -> str:
        """로그 레벨"""
        assert self._config is not None
        return self._config.log_level

    @property
    def cors_origins(self) -> list[str]:
        """CORS 허용 Origin"""
        assert self._config is not None
        return list(self._config.cors_origins)

    @classmethod
    def reset(cls) -> None:
        """싱글턴 인스턴스 초기화 (테스트용)"""
        cls._instance = None
        cls._config = None


def get_settings(settings_path: Path | None = None) -> Settings:
    """Settings 인스턴스 반환

    Args:
        settings_path: settings.yaml 경로 (None이면 기본 경로 사용)

    Returns:
        Settings 싱글턴 인스턴스
    """
    return Settings(settings_path)
