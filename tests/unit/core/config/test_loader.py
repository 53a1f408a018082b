"""
core/config/loader.py 테스트

settings.yaml 로드, 검증, 기본값 테스트
"""

from pathlib import Path

import pytest

from core.config.loader import (
    AppConfig,
    ConfigLoadError,
    Settings,
    get_settings,
    load_config,
)
from core.constants import Defaults, Paths, PROJECT_ROOT


class TestAppConfig:
    """AppConfig 데이터클래스 테스트"""

    def test_defaults(self) -> None:
        """기본값"""
        config = AppConfig()

        assert config.db_path == Paths.DEFAULT_DB
        assert config.web_host == Defaults.WEB_HOST
        assert config.web_port == Defaults.WEB_PORT
        assert config.log_level == Defaults.LOG_LEVEL
        assert config.cors_origins == ("*",)

    def test_frozen(self) -> None:
        """불변성 확인"""
        config = AppConfig()

        with pytest.raises(AttributeError):
            config.web_port = 9999  # type: ignore


class TestLoadConfig:
    """load_config 테스트"""

    def test_load(self, temp_settings_file: Path) -> None:
        """정상 로드"""
        config = load_config(temp_settings_file)

        assert config.web_host == "127.0.0.1"
        assert config.web_port == 8080
        assert config.log_level == "DEBUG"
        assert config.cors_origins == ("http://localhost:3000",)

    def test_relative_db_path(self, temp_settings_file: Path) -> None:
        """상대 경로는 프로젝트 루트 기준"""
        config = load_config(temp_settings_file)

        assert config.db_path == PROJECT_ROOT / "data" / "test_partstock.db"

    def test_absolute_db_path(self, temp_settings_file_absolute_db: Path, temp_dir: Path) -> None:
        """절대 경로는 그대로"""
        config = load_config(temp_settings_file_absolute_db)

        assert config.db_path == temp_dir / "abs" / "stock.db"

    def test_file_not_found(self, temp_dir: Path) -> None:
        """파일이 없으면 기본값"""
        config = load_config(temp_dir / "nonexistent.yaml")

        assert config == AppConfig()

    def test_empty_file(self, temp_dir: Path) -> None:
        """빈 파일은 기본값"""
        path = temp_dir / "empty.yaml"
        path.write_text("", encoding="utf-8")

        assert load_config(path) == AppConfig()

    def test_partial_file(self, temp_dir: Path) -> None:
        """일부 키만 있으면 나머지는 기본값"""
        path = temp_dir / "partial.yaml"
        path.write_text("web:\n  port: 4000\n", encoding="utf-8")

        config = load_config(path)

        assert config.web_port == 4000
        assert config.web_host == Defaults.WEB_HOST
        assert config.db_path == Paths.DEFAULT_DB

    def test_single_cors_origin_string(self, temp_dir: Path) -> None:
        """cors_origins 문자열 하나도 허용"""
        path = temp_dir / "cors.yaml"
        path.write_text("web:\n  cors_origins: http://example.com\n", encoding="utf-8")

        assert load_config(path).cors_origins == ("http://example.com",)

    def test_invalid_port(self, temp_dir: Path) -> None:
        """정수가 아닌 포트"""
        path = temp_dir / "bad_port.yaml"
        path.write_text("web:\n  port: abc\n", encoding="utf-8")

        with pytest.raises(ConfigLoadError, match="web.port"):
            load_config(path)

    def test_port_out_of_range(self, temp_dir: Path) -> None:
        """범위를 벗어난 포트"""
        path = temp_dir / "big_port.yaml"
        path.write_text("web:\n  port: 70000\n", encoding="utf-8")

        with pytest.raises(ConfigLoadError, match="범위"):
            load_config(path)

    def test_invalid_log_level(self, temp_dir: Path) -> None:
        """잘못된 로그 레벨"""
        path = temp_dir / "bad_level.yaml"
        path.write_text("logging:\n  level: verbose\n", encoding="utf-8")

        with pytest.raises(ConfigLoadError, match="로그 레벨"):
            load_config(path)

    def test_invalid_yaml(self, temp_dir: Path) -> None:
        """YAML 파싱 오류"""
        path = temp_dir / "invalid.yaml"
        path.write_text("web: [unclosed\n", encoding="utf-8")

        with pytest.raises(ConfigLoadError, match="파싱 실패"):
            load_config(path)

    def test_non_mapping_root(self, temp_dir: Path) -> None:
        """최상위가 매핑이 아님"""
        path = temp_dir / "list.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")

        with pytest.raises(ConfigLoadError, match="매핑"):
            load_config(path)


class TestSettings:
    """Settings 클래스 테스트"""

    def setup_method(self) -> None:
        """각 테스트 전에 싱글턴 초기화"""
        Settings.reset()

    def teardown_method(self) -> None:
        Settings.reset()

    def test_creation(self, temp_settings_file: Path) -> None:
        """생성"""
        settings = Settings(temp_settings_file)

        assert settings.web_port == 8080

    def test_singleton(self, temp_settings_file: Path) -> None:
        """싱글턴 확인"""
        settings1 = Settings(temp_settings_file)
        settings2 = Settings()

        assert settings1 is settings2
        assert settings2.web_port == 8080

    def test_properties(self, temp_settings_file: Path) -> None:
        """속성 확인"""
        settings = Settings(temp_settings_file)

        assert settings.web_host == "127.0.0.1"
        assert settings.log_level == "DEBUG"
        assert settings.cors_origins == ["http://localhost:3000"]
        assert settings.db_path.name == "test_partstock.db"

    def test_reset(self, temp_settings_file: Path, temp_dir: Path) -> None:
        """리셋 후 다시 로드"""
        Settings(temp_settings_file)
        Settings.reset()

        settings = Settings(temp_dir / "nonexistent.yaml")

        assert settings.web_port == Defaults.WEB_PORT


class TestGetSettings:
    """get_settings 함수 테스트"""

    def setup_method(self) -> None:
        Settings.reset()

    def teardown_method(self) -> None:
        Settings.reset()

    def test_returns_settings(self, temp_settings_file: Path) -> None:
        """Settings 반환"""
        settings = get_settings(temp_settings_file)

        assert isinstance(settings, Settings)

    def test_singleton_via_function(self, temp_settings_file: Path) -> None:
        """함수로도 싱글턴"""
        assert get_settings(temp_settings_file) is get_settings()
