"""
core/constants.py 테스트

경로가 pathlib.Path이고 프로젝트 루트 기준인지 확인
"""

from pathlib import Path

from core.constants import APP_VERSION, Defaults, Paths, PROJECT_ROOT, Tables


class TestPaths:
    """Paths 테스트"""

    def test_project_root(self) -> None:
        """프로젝트 루트에 core 패키지가 있음"""
        assert (PROJECT_ROOT / "core" / "constants.py").exists()

    def test_paths_are_pathlib(self) -> None:
        """모든 경로는 Path"""
        for value in (
            Paths.CONFIG_DIR,
            Paths.DATA_DIR,
            Paths.LOGS_DIR,
            Paths.WEB_LOGS_DIR,
            Paths.SETTINGS_FILE,
            Paths.DEFAULT_DB,
        ):
            assert isinstance(value, Path)
            assert value.is_relative_to(PROJECT_ROOT)

    def test_settings_file(self) -> None:
        """설정 파일 위치"""
        assert Paths.SETTINGS_FILE == Paths.CONFIG_DIR / "settings.yaml"

    def test_web_logs_dir(self) -> None:
        """Web 로그 디렉토리"""
        assert Paths.WEB_LOGS_DIR.parent == Paths.LOGS_DIR


class TestDefaults:
    """Defaults 테스트"""

    def test_page_size(self) -> None:
        """기본 페이지 크기는 최대값 이하"""
        assert 0 < Defaults.PAGE_SIZE <= Defaults.MAX_PAGE_SIZE

    def test_web_port(self) -> None:
        """기본 포트"""
        assert Defaults.WEB_PORT == 3000


class TestTables:
    """Tables 테스트"""

    def test_names(self) -> None:
        """테이블 이름"""
        assert Tables.INBOUND == "inbound"
        assert Tables.OUTBOUND == "outbound"
        assert Tables.INVENTORY == "inventory"


def test_app_version() -> None:
    """버전 문자열"""
    assert APP_VERSION.count(".") == 2
