"""
pytest 공통 fixture 정의

임시 디렉토리, settings.yaml, 스키마가 초기화된 임시 DB
"""

import tempfile
from pathlib import Path
from typing import AsyncGenerator

import pytest
import pytest_asyncio

from adapters.db.sqlite_adapter import SQLiteAdapter, init_schema


@pytest.fixture
def temp_dir() -> Path:
    """OS 독립적인 임시 디렉토리 생성"""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def temp_settings_file(temp_dir: Path) -> Path:
    """테스트용 settings.yaml 파일 생성"""
    settings_content = """# 테스트용 settings.yaml
database:
  path: data/test_partstock.db

web:
  host: 127.0.0.1
  port: 8080
  cors_origins:
    - http://localhost:3000

logging:
  level: debug
"""
    settings_path = temp_dir / "settings.yaml"
    settings_path.write_text(settings_content, encoding="utf-8")
    return settings_path


@pytest.fixture
def temp_settings_file_absolute_db(temp_dir: Path) -> Path:
    """절대 경로 DB를 사용하는 settings.yaml 파일 생성"""
    db_path = temp_dir / "abs" / "stock.db"
    settings_content = f"""database:
  path: "{db_path.as_posix()}"
"""
    settings_path = temp_dir / "settings_abs.yaml"
    settings_path.write_text(settings_content, encoding="utf-8")
    return settings_path


@pytest.fixture
def db_path(temp_dir: Path) -> Path:
    """테스트용 DB 파일 경로"""
    return temp_dir / "test_partstock.db"


@pytest_asyncio.fixture
async def db(db_path: Path) -> AsyncGenerator[SQLiteAdapter, None]:
    """스키마가 초기화된 임시 DB (쓰기 가능)"""
    adapter = SQLiteAdapter(db_path)
    await adapter.connect()
    await init_schema(adapter)

    yield adapter

    await adapter.close()
