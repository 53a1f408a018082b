"""
Web 진입점

실행 방법:
    python -m web

호스트/포트/로그 레벨은 config/settings.yaml (없으면 기본값)
"""

import uvicorn

from core.config.loader import get_settings

if __name__ == "__main__":
    settings = get_settings()
    uvicorn.run(
        "web.app:app",
        host=settings.web_host,
        port=settings.web_port,
        log_level=settings.log_level.lower(),
        reload=False,
    )
