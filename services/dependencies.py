"""
의존성 구성

hisaab.yaml 설정으로 저장소 클라이언트와 서비스를 생성.
진입점은 init_app()을 먼저 호출하여 로깅과 설정을 초기화.

사용 예시:
```python
init_app()
async for store in get_store():
    dashboard = await get_dashboard_service(store).get_dashboard()
```
"""

import logging
from collections.abc import AsyncGenerator
from pathlib import Path

from adapters.hisaab_api.rest_client import HisaabRestClient
from adapters.interfaces import IHisaabStore
from core.config.loader import Settings, get_settings
from core.logging import setup_logging
from services.book_service import LedgerBookService
from services.dashboard_service import DashboardService
from services.trader_service import TraderService

logger = logging.getLogger(__name__)

PROCESS_NAME = "hisaab"


def init_app(
    config_path: Path | None = None,
    log_dir: Path | None = None,
) -> Settings:
    """로깅 설정 후 hisaab.yaml 로드

    Args:
        config_path: hisaab.yaml 경로 (None이면 기본 경로)
        log_dir: 로그 디렉토리 (None이면 Paths.LOGS_DIR)

    Returns:
        Settings 싱글턴 인스턴스
    """
    setup_logging(PROCESS_NAME, log_dir=log_dir)
    settings = get_settings(config_path)
    logger.info(
        f"설정 로드 완료: store={settings.store.base_url}, "
        f"activity_limit={settings.display.activity_limit}"
    )
    return settings


def get_app_settings() -> Settings:
    """애플리케이션 설정 반환"""
    return get_settings()


def create_store(settings: Settings | None = None) -> HisaabRestClient:
    """설정의 store 섹션으로 REST 클라이언트 생성"""
    store_config = (settings or get_settings()).store
    return HisaabRestClient(
        base_url=store_config.base_url,
        auth_token=store_config.auth_token,
        timeout=store_config.timeout_sec,
    )


async def get_store() -> AsyncGenerator[HisaabRestClient, None]:
    """저장소 클라이언트 반환 (사용 후 연결 종료)"""
    async with create_store() as client:
        yield client


def get_dashboard_service(store: IHisaabStore) -> DashboardService:
    return DashboardService(store, get_settings().display)


def get_book_service(store: IHisaabStore) -> LedgerBookService:
    return LedgerBookService(store)


def get_trader_service(store: IHisaabStore) -> TraderService:
    return TraderService(store)
