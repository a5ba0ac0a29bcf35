"""
services/dependencies.py 테스트

hisaab.yaml 설정이 저장소 클라이언트와 서비스까지 전달되는지 확인
"""

from datetime import datetime
from pathlib import Path

import pytest

from adapters.hisaab_api.rest_client import HisaabRestClient
from adapters.mock.store import MockHisaabStore
from core.config.loader import get_settings
from core.logging import get_log_file_path
from services.dependencies import (
    PROCESS_NAME,
    create_store,
    get_app_settings,
    get_book_service,
    get_dashboard_service,
    get_store,
    get_trader_service,
    init_app,
)


class TestInitApp:
    """init_app 테스트"""

    def test_loads_settings_and_logging(
        self, temp_config_file: Path, temp_dir: Path, restore_root_logger
    ) -> None:
        settings = init_app(temp_config_file, log_dir=temp_dir)

        assert settings.display.activity_limit == 6
        assert get_app_settings() is settings
        assert get_log_file_path(PROCESS_NAME, temp_dir).exists()


class TestStoreFactory:
    """저장소 클라이언트 생성 테스트"""

    def test_create_store_from_yaml(self, temp_config_file: Path) -> None:
        client = create_store(get_settings(temp_config_file))

        assert isinstance(client, HisaabRestClient)
        assert client.base_url == "http://store.test/api"
        assert client.auth_token == "test_token_abc"
        assert client.timeout == 10

    @pytest.mark.asyncio
    async def test_get_store_closes_client(self, temp_config_file: Path) -> None:
        get_settings(temp_config_file)

        async for client in get_store():
            await client._get_client()
            assert client._client is not None

        assert client._client is None


class TestServiceFactories:
    """서비스 생성 테스트"""

    @pytest.mark.asyncio
    async def test_dashboard_uses_yaml_display(
        self, temp_config_file: Path, mock_store: MockHisaabStore, fixed_now: datetime
    ) -> None:
        """activity_limit 6, UTC+3 설정이 Dashboard까지 전달"""
        get_settings(temp_config_file)

        service = get_dashboard_service(mock_store)
        dashboard = await service.get_dashboard(now=fixed_now)

        assert service.display.activity_limit == 6
        assert service.display.utc_offset_hours == 3
        # 기본값 4였다면 4개로 잘림
        assert len(dashboard.recent_activity) == 5

    def test_other_services_share_store(self, mock_store: MockHisaabStore) -> None:
        assert get_book_service(mock_store).store is mock_store
        assert get_trader_service(mock_store).store is mock_store
