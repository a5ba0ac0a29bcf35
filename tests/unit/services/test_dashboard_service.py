"""
DashboardService 테스트

동시 조회, 출처별 장애 격리, 활동 피드, 데이터 품질 경고
"""

import logging
from datetime import datetime
from decimal import Decimal

import pytest

from adapters.mock.store import SOURCE_FOREIGN, SOURCE_TRADERS, MockHisaabStore
from core.config.loader import DisplayConfig
from core.ledger.models import ForeignTransferEntry, SpecialBalanceEntry
from core.types import BalanceType
from services.dashboard_service import DashboardService


class TestGetDashboard:
    """get_dashboard 테스트"""

    @pytest.mark.asyncio
    async def test_counts_and_feed(
        self, mock_store: MockHisaabStore, fixed_now: datetime
    ) -> None:
        service = DashboardService(mock_store)

        dashboard = await service.get_dashboard(now=fixed_now)

        assert dashboard.foreign_entry_count == 1
        assert dashboard.active_trader_count == 1
        assert dashboard.special_user_count == 1
        assert len(dashboard.recent_activity) == 4
        assert dashboard.recent_activity[0].entry_id == "ft1"
        assert dashboard.recent_activity[0].amount == "-6000.00"
        assert dashboard.recent_activity[0].display_amount == "-6,000.00 SAR"
        assert dashboard.unavailable_sources == []
        assert dashboard.data_quality_warnings == []

    @pytest.mark.asyncio
    async def test_limit_from_display_config(
        self, mock_store: MockHisaabStore, fixed_now: datetime
    ) -> None:
        display = DisplayConfig(
            activity_limit=2,
            utc_offset_hours=5,
            foreign_currency="SAR",
            local_currency="PKR",
        )
        service = DashboardService(mock_store, display)

        dashboard = await service.get_dashboard(now=fixed_now)

        assert len(dashboard.recent_activity) == 2

    @pytest.mark.asyncio
    async def test_explicit_limit(self, mock_store: MockHisaabStore, fixed_now: datetime) -> None:
        dashboard = await DashboardService(mock_store).get_dashboard(limit=10, now=fixed_now)

        assert len(dashboard.recent_activity) == 5

    @pytest.mark.asyncio
    async def test_display_amount_signed_with_currency(
        self, mock_store: MockHisaabStore, fixed_now: datetime
    ) -> None:
        dashboard = await DashboardService(mock_store).get_dashboard(limit=10, now=fixed_now)

        by_id = {item.entry_id: item for item in dashboard.recent_activity}
        assert by_id["sp1"].display_amount == "-15,000.00 PKR"
        assert by_id["le3"].display_amount == "+300,000.00 PKR"

    @pytest.mark.asyncio
    async def test_failed_source_degrades_to_empty(
        self, mock_store: MockHisaabStore, fixed_now: datetime, caplog
    ) -> None:
        """한 출처 실패 시 나머지는 정상 표시"""
        mock_store.fail_source(SOURCE_FOREIGN)
        service = DashboardService(mock_store)

        with caplog.at_level(logging.WARNING):
            dashboard = await service.get_dashboard(limit=10, now=fixed_now)

        assert dashboard.unavailable_sources == ["foreign"]
        assert dashboard.foreign_entry_count == 0
        assert len(dashboard.recent_activity) == 4
        assert "foreign" in caplog.text

    @pytest.mark.asyncio
    async def test_all_sources_failed(
        self, mock_store: MockHisaabStore, fixed_now: datetime
    ) -> None:
        for source in ("foreign", "special", SOURCE_TRADERS):
            mock_store.fail_source(source)

        dashboard = await DashboardService(mock_store).get_dashboard(now=fixed_now)

        assert dashboard.recent_activity == []
        assert dashboard.unavailable_sources == ["foreign", "special", "traders"]

    @pytest.mark.asyncio
    async def test_zero_rate_warning(self, fixed_now: datetime) -> None:
        """환율 0 항목은 경고 목록에 포함 (예외 없음)"""
        store = MockHisaabStore()
        store.add_foreign_transfer(
            ForeignTransferEntry(
                id="bad-rate",
                date="2024-12-20",
                time="",
                ref_no="R0",
                source_amount=Decimal("1000"),
                rate=Decimal("0"),
                submitted_amount=Decimal("0"),
            )
        )

        dashboard = await DashboardService(store).get_dashboard(now=fixed_now)

        assert dashboard.data_quality_warnings == ["bad-rate"]
        assert len(dashboard.recent_activity) == 1

    @pytest.mark.asyncio
    async def test_special_count_is_entry_count(self, fixed_now: datetime) -> None:
        """같은 사용자의 항목도 각각 집계"""
        store = MockHisaabStore()
        for idx in range(3):
            store.add_special_entry(
                SpecialBalanceEntry(
                    id=f"sp{idx}",
                    user_name="Ali" if idx < 2 else "Sara",
                    date="2024-12-19",
                    balance_type=BalanceType.ONLINE,
                    name_amount=Decimal("10"),
                    submitted_amount=Decimal("0"),
                )
            )

        dashboard = await DashboardService(store).get_dashboard(now=fixed_now)

        assert dashboard.special_user_count == 3
