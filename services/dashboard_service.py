"""
Dashboard 서비스

세 장부를 동시에 조회하여 건수, 최근 활동, 데이터 품질 경고를 구성.
출처 하나가 실패해도 해당 출처만 빈 목록으로 대체하고 나머지는 계속 표시.
"""

import asyncio
import logging
from datetime import datetime
from typing import Any

from adapters.interfaces import IHisaabStore
from core.config.loader import DisplayConfig, default_config
from core.ledger.activity import merge_activity
from core.ledger.formula import is_rate_computable
from services.models import ActivityItemResponse, DashboardResponse

logger = logging.getLogger(__name__)

SOURCE_NAMES = ("foreign", "special", "traders")


class DashboardService:
    """Dashboard 서비스

    Args:
        store: 원장 저장소
        display: 표시 설정 (None이면 기본값)
    """

    def __init__(self, store: IHisaabStore, display: DisplayConfig | None = None):
        self.store = store
        self.display = display or default_config().display

    async def _fetch_all(self) -> tuple[dict[str, list[Any]], list[str]]:
        """세 출처 동시 조회 (실패한 출처는 빈 목록)"""
        results = await asyncio.gather(
            self.store.list_foreign_transfers(),
            self.store.list_special_entries(),
            self.store.list_traders(),
            return_exceptions=True,
        )

        fetched: dict[str, list[Any]] = {}
        unavailable: list[str] = []
        for name, result in zip(SOURCE_NAMES, results):
            if isinstance(result, BaseException):
                if not isinstance(result, Exception):
                    raise result
                logger.warning(f"{name} 조회 실패, 빈 목록으로 대체: {result}")
                fetched[name] = []
                unavailable.append(name)
            else:
                fetched[name] = list(result)
        return fetched, unavailable

    async def get_dashboard(
        self,
        limit: int | None = None,
        now: datetime | None = None,
    ) -> DashboardResponse:
        """대시보드 조회

        Args:
            limit: 최근 활동 최대 개수 (None이면 설정값)
            now: 상대 시각 기준 (None이면 현재 UTC)

        Returns:
            DashboardResponse
        """
        fetched, unavailable = await self._fetch_all()
        foreign = fetched["foreign"]
        special = fetched["special"]
        traders = fetched["traders"]

        warnings = [e.id for e in foreign if not is_rate_computable(e.rate)]
        for entry_id in warnings:
            logger.warning(f"환율이 유효하지 않은 해외 송금 항목: {entry_id}")

        feed = merge_activity(
            foreign,
            special,
            traders,
            limit=self.display.activity_limit if limit is None else limit,
            now=now,
            tz=self.display.tz,
            foreign_currency=self.display.foreign_currency,
            local_currency=self.display.local_currency,
        )

        return DashboardResponse(
            foreign_entry_count=len(foreign),
            active_trader_count=len(traders),
            special_user_count=len(special),
            recent_activity=[ActivityItemResponse.from_item(item) for item in feed],
            data_quality_warnings=warnings,
            unavailable_sources=unavailable,
        )
