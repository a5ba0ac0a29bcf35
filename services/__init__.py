"""
서비스 레이어

원장 저장소에서 스냅샷을 조회하고 엔진으로 파생 잔액을 계산하여
응답 스키마로 반환.
"""

from services.book_service import LedgerBookService
from services.dashboard_service import DashboardService
from services.trader_service import TraderService

__all__ = [
    "DashboardService",
    "LedgerBookService",
    "TraderService",
]
