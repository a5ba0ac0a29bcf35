"""
어댑터 공통 데이터 모델

저장소 응답 중 도메인 모델로 표현되지 않는 부가 정보.
모든 금액은 Decimal 타입 사용.
"""

from dataclasses import dataclass, field
from decimal import Decimal

from core.ledger.models import LedgerEntry


@dataclass(frozen=True)
class LedgerPage:
    """은행 원장 조회 결과

    Attributes:
        entries: 원장 항목 (저장소가 반환한 순서)
        reported_total: 저장소가 자체 계산한 잔액 (없으면 None)
    """

    entries: tuple[LedgerEntry, ...] = field(default_factory=tuple)
    reported_total: Decimal | None = None
