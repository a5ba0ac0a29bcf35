"""
타입 정의 모듈

Enum 등 핵심 타입 정의
모든 Enum은 str을 상속하여 문자열 직렬화 가능
"""

from enum import Enum


class EntryCategory(str, Enum):
    """장부 종류"""

    FOREIGN_TRANSFER = "FOREIGN_TRANSFER"  # 해외 송금 (PKR → SAR)
    SPECIAL = "SPECIAL"  # 특수 사용자 잔액
    BANK_LEDGER = "BANK_LEDGER"  # 트레이더 → 은행 원장


class BalanceType(str, Enum):
    """특수 잔액 유형"""

    ONLINE = "Online"
    CASH = "Cash"


class ReferenceType(str, Enum):
    """은행 원장 거래 참조 유형"""

    ONLINE = "Online"
    CASH = "Cash"


class ActivityKind(str, Enum):
    """활동 피드 항목 방향"""

    CREDIT = "credit"
    DEBIT = "debit"


class TimestampSource(str, Enum):
    """타임스탬프 결정 근거

    TimestampResolver가 어떤 규칙으로 시각을 결정했는지 기록.
    """

    CREATED_AT = "CREATED_AT"  # 명시적 생성 시각
    DATE_TIME = "DATE_TIME"  # 날짜 + 시각 문자열
    DATE_ONLY = "DATE_ONLY"  # 날짜만 (로컬 자정)
    SENTINEL = "SENTINEL"  # 파싱 실패 (가장 오래된 시각으로 정렬)
