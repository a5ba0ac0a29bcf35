"""
Hisaab API 응답 매퍼

REST 응답(JSON dict) ↔ 도메인 모델 변환.
엔진 입력 정제 계층 역할:
- MongoDB `_id`를 `id`로 정규화
- 숫자가 아닌 금액은 0으로 처리
- 알 수 없는 Online/Cash 값은 Online으로 처리
- id가 없는 항목은 InvalidEntryError
"""

import logging
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, TypeVar

from adapters.models import LedgerPage
from core.ledger.exceptions import InvalidEntryError
from core.ledger.models import (
    BankAccount,
    ForeignTransferEntry,
    LedgerEntry,
    SpecialBalanceEntry,
    Trader,
)
from core.types import BalanceType, ReferenceType
from core.utils.timezone import utc_from_timestamp_ms

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Enum)


# =========================================================================
# 공통 변환
# =========================================================================

def normalize_id(data: dict[str, Any]) -> str:
    """`id` 또는 MongoDB `_id` 추출

    `_id`는 문자열 또는 {"$oid": "..."} 형태 허용.
    """
    raw = data.get("id") or data.get("_id")
    if isinstance(raw, dict):
        raw = raw.get("$oid")
    return str(raw) if raw else ""


def _require_id(data: dict[str, Any], kind: str) -> str:
    entry_id = normalize_id(data)
    if not entry_id:
        raise InvalidEntryError(f"{kind} 응답에 id가 없습니다")
    return entry_id


def to_decimal(value: Any) -> Decimal:
    """금액 변환 (None, 빈 문자열, 숫자가 아닌 값, NaN/Infinity → 0)"""
    if value is None or value == "" or isinstance(value, bool):
        return Decimal("0")
    try:
        result = Decimal(str(value))
    except (InvalidOperation, ValueError):
        logger.debug(f"숫자가 아닌 금액 0으로 처리: {value!r}")
        return Decimal("0")
    if not result.is_finite():
        return Decimal("0")
    return result


def _to_optional_decimal(value: Any) -> Decimal | None:
    if value is None:
        return None
    return to_decimal(value)


def _to_text(value: Any) -> str:
    return "" if value is None else str(value)


def _to_created_at(value: Any) -> str | None:
    if value is None or value == "":
        return None
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            return utc_from_timestamp_ms(value).isoformat()
        except (OverflowError, OSError, ValueError):
            return None
    return str(value)


def _to_enum(value: Any, enum_cls: type[E], default: E) -> E:
    try:
        return enum_cls(value)
    except ValueError:
        logger.debug(f"알 수 없는 {enum_cls.__name__} 값, {default.value} 사용: {value!r}")
        return default


def _wire_number(value: Decimal) -> float:
    # 저장소는 JS number로 저장
    return float(value)


# =========================================================================
# 응답 → 도메인
# =========================================================================

def foreign_transfer_from_api(data: dict[str, Any]) -> ForeignTransferEntry:
    """해외 송금 응답 변환"""
    return ForeignTransferEntry(
        id=_require_id(data, "해외 송금"),
        date=_to_text(data.get("date")),
        time=_to_text(data.get("time")),
        ref_no=_to_text(data.get("refNo")),
        source_amount=to_decimal(data.get("pkrAmount")),
        rate=to_decimal(data.get("riyalRate")),
        submitted_amount=to_decimal(data.get("submittedSar")),
        reference2=_to_text(data.get("reference2")),
        created_at=_to_created_at(data.get("createdAt")),
    )


def special_entry_from_api(data: dict[str, Any]) -> SpecialBalanceEntry:
    """특수 잔액 응답 변환"""
    return SpecialBalanceEntry(
        id=_require_id(data, "특수 잔액"),
        user_name=_to_text(data.get("userName")),
        date=_to_text(data.get("date")),
        balance_type=_to_enum(data.get("balanceType"), BalanceType, BalanceType.ONLINE),
        name_amount=to_decimal(data.get("nameRupees")),
        submitted_amount=to_decimal(data.get("submittedRupees")),
        created_at=_to_created_at(data.get("createdAt")),
    )


def ledger_entry_from_api(data: dict[str, Any]) -> LedgerEntry:
    """원장 항목 응답 변환"""
    return LedgerEntry(
        id=_require_id(data, "원장 항목"),
        date=_to_text(data.get("date")),
        reference_type=_to_enum(
            data.get("referenceType"), ReferenceType, ReferenceType.ONLINE
        ),
        amount_added=to_decimal(data.get("amountAdded")),
        amount_withdrawn=to_decimal(data.get("amountWithdrawn")),
        created_at=_to_created_at(data.get("createdAt")),
    )


def bank_from_api(data: dict[str, Any]) -> BankAccount:
    """은행 계좌 응답 변환 (entries 포함 시 함께 변환)"""
    entries = data.get("entries") or []
    return BankAccount(
        id=_require_id(data, "은행 계좌"),
        name=_to_text(data.get("name")),
        code=_to_text(data.get("code")),
        entries=tuple(ledger_entry_from_api(e) for e in entries),
    )


def trader_from_api(data: dict[str, Any]) -> Trader:
    """트레이더 응답 변환 (banks 포함 시 함께 변환)"""
    banks = data.get("banks") or []
    return Trader(
        id=_require_id(data, "트레이더"),
        name=_to_text(data.get("name")),
        short_name=_to_text(data.get("shortName")),
        color=_to_text(data.get("color")),
        banks=tuple(bank_from_api(b) for b in banks),
    )


def ledger_page_from_api(payload: dict[str, Any]) -> LedgerPage:
    """원장 목록 응답 변환 ({"data": [...], "totalBalance": n})"""
    entries = payload.get("data") or []
    return LedgerPage(
        entries=tuple(ledger_entry_from_api(e) for e in entries),
        reported_total=_to_optional_decimal(payload.get("totalBalance")),
    )


# =========================================================================
# 도메인 → 요청 본문
# =========================================================================

def foreign_transfer_to_api(entry: ForeignTransferEntry) -> dict[str, Any]:
    """해외 송금 요청 본문"""
    return {
        "date": entry.date,
        "time": entry.time,
        "refNo": entry.ref_no,
        "pkrAmount": _wire_number(entry.source_amount),
        "riyalRate": _wire_number(entry.rate),
        "submittedSar": _wire_number(entry.submitted_amount),
        "reference2": entry.reference2,
    }


def special_entry_to_api(entry: SpecialBalanceEntry) -> dict[str, Any]:
    """특수 잔액 요청 본문"""
    return {
        "userName": entry.user_name,
        "date": entry.date,
        "balanceType": entry.balance_type.value,
        "nameRupees": _wire_number(entry.name_amount),
        "submittedRupees": _wire_number(entry.submitted_amount),
    }


def trader_to_api(trader: Trader) -> dict[str, Any]:
    """트레이더 요청 본문 (은행은 별도 경로로 생성)"""
    return {
        "name": trader.name,
        "shortName": trader.short_name,
        "color": trader.color,
    }


def bank_to_api(bank: BankAccount) -> dict[str, Any]:
    """은행 계좌 요청 본문"""
    return {"name": bank.name, "code": bank.code}


def ledger_entry_to_api(entry: LedgerEntry) -> dict[str, Any]:
    """원장 항목 요청 본문"""
    return {
        "date": entry.date,
        "referenceType": entry.reference_type.value,
        "amountAdded": _wire_number(entry.amount_added),
        "amountWithdrawn": _wire_number(entry.amount_withdrawn),
    }
