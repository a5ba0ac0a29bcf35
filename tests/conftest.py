"""
pytest 공통 fixture 정의

설정 파일, 샘플 원장 데이터, Mock 저장소
"""

import logging
import tempfile
from datetime import datetime, timezone
from decimal import Decimal
from pathlib import Path

import pytest

from adapters.mock.store import MockHisaabStore
from core.config.loader import Settings
from core.ledger.models import (
    BankAccount,
    ForeignTransferEntry,
    LedgerEntry,
    SpecialBalanceEntry,
    Trader,
)
from core.types import BalanceType, ReferenceType


@pytest.fixture
def temp_dir() -> Path:
    """OS 독립적인 임시 디렉토리 생성"""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def temp_config_file(temp_dir: Path) -> Path:
    """테스트용 hisaab.yaml 파일 생성"""
    config_content = """# 테스트용 hisaab.yaml
store:
  base_url: "http://store.test/api/"
  auth_token: "test_token_abc"
  timeout_sec: 10

display:
  activity_limit: 6
  utc_offset_hours: 3
  foreign_currency: "SAR"
  local_currency: "PKR"
"""
    config_path = temp_dir / "hisaab.yaml"
    config_path.write_text(config_content, encoding="utf-8")
    return config_path


@pytest.fixture(autouse=True)
def reset_settings():
    """테스트 간 Settings 싱글턴 초기화"""
    Settings.reset()
    yield
    Settings.reset()


@pytest.fixture
def restore_root_logger():
    """루트 로거 핸들러 복원"""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)


# -------------------------------------------------------------------------
# 샘플 데이터
# -------------------------------------------------------------------------

@pytest.fixture
def fixed_now() -> datetime:
    """고정 기준 시각 (2024-12-20 12:00 UTC)"""
    return datetime(2024, 12, 20, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def sample_ledger_entries() -> list[LedgerEntry]:
    """세 날짜의 원장 항목 (누적 잔액 -100000, 50000, 350000)"""
    return [
        LedgerEntry(
            id="le1",
            date="2024-12-18",
            reference_type=ReferenceType.ONLINE,
            amount_added=Decimal("0"),
            amount_withdrawn=Decimal("100000"),
        ),
        LedgerEntry(
            id="le2",
            date="2024-12-19",
            reference_type=ReferenceType.CASH,
            amount_added=Decimal("300000"),
            amount_withdrawn=Decimal("150000"),
        ),
        LedgerEntry(
            id="le3",
            date="2024-12-20",
            reference_type=ReferenceType.ONLINE,
            amount_added=Decimal("500000"),
            amount_withdrawn=Decimal("200000"),
        ),
    ]


@pytest.fixture
def sample_foreign_entry() -> ForeignTransferEntry:
    """샘플 해외 송금 (500000 / 75.50, 제출 6000)"""
    return ForeignTransferEntry(
        id="ft1",
        date="2024-12-20",
        time="10:00",
        ref_no="REF001",
        source_amount=Decimal("500000"),
        rate=Decimal("75.50"),
        submitted_amount=Decimal("6000"),
    )


@pytest.fixture
def sample_special_entry() -> SpecialBalanceEntry:
    """샘플 특수 잔액 (95000 - 110000 = -15000)"""
    return SpecialBalanceEntry(
        id="sp1",
        user_name="Ali",
        date="2024-12-19",
        balance_type=BalanceType.CASH,
        name_amount=Decimal("95000"),
        submitted_amount=Decimal("110000"),
    )


@pytest.fixture
def sample_trader(sample_ledger_entries: list[LedgerEntry]) -> Trader:
    """은행 두 개를 가진 트레이더 (HBL: 350000, MCB: 항목 없음)"""
    return Trader(
        id="tr1",
        name="Ahmed Traders",
        short_name="AHMED",
        color="#3366ff",
        banks=(
            BankAccount(
                id="bk1",
                name="HBL",
                code="HBL-01",
                entries=tuple(sample_ledger_entries),
            ),
            BankAccount(id="bk2", name="MCB", code="MCB-01"),
        ),
    )


@pytest.fixture
def mock_store(
    sample_foreign_entry: ForeignTransferEntry,
    sample_special_entry: SpecialBalanceEntry,
    sample_trader: Trader,
) -> MockHisaabStore:
    """샘플 데이터가 채워진 Mock 저장소"""
    store = MockHisaabStore()
    store.add_foreign_transfer(sample_foreign_entry)
    store.add_special_entry(sample_special_entry)
    store.add_trader(sample_trader)
    return store
