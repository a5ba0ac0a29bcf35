"""
하드코딩 상수 - 변경될 일이 거의 없는 고정값

중요: 경로는 반드시 pathlib.Path 사용 (Windows/Linux 크로스 플랫폼)
"""

from pathlib import Path


# 프로젝트 루트 (이 파일 기준 2단계 상위: core/constants.py → hisaab/)
PROJECT_ROOT: Path = Path(__file__).resolve().parent.parent


class StoreEndpoints:
    """원장 저장소 REST 경로 (고정값)

    ledger 경로는 trader_id, bank_id 포맷 필요.
    """

    FOREIGN_TRANSFERS: str = "/saudi"
    SPECIAL_ENTRIES: str = "/special"
    TRADERS: str = "/traders"
    BANKS: str = "/traders/{trader_id}/banks"
    LEDGER: str = "/traders/{trader_id}/banks/{bank_id}/ledger"


class Defaults:
    """기본값 상수"""

    STORE_BASE_URL: str = "http://localhost:5000/api"
    STORE_TIMEOUT_SEC: float = 30.0

    ACTIVITY_LIMIT: int = 4  # 대시보드 최근 활동 개수
    UTC_OFFSET_HOURS: int = 5  # 날짜만 있는 항목의 로컬 자정 기준 (PKT)

    FOREIGN_CURRENCY: str = "SAR"
    LOCAL_CURRENCY: str = "PKR"

    TRADER_SHORT_NAME_MAX: int = 10


class Paths:
    """프로젝트 경로 상수 (pathlib 사용 - OS 독립적)"""

    # 디렉토리
    CONFIG_DIR: Path = PROJECT_ROOT / "config"
    LOGS_DIR: Path = PROJECT_ROOT / "logs"

    # 설정 파일
    CONFIG_FILE: Path = CONFIG_DIR / "hisaab.yaml"


class DisplayPrecision:
    """표시용 반올림 자릿수"""

    MONEY_PLACES: int = 2
