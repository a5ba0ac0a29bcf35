"""
설정 로더

hisaab.yaml 로드 및 저장소/표시 설정 생성
"""

from dataclasses import dataclass
from datetime import timezone
from pathlib import Path
from typing import Any

import yaml

from core.constants import Defaults, Paths
from core.utils.timezone import local_timezone


@dataclass(frozen=True)
class StoreConfig:
    """원장 저장소 연결 설정

    auth_token은 Bearer 헤더로 전달 (비어 있으면 생략)
    """

    base_url: str
    auth_token: str
    timeout_sec: float


@dataclass(frozen=True)
class DisplayConfig:
    """표시 설정

    활동 피드 개수, 로컬 타임존, 장부별 통화
    """

    activity_limit: int
    utc_offset_hours: float
    foreign_currency: str
    local_currency: str

    @property
    def tz(self) -> timezone:
        """로컬 타임존"""
        return local_timezone(self.utc_offset_hours)


@dataclass(frozen=True)
class HisaabConfig:
    """전체 설정 (불변)"""

    store: StoreConfig
    display: DisplayConfig


class ConfigLoadError(Exception):
    """설정 로드 실패 예외"""

    pass


def _section(data: dict[str, Any], name: str) -> dict[str, Any]:
    section = data.get(name) or {}
    if not isinstance(section, dict):
        raise ConfigLoadError(f"hisaab.yaml의 '{name}' 섹션은 매핑이어야 합니다")
    return section


def _parse_store(data: dict[str, Any]) -> StoreConfig:
    section = _section(data, "store")

    base_url = str(section.get("base_url") or Defaults.STORE_BASE_URL).rstrip("/")
    auth_token = str(section.get("auth_token") or "")

    try:
        timeout_sec = float(section.get("timeout_sec", Defaults.STORE_TIMEOUT_SEC))
    except (TypeError, ValueError) as e:
        raise ConfigLoadError(f"store.timeout_sec 값이 숫자가 아닙니다: {e}") from e
    if timeout_sec <= 0:
        raise ConfigLoadError(f"store.timeout_sec은 0보다 커야 합니다: {timeout_sec}")

    return StoreConfig(base_url=base_url, auth_token=auth_token, timeout_sec=timeout_sec)


def _parse_display(data: dict[str, Any]) -> DisplayConfig:
    section = _section(data, "display")

    try:
        activity_limit = int(section.get("activity_limit", Defaults.ACTIVITY_LIMIT))
        utc_offset_hours = float(section.get("utc_offset_hours", Defaults.UTC_OFFSET_HOURS))
    except (TypeError, ValueError) as e:
        raise ConfigLoadError(f"display 설정 값이 숫자가 아닙니다: {e}") from e

    if activity_limit < 0:
        raise ConfigLoadError(f"display.activity_limit은 0 이상이어야 합니다: {activity_limit}")
    if not -24 < utc_offset_hours < 24:
        raise ConfigLoadError(
            f"display.utc_offset_hours 범위 초과 (-24 < x < 24): {utc_offset_hours}"
        )

    return DisplayConfig(
        activity_limit=activity_limit,
        utc_offset_hours=utc_offset_hours,
        foreign_currency=str(section.get("foreign_currency") or Defaults.FOREIGN_CURRENCY),
        local_currency=str(section.get("local_currency") or Defaults.LOCAL_CURRENCY),
    )


def load_config(path: Path | None = None) -> HisaabConfig:
    """hisaab.yaml 파일 로드

    Args:
        path: hisaab.yaml 경로 (None이면 기본 경로 사용)

    Returns:
        HisaabConfig 인스턴스

    Raises:
        ConfigLoadError: 파일이 없거나 형식이 잘못된 경우
    """
    if path is None:
        path = Paths.CONFIG_FILE

    if not path.exists():
        raise ConfigLoadError(f"hisaab.yaml 파일을 찾을 수 없습니다: {path}")

    try:
        content = path.read_text(encoding="utf-8")
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigLoadError(f"hisaab.yaml 파싱 실패: {e}") from e

    if data is None:
        raise ConfigLoadError("hisaab.yaml이 비어 있습니다")
    if not isinstance(data, dict):
        raise ConfigLoadError("hisaab.yaml 최상위는 매핑이어야 합니다")

    return HisaabConfig(store=_parse_store(data), display=_parse_display(data))


def default_config() -> HisaabConfig:
    """설정 파일 없이 기본값으로 생성"""
    return HisaabConfig(store=_parse_store({}), display=_parse_display({}))


class Settings:
    """애플리케이션 설정 (싱글턴 패턴)

    hisaab.yaml을 로드하고 관련 설정을 제공
    """

    _instance: "Settings | None" = None
    _config: HisaabConfig | None = None

    def __new__(cls, config_path: Path | None = None) -> "Settings":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self, config_path: Path | None = None) -> None:
        if self._config is None:
            type(self)._config = load_config(config_path)

    @property
    def config(self) -> HisaabConfig:
        """전체 설정"""
        assert self._config is not None
        return self._config

    @property
    def store(self) -> StoreConfig:
        """저장소 연결 설정"""
        return self.config.store

    @property
    def display(self) -> DisplayConfig:
        """표시 설정"""
        return self.config.display

    @classmethod
    def reset(cls) -> None:
        """싱글턴 인스턴스 초기화 (테스트용)"""
        cls._instance = None
        cls._config = None


def get_settings(config_path: Path | None = None) -> Settings:
    """Settings 인스턴스 반환

    Args:
        config_path: hisaab.yaml 경로 (None이면 기본 경로 사용)

    Returns:
        Settings 싱글턴 인스턴스
    """
    return Settings(config_path)
