"""
core/config/loader.py 테스트

hisaab.yaml 로드, 검증, Settings 싱글턴 테스트
"""

from datetime import timedelta
from pathlib import Path

import pytest

from core.config.loader import (
    ConfigLoadError,
    DisplayConfig,
    Settings,
    StoreConfig,
    default_config,
    get_settings,
    load_config,
)
from core.constants import Defaults


class TestConfigDataclasses:
    """설정 데이터클래스 테스트"""

    def test_store_frozen(self) -> None:
        """불변성 확인"""
        config = StoreConfig(base_url="http://x", auth_token="", timeout_sec=1.0)

        with pytest.raises(AttributeError):
            config.base_url = "http://y"  # type: ignore

    def test_display_timezone(self) -> None:
        display = DisplayConfig(
            activity_limit=4,
            utc_offset_hours=5,
            foreign_currency="SAR",
            local_currency="PKR",
        )

        assert display.tz.utcoffset(None) == timedelta(hours=5)


class TestLoadConfig:
    """load_config 테스트"""

    def test_load_valid(self, temp_config_file: Path) -> None:
        """유효한 파일 로드"""
        config = load_config(temp_config_file)

        assert config.store.base_url == "http://store.test/api"
        assert config.store.auth_token == "test_token_abc"
        assert config.store.timeout_sec == 10.0
        assert config.display.activity_limit == 6
        assert config.display.utc_offset_hours == 3.0

    def test_missing_sections_use_defaults(self, temp_dir: Path) -> None:
        """섹션이 없으면 기본값"""
        path = temp_dir / "partial.yaml"
        path.write_text("store:\n  auth_token: abc\n", encoding="utf-8")

        config = load_config(path)

        assert config.store.base_url == Defaults.STORE_BASE_URL
        assert config.display.activity_limit == Defaults.ACTIVITY_LIMIT
        assert config.display.foreign_currency == "SAR"

    def test_file_not_found(self, temp_dir: Path) -> None:
        with pytest.raises(ConfigLoadError, match="찾을 수 없습니다"):
            load_config(temp_dir / "missing.yaml")

    def test_empty_file(self, temp_dir: Path) -> None:
        path = temp_dir / "empty.yaml"
        path.write_text("", encoding="utf-8")

        with pytest.raises(ConfigLoadError, match="비어 있습니다"):
            load_config(path)

    def test_invalid_yaml(self, temp_dir: Path) -> None:
        path = temp_dir / "bad.yaml"
        path.write_text("store: [unclosed\n", encoding="utf-8")

        with pytest.raises(ConfigLoadError, match="파싱 실패"):
            load_config(path)

    def test_top_level_not_mapping(self, temp_dir: Path) -> None:
        path = temp_dir / "list.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")

        with pytest.raises(ConfigLoadError):
            load_config(path)

    @pytest.mark.parametrize(
        "content",
        [
            "store:\n  timeout_sec: 0\n",
            "store:\n  timeout_sec: abc\n",
            "display:\n  activity_limit: -1\n",
            "display:\n  utc_offset_hours: 24\n",
            "display: 5\n",
        ],
    )
    def test_invalid_values(self, temp_dir: Path, content: str) -> None:
        path = temp_dir / "invalid.yaml"
        path.write_text(content, encoding="utf-8")

        with pytest.raises(ConfigLoadError):
            load_config(path)

    def test_default_config(self) -> None:
        config = default_config()

        assert config.display.activity_limit == 4
        assert config.display.local_currency == "PKR"


class TestSettings:
    """Settings 싱글턴 테스트"""

    def test_singleton(self, temp_config_file: Path) -> None:
        first = get_settings(temp_config_file)
        second = get_settings()

        assert first is second
        assert second.store.auth_token == "test_token_abc"

    def test_reset(self, temp_config_file: Path, temp_dir: Path) -> None:
        get_settings(temp_config_file)
        Settings.reset()

        other = temp_dir / "other.yaml"
        other.write_text("display:\n  activity_limit: 2\n", encoding="utf-8")

        assert get_settings(other).display.activity_limit == 2
