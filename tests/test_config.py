"""Tests for configuration loading."""
import pytest

from livedash.common.config import Config, get_config


class TestDefaults:
    def test_singleton(self):
        assert get_config() is get_config()

    def test_dashboard_defaults(self):
        config = get_config()
        assert config.get_default_view() == "crypto"
        assert config.get_refresh_interval() == 60
        assert config.get_animation_duration_ms() == 1500
        assert config.get_loading_text() == "Loading..."

    def test_api_defaults(self):
        config = get_config()
        assert config.get_api_base_url("coingecko") == "https://api.coingecko.com/api/v3"
        assert config.get_api_base_url("open_meteo") == "https://api.open-meteo.com/v1"
        assert config.get_api_base_url("unknown") is None

    def test_fixed_assets_and_cities(self):
        config = get_config()
        assert [a["id"] for a in config.get_assets()] == ["bitcoin", "ethereum", "dogecoin"]
        assert [c["name"] for c in config.get_cities()] == ["Berlin", "London", "New York"]

    def test_defaults_validate(self):
        assert get_config().validate() == []

    def test_get_missing_path(self):
        assert get_config().get("dashboard.nope.deeper", "fallback") == "fallback"


class TestOverrides:
    def test_yaml_merges_over_defaults(self, tmp_path):
        (tmp_path / "config.yaml").write_text(
            "dashboard:\n"
            "  refresh_interval_seconds: 30\n"
            "weather:\n"
            "  cities:\n"
            "    - {name: Paris, latitude: 48.85, longitude: 2.35}\n"
        )
        config = get_config()
        assert config.get_refresh_interval() == 30
        # Untouched siblings survive the merge
        assert config.get_animation_duration_ms() == 1500
        assert [c["name"] for c in config.get_cities()] == ["Paris"]

    def test_invalid_yaml_falls_back_to_defaults(self, tmp_path):
        (tmp_path / "config.yaml").write_text("dashboard: [unclosed\n")
        assert get_config().get_refresh_interval() == 60

    def test_env_overrides_yaml(self, tmp_path, monkeypatch):
        (tmp_path / "config.yaml").write_text("dashboard:\n  default_view: crypto\n")
        monkeypatch.setenv("LIVEDASH_DEFAULT_VIEW", "Weather")
        monkeypatch.setenv("LIVEDASH_REFRESH_INTERVAL", "15")
        monkeypatch.setenv("OPEN_METEO_BASE_URL", "http://localhost:9000/v1")
        config = get_config()
        assert config.get_default_view() == "weather"
        assert config.get_refresh_interval() == 15
        assert config.get_api_base_url("open_meteo") == "http://localhost:9000/v1"

    def test_non_numeric_env_rejected(self, monkeypatch):
        monkeypatch.setenv("LIVEDASH_HTTP_TIMEOUT", "soon")
        with pytest.raises(ValueError, match="LIVEDASH_HTTP_TIMEOUT"):
            Config()

    def test_validate_reports_problems(self, monkeypatch):
        monkeypatch.setenv("LIVEDASH_DEFAULT_VIEW", "stocks")
        monkeypatch.setenv("LIVEDASH_REFRESH_INTERVAL", "0")
        errors = get_config().validate()
        assert len(errors) == 2
        assert "stocks" in errors[0]
