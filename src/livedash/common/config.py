"""
Configuration management for the Live Data Dashboard.

Loads configuration from config.yaml (or environment variables as override).
"""
from __future__ import annotations

import copy
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv

log = logging.getLogger(__name__)

# Load .env file if it exists (for local development)
load_dotenv()

VALID_VIEWS = ("crypto", "weather")

# Default configuration
DEFAULT_CONFIG = {
    'dashboard': {
        'default_view': 'crypto',
        'refresh_interval_seconds': 60,
        'animation_duration_ms': 1500,
        'frame_rate': 60,
        'loading_text': 'Loading...',
    },
    'api': {
        'timeout_seconds': 10,
        'coingecko': {
            'base_url': 'https://api.coingecko.com/api/v3',
        },
        'open_meteo': {
            'base_url': 'https://api.open-meteo.com/v1',
        },
    },
    'crypto': {
        'assets': [
            {'id': 'bitcoin', 'color': '#f7931a'},
            {'id': 'ethereum', 'color': '#627eea'},
            {'id': 'dogecoin', 'color': '#c2a633'},
        ],
    },
    'weather': {
        'cities': [
            {'name': 'Berlin', 'latitude': 52.52, 'longitude': 13.405},
            {'name': 'London', 'latitude': 51.5074, 'longitude': -0.1278},
            {'name': 'New York', 'latitude': 40.7128, 'longitude': -74.0060},
        ],
    },
}


class Config:
    """
    Configuration singleton for the dashboard.

    Loads configuration from:
    1. config.yaml in the working directory (if exists)
    2. Environment variables (as override)
    3. Defaults (as fallback)

    Example:
        >>> config = Config()
        >>> config.get_refresh_interval()
        60
        >>> config.get_api_base_url('coingecko')
        'https://api.coingecko.com/api/v3'
    """

    _instance: Optional['Config'] = None
    _config: Dict[str, Any] = {}

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._load_config()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Drop the cached instance so the next Config() reloads."""
        cls._instance = None

    def _load_config(self) -> None:
        """Load configuration from config.yaml and environment."""
        # Start with defaults
        self._config = copy.deepcopy(DEFAULT_CONFIG)

        config_path = Path(os.getenv('LIVEDASH_CONFIG', 'config.yaml'))
        if config_path.exists():
            try:
                with open(config_path, 'r') as f:
                    yaml_config = yaml.safe_load(f)
                    if yaml_config:
                        self._merge_config(yaml_config)
                        log.info(f"Loaded configuration from {config_path}")
            except (OSError, yaml.YAMLError) as e:
                log.warning(f"Failed to load {config_path}: {e}. Using defaults.")
        else:
            log.info(f"No {config_path} found. Using defaults and environment variables.")

        self._load_env_overrides()

    def _merge_config(self, new_config: Dict[str, Any]) -> None:
        """Recursively merge new config into existing config."""
        def merge(base: Dict, update: Dict) -> Dict:
            for key, value in update.items():
                if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                    merge(base[key], value)
                else:
                    base[key] = value
            return base

        merge(self._config, new_config)

    def _load_env_overrides(self) -> None:
        """Load overrides from environment variables."""
        dashboard = self._config['dashboard']
        api = self._config['api']

        if view := os.getenv('LIVEDASH_DEFAULT_VIEW'):
            dashboard['default_view'] = view.strip().lower()

        if interval := os.getenv('LIVEDASH_REFRESH_INTERVAL'):
            dashboard['refresh_interval_seconds'] = _to_number(interval, 'LIVEDASH_REFRESH_INTERVAL')

        if duration := os.getenv('LIVEDASH_ANIMATION_MS'):
            dashboard['animation_duration_ms'] = _to_number(duration, 'LIVEDASH_ANIMATION_MS')

        if timeout := os.getenv('LIVEDASH_HTTP_TIMEOUT'):
            api['timeout_seconds'] = _to_number(timeout, 'LIVEDASH_HTTP_TIMEOUT')

        # API endpoints
        if cg_url := os.getenv('COINGECKO_BASE_URL'):
            api['coingecko']['base_url'] = cg_url
        if om_url := os.getenv('OPEN_METEO_BASE_URL'):
            api['open_meteo']['base_url'] = om_url

    def get(self, key_path: str, default: Any = None) -> Any:
        """
        Get configuration value by dot-notation path.

        Example:
            >>> config.get('dashboard.loading_text')
            'Loading...'
        """
        keys = key_path.split('.')
        value = self._config

        for key in keys:
            if isinstance(value, dict) and key in value:
                value = value[key]
            else:
                return default

        return value

    def get_default_view(self) -> str:
        """Get the view shown on first load."""
        return self.get('dashboard.default_view', 'crypto')

    def get_refresh_interval(self) -> float:
        """Get the automatic refresh interval in seconds."""
        return self.get('dashboard.refresh_interval_seconds', 60)

    def get_animation_duration_ms(self) -> float:
        """Get the card value animation duration in milliseconds."""
        return self.get('dashboard.animation_duration_ms', 1500)

    def get_frame_rate(self) -> int:
        """Get animation frames per second."""
        return self.get('dashboard.frame_rate', 60)

    def get_loading_text(self) -> str:
        return self.get('dashboard.loading_text', 'Loading...')

    def get_api_base_url(self, service: str) -> Optional[str]:
        """Get API base URL for a service ('coingecko' or 'open_meteo')."""
        return self.get(f'api.{service}.base_url')

    def get_timeout(self) -> float:
        """Get HTTP request timeout in seconds."""
        return self.get('api.timeout_seconds', 10)

    def get_assets(self) -> list[dict]:
        """
        Get the tracked crypto assets.

        Returns:
            List of dicts with 'id' and 'color' keys, in display order
        """
        return list(self.get('crypto.assets', []))

    def get_cities(self) -> list[dict]:
        """
        Get the tracked weather cities.

        Returns:
            List of dicts with 'name', 'latitude', 'longitude', in display order
        """
        return list(self.get('weather.cities', []))

    def validate(self) -> list[str]:
        """
        Validate configuration.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        if self.get_default_view() not in VALID_VIEWS:
            errors.append(
                f"Invalid default view {self.get_default_view()!r} (expected one of {', '.join(VALID_VIEWS)})"
            )

        interval = self.get_refresh_interval()
        if not isinstance(interval, (int, float)) or interval <= 0:
            errors.append(f"Refresh interval must be a positive number, got {interval!r}")

        duration = self.get_animation_duration_ms()
        if not isinstance(duration, (int, float)) or duration < 0:
            errors.append(f"Animation duration must be >= 0 ms, got {duration!r}")

        for service in ('coingecko', 'open_meteo'):
            if not self.get_api_base_url(service):
                errors.append(f"No base URL configured for {service}")

        if not self.get_assets():
            errors.append("No crypto assets configured")
        if not self.get_cities():
            errors.append("No weather cities configured")

        return errors

    def __repr__(self) -> str:
        return f"Config({self._config})"


def _to_number(raw: str, name: str) -> float:
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"{name} must be numeric, got {raw!r}") from None
    return int(value) if value.is_integer() else value


# Convenience functions for common operations
def get_config() -> Config:
    """Get the configuration singleton."""
    return Config()
