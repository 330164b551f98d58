"""Configuration management for the SkyBox CLI."""

import json
import os
import shutil
from pathlib import Path
from typing import Optional

from common.constants import SEARCH_DEBOUNCE_MS
from common.logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_CONFIG_PATH = Path.home() / '.skybox' / 'config.json'


class Config:
    """Manages CLI configuration stored in JSON file."""

    DEFAULT_CONFIG = {
        "server_host": os.environ.get("SKYBOX_SERVER_HOST", "localhost"),
        "server_port": int(os.environ.get("SKYBOX_SERVER_PORT", "8000")),
        "timeout": 30,
        "max_retries": 3,
        "retry_backoff_multiplier": 2,
        "search_debounce_ms": SEARCH_DEBOUNCE_MS,
    }

    def __init__(self, config_path: Path = DEFAULT_CONFIG_PATH):
        """
        Initialize configuration manager.

        Args:
            config_path: Path to config JSON file (typically ~/.skybox/config.json)
        """
        self.config_path = config_path
        self.data = self._load()

    def _load(self) -> dict:
        """
        Load configuration from file, creating defaults if necessary.

        Returns:
            Configuration dictionary
        """
        self.config_path.parent.mkdir(parents=True, exist_ok=True)

        if not self.config_path.exists():
            config = self.DEFAULT_CONFIG.copy()
            self._write(config)
            return config

        try:
            with open(self.config_path, 'r') as f:
                data = json.load(f)
        except (json.JSONDecodeError, IOError) as e:
            backup_path = self.config_path.with_suffix('.json.bak')
            logger.warning(f"Unreadable config {self.config_path} ({e}), backing up to {backup_path}")
            try:
                shutil.copy(self.config_path, backup_path)
            except IOError as copy_error:
                logger.warning(f"Could not back up config: {copy_error}")
            return self.DEFAULT_CONFIG.copy()

        config = self.DEFAULT_CONFIG.copy()
        config.update(data)
        return config

    def _write(self, data: dict) -> None:
        try:
            with open(self.config_path, 'w') as f:
                json.dump(data, f, indent=2)
        except IOError as e:
            logger.warning(f"Could not write config {self.config_path}: {e}")

    def save(self) -> None:
        """Save current configuration to file."""
        self._write(self.data)

    def get_session_token(self) -> Optional[str]:
        """
        Get stored session secret.

        Returns:
            Session secret or None if not signed in
        """
        return self.data.get('session_token')

    def set_session_token(self, token: str) -> None:
        """
        Set session secret and save to file.

        Args:
            token: Session secret returned by /auth/verify
        """
        self.data['session_token'] = token
        self.save()

    def clear_session_token(self) -> None:
        """Forget the stored session and save to file."""
        self.data.pop('session_token', None)
        self.save()

    def get_base_url(self) -> str:
        """
        Get server base URL.

        Returns:
            Base URL string (e.g., "http://localhost:8000")
        """
        host = self.data.get('server_host', 'localhost')
        port = self.data.get('server_port', 8000)
        return f"http://{host}:{port}"

    def get_timeout(self) -> int:
        """
        Get request timeout in seconds.
        """
        return self.data.get('timeout', 30)

    def get_retry_config(self) -> dict:
        """
        Get retry configuration.

        Returns:
            Dictionary with 'max_retries' and 'retry_backoff_multiplier'
        """
        return {
            'max_retries': self.data.get('max_retries', 3),
            'retry_backoff_multiplier': self.data.get('retry_backoff_multiplier', 2),
        }

    def get_search_debounce_seconds(self) -> float:
        """Quiet period after the last keystroke before a search is sent."""
        return self.data.get('search_debounce_ms', SEARCH_DEBOUNCE_MS) / 1000.0
