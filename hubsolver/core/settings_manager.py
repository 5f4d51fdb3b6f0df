"""
Settings Manager
Handles persistent solver settings in the user home directory
"""
import json
import logging
import os
from pathlib import Path
from typing import Any, Dict
import threading

logger = logging.getLogger(__name__)

DESKTOP_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)
LEGACY_DESKTOP_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
)
MOBILE_USER_AGENT = (
    "Mozilla/5.0 (Linux; Android 10; K) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/124.0.0.0 Mobile Safari/537.36"
)
SITE_REFERER = "https://hdhub4u.fo/"


class SettingsManager:
    """Manages solver settings with persistence"""

    HEADER_KEYS = (
        "hblinks_headers",
        "movie_page_headers",
        "hubcdn_headers",
        "hubdrive_headers",
    )

    DEFAULT_SETTINGS = {
        # Transport
        "request_timeout_seconds": 15.0,
        "final_link_timeout_seconds": 20.0,

        # Logging
        "log_level": "INFO",

        # Per-solver header sets
        "hblinks_headers": {
            "User-Agent": LEGACY_DESKTOP_USER_AGENT,
        },
        "movie_page_headers": {
            "User-Agent": MOBILE_USER_AGENT,
            "Referer": SITE_REFERER,
        },
        "hubcdn_headers": {
            "User-Agent": MOBILE_USER_AGENT,
        },
        "hubdrive_headers": {
            "User-Agent": DESKTOP_USER_AGENT,
            "Referer": SITE_REFERER,
        },
    }

    def __init__(self, settings_dir=None):
        if settings_dir is None:
            data_dir = str(os.environ.get("HUBSOLVER_DATA_DIR", "") or "").strip()
            settings_dir = Path(data_dir).expanduser() if data_dir else (Path.home() / ".hubsolver")
        self.settings_dir = Path(settings_dir)
        self.settings_file = self.settings_dir / "settings.json"

        self._lock = threading.RLock()
        self._settings: Dict[str, Any] = {}
        self._load()

    def _defaults(self) -> Dict[str, Any]:
        out = dict(self.DEFAULT_SETTINGS)
        for key in self.HEADER_KEYS:
            out[key] = dict(self.DEFAULT_SETTINGS[key])
        return out

    def _load(self):
        """Load settings from file"""
        with self._lock:
            self._settings = self._defaults()
            if not self.settings_file.exists():
                return
            try:
                with open(self.settings_file, 'r') as f:
                    loaded = json.load(f)
            except (OSError, ValueError) as e:
                logger.warning("Error loading settings from %s: %s", self.settings_file, e)
                return
            if not isinstance(loaded, dict):
                logger.warning("Ignoring settings file %s: expected a JSON object", self.settings_file)
                return
            self._settings.update(loaded)
            # Header overrides merge key-wise so a partial override keeps the default UA.
            for key in self.HEADER_KEYS:
                override = loaded.get(key)
                if isinstance(override, dict):
                    self._settings[key] = {**self.DEFAULT_SETTINGS[key], **override}
                else:
                    self._settings[key] = dict(self.DEFAULT_SETTINGS[key])

    def _save(self):
        """Save settings to file"""
        with self._lock:
            try:
                self.settings_dir.mkdir(parents=True, exist_ok=True)
                with open(self.settings_file, 'w') as f:
                    json.dump(self._settings, f, indent=2)
            except OSError as e:
                logger.error("Error saving settings to %s: %s", self.settings_file, e)

    def get(self, key: str, default=None) -> Any:
        """Get a setting value"""
        with self._lock:
            value = self._settings.get(key, default)
            if isinstance(value, dict):
                return dict(value)
            return value

    def set(self, key: str, value: Any):
        """Set a setting value and save"""
        with self._lock:
            self._settings[str(key)] = value
            self._save()

    def update(self, settings_dict: Dict[str, Any]):
        """Update multiple settings at once"""
        with self._lock:
            self._settings.update(dict(settings_dict or {}))
            self._save()

    def get_all(self) -> Dict[str, Any]:
        """Get all settings"""
        with self._lock:
            return self._settings.copy()

    def reset(self):
        """Reset to default settings"""
        with self._lock:
            self._settings = self._defaults()
            self._save()
