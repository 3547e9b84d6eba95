"""
Configuration management utilities for Russian Audio Downloader.
"""

import os
from typing import Optional

from PyQt5.QtCore import QSettings


class AppConfig:
    """Configuration manager for the Russian Audio Downloader application."""

    # Application constants
    APP_NAME = "Russian Audio Downloader"
    APP_VERSION = "0.2.0"
    ORGANIZATION = "RussianAudioDownloader"
    APP_IDENTIFIER = "RussianAudioDownloader"

    # Default settings
    DEFAULT_OUTPUT_DIR = "~/Documents/russian_pronunciations"
    DEFAULT_ANKI_FOLDER = ""

    # Forvo settings
    FORVO_API_BASE_URL = "https://apifree.forvo.com"
    LANGUAGE_CODE = "ru"

    # AnkiConnect settings
    ANKI_CONNECT_URL = "http://localhost:8765"
    ANKI_CONNECT_VERSION = 6

    # Download settings
    CHUNK_SIZE = 1024  # for file downloads
    MAX_CONCURRENT_DOWNLOADS = 4

    # File patterns
    AUDIO_FILE_EXTENSION = ".mp3"
    FAILED_WORDS_FILENAME = "failed_words.txt"

    def __init__(self, settings: Optional[QSettings] = None):
        """
        Initialize configuration manager.

        Args:
            settings: Optional QSettings to use instead of the per-user store
        """
        self.settings = settings if settings is not None else QSettings(self.ORGANIZATION, self.APP_IDENTIFIER)

    def get_forvo_api_key(self) -> str:
        """Get the Forvo API key setting."""
        return self.settings.value("forvo_api_key", "")

    def set_forvo_api_key(self, key: str) -> None:
        """Set the Forvo API key setting."""
        self.settings.setValue("forvo_api_key", key)

    def get_output_dir(self) -> str:
        """Get the output directory setting."""
        default_path = os.path.expanduser(self.DEFAULT_OUTPUT_DIR)
        return self.settings.value("output_dir", default_path)

    def set_output_dir(self, path: str) -> None:
        """Set the output directory setting."""
        self.settings.setValue("output_dir", path)

    def get_anki_dir(self) -> str:
        """Get the Anki media directory setting."""
        return self.settings.value("anki_dir", self.DEFAULT_ANKI_FOLDER)

    def set_anki_dir(self, path: str) -> None:
        """Set the Anki media directory setting."""
        self.settings.setValue("anki_dir", path)

    def get_use_anki_connect(self) -> bool:
        """Get whether downloads are sent to AnkiConnect."""
        return self.settings.value("use_anki_connect", False, type=bool)

    def set_use_anki_connect(self, enabled: bool) -> None:
        """Set whether downloads are sent to AnkiConnect."""
        self.settings.setValue("use_anki_connect", enabled)

    def get_all_settings(self) -> dict:
        """Get all settings as a dictionary."""
        return {
            "forvo_api_key": self.get_forvo_api_key(),
            "output_dir": self.get_output_dir(),
            "anki_dir": self.get_anki_dir(),
            "use_anki_connect": self.get_use_anki_connect()
        }

    def reset_to_defaults(self) -> None:
        """Reset all settings to default values."""
        self.settings.clear()


class HTTPConfig:
    """HTTP configuration for web requests."""

    USER_AGENT = f"{AppConfig.APP_IDENTIFIER}/{AppConfig.APP_VERSION}"

    # Request headers
    HEADERS = {
        'User-Agent': USER_AGENT,
        'Accept-Language': 'ru,en-US;q=0.9,en;q=0.8',
        'Accept': 'application/json, audio/mpeg, */*;q=0.8',
    }

    # Request timeouts (in seconds)
    CONNECT_TIMEOUT = 10
    READ_TIMEOUT = 30
    DOWNLOAD_READ_TIMEOUT = 60

    @classmethod
    def get_session_config(cls) -> dict:
        """Get configuration for requests.Session."""
        return {
            'headers': cls.HEADERS,
            'timeout': (cls.CONNECT_TIMEOUT, cls.READ_TIMEOUT)
        }
