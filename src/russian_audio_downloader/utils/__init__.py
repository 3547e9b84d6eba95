"""Utility functions for Russian Audio Downloader."""

from .config import AppConfig, HTTPConfig
from .validators import FileValidator, TextValidator, APIValidator

__all__ = [
    "AppConfig",
    "HTTPConfig",
    "FileValidator",
    "TextValidator",
    "APIValidator"
]
