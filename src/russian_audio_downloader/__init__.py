"""
Russian Audio Downloader

A Python application for downloading Russian word pronunciations from the
Forvo API and adding them to an Anki media collection.
"""

__version__ = "0.2.0"

from .core.audio_provider import ForvoAudioProvider, FetchResult, FetchStatus, BatchResult
from .core.concurrent_downloader import ConcurrentAudioDownloader
from .core.forvo_api import ForvoAPIClient
from .core.normalizer import strip_stress
from .core.scorer import PronunciationScorer, ScoringConfig, SelectionResult

__all__ = [
    "ForvoAudioProvider",
    "FetchResult",
    "FetchStatus",
    "BatchResult",
    "ConcurrentAudioDownloader",
    "ForvoAPIClient",
    "strip_stress",
    "PronunciationScorer",
    "ScoringConfig",
    "SelectionResult"
]
