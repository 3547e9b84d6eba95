"""Core functionality for Russian Audio Downloader."""

from .audio_provider import ForvoAudioProvider, FetchResult, FetchStatus, BatchResult
from .concurrent_downloader import ConcurrentAudioDownloader
from .errors import (
    PronunciationError,
    TransportError,
    DecodeError,
    StorageError,
    AnkiConnectError
)
from .forvo_api import ForvoAPIClient, create_forvo_url
from .normalizer import strip_stress
from .pronunciation import Pronunciation, parse_pronunciations
from .scorer import PronunciationScorer, ScoringConfig, ScoredPronunciation, SelectionResult
from .worker import Worker

__all__ = [
    "ForvoAudioProvider",
    "FetchResult",
    "FetchStatus",
    "BatchResult",
    "ConcurrentAudioDownloader",
    "PronunciationError",
    "TransportError",
    "DecodeError",
    "StorageError",
    "AnkiConnectError",
    "ForvoAPIClient",
    "create_forvo_url",
    "strip_stress",
    "Pronunciation",
    "parse_pronunciations",
    "PronunciationScorer",
    "ScoringConfig",
    "ScoredPronunciation",
    "SelectionResult",
    "Worker"
]
