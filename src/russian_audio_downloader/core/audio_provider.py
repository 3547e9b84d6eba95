"""
Audio provider that uses Forvo API for downloading pronunciations.
"""

import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, List, Any, Dict

from .anki_connect import AnkiConnectClient
from .errors import AnkiConnectError, PronunciationError
from .forvo_api import ForvoAPIClient
from .normalizer import strip_stress
from .pronunciation import parse_pronunciations
from .scorer import PronunciationScorer, ScoredPronunciation, ScoringConfig
from .storage import AudioStorage
from ..utils.config import AppConfig


class FetchStatus(Enum):
    DOWNLOADED = "downloaded"
    NO_CANDIDATES = "no_candidates"


@dataclass
class FetchResult:
    """Outcome of looking up and downloading one word."""

    word: str
    normalized_word: str
    status: FetchStatus
    file_path: Optional[str] = None
    winner: Optional[ScoredPronunciation] = None
    anki_media_path: Optional[str] = None
    anki_stored: Optional[bool] = None
    anki_error: Optional[str] = None

    @property
    def downloaded(self) -> bool:
        return self.status is FetchStatus.DOWNLOADED


@dataclass
class BatchResult:
    """Outcome of a run over several words."""

    successful: List[str] = field(default_factory=list)
    no_candidates: List[str] = field(default_factory=list)
    failed: Dict[str, str] = field(default_factory=dict)
    results: Dict[str, FetchResult] = field(default_factory=dict)
    total: int = 0

    @property
    def success_rate(self) -> float:
        return len(self.successful) / self.total if self.total > 0 else 0

    def record(self, word: str, result: Optional[FetchResult] = None, error: Optional[str] = None) -> None:
        if error is not None:
            self.failed[word] = error
            return
        self.results[word] = result
        if result.downloaded:
            self.successful.append(word)
        else:
            self.no_candidates.append(word)


class ForvoAudioProvider:
    """Audio provider that downloads the best Forvo pronunciation of each word."""

    def __init__(self, forvo_api_key: str, output_dir: str = "russian_pronunciations",
                 anki_folder: str = "", use_anki_connect: bool = False,
                 signal_handler: Optional[Any] = None,
                 scoring_config: Optional[ScoringConfig] = None,
                 forvo_client: Optional[ForvoAPIClient] = None,
                 anki_client: Optional[AnkiConnectClient] = None,
                 language: str = AppConfig.LANGUAGE_CODE):
        """
        Initialize the Forvo audio provider.

        Args:
            forvo_api_key: Forvo API key
            output_dir: Directory to save audio files
            anki_folder: Optional Anki media folder to copy files into
            use_anki_connect: Also register files with Anki through AnkiConnect
            signal_handler: Optional signal handler for GUI communication
            scoring_config: Contributor bonus settings for the scorer
            forvo_client: Optional preconfigured Forvo client
            anki_client: Optional preconfigured AnkiConnect client
            language: Forvo language code
        """
        self.signal = signal_handler
        self.forvo_client = forvo_client or ForvoAPIClient(forvo_api_key, signal_handler)
        self.storage = AudioStorage(output_dir, anki_folder, signal_handler)
        self.scorer = PronunciationScorer(scoring_config)
        self.language = language
        self.anki_client = anki_client
        if use_anki_connect and self.anki_client is None:
            self.anki_client = AnkiConnectClient()

    @property
    def output_dir(self) -> str:
        return self.storage.output_dir

    def log(self, message: str) -> None:
        """Log a message to the GUI or console."""
        if self.signal:
            self.signal.update_signal.emit(message)
        else:
            print(message)

    def fetch_pronunciation(self, word: str) -> FetchResult:
        """
        Look up a word on Forvo and save its best pronunciation.

        Errors from the API, the response and the disk are raised to the
        caller. A word Forvo has no usable recording for is not an error: the
        result then has status NO_CANDIDATES and nothing is downloaded.

        Args:
            word: The word as written, stress marks allowed

        Returns:
            FetchResult describing what was saved

        Raises:
            ValueError: If the word is empty once stress marks are removed
            TransportError: If Forvo or the audio host cannot be reached
            DecodeError: If the Forvo response is unreadable
            StorageError: If the audio file cannot be written
        """
        normalized = strip_stress(word)
        if not normalized.strip():
            raise ValueError(f"Nothing to look up in {word!r}")
        if normalized != word:
            self.log(f"Looking up '{word}' as '{normalized}'")

        raw = self.forvo_client.get_word_pronunciations(normalized, self.language)
        pronunciations = parse_pronunciations(raw, log=self.log)
        selection = self.scorer.select(pronunciations)

        if not selection.found:
            self.log(f"No pronunciations found for '{normalized}' on Forvo")
            return FetchResult(word=word, normalized_word=normalized, status=FetchStatus.NO_CANDIDATES)

        winner = selection.winner
        self.log(f"Found {len(pronunciations)} pronunciation(s) for '{normalized}'")
        self.log(f"Downloading pronunciation by {winner.pronunciation.username or 'unknown'} "
                 f"(votes: {winner.pronunciation.votes}, score: {winner.score})")

        audio = self.forvo_client.download_audio(winner.pronunciation.pathmp3)
        file_path = self.storage.save_word_audio(word, audio)
        self.log(f"Audio file saved to {file_path}")

        result = FetchResult(
            word=word,
            normalized_word=normalized,
            status=FetchStatus.DOWNLOADED,
            file_path=file_path,
            winner=winner,
        )
        self._deliver_to_anki(result)
        return result

    def _deliver_to_anki(self, result: FetchResult) -> None:
        """Hand a saved file to Anki. Failures are recorded on the result."""
        if self.storage.anki_folder:
            result.anki_media_path = self.storage.copy_to_anki_media(result.file_path)

        if self.anki_client is None:
            return

        try:
            stored_name = self.anki_client.store_media_file(result.file_path)
        except AnkiConnectError as e:
            result.anki_stored = False
            result.anki_error = str(e)
            self.log(f"⚠️  Could not add '{os.path.basename(result.file_path)}' to Anki: {e}")
            return

        result.anki_stored = True
        self.log(f"Stored in Anki media collection as {stored_name}")

    def _process_word(self, word: str, batch: BatchResult) -> None:
        """Fetch one word and record the outcome on the batch."""
        try:
            result = self.fetch_pronunciation(word)
        except (PronunciationError, ValueError) as e:
            batch.record(word, error=str(e))
            self.log(f"❌ Failed: {word} - {e}")
            return

        batch.record(word, result)
        if result.downloaded:
            self.log(f"✅ Successfully downloaded audio for '{word}'")
        else:
            self.log(f"⚠️  No pronunciation available for '{word}'")

    def _aborted(self) -> bool:
        return bool(getattr(self.signal, 'abort_flag', False))

    def download_audio_for_words(self, words: List[str]) -> BatchResult:
        """
        Download audio files for a list of Russian words.

        Each word gets one attempt; failures are collected, not retried.

        Args:
            words: List of words to download audio for

        Returns:
            BatchResult with downloaded, unavailable and failed words
        """
        batch = BatchResult(total=len(words))

        for i, word in enumerate(words):
            if self._aborted():
                break

            self.log(f"Processing {i+1}/{batch.total}: {word}")

            # Update progress
            if self.signal:
                self.signal.progress_signal.emit(i+1, batch.total)

            self._process_word(word, batch)

        return batch
