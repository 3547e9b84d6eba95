"""
Concurrent audio downloader for improved performance.
"""

from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from typing import List, Any

from .audio_provider import BatchResult, ForvoAudioProvider
from .errors import PronunciationError
from ..utils.config import AppConfig


class ConcurrentAudioDownloader(ForvoAudioProvider):
    """Concurrent version of the audio provider for better performance."""

    def __init__(self, *args: Any, max_workers: int = AppConfig.MAX_CONCURRENT_DOWNLOADS, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.max_workers = max_workers

    def download_audio_for_words(self, words: List[str]) -> BatchResult:
        """
        Download audio files for a list of words using concurrent processing.

        Every word runs its own lookup, selection and download; nothing is
        shared between them apart from the HTTP session.

        Args:
            words: List of words to download audio for.

        Returns:
            BatchResult with downloaded, unavailable and failed words
        """
        if len(words) <= 3:
            # For small batches, use sequential processing to avoid overhead
            return super().download_audio_for_words(words)

        self.log(f"Starting concurrent download for {len(words)} words with {self.max_workers} workers")

        batch = BatchResult(total=len(words))
        recorded = set()

        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            future_to_word = {
                executor.submit(self.fetch_pronunciation, word): word
                for word in words
            }

            for future in as_completed(future_to_word):
                self._record_future(batch, future_to_word[future], future, len(recorded) + 1)
                recorded.add(future)

                if self._aborted():
                    self.log("Download aborted, waiting for words already in progress")
                    for f in future_to_word:
                        f.cancel()
                    break

        # Words that were already running when the batch was aborted still finished
        for future, word in future_to_word.items():
            if future not in recorded and not future.cancelled():
                self._record_future(batch, word, future, len(recorded) + 1)
                recorded.add(future)

        self.log(f"Concurrent download complete: {len(batch.successful)} successful, "
                 f"{len(batch.no_candidates)} unavailable, {len(batch.failed)} failed")
        return batch

    def _record_future(self, batch: BatchResult, word: str, future: Future, completed_count: int) -> None:
        """Record the outcome of one finished word in the batch."""
        try:
            result = future.result()
        except (PronunciationError, ValueError) as e:
            batch.record(word, error=str(e))
            self.log(f"❌ [{completed_count}/{batch.total}] Error with {word}: {str(e)}")
        else:
            batch.record(word, result)
            if result.downloaded:
                self.log(f"✅ [{completed_count}/{batch.total}] Downloaded: {word}")
            else:
                self.log(f"⚠️  [{completed_count}/{batch.total}] No pronunciation: {word}")

        if self.signal:
            self.signal.progress_signal.emit(completed_count, batch.total)
