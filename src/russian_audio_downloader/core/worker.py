"""
Worker thread for downloading audio files using Forvo API.
"""

from typing import List
from PyQt5.QtCore import QThread, pyqtSignal
from .audio_provider import ForvoAudioProvider
from .concurrent_downloader import ConcurrentAudioDownloader


class Worker(QThread):
    """Worker thread for downloading audio files using Forvo API."""
    update_signal = pyqtSignal(str)
    progress_signal = pyqtSignal(int, int)  # current, total
    finished_signal = pyqtSignal(list, list, dict)  # successful, no pronunciation, failed

    def __init__(self, words: List[str], output_dir: str, copy_to_anki: bool, anki_folder: str,
                 forvo_api_key: str, use_anki_connect: bool = False, concurrent: bool = False) -> None:
        super().__init__()
        self.words = words
        self.output_dir = output_dir
        self.copy_to_anki = copy_to_anki
        self.anki_folder = anki_folder
        self.forvo_api_key = forvo_api_key
        self.use_anki_connect = use_anki_connect
        self.concurrent = concurrent
        self.abort_flag = False

    def run(self) -> None:
        """Run the download process using Forvo API."""
        if not self.forvo_api_key:
            self.update_signal.emit("❌ Error: Forvo API key is required")
            self.finished_signal.emit([], [], {word: "Forvo API key is required" for word in self.words})
            return

        provider_class = ConcurrentAudioDownloader if self.concurrent else ForvoAudioProvider
        audio_provider = provider_class(
            forvo_api_key=self.forvo_api_key,
            output_dir=self.output_dir,
            anki_folder=self.anki_folder if self.copy_to_anki else "",
            use_anki_connect=self.use_anki_connect,
            signal_handler=self
        )

        batch = audio_provider.download_audio_for_words(self.words)

        if not self.abort_flag:
            self.finished_signal.emit(batch.successful, batch.no_candidates, batch.failed)

    def abort(self) -> None:
        """Abort the download process."""
        self.abort_flag = True
        self.update_signal.emit("Aborting download process...")
