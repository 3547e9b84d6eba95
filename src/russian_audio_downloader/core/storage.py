"""
Writing downloaded audio to disk.
"""

import os
import shutil
import tempfile
from typing import Optional, Any

from .errors import StorageError
from ..utils.config import AppConfig

# Read once; os.umask can only be queried by setting it.
UMASK = os.umask(0)
os.umask(UMASK)


def audio_filename(word: str, extension: str = AppConfig.AUDIO_FILE_EXTENSION) -> str:
    """
    File name for a word's audio, based on the word as the user wrote it.

    Path separators are replaced so the word cannot escape the output directory.
    """
    safe_word = word.strip().replace("/", "_").replace("\\", "_")
    if safe_word in ("", ".", ".."):
        raise StorageError(f"Cannot derive a file name from {word!r}")
    return f"{safe_word}{extension}"


class AudioStorage:
    """Saves audio files and copies them to the Anki media folder."""

    def __init__(self, output_dir: str, anki_folder: str = "", signal_handler: Optional[Any] = None):
        """
        Initialize the storage.

        Args:
            output_dir: Directory to save audio files
            anki_folder: Optional Anki media folder
            signal_handler: Optional signal handler for GUI communication
        """
        self.output_dir = os.path.expanduser(output_dir)
        self.anki_folder = os.path.expanduser(anki_folder) if anki_folder else ""
        self.signal = signal_handler

    def log(self, message: str) -> None:
        """Log a message to the GUI or console."""
        if self.signal:
            self.signal.update_signal.emit(message)
        else:
            print(message)

    def path_for(self, word: str) -> str:
        return os.path.join(self.output_dir, audio_filename(word))

    def persist(self, data: bytes, destination: str) -> str:
        """
        Write data to destination atomically.

        The bytes go to a temporary file next to the destination, which is then
        renamed into place. If anything fails, or the write is interrupted, the
        temporary file is removed and the destination is left untouched.

        Args:
            data: The audio bytes
            destination: Final path of the file

        Returns:
            str: The destination path

        Raises:
            StorageError: If the file cannot be written
        """
        directory = os.path.dirname(destination) or "."
        temp_path = None

        try:
            os.makedirs(directory, exist_ok=True)
            fd, temp_path = tempfile.mkstemp(
                dir=directory, prefix=".", suffix=".part"
            )
            with os.fdopen(fd, "wb") as f:
                f.write(data)
                f.flush()
                os.fsync(f.fileno())
            # mkstemp creates the file as 0600
            os.chmod(temp_path, 0o666 & ~UMASK)
            os.replace(temp_path, destination)
            temp_path = None
        except OSError as e:
            raise StorageError(f"Cannot write audio file {destination}: {e}") from e
        finally:
            if temp_path is not None and os.path.exists(temp_path):
                os.remove(temp_path)

        return destination

    def save_word_audio(self, word: str, data: bytes) -> str:
        """Persist a word's audio in the output directory."""
        return self.persist(data, self.path_for(word))

    def copy_to_anki_media(self, file_path: str) -> Optional[str]:
        """
        Copy a saved audio file to the Anki media collection folder.

        Args:
            file_path: Path to the saved audio file

        Returns:
            The path inside the media folder, or None if the copy failed
        """
        if not self.anki_folder:
            return None

        if not os.path.isdir(self.anki_folder):
            self.log(f"Error: Anki media folder does not exist: {self.anki_folder}")
            return None

        dest_path = os.path.join(self.anki_folder, os.path.basename(file_path))

        try:
            shutil.copy2(file_path, dest_path)
        except OSError as e:
            self.log(f"Error copying file to Anki media folder: {str(e)}")
            return None

        self.log(f"Audio file copied to Anki media folder: {dest_path}")
        return dest_path
