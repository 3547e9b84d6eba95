"""
Forvo API client for looking up and downloading pronunciations.
"""

import requests
from typing import Optional, Any
from urllib.parse import quote

from .errors import TransportError
from ..utils.config import AppConfig, HTTPConfig


def create_forvo_url(api_key: str, word: str, language: str = AppConfig.LANGUAGE_CODE,
                     base_url: str = AppConfig.FORVO_API_BASE_URL) -> str:
    """
    Build the word-pronunciations URL for a word.

    Args:
        api_key: Forvo API key
        word: The word to look up, already stripped of stress marks
        language: Language code
        base_url: Forvo API host

    Returns:
        str: The request URL
    """
    return (
        f"{base_url}/key/{quote(api_key, safe='')}/format/json/action/word-pronunciations"
        f"/word/{quote(word, safe='')}/language/{quote(language, safe='')}"
    )


class ForvoAPIClient:
    """Client for accessing the Forvo API to download pronunciations."""

    def __init__(self, api_key: str, signal_handler: Optional[Any] = None,
                 session: Optional[requests.Session] = None):
        """
        Initialize the Forvo API client.

        Args:
            api_key: Forvo API key
            signal_handler: Optional signal handler for GUI communication
            session: Optional requests session to reuse
        """
        self.api_key = api_key
        self.base_url = AppConfig.FORVO_API_BASE_URL
        session_config = HTTPConfig.get_session_config()
        self.session = session or requests.Session()
        self.session.headers.update(session_config['headers'])
        self.timeout = session_config['timeout']
        self.signal = signal_handler

    def log(self, message: str) -> None:
        """Log a message to the GUI or console."""
        if self.signal:
            self.signal.update_signal.emit(message)
        else:
            print(message)

    def get_word_pronunciations(self, word: str, language: str = AppConfig.LANGUAGE_CODE) -> bytes:
        """
        Get the raw pronunciation listing for a word from Forvo.

        The word is sent as given; strip stress marks before calling.

        Args:
            word: The word to get pronunciations for
            language: Language code (default: "ru")

        Returns:
            bytes: The response body

        Raises:
            TransportError: If the request fails or Forvo answers with an error status
        """
        url = create_forvo_url(self.api_key, word, language, self.base_url)

        self.log(f"Requesting pronunciations for '{word}' from Forvo API")

        try:
            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise TransportError(
                f"Request error when fetching pronunciations for '{word}': {self._redact(e)}"
            ) from e

        return response.content

    def download_audio(self, audio_url: str) -> bytes:
        """
        Download an audio file.

        Args:
            audio_url: The pathmp3 of the selected pronunciation

        Returns:
            bytes: The audio data

        Raises:
            TransportError: If the download fails
        """
        data = bytearray()
        try:
            with self.session.get(
                audio_url, stream=True,
                timeout=(HTTPConfig.CONNECT_TIMEOUT, HTTPConfig.DOWNLOAD_READ_TIMEOUT)
            ) as audio_response:
                audio_response.raise_for_status()
                for chunk in audio_response.iter_content(chunk_size=AppConfig.CHUNK_SIZE):
                    if chunk:
                        data.extend(chunk)
        except requests.RequestException as e:
            raise TransportError(f"Error downloading audio from {audio_url}: {e}") from e

        return bytes(data)

    def _redact(self, error: Exception) -> str:
        """Error text with the API key (part of every request URL) masked."""
        message = str(error)
        if self.api_key:
            message = message.replace(self.api_key, "***")
        return message
