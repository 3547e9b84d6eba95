"""
Minimal AnkiConnect client for adding audio files to the Anki media collection.
"""

import os
import requests
from typing import Optional, Any, Dict

from .errors import AnkiConnectError
from ..utils.config import AppConfig, HTTPConfig


class AnkiConnectClient:
    """Talks to the AnkiConnect add-on running inside Anki."""

    def __init__(self, url: str = AppConfig.ANKI_CONNECT_URL, session: Optional[requests.Session] = None):
        session_config = HTTPConfig.get_session_config()
        self.url = url
        self.session = session or requests.Session()
        self.timeout = session_config['timeout']

    def invoke(self, action: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """
        Call an AnkiConnect action.

        Args:
            action: AnkiConnect action name
            params: Action parameters

        Returns:
            The ``result`` field of the response

        Raises:
            AnkiConnectError: If Anki cannot be reached or reports an error
        """
        payload = {
            "action": action,
            "params": params or {},
            "version": AppConfig.ANKI_CONNECT_VERSION,
        }

        try:
            response = self.session.post(
                self.url, json=payload, timeout=self.timeout
            )
            response.raise_for_status()
        except requests.RequestException as e:
            raise AnkiConnectError(f"Could not reach AnkiConnect at {self.url}: {e}") from e

        try:
            data = response.json()
        except ValueError as e:
            raise AnkiConnectError(f"Invalid response from AnkiConnect: {e}") from e

        if not isinstance(data, dict):
            raise AnkiConnectError(f"Unexpected response from AnkiConnect: {data!r}")

        error = data.get("error")
        if error:
            raise AnkiConnectError(f"Error from AnkiConnect: {error}")

        return data.get("result")

    def store_media_file(self, file_path: str) -> Any:
        """
        Add a file on disk to the Anki media collection.

        Args:
            file_path: Path to the audio file

        Returns:
            The name Anki stored the file under
        """
        return self.invoke("storeMediaFile", {
            "filename": os.path.basename(file_path),
            "path": os.path.abspath(file_path),
        })
