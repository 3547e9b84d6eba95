"""
Validation utilities for Russian Audio Downloader.
"""

import os
import re
import unicodedata
from typing import List


class FileValidator:
    """Utilities for file validation."""

    @staticmethod
    def is_valid_directory(path: str, create_if_missing: bool = False) -> bool:
        """
        Validate that a directory exists and is writable.

        Args:
            path: Directory path to validate
            create_if_missing: Whether to create the directory if it doesn't exist

        Returns:
            bool: True if directory is valid and writable
        """
        if not path:
            return False

        # Expand user path
        expanded_path = os.path.expanduser(path)

        # Check if directory exists
        if not os.path.exists(expanded_path):
            if create_if_missing:
                try:
                    os.makedirs(expanded_path, exist_ok=True)
                except OSError:
                    return False
            else:
                return False

        # Check if it's a directory and writable
        return os.path.isdir(expanded_path) and os.access(expanded_path, os.W_OK)


class TextValidator:
    """Utilities for text validation."""

    MAX_WORD_LENGTH = 50

    # Cyrillic and Latin letters, hyphen, apostrophe and inner spaces
    WORD_PATTERN = re.compile(r"^[A-Za-zА-Яа-яЁё](?:[A-Za-zА-Яа-яЁё\-' ]*[A-Za-zА-Яа-яЁё])?$")

    @staticmethod
    def validate_word_list(text: str) -> List[str]:
        """
        Validate and clean a word list from text input.

        Args:
            text: Raw text containing one word or phrase per line

        Returns:
            List of cleaned, valid words, stress marks included
        """
        if not text:
            return []

        words = []
        for line in text.splitlines():
            word = line.strip()
            if word and TextValidator.is_valid_word(word):
                words.append(word)

        return words

    @staticmethod
    def is_valid_word(word: str) -> bool:
        """
        Basic validation for words to look up.

        Combining marks are ignored, so stressed words pass.

        Args:
            word: Word to validate

        Returns:
            bool: True if word appears to be valid
        """
        if not word:
            return False

        letters = "".join(
            char for char in unicodedata.normalize("NFD", word)
            if unicodedata.category(char) != "Mn"
        )
        if not letters or len(letters) > TextValidator.MAX_WORD_LENGTH:
            return False

        return bool(TextValidator.WORD_PATTERN.match(unicodedata.normalize("NFC", letters)))


class APIValidator:
    """Utilities for API validation."""

    @staticmethod
    def is_valid_forvo_api_key(api_key: str) -> bool:
        """
        Basic validation for Forvo API key format.

        Args:
            api_key: API key to validate

        Returns:
            bool: True if key format appears valid
        """
        if not api_key:
            return False

        # Forvo keys are 32 alphanumeric characters
        return len(api_key) == 32 and api_key.isascii() and api_key.isalnum()
