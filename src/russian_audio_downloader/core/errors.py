"""
Exceptions raised while looking up and downloading pronunciations.
"""


class PronunciationError(Exception):
    """Base class for all pronunciation lookup failures."""


class TransportError(PronunciationError):
    """The Forvo API or the audio host could not be reached or refused the request."""


class DecodeError(PronunciationError):
    """The provider response could not be read as a list of pronunciations."""


class MalformedRecordError(PronunciationError):
    """A single pronunciation record is missing its votes or its audio path."""


class StorageError(PronunciationError):
    """The audio file could not be written to its destination."""


class AnkiConnectError(PronunciationError):
    """AnkiConnect rejected a request or could not be reached."""
