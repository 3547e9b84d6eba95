"""
Pronunciation records returned by the Forvo word-pronunciations action.
"""

import json
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Union

from .errors import DecodeError, MalformedRecordError


VOTES_FIELD = "num_positive_votes"
AUDIO_FIELD = "pathmp3"
CONTRIBUTOR_FIELD = "username"


@dataclass(frozen=True)
class Pronunciation:
    """One recording of a word, as listed by Forvo."""

    votes: int
    username: str
    pathmp3: str
    id: int = 0
    hits: int = 0
    country: str = ""


def _to_int(value: Any) -> int:
    """Read an integer field, accepting numeric strings but not booleans or floats."""
    if isinstance(value, bool):
        raise ValueError(f"expected an integer, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        return int(value.strip())
    raise ValueError(f"expected an integer, got {value!r}")


def parse_pronunciation_item(item: Any) -> Pronunciation:
    """
    Decode a single record from the ``items`` list.

    Args:
        item: One element of the provider's ``items`` array

    Returns:
        Pronunciation: The decoded record

    Raises:
        MalformedRecordError: If the vote count or the audio path is missing or invalid
    """
    if not isinstance(item, dict):
        raise MalformedRecordError(f"record is not an object: {item!r}")

    if VOTES_FIELD not in item:
        raise MalformedRecordError(f"record has no '{VOTES_FIELD}'")
    try:
        votes = _to_int(item[VOTES_FIELD])
    except ValueError as e:
        raise MalformedRecordError(f"invalid '{VOTES_FIELD}': {e}") from e

    pathmp3 = item.get(AUDIO_FIELD)
    if not isinstance(pathmp3, str) or not pathmp3.strip():
        raise MalformedRecordError(f"record has no usable '{AUDIO_FIELD}'")

    username = item.get(CONTRIBUTOR_FIELD)
    username = "" if username is None else str(username)

    # Metadata only, never needed for selection
    try:
        record_id = _to_int(item.get("id", 0))
        hits = _to_int(item.get("hits", 0))
    except ValueError:
        record_id, hits = 0, 0

    return Pronunciation(
        votes=votes,
        username=username,
        pathmp3=pathmp3.strip(),
        id=record_id,
        hits=hits,
        country=str(item.get("country") or ""),
    )


def parse_pronunciations(raw: Union[bytes, str, Dict[str, Any]],
                         log: Optional[Callable[[str], None]] = None) -> List[Pronunciation]:
    """
    Decode a word-pronunciations response into pronunciations, in provider order.

    Records that cannot be decoded are skipped. A response that is not a JSON
    object with an ``items`` list is rejected as a whole.

    Args:
        raw: Response body, or the already decoded JSON object
        log: Optional callback that receives a message for every skipped record

    Returns:
        List of Pronunciation objects

    Raises:
        DecodeError: If the response is not a word-pronunciations payload
    """
    if isinstance(raw, dict):
        data = raw
    else:
        try:
            data = json.loads(raw)
        except (json.JSONDecodeError, UnicodeDecodeError, TypeError) as e:
            raise DecodeError(f"Response is not valid JSON: {e}") from e

    if isinstance(data, list) and data and all(isinstance(entry, str) for entry in data):
        # Forvo sends plain-text errors such as rate limits as a list of strings
        raise DecodeError(f"Forvo API error: {' '.join(data)}")
    if not isinstance(data, dict):
        raise DecodeError(f"Expected a JSON object, got {type(data).__name__}: {str(data)[:200]}")

    items = data.get("items")
    if not isinstance(items, list):
        if "error" in data:
            raise DecodeError(f"Forvo API error: {data['error']}")
        raise DecodeError("Response has no 'items' list")

    pronunciations = []
    for index, item in enumerate(items):
        try:
            pronunciations.append(parse_pronunciation_item(item))
        except MalformedRecordError as e:
            if log:
                log(f"⚠️  Skipping pronunciation #{index + 1}: {e}")

    return pronunciations
