#!/usr/bin/env python3
"""
Unit tests for the word normalization, parsing and selection logic.
"""

import unittest
import os
import tempfile
import shutil
import json
import sys
import unicodedata
from unittest.mock import Mock, patch

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(os.path.dirname(__file__)), 'src'))

from russian_audio_downloader.core.errors import DecodeError, MalformedRecordError, StorageError
from russian_audio_downloader.core.normalizer import strip_stress
from russian_audio_downloader.core.pronunciation import (
    Pronunciation, parse_pronunciation_item, parse_pronunciations
)
from russian_audio_downloader.core.scorer import PronunciationScorer, ScoringConfig, SelectionResult
from russian_audio_downloader.core.storage import AudioStorage, audio_filename
from russian_audio_downloader.utils.validators import FileValidator, TextValidator, APIValidator


def make_item(votes=0, username="anon", pathmp3="https://audio.example/a.mp3", **extra):
    item = {"num_positive_votes": votes, "username": username, "pathmp3": pathmp3}
    item.update(extra)
    return item


class TestStripStress(unittest.TestCase):
    """Test cases for stress mark removal."""

    def test_removes_acute_accent(self):
        """Test the typical stressed dictionary form."""
        self.assertEqual(strip_stress("многоба́йтовый"), "многобайтовый")

    def test_removes_grave_accent(self):
        self.assertEqual(strip_stress("соба̀ка"), "собака")

    def test_precomposed_stressed_vowel(self):
        """Test a Latin vowel with a precomposed accent loses the accent."""
        self.assertEqual(strip_stress("á"), "a")

    def test_keeps_short_i_and_yo(self):
        """Test й and ё are letters, not stressed vowels."""
        self.assertEqual(strip_stress("йогурт"), "йогурт")
        self.assertEqual(strip_stress("ёлка"), "ёлка")
        self.assertEqual(strip_stress("ЁЖИК"), "ЁЖИК")

    def test_decomposed_short_i_is_recomposed(self):
        """Test a decomposed й comes back precomposed."""
        decomposed = unicodedata.normalize("NFD", "чай")
        self.assertEqual(strip_stress(decomposed), "чай")

    def test_stressed_yo_keeps_diaeresis(self):
        self.assertEqual(strip_stress("ё́ж"), "ёж")

    def test_repeated_letter_mark_is_dropped(self):
        """Test only the mark that forms the letter is kept, not a repeat of it."""
        self.assertEqual(strip_stress("\u0439\u0306"), "\u0439")
        self.assertEqual(strip_stress("\u0438\u0306\u0306"), "\u0439")
        self.assertEqual(strip_stress("\u0451\u0308"), "\u0451")

    def test_idempotent(self):
        """Test normalizing twice gives the same word as normalizing once."""
        for word in ["многоба́йтовый", "ёлка", "соба́ка", "ко́шка", "", "мой дом"]:
            once = strip_stress(word)
            self.assertEqual(strip_stress(once), once)

    def test_word_without_marks_unchanged(self):
        for word in ["собака", "Москва", "hello world", "чай", "пол-литра"]:
            self.assertEqual(strip_stress(word), word)

    def test_empty_word(self):
        self.assertEqual(strip_stress(""), "")

    def test_case_and_whitespace_preserved(self):
        self.assertEqual(strip_stress(" Соба́ка "), " Собака ")


class TestPronunciationParsing(unittest.TestCase):
    """Test cases for decoding Forvo responses."""

    def test_parse_pronunciation_item(self):
        """Test decoding a complete record."""
        item = make_item(5, "1640max", "http://example.com/pronunciation.mp3", id=123, hits=50, country="Russia")

        expected = Pronunciation(
            votes=5,
            username="1640max",
            pathmp3="http://example.com/pronunciation.mp3",
            id=123,
            hits=50,
            country="Russia",
        )
        self.assertEqual(parse_pronunciation_item(item), expected)

    def test_numeric_username_becomes_string(self):
        self.assertEqual(parse_pronunciation_item(make_item(username=42)).username, "42")

    def test_negative_and_string_votes(self):
        self.assertEqual(parse_pronunciation_item(make_item(votes=-2)).votes, -2)
        self.assertEqual(parse_pronunciation_item(make_item(votes="7")).votes, 7)

    def test_malformed_records_rejected(self):
        """Test records without usable votes or audio path are rejected."""
        bad_items = [
            {"username": "x", "pathmp3": "http://example.com/a.mp3"},
            make_item(votes="many"),
            make_item(votes=None),
            make_item(votes=True),
            make_item(votes=1.5),
            make_item(pathmp3=""),
            make_item(pathmp3=None),
            {"num_positive_votes": 3},
            "not a record",
        ]
        for item in bad_items:
            with self.subTest(item=item):
                with self.assertRaises(MalformedRecordError):
                    parse_pronunciation_item(item)

    def test_parse_pronunciations_keeps_order(self):
        raw = json.dumps({"items": [make_item(1, "a"), make_item(2, "b"), make_item(3, "c")]})

        result = parse_pronunciations(raw)

        self.assertEqual([p.username for p in result], ["a", "b", "c"])

    def test_malformed_record_is_skipped(self):
        """Test one bad record among three good ones is dropped, not fatal."""
        raw = json.dumps({"items": [
            make_item(1, "a"),
            make_item(2, "b", pathmp3=None),
            make_item(3, "c"),
            make_item(4, "d"),
        ]}).encode("utf-8")
        log = Mock()

        result = parse_pronunciations(raw, log=log)

        self.assertEqual([p.username for p in result], ["a", "c", "d"])
        log.assert_called_once()
        self.assertIn("#2", log.call_args[0][0])

    def test_one_malformed_between_two_good_yields_two(self):
        raw = json.dumps({"items": [
            make_item(1, "a"),
            {"username": "broken"},
            make_item(3, "c"),
        ]})

        self.assertEqual(len(parse_pronunciations(raw)), 2)

    def test_empty_items(self):
        self.assertEqual(parse_pronunciations(b'{"attributes": {"total": 0}, "items": []}'), [])

    def test_undecodable_responses(self):
        """Test responses that are not a pronunciation listing raise DecodeError."""
        for raw in [b"<html>Forbidden</html>", b"", b"[1, 2, 3]", b'{"items": "none"}',
                    b'{"attributes": {}}', b"\xff\xfe\x00garbage", b"null"]:
            with self.subTest(raw=raw):
                with self.assertRaises(DecodeError):
                    parse_pronunciations(raw)

    def test_provider_error_message_in_decode_error(self):
        with self.assertRaises(DecodeError) as ctx:
            parse_pronunciations(b'["Limit/day reached."]')
        self.assertIn("Limit/day reached.", str(ctx.exception))

        with self.assertRaises(DecodeError) as ctx:
            parse_pronunciations(b"[1, 2, 3]")
        self.assertIn("[1, 2, 3]", str(ctx.exception))

        with self.assertRaises(DecodeError) as ctx:
            parse_pronunciations(b'{"error": "Invalid API key"}')
        self.assertIn("Invalid API key", str(ctx.exception))

    def test_accepts_decoded_object(self):
        self.assertEqual(len(parse_pronunciations({"items": [make_item()]})), 1)


class TestPronunciationScorer(unittest.TestCase):
    """Test cases for choosing the best pronunciation."""

    def setUp(self):
        self.scorer = PronunciationScorer(ScoringConfig(special_users=frozenset(["trusted"]), bonus=5))

    def _pronunciations(self, *pairs):
        return [Pronunciation(votes=v, username=u, pathmp3=f"https://audio.example/{i}.mp3")
                for i, (v, u) in enumerate(pairs)]

    def test_tie_goes_to_earliest(self):
        """Test scores [3, 5, 5, 1] select the first 5."""
        pronunciations = self._pronunciations((3, "a"), (5, "b"), (5, "c"), (1, "d"))

        result = self.scorer.select(pronunciations)

        self.assertTrue(result.found)
        self.assertEqual(result.winner.position, 1)
        self.assertIs(result.winner.pronunciation, pronunciations[1])

    def test_bonus_wins_over_votes(self):
        """Test a trusted contributor's 1 + 5 beats 4 plain votes."""
        pronunciations = self._pronunciations((1, "trusted"), (4, "anon"))

        result = self.scorer.select(pronunciations)

        self.assertEqual(result.winner.position, 0)
        self.assertEqual(result.winner.score, 6)

    def test_empty_is_no_candidates(self):
        result = self.scorer.select([])

        self.assertFalse(result.found)
        self.assertIsNone(result.winner)
        self.assertEqual(result, SelectionResult.none())

    def test_negative_scores_compared_signed(self):
        pronunciations = self._pronunciations((-3, "a"), (-1, "b"), (-2, "c"))

        result = self.scorer.select(pronunciations)

        self.assertEqual(result.winner.position, 1)
        self.assertEqual(result.winner.score, -1)

    def test_all_equal_picks_first(self):
        result = self.scorer.select(self._pronunciations((0, "a"), (0, "b"), (0, "c")))
        self.assertEqual(result.winner.position, 0)

    def test_rank_order(self):
        ranked = self.scorer.rank(self._pronunciations((2, "a"), (0, "trusted"), (5, "b"), (2, "c")))
        self.assertEqual([s.position for s in ranked], [1, 2, 0, 3])

    def test_default_config(self):
        """Test the built-in special users get a 2 point bonus."""
        scorer = PronunciationScorer()
        self.assertEqual(scorer.score(Pronunciation(votes=5, username="1640max", pathmp3="x")), 7)
        self.assertEqual(scorer.score(Pronunciation(votes=5, username="someone", pathmp3="x")), 5)

    def test_bonus_does_not_stack_or_scale(self):
        scorer = PronunciationScorer(ScoringConfig(special_users=frozenset(["a"]), bonus=3))
        self.assertEqual(scorer.score(Pronunciation(votes=100, username="a", pathmp3="x")), 103)


class TestAudioStorage(unittest.TestCase):
    """Test cases for writing audio files."""

    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()
        self.storage = AudioStorage(self.temp_dir)

    def tearDown(self):
        if os.path.exists(self.temp_dir):
            shutil.rmtree(self.temp_dir)

    def test_audio_filename_uses_original_word(self):
        self.assertEqual(audio_filename("соба́ка"), "соба́ка.mp3")
        self.assertEqual(audio_filename("a/b"), "a_b.mp3")

    def test_audio_filename_rejects_empty(self):
        for word in ["", "  ", "..", "."]:
            with self.assertRaises(StorageError):
                audio_filename(word)

    def test_persist_writes_file(self):
        destination = os.path.join(self.temp_dir, "nested", "word.mp3")

        result = self.storage.persist(b"ID3data", destination)

        self.assertEqual(result, destination)
        with open(destination, "rb") as f:
            self.assertEqual(f.read(), b"ID3data")
        self.assertEqual(os.listdir(os.path.dirname(destination)), ["word.mp3"])

    def test_persist_replaces_existing(self):
        destination = os.path.join(self.temp_dir, "word.mp3")
        self.storage.persist(b"old", destination)
        self.storage.persist(b"new", destination)

        with open(destination, "rb") as f:
            self.assertEqual(f.read(), b"new")

    @unittest.skipIf(os.name == "nt", "POSIX permissions")
    def test_persist_applies_umask_not_private_mode(self):
        """Test saved files are readable like any other file, not 0600."""
        destination = os.path.join(self.temp_dir, "word.mp3")

        with patch("russian_audio_downloader.core.storage.UMASK", 0o022):
            self.storage.persist(b"ID3data", destination)

        self.assertEqual(os.stat(destination).st_mode & 0o777, 0o644)

    def test_persist_failure_leaves_nothing(self):
        """Test a failed rename removes the temporary file."""
        destination = os.path.join(self.temp_dir, "word.mp3")

        with patch("russian_audio_downloader.core.storage.os.replace", side_effect=OSError("disk full")):
            with self.assertRaises(StorageError):
                self.storage.persist(b"data", destination)

        self.assertEqual(os.listdir(self.temp_dir), [])

    def test_persist_interrupted_leaves_nothing(self):
        destination = os.path.join(self.temp_dir, "word.mp3")

        with patch("russian_audio_downloader.core.storage.os.fsync", side_effect=KeyboardInterrupt):
            with self.assertRaises(KeyboardInterrupt):
                self.storage.persist(b"data", destination)

        self.assertEqual(os.listdir(self.temp_dir), [])

    def test_persist_unwritable_destination(self):
        blocker = os.path.join(self.temp_dir, "blocker")
        with open(blocker, "w") as f:
            f.write("not a directory")

        with self.assertRaises(StorageError):
            self.storage.persist(b"data", os.path.join(blocker, "word.mp3"))

    def test_copy_to_anki_media(self):
        anki_folder = os.path.join(self.temp_dir, "anki_media")
        os.makedirs(anki_folder)
        storage = AudioStorage(self.temp_dir, anki_folder)
        source = storage.save_word_audio("собака", b"ID3data")

        dest = storage.copy_to_anki_media(source)

        self.assertEqual(dest, os.path.join(anki_folder, "собака.mp3"))
        self.assertTrue(os.path.exists(dest))

    def test_copy_to_missing_anki_folder(self):
        signal = Mock()
        storage = AudioStorage(self.temp_dir, os.path.join(self.temp_dir, "missing"), signal)
        source = storage.save_word_audio("собака", b"ID3data")

        self.assertIsNone(storage.copy_to_anki_media(source))
        signal.update_signal.emit.assert_called_once()

    def test_copy_without_anki_folder(self):
        self.assertIsNone(self.storage.copy_to_anki_media(os.path.join(self.temp_dir, "x.mp3")))

    def test_log_without_signal_handler(self):
        """Test logging without a signal handler (should print)."""
        with patch('builtins.print') as mock_print:
            self.storage.log("Test log message")
            mock_print.assert_called_once_with("Test log message")


class TestValidators(unittest.TestCase):
    """Test cases for input validation."""

    def test_validate_word_list(self):
        text = "соба́ка\n\n  кошка  \nhttp://x\nпол-литра\n" + "я" * 51
        self.assertEqual(TextValidator.validate_word_list(text), ["соба́ка", "кошка", "пол-литра"])

    def test_is_valid_word(self):
        self.assertTrue(TextValidator.is_valid_word("ёлка"))
        self.assertTrue(TextValidator.is_valid_word("добрый день"))
        self.assertFalse(TextValidator.is_valid_word(""))
        self.assertFalse(TextValidator.is_valid_word("́"))
        self.assertFalse(TextValidator.is_valid_word("123"))

    def test_is_valid_directory(self):
        temp_dir = tempfile.mkdtemp()
        try:
            self.assertTrue(FileValidator.is_valid_directory(temp_dir))
            new_dir = os.path.join(temp_dir, "new")
            self.assertFalse(FileValidator.is_valid_directory(new_dir))
            self.assertTrue(FileValidator.is_valid_directory(new_dir, create_if_missing=True))
            self.assertFalse(FileValidator.is_valid_directory(""))
        finally:
            shutil.rmtree(temp_dir)

    def test_forvo_api_key(self):
        self.assertTrue(APIValidator.is_valid_forvo_api_key("a" * 32))
        self.assertFalse(APIValidator.is_valid_forvo_api_key("a" * 31))
        self.assertFalse(APIValidator.is_valid_forvo_api_key("-" * 32))
        self.assertFalse(APIValidator.is_valid_forvo_api_key(""))


if __name__ == '__main__':
    unittest.main(verbosity=2)
