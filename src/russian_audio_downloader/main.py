"""
Main entry point for the Russian Audio Downloader package.
"""

import argparse
import os
import sys
from typing import List, Optional

from .core.audio_provider import ForvoAudioProvider
from .core.concurrent_downloader import ConcurrentAudioDownloader
from .utils.config import AppConfig
from .utils.validators import APIValidator, FileValidator, TextValidator


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Download Russian pronunciations from Forvo")
    parser.add_argument("words", nargs="*", help="Words to download, stress marks allowed")
    parser.add_argument("-i", "--input-file", help="Text file with words (one per line)")
    parser.add_argument("-k", "--key", help="Forvo API key (default: the saved key)")
    parser.add_argument("-d", "--output-dir", help="Directory to save audio files (default: the saved directory)")
    parser.add_argument("-a", "--anki-dir", help="Anki media folder to copy files into")
    parser.add_argument("--anki-connect", action="store_true", help="Add files to Anki through AnkiConnect")
    parser.add_argument("--concurrent", action="store_true", help="Download several words at once")
    parser.add_argument("--save-key", action="store_true", help="Remember the API key given with --key")
    parser.add_argument("--show-settings", action="store_true", help="Print the saved settings and exit")
    parser.add_argument("--reset-settings", action="store_true", help="Forget all saved settings and exit")
    return parser


def read_words(args: argparse.Namespace) -> List[str]:
    """Collect words from the command line and the input file."""
    words = [word.strip() for word in args.words if word.strip()]
    if args.input_file:
        with open(args.input_file, 'r', encoding='utf-8') as f:
            words.extend(TextValidator.validate_word_list(f.read()))
    return words


def show_settings(config: AppConfig) -> None:
    """Print the saved settings with the API key masked."""
    for name, value in config.get_all_settings().items():
        if name == "forvo_api_key" and value:
            value = value[:4] + "*" * (len(value) - 4)
        print(f"{name}: {value}")


def main(argv: Optional[List[str]] = None, config: Optional[AppConfig] = None) -> int:
    """Main function to handle command-line arguments and run the downloader."""
    parser = build_parser()
    args = parser.parse_args(argv)
    config = config or AppConfig()

    if args.reset_settings:
        config.reset_to_defaults()
        print("Settings reset to defaults.")
        return 0
    if args.show_settings:
        show_settings(config)
        return 0

    try:
        words = read_words(args)
    except OSError as e:
        print(f"Error reading input file: {str(e)}")
        return 2

    if not words:
        parser.print_usage()
        print("No words to download.")
        return 2

    api_key = args.key or config.get_forvo_api_key()
    if not api_key:
        print("❌ Error: Forvo API key is required (use --key)")
        return 2
    if not APIValidator.is_valid_forvo_api_key(api_key):
        print("❌ Error: Forvo API key should be 32 letters and digits")
        return 2
    if args.key and args.save_key:
        config.set_forvo_api_key(args.key)

    output_dir = os.path.expanduser(args.output_dir or config.get_output_dir())
    if not FileValidator.is_valid_directory(output_dir, create_if_missing=True):
        print(f"❌ Error: Output directory is not writable: {output_dir}")
        return 2

    provider_class = ConcurrentAudioDownloader if args.concurrent else ForvoAudioProvider
    provider = provider_class(
        forvo_api_key=api_key,
        output_dir=output_dir,
        anki_folder=args.anki_dir or config.get_anki_dir(),
        use_anki_connect=args.anki_connect or config.get_use_anki_connect()
    )

    print(f"Found {len(words)} words to process.")
    batch = provider.download_audio_for_words(words)

    print("\nDownload Summary:")
    print(f"Total words: {batch.total}")
    print(f"Successfully downloaded: {len(batch.successful)}")
    print(f"No pronunciation on Forvo: {len(batch.no_candidates)}")
    print(f"Failed to download: {len(batch.failed)}")

    for word in batch.no_candidates:
        print(f"- {word}: no pronunciation found")

    if batch.failed:
        print("\nFailed words:")
        for word, error in batch.failed.items():
            print(f"- {word}: {error}")

        # Save failed words to a file for later retry
        failed_path = os.path.join(output_dir, AppConfig.FAILED_WORDS_FILENAME)
        with open(failed_path, "w", encoding="utf-8") as f:
            for word in batch.failed:
                f.write(f"{word}\n")
        print(f"\nFailed words have been saved to '{failed_path}'")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
