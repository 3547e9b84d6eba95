#!/usr/bin/env python3
"""
Russian Word Audio Downloader - Main Entry Point

Downloads the best Forvo pronunciation for each Russian word given on the
command line and saves it for use in your Anki collection.
"""

import sys

from src.russian_audio_downloader.main import main

if __name__ == "__main__":
    sys.exit(main())
