"""
Setup script for the Russian Audio Downloader package.
"""

from setuptools import setup, find_packages

setup(
    name='russian-audio-downloader',
    version='0.2.0',
    description='Download the best Forvo pronunciation of Russian words for Anki',
    package_dir={'': 'src'},
    packages=find_packages('src'),
    python_requires='>=3.8',
    install_requires=[
        'PyQt5',
        'requests',
    ],
    extras_require={
        'test': ['pytest'],
    },
    entry_points={
        'console_scripts': [
            'russian-audio-downloader=russian_audio_downloader.main:main',
        ],
    },
)
