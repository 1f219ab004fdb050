"""
High Score Persistence
=======================
One-line score file in the working directory.

Failures never reach the game: a bad or missing file reads as 0 and a
failed write is only logged.
"""

import logging
import os
from pathlib import Path
from typing import Optional, Union

from .config import HIGH_SCORE_FILE


LOGGER = logging.getLogger(__name__)

PathLike = Union[str, Path]


def score_file_path(directory: Optional[PathLike] = None) -> Path:
    """Location of the score file, relative to the current directory."""
    if directory is None:
        try:
            directory = os.getcwd()
        except OSError:
            return Path(HIGH_SCORE_FILE)
    return Path(directory) / HIGH_SCORE_FILE


def load_high_score(path: PathLike) -> int:
    """Read the stored high score, or 0 if there is none usable."""
    try:
        text = Path(path).read_text(encoding='ascii')
    except (OSError, UnicodeDecodeError) as exc:
        LOGGER.debug('No high score loaded from %s: %s', path, exc)
        return 0
    try:
        score = int(text.strip())
    except ValueError:
        LOGGER.debug('Ignoring unparsable high score file %s', path)
        return 0
    return max(score, 0)


def save_high_score(path: PathLike, score: int) -> None:
    """Overwrite the score file. Best effort, errors are swallowed."""
    try:
        Path(path).write_text(str(score), encoding='ascii')
    except OSError as exc:
        LOGGER.debug('Could not save high score to %s: %s', path, exc)
