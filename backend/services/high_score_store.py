"""
All-time high score storage.

The best score ever reached is kept in a small text file holding a single
integer. Storage problems are logged and never interrupt a game: a missing or
unreadable file counts as 0 and a failed write leaves the in-memory value as
it was.
"""

import logging
from pathlib import Path
from typing import Union

logger = logging.getLogger(__name__)


class HighScoreStore:
    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def load(self) -> int:
        """
        Read the stored high score.

        Returns:
            The stored score, or 0 if the file is missing, unreadable or
            does not hold a non-negative integer.
        """
        if not self.path.exists():
            return 0

        try:
            text = self.path.read_text(encoding="utf-8").strip()
        except OSError as exc:
            logger.warning("Error loading high score from %s: %s", self.path, exc)
            return 0

        try:
            score = int(text)
        except ValueError:
            logger.warning("Ignoring malformed high score file %s: %r", self.path, text[:50])
            return 0

        if score < 0:
            logger.warning("Ignoring negative high score %d in %s", score, self.path)
            return 0
        return score

    def save(self, score: int) -> bool:
        """
        Write the high score.

        Returns:
            True if the file was written, False if the write failed
        """
        try:
            if self.path.parent and not self.path.parent.exists():
                self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(str(score), encoding="utf-8")
        except OSError as exc:
            logger.error("Error saving high score to %s: %s", self.path, exc)
            return False

        logger.info("Saved high score %d to %s", score, self.path)
        return True
