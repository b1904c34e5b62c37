"""Word sources that supply codenames for new boards."""

import json
import logging
import random
import time
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, Sequence, Union

import requests

from .errors import ConfigurationError, WordSourceError
from .paths import WORDLIST_PATH

logger = logging.getLogger(__name__)


class WordSource(ABC):
    """Supplies distinct words for board generation."""

    @abstractmethod
    def draw(self, n: int) -> list[str]:
        """
        Draw n distinct words.

        Args:
            n: Number of words requested

        Returns:
            Up to n distinct words. Callers must check the length.
        """
        pass


def load_wordlist(path: Union[str, Path]) -> list[str]:
    """
    Load a word list, one word per line.

    Blank lines and lines starting with '#' are skipped, as are lines with
    more than one token. Duplicates are dropped, keeping the first occurrence.
    """
    p = Path(path)
    if not p.exists():
        raise ConfigurationError(f"Could not find word list at {p}")

    words: list[str] = []
    for line in p.read_text(encoding="utf-8").splitlines():
        w = line.strip()
        if not w or w.startswith("#"):
            continue
        # Keep single tokens only (no spaces)
        if " " in w or "\t" in w:
            continue
        words.append(w)
    return list(dict.fromkeys(words))


class WordListSource(WordSource):
    """Samples words without replacement from an in-memory list."""

    def __init__(self, words: Sequence[str], rng: Optional[random.Random] = None):
        self.words = list(dict.fromkeys(words))
        self.rng = rng or random.Random()

    @classmethod
    def from_file(
        cls, path: Union[str, Path], rng: Optional[random.Random] = None
    ) -> "WordListSource":
        return cls(load_wordlist(path), rng=rng)

    def draw(self, n: int) -> list[str]:
        if n <= len(self.words):
            return self.rng.sample(self.words, n)
        # Short list: hand back everything and let the generator complain
        words = list(self.words)
        self.rng.shuffle(words)
        return words


def default_word_source(rng: Optional[random.Random] = None) -> WordListSource:
    """Word source backed by the bundled word list."""
    return WordListSource.from_file(WORDLIST_PATH, rng=rng)


class RemoteWordSource(WordSource):
    """
    Draws words from an HTTP word service.

    Issues GET {url}?count=n and accepts either a JSON array of strings or an
    object with a "words" array. 429 and 5xx responses are retried with
    exponential backoff.
    """

    def __init__(
        self,
        url: str,
        timeout_s: float = 10.0,
        retries: int = 3,
        backoff_s: float = 0.5,
    ):
        self.url = url
        self.timeout_s = timeout_s
        self.retries = retries
        self.backoff_s = backoff_s

    def draw(self, n: int) -> list[str]:
        backoff = self.backoff_s
        last_err: Optional[Exception] = None
        for attempt in range(self.retries):
            try:
                resp = requests.get(self.url, params={"count": n}, timeout=self.timeout_s)
                if resp.status_code == 429 or 500 <= resp.status_code < 600:
                    # Retryable
                    last_err = WordSourceError(f"word service returned {resp.status_code}")
                    logger.warning(
                        "Word service %s returned %s (attempt %d/%d)",
                        self.url, resp.status_code, attempt + 1, self.retries,
                    )
                    if attempt < self.retries - 1:
                        time.sleep(backoff)
                        backoff *= 2
                    continue
                resp.raise_for_status()
                return self._parse_words(resp.json())
            except (requests.RequestException, json.JSONDecodeError) as e:
                last_err = e
                logger.warning("Word service request failed: %s", e)
                if attempt < self.retries - 1:
                    time.sleep(backoff)
                    backoff *= 2

        raise WordSourceError(
            f"Word service request failed after {self.retries} retries: {last_err}"
        )

    @staticmethod
    def _parse_words(data: object) -> list[str]:
        if isinstance(data, dict):
            data = data.get("words")
        if not isinstance(data, list) or not all(isinstance(w, str) for w in data):
            raise WordSourceError("Word service returned an unexpected payload")
        return list(dict.fromkeys(w.strip() for w in data if w.strip()))
