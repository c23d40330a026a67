"""Id-addressed word inventory."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Iterator, List, Sequence, Tuple, Union

from ..core.exceptions import VocabularyError
from ..utils.logger import get_logger
from .normalization import clean_word


LOGGER = get_logger(__name__)


class Vocabulary:
    """Immutable list of words where the list index is the word id.

    Words are kept literally; the planner only reads letters by id.
    """

    def __init__(self, words: Sequence[str]) -> None:
        for index, word in enumerate(words):
            if not isinstance(word, str):
                raise VocabularyError(f"Word #{index} is not a string: {word!r}")
        self._words: Tuple[str, ...] = tuple(words)

    @classmethod
    def from_lines(cls, lines: Iterable[str]) -> "Vocabulary":
        """Build a vocabulary from free-form lines (blank lines and # comments skipped)."""

        words: List[str] = []
        for line in lines:
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            cleaned = clean_word(line)
            if not cleaned:
                LOGGER.warning("Skipping entry without letters: %r", line)
                continue
            words.append(cleaned)
        return cls(words)

    @classmethod
    def from_file(cls, path: Union[Path, str]) -> "Vocabulary":
        return cls.from_lines(Path(path).read_text(encoding="utf-8").splitlines())

    def word(self, word_id: int) -> str:
        if not 0 <= word_id < len(self._words):
            raise VocabularyError(f"Unknown word id {word_id} (vocabulary size {len(self._words)})")
        return self._words[word_id]

    def length(self, word_id: int) -> int:
        return len(self.word(word_id))

    def ids(self) -> range:
        return range(len(self._words))

    def __getitem__(self, word_id: int) -> str:
        return self.word(word_id)

    def __len__(self) -> int:
        return len(self._words)

    def __iter__(self) -> Iterator[str]:
        return iter(self._words)

    def __repr__(self) -> str:
        return f"Vocabulary({len(self._words)} words)"
