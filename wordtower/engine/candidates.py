"""Ranked candidate search over the vocabulary.

Every builder selection step is a pure query here: it reads the vocabulary and
the set of used ids and returns a ranked list, without touching a grid. The
builder then takes the head of the list and asks the grid whether it commits.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import AbstractSet, Iterable, List, Optional

from ..data.vocabulary import Vocabulary


@dataclass(frozen=True)
class CrossingCandidate:
    """A word sharing a letter with an anchor word.

    ``anchor_index`` is the letter position in the anchor word and
    ``candidate_index`` the position of the same letter in the candidate.
    """

    word_id: int
    letter: str
    anchor_index: int
    candidate_index: int


@dataclass(frozen=True)
class LetterCandidate:
    """A word containing a required letter at ``position``."""

    word_id: int
    letter: str
    position: int
    centre_distance: float


def first_word_with_min_length(
    vocabulary: Vocabulary, used_ids: AbstractSet[int], min_length: int
) -> Optional[int]:
    """Id of the first unused word at least ``min_length`` long, in vocabulary order."""

    for word_id in vocabulary.ids():
        if word_id in used_ids:
            continue
        if len(vocabulary[word_id]) >= min_length:
            return word_id
    return None


def find_crossing_candidates(
    vocabulary: Vocabulary,
    used_ids: AbstractSet[int],
    anchor_word: str,
    min_length: int,
    max_length: int,
    excluded_anchor_indices: Iterable[int] = (),
) -> List[CrossingCandidate]:
    """Every (word, anchor position, candidate position) sharing a letter.

    Ranked by ``candidate_index`` so that words whose shared letter sits closest
    to their own start come first. The sort is stable, so ties keep enumeration
    order: word id, then anchor position, then candidate position.
    """

    excluded = set(excluded_anchor_indices)
    candidates: List[CrossingCandidate] = []
    for word_id in vocabulary.ids():
        if word_id in used_ids:
            continue
        word = vocabulary[word_id]
        if len(word) < min_length or len(word) > max_length:
            continue
        for anchor_index, letter in enumerate(anchor_word):
            if anchor_index in excluded:
                continue
            for candidate_index, candidate_letter in enumerate(word):
                if candidate_letter == letter:
                    candidates.append(
                        CrossingCandidate(
                            word_id=word_id,
                            letter=letter,
                            anchor_index=anchor_index,
                            candidate_index=candidate_index,
                        )
                    )
    candidates.sort(key=lambda item: item.candidate_index)
    return candidates


def find_letter_candidates(
    vocabulary: Vocabulary,
    used_ids: AbstractSet[int],
    letter: str,
    min_length: int,
) -> List[LetterCandidate]:
    """Every occurrence of ``letter`` in unused words of at least ``min_length``.

    Ranked by distance from the occurrence to the word's midpoint; central
    intersections come first, ties keep vocabulary order.
    """

    candidates: List[LetterCandidate] = []
    for word_id in vocabulary.ids():
        if word_id in used_ids:
            continue
        word = vocabulary[word_id]
        if len(word) < min_length:
            continue
        for position, candidate_letter in enumerate(word):
            if candidate_letter == letter:
                candidates.append(
                    LetterCandidate(
                        word_id=word_id,
                        letter=letter,
                        position=position,
                        centre_distance=abs(position - len(word) / 2),
                    )
                )
    candidates.sort(key=lambda item: item.centre_distance)
    return candidates


def indices_within(center: int, separation: int, length: int) -> List[int]:
    """Positions of a ``length``-letter word closer than ``separation`` to ``center``."""

    return [index for index in range(length) if abs(index - center) < separation]
