"""Wire payloads exchanged with the game service."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Sequence

from ..core.constants import Axis, Volume
from ..core.models import Coordinate, Placement
from .game_client import GameAPIError


AXIS_WIRE_CODES: Dict[Axis, int] = {
    Axis.VERTICAL: 1,
    Axis.X: 2,
    Axis.Y: 3,
}
WIRE_CODE_AXES: Dict[int, Axis] = {code: axis for axis, code in AXIS_WIRE_CODES.items()}


@dataclass
class WordsState:
    """Vocabulary and volume handed out by the game service for one tower."""

    words: List[str]
    volume: Volume
    used_ids: List[int] = field(default_factory=list)
    turn: int = 0


def serialize_placement(placement: Placement) -> Dict[str, Any]:
    return {
        "id": placement.word_id,
        "dir": AXIS_WIRE_CODES[placement.axis],
        "pos": placement.origin.as_list(),
    }


def parse_placement(payload: Mapping[str, Any]) -> Placement:
    try:
        axis = WIRE_CODE_AXES[int(payload["dir"])]
        x, y, z = (int(value) for value in payload["pos"])
        return Placement(word_id=int(payload["id"]), origin=Coordinate(x, y, z), axis=axis)
    except (KeyError, TypeError, ValueError) as exc:
        raise ValueError(f"Malformed placement command: {payload!r}") from exc


def build_request(placements: Sequence[Placement], done: bool = True) -> Dict[str, Any]:
    """Body of a build call: the commands in builder order plus the done flag."""

    return {
        "done": done,
        "words": [serialize_placement(placement) for placement in placements],
    }


def parse_words_response(payload: Mapping[str, Any]) -> WordsState:
    words = payload.get("words")
    if not isinstance(words, list) or not all(isinstance(word, str) for word in words):
        raise GameAPIError(f"Words response missing word list: {payload!r}")
    map_size = payload.get("mapSize")
    try:
        volume = Volume(*(int(value) for value in map_size))  # type: ignore[union-attr]
    except (TypeError, ValueError) as exc:
        raise GameAPIError(f"Words response has invalid mapSize: {map_size!r}") from exc
    return WordsState(
        words=list(words),
        volume=volume,
        used_ids=[int(index) for index in payload.get("usedIndexes") or []],
        turn=int(payload.get("turn") or 0),
    )
