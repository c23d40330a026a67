"""CLI entrypoint for the word tower planner."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from wordtower.core.constants import DEFAULT_ANCHOR, DEFAULT_BASE_MIN_LENGTH, DEFAULT_VOLUME, VerticalDirection
from wordtower.core.models import Placement
from wordtower.data.vocabulary import Vocabulary
from wordtower.engine.builder import BuilderConfig
from wordtower.engine.planner import plan_tower
from wordtower.engine.validator import TowerReport, TowerScorer
from wordtower.io.commands import build_request, parse_placement, parse_words_response
from wordtower.io.game_client import GameClient
from wordtower.utils.logger import configure_logging, get_logger
from wordtower.utils.pretty import pretty_print_floors, print_report


LOGGER = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Plan and score word towers for the 3D word-placement game",
    )
    parser.add_argument(
        "--words",
        nargs="+",
        metavar="WORD",
        help="Vocabulary words; the position in the list is the word id",
    )
    parser.add_argument(
        "--words-file",
        type=Path,
        metavar="FILE",
        help="File with one word per line (# comments and blank lines ignored)",
    )
    parser.add_argument(
        "--from-api",
        action="store_true",
        help="Fetch the vocabulary and volume from the game service",
    )
    parser.add_argument(
        "--shuffle",
        action="store_true",
        help="Ask the game service for a fresh word set before fetching it (needs --from-api)",
    )
    parser.add_argument(
        "--list-towers",
        action="store_true",
        help="Print the towers already recorded by the game service and exit",
    )
    parser.add_argument(
        "--volume",
        type=int,
        nargs=3,
        metavar=("WIDTH", "DEPTH", "HEIGHT"),
        default=list(DEFAULT_VOLUME),
        help="Volume size in cells",
    )
    parser.add_argument(
        "--anchor",
        type=int,
        nargs=3,
        metavar=("X", "Y", "Z"),
        default=list(DEFAULT_ANCHOR),
        help="Origin of the base word",
    )
    parser.add_argument(
        "--vertical-step",
        type=int,
        choices=[member.value for member in VerticalDirection],
        default=VerticalDirection.DESCENDING.value,
        help="z step between successive letters of a vertical word",
    )
    parser.add_argument(
        "--base-min-length",
        type=int,
        default=DEFAULT_BASE_MIN_LENGTH,
        help="Minimum length of the base word",
    )
    parser.add_argument(
        "--evaluate",
        type=Path,
        metavar="FILE",
        help="Score an existing build request JSON instead of building",
    )
    parser.add_argument("--submit", action="store_true", help="Send the build to the game service")
    parser.add_argument("--show", action="store_true", help="Print floor slices and the report")
    parser.add_argument("--output", type=Path, help="Optional path to JSON output")
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    return parser


def _load_vocabulary(
    args: argparse.Namespace, client: Optional[GameClient]
) -> Tuple[Vocabulary, List[int]]:
    """Return the vocabulary and the ids the game service already marks as used."""

    if client is not None:
        if args.shuffle:
            client.shuffle()
        state = parse_words_response(client.get_words())
        LOGGER.info(
            "Turn %d: %d words, %d already used", state.turn, len(state.words), len(state.used_ids)
        )
        args.volume = list(state.volume.as_tuple())
        return Vocabulary(state.words), state.used_ids
    entries: List[str] = []
    if args.words:
        entries.extend(args.words)
    if args.words_file:
        entries.extend(args.words_file.read_text(encoding="utf-8").splitlines())
    return Vocabulary.from_lines(entries), []


def _evaluate_file(path: Path, vocabulary: Vocabulary, step: VerticalDirection) -> Dict[str, Any]:
    request = json.loads(path.read_text(encoding="utf-8"))
    try:
        placements: List[Placement] = [parse_placement(item) for item in request.get("words", [])]
    except ValueError as exc:
        LOGGER.error("Cannot evaluate %s: %s", path, exc)
        report = TowerReport(is_valid=False, score=0.0, invalid_reason=str(exc))
    else:
        report = TowerScorer(vocabulary, step).evaluate_placements(placements)
    return {"request": request, "report": report.to_dict()}


def _write_output(payload: Dict[str, Any], output: Optional[Path]) -> None:
    output_text = json.dumps(payload, ensure_ascii=False, indent=2)
    if output:
        output.write_text(output_text, encoding="utf-8")
    else:
        print(output_text)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    level = getattr(logging, args.log_level.upper(), logging.INFO)
    configure_logging(level)

    if args.list_towers:
        _write_output({"towers": GameClient().towers()}, args.output)
        return 0
    if not (args.words or args.words_file or args.from_api):
        parser.error("provide --words, --words-file or --from-api")
    if args.shuffle and not args.from_api:
        parser.error("--shuffle requires --from-api")
    if args.submit and args.evaluate:
        parser.error("--submit cannot be combined with --evaluate")

    client = GameClient() if (args.from_api or args.submit) else None
    vocabulary, used_ids = _load_vocabulary(args, client if args.from_api else None)
    step = VerticalDirection(args.vertical_step)

    if args.evaluate:
        payload = _evaluate_file(args.evaluate, vocabulary, step)
        _write_output(payload, args.output)
        return 0 if payload["report"]["is_valid"] else 1

    config = BuilderConfig(
        volume=tuple(args.volume),
        anchor=tuple(args.anchor),
        base_min_length=args.base_min_length,
        vertical_step=step,
    )
    plan = plan_tower(vocabulary, config, used_ids=used_ids)
    if args.show:
        if plan.grid is not None and plan.placements:
            pretty_print_floors(plan.grid, stream=sys.stderr)
        print_report(plan.report, stream=sys.stderr)

    payload = {
        "request": build_request(plan.placements),
        "report": plan.report.to_dict(),
    }
    exit_code = 0 if plan.placements else 1
    if client is not None and args.submit:
        if plan.ready_to_submit:
            payload["response"] = client.build(plan.placements)
        else:
            LOGGER.error("Tower is not valid; not submitting")
            exit_code = 1

    _write_output(payload, args.output)
    return exit_code


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
