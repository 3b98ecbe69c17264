"""Score an assessment from JSON files and print the result.

Usage:
    python -m scripts.score_assessment --answers answers.json
        [--framework framework.json] [--exclude GROUP_ID ...]
        [--compare-answers other.json] [--compare-exclude GROUP_ID ...]

    --framework        Framework definition (default: FRAMEWORK_PATH setting)
    --exclude          Group ids to leave out of scoring (repeatable)
    --compare-answers  Second answer set; prints a baseline/comparison diff
"""

from __future__ import annotations

import argparse
import json
import logging
import sys

from src.comparison.diff import compare_results
from src.config.logging_config import configure_logging
from src.config.settings import get_settings
from src.ingestion.framework_loader import (
    FrameworkLoadError,
    load_answers,
    load_framework,
)
from src.scoring.engine import ScoringEngine

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Compute trustworthiness scores for an assessment",
    )
    parser.add_argument("--framework", default=None, help="Framework JSON file")
    parser.add_argument("--answers", required=True, help="Answers JSON file")
    parser.add_argument(
        "--exclude",
        action="append",
        default=[],
        metavar="GROUP_ID",
        help="Group id to exclude from scoring (repeatable)",
    )
    parser.add_argument(
        "--compare-answers",
        default=None,
        help="Second answers JSON file to diff against the first",
    )
    parser.add_argument(
        "--compare-exclude",
        action="append",
        default=[],
        metavar="GROUP_ID",
        help="Group id excluded on the comparison side (repeatable)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Scoring script entry point."""
    args = build_parser().parse_args(argv)
    settings = get_settings()
    configure_logging(settings)

    framework_path = args.framework or settings.FRAMEWORK_PATH
    try:
        framework = load_framework(framework_path)
        answers = load_answers(args.answers)
        compare_answers = (
            load_answers(args.compare_answers) if args.compare_answers else None
        )
    except FrameworkLoadError as exc:
        logger.error("Cannot load inputs: %s", exc)
        return 1

    engine = ScoringEngine(config=settings.scoring_config())
    baseline = engine.compute(framework, answers, args.exclude)

    if compare_answers is None:
        payload = baseline.model_dump(mode="json")
    else:
        comparison = engine.compute(framework, compare_answers, args.compare_exclude)
        payload = compare_results(
            baseline,
            comparison,
            baseline_excluded=set(args.exclude),
            comparison_excluded=set(args.compare_exclude),
        ).to_dict()

    print(json.dumps(payload, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
