#!/usr/bin/env python3
"""Value a property and generate investment prospects from the command line.

The analysis summary is printed to stdout and the full result is exported
as JSON to the output directory.

Example:
    python scripts/run_analysis.py --size 150 --location "Lekki Phase 1, Lagos" \
        --usage "Residential - Family Home" --stories 2 --rooms 4 \
        --average-room-size 30 --amenity "Swimming Pool" --seed 42
"""

import argparse
import logging
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from prospect_engine.config import EngineConfig
from prospect_engine.exceptions import ProspectEngineError
from prospect_engine.logging import setup_logging
from prospect_engine.models import PropertyAttributes, UsageCategory
from prospect_engine.orchestrator import AnalysisOrchestrator
from prospect_engine.sinks import ConsoleSink, JsonFileSink

logger = logging.getLogger(__name__)


def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Value a property and generate investment prospects"
    )
    parser.add_argument(
        "--size",
        type=float,
        required=True,
        help="Property size in square meters",
    )
    parser.add_argument(
        "--usage",
        type=str,
        default="Other",
        help='Current usage label, e.g. "Commercial - Office Space" (default: Other)',
    )
    parser.add_argument(
        "--location",
        type=str,
        default="",
        help="Free-text location",
    )
    parser.add_argument("--stories", type=int, default=None, help="Number of stories")
    parser.add_argument("--rooms", type=int, default=0, help="Number of rooms")
    parser.add_argument(
        "--average-room-size",
        type=float,
        default=None,
        help="Average room size in square meters",
    )
    parser.add_argument(
        "--amenity",
        action="append",
        default=[],
        help="Amenity name (repeatable)",
    )
    parser.add_argument(
        "--category",
        type=str,
        choices=[c.value for c in UsageCategory if c != UsageCategory.GENERIC],
        default=None,
        help="Target category (default: derived from --usage)",
    )
    parser.add_argument(
        "--explore-all",
        action="store_true",
        help="Select prospects across all categories",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for reproducibility",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=None,
        help="Directory for the JSON export (default: OUTPUT_DIR or ./output)",
    )
    parser.add_argument(
        "--pretty",
        action="store_true",
        help="Pretty-print the JSON export",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Also print the full JSON document",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        help="Log level (default: LOG_LEVEL or INFO)",
    )
    parser.add_argument(
        "--log-format",
        type=str,
        choices=["standard", "json"],
        default="standard",
        help="Log format (default: standard)",
    )

    args = parser.parse_args()

    try:
        config = EngineConfig.from_env()
        setup_logging(args.log_level or config.log_level, args.log_format)

        attributes = PropertyAttributes(
            size_sqm=args.size,
            current_usage=args.usage,
            location=args.location,
            stories=args.stories,
            rooms=args.rooms,
            average_room_size=args.average_room_size,
            amenities=tuple(args.amenity),
        )

        orchestrator = AnalysisOrchestrator(config=config, seed=args.seed)
        result = orchestrator.run_full_analysis(
            attributes,
            category=args.category,
            explore_all=args.explore_all,
        )

        console = ConsoleSink(verbose=args.verbose)
        console.write_analysis(result)

        sink = JsonFileSink(
            args.output_dir or config.output.json_output_dir,
            pretty=args.pretty or config.output.pretty_json,
        )
        path = sink.write_analysis(result)
        print(f"\nExported to {path}")
    except ProspectEngineError as exc:
        logger.error("Analysis failed: %s", exc)
        sys.exit(1)


if __name__ == "__main__":
    main()
