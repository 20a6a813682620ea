"""
Command-line entry point for OnCall Directory.

Provides two commands:
    search  rank directory providers by closeness to a name query
    oncall  resolve the on-call provider for a date and specialty
"""

import argparse
import json
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional

from oncall_directory.ingestion.loader import load_directory, load_schedules
from oncall_directory.normalize.config import SECOND_PHONE_PREFERENCES, load_config, validate_config
from oncall_directory.normalize.phone_normalizer import format_phone_display, generate_phone_links
from oncall_directory.oncall.resolver import OnCallResolver, second_phone_label
from oncall_directory.search.provider_search import ProviderSearch

logger = logging.getLogger(__name__)


def run_search(args: argparse.Namespace, config: Dict) -> int:
    """Rank directory providers for a query and print them."""
    directory_df = load_directory(args.directory)
    search = ProviderSearch(config)

    if args.specialty:
        directory_df = search.search_directory(directory_df, specialty=args.specialty)

    ranked_df = search.rank_providers(directory_df, args.query, limit=args.limit)

    print("\n" + "=" * 50)
    print(f"RESULTS FOR '{args.query}'")
    print("=" * 50)
    for _, row in ranked_df.iterrows():
        phone = format_phone_display(row.get("phone_number"))
        print(f"{row['match_score']:>10,}  {row['provider_name']}  {phone}")
    print("=" * 50)
    print(f"{len(ranked_df)} of {len(directory_df)} providers matched")

    return 0


def run_oncall(args: argparse.Namespace, config: Dict) -> int:
    """Resolve the on-call provider and print the record as JSON."""
    schedules_df = load_schedules(args.schedules)
    directory_df = load_directory(args.directory)
    resolver = OnCallResolver(schedules_df, directory_df, config)
    on_call_date = args.date or resolver.on_call_date_for(datetime.now())

    record = resolver.lookup(
        date=on_call_date,
        specialty=args.specialty,
        plan=args.plan,
        include_second_phone=args.second_phone,
        second_phone_pref=args.second_phone_pref,
        include_cover=args.cover
    )

    if record is None:
        print(f"No provider found for {args.specialty} on {on_call_date}")
        return 2

    default_country = config.get("phone", {}).get("default_country", "US")
    if record.get("phone_number"):
        record["phone_links"] = generate_phone_links(record["phone_number"], default_country)

    if record.get("second_phone"):
        record["second_phone_label"] = second_phone_label(record.get("second_phone_source"))

    print(json.dumps(record, indent=2, default=str))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="OnCall Directory provider search and on-call lookup")
    parser.add_argument("--config", default="config/oncall_directory.yaml", help="Configuration file path")
    parser.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    parser.add_argument("--log-file", help="Also write logs to this file")

    subparsers = parser.add_subparsers(dest="command", required=True)

    search_parser = subparsers.add_parser("search", help="Rank providers by name")
    search_parser.add_argument("--directory", required=True, help="Directory data path")
    search_parser.add_argument("--query", required=True, help="Provider name query")
    search_parser.add_argument("--specialty", help="Restrict to one specialty")
    search_parser.add_argument("--limit", type=int, help="Maximum number of results")

    oncall_parser = subparsers.add_parser("oncall", help="Resolve the on-call provider")
    oncall_parser.add_argument("--schedules", required=True, help="Schedule data path")
    oncall_parser.add_argument("--directory", required=True, help="Directory data path")
    oncall_parser.add_argument("--date", help="On-call date (YYYY-MM-DD), defaults to the current on-call day")
    oncall_parser.add_argument("--specialty", required=True, help="Specialty name")
    oncall_parser.add_argument("--plan", help="Healthcare plan")
    oncall_parser.add_argument("--second-phone", action="store_true", help="Include PA/residency phone")
    oncall_parser.add_argument("--second-phone-pref", choices=list(SECOND_PHONE_PREFERENCES),
                               help="Second phone preference")
    oncall_parser.add_argument("--cover", action="store_true", help="Include covering provider phone")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for OnCall Directory."""
    parser = build_parser()
    args = parser.parse_args(argv)

    handlers = [logging.StreamHandler()]
    if args.log_file:
        Path(args.log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(args.log_file))

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=handlers
    )

    config = load_config(args.config)
    if not validate_config(config):
        logger.error(f"Invalid configuration in {args.config}")
        return 1

    commands = {"search": run_search, "oncall": run_oncall}

    try:
        return commands[args.command](args, config)
    except (OSError, ValueError) as e:
        logger.error(f"{args.command} failed: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
