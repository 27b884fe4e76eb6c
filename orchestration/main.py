# /orchestration/main.py

import argparse
import logging
import os
import sys
from typing import List, Optional

# Ensure project root is discoverable if running main.py directly
current_dir = os.path.dirname(os.path.abspath(__file__))
project_root = os.path.dirname(current_dir)
if project_root not in sys.path:
    sys.path.insert(0, project_root)

# --- Absolute imports now should work ---
import config
from data_collection.credentials import Credentials
from data_collection.delimited import SEPARATORS
from data_collection.twitter_client import TwitterClient
from training.labeler import label_file
from utils.exceptions import TweetLabelError, UnrecognizedLabelError

log = logging.getLogger(__name__)


def setup_logging(level: str = config.LOG_LEVEL) -> None:
    # stderr: stdout carries the operator prompts while labeling.
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format='%(asctime)s - %(levelname)s [%(name)s:%(lineno)d] %(message)s',
        handlers=[logging.StreamHandler(sys.stderr)]
    )
    # Mute overly verbose libraries
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def run_search(args: argparse.Namespace) -> int:
    """Acquire a bearer token, run one search and write the results."""
    credentials = Credentials.from_env()
    with TwitterClient(credentials) as client:
        client.get_access_token()

        output_dir = os.path.dirname(args.output)
        if output_dir:
            os.makedirs(output_dir, exist_ok=True)

        result = client.search_to_file(args.query, args.output, SEPARATORS[args.format], count=args.count)
    if args.show:
        result.show(sys.stdout)
    log.info(f"Search for {args.query!r} saved {len(result)} tweets to {args.output}")
    return 0


def run_label(args: argparse.Namespace) -> int:
    """Interactive labeling pass from the search output into the labeled file."""
    stats = label_file(args.source, args.output, sys.stdin, sys.stdout)
    log.info(f"Labeled {stats.labeled} of {stats.read} records into {args.output}")
    return 0


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="tweetlabel",
        description="Collect tweets from the search API and label their sentiment by hand"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    search_parser = subparsers.add_parser("search", help="Search tweets and write them to a delimited file")
    search_parser.add_argument("query", help="Search query, e.g. '\"some phrase\" -RT'")
    search_parser.add_argument(
        "--output",
        default=config.SEARCH_OUTPUT_PATH,
        help=f"Output file (default: {config.SEARCH_OUTPUT_PATH})"
    )
    search_parser.add_argument(
        "--format",
        choices=sorted(SEPARATORS),
        default="tsv",
        help="csv joins fields with ',', tsv with ',<tab>' (default: tsv)"
    )
    search_parser.add_argument(
        "--count",
        type=int,
        default=config.TWITTER_SEARCH_COUNT,
        help=f"Results to request, single page (default: {config.TWITTER_SEARCH_COUNT})"
    )
    search_parser.add_argument("--show", action="store_true", help="Also print the results to stdout")
    search_parser.set_defaults(handler=run_search)

    label_parser = subparsers.add_parser("label", help="Label tweets from a search output file")
    label_parser.add_argument(
        "--source",
        default=config.SEARCH_OUTPUT_PATH,
        help=f"Tab separated search output (default: {config.SEARCH_OUTPUT_PATH})"
    )
    label_parser.add_argument(
        "--output",
        default=config.LABELED_OUTPUT_PATH,
        help=f"Labeled output file (default: {config.LABELED_OUTPUT_PATH})"
    )
    label_parser.set_defaults(handler=run_label)

    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point. Returns the process exit status."""
    args = parse_args(argv)
    setup_logging()

    try:
        return args.handler(args)
    except UnrecognizedLabelError as e:
        log.error(f"Interrupted: {e}")
        return 1
    except TweetLabelError as e:
        log.critical(f"{type(e).__name__}: {e}")
        return 1
    except OSError as e:
        log.critical(f"File error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
