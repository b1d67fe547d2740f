"""
Command-line entry point for the s3bench load generator.
"""

import argparse
import logging
import sys
from typing import List, Optional

import uvloop

from s3bench.configuration import (
    AWS_REGION,
    BUCKET_NAME,
    DEFAULT_GET_CONCURRENCY,
    DEFAULT_GET_COUNT_PER_THREAD,
    DEFAULT_LOG_LEVEL,
    DEFAULT_PUT_CONCURRENCY,
    DEFAULT_PUT_COUNT_PER_THREAD,
    EMPTY_LISTING_BACKOFF_SECONDS,
    S3_ENDPOINT,
)
from s3bench.common.workload import WorkloadConfig

logger = logging.getLogger(__name__)


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value}")
    return number


def _non_negative_int(value: str) -> int:
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f"expected a non-negative integer, got {value}")
    return number


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='s3bench',
        description='Concurrent PUT/GET load generator for S3-compatible object storage',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # 4 writers x 10 objects, 8 readers x 20 reads against MinIO
  s3bench --endpoint http://localhost:9000 -b bench -r run1 \\
      --put-concurrency 4 --put-count-per-thread 10 \\
      --get-concurrency 8 --get-count-per-thread 20

  # Read-only run that gives up if the prefix stays empty for 30 listings
  s3bench -b bench -r run1 --put-concurrency 0 --max-empty-listings 30
        """
    )
    parser.add_argument('-e', '--endpoint', default=S3_ENDPOINT,
                        help='Endpoint URL (default: $S3_ENDPOINT, else the AWS regional endpoint)')
    parser.add_argument('--region', default=AWS_REGION,
                        help=f'Region name (default: {AWS_REGION})')
    parser.add_argument('-b', '--bucket', default=BUCKET_NAME, required=not BUCKET_NAME,
                        help='Bucket to write to and read from (default: $BUCKET_NAME)')
    parser.add_argument('-r', '--root-prefix', required=True,
                        help='Key prefix for written objects and listings')
    parser.add_argument('--put-concurrency', type=_non_negative_int, default=DEFAULT_PUT_CONCURRENCY,
                        help=f'Number of PUT workers (default: {DEFAULT_PUT_CONCURRENCY})')
    parser.add_argument('--put-count-per-thread', type=_non_negative_int,
                        default=DEFAULT_PUT_COUNT_PER_THREAD,
                        help=f'PUTs per worker (default: {DEFAULT_PUT_COUNT_PER_THREAD})')
    parser.add_argument('--get-concurrency', type=_non_negative_int, default=DEFAULT_GET_CONCURRENCY,
                        help=f'Number of GET workers (default: {DEFAULT_GET_CONCURRENCY})')
    parser.add_argument('--get-count-per-thread', type=_non_negative_int,
                        default=DEFAULT_GET_COUNT_PER_THREAD,
                        help=f'Successful GETs per worker (default: {DEFAULT_GET_COUNT_PER_THREAD})')
    parser.add_argument('--max-empty-listings', type=_positive_int, default=None,
                        help='Stop a GET worker after this many consecutive empty listings '
                             '(default: wait forever)')
    parser.add_argument('--empty-listing-backoff', type=float, default=EMPTY_LISTING_BACKOFF_SECONDS,
                        help=f'Seconds to wait after an empty listing (default: {EMPTY_LISTING_BACKOFF_SECONDS})')
    parser.add_argument('--output-dir', default=None,
                        help='Save raw stats as Parquet into this directory')
    parser.add_argument('--log-level', default=DEFAULT_LOG_LEVEL,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        help=f'Log level (default: {DEFAULT_LOG_LEVEL})')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Log the timing of every operation')
    return parser


def workload_from_args(args: argparse.Namespace) -> WorkloadConfig:
    return WorkloadConfig(
        bucket=args.bucket,
        prefix=args.root_prefix,
        put_concurrency=args.put_concurrency,
        put_count=args.put_count_per_thread,
        get_concurrency=args.get_concurrency,
        get_count=args.get_count_per_thread,
        verbose=args.verbose,
        max_empty_listings=args.max_empty_listings,
        empty_listing_backoff=args.empty_listing_backoff,
    )


def create_runner(args: argparse.Namespace):
    """Build the load runner from parsed arguments. Raises ValueError on bad settings."""
    from s3bench.common.storage_factory import create_object_store
    from s3bench.runner import LoadRunner

    config = workload_from_args(args)
    store = create_object_store(args.endpoint, args.region, workers=config.total_workers)
    return LoadRunner(store, config, output_dir=args.output_dir)


async def main_async(runner) -> int:
    await runner.run()
    return 0


def main(argv: Optional[List[str]] = None):
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    # Set up logging (only if not already configured)
    if not logging.root.handlers:
        logging.basicConfig(
            level=getattr(logging, args.log_level),
            format="%(asctime)s - %(levelname)s - %(message)s",
        )

    try:
        runner = create_runner(args)
    except ValueError as e:
        parser.error(str(e))

    try:
        sys.exit(uvloop.run(main_async(runner)))
    except KeyboardInterrupt:
        logger.info("Load run interrupted by user")
        sys.exit(130)


if __name__ == "__main__":
    main()
