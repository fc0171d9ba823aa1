"""Command-line interface for feed-mirror."""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from feed_mirror.aggregators import (
    DEFAULT_CONCURRENCY,
    ArticleFetcher,
    BatchScheduler,
)
from feed_mirror.clients import ArticleClient, is_session_expired
from feed_mirror.storage import (
    DEFAULT_CAPACITY_BYTES,
    FileBlobWriter,
    JsonContentStore,
    JsonQuotaLedger,
)

DEFAULT_DATA_DIR = Path("./data")
MAX_BATCH_SIZE = 500

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_SESSION_EXPIRED = 2


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for the CLI."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
    )


def build_fetcher(
    client: ArticleClient,
    data_dir: Path,
    capacity: int = DEFAULT_CAPACITY_BYTES,
) -> ArticleFetcher:
    """Wire an ArticleFetcher to the file-backed collaborators under data_dir."""
    return ArticleFetcher(
        client=client,
        content_store=JsonContentStore(data_dir),
        quota_gate=JsonQuotaLedger(data_dir / "quota.json", default_capacity=capacity),
        blob_writer=FileBlobWriter(data_dir),
    )


def read_urls(args: argparse.Namespace) -> list[str]:
    """Collect article URLs from positional arguments and an optional input file.

    Blank lines and lines starting with '#' in the input file are ignored.
    """
    urls = list(args.urls or [])
    if args.input is not None:
        for line in args.input.read_text().splitlines():
            line = line.strip()
            if line and not line.startswith("#"):
                urls.append(line)
    return urls


def fetch_article(args: argparse.Namespace) -> int:
    """Execute the fetch-article command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, 1 for errors, 2 if the session expired)
    """
    setup_logging(args.verbose)
    logger = logging.getLogger(__name__)

    async def run():
        async with ArticleClient() as client:
            fetcher = build_fetcher(client, args.data_dir, args.capacity)
            return await fetcher.fetch_article(args.account, args.source, args.url)

    try:
        result = asyncio.run(run())
    except Exception as e:
        if is_session_expired(e):
            logger.error("Upstream session expired")
            return EXIT_SESSION_EXPIRED
        logger.error(f"Failed to fetch article: {e}")
        return EXIT_FAILED

    if result.from_cache:
        logger.info(f"Already downloaded: {result.title}")
    else:
        logger.info(f"Downloaded: {result.title}")
        logger.info(f"  Images: {result.harvested_count}")
        if result.failed_resource_urls:
            logger.warning(f"  Failed images: {len(result.failed_resource_urls)}")
            for url in result.failed_resource_urls:
                logger.warning(f"    - {url}")
    logger.info(f"  Output: {result.local_path}")

    return EXIT_OK


def batch_download(args: argparse.Namespace) -> int:
    """Execute the batch-download command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, 1 for errors, 2 if the session expired)
    """
    setup_logging(args.verbose)
    logger = logging.getLogger(__name__)

    try:
        urls = read_urls(args)
    except OSError as e:
        logger.error(f"Cannot read URL list: {e}")
        return EXIT_FAILED

    if not urls:
        logger.error("No article URLs given")
        return EXIT_FAILED

    if len(urls) > MAX_BATCH_SIZE:
        logger.error(f"Maximum {MAX_BATCH_SIZE} URLs per batch, got {len(urls)}")
        return EXIT_FAILED

    async def run():
        async with ArticleClient() as client:
            fetcher = build_fetcher(client, args.data_dir, args.capacity)
            scheduler = BatchScheduler(fetcher, fetcher.content_store)
            return await scheduler.run_batch(
                args.account, args.source, urls, concurrency=args.concurrency
            )

    try:
        outcome = asyncio.run(run())
    except Exception as e:
        logger.error(f"Batch download failed: {e}")
        return EXIT_FAILED

    if args.json:
        print(outcome.model_dump_json(indent=2, exclude_none=True))

    logger.info(f"Batch complete: {outcome.total} articles")
    logger.info(f"  Completed: {outcome.completed_count}")
    logger.info(f"  Skipped: {outcome.skipped_count}")
    logger.info(f"  Failed: {outcome.failed_count}")
    for item in outcome.results:
        if item.status == "failed":
            logger.warning(f"    - {item.url}: {item.error}")

    if outcome.session_expired:
        logger.error("Upstream session expired; remaining articles were not downloaded")
        return EXIT_SESSION_EXPIRED

    return EXIT_OK


def show_article(args: argparse.Namespace) -> int:
    """Execute the show command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, non-zero if the article is not cached)
    """
    setup_logging(args.verbose)
    logger = logging.getLogger(__name__)

    store = JsonContentStore(args.data_dir)
    document = store.get_cached_document(args.account, args.url)
    if document is None:
        logger.error(f"Article not downloaded: {args.url}")
        return EXIT_FAILED

    if args.html:
        blobs = FileBlobWriter(args.data_dir)
        path = Path(document.local_path)
        if not blobs.exists(path):
            logger.error(f"Stored document missing: {path}")
            return EXIT_FAILED
        sys.stdout.write(blobs.read(path).decode("utf-8"))
        return EXIT_OK

    logger.info(f"Title: {document.title}")
    if document.comment_id:
        logger.info(f"  Comment id: {document.comment_id}")
    logger.info(f"  Source: {document.source_key}")
    logger.info(f"  Size: {document.byte_size} bytes")
    logger.info(f"  Output: {document.local_path}")

    resource_map = store.get_resource_map(args.account, args.url)
    if resource_map is not None:
        logger.info(f"  Images: {len(resource_map.mapping)}")

    return EXIT_OK


def show_quota(args: argparse.Namespace) -> int:
    """Execute the quota command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code
    """
    setup_logging(args.verbose)
    logger = logging.getLogger(__name__)

    ledger_store = JsonQuotaLedger(args.data_dir / "quota.json", default_capacity=args.capacity)

    try:
        if args.set_capacity is not None:
            ledger = ledger_store.set_capacity(args.account, args.set_capacity)
        else:
            ledger = ledger_store.get_ledger(args.account)
    except ValueError as e:
        logger.error(f"Invalid capacity: {e}")
        return EXIT_FAILED

    logger.info(f"Account {ledger.account_id}")
    logger.info(f"  Capacity: {ledger.capacity_bytes} bytes")
    logger.info(f"  Used: {ledger.used_bytes} bytes")
    logger.info(f"  Remaining: {ledger.remaining_bytes} bytes")

    return EXIT_OK


def _add_account_arguments(parser: argparse.ArgumentParser, source: bool = True) -> None:
    parser.add_argument(
        "--account",
        type=str,
        required=True,
        help="Local account the articles are stored for",
    )
    if source:
        parser.add_argument(
            "--source",
            type=str,
            required=True,
            help="Upstream source account key the articles belong to",
        )


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code
    """
    parser = argparse.ArgumentParser(
        prog="feed-mirror",
        description="Mirror public articles and their images into local storage",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose output",
    )
    parser.add_argument(
        "--data-dir",
        type=Path,
        default=DEFAULT_DATA_DIR,
        help=f"Directory for stored articles, indexes and quota (default: {DEFAULT_DATA_DIR})",
    )
    parser.add_argument(
        "--capacity",
        type=int,
        default=DEFAULT_CAPACITY_BYTES,
        help=f"Storage quota in bytes for accounts without one (default: {DEFAULT_CAPACITY_BYTES})",
    )

    subparsers = parser.add_subparsers(
        title="commands",
        description="Available commands",
        dest="command",
    )

    fetch_parser = subparsers.add_parser(
        "fetch-article",
        help="Download a single article",
        description="Download one article, harvest its CDN images and store a rewritten local copy.",
    )
    _add_account_arguments(fetch_parser)
    fetch_parser.add_argument("url", help="Article URL")
    fetch_parser.set_defaults(func=fetch_article)

    batch_parser = subparsers.add_parser(
        "batch-download",
        help="Download many articles",
        description="Download a list of articles with bounded concurrency, skipping ones already stored.",
    )
    _add_account_arguments(batch_parser)
    batch_parser.add_argument("urls", nargs="*", help="Article URLs")
    batch_parser.add_argument(
        "--input",
        type=Path,
        default=None,
        help="File with one article URL per line",
    )
    batch_parser.add_argument(
        "--concurrency",
        type=int,
        default=DEFAULT_CONCURRENCY,
        help=f"Parallel downloads, clamped to 1-3 (default: {DEFAULT_CONCURRENCY})",
    )
    batch_parser.add_argument(
        "--json",
        action="store_true",
        help="Print the batch outcome as JSON",
    )
    batch_parser.set_defaults(func=batch_download)

    show_parser = subparsers.add_parser(
        "show",
        help="Show a downloaded article",
        description="Print the stored metadata of a downloaded article, or its HTML.",
    )
    _add_account_arguments(show_parser, source=False)
    show_parser.add_argument("url", help="Article URL")
    show_parser.add_argument(
        "--html",
        action="store_true",
        help="Print the stored HTML document",
    )
    show_parser.set_defaults(func=show_article)

    quota_parser = subparsers.add_parser(
        "quota",
        help="Show or set an account's storage quota",
        description="Show an account's storage usage, optionally setting its capacity.",
    )
    _add_account_arguments(quota_parser, source=False)
    quota_parser.add_argument(
        "--set-capacity",
        type=int,
        default=None,
        help="New capacity in bytes",
    )
    quota_parser.set_defaults(func=show_quota)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_OK

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
