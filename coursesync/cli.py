"""
Command-line front end for Course Sync.

Fetches the course sync selection, applies --deselect/--select paths and
prints the resulting tree (or JSON).
"""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Optional

from .canvas import CanvasClient, PreviewProvider, check_network
from .config import CanvasClientConfig, load_env_file
from .errors import ConfigError, CourseSyncError
from .sync import CourseSyncInteractor, SelectionStore, parse_selection
from .ui import format_selected_count, render_selection_tree, supports_color

logger = logging.getLogger(__name__)

EXIT_FETCH_FAILED = 1
EXIT_USAGE = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="course-sync",
        description="Show and adjust which Canvas course content is selected for offline sync.",
    )
    parser.add_argument("--url", help="Canvas base URL (default: $CANVAS_URL)")
    parser.add_argument("--token", help="Canvas access token (default: $CANVAS_TOKEN)")
    parser.add_argument(
        "--env-file", type=Path, default=Path(".env"),
        help="Read environment variables from this file (default: .env)",
    )
    parser.add_argument("--preview", action="store_true", help="Use built-in demo data instead of Canvas")
    parser.add_argument(
        "--deselect", action="append", default=[], metavar="SEL",
        help="Deselect a course (N), tab (N:tab:M) or file (N:file:M). Repeatable.",
    )
    parser.add_argument(
        "--select", action="append", default=[], metavar="SEL",
        help="Select a course, tab or file. Applied after --deselect. Repeatable.",
    )
    parser.add_argument("--json", action="store_true", help="Print the selection as JSON")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument("--log-file", type=Path, help="Also write logs to this file")
    return parser


def setup_logging(verbose: bool, log_file: Optional[Path] = None):
    handlers = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="[%(asctime)s] %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        handlers=handlers,
        force=True,
    )


async def fetch_entries(
    provider,
    store: SelectionStore,
    max_retries: int = 3,
    retry_delay: float = 1.0,
) -> list:
    """Run one fetch, opening the provider's session if it has one."""
    interactor = CourseSyncInteractor(
        provider, store=store, max_retries=max_retries, retry_delay=retry_delay,
    )
    if isinstance(provider, CanvasClient):
        async with provider:
            entries = await interactor.get_course_sync_entries()
        logger.info("%d API calls", provider.api_calls)
        return entries
    return await interactor.get_course_sync_entries()


def apply_selections(store: SelectionStore, deselect: list, select: list):
    """
    Apply selection paths in order: all deselects, then all selects.

    Raises:
        ValueError: Malformed path
        IndexError: Path points at nothing
    """
    for flag, paths in ((False, deselect), (True, select)):
        for text in paths:
            store.set_selected(parse_selection(text), flag)


def main(argv: Optional[list] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose, args.log_file)

    if args.preview:
        provider = PreviewProvider.demo()
        retry_settings = {}
    else:
        load_env_file(args.env_file)
        try:
            config = CanvasClientConfig.from_env(base_url=args.url, access_token=args.token)
        except ConfigError as e:
            print(f"Error: {e}", file=sys.stderr)
            return EXIT_USAGE

        is_online, network_error = check_network(config.base_url)
        if not is_online:
            print(f"Error: {network_error}", file=sys.stderr)
            return EXIT_FETCH_FAILED
        provider = CanvasClient(config)
        retry_settings = {"max_retries": config.max_retries, "retry_delay": config.retry_delay}

    store = SelectionStore()
    counts = store.observe_selected_count()

    try:
        asyncio.run(fetch_entries(provider, store, **retry_settings))
    except CourseSyncError as e:
        print(f"Error: could not load courses ({e}). Please try again.", file=sys.stderr)
        return EXIT_FETCH_FAILED
    except KeyboardInterrupt:
        print("\nCancelled.", file=sys.stderr)
        return EXIT_FETCH_FAILED

    try:
        apply_selections(store, args.deselect, args.select)
    except (ValueError, IndexError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_USAGE
    finally:
        counts.close()

    history = list(counts)
    logger.debug("Selected count history: %s", history)

    if args.json:
        print(json.dumps({
            "entries": [entry.to_dict() for entry in store.entries],
            "selected_count": store.selected_count,
        }, indent=2))
        return 0

    entries = store.entries
    if not entries:
        print("No active courses.")
        return 0

    print(render_selection_tree(entries, color=supports_color()))
    print()
    print(format_selected_count(store.selected_count))
    return 0


if __name__ == "__main__":
    sys.exit(main())
