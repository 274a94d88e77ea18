"""Seedpick: CLI torrent search, selection and download."""

import argparse
import logging
import sys
from pathlib import Path
from typing import TextIO

from rich.console import Console

from .config import ConfigManager, Settings
from .errors import SeedpickError, SelectionCancelled
from .launcher import Launcher
from .models import ALL_SOURCES, LaunchOutcome, SearchRequest
from .render import render
from .search import SearchUpdate, search
from .selector import Selector
from .sources import BUILTIN_SOURCES, SourceRegistry, build_registry

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s:%(lineno)d %(message)s"


def setup_logging(verbose: bool = False) -> None:
    """Send logs to stderr, at debug level when verbose."""
    logging.basicConfig(
        format=LOG_FORMAT,
        level=logging.DEBUG if verbose else logging.WARNING,
        stream=sys.stderr,
    )
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def run_pipeline(
    request: SearchRequest,
    registry: SourceRegistry,
    settings: Settings,
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
) -> LaunchOutcome | None:
    """Search, let the user pick a result, then download and open it.

    Returns None when nothing was found.
    """
    stdout = sys.stdout if stdout is None else stdout

    def report(update: SearchUpdate) -> None:
        if update.error is None:
            print(f"  {update.source}: {len(update.results)} results", file=stdout)
        elif request.all_sources:
            # A single failing source is reported as the run's error
            print(f"Warning: {update.error}", file=stdout)

    print(f"Searching for '{request.query}'...", file=stdout)
    result, _ = search(registry, request, timeout=settings.timeout, on_update=report)

    if not result:
        print(f"No results for '{request.query}'", file=stdout)
        return None

    render(result, Console(file=stdout))
    index = Selector(stdin, stdout).choose(len(result))
    return Launcher(registry, settings.client, stdout).execute(result[index])


def cmd_search(args, stdin: TextIO | None = None, stdout: TextIO | None = None) -> int:
    """Handle the search command."""
    manager = ConfigManager(args.config)
    settings = manager.load_settings()
    request = SearchRequest.create(
        " ".join(args.query), args.website or settings.default_source
    )
    registry = build_registry(manager.load_enabled(), settings.download_dir)

    run_pipeline(request, registry, settings, stdin=stdin, stdout=stdout)
    return 0


def cmd_sites(args, stdout: TextIO | None = None) -> int:
    """Handle the sites command - list built-in and configured sites."""
    stdout = sys.stdout if stdout is None else stdout
    manager = ConfigManager(args.config)
    sites = manager.load_all() if args.all else manager.load_enabled()

    print("Built-in sources:\n", file=stdout)
    for cls in BUILTIN_SOURCES:
        print(f"  {cls.key}: {cls.name}", file=stdout)

    if not sites:
        print(f"\nNo configured sites in {manager.config_path}.", file=stdout)
        return 0

    print("\nConfigured sites:\n", file=stdout)
    for key, config in sites.items():
        status = "enabled" if config.enabled else "disabled"
        print(f"  {key}: {config.name} ({config.base_url}) [{status}]", file=stdout)
    return 0


def cmd_remove(args, stdout: TextIO | None = None) -> int:
    """Handle the remove command - remove a site."""
    stdout = sys.stdout if stdout is None else stdout
    if ConfigManager(args.config).remove(args.name):
        print(f"Removed site '{args.name}'", file=stdout)
        return 0
    print(f"Site '{args.name}' not found", file=stdout)
    return 1


def cmd_enable(args, stdout: TextIO | None = None) -> int:
    """Handle the enable command - enable a site."""
    return _set_enabled(args, True, stdout)


def cmd_disable(args, stdout: TextIO | None = None) -> int:
    """Handle the disable command - disable a site."""
    return _set_enabled(args, False, stdout)


def _set_enabled(args, enabled: bool, stdout: TextIO | None) -> int:
    stdout = sys.stdout if stdout is None else stdout
    action = "Enabled" if enabled else "Disabled"
    if ConfigManager(args.config).set_enabled(args.name, enabled):
        print(f"{action} site '{args.name}'", file=stdout)
        return 0
    print(f"Site '{args.name}' not found", file=stdout)
    return 1


def build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--config", type=Path, default=None, help="Configuration file to use"
    )
    common.add_argument(
        "-v", "--verbose", action="store_true", help="Show debug logging"
    )

    parser = argparse.ArgumentParser(
        prog="seedpick",
        description="Seedpick: search torrent sites, pick a result, open it in your client",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Search command (default when no command is given)
    search_parser = subparsers.add_parser(
        "search", parents=[common], help="Search for torrents"
    )
    search_parser.add_argument("query", nargs="+", help="Search query")
    search_parser.add_argument(
        "-w",
        "--website",
        default=None,
        help=f"Source to search, or '{ALL_SOURCES}' (default: from config, else all)",
    )
    search_parser.set_defaults(func=cmd_search)

    sites_parser = subparsers.add_parser(
        "sites", parents=[common], help="List available sources"
    )
    sites_parser.add_argument(
        "-a", "--all", action="store_true", help="Include disabled sites"
    )
    sites_parser.set_defaults(func=cmd_sites)

    remove_parser = subparsers.add_parser(
        "remove", parents=[common], help="Remove a configured site"
    )
    remove_parser.add_argument("name", help="Site key to remove")
    remove_parser.set_defaults(func=cmd_remove)

    enable_parser = subparsers.add_parser(
        "enable", parents=[common], help="Enable a configured site"
    )
    enable_parser.add_argument("name", help="Site key to enable")
    enable_parser.set_defaults(func=cmd_enable)

    disable_parser = subparsers.add_parser(
        "disable", parents=[common], help="Disable a configured site"
    )
    disable_parser.add_argument("name", help="Site key to disable")
    disable_parser.set_defaults(func=cmd_disable)

    return parser


COMMANDS = {"search", "sites", "remove", "enable", "disable"}
HELP_FLAGS = {"-h", "--help"}
WEBSITE_FLAGS = ("-w", "--website")


def route(argv: list[str]) -> list[str]:
    """Put the command first so options may precede it.

    Anything that doesn't name a command, or that picks a website, is a search.
    """
    if not argv or argv[0] in COMMANDS or argv[0] in HELP_FLAGS:
        return argv

    i = 0
    while i < len(argv):
        arg = argv[i]
        if arg.startswith(WEBSITE_FLAGS):
            break
        if arg == "--config":
            i += 2
        elif arg.startswith("-") and arg != "-":
            i += 1
        else:
            if arg in COMMANDS:
                return [arg, *argv[:i], *argv[i + 1 :]]
            break
    return ["search", *argv]


def main(argv: list[str] | None = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    parser = build_parser()

    args = parser.parse_args(route(argv))
    if args.command is None:
        parser.print_help()
        return 2

    setup_logging(args.verbose)
    try:
        return args.func(args)
    except SelectionCancelled:
        return 0
    except SeedpickError as e:
        logger.debug("Run failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return e.exit_code
    except KeyboardInterrupt:
        print(file=sys.stderr)
        return 130


def run() -> None:
    """Console script entry point."""
    sys.exit(main())
