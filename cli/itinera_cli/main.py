"""Main entry point for Itinera CLI."""
from __future__ import annotations

import asyncio
import sys
from pathlib import Path

from itinera.kernel.converter import HtmlFactory
from itinera.kernel.errors import ItineraError
from itinera.kernel.loader import LayoutLoader
from itinera.kernel.mock_stream import DEFAULT_CHUNK_SIZE, DELAY_PROFILES, EXAMPLES_DIR, MockStream
from itinera.kernel.registry import LayoutRegistry
from itinera.kernel.repair import repair_json
from itinera.kernel.session import RenderSession
from itinera_cli import __version__
from server.config import configure_logging, settings


def print_help():
    """Print help message."""
    print(f"""
Itinera CLI v{__version__}

Usage:
  itinera [options] <command> FILE

Commands:
  convert FILE      Render a JSON document to HTML (layout chosen by its `type`)
  stream FILE       Feed FILE chunk by chunk through a render session
  repair FILE       Print the closed JSON for a truncated document

Options:
  --chunk-size N    Characters per chunk for `stream` (default: {DEFAULT_CHUNK_SIZE})
  --profile P       Delay profile for `stream`: {", ".join(DELAY_PROFILES)} (default: instant)
  --graph           Print the layout graph and current/next blocks after each chunk
  -h, --help        Show this help
  -v, --version     Show version

FILE may be a path or the name of a bundled example ({", ".join(MockStream().list_examples())}).

Environment:
  LOG_LEVEL                 Logging level (default: INFO)
  ITINERA_ON_BLOCK_ERROR    emit_marker | silent
  ITINERA_RESET_POLICY      per_chunk | per_session

Examples:
  itinera convert trip.json > trip.html
  itinera stream trip-plan --chunk-size 20 --graph
  itinera repair partial.json
""")


def parse_args(args: list[str]) -> dict:
    """
    Parse command line arguments.

    Returns dict with:
        command: str | None (convert, stream, repair)
        file: str | None
        chunk_size: int
        profile: str
        graph: bool
        show_help: bool
        show_version: bool
    """
    result = {
        "command": None,
        "file": None,
        "chunk_size": DEFAULT_CHUNK_SIZE,
        "profile": "instant",
        "graph": False,
        "show_help": False,
        "show_version": False,
    }

    i = 0
    while i < len(args):
        arg = args[i]

        if arg in ("convert", "stream", "repair") and result["command"] is None:
            result["command"] = arg
        elif arg == "--chunk-size":
            if i + 1 < len(args) and args[i + 1].isdigit() and int(args[i + 1]) > 0:
                result["chunk_size"] = int(args[i + 1])
                i += 1
            else:
                print("Error: --chunk-size requires a positive integer")
                sys.exit(1)
        elif arg == "--profile":
            if i + 1 < len(args) and args[i + 1] in DELAY_PROFILES:
                result["profile"] = args[i + 1]
                i += 1
            else:
                print(f"Error: --profile requires one of: {', '.join(DELAY_PROFILES)}")
                sys.exit(1)
        elif arg == "--graph":
            result["graph"] = True
        elif arg in ("--help", "-h"):
            result["show_help"] = True
        elif arg in ("--version", "-v"):
            result["show_version"] = True
        elif arg.startswith("-"):
            print(f"Unknown option: {arg}")
            print("Run 'itinera --help' for usage.")
            sys.exit(1)
        elif result["command"] is not None and result["file"] is None:
            result["file"] = arg
        else:
            print(f"Unknown command: {arg}")
            print("Run 'itinera --help' for usage.")
            sys.exit(1)

        i += 1

    return result


def resolve_source(file: str) -> tuple[Path, str]:
    """
    Map FILE to (examples directory, example name) for MockStream.

    An existing .json path is used as is; anything else is looked up among the
    bundled examples.
    """
    path = Path(file)
    if path.is_file() and path.suffix == ".json":
        return path.parent, path.stem
    return EXAMPLES_DIR, path.stem


def read_source(file: str) -> str:
    path = Path(file)
    if path.is_file():
        return path.read_text(encoding="utf-8")
    return MockStream().read_example(path.stem)


def new_loader() -> LayoutLoader:
    return LayoutLoader(LayoutRegistry())


async def run_convert(text: str) -> str:
    factory = HtmlFactory(new_loader(), settings.ON_BLOCK_ERROR)
    return await factory.create(text)


async def run_stream(file: str, chunk_size: int, profile: str, show_graph: bool) -> str:
    directory, name = resolve_source(file)
    session = RenderSession(new_loader(), settings.session_options())

    chunks = 0
    async for chunk in MockStream(directory).stream(name, profile=profile, chunk_size=chunk_size):
        await session.feed(chunk)
        chunks += 1
        if show_graph:
            snapshot = session.snapshot()
            print(f"--- chunk {chunks} [{snapshot['phase']}] ---")
            if snapshot["layout_graph"]:
                print(snapshot["layout_graph"])
            else:
                print(f"[Layout: {snapshot['layout']}]")
            print(f"  current: {snapshot['current_node'] or '-'}")
            print(f"  next:    {', '.join(snapshot['next_nodes']) or '-'}")

    if show_graph:
        print(f"--- done: {chunks} chunks ---")
    return session.state.html_output


def main():
    """Main entry point."""
    args = parse_args(sys.argv[1:])

    # Handle help and version first
    if args["show_help"]:
        print_help()
        return

    if args["show_version"]:
        print(f"itinera {__version__}")
        return

    if args["command"] is None:
        print_help()
        sys.exit(1)

    if args["file"] is None:
        print(f"Error: {args['command']} requires a FILE")
        sys.exit(1)

    configure_logging()

    try:
        if args["command"] == "repair":
            print(repair_json(read_source(args["file"])))
        elif args["command"] == "convert":
            print(asyncio.run(run_convert(read_source(args["file"]))))
        elif args["command"] == "stream":
            html = asyncio.run(run_stream(args["file"], args["chunk_size"], args["profile"], args["graph"]))
            print(html)
    except FileNotFoundError as e:
        print(f"Error: {e}")
        sys.exit(1)
    except ItineraError as e:
        print(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
