"""Command-line front end.

Usage:
    python -m plainly explain "Some fine print to decode"
    python -m plainly explain --file contract.pdf
    python -m plainly explain "Some text" --mode cloud --refresh
    python -m plainly history list
    python -m plainly history show <id>
    python -m plainly history remove <id>
    python -m plainly history clear
    python -m plainly config --json
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
from pathlib import Path
import sys
import uuid

from plainly.config import config_info, resolve_config
from plainly.core.exceptions import PlainlyError
from plainly.core.types import ErrorState, ProcessingMode, ResultState
from plainly.frontdoor import PlainlyApp, create_app
from plainly.ingest import (
    from_user_text,
    representation_for_path,
    resolve_shared_item,
)

MODE_CHOICES = {
    "on-device": ProcessingMode.ON_DEVICE,
    "cloud": ProcessingMode.CLOUD,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Explain text, links, media, documents and code in plain English",
        prog="python -m plainly",
    )
    parser.add_argument("--profile", help="Configuration profile to use")
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )
    commands = parser.add_subparsers(dest="command", required=True)

    explain = commands.add_parser("explain", help="Explain one input")
    source = explain.add_mutually_exclusive_group(required=True)
    source.add_argument("text", nargs="?", help="Text or URL to explain")
    source.add_argument("--file", type=Path, help="File to explain")
    explain.add_argument(
        "--mode",
        choices=sorted(MODE_CHOICES),
        help="Processing mode (only plain text may run on device)",
    )
    explain.add_argument(
        "--refresh",
        action="store_true",
        help="Skip any cached result and fetch a fresh explanation",
    )

    history = commands.add_parser("history", help="Inspect saved explanations")
    history_commands = history.add_subparsers(dest="history_command", required=True)
    history_commands.add_parser("list", help="List saved explanations")
    show = history_commands.add_parser("show", help="Print one saved explanation")
    show.add_argument("id", type=uuid.UUID)
    remove = history_commands.add_parser("remove", help="Delete one saved explanation")
    remove.add_argument("id", type=uuid.UUID)
    history_commands.add_parser("clear", help="Delete every saved explanation")

    config = commands.add_parser("config", help="Show resolved configuration")
    config.add_argument(
        "--json",
        action="store_true",
        help="Output as JSON instead of human-readable format",
    )
    return parser


async def _explain(app: PlainlyApp, args: argparse.Namespace) -> int:
    if args.file is not None:
        raw = resolve_shared_item([representation_for_path(args.file)])
    else:
        raw = from_user_text(args.text or "")
    mode = MODE_CHOICES[args.mode] if args.mode else None

    orchestrator = app.orchestrator_for(raw, mode=mode)
    try:
        state = await (orchestrator.refresh() if args.refresh else orchestrator.start())
    finally:
        orchestrator.close()

    if isinstance(state, ResultState):
        print(f"[{state.mode.display_name}] {state.mode.privacy_caption}", file=sys.stderr)
        print(state.result.markdown)
        return 0
    message = state.message if isinstance(state, ErrorState) else "No result."
    print(message, file=sys.stderr)
    return 1


async def _history(app: PlainlyApp, args: argparse.Namespace) -> int:
    store = app.history
    if args.history_command == "list":
        for record in await store.list():
            print(
                f"{record.id}  {record.created_at:%Y-%m-%d %H:%M}  "
                f"{record.mode.display_name:<9}  {record.display_title}"
            )
        return 0
    if args.history_command == "show":
        for record in await store.list():
            if record.id == args.id:
                print(f"# {record.display_title}", file=sys.stderr)
                print(record.result_markdown)
                return 0
        print(f"No history record {args.id}", file=sys.stderr)
        return 1
    if args.history_command == "remove":
        await store.remove(args.id)
        return 0
    await store.clear()
    return 0


def main(argv: list[str] | None = None) -> int:
    """CLI entry point; returns the process exit code."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        resolved = resolve_config(profile=args.profile)
        if args.command == "config":
            if args.json:
                print(json.dumps(config_info(resolved), indent=2))
            else:
                print(resolved.audit())
            return 0

        app = create_app(resolved.to_frozen())
        if args.command == "explain":
            return asyncio.run(_explain(app, args))
        return asyncio.run(_history(app, args))
    except (PlainlyError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
