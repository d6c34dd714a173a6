"""
Stackmatch CLI - Command-line interface for the engine.

Usage:
    stackmatch play [--layout FILE]    Play interactively in the terminal
    stackmatch show [--layout FILE]    Print the opening table and exit
    stackmatch serve [--port N]        Run the HTTP API (needs uvicorn)

Layout files are JSON lists of
{"rank": 12, "suit": "clubs", "zone": "playfield", "position": [250, 1000]}.
"""

import argparse
import json
import logging
import sys

from .config import EngineConfig
from .layout import LayoutError, layout_from_dicts
from .session import Session


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Stackmatch - two-zone card matching solitaire",
        prog="stackmatch",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    play_parser = subparsers.add_parser("play", help="Play in the terminal")
    play_parser.add_argument("--layout", help="Path to a JSON layout file")

    show_parser = subparsers.add_parser("show", help="Print the opening table")
    show_parser.add_argument("--layout", help="Path to a JSON layout file")

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8000)

    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    if args.command == "play":
        cmd_play(args)
    elif args.command == "show":
        cmd_show(args)
    elif args.command == "serve":
        cmd_serve(args)
    else:
        parser.print_help()
        sys.exit(1)


def setup_logging(verbose: bool = False):
    """Configure logging for terminal use."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def load_layout(path):
    """Read a layout file, or None for the default deal."""
    if not path:
        return None
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        print(f"Error: File not found: {path}")
        sys.exit(1)
    except json.JSONDecodeError as e:
        print(f"Error: {path} is not valid JSON: {e}")
        sys.exit(1)

    try:
        return layout_from_dicts(data)
    except LayoutError as e:
        print(f"Error: Invalid layout: {e}")
        sys.exit(1)


def new_session(args) -> Session:
    session = Session(config=EngineConfig.from_env())
    session.start_new_game(load_layout(args.layout))
    return session


def render(session: Session) -> str:
    """Text view of the table."""
    playfield = session.get_playfield_cards()
    top = session.get_top_card()

    lines = ["Playfield:"]
    if playfield:
        lines.append("  " + "  ".join(f"[{c.card_id}] {c.label}" for c in playfield))
    else:
        lines.append("  (empty)")

    lines.append("Reserve:")
    reserves = session.get_reserve_cards()
    if reserves:
        lines.append("  " + "  ".join(f"[{c.card_id}] {c.label}" for c in reserves))
    else:
        lines.append("  (empty)")

    lines.append(f"Top: [{top.card_id}] {top.label}" if top else "Top: (none)")
    lines.append("Undo available" if session.can_undo() else "Nothing to undo")
    return "\n".join(lines)


def cmd_show(args):
    """Print the opening table."""
    print(render(new_session(args)))


def cmd_play(args):
    """Interactive terminal game."""
    session = new_session(args)
    print("Enter a card id to select it, 'u' to undo, 'r' to restart, 'q' to quit.\n")

    while True:
        print(render(session))
        try:
            command = input("> ").strip().lower()
        except EOFError:
            break

        if command in ("q", "quit"):
            break
        if command in ("u", "undo"):
            print("Undone." if session.on_undo_requested() else "Nothing to undo.")
        elif command in ("r", "restart"):
            session.start_new_game(load_layout(args.layout))
            print("New game.")
        elif command.isdigit():
            card_id = int(command)
            outcome = session.on_card_selected(card_id)
            if outcome.applied:
                print(f"{outcome.kind.value.capitalize()}: {outcome.message}")
            else:
                print(f"Not allowed: {outcome.message}")
        elif command:
            print(f"Unknown command: {command}")
        print()

    print(f"Moves: {session.moves_applied}  Undos: {session.undos_applied}")


def cmd_serve(args):
    """Run the HTTP API."""
    try:
        import uvicorn
    except ImportError:
        print("Error: uvicorn not installed. Install with: pip install stackmatch[server]")
        sys.exit(1)

    from .api.app import create_app

    uvicorn.run(create_app(), host=args.host, port=args.port)


if __name__ == "__main__":
    main()
