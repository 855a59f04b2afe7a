"""Entry point for python -m sesh_switcher.

Usage:
    # Open the switcher as an overlay (Esc hides it)
    python -m sesh_switcher

    # Run as a standalone session manager
    python -m sesh_switcher --standalone
"""

from __future__ import annotations

import argparse
import sys


def _setup_logging(args: argparse.Namespace) -> None:
    """Configure logging based on command-line arguments."""
    from sesh_switcher.logging_config import setup_logging

    if args.debug:
        setup_logging(
            level="DEBUG",
            log_to_console=True,
            log_to_file=True,
        )
    else:
        setup_logging(
            level=args.log_level,
            log_to_console=False,
            log_to_file=not args.no_log_file,
        )


def _create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="sesh-switcher",
        description="Session switcher - create, attach to and resurrect tmux sessions",
    )
    parser.add_argument(
        "--standalone",
        action="store_true",
        default=None,
        help="Run as a standalone manager: start on New Session, Esc does not quit",
    )
    parser.add_argument(
        "--config",
        help="Path to the config file (default: ~/.config/sesh-switcher/config.json)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging to console",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="INFO",
        help="Set log level (default: INFO)",
    )
    parser.add_argument(
        "--no-log-file",
        action="store_true",
        help="Disable logging to file",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the session switcher."""
    parser = _create_parser()
    args = parser.parse_args(argv)

    _setup_logging(args)

    from sesh_switcher.config import load_config
    from sesh_switcher.exceptions import ConfigError

    try:
        config = load_config(args.config, overrides={"standalone": args.standalone})
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    from sesh_switcher.app import SessionSwitcherApp

    app = SessionSwitcherApp(config)
    app.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
