"""Command-line interface for gitee-gist-bridge.

This module provides the CLI commands and options for reading and writing
a gist file from the shell.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .config import GiteeConfig, load_config
from .device import get_device_id
from .errors import GistSyncError
from .gitee import GistSyncClient


def setup_logging(verbose: bool = False) -> None:
    """Setup logging configuration.

    Args:
        verbose: Enable debug logging if True
    """
    level = logging.DEBUG if verbose else logging.INFO
    format_str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    logging.basicConfig(
        level=level, format=format_str, handlers=[logging.StreamHandler(sys.stderr)]
    )


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        description="Read and write a single file stored in a Gitee gist",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Print the configured gist file
  python main.py get

  # Upload a local file to the gist
  python main.py --gist-id abc123 --file-name notes.md put --file notes.md

  # Check that the gist is reachable with the configured token
  python main.py check

Credentials can also be given as GITEE_ACCESS_TOKEN and GITEE_GIST_ID.
        """.strip(),
    )

    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        default=None,
        help="Path to a YAML configuration file",
    )
    parser.add_argument("--gist-id", type=str, help="Gist identifier")
    parser.add_argument(
        "--file-name", type=str, help="File name inside the gist (default: app.json)"
    )
    parser.add_argument("--token", type=str, help="Gitee access token")
    parser.add_argument(
        "--timeout",
        type=int,
        default=None,
        help="Request timeout in seconds (default: 30)",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable verbose logging"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("get", help="Print the content of the gist file")

    put_parser = subparsers.add_parser("put", help="Write content to the gist file")
    put_parser.add_argument(
        "--file",
        type=Path,
        default=None,
        help="Read content from this path instead of stdin",
    )

    subparsers.add_parser("check", help="Check that the gist is reachable")
    subparsers.add_parser("device-id", help="Print this machine's device id")

    return parser


def resolve_config(args: argparse.Namespace) -> GiteeConfig:
    """Merge command-line overrides on top of the loaded configuration."""
    config = load_config(args.config)
    if args.gist_id is not None:
        config["gist_id"] = args.gist_id
    if args.file_name is not None:
        config["file_name"] = args.file_name
    if args.token is not None:
        config["access_token"] = args.token
    if args.timeout is not None:
        config["timeout"] = args.timeout
    return config


def run_command(args: argparse.Namespace, config: GiteeConfig) -> int:
    """Execute one gist subcommand and return the exit code."""
    logger = logging.getLogger(__name__)

    with GistSyncClient(timeout=config["timeout"], api_url=config["api_url"]) as client:
        if args.command == "get":
            content = client.fetch_file(
                config["gist_id"], config["file_name"], config["access_token"]
            )
            if content is None:
                logger.error(f"File {config['file_name']} not found in gist")
                return 1
            sys.stdout.write(content)
            return 0

        if args.command == "put":
            if args.file is not None:
                content = args.file.read_text(encoding="utf-8")
            else:
                content = sys.stdin.read()
            client.update_file(
                config["gist_id"],
                config["file_name"],
                config["access_token"],
                content,
            )
            logger.info(f"✓ Uploaded {len(content)} chars to {config['file_name']}")
            return 0

        if args.command == "check":
            client.check_access(config["gist_id"], config["access_token"])
            logger.info("✓ Gitee connection OK")
            return 0

    raise ValueError(f"Unknown command: {args.command}")


def main() -> None:
    """Main entry point for the CLI application."""
    parser = create_parser()
    args = parser.parse_args()

    setup_logging(args.verbose)
    logger = logging.getLogger(__name__)

    if args.command == "device-id":
        print(get_device_id())
        sys.exit(0)

    try:
        config = resolve_config(args)
    except Exception as e:
        logger.error(f"Failed to load configuration: {e}")
        sys.exit(1)

    try:
        sys.exit(run_command(args, config))
    except GistSyncError as e:
        logger.error(f"✗ {e}")
        sys.exit(1)
    except OSError as e:
        logger.error(f"Failed to read input: {e}")
        sys.exit(1)
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        sys.exit(130)


if __name__ == "__main__":
    main()
