"""
Command-line interface for the blockchain client adapters.

Provides commands for inspecting adapters and checking node versions.
"""

import argparse
import asyncio
import sys
from typing import Optional, Sequence

import structlog

from chainclient import __version__
from chainclient.client import (
    Compatibility,
    UnknownClientError,
    available_clients,
    create_client,
    get_client_class,
)
from chainclient.config import ClientConfig, Settings, get_config, set_config


def setup_logging(level: str = "INFO", json_format: bool = False) -> None:
    """Configure structured logging."""
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer() if json_format
            else structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    import logging
    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, level.upper()),
        stream=sys.stderr,
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    settings = get_config()
    parser = argparse.ArgumentParser(
        prog="chainclient",
        description="Inspect blockchain node client adapters",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=settings.log_level.upper(),
        help=f"Logging level (default: {settings.log_level.upper()})",
    )
    parser.add_argument(
        "--log-json",
        action="store_true",
        default=settings.log_json,
        help="Output logs in JSON format",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # List command
    subparsers.add_parser("list", help="List registered client adapters")

    # Check-version command
    check_parser = subparsers.add_parser(
        "check-version",
        help="Check version-command output against an adapter's supported range",
    )
    check_parser.add_argument(
        "--client",
        default=settings.client,
        help=f"Client adapter (default: {settings.client})",
    )
    check_parser.add_argument(
        "--range",
        dest="versions_supported",
        help="Override the adapter's supported range expression",
    )
    check_parser.add_argument(
        "--file",
        default="-",
        help="File holding the version-command output (default: stdin)",
    )

    # Command command
    command_parser = subparsers.add_parser(
        "command",
        help="Show the version and launch commands for an adapter",
    )
    command_parser.add_argument(
        "--client",
        default=settings.client,
        help=f"Client adapter (default: {settings.client})",
    )
    command_parser.add_argument(
        "--address",
        required=True,
        help="Account the node mines with",
    )
    command_parser.add_argument(
        "--env",
        default=settings.env,
        help=f"Environment (default: {settings.env})",
    )
    command_parser.add_argument(
        "--bin",
        default=settings.ethereum_client_bin,
        help="Override the client binary",
    )
    command_parser.add_argument(
        "--datadir",
        help="Data directory for the node",
    )

    return parser


def list_clients(args: argparse.Namespace) -> int:
    """Print registered adapters."""
    for name in available_clients():
        cls = get_client_class(name)
        print(f"{name:<10} {cls.DEFAULTS.versions_supported:<12} {cls.PRETTY_NAME}")
    return 0


def check_version(args: argparse.Namespace) -> int:
    """Negotiate a version from raw output. Exit status 0 only when supported."""
    client = create_client(args.client)

    if args.file == "-":
        raw_output = sys.stdin.read()
    else:
        with open(args.file, encoding="utf-8") as f:
            raw_output = f.read()
    result = client.negotiate_version(raw_output, args.versions_supported)

    detected = result.version if result.detected else "not detected"
    print(f"Client:    {client.pretty_name}")
    print(f"Version:   {detected}")
    print(f"Supported: {result.versions_supported}")
    print(f"Verdict:   {result.compatibility.value}")

    return 0 if result.compatibility is Compatibility.SUPPORTED else 1


async def show_commands(args: argparse.Namespace) -> int:
    """Print the version and main commands for an adapter."""
    config = ClientConfig(ethereum_client_bin=args.bin, data_dir=args.datadir)
    client = create_client(args.client, config=config, env=args.env)

    main = await client.main_command(args.address)
    print(f"Version command: {client.determine_version_command()}")
    print(f"Main command:    {main}")
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point."""
    set_config(Settings())
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    setup_logging(args.log_level, args.log_json)

    try:
        if args.command == "list":
            return list_clients(args)
        elif args.command == "check-version":
            return check_version(args)
        elif args.command == "command":
            return asyncio.run(show_commands(args))
    except (UnknownClientError, OSError) as e:
        print(str(e), file=sys.stderr)
        return 2

    return 1


if __name__ == "__main__":
    sys.exit(main())
