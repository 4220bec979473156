"""
Wwise Linker CLI - Entry point

Command line helpers usable outside REAPER: check the WAAPI connection,
preview what an import would pick up and manage the configuration file.
Import and render themselves run inside REAPER (see scripts/).
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from rich.table import Table

from wwise_linker.core.config import (
    create_default_config,
    get_config_path,
    get_data_dir,
    is_valid_port,
    load_config,
)
from wwise_linker.core.console import get_console, print_status
from wwise_linker.core.output import setup_loguru
from wwise_linker.domain.exceptions import AssetDatabaseConnectionError, QueryError
from wwise_linker.domain.query import QueryResolver
from wwise_linker.providers.waapi import WaapiClient


def _connect(args: argparse.Namespace) -> Optional[WaapiClient]:
    config = args.config
    host = args.host or config.waapi.host
    port = args.port or config.waapi.port
    client = WaapiClient(timeout=config.waapi.timeout_seconds)
    if not client.connect(host, port):
        print_status(f"WAAPI {host}:{port}", False, "(is Wwise running with WAAPI enabled?)")
        return None
    return client


def cmd_ping(args: argparse.Namespace) -> int:
    """Report whether WAAPI answers."""
    client = _connect(args)
    if client is None:
        return 1
    print_status(f"WAAPI {client.host}:{client.port}", True)
    client.disconnect()
    return 0


def cmd_query(args: argparse.Namespace) -> int:
    """Print the audio sources an import of the current selection would use."""
    client = _connect(args)
    if client is None:
        return 1

    try:
        sources = QueryResolver(client).resolve_selection()
    except (AssetDatabaseConnectionError, QueryError) as e:
        print_status("Query", False, str(e))
        return 1
    finally:
        client.disconnect()

    console = get_console()
    if not sources:
        console.print("No audio source files found in the Wwise selection.")
        return 0

    table = Table(title=f"{len(sources)} audio sources")
    table.add_column("#", justify="right")
    table.add_column("Name")
    table.add_column("Original file")
    table.add_column("Exists", justify="center")
    for i, source in enumerate(sources, start=1):
        exists = Path(source.original_file_path).is_file()
        table.add_row(
            str(i),
            source.name,
            source.original_file_path,
            "[green]yes[/green]" if exists else "[red]no[/red]",
        )
    console.print(table)
    return 0


def cmd_config(args: argparse.Namespace) -> int:
    """Show or initialise the configuration file."""
    console = get_console()
    config_path = get_config_path()

    if args.init:
        if config_path.exists() and not args.force:
            console.print(f"Configuration already exists at {config_path} (use --force to overwrite)")
            return 1
        config_path.parent.mkdir(parents=True, exist_ok=True)
        config_path.write_text(create_default_config() + "\n", encoding="utf-8")
        console.print(f"Wrote default configuration to {config_path}")
        return 0

    config = args.config
    console.print(f"Configuration file: {config_path}")
    console.print(f"WAAPI:     {config.waapi.host}:{config.waapi.port}")
    console.print(f"Staging:   <project>/{config.import_.staging_subdir}")
    console.print(f"Perforce:  {'enabled' if config.perforce.enabled else 'disabled'}")
    console.print(f"Log file:  {config.logging.log_file or get_data_dir() / 'wwise-linker.log'}")
    return 0


def _port(value: str) -> int:
    try:
        port = int(value)
    except ValueError:
        port = -1
    if not is_valid_port(port):
        raise argparse.ArgumentTypeError("port must be between 1 and 65535")
    return port


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wwise-linker",
        description="Round-trip audio between Wwise and REAPER",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  wwise-linker ping                 Check that WAAPI answers
  wwise-linker query --port 8095    List sources of the current Wwise selection
  wwise-linker config --init        Write a default config.toml
        """,
    )
    parser.add_argument("--host", help="WAAPI host (default from config)")
    parser.add_argument("--port", type=_port, help="WAAPI HTTP port (default from config)")

    subparsers = parser.add_subparsers(dest="command", required=True)

    ping_parser = subparsers.add_parser("ping", help="Check the WAAPI connection")
    ping_parser.set_defaults(func=cmd_ping)

    query_parser = subparsers.add_parser("query", help="Resolve the Wwise selection")
    query_parser.set_defaults(func=cmd_query)

    config_parser = subparsers.add_parser("config", help="Show or create the configuration")
    config_parser.add_argument("--init", action="store_true", help="Write a default config file")
    config_parser.add_argument("--force", action="store_true", help="Overwrite an existing file")
    config_parser.set_defaults(func=cmd_config)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    config = load_config()
    log_file = Path(config.logging.log_file) if config.logging.log_file else None
    setup_loguru(
        log_file,
        level=config.logging.level,
        max_file_size_mb=config.logging.max_file_size_mb,
        backup_count=config.logging.backup_count,
        console_output=config.logging.console_output,
    )
    args.config = config

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
