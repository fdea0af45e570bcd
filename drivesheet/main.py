#!/usr/bin/env python3
"""CLI entry point for the Drive-to-Sheets sync job."""

import argparse
import logging
import signal
import sys
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .core.auth import CredentialsError, GoogleAuth
from .core.client import AuthError, DriveSheetAPIError, WorkspaceClient
from .core.lister import RemoteLister
from .core.operations import CycleResult, SyncOperations
from .core.scheduler import SyncScheduler
from .models.config import SyncConfig

console = Console()


def setup_logging(verbose: bool = False) -> None:
    """Route log records through rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True, show_path=verbose)],
    )
    # The discovery client is chatty at DEBUG
    logging.getLogger("googleapiclient").setLevel(logging.WARNING)


def load_config(args: argparse.Namespace) -> SyncConfig:
    """Load config from --config, applying command-line overrides."""
    config = SyncConfig.load(Path(args.config))
    if getattr(args, "interval", None) is not None:
        config.poll_interval = args.interval
    if getattr(args, "keep_going", False):
        config.continue_on_error = True
    config.validate()
    return config


def build_client(config: SyncConfig) -> WorkspaceClient:
    """Authorize and build the Drive/Sheets client."""
    auth = GoogleAuth(config.credentials_path, config.token_path)
    return WorkspaceClient.from_credentials(auth.get_credentials(), config.application_name)


def _print_result(result: CycleResult) -> None:
    action = "created" if result.created else "found"
    console.print(
        f"[green]{result.spreadsheet.name}[/green] ({action}): "
        f"{result.item_count} items, {result.updated_cells} cells updated "
        f"in {result.duration:.1f}s"
    )


def cmd_verify_auth(args: argparse.Namespace) -> int:
    """Verify API authentication."""
    console.print("Verifying Google API credentials...", style="blue")

    try:
        config = load_config(args)
        client = build_client(config)
        email = client.verify_connection()
        console.print(f"[green]Authentication successful! Connected as {email}")
        return 0
    except DriveSheetAPIError as e:
        console.print(f"[red]Authentication failed: {e}")
        if isinstance(e, AuthError) and e.status_code == 403:
            console.print("Access denied. Check that the Drive and Sheets APIs are enabled for the project.")
    except CredentialsError as e:
        console.print(f"[red]Credentials error: {e}")
    except ValueError as e:
        console.print(f"[red]Configuration error: {e}")

    return 1


def cmd_list(args: argparse.Namespace) -> int:
    """List Drive items without touching the spreadsheet."""
    try:
        config = load_config(args)
        lister = RemoteLister(build_client(config), config)
        items = lister.list_all()
    except DriveSheetAPIError as e:
        console.print(f"[red]Failed to list Drive items: {e}")
        return 1
    except ValueError as e:
        console.print(f"[red]Configuration error: {e}")
        return 1

    table = Table(title=f"Drive items ({len(items)})")
    table.add_column("Name")
    table.add_column("Created")
    for item in items:
        table.add_row(item.name, item.created_date())
    console.print(table)
    return 0


def cmd_once(args: argparse.Namespace) -> int:
    """Run a single sync cycle."""
    try:
        config = load_config(args)
        ops = SyncOperations(config, build_client(config))
        console.print(f"Syncing Drive into [bold]{config.sink_name}[/bold]...", style="blue")
        result = ops.run_cycle()
    except DriveSheetAPIError as e:
        console.print(f"[red]Sync failed: {e}")
        return 1
    except ValueError as e:
        console.print(f"[red]Configuration error: {e}")
        return 1

    _print_result(result)
    return 0


def cmd_run(args: argparse.Namespace) -> int:
    """Run the sync on a fixed schedule until interrupted."""
    try:
        config = load_config(args)
        ops = SyncOperations(config, build_client(config))
    except (DriveSheetAPIError, ValueError) as e:
        console.print(f"[red]Startup failed: {e}")
        return 1

    scheduler = SyncScheduler(
        cycle=lambda: _print_result(ops.run_cycle()),
        interval=config.poll_interval,
        continue_on_error=config.continue_on_error,
    )
    signal.signal(signal.SIGTERM, lambda *_: scheduler.stop())

    console.print(
        f"Syncing Drive into [bold]{config.sink_name}[/bold] "
        f"every {config.poll_interval:.0f}s (Ctrl+C to stop)",
        style="blue",
    )
    try:
        scheduler.run()
    except KeyboardInterrupt:
        console.print("\n[yellow]Stopped by user")
        return 130
    except DriveSheetAPIError as e:
        console.print(f"[red]Sync failed: {e}")
        return 1

    return 0


def main() -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Mirror Google Drive file metadata into a Google Sheets spreadsheet",
    )
    parser.add_argument("--config", default="config.yaml", help="Path to config.yaml (default: ./config.yaml)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # run command
    run_parser = subparsers.add_parser("run", help="Sync repeatedly at a fixed interval")
    run_parser.add_argument("--interval", type=float, help="Seconds to wait after each cycle")
    run_parser.add_argument("--keep-going", action="store_true", help="Log failed cycles and continue")

    # once command
    subparsers.add_parser("once", help="Run a single sync cycle")

    # list command
    subparsers.add_parser("list", help="List Drive items without writing")

    # verify-auth command
    subparsers.add_parser("verify-auth", help="Verify Google API credentials")

    args = parser.parse_args()
    setup_logging(args.verbose)

    if args.command == "run":
        return cmd_run(args)
    elif args.command == "once":
        return cmd_once(args)
    elif args.command == "list":
        return cmd_list(args)
    elif args.command == "verify-auth":
        return cmd_verify_auth(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
