"""CLI for the ``transactions_to_notion`` package.

Typer-based console interface for ``transactions-to-notion``. A local ``.env``
is loaded with ``python-dotenv`` (without overriding variables already set),
the environment is snapshotted once, and everything after that receives its
configuration explicitly. Business logic lives in
``transactions_to_notion.normalizers`` and ``transactions_to_notion.upload``.

Exit status
-----------
- ``0``: completed, including runs with zero transactions and runs where some
  pages failed to upload (those are reported as warnings).
- ``1``: configuration, input or unsupported-payment-method error. A single
  ``Error: <message>`` line is written to stderr and Notion is never called.
"""

from __future__ import annotations

import asyncio
import csv
import os
import sys
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Annotated, Any

import typer
from dotenv import load_dotenv
from notion_client import AsyncClient
from typer.models import OptionInfo

from . import __version__
from .errors import TransactionsToNotionError
from .logging_setup import configure_logging
from .normalizers import parse_csv
from .options import ALLOWED_PAYMENT_METHODS, ALLOWED_USERS, RawOptions, validate_options
from .upload import format_dry_run, upload_to_notion

type ClientFactory = Callable[..., Any]


async def run(
    options: RawOptions,
    environ: Mapping[str, str],
    *,
    client_factory: ClientFactory | None = None,
) -> int:
    """Validate, parse, then upload (or print, for a dry run).

    ``client_factory`` (default :class:`notion_client.AsyncClient`) is called
    as ``client_factory(auth=<api key>)`` and must return an async context
    manager exposing ``pages.create``. It is only invoked when there is at
    least one transaction to upload.
    """

    validated = await validate_options(options, environ)
    transactions = await parse_csv(validated.csv_file_path, validated.payment_method)

    if not transactions:
        typer.echo(f"No transactions found with payment method: {validated.payment_method}")
        return 0

    typer.echo(
        f"Found {len(transactions)} transactions with payment method: "
        f"{validated.payment_method}"
    )

    if validated.dry_run:
        typer.echo("DRY RUN: The following transactions would be uploaded:")
        for line in format_dry_run(transactions):
            typer.echo(line)
        return 0

    typer.echo("Uploading transactions to Notion...")
    factory = client_factory or AsyncClient
    async with factory(auth=validated.notion_api_key) as client:
        summary = await upload_to_notion(
            client,
            validated.notion_database_id,
            transactions,
            validated.who_am_i,
            status=validated.status,
        )

    typer.echo(
        f"Uploaded {summary.uploaded} of {summary.attempted} transactions to Notion."
    )
    if summary.failed:
        typer.echo(f"{len(summary.failed)} transactions failed; see warnings above.")
    return 0


def cmd_upload_transactions(
    options: RawOptions,
    environ: Mapping[str, str],
    *,
    client_factory: ClientFactory | None = None,
) -> int:
    """Run the whole pipeline and translate fatal errors into an exit status."""

    try:
        return asyncio.run(run(options, environ, client_factory=client_factory))
    except TransactionsToNotionError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except FileNotFoundError:
        print(f"Error: File not found: {options.csv_file_path}", file=sys.stderr)
        return 1
    except PermissionError:
        print(f"Error: Permission denied: {options.csv_file_path}", file=sys.stderr)
        return 1
    except (csv.Error, UnicodeDecodeError) as e:
        print(f"Error: Failed to parse CSV: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(
            f"Error: Unexpected failure reading '{options.csv_file_path}': {e}",
            file=sys.stderr,
        )
        return 1


# ---- Typer-based console interface -------------------------------------------


app = typer.Typer(
    add_completion=False,
    help=(
        "Upload transactions from a card issuer's CSV export to a Notion database. "
        "Reads NOTION_API_KEY, NOTION_DATABASE_ID and WHO_AM_I from the "
        "environment or a local .env when not given as options."
    ),
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit()


# Module-level option objects to satisfy ruff B008 (no calls in parameter
# defaults).
CSV_FILE_PATH_OPTION: OptionInfo = typer.Option(
    ...,  # required
    "--csv-file-path",
    help="Path to the CSV file containing transactions",
)
PAYMENT_METHOD_OPTION: OptionInfo = typer.Option(
    ...,
    "--payment-method",
    help=f"Payment method of the export (one of: {', '.join(ALLOWED_PAYMENT_METHODS)})",
)


@app.command()
def upload(
    csv_file_path: Annotated[Path, CSV_FILE_PATH_OPTION],
    payment_method: Annotated[str, PAYMENT_METHOD_OPTION],
    *,
    notion_database_id: str | None = typer.Option(
        None,
        "--notion-database-id",
        help="Notion database ID (falls back to NOTION_DATABASE_ID).",
    ),
    notion_api_key: str | None = typer.Option(
        None,
        "--notion-api-key",
        help="Notion API key (falls back to NOTION_API_KEY).",
    ),
    who_am_i: str | None = typer.Option(
        None,
        "--who-am-i",
        help=f"User identity (one of: {', '.join(ALLOWED_USERS)}; falls back to WHO_AM_I).",
    ),
    status: str | None = typer.Option(
        None,
        "--status",
        help="Status select value for imported pages (falls back to NOTION_STATUS).",
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Show transactions that would be uploaded without uploading them.",
    ),
    log_level: str | None = typer.Option(
        None, "--log-level", help="Logging level (e.g. DEBUG, INFO, WARNING)."
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit.",
    ),
) -> None:
    """Upload transactions from a CSV file to Notion."""

    # Load environment from .env in CWD (override=False to keep existing env)
    load_dotenv(dotenv_path=Path.cwd() / ".env", override=False)
    configure_logging(log_level)

    options = RawOptions(
        csv_file_path=csv_file_path,
        payment_method=payment_method,
        notion_api_key=notion_api_key,
        notion_database_id=notion_database_id,
        who_am_i=who_am_i,
        dry_run=dry_run,
        status=status,
    )
    code = cmd_upload_transactions(options, dict(os.environ))
    if code:
        raise typer.Exit(code)


def main() -> None:
    app()


if __name__ == "__main__":  # pragma: no cover
    # Running as a module: `python -m transactions_to_notion.cli`
    main()
