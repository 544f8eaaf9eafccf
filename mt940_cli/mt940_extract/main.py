"""mt940-extract CLI entrypoint."""

from __future__ import annotations

import csv
import json
from collections.abc import Sequence
from dataclasses import fields
from io import StringIO
from pathlib import Path
from typing import Any

import click

from mt940_cli.shared.cli import CLIContext, common_cli_options, handle_cli_errors, pass_cli_context
from mt940_cli.shared.config import OUTPUT_FORMATS
from mt940_cli.shared.exceptions import ExtractionError

from .extractors import detect_dialect, get_dialect
from .extractors.base import DialectExtractor
from .narrative import parse_structured_narrative
from .statement import split_transactions
from .types import StructuredFields, TransactionNarrative

FIELD_COLUMNS = (
    "transaction_line",
    "contra_account_number",
    "contra_account_name",
    "description",
)
STRUCTURED_FIELD_NAMES = tuple(field.name for field in fields(StructuredFields))
STRUCTURED_COLUMNS = tuple(f"structured_{name}" for name in STRUCTURED_FIELD_NAMES)


@click.group(help="Extract counterparty fields from MT940 bank statements.")
@common_cli_options
def main(cli_ctx: CLIContext) -> None:
    return


@main.command("statement")
@click.argument("statement_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--dialect", type=str, help="Force a bank dialect instead of auto-detecting it.")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(OUTPUT_FORMATS, case_sensitive=False),
    help="Output format (default: from config or 'json').",
)
@click.option("--output", "output_path", type=click.Path(dir_okay=False, path_type=Path), help="Write output to file.")
@click.option("--dry-run", is_flag=True, help="Print a summary without writing output.")
@handle_cli_errors
@pass_cli_context
def statement_command(
    cli_ctx: CLIContext,
    statement_file: Path,
    dialect: str | None,
    output_format: str | None,
    output_path: Path | None,
    dry_run: bool,
) -> None:
    """Extract fields from every transaction in an MT940 statement file."""

    config = cli_ctx.config
    if output_format:
        config = config.with_output_format(output_format.lower())

    raw_text = _read_statement(statement_file, encoding=config.extraction.encoding)
    extractor = _select_dialect(cli_ctx, raw_text, dialect)

    narratives = split_transactions(raw_text)
    cli_ctx.logger.info(f"Transactions: {len(narratives)}")
    if not narratives:
        raise click.ClickException("No transactions were found in the statement.")

    rows = [
        _render_row(extractor, narrative, include_structured=config.output.include_structured)
        for narrative in narratives
    ]

    if dry_run:
        with_number = sum(1 for row in rows if row["contra_account_number"])
        with_name = sum(1 for row in rows if row["contra_account_name"])
        cli_ctx.logger.info("Dry run summary:")
        cli_ctx.logger.info(f"  Dialect: {extractor.name}")
        cli_ctx.logger.info(f"  With contra account number: {with_number}")
        cli_ctx.logger.info(f"  With contra account name: {with_name}")
        return

    columns = FIELD_COLUMNS + (STRUCTURED_COLUMNS if config.output.include_structured else ())
    if config.output.format == "csv":
        _write_csv_output(rows, columns, output_path)
    else:
        _write_json_output(rows, output_path)

    if output_path:
        cli_ctx.logger.success(f"Extraction complete. Output written to {output_path}.")


@main.command("narrative")
@click.argument("description_block", type=str)
@click.option("--transaction-line", type=str, default=None, help="The :61: statement line, if known.")
@click.option("--dialect", type=str, default="abnamro", show_default=True, help="Bank dialect to apply.")
@handle_cli_errors
@pass_cli_context
def narrative_command(
    cli_ctx: CLIContext,
    description_block: str,
    transaction_line: str | None,
    dialect: str,
) -> None:
    """Extract fields from a single :86: description block."""

    extractor = get_dialect(dialect)
    narrative = TransactionNarrative(
        transaction_line=transaction_line,
        description_block=description_block,
    )
    row = _render_row(
        extractor,
        narrative,
        include_structured=cli_ctx.config.output.include_structured,
    )
    click.echo(json.dumps(row, indent=2, ensure_ascii=False))


def _read_statement(path: Path, *, encoding: str) -> str:
    try:
        return path.read_text(encoding=encoding)
    except (OSError, UnicodeDecodeError, LookupError) as exc:
        raise ExtractionError(f"Could not read statement {path}: {exc}") from exc


def _select_dialect(cli_ctx: CLIContext, raw_text: str, forced: str | None) -> DialectExtractor:
    if forced:
        extractor = get_dialect(forced)
        cli_ctx.logger.info(f"Using dialect: {extractor.name} (forced)")
        if not extractor.accepts(raw_text):
            cli_ctx.logger.warning(
                f"Statement does not look like a {extractor.name} statement; extracting anyway."
            )
        return extractor

    extractor = detect_dialect(
        raw_text,
        allowed_dialects=cli_ctx.config.extraction.supported_dialects,
    )
    cli_ctx.logger.info(f"Detected dialect: {extractor.name}")
    return extractor


def _render_row(
    extractor: DialectExtractor,
    narrative: TransactionNarrative,
    *,
    include_structured: bool,
) -> dict[str, Any]:
    extracted = extractor.extract(narrative)
    row: dict[str, Any] = {"transaction_line": narrative.transaction_line}
    row.update(extracted.as_dict())
    if include_structured:
        structured = parse_structured_narrative(narrative.description_block)
        for name in STRUCTURED_FIELD_NAMES:
            row[f"structured_{name}"] = getattr(structured, name)
    return row


def _write_csv_output(
    rows: Sequence[dict[str, Any]],
    columns: Sequence[str],
    output_path: Path | None,
) -> None:
    rendered = [
        ["" if row.get(column) is None else row[column] for column in columns] for row in rows
    ]
    if output_path:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with output_path.open("w", newline="", encoding="utf-8") as handle:
            writer = csv.writer(handle)
            writer.writerow(columns)
            writer.writerows(rendered)
    else:
        buffer = StringIO()
        writer = csv.writer(buffer)
        writer.writerow(columns)
        writer.writerows(rendered)
        # Only the final row terminator is dropped; padded cell values are kept.
        click.echo(buffer.getvalue().rstrip("\r\n"))


def _write_json_output(rows: Sequence[dict[str, Any]], output_path: Path | None) -> None:
    payload = json.dumps(rows, indent=2, ensure_ascii=False)
    if output_path:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(payload + "\n", encoding="utf-8")
    else:
        click.echo(payload)
