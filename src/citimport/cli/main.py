"""Command-line interface for citimport.

Provides CLI commands for importing RIS files into a JSON-backed
evidence store and for abbreviating journal titles.
"""

import importlib.metadata
import sys
from pathlib import Path

import click

__all__ = ["cli"]

try:
    __version__ = importlib.metadata.version("citimport")
except importlib.metadata.PackageNotFoundError:
    __version__ = "0.1.0"  # Fallback for development

_SEVERITY_COLORS = {"Info": None, "Warning": "yellow", "Error": "red"}


def _load_abbreviator(ltwa: str | None):
    from citimport.iso4 import Iso4Abbreviator, load_ltwa

    if ltwa is None:
        return Iso4Abbreviator()
    return Iso4Abbreviator(load_ltwa(Path(ltwa)))


@click.group()
@click.version_option(version=__version__, prog_name="citimport")
def cli() -> None:
    """Import RIS citation files into an evidence store.

    Use 'citimport COMMAND --help' for command-specific help.
    """


@cli.command("import")
@click.argument("input_path", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--store",
    "-s",
    "store_path",
    type=click.Path(dir_okay=False),
    required=True,
    help="JSON store file (created if missing)",
)
@click.option("--topic", type=int, default=None, help="Master topic id to link records from")
@click.option(
    "--master-record",
    type=int,
    default=None,
    help="Master record id to link records with",
)
@click.option(
    "--ltwa",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="LTWA extract for journal abbreviations (default: bundled table)",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False),
    default=None,
    help="Write the JSON import report to this path",
)
@click.option(
    "--log",
    "log_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Append JSONL audit events to this path",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Print every diagnostic",
)
def import_(
    input_path: str,
    store_path: str,
    topic: int | None,
    master_record: int | None,
    ltwa: str | None,
    output: str | None,
    log_path: str | None,
    verbose: bool,
) -> None:
    """Import the RIS file INPUT_PATH.

    Entities created along the way are kept even when some records fail;
    the store is saved in either case.

    Examples
    --------
        citimport import refs.ris --store store.json
        citimport import refs.ris -s store.json --topic 1 -o report.json --log events.jsonl
    """
    from citimport.api import CitImportError, run_import
    from citimport.audit import AuditLogger, generate_run_id
    from citimport.report import summarize, write_report
    from citimport.store import InMemoryStore
    from citimport.utils import calculate_file_sha256, get_file_mtime

    input_file = Path(input_path)
    store_file = Path(store_path)

    try:
        store = InMemoryStore.load(store_file)
        abbreviator = _load_abbreviator(ltwa)
    except (OSError, ValueError) as e:
        click.secho(f"✗ Error: {e}", fg="red", err=True)
        sys.exit(1)

    audit_logger = AuditLogger(generate_run_id(), Path(log_path)) if log_path else None
    try:
        with input_file.open("rb") as f:
            session = run_import(
                f,
                store,
                master_topic_id=topic,
                master_record_id=master_record,
                abbreviator=abbreviator,
                audit_logger=audit_logger,
                source=str(input_file),
            )
    except CitImportError as e:
        store.save(store_file)
        click.secho(f"✗ Error: {e}", fg="red", err=True)
        sys.exit(1)
    finally:
        if audit_logger is not None:
            audit_logger.close()

    store.save(store_file)

    outcomes = session.outcomes
    if verbose:
        for index, outcome in enumerate(outcomes, start=1):
            click.echo(f"[{index}] {outcome.result}: {outcome.label or '(untitled)'}", err=True)
            for message in outcome.messages:
                click.secho(
                    f"    line {message.line_number} {message.severity}: {message.text}",
                    fg=_SEVERITY_COLORS[str(message.severity)],
                    err=True,
                )
        for outcome in session.discarded:
            click.secho(f"[discarded] {outcome.label or '(untitled)'}", fg="yellow", err=True)
            for message in outcome.messages:
                click.echo(
                    f"    line {message.line_number} {message.severity}: {message.text}",
                    err=True,
                )

    if output:
        source = {
            "path": str(input_file),
            "sha256": calculate_file_sha256(input_file),
            "mtime": get_file_mtime(input_file),
        }
        write_report(outcomes, Path(output), session.discarded, source=source)
        if verbose:
            click.echo(f"Report written to: {output}", err=True)

    summary = summarize(outcomes, session.discarded)
    color = "green" if summary.errors == 0 and summary.duplicates == 0 else "yellow"
    click.secho(
        f"✓ Processed {summary.records_total} records "
        f"({summary.imported} imported, {summary.duplicates} duplicate, "
        f"{summary.errors} error, {summary.discarded} discarded)",
        fg=color,
    )


@cli.command("add-entity")
@click.argument("kind", type=click.Choice(["CLA", "COU", "DEC", "PER", "QUO", "TOP", "USR"]))
@click.argument("label")
@click.option(
    "--store",
    "-s",
    "store_path",
    type=click.Path(dir_okay=False),
    required=True,
    help="JSON store file (created if missing)",
)
def add_entity(kind: str, label: str, store_path: str) -> None:
    """Register a linkable entity of KIND, e.g. a topic to import under.

    Prints the new entity id.

    Examples
    --------
        citimport add-entity TOP "Climate sensitivity" --store store.json
    """
    from citimport.models import EntityKind
    from citimport.store import InMemoryStore

    store_file = Path(store_path)
    try:
        store = InMemoryStore.load(store_file)
    except (OSError, ValueError) as e:
        click.secho(f"✗ Error: {e}", fg="red", err=True)
        sys.exit(1)

    entity_id = store.add_entity(EntityKind(kind), label)
    store.save(store_file)
    click.echo(entity_id)


@cli.command()
@click.argument("title")
@click.option(
    "--ltwa",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="LTWA extract (default: bundled table)",
)
def abbreviate(title: str, ltwa: str | None) -> None:
    """Print the ISO 4 abbreviation of journal TITLE.

    Examples
    --------
        citimport abbreviate "Journal of Climate"
    """
    try:
        abbreviator = _load_abbreviator(ltwa)
    except (OSError, ValueError) as e:
        click.secho(f"✗ Error: {e}", fg="red", err=True)
        sys.exit(1)
    click.echo(abbreviator.abbreviate(title))


if __name__ == "__main__":
    cli()
