"""Command-line interface for authordedupe.

Provides CLI commands for roster consolidation, alias lookup and git log
contributor analysis.
"""

import importlib.metadata
import sys
import time
import traceback
from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING, Any

import click

from authordedupe.audit import AuditLogger, calculate_file_sha256, generate_run_id

if TYPE_CHECKING:
    from authordedupe.engine import AliasResolver

__all__ = ["cli"]

try:
    __version__ = importlib.metadata.version("authordedupe")
except importlib.metadata.PackageNotFoundError:
    __version__ = "0.4.0"  # Fallback for development


def resolver_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Attach the options shared by every command that builds a resolver."""
    options = [
        click.option(
            "--names",
            "names_feed",
            type=click.Path(exists=True, dir_okay=False),
            help="Name feed file with u2n/n2u/m2m records",
        ),
        click.option(
            "--author-list",
            type=click.Path(exists=True, dir_okay=False),
            help="Curated author list, one person's aliases per line",
        ),
        click.option(
            "--common-names",
            type=click.Path(exists=True, dir_okay=False),
            help="Extra names (one per line) too common to identify anyone",
        ),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _build_resolver(
    names_feed: str | None,
    author_list: str | None,
    common_names: str | None,
    logger: AuditLogger | None,
) -> "AliasResolver":
    from authordedupe.api import load_resolver, read_lines
    from authordedupe.engine import ResolverConfig

    config = ResolverConfig()
    if common_names:
        config = config.with_extra_common_names(read_lines(common_names))

    return load_resolver(names_feed, author_list, config=config, logger=logger)


def _build_log_resolver(
    git_log: str,
    names_feed: str | None,
    author_list: str | None,
    common_names: str | None,
    logger: AuditLogger | None,
) -> "AliasResolver | None":
    """Build the resolver for a git log scan, or None to keep raw authors.

    Without a curated author list the log's own authors are indexed first.
    """
    from authordedupe.api import seed_from_git_log

    if not (names_feed or author_list or common_names):
        return None

    resolver = _build_resolver(names_feed, author_list, common_names, logger)
    if author_list is None:
        seed_from_git_log(resolver, git_log)
    return resolver


def _open_logger(events: str | None, parameters: dict[str, Any]) -> AuditLogger | None:
    if not events:
        return None
    logger = AuditLogger(run_id=generate_run_id(), log_path=Path(events))
    logger.run_started(command=sys.argv, parameters=parameters)
    return logger


def _fail(error: Exception, logger: AuditLogger | None, verbose: bool) -> None:
    tb = traceback.format_exc() if verbose else None
    if logger:
        logger.error(type(error).__name__, str(error), traceback=tb)
    click.secho(f"✗ Error: {error}", fg="red", err=True)
    if tb:
        click.echo(tb, err=True)


@click.group()
@click.version_option(version=__version__, prog_name="authordedupe")
def cli() -> None:
    """Resolve contributor aliases in commit histories.

    Use 'authordedupe COMMAND --help' for command-specific help.
    """


@cli.command()
@click.argument("authors_path", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--output",
    "-o",
    type=click.Path(),
    required=True,
    help="Output roster file (one person per line, aliases joined by ';')",
)
@resolver_options
@click.option("--events", type=click.Path(), help="Write JSONL audit events to this file")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
def consolidate(
    authors_path: str,
    output: str,
    names_feed: str | None,
    author_list: str | None,
    common_names: str | None,
    events: str | None,
    verbose: bool,
) -> None:
    """Group the raw author strings in AUTHORS_PATH by person.

    AUTHORS_PATH holds one raw author string per line, e.g.
    "Jane Doe <jane@example.org>". The output roster can be edited by hand
    and passed back with --author-list.

    Examples
    --------
        authordedupe consolidate authors.txt -o roster.txt
        authordedupe consolidate authors.txt -o roster.txt --names names.csv
    """
    from authordedupe.api import consolidate_file, write_author_list

    start = time.perf_counter()
    logger = _open_logger(events, {"command": "consolidate", "input": authors_path})

    try:
        resolver = _build_resolver(names_feed, author_list, common_names, logger)

        if verbose:
            click.echo(f"Consolidating: {authors_path}", err=True)

        groups = consolidate_file(authors_path, resolver)
        write_author_list(groups, output)

        if logger:
            logger.artifact_written(
                path=Path(output).name,
                sha256=calculate_file_sha256(Path(output)),
                record_count=len(groups),
            )
            logger.run_finished("success", time.perf_counter() - start)

        click.secho(f"✓ Wrote {len(groups)} contributors to {output}", fg="green")

    except Exception as e:
        _fail(e, logger, verbose)
        if logger:
            logger.run_finished("failed", time.perf_counter() - start)
        sys.exit(1)

    finally:
        if logger:
            logger.close()


@cli.command()
@click.argument("raw_lines", nargs=-1, required=True)
@resolver_options
def deanonymize(
    raw_lines: tuple[str, ...],
    names_feed: str | None,
    author_list: str | None,
    common_names: str | None,
) -> None:
    """Print the canonical name(s) for each RAW_LINES author line.

    Each output line holds the canonical names of one input line, joined
    by ", ".

    Examples
    --------
        authordedupe deanonymize "jdoe <jane@example.org>" --author-list roster.txt
    """
    try:
        resolver = _build_resolver(names_feed, author_list, common_names, None)
        for raw_line in raw_lines:
            click.echo(", ".join(resolver.deanonymize_author(raw_line)))

    except Exception as e:
        _fail(e, None, False)
        sys.exit(1)


@cli.command()
@click.argument("git_log", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--output",
    "-o",
    type=click.Path(),
    required=True,
    help="Output CSV file (author;date)",
)
@click.option(
    "--authors-out",
    type=click.Path(),
    help="Also write every distinct contributor, sorted, one per line",
)
@resolver_options
@click.option("--events", type=click.Path(), help="Write JSONL audit events to this file")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
def newcomers(
    git_log: str,
    output: str,
    authors_out: str | None,
    names_feed: str | None,
    author_list: str | None,
    common_names: str | None,
    events: str | None,
    verbose: bool,
) -> None:
    """Find every contributor in GIT_LOG and the date of their first commit.

    GIT_LOG is the output of a plain `git log`. Authors are resolved to
    canonical names when --names, --author-list or --common-names is given;
    without --author-list the spellings found in the log are grouped first.

    Examples
    --------
        git log > log.txt
        authordedupe newcomers log.txt -o newcomers.csv --authors-out authors.txt
    """
    from authordedupe.api import scan_newcomers, write_newcomers_csv
    from authordedupe.engine.resolver import roster_sort_key

    start = time.perf_counter()
    logger = _open_logger(events, {"command": "newcomers", "input": git_log})

    try:
        resolver = _build_log_resolver(git_log, names_feed, author_list, common_names, logger)

        if verbose:
            click.echo(f"Scanning: {git_log}", err=True)

        found = scan_newcomers(git_log, resolver)
        rows = write_newcomers_csv(found, output)

        if authors_out:
            authors = sorted((n.author for n in found), key=roster_sort_key)
            Path(authors_out).write_text(
                "".join(f"{author}\n" for author in authors), encoding="utf-8"
            )

        if logger:
            logger.artifact_written(
                path=Path(output).name,
                sha256=calculate_file_sha256(Path(output)),
                record_count=rows,
            )
            logger.run_finished("success", time.perf_counter() - start)

        click.secho(f"✓ Found {rows} contributors, wrote {output}", fg="green")

    except Exception as e:
        _fail(e, logger, verbose)
        if logger:
            logger.run_finished("failed", time.perf_counter() - start)
        sys.exit(1)

    finally:
        if logger:
            logger.close()


@cli.command()
@click.argument("git_log", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--output",
    "-o",
    type=click.Path(),
    required=True,
    help="Output CSV file (month;active;newcomers)",
)
@resolver_options
def activity(
    git_log: str,
    output: str,
    names_feed: str | None,
    author_list: str | None,
    common_names: str | None,
) -> None:
    """Count active and new contributors per month in GIT_LOG.

    Authors are resolved as in the newcomers command.

    Examples
    --------
        authordedupe activity log.txt -o monthly.csv --author-list roster.txt
    """
    from authordedupe.api import scan_activity, write_activity_csv

    try:
        resolver = _build_log_resolver(git_log, names_feed, author_list, common_names, None)

        rows = write_activity_csv(scan_activity(git_log, resolver), output)
        click.secho(f"✓ Wrote {rows} months to {output}", fg="green")

    except Exception as e:
        _fail(e, None, False)
        sys.exit(1)


if __name__ == "__main__":
    cli()
