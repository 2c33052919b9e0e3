"""linkcheck CLI — verify that every link in a document still resolves.

Usage:
    python cli/main.py --help
    python cli/main.py README.md --workers 10 --timeout 3

Values not given on the command line are read from the environment
(``INPUT_FILE_PATH``, ``INPUT_CONCURRENT_WORKERS``, ``INPUT_TIMEOUT_SECONDS``,
``INPUT_MAX_REDIRECTS``) so the same program runs unchanged as a CI step.
Exits 1 if any link is unreachable.
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that `from linkcheck.xxx import ...`
# works when the CLI is invoked as `python cli/main.py` from any directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import logging
from typing import Optional

import typer

from cli.rendering import REACHABLE_HEADER, UNREACHABLE_HEADER, render_link, render_summary
from linkcheck.config import resolve_probe_config, settings
from linkcheck.engine import VerificationEngine
from linkcheck.errors import LinkCheckError
from linkcheck.extractor import extract

app = typer.Typer(
    name="linkcheck",
    help="Check that the hyperlinks in a document are reachable.",
    add_completion=False,
)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


@app.command()
def check(
    file_path: Optional[str] = typer.Argument(
        None, help="Document to scan. Defaults to $INPUT_FILE_PATH."
    ),
    workers: Optional[str] = typer.Option(
        None, "--workers", "-w", help="Concurrent workers (default 30)."
    ),
    timeout: Optional[str] = typer.Option(
        None, "--timeout", "-t", help="Per-request timeout in seconds (default 5)."
    ),
    max_redirects: Optional[str] = typer.Option(
        None, "--max-redirects", help="Redirect hops to follow per request (default 10)."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every probe to stderr."),
) -> None:
    """Extract every http(s) link from FILE_PATH and probe it."""
    _configure_logging(verbose)

    path = file_path or settings.file_path
    if not path:
        typer.echo("Error: file_path value is required")
        raise typer.Exit(code=1)

    config, warnings = resolve_probe_config(
        workers=workers if workers is not None else settings.concurrent_workers,
        timeout=timeout if timeout is not None else settings.timeout_seconds,
        max_redirects=max_redirects if max_redirects is not None else settings.max_redirects,
        user_agent=settings.user_agent,
    )
    for line in warnings:
        typer.echo(line)

    try:
        text = Path(path).read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        typer.echo(f"Error reading file: {exc}")
        raise typer.Exit(code=1)

    try:
        links = extract(text)
        run = VerificationEngine(config).start(links)
    except LinkCheckError as exc:
        typer.echo(f"Error: {exc}")
        raise typer.Exit(code=1)

    # Reachable links are printed as they arrive; the unreachable ones once
    # the run is done.
    typer.echo(REACHABLE_HEADER)
    for outcome in run.reachable:
        typer.echo(render_link(outcome.link))

    outcomes = run.collect()
    typer.echo(UNREACHABLE_HEADER)
    for link in outcomes.unreachable_links:
        typer.echo(render_link(link))

    typer.echo("")
    typer.echo(render_summary(outcomes))

    if outcomes.has_unreachable:
        raise typer.Exit(code=1)


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app()
