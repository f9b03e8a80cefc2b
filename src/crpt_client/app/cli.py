from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Sequence, Union

import typer

from .api import CrptClient
from ..core.domain.errors import BadStatusError, SubmissionError
from ..core.domain.models import Document, SubmissionResult


app = typer.Typer(help="CRPT document client")


@app.callback()
def main() -> None:
    # keeps "submit" as an explicit subcommand
    return


@app.command(help="Submit one or more JSON documents. All documents share the same signature and rate limit.")
def submit(
    documents: list[Path] = typer.Argument(..., help="JSON files, each holding one document object", metavar="DOCUMENT_JSON"),
    signature: str | None = typer.Option(None, "--signature", "-s", help="Document signature"),
    signature_file: Path | None = typer.Option(None, "--signature-file", help="Read the signature from a file"),
    limit: int | None = typer.Option(None, help="Submissions per period (default: CRPT_CLIENT_LIMIT or 10)"),
    period: float | None = typer.Option(None, help="Refill period in seconds (default: CRPT_CLIENT_PERIOD_SECONDS or 1.0)"),
    endpoint: str | None = typer.Option(None, help="Create-document URL (default: CRPT_CLIENT_ENDPOINT_URL)"),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Enable debug logging"),
) -> None:
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    if signature_file is not None:
        try:
            signature = signature_file.read_text(encoding="utf-8").strip()
        except OSError as e:
            typer.echo(f"Cannot read signature file: {e}", err=True)
            raise typer.Exit(code=2)
    if signature is None:
        typer.echo("Either --signature or --signature-file is required", err=True)
        raise typer.Exit(code=2)

    docs: list[Document] = []
    for path in documents:
        try:
            docs.append(_load_document(path))
        except (OSError, ValueError) as e:
            typer.echo(f"{path}: cannot load document: {e}", err=True)
            raise typer.Exit(code=2)

    with CrptClient(limit=limit, period_seconds=period, endpoint_url=endpoint) as client:
        outcomes = client.create_documents((d, signature) for d in docs)

    _print_outcomes(documents, outcomes)
    if any(isinstance(o, SubmissionError) for o in outcomes):
        raise typer.Exit(code=1)


def _load_document(path: Path) -> Document:
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError("expected a JSON object")
    return Document(data)


def _print_outcomes(paths: Sequence[Path], outcomes: Sequence[Union[SubmissionResult, SubmissionError]]) -> None:
    """Print one line per document: OK with elapsed time, or the failure kind and message."""
    for path, outcome in zip(paths, outcomes):
        if isinstance(outcome, SubmissionResult):
            print(f"{str(path):40} OK ({outcome.elapsed_seconds:.2f}s)")
        elif isinstance(outcome, BadStatusError):
            print(f"{str(path):40} {outcome.kind.name} {outcome.status_code}")
        else:
            print(f"{str(path):40} {outcome.kind.name} {outcome}")
