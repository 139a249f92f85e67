"""Command-line entry point: submit one document and print the run."""

import json
from pathlib import Path

import typer

from app.config.settings import Settings
from app.logging.logger import Log
from app.triage.documents import FileLoader
from app.triage.exceptions import ValidationError
from app.triage.models import DocumentFormat, PipelineState
from app.triage.orchestrator import build_pipeline

EXIT_SUCCESS = 0
EXIT_VALIDATION_ERROR = 1
EXIT_PIPELINE_ERROR = 3

cli = typer.Typer(
    name="document-triage",
    help="Classify a document, extract its data and route a follow-up action.",
    add_completion=False,
)


@cli.command()
def triage(
    input_type: DocumentFormat = typer.Option(
        ..., "--type", "-t", case_sensitive=False, help="Declared document format."
    ),
    text: str = typer.Option("", "--text", help="Inline document content."),
    file: Path | None = typer.Option(
        None, "--file", "-f", help="Read the document from a file (required for PDF)."
    ),
) -> None:
    """Run the classify -> extract -> route pipeline on one document."""
    settings = Settings()
    Log.configure(settings.log_level)

    try:
        submission = FileLoader().load(input_type, text=text, path=file)
    except (FileNotFoundError, UnicodeDecodeError) as exc:
        typer.echo(f"Could not read input file: {exc}", err=True)
        raise typer.Exit(EXIT_VALIDATION_ERROR) from exc

    pipeline = build_pipeline(settings)
    try:
        run = pipeline.run(submission)
    except ValidationError as exc:
        typer.echo(f"Missing Input: {exc}", err=True)
        raise typer.Exit(EXIT_VALIDATION_ERROR) from exc

    for stage, message in run.errors.items():
        typer.echo(f"{stage} Error: {message}", err=True)
    typer.echo(json.dumps(run.to_dict(), indent=2, default=str))

    if run.state is PipelineState.ERROR:
        raise typer.Exit(EXIT_PIPELINE_ERROR)


def main() -> None:
    """Entry point: load settings -> build pipeline -> process one document."""
    cli()


if __name__ == "__main__":
    main()
