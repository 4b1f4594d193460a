#!/usr/bin/env python3
"""
Résumé Optimization CLI

Rewrites a résumé (PDF or DOCX) toward a job description and prints the
result as JSON: original and optimized text, scores before and after, and
the list of key changes.

Usage:
    # Print the result
    python optimize_resume.py resume.pdf job.txt

    # Use the LLM strategy and save the result
    python optimize_resume.py resume.docx job.txt --strategy llm --output result.json

    # Keep a log of the run
    python optimize_resume.py resume.pdf job.txt --log-dir logs/
"""

import json
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv
from typing_extensions import Annotated

from tailor.config import Settings
from tailor.contexts.intake import RawDocument
from tailor.contexts.tailoring import STRATEGY_NAMES, get_strategy
from tailor.contexts.targeting.extraction import default_keyword_extractor
from tailor.exceptions import OptimizationError
from tailor.optimizer import error_payload, optimize_resume
from tailor.utils.logger import setup_logger

load_dotenv()

app = typer.Typer(
    help="Optimize a résumé for a job description",
    add_completion=False,
)


@app.command()
def main(
    resume_file: Annotated[
        Path,
        typer.Argument(
            help="Résumé document (.pdf or .docx)",
            exists=True,
            dir_okay=False,
            resolve_path=True,
        ),
    ],
    job_file: Annotated[
        Path,
        typer.Argument(
            help="Plain-text job description",
            exists=True,
            dir_okay=False,
            resolve_path=True,
        ),
    ],
    strategy: Annotated[
        Optional[str],
        typer.Option(
            "--strategy",
            "-s",
            help=f"Rewrite strategy: {', '.join(STRATEGY_NAMES)} (default: TAILOR_REWRITE_STRATEGY or rules)",
        ),
    ] = None,
    output: Annotated[
        Optional[Path],
        typer.Option(
            "--output",
            "-o",
            help="Write the JSON result here instead of stdout",
            dir_okay=False,
            resolve_path=True,
        ),
    ] = None,
    log_dir: Annotated[
        Optional[Path],
        typer.Option(
            "--log-dir",
            help="Directory for the run log (default: LOGS_PATH, or no log file)",
            file_okay=False,
            resolve_path=True,
        ),
    ] = None,
):
    """
    Optimize a résumé for a job description.

    Exits with code 1 and prints an error payload when the input is rejected
    or optimization fails.

    Examples:\n

        $ optimize_resume.py resume.pdf job.txt                     # Print JSON result

        $ optimize_resume.py resume.docx job.txt -s llm             # LLM rewriting

        $ optimize_resume.py resume.pdf job.txt -o result.json      # Save result
    """
    settings = Settings.from_env()

    try:
        rewrite_strategy = get_strategy(strategy, settings=settings)
    except ValueError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    log_dir = log_dir or settings.logs_path
    if log_dir:
        setup_logger(
            context_name="optimize",
            log_dir=log_dir,
            extra_provenance={
                "Resume": resume_file.name,
                "Job description": job_file.name,
                "Rewrite strategy": rewrite_strategy.name,
                "Keyword tokenizer": default_keyword_extractor().tokenizer.get_config_dict(),
            },
            console=False,
        )

    try:
        document = RawDocument.from_path(resume_file)
        result = optimize_resume(
            document,
            job_file.read_text(encoding="utf-8"),
            strategy=rewrite_strategy,
            max_upload_bytes=settings.max_upload_bytes,
        )
    except OptimizationError as e:
        typer.echo(json.dumps(error_payload(e.public_message), indent=2), err=True)
        raise typer.Exit(code=1)

    rendered = json.dumps(result.to_dict(), indent=2, ensure_ascii=False)
    if output:
        output.write_text(rendered + "\n", encoding="utf-8")
        typer.secho(f"✓ Result written to {output}", fg=typer.colors.GREEN)
        for change in result.key_changes:
            typer.echo(f"  - {change}")
    else:
        typer.echo(rendered)


if __name__ == "__main__":
    app()
