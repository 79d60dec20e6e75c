#!/usr/bin/env python3
"""
Generate an ATS-optimized resume record from plain resume text.

Usage:
    python scripts/generate_resume.py resume.txt
    python scripts/generate_resume.py resume.txt --job job.md --output resume.json
    python scripts/generate_resume.py resume.txt --provider anthropic
"""

import json
import os
import time
from datetime import datetime
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv
from typing_extensions import Annotated

from atsforge.contexts.intake import GenerationStatus, generate_resume
from atsforge.contexts.intake.logger import log_generation_result, setup_intake_logger
from atsforge.utils.llm import get_provider

load_dotenv()
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))

app = typer.Typer(help="Generate a structured resume with an LLM.", add_completion=False)

EXIT_CODES = {
    GenerationStatus.SUCCESS: 0,
    GenerationStatus.INSUFFICIENT_DATA: 1,
    GenerationStatus.NO_STRUCTURED_DATA: 2,
    GenerationStatus.INVALID_STRUCTURE: 3,
}


@app.command()
def main(
    resume_file: Annotated[
        Path, typer.Argument(help="Plain-text resume", exists=True, dir_okay=False)
    ],
    job: Annotated[
        Optional[Path],
        typer.Option("--job", "-j", help="Target job description file", exists=True, dir_okay=False),
    ] = None,
    provider: Annotated[
        Optional[str], typer.Option("--provider", help="anthropic or openai (default: LLM_PROVIDER)")
    ] = None,
    model: Annotated[Optional[str], typer.Option("--model", help="Model name override")] = None,
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Write JSON here instead of stdout", dir_okay=False),
    ] = None,
):
    """Run resume generation, validation, and the minimum-data check."""
    llm = get_provider(provider_name=provider, model=model)

    log_dir = LOGS_PATH / f"generate_{datetime.now().strftime('%Y%m%d_%H%M%S')}"
    log_file = setup_intake_logger(log_dir, provider_name=llm.name)

    resume_text = resume_file.read_text(encoding="utf-8")
    job_description = job.read_text(encoding="utf-8") if job else None

    start = time.time()
    try:
        result = generate_resume(resume_text, job_description, llm=llm)
    except ValueError as e:
        typer.echo(f"ERROR: {e}", err=True)
        raise typer.Exit(1)
    log_generation_result(result, time.time() - start)

    if result.resume is not None:
        rendered = json.dumps(result.resume.to_dict(), indent=2, ensure_ascii=False)
        if output:
            output.write_text(rendered + "\n", encoding="utf-8")
        else:
            typer.echo(rendered)

    typer.echo(f"Log: {log_file}", err=True)
    raise typer.Exit(EXIT_CODES[result.status])


if __name__ == "__main__":
    app()
