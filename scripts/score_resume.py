#!/usr/bin/env python3
"""
Score resume text against a job description with an LLM.

Usage:
    python scripts/score_resume.py resume.txt job.md
    python scripts/score_resume.py resume.txt job.md --json
"""

import json
import os
from datetime import datetime
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv
from typing_extensions import Annotated

from atsforge.contexts.scoring import SCORE_FIELDS, AtsScoringError, generate_ats_score
from atsforge.contexts.scoring.logger import setup_scoring_logger
from atsforge.utils.llm import get_provider

load_dotenv()
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))

app = typer.Typer(help="Score a resume against a job description.", add_completion=False)


@app.command()
def main(
    resume_file: Annotated[
        Path, typer.Argument(help="Plain-text resume", exists=True, dir_okay=False)
    ],
    job_file: Annotated[
        Path, typer.Argument(help="Job description file", exists=True, dir_okay=False)
    ],
    provider: Annotated[
        Optional[str], typer.Option("--provider", help="anthropic or openai (default: LLM_PROVIDER)")
    ] = None,
    model: Annotated[Optional[str], typer.Option("--model", help="Model name override")] = None,
    as_json: Annotated[bool, typer.Option("--json", help="Print raw JSON")] = False,
):
    """Calculate per-aspect and overall ATS scores."""
    llm = get_provider(provider_name=provider, model=model)
    log_dir = LOGS_PATH / f"score_{datetime.now().strftime('%Y%m%d_%H%M%S')}"
    setup_scoring_logger(log_dir, provider_name=llm.name)

    try:
        score = generate_ats_score(
            resume_file.read_text(encoding="utf-8"),
            job_file.read_text(encoding="utf-8"),
            llm=llm,
        )
    except (ValueError, AtsScoringError) as e:
        typer.echo(f"ERROR: {e}", err=True)
        raise typer.Exit(1)

    if as_json:
        typer.echo(json.dumps(score.to_dict(), indent=2, ensure_ascii=False))
        return

    typer.echo("\n=== ATS Scores ===")
    for score_field in SCORE_FIELDS:
        typer.echo(f"  {score_field}: {getattr(score, score_field)}")

    if score.explanation:
        typer.echo(f"\n=== Explanation ===\n{score.explanation}")
    if score.improvement_suggestions:
        typer.echo(f"\n=== Suggestions ===\n{score.improvement_suggestions}")


if __name__ == "__main__":
    app()
